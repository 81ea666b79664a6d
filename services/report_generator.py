"""Plain-text budget report built from a snapshot of expenses and categories.

Layout: header, SPENDING BY CATEGORY, EXPENSE DETAILS, grand total.
Category groups are listed by total, largest first; groups with equal totals
keep the order in which their first expense appeared.
"""
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, TextIO

from models.category import Category
from models.expense import Expense
from services.ordering import descending
from utils.constants import (
    DEFAULT_CURRENCY_SYMBOL,
    REPORT_FILENAME_FORMAT,
    REPORT_TIMESTAMP_FORMAT,
    UNKNOWN_CATEGORY,
)
from utils.currency import format_currency, percentage_of

logger = logging.getLogger(__name__)

RULE = "=" * 52


@dataclass
class CategoryGroup:
    category_id: int
    category: Optional[Category]
    total: float = 0.0
    expenses: list[Expense] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.category.name if self.category else UNKNOWN_CATEGORY

    @property
    def limit(self) -> Optional[float]:
        """Monthly limit, or None when unknown or not positive."""
        if self.category is None or self.category.monthly_limit <= 0:
            return None
        return self.category.monthly_limit

    @property
    def remaining(self) -> Optional[float]:
        limit = self.limit
        return None if limit is None else limit - self.total

    @property
    def over_budget(self) -> bool:
        limit = self.limit
        return limit is not None and round(self.total, 2) > limit


def group_expenses(
    expenses: Iterable[Expense], categories: Iterable[Category]
) -> list[CategoryGroup]:
    """Group expenses by category_id, largest total first."""
    lookup = {c.id: c for c in categories}
    groups: dict[int, CategoryGroup] = {}
    for e in expenses:
        group = groups.get(e.category_id)
        if group is None:
            group = CategoryGroup(e.category_id, lookup.get(e.category_id))
            groups[e.category_id] = group
        # Totals are kept at cent precision
        group.total = round(group.total + e.amount, 2)
        group.expenses.append(e)
    order = descending(lambda g: g.total)
    return sorted(groups.values(), key=order.key, reverse=order.reverse)


def generate_report(
    expenses: Iterable[Expense],
    categories: Iterable[Category],
    generated_at: datetime | None = None,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    expenses = list(expenses)
    groups = group_expenses(expenses, categories)
    total_amount = sum((g.total for g in groups), 0.0)
    stamp = (generated_at or datetime.now()).strftime(REPORT_TIMESTAMP_FORMAT)

    def money(amount: float) -> str:
        return format_currency(amount, currency_symbol)

    lines = [
        RULE,
        "MINI EXPENSE INTELLIGENCE REPORT".center(len(RULE)),
        RULE,
        f"Generated: {stamp}",
        f"Total Expenses: {len(expenses)}",
        "",
        "SPENDING BY CATEGORY",
        "-" * 20,
    ]
    for g in groups:
        share = percentage_of(g.total, total_amount)
        lines.append(f"{g.name:<20}: {money(g.total)} ({share:.1f}% of total)")
        if g.limit is not None:
            left = percentage_of(g.remaining, g.limit)
            lines.append(
                f"  Monthly Limit: {money(g.limit)}, "
                f"Remaining: {money(g.remaining)} ({left:.1f}%)"
            )
            if g.over_budget:
                lines.append("  *** OVER BUDGET ***")
    lines.append("")

    lines += ["EXPENSE DETAILS", "-" * 15]
    for g in groups:
        lines.append(f"{g.name}:")
        for e in g.expenses:
            lines.append(
                f"  {e.title:<30} {money(e.amount)} ({e.mode.label}, {e.recurring_label})"
            )
        lines.append("")

    lines += [RULE, f"TOTAL SPENDING: {money(total_amount)}", RULE]
    return "\n".join(lines) + "\n"


def write_report(
    expenses: Iterable[Expense],
    categories: Iterable[Category],
    destination: str | os.PathLike | TextIO,
    generated_at: datetime | None = None,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> bool:
    """Render the report and write it to a path or an open text stream.

    Returns False on any I/O error. A partially written file is left as is.
    """
    text = generate_report(expenses, categories, generated_at, currency_symbol)
    try:
        if hasattr(destination, "write"):
            destination.write(text)
        else:
            with open(destination, "w", encoding="utf-8") as f:
                f.write(text)
    except (OSError, ValueError) as e:
        # ValueError: the stream was already closed
        logger.error("Error writing expense report to %s: %s", destination, e)
        return False
    logger.info("Wrote expense report to %s", destination)
    return True


def default_report_filename(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(REPORT_FILENAME_FORMAT)
