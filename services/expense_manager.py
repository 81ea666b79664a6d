import logging
import sqlite3

from database.expense_dao import ExpenseDAO
from models.expense import Expense, PaymentMode
from services.data_manager import DataManager
from services.ordering import Ordering, ascending, by_id, directed, sum_by
from utils.currency import percentage_of

logger = logging.getLogger(__name__)


class ExpenseManager(DataManager[Expense]):
    def __init__(self, expense_dao: ExpenseDAO):
        super().__init__()
        self._dao = expense_dao

    # ── Loading ──────────────────────────────────────────────────────────────

    def load_data(self) -> None:
        self._reload(self._dao.get_all())

    def load_recurring(self) -> None:
        self._reload(self._dao.get_recurring())

    def load_non_recurring(self) -> None:
        self._reload(self._dao.get_non_recurring())

    def load_by_category(self, category_id: int) -> None:
        self._reload(self._dao.get_by_category(category_id))

    def load_by_mode(self, mode: PaymentMode) -> None:
        self._reload(self._dao.get_by_mode(mode))

    # ── Totals ───────────────────────────────────────────────────────────────

    def total_amount(self) -> float:
        return sum((e.amount for e in self._items), 0.0)

    def totals_by_mode(self) -> dict[PaymentMode, float]:
        """Every payment mode is present, zero if nothing was paid that way."""
        totals = {m: 0.0 for m in PaymentMode}
        totals.update(sum_by(self._items, lambda e: e.mode, lambda e: e.amount))
        return totals

    def mode_percentages(self) -> dict[PaymentMode, float]:
        total = self.total_amount()
        return {
            mode: percentage_of(amount, total)
            for mode, amount in self.totals_by_mode().items()
        }

    def totals_by_category(self) -> dict[int, float]:
        """{category_id: total} over the loaded expenses."""
        return sum_by(self._items, lambda e: e.category_id, lambda e: e.amount)

    def spending_by_category(self) -> dict[int, float]:
        """{category_id: total} over every stored expense, not just the loaded view."""
        return self._dao.get_total_by_category()

    # ── Referential checks ───────────────────────────────────────────────────

    def count_for_category(self, category_id: int) -> int:
        # Asks the repository: the loaded view may be filtered.
        return self._dao.count_by_category(category_id)

    # ── Persistence ──────────────────────────────────────────────────────────

    def save(self, expense: Expense) -> bool:
        try:
            self._validate(expense)
            new_id = self._dao.create(expense)
        except sqlite3.Error as e:
            logger.warning("Could not save expense %r: %s", expense.title, e)
            return False
        if not new_id:
            return False
        expense.id = new_id
        return self.add(expense)

    def update(self, expense: Expense) -> bool:
        try:
            self._validate(expense)
            ok = self._dao.update(expense)
        except sqlite3.Error as e:
            logger.warning("Could not update expense %s: %s", expense.id, e)
            return False
        if ok:
            self._replace_by_id(expense)
        return ok

    def delete(self, expense: Expense) -> bool:
        try:
            ok = self._dao.delete(expense.id)
        except sqlite3.Error as e:
            logger.warning("Could not delete expense %s: %s", expense.id, e)
            return False
        if ok:
            self._remove_by_id(expense.id)
        return ok

    def _validate(self, expense: Expense):
        title = (expense.title or "").strip()
        if not title:
            raise ValueError("Expense title cannot be empty.")
        try:
            amount = float(expense.amount)
        except (TypeError, ValueError):
            raise ValueError("Amount must be a number.")
        if amount <= 0:
            raise ValueError("Amount must be positive.")
        if not isinstance(expense.mode, PaymentMode):
            raise ValueError(f"Invalid payment mode: {expense.mode!r}")
        if not self._dao.category_exists(expense.category_id):
            raise ValueError(f"Unknown category id: {expense.category_id}")
        expense.title = title
        expense.amount = amount

    # ── Orderings ────────────────────────────────────────────────────────────

    @staticmethod
    def by_id() -> Ordering:
        return by_id()

    @staticmethod
    def by_title() -> Ordering:
        return ascending(lambda e: e.title)

    @staticmethod
    def by_amount(ascending: bool = True) -> Ordering:
        return directed(lambda e: e.amount, ascending)

    @staticmethod
    def by_mode() -> Ordering:
        """Cash, Digital, Bank Transfer (declaration order)."""
        return Ordering(lambda e: e.mode.position)

    @staticmethod
    def by_recurring() -> Ordering:
        """One-time expenses first."""
        return Ordering(lambda e: e.recurring)
