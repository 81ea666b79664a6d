import logging
import sqlite3
from typing import TYPE_CHECKING

from database.category_dao import CategoryDAO
from models.category import Category, Priority
from services.data_manager import DataManager
from services.ordering import Ordering, ascending, by_id, directed

if TYPE_CHECKING:
    from services.expense_manager import ExpenseManager

logger = logging.getLogger(__name__)


class CategoryManager(DataManager[Category]):
    def __init__(self, category_dao: CategoryDAO):
        super().__init__()
        self._dao = category_dao

    # ── Loading ──────────────────────────────────────────────────────────────

    def load_data(self) -> None:
        self._reload(self._dao.get_all())

    def load_active(self) -> None:
        self._reload(self._dao.get_active())

    def load_by_priority(self, priority: Priority) -> None:
        self._reload(self._dao.get_by_priority(priority))

    def load_over_budget(self) -> None:
        """Categories whose linked expenses sum to more than their monthly limit."""
        self._reload(self._dao.get_over_budget())

    # ── Persistence ──────────────────────────────────────────────────────────

    def save(self, category: Category) -> bool:
        self._validate(category)
        try:
            new_id = self._dao.create(category)
        except sqlite3.Error as e:
            logger.warning("Could not save category %r: %s", category.name, e)
            return False
        if not new_id:
            return False
        category.id = new_id
        return self.add(category)

    def update(self, category: Category) -> bool:
        self._validate(category)
        try:
            ok = self._dao.update(category)
        except sqlite3.Error as e:
            logger.warning("Could not update category %s: %s", category.id, e)
            return False
        if ok:
            self._replace_by_id(category)
        return ok

    def delete(
        self, category: Category, expense_manager: "ExpenseManager | None" = None
    ) -> bool:
        """Delete a category. When expense_manager is given it is asked first
        whether any expense still references the category; if so the delete
        is refused with ValueError and the repository is not touched."""
        try:
            if expense_manager is not None:
                count = expense_manager.count_for_category(category.id)
                if count:
                    raise ValueError(
                        f"Cannot delete category '{category.name}': "
                        f"{count} expense(s) still reference it."
                    )
            ok = self._dao.delete(category.id)
        except sqlite3.Error as e:
            logger.warning("Could not delete category %s: %s", category.id, e)
            return False
        if ok:
            self._remove_by_id(category.id)
        return ok

    def _validate(self, category: Category):
        """Normalise name and limit in place, only once every check passes."""
        name = (category.name or "").strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        if not isinstance(category.priority, Priority):
            raise ValueError(f"Invalid priority: {category.priority!r}")
        try:
            limit = float(category.monthly_limit)
        except (TypeError, ValueError):
            raise ValueError("Monthly limit must be a number.")
        if limit <= 0:
            raise ValueError("Monthly limit must be positive.")
        category.name = name
        category.monthly_limit = limit

    # ── Summary accessors ────────────────────────────────────────────────────

    def count_by_priority(self) -> dict[Priority, int]:
        counts = {p: 0 for p in Priority}
        for c in self._items:
            counts[c.priority] += 1
        return counts

    def active_count(self) -> int:
        return sum(1 for c in self._items if c.active)

    def inactive(self) -> list[Category]:
        return self.filter(lambda c: not c.active)

    # ── Orderings ────────────────────────────────────────────────────────────

    @staticmethod
    def by_id() -> Ordering:
        return by_id()

    @staticmethod
    def by_name() -> Ordering:
        return ascending(lambda c: c.name)

    @staticmethod
    def by_monthly_limit(ascending: bool = True) -> Ordering:
        return directed(lambda c: c.monthly_limit, ascending)

    @staticmethod
    def by_priority() -> Ordering:
        """High, then Medium, then Low."""
        return Ordering(lambda c: c.priority.rank, reverse=True)

    @staticmethod
    def by_active_status(active_first: bool = True) -> Ordering:
        return Ordering(lambda c: c.active, reverse=active_first)
