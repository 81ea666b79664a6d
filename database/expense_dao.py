import logging
from typing import Optional
from database.db_manager import DatabaseManager
from models.expense import Expense, PaymentMode

logger = logging.getLogger(__name__)


class ExpenseDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Expense:
        return Expense(
            id=row["id"],
            title=row["title"],
            amount=row["amount"],
            mode=PaymentMode.from_code(row["mode"]),
            recurring=bool(row["is_recurring"]),
            category_id=row["category_id"],
        )

    def _fetch(self, sql: str, params=()) -> list[Expense]:
        conn = self._db.get_connection()
        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def _write(self, sql: str, params):
        conn = self._db.get_connection()
        try:
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor
        except Exception:
            conn.rollback()
            raise

    def get_all(self) -> list[Expense]:
        return self._fetch("SELECT * FROM expenses ORDER BY id")

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM expenses WHERE id = ?", (expense_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_recurring(self) -> list[Expense]:
        return self._fetch("SELECT * FROM expenses WHERE is_recurring = 1 ORDER BY id")

    def get_non_recurring(self) -> list[Expense]:
        return self._fetch("SELECT * FROM expenses WHERE is_recurring = 0 ORDER BY id")

    def get_by_category(self, category_id: int) -> list[Expense]:
        return self._fetch(
            "SELECT * FROM expenses WHERE category_id = ? ORDER BY id",
            (category_id,),
        )

    def get_by_mode(self, mode: PaymentMode) -> list[Expense]:
        return self._fetch(
            "SELECT * FROM expenses WHERE mode = ? ORDER BY id", (mode.code,)
        )

    def count_by_category(self, category_id: int) -> int:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM expenses WHERE category_id = ?",
            (category_id,),
        ).fetchone()
        return row["n"]

    def category_exists(self, category_id: int) -> bool:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT 1 FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return row is not None

    def get_total_by_category(self) -> dict[int, float]:
        """Sum of expense amounts per category_id, rounded to the cent."""
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT category_id, ROUND(SUM(amount), 2) AS total
               FROM expenses
               GROUP BY category_id"""
        ).fetchall()
        return {r["category_id"]: r["total"] for r in rows}

    def create(self, expense: Expense) -> int:
        cursor = self._write(
            """INSERT INTO expenses(title, amount, mode, is_recurring, category_id)
               VALUES (?, ?, ?, ?, ?)""",
            (
                expense.title, expense.amount, expense.mode.code,
                1 if expense.recurring else 0, expense.category_id,
            ),
        )
        logger.debug("Inserted expense %r as id %s", expense.title, cursor.lastrowid)
        return cursor.lastrowid

    def update(self, expense: Expense) -> bool:
        cursor = self._write(
            """UPDATE expenses
               SET title=?, amount=?, mode=?, is_recurring=?, category_id=?
               WHERE id=?""",
            (
                expense.title, expense.amount, expense.mode.code,
                1 if expense.recurring else 0, expense.category_id, expense.id,
            ),
        )
        return cursor.rowcount > 0

    def delete(self, expense_id: int) -> bool:
        cursor = self._write("DELETE FROM expenses WHERE id = ?", (expense_id,))
        return cursor.rowcount > 0
