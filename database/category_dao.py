import logging
from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category, Priority

logger = logging.getLogger(__name__)


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            monthly_limit=row["monthly_limit"],
            priority=Priority.from_code(row["priority"]),
            active=bool(row["is_active"]),
        )

    def _fetch(self, sql: str, params=()) -> list[Category]:
        conn = self._db.get_connection()
        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def _write(self, sql: str, params):
        """Run one write statement; returns the cursor (rolled back on failure)."""
        conn = self._db.get_connection()
        try:
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor
        except Exception:
            conn.rollback()
            raise

    def get_all(self) -> list[Category]:
        return self._fetch("SELECT * FROM categories ORDER BY id")

    def get_by_id(self, category_id: int) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_active(self) -> list[Category]:
        return self._fetch("SELECT * FROM categories WHERE is_active = 1 ORDER BY id")

    def get_by_priority(self, priority: Priority) -> list[Category]:
        return self._fetch(
            "SELECT * FROM categories WHERE priority = ? ORDER BY id",
            (priority.code,),
        )

    def get_over_budget(self) -> list[Category]:
        """Categories whose linked expenses, summed to the cent, exceed monthly_limit."""
        return self._fetch(
            """SELECT c.*
               FROM categories c
               JOIN expenses e ON e.category_id = c.id
               GROUP BY c.id
               HAVING ROUND(SUM(e.amount), 2) > c.monthly_limit
               ORDER BY c.id"""
        )

    def create(self, category: Category) -> int:
        cursor = self._write(
            """INSERT INTO categories(name, monthly_limit, priority, is_active)
               VALUES (?, ?, ?, ?)""",
            (
                category.name, category.monthly_limit,
                category.priority.code, 1 if category.active else 0,
            ),
        )
        logger.debug("Inserted category %r as id %s", category.name, cursor.lastrowid)
        return cursor.lastrowid

    def update(self, category: Category) -> bool:
        cursor = self._write(
            """UPDATE categories
               SET name=?, monthly_limit=?, priority=?, is_active=?
               WHERE id=?""",
            (
                category.name, category.monthly_limit, category.priority.code,
                1 if category.active else 0, category.id,
            ),
        )
        return cursor.rowcount > 0

    def delete(self, category_id: int) -> bool:
        cursor = self._write("DELETE FROM categories WHERE id = ?", (category_id,))
        return cursor.rowcount > 0
