import sqlite3

import pytest

from models.category import Category, Priority
from models.expense import Expense, PaymentMode


def test_category_round_trip_through_codes(category_dao, db):
    cat_id = category_dao.create(
        Category(name="Health", monthly_limit=75.5, priority=Priority.LOW, active=False)
    )
    row = db.get_connection().execute(
        "SELECT priority, is_active FROM categories WHERE id = ?", (cat_id,)
    ).fetchone()
    assert row["priority"] == "L"
    assert row["is_active"] == 0

    loaded = category_dao.get_by_id(cat_id)
    assert loaded.priority is Priority.LOW
    assert loaded.active is False
    assert loaded.monthly_limit == pytest.approx(75.5)


def test_get_by_id_missing(category_dao, expense_dao):
    assert category_dao.get_by_id(123) is None
    assert expense_dao.get_by_id(123) is None


def test_schema_rejects_non_positive_values(category_dao, expense_dao, make_category):
    with pytest.raises(sqlite3.IntegrityError):
        category_dao.create(Category(name="Zero", monthly_limit=0))
    cat = make_category("Food")
    with pytest.raises(sqlite3.IntegrityError):
        expense_dao.create(
            Expense(title="Free", amount=0, mode=PaymentMode.CASH, category_id=cat.id)
        )


def test_expense_requires_existing_category(expense_dao):
    with pytest.raises(sqlite3.IntegrityError):
        expense_dao.create(
            Expense(title="Orphan", amount=5, mode=PaymentMode.CASH, category_id=77)
        )


def test_category_delete_restricted_while_referenced(category_dao, make_category, make_expense):
    cat = make_category("Food")
    make_expense("Lunch", 9, cat.id)
    with pytest.raises(sqlite3.IntegrityError):
        category_dao.delete(cat.id)
    assert category_dao.get_by_id(cat.id) is not None


def test_failed_write_is_rolled_back(category_dao, make_category):
    make_category("Food")
    with pytest.raises(sqlite3.IntegrityError):
        category_dao.create(Category(name="Food", monthly_limit=10))
    make_category("Fuel")
    assert [c.name for c in category_dao.get_all()] == ["Food", "Fuel"]


def test_expense_mode_codes(expense_dao, db, make_category):
    cat = make_category("Bills")
    exp_id = expense_dao.create(
        Expense(title="Power", amount=60, mode=PaymentMode.BANK_TRANSFER,
                category_id=cat.id, recurring=True)
    )
    row = db.get_connection().execute(
        "SELECT mode, is_recurring FROM expenses WHERE id = ?", (exp_id,)
    ).fetchone()
    assert row["mode"] == "B"
    assert row["is_recurring"] == 1
    assert expense_dao.get_by_id(exp_id).mode is PaymentMode.BANK_TRANSFER


def test_total_by_category(expense_dao, make_category, make_expense):
    food = make_category("Food")
    fun = make_category("Fun")
    make_expense("a", 10, food.id)
    make_expense("b", 2.5, food.id)
    make_expense("c", 4, fun.id)
    assert expense_dao.get_total_by_category() == {
        food.id: pytest.approx(12.5), fun.id: pytest.approx(4),
    }
    assert expense_dao.count_by_category(food.id) == 2
    assert expense_dao.category_exists(fun.id)
    assert not expense_dao.category_exists(999)


def test_total_by_category_is_rounded_to_cents(expense_dao, make_category, make_expense):
    cat = make_category("Utilities", 100)
    for amount in (40.34, 8.56, 31.96, 19.14):
        make_expense("bill", amount, cat.id)
    assert expense_dao.get_total_by_category() == {cat.id: 100.0}


def test_settings_seeded_and_updatable(db):
    assert db.get_setting("currency_symbol") == "₹"
    db.set_setting("currency_symbol", "$")
    assert db.get_setting("currency_symbol") == "$"
    assert db.get_setting("missing", "fallback") == "fallback"


def test_open_creates_file_in_folder(tmp_path):
    from database.db_manager import DatabaseManager
    from utils.constants import DB_FILE

    db = DatabaseManager.open(db_folder=str(tmp_path / "data"))
    try:
        assert (tmp_path / "data" / DB_FILE).exists()
        assert db.get_setting("appearance_mode") == "system"
    finally:
        db.close()
