import sqlite3

import pytest

from models.category import Category, Priority
from services.category_manager import CategoryManager


def _cat(name, limit=100.0, priority=Priority.MEDIUM, active=True):
    return Category(name=name, monthly_limit=limit, priority=priority, active=active)


def test_save_assigns_id_and_caches(category_manager, category_dao):
    cat = _cat("Groceries", 300)
    assert category_manager.save(cat) is True
    assert cat.id > 0
    assert category_manager.all() == [cat]
    assert category_dao.get_by_id(cat.id).name == "Groceries"


@pytest.mark.parametrize("name,limit,message", [
    ("", 100, "name"),
    ("   ", 100, "name"),
    ("Rent", 0, "positive"),
    ("Rent", -5, "positive"),
    ("Rent", "abc", "number"),
])
def test_save_rejects_invalid_input_before_repository(
    category_manager, category_dao, monkeypatch, name, limit, message
):
    calls = []
    monkeypatch.setattr(category_dao, "create", lambda c: calls.append(c))
    with pytest.raises(ValueError, match=message):
        category_manager.save(_cat(name, limit))
    assert calls == []
    assert category_manager.size() == 0


@pytest.mark.parametrize("limit,priority", [
    ("-5", Priority.HIGH),
    ("abc", Priority.HIGH),
    ("250", "H"),
])
def test_rejected_save_leaves_input_untouched(category_manager, limit, priority):
    cat = _cat("  Rent  ", limit, priority)
    with pytest.raises(ValueError):
        category_manager.save(cat)
    assert cat.name == "  Rent  "
    assert cat.monthly_limit == limit
    assert cat.id == 0


def test_save_normalises_name_and_limit(category_manager):
    cat = _cat("  Rent  ", "250")
    assert category_manager.save(cat) is True
    assert cat.name == "Rent"
    assert cat.monthly_limit == 250.0


def test_save_repository_failure_leaves_cache_untouched(
    category_manager, category_dao, monkeypatch
):
    category_manager.save(_cat("Rent", 1000))

    def boom(_):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(category_dao, "create", boom)
    cat = _cat("Fuel", 80)
    assert category_manager.save(cat) is False
    assert cat.id == 0
    assert [c.name for c in category_manager.all()] == ["Rent"]


def test_save_duplicate_name_fails_cleanly(category_manager):
    assert category_manager.save(_cat("Rent", 1000))
    assert category_manager.save(_cat("Rent", 500)) is False
    assert category_manager.size() == 1


def test_update_replaces_single_entry(category_manager, category_dao):
    cat = _cat("Food", 200)
    category_manager.save(cat)
    category_manager.save(_cat("Fun", 50))

    changed = Category(id=cat.id, name="Dining", monthly_limit=250,
                       priority=Priority.HIGH, active=True)
    assert category_manager.update(changed) is True

    matches = category_manager.filter(lambda c: c.id == cat.id)
    assert len(matches) == 1
    assert matches[0].name == "Dining"
    assert category_manager.size() == 2
    # in-place: the updated row keeps its position
    assert category_manager.all()[0].name == "Dining"
    assert category_dao.get_by_id(cat.id).priority is Priority.HIGH


def test_update_unknown_id_returns_false(category_manager):
    category_manager.save(_cat("Food", 200))
    ghost = Category(id=999, name="Ghost", monthly_limit=1)
    assert category_manager.update(ghost) is False
    assert [c.name for c in category_manager.all()] == ["Food"]


def test_update_repository_failure_keeps_old_value(
    category_manager, category_dao, monkeypatch
):
    cat = _cat("Food", 200)
    category_manager.save(cat)

    def boom(_):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(category_dao, "update", boom)
    changed = Category(id=cat.id, name="Dining", monthly_limit=250)
    assert category_manager.update(changed) is False
    assert category_manager.all()[0].name == "Food"


def test_delete_removes_from_repository_and_cache(category_manager, category_dao):
    cat = _cat("Gifts", 40)
    category_manager.save(cat)
    assert category_manager.delete(cat) is True
    assert category_manager.size() == 0
    assert category_dao.get_by_id(cat.id) is None


def test_delete_blocked_by_referencing_expense(
    category_manager, category_dao, expense_manager, make_expense, monkeypatch
):
    cat = _cat("Travel", 500)
    category_manager.save(cat)
    make_expense("Train", 45.0, cat.id)

    calls = []
    monkeypatch.setattr(category_dao, "delete", lambda cid: calls.append(cid))

    with pytest.raises(ValueError, match="1 expense"):
        category_manager.delete(cat, expense_manager=expense_manager)
    assert calls == []
    assert category_manager.size() == 1


def test_delete_checks_repository_not_filtered_cache(
    category_manager, expense_manager, make_expense
):
    cat = _cat("Travel", 500)
    category_manager.save(cat)
    make_expense("Train", 45.0, cat.id, recurring=True)
    expense_manager.load_non_recurring()
    assert expense_manager.size() == 0

    with pytest.raises(ValueError):
        category_manager.delete(cat, expense_manager=expense_manager)


def test_delete_reference_check_failure_returns_false(
    category_manager, category_dao, expense_manager, expense_dao, monkeypatch
):
    cat = _cat("Travel", 500)
    category_manager.save(cat)

    def locked(_):
        raise sqlite3.OperationalError("database is locked")

    calls = []
    monkeypatch.setattr(expense_dao, "count_by_category", locked)
    monkeypatch.setattr(category_dao, "delete", lambda cid: calls.append(cid))

    assert category_manager.delete(cat, expense_manager=expense_manager) is False
    assert calls == []
    assert category_manager.all() == [cat]


def test_delete_allowed_when_unreferenced(category_manager, expense_manager):
    cat = _cat("Spare", 10)
    category_manager.save(cat)
    assert category_manager.delete(cat, expense_manager=expense_manager) is True


def test_load_variants(category_manager, make_category, make_expense):
    food = make_category("Food", 100, Priority.HIGH)
    fun = make_category("Fun", 50, Priority.LOW, active=False)
    rent = make_category("Rent", 900, Priority.HIGH)
    make_expense("Dinner", 70, food.id)
    make_expense("Market", 50, food.id)
    make_expense("Cinema", 50, fun.id)

    category_manager.load_data()
    assert [c.name for c in category_manager.all()] == ["Food", "Fun", "Rent"]

    category_manager.load_active()
    assert [c.name for c in category_manager.all()] == ["Food", "Rent"]

    category_manager.load_by_priority(Priority.HIGH)
    assert [c.id for c in category_manager.all()] == [food.id, rent.id]

    category_manager.load_over_budget()
    assert [c.name for c in category_manager.all()] == ["Food"]


def test_over_budget_is_strict(category_manager, make_category, make_expense):
    exact = make_category("Exact", 100)
    over = make_category("Over", 100)
    make_expense("a", 60, exact.id)
    make_expense("b", 40, exact.id)
    make_expense("c", 60, over.id)
    make_expense("d", 60, over.id)

    category_manager.load_over_budget()
    assert [c.name for c in category_manager.all()] == ["Over"]


def test_cent_amounts_summing_to_limit_are_not_over_budget(
    category_manager, make_category, make_expense
):
    cat = make_category("Utilities", 100)
    for amount in (40.34, 8.56, 31.96, 19.14):
        make_expense("bill", amount, cat.id)

    category_manager.load_over_budget()
    assert category_manager.size() == 0

    make_expense("late fee", 0.01, cat.id)
    category_manager.load_over_budget()
    assert [c.name for c in category_manager.all()] == ["Utilities"]


def test_failed_load_keeps_previous_cache(category_manager, category_dao, make_category, monkeypatch):
    make_category("Food")
    category_manager.load_data()

    def boom():
        raise sqlite3.OperationalError("no such table")

    monkeypatch.setattr(category_dao, "get_active", boom)
    with pytest.raises(sqlite3.OperationalError):
        category_manager.load_active()
    assert [c.name for c in category_manager.all()] == ["Food"]


def test_priority_ordering(category_manager):
    for name, p in [("l", Priority.LOW), ("h", Priority.HIGH), ("m", Priority.MEDIUM)]:
        category_manager.add(Category(name=name, monthly_limit=1, priority=p))
    ordered = category_manager.sort(CategoryManager.by_priority())
    assert [c.priority for c in ordered] == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]


def test_name_and_limit_orderings(category_manager):
    for name, limit in [("Rent", 900), ("Food", 200), ("Bus", 40)]:
        category_manager.add(Category(name=name, monthly_limit=limit))
    assert [c.name for c in category_manager.sort(CategoryManager.by_name())] == \
        ["Bus", "Food", "Rent"]
    up = category_manager.sort(CategoryManager.by_monthly_limit(ascending=True))
    down = category_manager.sort(CategoryManager.by_monthly_limit(ascending=False))
    assert [c.monthly_limit for c in up] == [40, 200, 900]
    assert down == list(reversed(up))


def test_active_status_ordering_is_stable(category_manager):
    cats = [
        Category(name="a", monthly_limit=1, active=False),
        Category(name="b", monthly_limit=1, active=True),
        Category(name="c", monthly_limit=1, active=False),
        Category(name="d", monthly_limit=1, active=True),
    ]
    for c in cats:
        category_manager.add(c)
    active_first = category_manager.sort(CategoryManager.by_active_status(True))
    inactive_first = category_manager.sort(CategoryManager.by_active_status(False))
    assert [c.name for c in active_first] == ["b", "d", "a", "c"]
    assert [c.name for c in inactive_first] == ["a", "c", "b", "d"]


def test_summary_counts(category_manager):
    category_manager.add(Category(name="a", monthly_limit=1, priority=Priority.HIGH))
    category_manager.add(Category(name="b", monthly_limit=1, priority=Priority.HIGH, active=False))
    assert category_manager.count_by_priority() == {
        Priority.HIGH: 2, Priority.MEDIUM: 0, Priority.LOW: 0,
    }
    assert category_manager.active_count() == 1
    assert [c.name for c in category_manager.inactive()] == ["b"]
