import pytest

from database.category_dao import CategoryDAO
from database.db_manager import DatabaseManager
from database.expense_dao import ExpenseDAO
from models.category import Category, Priority
from models.expense import Expense, PaymentMode
from services.category_manager import CategoryManager
from services.expense_manager import ExpenseManager


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def expense_dao(db):
    return ExpenseDAO(db)


@pytest.fixture
def category_manager(category_dao):
    return CategoryManager(category_dao)


@pytest.fixture
def expense_manager(expense_dao):
    return ExpenseManager(expense_dao)


@pytest.fixture
def make_category(category_dao):
    """Insert a category straight through the DAO and return it with its id."""
    def _make(name, limit=100.0, priority=Priority.MEDIUM, active=True):
        cat = Category(name=name, monthly_limit=limit, priority=priority, active=active)
        cat.id = category_dao.create(cat)
        return cat
    return _make


@pytest.fixture
def make_expense(expense_dao):
    def _make(title, amount, category_id, mode=PaymentMode.CASH, recurring=False):
        exp = Expense(
            title=title, amount=amount, mode=mode,
            category_id=category_id, recurring=recurring,
        )
        exp.id = expense_dao.create(exp)
        return exp
    return _make
