import pytest

from models.category import Category, Priority
from models.expense import Expense, PaymentMode


def test_priority_codes_and_ranks():
    assert [p.code for p in Priority] == ["H", "M", "L"]
    assert Priority.HIGH.rank > Priority.MEDIUM.rank > Priority.LOW.rank
    assert Priority.from_code("M") is Priority.MEDIUM
    assert Priority.from_label("Low") is Priority.LOW
    with pytest.raises(ValueError):
        Priority.from_code("X")


def test_payment_mode_declared_order():
    assert [m.position for m in PaymentMode] == [0, 1, 2]
    assert PaymentMode.from_code("B") is PaymentMode.BANK_TRANSFER
    assert PaymentMode.from_label("Digital") is PaymentMode.DIGITAL
    with pytest.raises(ValueError):
        PaymentMode.from_label("Cheque")


def test_unsaved_records_have_zero_id():
    assert Category(name="x", monthly_limit=1).id == 0
    exp = Expense(title="x", amount=1, mode=PaymentMode.CASH, category_id=1)
    assert exp.id == 0
    assert exp.recurring_label == "One-time"
