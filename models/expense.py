from dataclasses import dataclass
from enum import Enum


class PaymentMode(Enum):
    # Declaration order is the sort order used by ExpenseManager.by_mode()
    CASH = ("C", "Cash")
    DIGITAL = ("D", "Digital")
    BANK_TRANSFER = ("B", "Bank Transfer")

    def __init__(self, code: str, label: str):
        self.code = code
        self.label = label

    @property
    def position(self) -> int:
        return list(PaymentMode).index(self)

    @classmethod
    def from_code(cls, code: str) -> "PaymentMode":
        for m in cls:
            if m.code == code:
                return m
        raise ValueError(f"Unknown payment mode code: {code!r}")

    @classmethod
    def from_label(cls, label: str) -> "PaymentMode":
        for m in cls:
            if m.label == label:
                return m
        raise ValueError(f"Unknown payment mode: {label!r}")


@dataclass
class Expense:
    title: str
    amount: float
    mode: PaymentMode
    category_id: int
    recurring: bool = False
    id: int = 0         # 0 until saved

    @property
    def recurring_label(self) -> str:
        return "Recurring" if self.recurring else "One-time"
