from dataclasses import dataclass
from enum import Enum


class Priority(Enum):
    HIGH = ("H", "High", 3)
    MEDIUM = ("M", "Medium", 2)
    LOW = ("L", "Low", 1)

    def __init__(self, code: str, label: str, rank: int):
        self.code = code
        self.label = label
        self.rank = rank

    @classmethod
    def from_code(cls, code: str) -> "Priority":
        for p in cls:
            if p.code == code:
                return p
        raise ValueError(f"Unknown priority code: {code!r}")

    @classmethod
    def from_label(cls, label: str) -> "Priority":
        for p in cls:
            if p.label == label:
                return p
        raise ValueError(f"Unknown priority: {label!r}")


@dataclass
class Category:
    name: str
    monthly_limit: float
    priority: Priority = Priority.MEDIUM
    active: bool = True
    id: int = 0         # 0 until saved
