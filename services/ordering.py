"""Small pure ordering helpers shared by the managers.

An Ordering is a sort key plus a direction. Python's sort is stable in both
directions, so items with equal keys keep their prior relative order.
"""
from typing import Any, Callable, NamedTuple


class Ordering(NamedTuple):
    key: Callable[[Any], Any]
    reverse: bool = False

    def reversed(self) -> "Ordering":
        return Ordering(self.key, not self.reverse)


def ascending(key: Callable[[Any], Any]) -> Ordering:
    return Ordering(key, False)


def descending(key: Callable[[Any], Any]) -> Ordering:
    return Ordering(key, True)


def directed(key: Callable[[Any], Any], ascending_: bool = True) -> Ordering:
    """Ascending or descending on the same key, chosen by flag."""
    return Ordering(key, not ascending_)


def by_id() -> Ordering:
    return ascending(lambda item: item.id)


def sum_by(items, key: Callable[[Any], Any], value: Callable[[Any], float]) -> dict:
    """Group items by key and sum value; keys appear in first-seen order."""
    totals: dict = {}
    for item in items:
        k = key(item)
        totals[k] = totals.get(k, 0.0) + value(item)
    return totals
