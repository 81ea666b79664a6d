from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterator, Optional, TypeVar

from services.ordering import Ordering

T = TypeVar("T")


class DataManager(ABC, Generic[T]):
    """In-memory, ordered cache of one kind of record.

    Reads hand out copies; sort() and filter() return new lists and never
    touch the cache. Subclasses decide how load_data() repopulates it.
    """

    def __init__(self):
        self._items: list[T] = []

    @abstractmethod
    def load_data(self) -> None:
        """Replace the cache with the repository's full listing."""

    def add(self, item: T) -> bool:
        self._items.append(item)
        return True

    def remove(self, item: T) -> bool:
        try:
            self._items.remove(item)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._items.clear()

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def all(self) -> list[T]:
        return list(self._items)

    def sort(self, ordering: Ordering | Callable) -> list[T]:
        """Return a stably sorted copy. Accepts an Ordering or a bare key function."""
        if not isinstance(ordering, Ordering):
            ordering = Ordering(ordering)
        return sorted(self._items, key=ordering.key, reverse=ordering.reverse)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item for item in self._items if predicate(item)]

    def replace_all(self, items) -> None:
        """Swap in a new order (e.g. a sorted view the UI wants to keep)."""
        items = list(items)
        self.clear()
        for item in items:
            self.add(item)

    def find_by_id(self, item_id: int) -> Optional[T]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def _reload(self, items) -> None:
        # Called with the finished query result: a failed query never clears.
        self.replace_all(items)

    def _replace_by_id(self, item: T) -> None:
        """Swap the cached entry with item.id for item, keeping its position.
        Any further entries with the same id are dropped."""
        replaced = False
        kept = []
        for existing in self._items:
            if existing.id != item.id:
                kept.append(existing)
            elif not replaced:
                kept.append(item)
                replaced = True
        if not replaced:
            kept.append(item)
        self._items = kept

    def _remove_by_id(self, item_id: int) -> bool:
        for idx, existing in enumerate(self._items):
            if existing.id == item_id:
                del self._items[idx]
                return True
        return False
