"""In-memory fake repository for testing.

Implements the same abstract interface as the JSON repository
but keeps everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import copy

from catalog.domain.exceptions import DuplicateItemError
from catalog.domain.model.item import Item, ItemKey
from catalog.domain.repository.item_repository import ItemRepository


class FakeItemRepository(ItemRepository):

    def __init__(self, items: list[Item] | None = None) -> None:
        self._store: dict[str, Item] = {}
        self.saves = 0
        for item in items or []:
            self._store[item.id] = copy.deepcopy(item)

    def get_by_id(self, item_id: str) -> Item | None:
        return copy.deepcopy(self._store.get(item_id))

    def get_by_key(self, key: ItemKey) -> Item | None:
        for item in self._store.values():
            if item.key == key:
                return copy.deepcopy(item)
        return None

    def list_page(self, page: int, size: int) -> list[Item]:
        if page < 0 or size <= 0:
            return []
        ordered = sorted(self._store.values(), key=lambda i: (i.title_normalized, i.id))
        return [copy.deepcopy(i) for i in ordered[page * size:page * size + size]]

    def save(self, item: Item) -> Item:
        for other in self._store.values():
            if other.key == item.key and other.id != item.id:
                raise DuplicateItemError(f"Duplicate key {item.key}")
        self._store[item.id] = copy.deepcopy(item)
        self.saves += 1
        return item

    def delete_by_id(self, item_id: str) -> bool:
        return self._store.pop(item_id, None) is not None

    def count(self) -> int:
        return len(self._store)


class RacingItemRepository(FakeItemRepository):
    """Misses duplicates on lookup, like a create racing another one."""

    def get_by_key(self, key: ItemKey) -> Item | None:
        return None
