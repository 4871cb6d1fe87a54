"""Abstract repository for the Item aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.item import Item, ItemKey


class ItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> Item | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def get_by_key(self, key: ItemKey) -> Item | None:
        """Return the item holding a uniqueness key, or None."""

    @abstractmethod
    def list_page(self, page: int, size: int) -> list[Item]:
        """Return one page of items ordered by normalized title, then id.

        A negative page or a non-positive size yields an empty list.
        """

    @abstractmethod
    def save(self, item: Item) -> Item:
        """Persist a new or updated item.

        Raises DuplicateItemError if another item holds the same key.
        """

    @abstractmethod
    def delete_by_id(self, item_id: str) -> bool:
        """Remove an item; return whether it existed."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored items."""
