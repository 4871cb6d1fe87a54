"""Application service: Delete Item use case."""

from __future__ import annotations

from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.repository.item_repository import ItemRepository


class DeleteItemHandler:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def handle(self, item_id: str) -> None:
        if not self._item_repo.delete_by_id(item_id):
            raise EntityNotFoundError(f"Item '{item_id}' not found")
