"""Application service: Show Item use case (query)."""

from __future__ import annotations

from catalog.application.dto import ItemDTO
from catalog.application.mapping import Clock, to_item_dto, utc_now
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.repository.item_repository import ItemRepository


class ShowItemHandler:

    def __init__(self, item_repo: ItemRepository, clock: Clock = utc_now) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(self, item_id: str) -> ItemDTO:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item '{item_id}' not found")
        return to_item_dto(item, self._clock())
