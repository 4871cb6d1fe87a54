"""Application service: List Items use case (query)."""

from __future__ import annotations

from catalog.application.dto import ItemDTO
from catalog.application.mapping import Clock, to_item_dto, utc_now
from catalog.domain.repository.item_repository import ItemRepository

DEFAULT_PAGE_SIZE = 20


class ListItemsHandler:

    def __init__(self, item_repo: ItemRepository, clock: Clock = utc_now) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> list[ItemDTO]:
        now = self._clock()
        return [to_item_dto(item, now) for item in self._item_repo.list_page(page, size)]
