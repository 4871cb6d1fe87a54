"""Application service: picture management for an item."""

from __future__ import annotations

from catalog.application.dto import ItemDTO, PictureSpec
from catalog.application.mapping import Clock, to_item_dto, utc_now
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.item import Item
from catalog.domain.model.value_objects import Picture
from catalog.domain.repository.item_repository import ItemRepository


class ManagePicturesHandler:

    def __init__(self, item_repo: ItemRepository, clock: Clock = utc_now) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def add(self, item_id: str, spec: PictureSpec) -> ItemDTO:
        """Append a picture; ``main=True`` demotes the current main one."""
        item = self._load(item_id)
        item.add_picture(Picture(url=spec.url, main=spec.main, alt=spec.alt))
        return self._save(item)

    def remove(self, item_id: str, url: str) -> ItemDTO:
        item = self._load(item_id)
        if not item.remove_picture_by_url(url):
            raise EntityNotFoundError(f"Item '{item_id}' has no picture '{url}'")
        return self._save(item)

    def set_main(self, item_id: str, url: str) -> ItemDTO:
        item = self._load(item_id)
        if not item.set_main_picture(url):
            raise EntityNotFoundError(f"Item '{item_id}' has no picture '{url}'")
        return self._save(item)

    # --- Internal helpers -----------------------------------------------------

    def _load(self, item_id: str) -> Item:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item '{item_id}' not found")
        return item

    def _save(self, item: Item) -> ItemDTO:
        self._item_repo.save(item)
        return to_item_dto(item, self._clock())
