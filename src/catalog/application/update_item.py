"""Application service: Update Item use case.

Partial update: only the fields present in the patch are applied, the
rest of the item is left as it was.
"""

from __future__ import annotations

from catalog.application.dto import ItemDTO, ItemPatch
from catalog.application.mapping import Clock, to_item_dto, utc_now
from catalog.domain.exceptions import DuplicateItemError, EntityNotFoundError
from catalog.domain.model.item import Item
from catalog.domain.model.value_objects import Price
from catalog.domain.repository.item_repository import ItemRepository


class UpdateItemHandler:

    def __init__(self, item_repo: ItemRepository, clock: Clock = utc_now) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(self, item_id: str, patch: ItemPatch) -> ItemDTO:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item '{item_id}' not found")

        original_title = item.title_normalized
        self._apply(item, patch)

        if item.title_normalized != original_title:
            holder = self._item_repo.get_by_key(item.key)
            if holder is not None and holder.id != item.id:
                raise DuplicateItemError(
                    f"Seller '{item.seller_id}' already has an item titled '{item.title}'"
                )

        item.validate()
        self._item_repo.save(item)
        return to_item_dto(item, self._clock())

    @staticmethod
    def _apply(item: Item, patch: ItemPatch) -> None:
        if patch.title is not None:
            item.change_title(patch.title)
        if patch.description is not None:
            item.change_description(patch.description)
        if patch.price is not None:
            item.change_base_price(Price.of(patch.price.currency, patch.price.amount))
        if patch.stock is not None:
            item.set_stock(patch.stock)
        if patch.free_shipping is not None:
            item.set_free_shipping(patch.free_shipping)
        if patch.categories is not None:
            item.replace_categories(patch.categories)
        if patch.attributes is not None:
            for key, value in patch.attributes.items():
                item.put_attribute(key, value)
