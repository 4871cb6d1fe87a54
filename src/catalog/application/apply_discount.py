"""Application service: Apply Discount use case.

The discount type arrives as a free-form token ("percent", "AMOUNT") and
is parsed against the closed set of discount types here, at the edge of
the domain.
"""

from __future__ import annotations

from catalog.application.dto import DiscountSpec, ItemDTO
from catalog.application.mapping import Clock, to_item_dto, utc_now
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.discount import Discount, DiscountType
from catalog.domain.repository.item_repository import ItemRepository


class ApplyDiscountHandler:

    def __init__(self, item_repo: ItemRepository, clock: Clock = utc_now) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(self, item_id: str, spec: DiscountSpec) -> ItemDTO:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item '{item_id}' not found")

        discount = Discount(
            type=DiscountType.parse(spec.type),
            value=spec.value,
            label=spec.label,
            starts_at=spec.starts_at,
            ends_at=spec.ends_at,
        )
        item.apply_discount(discount)
        self._item_repo.save(item)
        return to_item_dto(item, self._clock())
