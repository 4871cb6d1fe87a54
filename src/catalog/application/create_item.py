"""Application service: Create Item use case.

Orchestrates the flow between the repository and the domain model.
Duplicates are checked twice: a key lookup before the item is built, and
the repository check inside its write lock, which is the one that holds
when two creates race.
"""

from __future__ import annotations

import logging

from catalog.application.dto import ItemDTO, NewItemSpec
from catalog.application.mapping import Clock, to_item_dto, utc_now
from catalog.domain.exceptions import DuplicateItemError
from catalog.domain.model.item import Condition, Item, ItemKey
from catalog.domain.model.text import normalize_title
from catalog.domain.model.value_objects import Picture, Price
from catalog.domain.repository.item_repository import ItemRepository

logger = logging.getLogger(__name__)


class CreateItemHandler:

    def __init__(self, item_repo: ItemRepository, clock: Clock = utc_now) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(self, spec: NewItemSpec) -> ItemDTO:
        """List a new item.

        Steps:
        1. Reject a seller / title pair that is already taken.
        2. Parse boundary tokens (price, condition) into domain values.
        3. Let ``Item.create`` validate every creation rule.
        4. Persist and return a DTO.
        """
        key = ItemKey(spec.seller_id, normalize_title(spec.title))
        if self._item_repo.get_by_key(key) is not None:
            raise DuplicateItemError(
                f"Seller '{spec.seller_id}' already has an item titled '{spec.title}'"
            )

        item = Item.create(
            title=spec.title,
            description=spec.description,
            base_price=Price.of(spec.price.currency, spec.price.amount),
            seller_id=spec.seller_id,
            stock=spec.stock,
            condition=Condition.parse(spec.condition),
            free_shipping=spec.free_shipping,
            categories=spec.categories,
            attributes=spec.attributes,
            pictures=[Picture(url=p.url, main=p.main, alt=p.alt) for p in spec.pictures],
        )
        item.validate()
        self._item_repo.save(item)

        logger.info("Created item id='%s' for seller '%s'", item.id, item.seller_id)
        return to_item_dto(item, self._clock())
