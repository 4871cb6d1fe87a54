"""Domain -> DTO mapping shared by every item use case."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from catalog.application.dto import (
    DiscountDTO,
    ItemDTO,
    PictureDTO,
    PriceDTO,
    RatingDTO,
)
from catalog.domain.model.item import Item
from catalog.domain.model.value_objects import Price

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_item_dto(item: Item, now: datetime) -> ItemDTO:
    """Render an item as seen at ``now``."""
    active = item.get_active_discount(now)
    discount = None
    if active is not None:
        discount = DiscountDTO(
            type=active.type.value,
            value=active.value,
            label=active.label,
            starts_at=active.starts_at,
            ends_at=active.ends_at,
        )

    return ItemDTO(
        id=item.id,
        title=item.title,
        description=item.description,
        base_price=_price(item.base_price),
        current_price=_price(item.get_current_price(now)),
        has_active_discount=active is not None,
        discount=discount,
        stock=item.stock,
        seller_id=item.seller_id,
        pictures=[PictureDTO(url=p.url, main=p.main, alt=p.alt) for p in item.pictures],
        rating=RatingDTO(average=item.rating.average, count=item.rating.count),
        condition=item.condition.value,
        free_shipping=item.free_shipping,
        categories=list(item.categories),
        attributes=dict(item.attributes),
    )


def _price(price: Price) -> PriceDTO:
    return PriceDTO(currency=price.currency, amount=str(price.amount))
