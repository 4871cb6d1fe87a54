"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


# --- Inputs ------------------------------------------------------------------


@dataclass(frozen=True)
class PriceSpec:
    """Input: a price as the caller typed it (amount still unparsed)."""

    currency: str
    amount: str


@dataclass(frozen=True)
class PictureSpec:
    url: str
    main: bool = False
    alt: str | None = None


@dataclass(frozen=True)
class NewItemSpec:
    """Input: everything needed to list a new item."""

    title: str
    description: str
    price: PriceSpec
    stock: int
    seller_id: str
    condition: str
    free_shipping: bool = False
    categories: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
    pictures: list[PictureSpec] = field(default_factory=list)


@dataclass(frozen=True)
class ItemPatch:
    """Input: a partial update. ``None`` means "leave this field alone"."""

    title: str | None = None
    description: str | None = None
    price: PriceSpec | None = None
    stock: int | None = None
    free_shipping: bool | None = None
    categories: list[str] | None = None
    attributes: dict[str, str | None] | None = None


@dataclass(frozen=True)
class DiscountSpec:
    """Input: a discount; ``type`` is the raw token, e.g. "percent"."""

    type: str
    value: int
    label: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None


# --- Outputs -----------------------------------------------------------------


@dataclass(frozen=True)
class PriceDTO:
    currency: str
    amount: str  # always two decimals, e.g. "7500.00"

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


@dataclass(frozen=True)
class DiscountDTO:
    type: str
    value: int
    label: str | None
    starts_at: datetime | None
    ends_at: datetime | None


@dataclass(frozen=True)
class PictureDTO:
    url: str
    main: bool
    alt: str | None


@dataclass(frozen=True)
class RatingDTO:
    average: float
    count: int


@dataclass(frozen=True)
class ItemDTO:
    """Output: an item as shown to callers.

    ``discount`` is only set while the discount is active; scheduled or
    expired discounts are never exposed.
    """

    id: str
    title: str
    description: str
    base_price: PriceDTO
    current_price: PriceDTO
    has_active_discount: bool
    discount: DiscountDTO | None
    stock: int
    seller_id: str
    pictures: list[PictureDTO]
    rating: RatingDTO
    condition: str
    free_shipping: bool
    categories: list[str]
    attributes: dict[str, str]
