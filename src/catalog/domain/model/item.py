"""Item aggregate — the listing a seller publishes.

The Item is an aggregate root that owns its price, discount, rating and
pictures (value objects) and its categories and attributes (collections
that are copied on the way in and exposed read-only on the way out).
All business invariants are enforced here.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

from catalog.domain.exceptions import InvariantViolationError, ValidationError
from catalog.domain.model.discount import Discount, DiscountType
from catalog.domain.model.text import normalize_title
from catalog.domain.model.value_objects import Picture, Price, Rating, to_cents

_PERCENT_FACTOR_PRECISION = Decimal("0.0001")


class Condition(Enum):
    NEW = "NEW"
    USED = "USED"
    REFURBISHED = "REFURBISHED"

    @classmethod
    def parse(cls, token: str | None) -> Condition:
        """Case-insensitive lookup that fails with the allowed values."""
        allowed = ", ".join(member.value for member in cls)
        if token is None or not token.strip():
            raise ValidationError(f"Condition is required (allowed: {allowed})")
        try:
            return cls(token.strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown condition {token!r} (allowed: {allowed})"
            ) from None


class ItemKey(NamedTuple):
    """Uniqueness key: one seller cannot list two items with the same title."""

    seller_id: str
    title_normalized: str


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class Item:
    """Aggregate root for catalog listings.

    Use the ``Item.create()`` factory for new items — it enforces all
    creation rules and assigns an id.  The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted items without
    re-validating.
    """

    def __init__(
        self,
        id: str,
        title: str,
        description: str,
        base_price: Price,
        seller_id: str,
        stock: int = 0,
        discount: Discount | None = None,
        pictures: Iterable[Picture] | None = None,
        rating: Rating | None = None,
        condition: Condition = Condition.NEW,
        free_shipping: bool = False,
        categories: Iterable[str] | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> None:
        self._id = id
        self._title = title
        self._title_normalized = normalize_title(title)
        self._description = description
        self._base_price = base_price
        self._seller_id = seller_id
        self._stock = stock
        self._discount = discount
        self._pictures: list[Picture] = list(pictures or [])
        self._rating = rating if rating is not None else Rating.empty()
        self._condition = condition if condition is not None else Condition.NEW
        self._free_shipping = free_shipping
        self._categories: list[str] = list(categories or [])
        self._attributes: dict[str, str] = dict(attributes or {})

    # --- Factory (used for NEW items only) ------------------------------------

    @staticmethod
    def create(
        title: str,
        description: str,
        base_price: Price,
        seller_id: str,
        stock: int = 0,
        *,
        id: str | None = None,
        discount: Discount | None = None,
        pictures: Iterable[Picture] | None = None,
        rating: Rating | None = None,
        condition: Condition = Condition.NEW,
        free_shipping: bool = False,
        categories: Iterable[str] | None = None,
        attributes: Mapping[str, str] | None = None,
    ) -> Item:
        """Create a new item, enforcing all invariants."""
        if id is None:
            id = str(uuid.uuid4())
        if _is_blank(id):
            raise ValidationError("Item id is required")
        if _is_blank(title):
            raise ValidationError("Title is required")
        if _is_blank(description):
            raise ValidationError("Description is required")
        if base_price is None:
            raise ValidationError("Base price is required")
        if _is_blank(seller_id):
            raise ValidationError("Seller id is required")
        if stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {stock}")

        item = Item(
            id=id,
            title=title,
            description=description,
            base_price=base_price,
            seller_id=seller_id,
            stock=stock,
            discount=discount,
            rating=rating,
            condition=condition,
            free_shipping=free_shipping,
        )
        # Route collections through the mutators so the same rules apply.
        for picture in pictures or []:
            item.add_picture(picture)
        item.replace_categories(categories)
        for key, value in (attributes or {}).items():
            item.put_attribute(key, value)
        return item

    # --- Read access ----------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def title_normalized(self) -> str:
        return self._title_normalized

    @property
    def description(self) -> str:
        return self._description

    @property
    def base_price(self) -> Price:
        return self._base_price

    @property
    def seller_id(self) -> str:
        return self._seller_id

    @property
    def stock(self) -> int:
        return self._stock

    @property
    def discount(self) -> Discount | None:
        """The stored discount, active or not. Never expose it to callers."""
        return self._discount

    @property
    def pictures(self) -> tuple[Picture, ...]:
        return tuple(self._pictures)

    @property
    def rating(self) -> Rating:
        return self._rating

    @property
    def condition(self) -> Condition:
        return self._condition

    @property
    def free_shipping(self) -> bool:
        return self._free_shipping

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._categories)

    @property
    def attributes(self) -> Mapping[str, str]:
        return MappingProxyType(self._attributes)

    @property
    def key(self) -> ItemKey:
        return ItemKey(self._seller_id, self._title_normalized)

    # --- Pricing --------------------------------------------------------------

    def get_current_price(self, now: datetime | None = None) -> Price:
        """Base price with the active discount (if any) applied.

        Percent factors are rounded to four decimals before multiplying;
        the result is clamped at zero and rounded half-up to cents.
        """
        discount = self.get_active_discount(now)
        if discount is None:
            return self._base_price

        base = self._base_price.amount
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, base.adjusted() + 10)
            if discount.type is DiscountType.PERCENT:
                factor = (Decimal(discount.value) / Decimal(100)).quantize(
                    _PERCENT_FACTOR_PRECISION, rounding=ROUND_HALF_UP
                )
                current = base - base * factor
            else:
                current = base - Decimal(discount.value)

            if current < Decimal("0"):
                current = Decimal("0")
            return self._base_price.with_amount(to_cents(current))

    def has_active_discount(self, now: datetime | None = None) -> bool:
        return self._discount is not None and self._discount.is_active(now)

    def get_active_discount(self, now: datetime | None = None) -> Discount | None:
        """The discount only while it is active; ``None`` otherwise."""
        if self.has_active_discount(now):
            return self._discount
        return None

    # --- Core fields ----------------------------------------------------------

    def change_title(self, title: str) -> None:
        if _is_blank(title):
            raise ValidationError("Title is required")
        self._title = title
        self._title_normalized = normalize_title(title)

    def change_description(self, description: str) -> None:
        if _is_blank(description):
            raise ValidationError("Description is required")
        self._description = description

    def change_base_price(self, price: Price) -> None:
        if price is None:
            raise ValidationError("Base price is required")
        self._base_price = price

    def set_stock(self, stock: int) -> None:
        if stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {stock}")
        self._stock = stock

    def increment_stock(self, delta: int) -> None:
        """Relative stock change; ``delta`` may be negative."""
        updated = self._stock + delta
        if updated < 0:
            raise InvariantViolationError(
                f"Cannot change stock by {delta} — only {self._stock} in stock"
            )
        self._stock = updated

    def set_free_shipping(self, free_shipping: bool) -> None:
        self._free_shipping = bool(free_shipping)

    # --- Discount & rating ----------------------------------------------------

    def apply_discount(self, discount: Discount) -> None:
        self._discount = discount

    def clear_discount(self) -> None:
        self._discount = None

    def update_rating(self, stars: int) -> None:
        self._rating = self._rating.add_vote(stars)

    # --- Pictures -------------------------------------------------------------

    def add_picture(self, picture: Picture) -> None:
        """Append a picture; a new main picture demotes every other one."""
        if picture is None:
            raise ValidationError("Picture is required")
        if picture.main:
            self._pictures = [p.as_main(False) for p in self._pictures]
        self._pictures.append(picture)

    def remove_picture_by_url(self, url: str) -> bool:
        if url is None:
            raise ValidationError("Picture url is required")
        remaining = [p for p in self._pictures if p.url != url]
        removed = len(remaining) != len(self._pictures)
        self._pictures = remaining
        return removed

    def set_main_picture(self, url: str) -> bool:
        if url is None:
            raise ValidationError("Picture url is required")
        self._pictures = [p.as_main(p.url == url) for p in self._pictures]
        return any(p.main for p in self._pictures)

    # --- Categories -----------------------------------------------------------

    def add_category(self, category: str) -> None:
        if _is_blank(category):
            raise ValidationError("Category cannot be blank")
        self._categories.append(category)

    def remove_category(self, category: str) -> bool:
        """Remove the first occurrence; duplicates are allowed."""
        try:
            self._categories.remove(category)
        except ValueError:
            return False
        return True

    def replace_categories(self, categories: Iterable[str] | None) -> None:
        """Replace all categories, or clear them when given ``None``.

        Every entry is checked before anything changes, so a blank entry
        leaves the current categories untouched.
        """
        candidates = list(categories or [])
        for category in candidates:
            if _is_blank(category):
                raise ValidationError("Category cannot be blank")
        self._categories = candidates

    # --- Attributes -----------------------------------------------------------

    def put_attribute(self, key: str, value: str | None) -> None:
        """Store an attribute; a blank or missing value removes the key."""
        if _is_blank(key):
            raise ValidationError("Attribute key is required")
        if _is_blank(value):
            self._attributes.pop(key, None)
            return
        self._attributes[key] = value

    def remove_attribute(self, key: str | None) -> None:
        if key is not None:
            self._attributes.pop(key, None)

    def clear_attributes(self) -> None:
        self._attributes.clear()

    # --- Aggregate check ------------------------------------------------------

    def validate(self) -> None:
        """Final check before the item is handed to a repository."""
        for name in ("id", "title", "description"):
            if getattr(self, f"_{name}") is None:
                raise InvariantViolationError(f"Item {name} is missing")
        if self._base_price is None:
            raise InvariantViolationError("Item base price is missing")
        if self._stock < 0:
            raise InvariantViolationError("Item stock cannot be negative")

    def __repr__(self) -> str:
        return f"Item(id={self._id!r}, title={self._title!r}, seller_id={self._seller_id!r})"
