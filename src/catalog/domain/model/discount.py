"""Discount value object.

A discount is either a percentage or a fixed amount off the base price,
optionally bounded by a time window. An item may carry a discount that is
not active yet (or no longer active); only active ones affect the price.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from catalog.domain.exceptions import ValidationError


class DiscountType(Enum):
    PERCENT = "PERCENT"
    AMOUNT = "AMOUNT"

    @classmethod
    def parse(cls, token: str | None) -> DiscountType:
        """Case-insensitive lookup that fails with the allowed values."""
        allowed = ", ".join(member.value for member in cls)
        if token is None or not token.strip():
            raise ValidationError(f"Discount type is required (allowed: {allowed})")
        try:
            return cls(token.strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown discount type {token!r} (allowed: {allowed})"
            ) from None


@dataclass(frozen=True)
class Discount:
    """Immutable discount definition.

    Invariants:
    - PERCENT values are within 0..100, AMOUNT values are >= 0
    - window bounds are timezone-aware, and ``ends_at >= starts_at``
    """

    type: DiscountType
    value: int
    label: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, DiscountType):
            raise ValidationError("Discount type is required")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Discount value must be an integer, got {type(self.value).__name__}"
            )
        if self.type is DiscountType.PERCENT and not 0 <= self.value <= 100:
            raise ValidationError(f"Percent discount must be within 0..100, got {self.value}")
        if self.type is DiscountType.AMOUNT and self.value < 0:
            raise ValidationError(f"Amount discount cannot be negative, got {self.value}")
        for name in ("starts_at", "ends_at"):
            moment = getattr(self, name)
            if moment is not None and moment.tzinfo is None:
                raise ValidationError(f"Discount {name} must be timezone-aware")
        if (
            self.starts_at is not None
            and self.ends_at is not None
            and self.ends_at < self.starts_at
        ):
            raise ValidationError("Discount ends_at cannot be before starts_at")

    def is_active(self, now: datetime | None = None) -> bool:
        """True when ``now`` falls inside the window; both bounds inclusive.

        A naive ``now`` is taken as UTC.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        if self.starts_at is not None and now < self.starts_at:
            return False
        if self.ends_at is not None and now > self.ends_at:
            return False
        return True
