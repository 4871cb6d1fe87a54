"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from catalog.domain.exceptions import ValidationError

CENTS = Decimal("0.01")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def to_cents(amount: Decimal) -> Decimal:
    """Round half-up to two decimals, whatever the magnitude of ``amount``."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Price:
    """Currency-tagged amount, always held with exactly two decimals.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations. The amount is rounded half-up
    on construction, so ``Decimal("9999.9")`` is stored as ``9999.90``.
    """

    currency: str
    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.currency, str) or not _CURRENCY_PATTERN.match(self.currency):
            raise ValidationError(
                f"Currency must be a 3-letter ISO 4217 code (e.g. ARS, USD), "
                f"got {self.currency!r}"
            )
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Price amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Price amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(f"Price amount cannot be negative, got {self.amount}")
        object.__setattr__(self, "amount", to_cents(self.amount))

    def with_amount(self, new_amount: Decimal) -> Price:
        """Same currency, new amount, validated like any other Price."""
        return Price(self.currency, new_amount)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"

    @staticmethod
    def of(currency: str, amount: str | float | int | Decimal) -> Price:
        """Convenient factory that coerces to Decimal safely."""
        if amount is None:
            raise ValidationError("Price amount is required")
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid price amount: {amount!r}") from exc
        token = currency.strip().upper() if isinstance(currency, str) else currency
        return Price(token, value)


@dataclass(frozen=True)
class Rating:
    """Running average of 1-5 star votes.

    Only aggregate statistics are kept, no vote history. The average is a
    float, so it is exact only up to aggregation order.
    """

    average: float = 0.0
    count: int = 0

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValidationError("Rating count cannot be negative")
        if self.count == 0:
            if self.average != 0.0:
                raise ValidationError("Rating average must be 0.0 when there are no votes")
        elif not 1.0 <= self.average <= 5.0:
            raise ValidationError(
                f"Rating average must be between 1.0 and 5.0, got {self.average}"
            )

    @staticmethod
    def empty() -> Rating:
        return Rating(0.0, 0)

    def add_vote(self, stars: int) -> Rating:
        if isinstance(stars, bool) or not isinstance(stars, int) or not 1 <= stars <= 5:
            raise ValidationError(f"Stars must be an integer between 1 and 5, got {stars!r}")
        average = (self.average * self.count + stars) / (self.count + 1)
        return Rating(average, self.count + 1)


@dataclass(frozen=True)
class Picture:
    """A picture of an item.

    Whether a picture is the *main* one only matters in the context of the
    item's picture list, so the at-most-one-main rule lives on Item.
    """

    url: str
    main: bool = False
    alt: str | None = None

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValidationError("Picture url is required")

    def as_main(self, main: bool) -> Picture:
        return replace(self, main=main)
