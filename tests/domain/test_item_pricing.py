"""Unit tests for current-price computation on the Item aggregate."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from catalog.domain.model.discount import Discount, DiscountType
from catalog.domain.model.item import Item
from catalog.domain.model.value_objects import Price

NOW = datetime(2025, 6, 15, 10, 30, tzinfo=timezone.utc)


def _item(amount: str = "10000.00", currency: str = "ARS") -> Item:
    return Item.create(
        title="Termo Stanley",
        description="1 litro",
        base_price=Price.of(currency, amount),
        seller_id="seller-1",
        stock=3,
    )


class TestPercentDiscount:

    @pytest.mark.parametrize("value,expected", [
        (25, "7500.00"),
        (100, "0.00"),
        (0, "10000.00"),
        (33, "6700.00"),
    ])
    def test_percent_off(self, value, expected):
        item = _item()
        item.apply_discount(Discount(DiscountType.PERCENT, value))
        assert item.get_current_price(NOW) == Price("ARS", Decimal(expected))

    def test_result_rounded_half_up(self):
        # 19.99 * 0.85 = 16.9915 -> 16.99 ; 0.05 * 0.5 = 0.025 -> 0.03
        item = _item("19.99")
        item.apply_discount(Discount(DiscountType.PERCENT, 15))
        assert item.get_current_price(NOW).amount == Decimal("16.99")

        small = _item("0.05")
        small.apply_discount(Discount(DiscountType.PERCENT, 50))
        assert small.get_current_price(NOW).amount == Decimal("0.03")

    def test_keeps_currency(self):
        item = _item(currency="USD")
        item.apply_discount(Discount(DiscountType.PERCENT, 10))
        assert item.get_current_price(NOW).currency == "USD"

    def test_huge_base_price_keeps_every_digit(self):
        item = _item("1" + "0" * 30)
        item.apply_discount(Discount(DiscountType.PERCENT, 25))
        assert item.get_current_price(NOW).amount == Decimal("75" + "0" * 29 + ".00")


class TestAmountDiscount:

    def test_amount_off(self):
        item = _item("5000.00")
        item.apply_discount(Discount(DiscountType.AMOUNT, 1250))
        assert item.get_current_price(NOW) == Price("ARS", Decimal("3750.00"))

    def test_clamped_at_zero(self):
        item = _item("5000.00")
        item.apply_discount(Discount(DiscountType.AMOUNT, 6000))
        assert item.get_current_price(NOW).amount == Decimal("0.00")


class TestDiscountActivity:

    def test_no_discount_returns_base_price(self):
        item = _item()
        assert item.get_current_price(NOW) == item.base_price
        assert item.has_active_discount(NOW) is False
        assert item.get_active_discount(NOW) is None

    def test_future_discount_ignored(self):
        item = _item()
        item.apply_discount(Discount(DiscountType.PERCENT, 50, starts_at=NOW + timedelta(hours=1)))
        assert item.get_current_price(NOW) == item.base_price
        assert item.has_active_discount(NOW) is False
        assert item.get_active_discount(NOW) is None
        assert item.discount is not None

    def test_expired_discount_ignored(self):
        item = _item()
        item.apply_discount(Discount(DiscountType.PERCENT, 50, ends_at=NOW - timedelta(seconds=1)))
        assert item.get_current_price(NOW).amount == Decimal("10000.00")

    def test_active_discount_exposed(self):
        item = _item()
        discount = Discount(
            DiscountType.PERCENT, 25, label="Hot Sale",
            starts_at=NOW - timedelta(days=1), ends_at=NOW + timedelta(days=1),
        )
        item.apply_discount(discount)
        assert item.has_active_discount(NOW) is True
        assert item.get_active_discount(NOW) == discount


class TestDiscountLifecycle:

    def test_apply_then_clear(self):
        item = _item()
        item.apply_discount(Discount(DiscountType.PERCENT, 25, starts_at=NOW, ends_at=NOW + timedelta(days=1)))
        assert item.get_current_price(NOW) == Price("ARS", Decimal("7500.00"))

        item.clear_discount()
        assert item.get_current_price(NOW) == Price("ARS", Decimal("10000.00"))

    def test_apply_replaces_previous_discount(self):
        item = _item()
        item.apply_discount(Discount(DiscountType.PERCENT, 25))
        item.apply_discount(Discount(DiscountType.AMOUNT, 100))
        assert item.get_current_price(NOW).amount == Decimal("9900.00")
