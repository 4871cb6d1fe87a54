"""Unit tests for the Discount value object."""

from datetime import datetime, timedelta, timezone

import pytest

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.discount import Discount, DiscountType

T = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestDiscountType:

    @pytest.mark.parametrize("token", ["percent", "PERCENT", " Percent "])
    def test_parse_is_case_insensitive(self, token):
        assert DiscountType.parse(token) is DiscountType.PERCENT

    def test_parse_unknown_names_allowed_values(self):
        with pytest.raises(ValidationError, match="allowed: PERCENT, AMOUNT"):
            DiscountType.parse("bogo")

    def test_parse_blank_rejected(self):
        with pytest.raises(ValidationError, match="required"):
            DiscountType.parse("  ")


class TestDiscountValidation:

    @pytest.mark.parametrize("value", [0, 25, 100])
    def test_percent_within_range(self, value):
        assert Discount(DiscountType.PERCENT, value).value == value

    @pytest.mark.parametrize("value", [-1, 101])
    def test_percent_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError, match="0..100"):
            Discount(DiscountType.PERCENT, value)

    def test_amount_may_exceed_hundred(self):
        assert Discount(DiscountType.AMOUNT, 6000).value == 6000

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Discount(DiscountType.AMOUNT, -5)

    def test_non_integer_value_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Discount(DiscountType.AMOUNT, 2.5)  # type: ignore[arg-type]

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="before starts_at"):
            Discount(DiscountType.PERCENT, 10, starts_at=T, ends_at=T - timedelta(seconds=1))

    def test_equal_bounds_allowed(self):
        d = Discount(DiscountType.PERCENT, 10, starts_at=T, ends_at=T)
        assert d.is_active(T)

    def test_naive_timestamps_rejected(self):
        with pytest.raises(ValidationError, match="timezone-aware"):
            Discount(DiscountType.PERCENT, 10, starts_at=datetime(2025, 1, 1))


class TestDiscountWindow:

    def test_bounds_are_inclusive(self):
        d = Discount(DiscountType.PERCENT, 10, starts_at=T, ends_at=T + timedelta(days=1))
        assert d.is_active(T)
        assert d.is_active(T + timedelta(days=1))
        assert not d.is_active(T - timedelta(seconds=1))
        assert not d.is_active(T + timedelta(days=1, seconds=1))

    def test_open_ended_windows(self):
        assert Discount(DiscountType.AMOUNT, 1).is_active(T)
        assert Discount(DiscountType.AMOUNT, 1, starts_at=T).is_active(T + timedelta(days=365))
        assert Discount(DiscountType.AMOUNT, 1, ends_at=T).is_active(T - timedelta(days=365))

    def test_naive_now_is_taken_as_utc(self):
        d = Discount(DiscountType.PERCENT, 10, starts_at=T, ends_at=T + timedelta(hours=1))
        assert d.is_active(T.replace(tzinfo=None)) is True
        assert d.is_active((T - timedelta(minutes=1)).replace(tzinfo=None)) is False

    def test_missing_now_uses_current_time(self):
        past = datetime.now(timezone.utc) - timedelta(days=2)
        expired = Discount(DiscountType.PERCENT, 10, ends_at=past)
        assert expired.is_active() is False
        assert Discount(DiscountType.PERCENT, 10, starts_at=past).is_active(None) is True
