"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

import pytest

from membership.domain import FreezePeriod, MemberId, PricingConfig
from membership.domain.errors import ErrorCode, MemberNotFoundError
from membership.domain.value_objects import (
    apply_percentage,
    clamp_percentage,
    format_currency,
    format_discount,
)


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_formats_whole_euros(self):
        assert format_currency(6000) == "€60.00"

    def test_zero_renders_with_two_decimals(self):
        assert format_currency(0) == "€0.00"

    def test_thousands_separator(self):
        assert format_currency(123456) == "€1,234.56"

    def test_single_cent(self):
        assert format_currency(5) == "€0.05"

    def test_other_currency_symbol(self):
        assert format_currency(1999, "usd") == "$19.99"

    def test_unknown_currency_uses_code(self):
        assert format_currency(1000, "CHF") == "CHF 10.00"

    def test_negative_amount(self):
        assert format_currency(-500) == "-€5.00"


class TestPercentages:
    """Tests for percentage helpers."""

    def test_apply_percentage_exact(self):
        assert apply_percentage(6000, 10) == 5400

    def test_apply_percentage_rounds_half_up(self):
        # 2290 * 0.85 = 1946.5
        assert apply_percentage(2290, 15) == 1947

    def test_apply_percentage_rounds_down_below_half(self):
        # 3333 * 0.9 = 2999.7
        assert apply_percentage(3333, Decimal("10")) == 3000

    def test_apply_percentage_accepts_fractional_float(self):
        assert apply_percentage(10000, 7.5) == 9250

    def test_clamp_percentage_bounds(self):
        assert clamp_percentage(-5) == 0
        assert clamp_percentage(150) == 100
        assert clamp_percentage(None) == 0

    def test_format_discount(self):
        assert format_discount(10) == "-10%"
        assert format_discount(Decimal("12.50")) == "-12.5%"


class TestPricingConfig:
    """Tests for PricingConfig value object."""

    def test_defaults(self):
        config = PricingConfig()
        assert config.base_price_cents == 6000
        assert config.extra_modality_price_cents == 3000
        assert config.enrollment_fee_cents == 1500

    def test_accepts_zero_prices(self):
        PricingConfig(
            base_price_cents=0, extra_modality_price_cents=0, enrollment_fee_cents=0
        )

    def test_rejects_negative_price(self):
        with pytest.raises(ValueError):
            PricingConfig(base_price_cents=-1)


class TestFreezePeriod:
    """Tests for FreezePeriod value object."""

    def test_days(self):
        period = FreezePeriod(
            frozen_at=date(2026, 1, 1), frozen_until=date(2026, 1, 25)
        )
        assert period.days == 24

    def test_same_day_is_zero_days(self):
        assert FreezePeriod(date(2026, 5, 1), date(2026, 5, 1)).days == 0

    def test_rejects_end_before_start(self):
        with pytest.raises(ValueError):
            FreezePeriod(frozen_at=date(2026, 2, 1), frozen_until=date(2026, 1, 31))


class TestMemberId:
    """Tests for MemberId value object."""

    def test_from_string_valid_uuid(self):
        value = "6f1d2c4e-8a1b-4d2e-9f3a-1c2b3d4e5f60"
        assert MemberId.from_string(value).value == UUID(value)

    def test_from_string_invalid_uuid(self):
        with pytest.raises(ValueError):
            MemberId.from_string("not-a-uuid")


class TestDomainError:
    def test_str_includes_code(self):
        error = MemberNotFoundError("abc")
        assert error.code is ErrorCode.MEMBER_NOT_FOUND
        assert str(error) == "MEMBER_NOT_FOUND: Member not found"
        assert error.member_id == "abc"
