"""Unit tests for commitment tiers and promo code validation.

Run with: pytest tests/test_discounts.py -v
"""

import dataclasses
from datetime import date
from decimal import Decimal

from fakes import commitment, promo
from membership.domain import DiscountType, MemberStatus
from membership.domain.discounts import find_commitment_discount, validate_promo_code
from membership.domain.errors import ErrorCode
from membership.domain.models import PromoCodeAccepted, PromoCodeRejected

TODAY = date(2026, 6, 10)


class TestFindCommitmentDiscount:
    """Tests for find_commitment_discount."""

    def test_picks_highest_qualifying_tier(self):
        tiers = [commitment(3, 5), commitment(6, 10), commitment(12, 15)]
        result = find_commitment_discount(tiers, 24)
        assert result.percentage == 15
        assert result.discount is tiers[2]

    def test_only_tiers_within_commitment_qualify(self):
        tiers = [commitment(3, 5), commitment(6, 10), commitment(12, 15)]
        assert find_commitment_discount(tiers, 6).percentage == 10

    def test_below_every_minimum_gives_no_discount(self):
        result = find_commitment_discount([commitment(3, 5)], 1)
        assert result.discount is None
        assert result.percentage == 0

    def test_empty_list(self):
        assert find_commitment_discount([], 12).percentage == 0

    def test_highest_percentage_wins_over_longest_tier(self):
        tiers = [commitment(3, 20), commitment(12, 15)]
        assert find_commitment_discount(tiers, 12).percentage == 20

    def test_ignores_inactive_and_promo_discounts(self):
        discounts = [
            commitment(3, 25, active=False),
            promo("BIG", discount_value=Decimal(50)),
            commitment(1, 5),
        ]
        assert find_commitment_discount(discounts, 12).percentage == 5

    def test_missing_minimum_counts_as_zero(self):
        tier = dataclasses.replace(commitment(0, 3), min_commitment_months=None)
        assert find_commitment_discount([tier], 1).percentage == 3

    def test_ties_keep_first_record(self):
        tiers = [commitment(3, 10), commitment(6, 10)]
        assert find_commitment_discount(tiers, 12).discount is tiers[0]


class TestValidatePromoCode:
    """Tests for validate_promo_code."""

    def test_valid_code_case_insensitive(self):
        code = promo("WELCOME20")
        result = validate_promo_code("welcome20", [code], MemberStatus.LEAD, TODAY)
        assert isinstance(result, PromoCodeAccepted)
        assert result.valid
        assert result.discount is code

    def test_unknown_code(self):
        result = validate_promo_code(
            "NOPE", [promo("WELCOME20")], MemberStatus.LEAD, TODAY
        )
        assert isinstance(result, PromoCodeRejected)
        assert not result.valid
        assert result.code is ErrorCode.PROMO_CODE_INVALID
        assert "invalid" in result.error.lower()

    def test_inactive_code_is_not_found(self):
        result = validate_promo_code(
            "OLD", [promo("OLD", active=False)], MemberStatus.LEAD, TODAY
        )
        assert result.code is ErrorCode.PROMO_CODE_INVALID

    def test_commitment_discount_code_is_not_a_promo(self):
        result = validate_promo_code(
            "COMMIT12", [commitment(12, 15)], MemberStatus.LEAD, TODAY
        )
        assert result.code is ErrorCode.PROMO_CODE_INVALID

    def test_not_yet_valid(self):
        code = promo(valid_from=date(2026, 7, 1))
        result = validate_promo_code("WELCOME20", [code], MemberStatus.LEAD, TODAY)
        assert result.code is ErrorCode.PROMO_CODE_NOT_YET_VALID
        assert "not yet valid" in result.error

    def test_expired(self):
        code = promo(valid_until=date(2026, 6, 9))
        result = validate_promo_code("WELCOME20", [code], MemberStatus.LEAD, TODAY)
        assert result.code is ErrorCode.PROMO_CODE_EXPIRED
        assert "expired" in result.error

    def test_window_bounds_are_inclusive(self):
        code = promo(valid_from=TODAY, valid_until=TODAY)
        assert validate_promo_code("WELCOME20", [code], MemberStatus.LEAD, TODAY).valid

    def test_exhausted(self):
        code = promo(max_uses=10, current_uses=10)
        result = validate_promo_code("WELCOME20", [code], MemberStatus.LEAD, TODAY)
        assert result.code is ErrorCode.PROMO_CODE_EXHAUSTED
        assert "exhausted" in result.error

    def test_one_use_left_is_valid(self):
        code = promo(max_uses=10, current_uses=9)
        assert validate_promo_code("WELCOME20", [code], MemberStatus.LEAD, TODAY).valid

    def test_new_members_only_rejects_existing_member(self):
        code = promo(new_members_only=True)
        result = validate_promo_code("WELCOME20", [code], MemberStatus.ATIVO, TODAY)
        assert result.code is ErrorCode.PROMO_CODE_NEW_MEMBERS_ONLY
        assert "new members only" in result.error

    def test_new_members_only_accepts_lead(self):
        code = promo(new_members_only=True)
        assert validate_promo_code("WELCOME20", [code], MemberStatus.LEAD, TODAY).valid

    def test_first_failure_wins(self):
        code = promo(
            valid_until=date(2026, 1, 1),
            max_uses=1,
            current_uses=1,
            new_members_only=True,
        )
        result = validate_promo_code("WELCOME20", [code], MemberStatus.ATIVO, TODAY)
        assert result.code is ErrorCode.PROMO_CODE_EXPIRED

    def test_does_not_touch_usage_counter(self):
        code = promo(
            discount_type=DiscountType.FIXED,
            discount_value=500,
            max_uses=5,
            current_uses=2,
        )
        validate_promo_code("WELCOME20", [code], MemberStatus.LEAD, TODAY)
        assert code.current_uses == 2
