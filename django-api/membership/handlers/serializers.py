"""Serializers for request parsing and for rendering domain results."""

from rest_framework import serializers

from membership.domain import MemberStatus
from membership.domain.value_objects import format_currency


class QuoteRequestSerializer(serializers.Serializer):
    modality_ids = serializers.ListField(
        child=serializers.UUIDField(), allow_empty=True
    )
    commitment_months = serializers.IntegerField(min_value=1, default=1)
    promo_code = serializers.CharField(required=False, allow_blank=True, default="")
    member_id = serializers.CharField(required=False)
    member_status = serializers.ChoiceField(
        choices=[s.value for s in MemberStatus], default=MemberStatus.LEAD.value
    )
    plan_id = serializers.CharField(required=False)


class EnrollRequestSerializer(serializers.Serializer):
    plan_id = serializers.CharField()
    modality_ids = serializers.ListField(
        child=serializers.UUIDField(), allow_empty=True
    )
    commitment_months = serializers.IntegerField(min_value=1, required=False)
    promo_code = serializers.CharField(required=False, allow_blank=True, default="")


class FreezeRequestSerializer(serializers.Serializer):
    frozen_until = serializers.DateField()
    staff_override = serializers.BooleanField(default=False)


class PricingBreakdownSerializer(serializers.Serializer):
    """Serializer for the PricingBreakdown domain model."""

    base_price_cents = serializers.IntegerField()
    extra_modalities_count = serializers.IntegerField()
    extra_modalities_cents = serializers.IntegerField()
    subtotal_cents = serializers.IntegerField()
    commitment_months = serializers.IntegerField()
    commitment_discount_pct = serializers.DecimalField(max_digits=5, decimal_places=2)
    commitment_discount_cents = serializers.IntegerField()
    promo_discount_pct = serializers.DecimalField(max_digits=5, decimal_places=2)
    promo_discount_cents = serializers.IntegerField()
    monthly_price_cents = serializers.IntegerField()
    enrollment_fee_cents = serializers.IntegerField()
    total_first_payment_cents = serializers.IntegerField()
    monthly_price_display = serializers.SerializerMethodField()
    total_first_payment_display = serializers.SerializerMethodField()

    def get_monthly_price_display(self, obj) -> str:
        return format_currency(obj.monthly_price_cents, self._currency())

    def get_total_first_payment_display(self, obj) -> str:
        return format_currency(obj.total_first_payment_cents, self._currency())

    def _currency(self) -> str:
        return self.context.get("currency", "EUR")


class PricingQuoteSerializer(serializers.Serializer):
    """Serializer for the PricingQuote domain model."""

    breakdown = serializers.SerializerMethodField()
    commitment_discount_id = serializers.SerializerMethodField()
    promo_discount_id = serializers.SerializerMethodField()

    def get_breakdown(self, obj) -> dict:
        return PricingBreakdownSerializer(obj.breakdown, context=self.context).data

    def get_commitment_discount_id(self, obj) -> str | None:
        return str(obj.commitment_discount_id) if obj.commitment_discount_id else None

    def get_promo_discount_id(self, obj) -> str | None:
        return str(obj.promo_discount_id) if obj.promo_discount_id else None


class MemberSerializer(serializers.Serializer):
    """Serializer for the Member domain model."""

    id = serializers.SerializerMethodField()
    name = serializers.CharField()
    status = serializers.SerializerMethodField()
    access_type = serializers.SerializerMethodField()
    access_expires_at = serializers.DateField()
    credits_remaining = serializers.IntegerField(allow_null=True)
    frozen_at = serializers.DateField()
    frozen_until = serializers.DateField()

    def get_id(self, obj) -> str:
        return str(obj.id)

    def get_status(self, obj) -> str:
        return obj.status.value

    def get_access_type(self, obj) -> str | None:
        return obj.access_type.value if obj.access_type else None


class CheckinOutcomeSerializer(serializers.Serializer):
    allowed = serializers.SerializerMethodField()
    result = serializers.SerializerMethodField()
    message = serializers.SerializerMethodField()
    member = MemberSerializer()

    def get_allowed(self, obj) -> bool:
        return obj.decision.allowed

    def get_result(self, obj) -> str:
        return obj.decision.result.value

    def get_message(self, obj) -> str:
        return obj.decision.message
