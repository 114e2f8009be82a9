"""Integration tests for the membership HTTP API.

Run with: pytest tests/test_membership_api.py -v
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from membership import models

UNKNOWN_ID = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
def pricing_config():
    return models.PricingConfig.objects.create(
        base_price_cents=6000,
        extra_modality_price_cents=3000,
        enrollment_fee_cents=1500,
    )


@pytest.fixture
def modalities():
    return [
        models.Modality.objects.create(code="BJJ", name="Jiu-Jitsu"),
        models.Modality.objects.create(code="MUAY", name="Muay Thai"),
        models.Modality.objects.create(code="BOX", name="Boxe"),
    ]


@pytest.fixture
def plan():
    return models.Plan.objects.create(
        name="Mensal", access_type=models.AccessType.SUBSCRIPTION, commitment_months=1
    )


@pytest.mark.django_db
class TestPricingQuote:
    """Tests for POST /api/pricing/quote"""

    def test_quote_three_modalities(
        self, api_client: APIClient, pricing_config, modalities
    ):
        response = api_client.post(
            "/api/pricing/quote",
            {"modality_ids": [str(m.id) for m in modalities], "member_status": "ATIVO"},
            format="json",
        )
        assert response.status_code == 200
        breakdown = response.json()["breakdown"]
        assert breakdown["monthly_price_cents"] == 12000
        assert breakdown["extra_modalities_count"] == 2
        assert breakdown["extra_modalities_cents"] == 6000
        assert breakdown["monthly_price_display"] == "€120.00"

    def test_quote_with_commitment_and_promo(
        self, api_client: APIClient, pricing_config, modalities
    ):
        tier = models.Discount.objects.create(
            code="SEMESTRAL",
            name="Semestral",
            category=models.DiscountCategory.COMMITMENT,
            discount_value=Decimal("10"),
            min_commitment_months=6,
        )
        models.Discount.objects.create(
            code="AMIGO20",
            name="Amigo",
            category=models.DiscountCategory.PROMO,
            discount_value=Decimal("20"),
        )
        response = api_client.post(
            "/api/pricing/quote",
            {
                "modality_ids": [str(modalities[0].id)],
                "commitment_months": 6,
                "promo_code": "amigo20",
            },
            format="json",
        )
        assert response.status_code == 200
        body = response.json()
        assert body["breakdown"]["monthly_price_cents"] == 4320
        assert body["breakdown"]["enrollment_fee_cents"] == 1500
        assert body["commitment_discount_id"] == str(tier.id)

    def test_quote_rejected_promo(
        self, api_client: APIClient, pricing_config, modalities
    ):
        response = api_client.post(
            "/api/pricing/quote",
            {"modality_ids": [str(modalities[0].id)], "promo_code": "NOPE"},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "PROMO_CODE_INVALID"

    def test_quote_without_config(self, api_client: APIClient, modalities):
        response = api_client.post(
            "/api/pricing/quote",
            {"modality_ids": [str(modalities[0].id)]},
            format="json",
        )
        assert response.status_code == 503
        assert response.json()["code"] == "PRICING_CONFIG_MISSING"

    def test_quote_malformed_modality_id(self, api_client: APIClient, pricing_config):
        response = api_client.post(
            "/api/pricing/quote", {"modality_ids": ["x"]}, format="json"
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestEnrollment:
    """Tests for POST /api/members/{id}/enroll"""

    def test_enroll_lead(self, api_client: APIClient, pricing_config, modalities, plan):
        member = models.Member.objects.create(name="Rui Costa")
        response = api_client.post(
            f"/api/members/{member.id}/enroll",
            {"plan_id": str(plan.id), "modality_ids": [str(modalities[0].id)]},
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["breakdown"]["total_first_payment_cents"] == 7500

        member.refresh_from_db()
        assert member.status == models.MemberStatus.ATIVO
        assert member.access_type == models.AccessType.SUBSCRIPTION
        assert member.access_expires_at is not None
        subscription = member.subscriptions.get()
        assert subscription.final_price_cents == 6000
        assert subscription.enrollment_fee_cents == 1500
        assert list(subscription.modalities.all()) == [modalities[0]]

    def test_enroll_exhausted_promo(
        self, api_client: APIClient, pricing_config, modalities, plan
    ):
        models.Discount.objects.create(
            code="ULTIMO",
            name="Ultimo",
            category=models.DiscountCategory.PROMO,
            discount_value=Decimal("10"),
            max_uses=1,
            current_uses=1,
        )
        member = models.Member.objects.create(name="Rui Costa")
        response = api_client.post(
            f"/api/members/{member.id}/enroll",
            {
                "plan_id": str(plan.id),
                "modality_ids": [str(modalities[0].id)],
                "promo_code": "ULTIMO",
            },
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "PROMO_CODE_EXHAUSTED"
        assert not member.subscriptions.exists()

    def test_renewal_keeps_remaining_days_and_credits(
        self, api_client: APIClient, pricing_config, modalities
    ):
        today = timezone.localdate()
        pack = models.Plan.objects.create(
            name="Pack 10",
            access_type=models.AccessType.CREDITS,
            credits=10,
            duration_days=30,
        )
        member = models.Member.objects.create(
            name="Joana",
            status=models.MemberStatus.ATIVO,
            access_type=models.AccessType.CREDITS,
            access_expires_at=today + timedelta(days=20),
            credits_remaining=5,
        )
        response = api_client.post(
            f"/api/members/{member.id}/enroll",
            {"plan_id": str(pack.id), "modality_ids": [str(modalities[0].id)]},
            format="json",
        )
        assert response.status_code == 201

        member.refresh_from_db()
        assert member.credits_remaining == 15
        assert member.access_expires_at == today + timedelta(days=50)

    def test_enroll_blocked_member(
        self, api_client: APIClient, pricing_config, modalities, plan
    ):
        member = models.Member.objects.create(
            name="Rui Costa", status=models.MemberStatus.BLOQUEADO
        )
        response = api_client.post(
            f"/api/members/{member.id}/enroll",
            {"plan_id": str(plan.id), "modality_ids": [str(modalities[0].id)]},
            format="json",
        )
        assert response.status_code == 409
        assert response.json()["code"] == "MEMBER_BLOCKED"
        assert not member.subscriptions.exists()

    def test_enroll_unknown_member(
        self, api_client: APIClient, pricing_config, modalities, plan
    ):
        response = api_client.post(
            f"/api/members/{UNKNOWN_ID}/enroll",
            {"plan_id": str(plan.id), "modality_ids": [str(modalities[0].id)]},
            format="json",
        )
        assert response.status_code == 404


@pytest.mark.django_db
class TestCheckin:
    """Tests for POST /api/members/{id}/checkin"""

    def test_credits_checkin(self, api_client: APIClient):
        member = models.Member.objects.create(
            name="Joana",
            status=models.MemberStatus.ATIVO,
            access_type=models.AccessType.CREDITS,
            credits_remaining=2,
        )
        response = api_client.post(f"/api/members/{member.id}/checkin")
        assert response.status_code == 200
        body = response.json()
        assert body["allowed"] is True
        assert body["result"] == "ALLOWED"
        assert body["member"]["credits_remaining"] == 1

        member.refresh_from_db()
        assert member.credits_remaining == 1
        assert member.checkins.get().result == models.CheckinResult.ALLOWED

    def test_no_credits(self, api_client: APIClient):
        member = models.Member.objects.create(
            name="Joana",
            status=models.MemberStatus.ATIVO,
            access_type=models.AccessType.CREDITS,
            credits_remaining=0,
        )
        response = api_client.post(f"/api/members/{member.id}/checkin")
        assert response.status_code == 200
        assert response.json()["allowed"] is False
        assert response.json()["result"] == "NO_CREDITS"
        assert member.checkins.get().result == models.CheckinResult.NO_CREDITS

    def test_expired_subscription(self, api_client: APIClient):
        member = models.Member.objects.create(
            name="Pedro",
            status=models.MemberStatus.ATIVO,
            access_type=models.AccessType.SUBSCRIPTION,
            access_expires_at=timezone.localdate() - timedelta(days=1),
        )
        response = api_client.post(f"/api/members/{member.id}/checkin")
        assert response.json()["result"] == "EXPIRED"

    def test_invalid_member_id(self, api_client: APIClient):
        response = api_client.post("/api/members/not-a-uuid/checkin")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_MEMBER_ID"

    def test_unknown_member(self, api_client: APIClient):
        response = api_client.post(f"/api/members/{UNKNOWN_ID}/checkin")
        assert response.status_code == 404


@pytest.mark.django_db
class TestFreeze:
    """Tests for GET/POST /api/members/{id}/freeze"""

    def test_remaining_days(self, api_client: APIClient):
        member = models.Member.objects.create(
            name="Ines", status=models.MemberStatus.ATIVO
        )
        response = api_client.get(f"/api/members/{member.id}/freeze")
        assert response.status_code == 200
        assert response.json() == {"remaining_days": 30}

    def test_freeze_member(self, api_client: APIClient):
        today = timezone.localdate()
        member = models.Member.objects.create(
            name="Ines",
            status=models.MemberStatus.ATIVO,
            access_type=models.AccessType.SUBSCRIPTION,
            access_expires_at=today + timedelta(days=20),
        )
        response = api_client.post(
            f"/api/members/{member.id}/freeze",
            {"frozen_until": (today + timedelta(days=7)).isoformat()},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["status"] == "PAUSADO"

        member.refresh_from_db()
        assert member.status == models.MemberStatus.PAUSADO
        assert member.access_expires_at == today + timedelta(days=27)
        assert member.freezes.count() == 1

    def test_freeze_over_budget(self, api_client: APIClient):
        today = timezone.localdate()
        member = models.Member.objects.create(
            name="Ines", status=models.MemberStatus.ATIVO
        )
        response = api_client.post(
            f"/api/members/{member.id}/freeze",
            {"frozen_until": (today + timedelta(days=31)).isoformat()},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "FREEZE_BUDGET_EXCEEDED"
        assert response.json()["remaining_days"] == 30
