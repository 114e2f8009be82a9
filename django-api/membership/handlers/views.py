"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.conf import settings
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from membership.domain import MemberStatus
from membership.domain.errors import DomainError, ErrorCode, PromoCodeExhaustedError
from membership.handlers.serializers import (
    CheckinOutcomeSerializer,
    EnrollRequestSerializer,
    FreezeRequestSerializer,
    MemberSerializer,
    PricingQuoteSerializer,
    QuoteRequestSerializer,
)
from membership.services.checkin_service import CheckinService
from membership.services.freeze_service import FreezeService
from membership.services.pricing_service import PricingService
from membership.stores.django_store import DjangoMembershipStore

ERROR_STATUS = {
    ErrorCode.INVALID_MEMBER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PLAN_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MEMBER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.MEMBER_BLOCKED: status.HTTP_409_CONFLICT,
    ErrorCode.PLAN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PRICING_CONFIG_MISSING: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    remaining = getattr(error, "remaining_days", None)
    if remaining is not None:
        body["remaining_days"] = remaining
    if isinstance(error, PromoCodeExhaustedError):
        # lost the race for the last use between quote and redemption
        return Response(body, status=status.HTTP_409_CONFLICT)
    return Response(
        body, status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST)
    )


def serializer_context() -> dict:
    return {"currency": settings.MEMBERSHIP_CURRENCY}


class PricingQuoteView(APIView):
    """Handler for POST /api/pricing/quote"""

    def post(self, request: Request) -> Response:
        params = QuoteRequestSerializer(data=request.data)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        service = PricingService(DjangoMembershipStore())
        try:
            quote = service.quote(
                modality_ids=[str(m) for m in data["modality_ids"]],
                commitment_months=data["commitment_months"],
                promo_code=data["promo_code"],
                member_id=data.get("member_id"),
                member_status=MemberStatus(data["member_status"]),
                plan_id=data.get("plan_id"),
            )
        except DomainError as error:
            return error_response(error)
        return Response(
            PricingQuoteSerializer(quote, context=serializer_context()).data
        )


class EnrollmentView(APIView):
    """Handler for POST /api/members/{member_id}/enroll"""

    def post(self, request: Request, member_id: str) -> Response:
        params = EnrollRequestSerializer(data=request.data)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        service = PricingService(DjangoMembershipStore())
        try:
            quote = service.enroll(
                member_id,
                plan_id=data["plan_id"],
                modality_ids=[str(m) for m in data["modality_ids"]],
                commitment_months=data.get("commitment_months"),
                promo_code=data["promo_code"],
            )
        except DomainError as error:
            return error_response(error)
        return Response(
            PricingQuoteSerializer(quote, context=serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )


class CheckinView(APIView):
    """Handler for POST /api/members/{member_id}/checkin"""

    def post(self, request: Request, member_id: str) -> Response:
        service = CheckinService(DjangoMembershipStore())
        try:
            outcome = service.check_in(member_id)
        except DomainError as error:
            return error_response(error)
        return Response(CheckinOutcomeSerializer(outcome).data)


class FreezeView(APIView):
    """Handler for GET/POST /api/members/{member_id}/freeze"""

    def get(self, request: Request, member_id: str) -> Response:
        service = FreezeService(DjangoMembershipStore())
        try:
            remaining = service.remaining_days(member_id)
        except DomainError as error:
            return error_response(error)
        return Response({"remaining_days": remaining})

    def post(self, request: Request, member_id: str) -> Response:
        params = FreezeRequestSerializer(data=request.data)
        params.is_valid(raise_exception=True)
        service = FreezeService(DjangoMembershipStore())
        try:
            member = service.freeze(
                member_id,
                frozen_until=params.validated_data["frozen_until"],
                staff_override=params.validated_data["staff_override"],
            )
        except DomainError as error:
            return error_response(error)
        return Response(MemberSerializer(member).data)
