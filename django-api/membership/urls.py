from django.urls import path

from membership.handlers import (
    CheckinView,
    EnrollmentView,
    FreezeView,
    PricingQuoteView,
)

urlpatterns = [
    path("pricing/quote", PricingQuoteView.as_view(), name="pricing-quote"),
    path(
        "members/<str:member_id>/enroll",
        EnrollmentView.as_view(),
        name="member-enroll",
    ),
    path(
        "members/<str:member_id>/checkin",
        CheckinView.as_view(),
        name="member-checkin",
    ),
    path("members/<str:member_id>/freeze", FreezeView.as_view(), name="member-freeze"),
]
