from membership.handlers.views import (
    CheckinView,
    EnrollmentView,
    FreezeView,
    PricingQuoteView,
)

__all__ = ["CheckinView", "EnrollmentView", "FreezeView", "PricingQuoteView"]
