from django.contrib import admin

from membership.models import (
    CheckinLog,
    Discount,
    FreezeRecord,
    Member,
    Modality,
    Plan,
    PricingConfig,
    Subscription,
)


class FreezeRecordInline(admin.TabularInline):
    model = FreezeRecord
    extra = 0


class SubscriptionInline(admin.TabularInline):
    model = Subscription
    extra = 0
    fields = [
        "plan",
        "final_price_cents",
        "enrollment_fee_cents",
        "starts_at",
        "expires_at",
    ]
    readonly_fields = fields


@admin.register(PricingConfig)
class PricingConfigAdmin(admin.ModelAdmin):
    list_display = [
        "base_price_cents",
        "extra_modality_price_cents",
        "enrollment_fee_cents",
        "currency",
        "updated_at",
    ]

    def has_add_permission(self, request):
        return not PricingConfig.objects.exists()


@admin.register(Modality)
class ModalityAdmin(admin.ModelAdmin):
    list_display = ["name", "code", "sort_order", "active"]
    list_filter = ["active"]


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "access_type",
        "commitment_months",
        "base_price_cents",
        "active",
    ]
    list_filter = ["access_type", "active"]


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = [
        "code",
        "category",
        "discount_type",
        "discount_value",
        "current_uses",
        "max_uses",
        "active",
    ]
    list_filter = ["category", "active"]
    search_fields = ["code", "name"]


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "status",
        "access_type",
        "access_expires_at",
        "credits_remaining",
    ]
    list_filter = ["status", "access_type"]
    search_fields = ["name", "phone", "email"]
    inlines = [SubscriptionInline, FreezeRecordInline]


@admin.register(CheckinLog)
class CheckinLogAdmin(admin.ModelAdmin):
    list_display = ["member", "result", "checked_in_at"]
    list_filter = ["result"]

    def has_change_permission(self, request, obj=None):
        return False
