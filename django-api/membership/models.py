"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in membership/domain/.
"""

import uuid

from django.core.validators import MinValueValidator
from django.db import models


class MemberStatus(models.TextChoices):
    LEAD = "LEAD"
    ATIVO = "ATIVO"
    BLOQUEADO = "BLOQUEADO"
    PAUSADO = "PAUSADO"
    CANCELADO = "CANCELADO"


class AccessType(models.TextChoices):
    SUBSCRIPTION = "SUBSCRIPTION"
    CREDITS = "CREDITS"
    DAILY_PASS = "DAILY_PASS"


class DiscountCategory(models.TextChoices):
    COMMITMENT = "commitment"
    PROMO = "promo"


class DiscountType(models.TextChoices):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class CheckinResult(models.TextChoices):
    ALLOWED = "ALLOWED"
    BLOCKED = "BLOCKED"
    EXPIRED = "EXPIRED"
    NO_CREDITS = "NO_CREDITS"


class PricingConfig(models.Model):
    """Singleton price list. Always stored with pk=1."""

    SINGLETON_PK = 1

    id = models.PositiveSmallIntegerField(primary_key=True, editable=False)
    base_price_cents = models.PositiveIntegerField(default=6000)
    extra_modality_price_cents = models.PositiveIntegerField(default=3000)
    enrollment_fee_cents = models.PositiveIntegerField(default=1500)
    single_class_price_cents = models.PositiveIntegerField(default=1500)
    day_pass_price_cents = models.PositiveIntegerField(default=2500)
    currency = models.CharField(max_length=3, default="EUR")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "pricing config"

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"Pricing ({self.currency})"


class Modality(models.Model):
    """A discipline members can sign up for (e.g. BJJ, Muay Thai)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100)
    sort_order = models.PositiveSmallIntegerField(default=0)
    active = models.BooleanField(default=True)

    class Meta:
        ordering = ["sort_order", "name"]
        verbose_name_plural = "modalities"

    def __str__(self) -> str:
        return self.name


class Plan(models.Model):
    """Persistence model for sellable plans, with optional price overrides."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    access_type = models.CharField(max_length=20, choices=AccessType.choices)
    commitment_months = models.PositiveSmallIntegerField(default=1)
    duration_days = models.PositiveIntegerField(blank=True, null=True)
    credits = models.PositiveIntegerField(blank=True, null=True)
    base_price_cents = models.PositiveIntegerField(blank=True, null=True)
    extra_modality_price_cents = models.PositiveIntegerField(blank=True, null=True)
    enrollment_fee_cents = models.PositiveIntegerField(blank=True, null=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Discount(models.Model):
    """Commitment tier or promo code."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100)
    category = models.CharField(max_length=20, choices=DiscountCategory.choices)
    discount_type = models.CharField(
        max_length=20, choices=DiscountType.choices, default=DiscountType.PERCENTAGE
    )
    discount_value = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    min_commitment_months = models.PositiveSmallIntegerField(blank=True, null=True)
    valid_from = models.DateField(blank=True, null=True)
    valid_until = models.DateField(blank=True, null=True)
    max_uses = models.PositiveIntegerField(blank=True, null=True)
    current_uses = models.PositiveIntegerField(default=0)
    new_members_only = models.BooleanField(default=False)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["category", "code"]
        indexes = [
            models.Index(
                fields=["category", "active"], name="discount_category_active_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.code} ({self.category})"


class Member(models.Model):
    """Persistence model for members."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True, null=True)
    status = models.CharField(
        max_length=20, choices=MemberStatus.choices, default=MemberStatus.LEAD
    )
    access_type = models.CharField(
        max_length=20, choices=AccessType.choices, blank=True, null=True
    )
    access_expires_at = models.DateField(blank=True, null=True)
    credits_remaining = models.IntegerField(blank=True, null=True)
    frozen_at = models.DateField(blank=True, null=True)
    frozen_until = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["status"], name="member_status_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class FreezeRecord(models.Model):
    """One freeze period, kept for the annual budget."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name="freezes")
    frozen_at = models.DateField()
    frozen_until = models.DateField()
    staff_override = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-frozen_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(frozen_until__gte=models.F("frozen_at")),
                name="freeze_until_after_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.member.name}: {self.frozen_at} - {self.frozen_until}"


class CheckinLog(models.Model):
    """Append-only record of every check-in attempt."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(
        Member, on_delete=models.CASCADE, related_name="checkins"
    )
    result = models.CharField(max_length=20, choices=CheckinResult.choices)
    message = models.CharField(max_length=255, blank=True)
    checked_in_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-checked_in_at"]
        indexes = [
            models.Index(
                fields=["member", "-checked_in_at"], name="checkin_member_recent_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.member.name} - {self.result}"


class Subscription(models.Model):
    """Immutable price snapshot taken at enrollment."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(
        Member, on_delete=models.CASCADE, related_name="subscriptions"
    )
    plan = models.ForeignKey(Plan, on_delete=models.SET_NULL, blank=True, null=True)
    modalities = models.ManyToManyField(Modality, blank=True)
    commitment_months = models.PositiveSmallIntegerField(default=1)
    commitment_discount = models.ForeignKey(
        Discount, on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    promo_discount = models.ForeignKey(
        Discount, on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    calculated_price_cents = models.PositiveIntegerField()
    commitment_discount_pct = models.DecimalField(
        max_digits=5, decimal_places=2, default=0
    )
    promo_discount_pct = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    promo_discount_cents = models.PositiveIntegerField(default=0)
    final_price_cents = models.PositiveIntegerField()
    enrollment_fee_cents = models.PositiveIntegerField(default=0)
    starts_at = models.DateField()
    expires_at = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.member.name} - {self.final_price_cents}"
