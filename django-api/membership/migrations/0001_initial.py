import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PricingConfig",
            fields=[
                (
                    "id",
                    models.PositiveSmallIntegerField(
                        editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("base_price_cents", models.PositiveIntegerField(default=6000)),
                (
                    "extra_modality_price_cents",
                    models.PositiveIntegerField(default=3000),
                ),
                ("enrollment_fee_cents", models.PositiveIntegerField(default=1500)),
                ("single_class_price_cents", models.PositiveIntegerField(default=1500)),
                ("day_pass_price_cents", models.PositiveIntegerField(default=2500)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "pricing config",
            },
        ),
        migrations.CreateModel(
            name="Modality",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("code", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("sort_order", models.PositiveSmallIntegerField(default=0)),
                ("active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name_plural": "modalities",
                "ordering": ["sort_order", "name"],
            },
        ),
        migrations.CreateModel(
            name="Plan",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=100)),
                (
                    "access_type",
                    models.CharField(
                        choices=[
                            ("SUBSCRIPTION", "Subscription"),
                            ("CREDITS", "Credits"),
                            ("DAILY_PASS", "Daily Pass"),
                        ],
                        max_length=20,
                    ),
                ),
                ("commitment_months", models.PositiveSmallIntegerField(default=1)),
                ("duration_days", models.PositiveIntegerField(blank=True, null=True)),
                ("credits", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "base_price_cents",
                    models.PositiveIntegerField(blank=True, null=True),
                ),
                (
                    "extra_modality_price_cents",
                    models.PositiveIntegerField(blank=True, null=True),
                ),
                (
                    "enrollment_fee_cents",
                    models.PositiveIntegerField(blank=True, null=True),
                ),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Discount",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("code", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=100)),
                (
                    "category",
                    models.CharField(
                        choices=[("commitment", "Commitment"), ("promo", "Promo")],
                        max_length=20,
                    ),
                ),
                (
                    "discount_type",
                    models.CharField(
                        choices=[("percentage", "Percentage"), ("fixed", "Fixed")],
                        default="percentage",
                        max_length=20,
                    ),
                ),
                (
                    "discount_value",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "min_commitment_months",
                    models.PositiveSmallIntegerField(blank=True, null=True),
                ),
                ("valid_from", models.DateField(blank=True, null=True)),
                ("valid_until", models.DateField(blank=True, null=True)),
                ("max_uses", models.PositiveIntegerField(blank=True, null=True)),
                ("current_uses", models.PositiveIntegerField(default=0)),
                ("new_members_only", models.BooleanField(default=False)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["category", "code"],
                "indexes": [
                    models.Index(
                        fields=["category", "active"],
                        name="discount_category_active_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Member",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("LEAD", "Lead"),
                            ("ATIVO", "Ativo"),
                            ("BLOQUEADO", "Bloqueado"),
                            ("PAUSADO", "Pausado"),
                            ("CANCELADO", "Cancelado"),
                        ],
                        default="LEAD",
                        max_length=20,
                    ),
                ),
                (
                    "access_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("SUBSCRIPTION", "Subscription"),
                            ("CREDITS", "Credits"),
                            ("DAILY_PASS", "Daily Pass"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("access_expires_at", models.DateField(blank=True, null=True)),
                ("credits_remaining", models.IntegerField(blank=True, null=True)),
                ("frozen_at", models.DateField(blank=True, null=True)),
                ("frozen_until", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["status"],
                        name="member_status_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="FreezeRecord",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("frozen_at", models.DateField()),
                ("frozen_until", models.DateField()),
                ("staff_override", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="freezes",
                        to="membership.member",
                    ),
                ),
            ],
            options={
                "ordering": ["-frozen_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("frozen_until__gte", models.F("frozen_at"))
                        ),
                        name="freeze_until_after_start",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CheckinLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "result",
                    models.CharField(
                        choices=[
                            ("ALLOWED", "Allowed"),
                            ("BLOCKED", "Blocked"),
                            ("EXPIRED", "Expired"),
                            ("NO_CREDITS", "No Credits"),
                        ],
                        max_length=20,
                    ),
                ),
                ("message", models.CharField(blank=True, max_length=255)),
                ("checked_in_at", models.DateTimeField(auto_now_add=True)),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="checkins",
                        to="membership.member",
                    ),
                ),
            ],
            options={
                "ordering": ["-checked_in_at"],
                "indexes": [
                    models.Index(
                        fields=["member", "-checked_in_at"],
                        name="checkin_member_recent_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Subscription",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("commitment_months", models.PositiveSmallIntegerField(default=1)),
                ("calculated_price_cents", models.PositiveIntegerField()),
                (
                    "commitment_discount_pct",
                    models.DecimalField(decimal_places=2, default=0, max_digits=5),
                ),
                (
                    "promo_discount_pct",
                    models.DecimalField(decimal_places=2, default=0, max_digits=5),
                ),
                ("promo_discount_cents", models.PositiveIntegerField(default=0)),
                ("final_price_cents", models.PositiveIntegerField()),
                ("enrollment_fee_cents", models.PositiveIntegerField(default=0)),
                ("starts_at", models.DateField()),
                ("expires_at", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="subscriptions",
                        to="membership.member",
                    ),
                ),
                (
                    "plan",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to="membership.plan",
                    ),
                ),
                (
                    "commitment_discount",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="membership.discount",
                    ),
                ),
                (
                    "promo_discount",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="membership.discount",
                    ),
                ),
                (
                    "modalities",
                    models.ManyToManyField(blank=True, to="membership.modality"),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
