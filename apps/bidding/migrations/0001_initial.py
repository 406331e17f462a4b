import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductThreshold",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("product_id", models.CharField(max_length=100, unique=True)),
                ("seller_cost", models.DecimalField(decimal_places=2, max_digits=12)),
                ("base_threshold", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "min_safe_threshold",
                    models.DecimalField(decimal_places=2, max_digits=12),
                ),
                (
                    "demand_level",
                    models.CharField(
                        choices=[("high", "High"), ("medium", "Medium"), ("low", "Low")],
                        default="low",
                        max_length=10,
                    ),
                ),
                ("is_clearance", models.BooleanField(default=False)),
                (
                    "clearance_threshold",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
            ],
            options={
                "db_table": "bidding_product_threshold",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("min_safe_threshold__gte", 0)),
                        name="threshold_min_safe_non_negative",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="UserSpending",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "total_spent",
                    models.DecimalField(decimal_places=2, default=0, max_digits=12),
                ),
                (
                    "spend_level",
                    models.PositiveSmallIntegerField(
                        choices=[(0, "Level 0"), (1, "Level 1"), (2, "Level 2")],
                        default=0,
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bid_spending",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "bidding_user_spending",
                "verbose_name_plural": "User spending",
            },
        ),
        migrations.CreateModel(
            name="BidCouponBalance",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("free_bids_remaining", models.IntegerField(default=5)),
                ("total_free_bids_used", models.PositiveIntegerField(default=0)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bid_coupons",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "bidding_coupon_balance",
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("free_bids_remaining__gte", 0)),
                        name="coupon_balance_non_negative",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="BidAttempt",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("product_id", models.CharField(db_index=True, max_length=100)),
                ("bid_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "final_threshold",
                    models.DecimalField(decimal_places=2, max_digits=12),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("accepted", "Accepted"), ("rejected", "Rejected")],
                        max_length=10,
                    ),
                ),
                ("attempt_number", models.PositiveSmallIntegerField()),
                ("used_free_coupon", models.BooleanField(default=False)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bid_attempts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "bidding_bid_attempt",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["user", "product_id"],
                        name="bidding_bid_user_id_3f1c2a_idx",
                    ),
                    models.Index(
                        fields=["status", "created_at"],
                        name="bidding_bid_status_8e4d7b_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "product_id", "attempt_number"),
                        name="unique_attempt_per_user_product",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("attempt_number__gte", 1), ("attempt_number__lte", 3)
                        ),
                        name="attempt_number_within_cap",
                    ),
                ],
            },
        ),
    ]
