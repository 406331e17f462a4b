from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.core.models import BaseModel


class BidAttempt(BaseModel):
    """Append-only record of one evaluated bid."""

    class Status(models.TextChoices):
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bid_attempts",
    )
    product_id = models.CharField(max_length=100, db_index=True)
    bid_amount = models.DecimalField(max_digits=12, decimal_places=2)
    final_threshold = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=10, choices=Status.choices)
    attempt_number = models.PositiveSmallIntegerField()
    used_free_coupon = models.BooleanField(default=False)

    class Meta:
        db_table = "bidding_bid_attempt"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["user", "product_id"], name="bidding_bid_user_id_3f1c2a_idx"
            ),
            models.Index(
                fields=["status", "created_at"], name="bidding_bid_status_8e4d7b_idx"
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product_id", "attempt_number"],
                name="unique_attempt_per_user_product",
            ),
            # Upper bound mirrors BIDDING_SETTINGS["MAX_ATTEMPTS"]
            models.CheckConstraint(
                condition=Q(attempt_number__gte=1) & Q(attempt_number__lte=3),
                name="attempt_number_within_cap",
            ),
        ]

    def __str__(self):
        return (
            f"Bid #{self.attempt_number} by {self.user} on {self.product_id}"
            f" - {self.status}"
        )
