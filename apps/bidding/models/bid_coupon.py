from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.core.models import BaseModel


class BidCouponBalance(BaseModel):
    """Free bid cards left for a user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bid_coupons",
    )
    free_bids_remaining = models.IntegerField(default=5)
    total_free_bids_used = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "bidding_coupon_balance"
        constraints = [
            models.CheckConstraint(
                condition=Q(free_bids_remaining__gte=0),
                name="coupon_balance_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.user}: {self.free_bids_remaining} free bids left"
