from django.conf import settings
from django.db import models

from apps.core.models import BaseModel


class UserSpending(BaseModel):
    SPEND_LEVEL_CHOICES = (
        (0, "Level 0"),
        (1, "Level 1"),
        (2, "Level 2"),
    )

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bid_spending",
    )
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    spend_level = models.PositiveSmallIntegerField(
        choices=SPEND_LEVEL_CHOICES, default=0
    )

    class Meta:
        db_table = "bidding_user_spending"
        verbose_name_plural = "User spending"

    def __str__(self):
        return f"{self.user} spent {self.total_spent} (level {self.spend_level})"
