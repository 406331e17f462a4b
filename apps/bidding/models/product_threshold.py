from django.db import models
from django.db.models import Q

from apps.core.models import BaseModel


class ProductThreshold(BaseModel):
    """
    Acceptance price snapshot for one product, computed from the price seen
    on the first bid and read by every bid after that.
    """

    class DemandLevel(models.TextChoices):
        HIGH = "high", "High"
        MEDIUM = "medium", "Medium"
        LOW = "low", "Low"

    product_id = models.CharField(max_length=100, unique=True)
    seller_cost = models.DecimalField(max_digits=12, decimal_places=2)
    base_threshold = models.DecimalField(max_digits=12, decimal_places=2)
    min_safe_threshold = models.DecimalField(max_digits=12, decimal_places=2)
    demand_level = models.CharField(
        max_length=10, choices=DemandLevel.choices, default=DemandLevel.LOW
    )

    # Set by operators through the admin site
    is_clearance = models.BooleanField(default=False)
    clearance_threshold = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )

    class Meta:
        db_table = "bidding_product_threshold"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(min_safe_threshold__gte=0),
                name="threshold_min_safe_non_negative",
            ),
        ]

    def __str__(self):
        return f"Threshold for {self.product_id} ({self.demand_level})"
