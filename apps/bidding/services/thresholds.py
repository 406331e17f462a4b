"""
Acceptance threshold computation.

A product's threshold starts from 90% of its sale price and is floored by
the seller's cost plus an 8% margin. Loyalty and demand discounts are applied
in that order on top, each clamped to the floor, and mid-tier users may get a
clearance price instead. Every function here is pure; ``ThresholdService`` is
the only part touching the database.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from django.utils import timezone

from apps.bidding.models import ProductThreshold
from apps.bidding.utils.money import Number, round_currency, to_decimal

logger = logging.getLogger("bidding_performance")

SELLER_COST_RATIO = Decimal("0.55")
BASE_THRESHOLD_RATIO = Decimal("0.90")
MIN_MARGIN_RATIO = Decimal("1.08")

HIGH_DEMAND_PRICE = Decimal("5000")
MEDIUM_DEMAND_PRICE = Decimal("2000")

# (min spend level, min total spent, multiplier), best tier first
LOYALTY_TIERS = (
    (2, Decimal("5000"), Decimal("0.88")),
    (1, Decimal("4000"), Decimal("0.92")),
    (None, Decimal("3000"), Decimal("0.96")),
)

DEMAND_MULTIPLIERS = {
    ProductThreshold.DemandLevel.HIGH: Decimal("1.00"),
    ProductThreshold.DemandLevel.MEDIUM: Decimal("0.97"),
    ProductThreshold.DemandLevel.LOW: Decimal("0.93"),
}

CLEARANCE_SPEND_LEVEL = 1


@dataclass(frozen=True)
class ThresholdData:
    seller_cost: Decimal
    base_threshold: Decimal
    min_safe_threshold: Decimal
    demand_level: str
    is_clearance: bool = False
    clearance_threshold: Optional[Decimal] = None

    @classmethod
    def from_model(cls, threshold: ProductThreshold) -> "ThresholdData":
        return cls(
            seller_cost=threshold.seller_cost,
            base_threshold=threshold.base_threshold,
            min_safe_threshold=threshold.min_safe_threshold,
            demand_level=threshold.demand_level,
            is_clearance=threshold.is_clearance,
            clearance_threshold=threshold.clearance_threshold,
        )


class ThresholdCalculator:
    """Baseline threshold from a product's sale and original price."""

    @staticmethod
    def demand_level_for(product_price: Number) -> str:
        price = to_decimal(product_price)
        if price > HIGH_DEMAND_PRICE:
            return ProductThreshold.DemandLevel.HIGH
        if price > MEDIUM_DEMAND_PRICE:
            return ProductThreshold.DemandLevel.MEDIUM
        return ProductThreshold.DemandLevel.LOW

    @staticmethod
    def calculate(product_price: Number, product_original_price: Number) -> ThresholdData:
        seller_cost = round_currency(to_decimal(product_original_price) * SELLER_COST_RATIO)
        return ThresholdData(
            seller_cost=seller_cost,
            base_threshold=round_currency(to_decimal(product_price) * BASE_THRESHOLD_RATIO),
            min_safe_threshold=round_currency(seller_cost * MIN_MARGIN_RATIO),
            demand_level=ThresholdCalculator.demand_level_for(product_price),
        )


class LoyaltyAdjuster:
    @staticmethod
    def multiplier_for(spend_level: int, total_spent: Number) -> Decimal:
        spent = to_decimal(total_spent)
        for min_level, min_spent, multiplier in LOYALTY_TIERS:
            if min_level is not None and spend_level >= min_level:
                return multiplier
            if spent >= min_spent:
                return multiplier
        return Decimal("1")

    @staticmethod
    def adjust(
        base_threshold: Decimal,
        min_safe_threshold: Decimal,
        spend_level: int,
        total_spent: Number,
    ) -> Decimal:
        multiplier = LoyaltyAdjuster.multiplier_for(spend_level, total_spent)
        return max(round_currency(base_threshold * multiplier), min_safe_threshold)


class DemandAdjuster:
    @staticmethod
    def adjust(
        threshold: Decimal, min_safe_threshold: Decimal, demand_level: str
    ) -> Decimal:
        multiplier = DEMAND_MULTIPLIERS.get(demand_level, Decimal("1"))
        return max(round_currency(threshold * multiplier), min_safe_threshold)


class ClearanceOverride:
    @staticmethod
    def applies(data: ThresholdData, spend_level: int) -> bool:
        return (
            data.is_clearance
            and data.clearance_threshold is not None
            and spend_level == CLEARANCE_SPEND_LEVEL
        )

    @staticmethod
    def apply(threshold: Decimal, data: ThresholdData, spend_level: int) -> Decimal:
        if not ClearanceOverride.applies(data, spend_level):
            return threshold
        return max(data.clearance_threshold, data.min_safe_threshold)


def compute_final_threshold(
    data: ThresholdData, spend_level: int, total_spent: Number
) -> Decimal:
    """Loyalty, then demand, then clearance; never below the safety floor."""
    threshold = LoyaltyAdjuster.adjust(
        data.base_threshold, data.min_safe_threshold, spend_level, total_spent
    )
    threshold = DemandAdjuster.adjust(
        threshold, data.min_safe_threshold, data.demand_level
    )
    threshold = ClearanceOverride.apply(threshold, data, spend_level)
    return max(threshold, data.min_safe_threshold)


class ThresholdService:
    @staticmethod
    def get_or_create_threshold(
        product_id: str, product_price: Number, product_original_price: Number
    ) -> Tuple[ProductThreshold, bool]:
        """
        Return the stored threshold for a product, computing and storing it on
        the first bid. Concurrent first bids converge on one row: the unique
        product_id makes the loser of the insert race re-read the winner's row.
        Later prices never recompute an existing row.
        """
        start_time = timezone.now()

        computed = ThresholdCalculator.calculate(product_price, product_original_price)
        threshold, created = ProductThreshold.objects.get_or_create(
            product_id=product_id,
            defaults={
                "seller_cost": computed.seller_cost,
                "base_threshold": computed.base_threshold,
                "min_safe_threshold": computed.min_safe_threshold,
                "demand_level": computed.demand_level,
                "is_clearance": False,
            },
        )

        if created:
            duration = (timezone.now() - start_time).total_seconds() * 1000
            logger.info(
                f"Threshold stored for product {product_id} in {duration:.2f}ms: "
                f"base={computed.base_threshold} min_safe={computed.min_safe_threshold} "
                f"demand={computed.demand_level}"
            )
        return threshold, created
