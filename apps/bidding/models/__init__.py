from .product_threshold import ProductThreshold
from .user_spending import UserSpending
from .bid_coupon import BidCouponBalance
from .bid_attempt import BidAttempt

# Module-level aliases for the OpenAPI enum name overrides
BidAttemptStatus = BidAttempt.Status
DemandLevel = ProductThreshold.DemandLevel

__all__ = [
    "ProductThreshold",
    "UserSpending",
    "BidCouponBalance",
    "BidAttempt",
    "BidAttemptStatus",
    "DemandLevel",
]
