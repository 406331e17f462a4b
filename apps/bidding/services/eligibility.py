import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from apps.bidding.utils.config import get_bidding_setting
from apps.bidding.utils.exceptions import IneligibleCategory, IneligiblePrice
from apps.bidding.utils.money import Number, to_decimal

logger = logging.getLogger("bidding_performance")


def normalize_category(category: Optional[str]) -> str:
    return (category or "").strip().lower()


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    reason: Optional[str] = None
    message: Optional[str] = None


class EligibilityService:
    """Server-side rules deciding whether a product can be bid on at all"""

    @staticmethod
    def check(category: Optional[str], product_price: Number) -> EligibilityResult:
        fixed_price = get_bidding_setting(
            "FIXED_PRICE_CATEGORIES", ["mobiles", "laptops", "electronics"]
        )
        if normalize_category(category) in fixed_price:
            return EligibilityResult(
                False, IneligibleCategory.code, IneligibleCategory.message
            )

        min_price = get_bidding_setting("MIN_PRODUCT_PRICE", 1000)
        if to_decimal(product_price) < to_decimal(min_price):
            return EligibilityResult(
                False,
                IneligiblePrice.code,
                f"Bidding is only available for products priced {min_price:,} or above",
            )

        return EligibilityResult(True)

    @staticmethod
    def ensure_eligible(category: Optional[str], product_price: Number) -> None:
        """Raise the matching BidError when the product is not biddable."""
        result = EligibilityService.check(category, product_price)
        if result.eligible:
            return

        logger.info(f"Bid refused for category={category!r} price={product_price}: {result.reason}")
        if result.reason == IneligibleCategory.code:
            raise IneligibleCategory(result.message)
        raise IneligiblePrice(result.message)

    @staticmethod
    def is_suggested_category(category: Optional[str]) -> bool:
        """UI hint: categories the storefront advertises bidding for."""
        normalized = normalize_category(category)
        if not normalized:
            return False
        if normalized in get_bidding_setting("BIDDING_CATEGORIES", []):
            return True
        keywords = get_bidding_setting("BIDDING_CATEGORY_KEYWORDS", [])
        return any(keyword in normalized for keyword in keywords)

    @staticmethod
    def get_hint(category: Optional[str], product_price: Number) -> Dict[str, Any]:
        result = EligibilityService.check(category, product_price)
        return {
            "eligible": result.eligible,
            "reason": result.reason,
            "message": result.message,
            "suggested": result.eligible
            and EligibilityService.is_suggested_category(category),
        }
