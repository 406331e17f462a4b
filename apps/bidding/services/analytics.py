import logging
from typing import Any, Dict

from django.core.cache import cache
from django.db.models import Avg, Count, Q, Sum
from django.utils import timezone

from apps.bidding.models import (
    BidAttempt,
    BidCouponBalance,
    ProductThreshold,
    UserSpending,
)
from apps.bidding.utils.config import get_bidding_setting, spend_unlock_amount
from apps.core.utils.cache_key_manager import CacheKeyManager

logger = logging.getLogger("bidding_performance")


class BiddingAnalyticsService:
    @staticmethod
    def get_bidding_stats() -> Dict[str, Any]:
        """Aggregate counters for the operator dashboard."""
        cache_key = CacheKeyManager.make_key("bidding_admin", "stats")
        stats = cache.get(cache_key)
        if stats is not None:
            return stats

        start_time = timezone.now()

        attempts = BidAttempt.objects.aggregate(
            total=Count("id"),
            accepted=Count("id", filter=Q(status=BidAttempt.Status.ACCEPTED)),
            rejected=Count("id", filter=Q(status=BidAttempt.Status.REJECTED)),
            with_coupon=Count("id", filter=Q(used_free_coupon=True)),
            average_accepted_bid=Avg(
                "bid_amount", filter=Q(status=BidAttempt.Status.ACCEPTED)
            ),
        )
        thresholds = ProductThreshold.objects.aggregate(
            total=Count("id"),
            clearance=Count("id", filter=Q(is_clearance=True)),
        )
        coupons = BidCouponBalance.objects.aggregate(
            used=Sum("total_free_bids_used"),
            remaining=Sum("free_bids_remaining"),
        )
        users_with_access = UserSpending.objects.filter(
            Q(spend_level__gte=1) | Q(total_spent__gte=spend_unlock_amount())
        ).count()

        total = attempts["total"]
        stats = {
            "totalBids": total,
            "acceptedBids": attempts["accepted"],
            "rejectedBids": attempts["rejected"],
            "acceptanceRate": round(attempts["accepted"] / total * 100, 2) if total else 0,
            "freeCouponBids": attempts["with_coupon"],
            "averageAcceptedBid": attempts["average_accepted_bid"],
            "totalProducts": thresholds["total"],
            "clearanceProducts": thresholds["clearance"],
            "totalFreeBidsUsed": coupons["used"] or 0,
            "freeBidsOutstanding": coupons["remaining"] or 0,
            "usersWithSpendAccess": users_with_access,
        }
        cache.set(cache_key, stats, get_bidding_setting("CACHE_TIMEOUT_MEDIUM", 300))

        duration = (timezone.now() - start_time).total_seconds() * 1000
        logger.info(f"Bidding stats computed in {duration:.2f}ms")
        return stats
