import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from django.core.cache import cache
from django.db import transaction
from django.db.models import F

from apps.bidding.models import BidCouponBalance, UserSpending
from apps.bidding.utils.config import get_bidding_setting, spend_unlock_amount
from apps.bidding.utils.exceptions import QuotaExceeded
from apps.bidding.utils.money import Number, to_decimal
from apps.core.utils.cache_key_manager import CacheKeyManager
from apps.core.utils.cache_manager import CacheManager

logger = logging.getLogger("bidding_performance")


def has_spend_access(spend_level: int, total_spent: Number) -> bool:
    return spend_level >= 1 or to_decimal(total_spent) >= spend_unlock_amount()


def spend_required(total_spent: Number) -> Decimal:
    return max(Decimal("0"), to_decimal(spend_unlock_amount()) - to_decimal(total_spent))


@dataclass
class QuotaSnapshot:
    free_bids_remaining: int
    total_free_bids_used: int
    total_spent: Decimal
    spend_level: int

    @property
    def has_spend_access(self) -> bool:
        return has_spend_access(self.spend_level, self.total_spent)

    @property
    def has_free_coupon(self) -> bool:
        return self.free_bids_remaining > 0

    @property
    def can_bid(self) -> bool:
        return self.has_free_coupon or self.has_spend_access

    @property
    def spend_required(self) -> Decimal:
        return spend_required(self.total_spent)

    def should_use_coupon(self, requested: bool) -> bool:
        """A coupon is only spent by users without spend access."""
        return bool(requested) and self.has_free_coupon and not self.has_spend_access

    def to_dict(self) -> Dict[str, Any]:
        return {
            "freeBidsRemaining": self.free_bids_remaining,
            "totalFreeBidsUsed": self.total_free_bids_used,
            "totalSpent": self.total_spent,
            "spendLevel": self.spend_level,
            "hasSpendAccess": self.has_spend_access,
            "canBid": self.can_bid,
            "spendRequired": self.spend_required,
        }


class QuotaService:
    """Free bid coupons and spend-based access to bidding"""

    @staticmethod
    def get_or_create_spending(user) -> UserSpending:
        spending, _ = UserSpending.objects.get_or_create(
            user=user, defaults={"total_spent": 0, "spend_level": 0}
        )
        return spending

    @staticmethod
    def get_or_create_coupons(user, lock: bool = False) -> BidCouponBalance:
        """
        Lazily grant the free bid cards. With ``lock`` the row is re-read with
        SELECT ... FOR UPDATE, which must happen inside a transaction and
        serialises every bid placed by this user until it commits.
        """
        coupons, created = BidCouponBalance.objects.get_or_create(
            user=user,
            defaults={
                "free_bids_remaining": get_bidding_setting("FREE_BID_GRANT", 5)
            },
        )
        if created:
            logger.info(f"Granted {coupons.free_bids_remaining} free bids to user {user.pk}")
        if lock:
            coupons = BidCouponBalance.objects.select_for_update().get(pk=coupons.pk)
        return coupons

    @staticmethod
    def get_snapshot(user, lock: bool = False) -> QuotaSnapshot:
        spending = QuotaService.get_or_create_spending(user)
        coupons = QuotaService.get_or_create_coupons(user, lock=lock)
        return QuotaSnapshot(
            free_bids_remaining=coupons.free_bids_remaining,
            total_free_bids_used=coupons.total_free_bids_used,
            total_spent=spending.total_spent,
            spend_level=spending.spend_level,
        )

    @staticmethod
    def check_access(user, lock: bool = False) -> QuotaSnapshot:
        snapshot = QuotaService.get_snapshot(user, lock=lock)
        if not snapshot.can_bid:
            raise QuotaExceeded(
                f"You need to spend at least {spend_unlock_amount():,} to unlock "
                "Reverse Bidding, or use your free bid coupon",
                freeBidsRemaining=snapshot.free_bids_remaining,
                totalSpent=snapshot.total_spent,
                spendRequired=snapshot.spend_required,
            )
        return snapshot

    @staticmethod
    def consume_coupon(user) -> bool:
        """
        Spend one free bid. The decrement only matches while the balance is
        positive, so the count can never go below zero.
        """
        with transaction.atomic():
            updated = BidCouponBalance.objects.filter(
                user=user, free_bids_remaining__gt=0
            ).update(
                free_bids_remaining=F("free_bids_remaining") - 1,
                total_free_bids_used=F("total_free_bids_used") + 1,
            )
        if not updated:
            logger.warning(f"No free bid left to consume for user {user.pk}")
        return bool(updated)

    @staticmethod
    def get_user_quota(user) -> Dict[str, Any]:
        cache_key = CacheKeyManager.make_key("bidding", "quota", user_id=user.pk)
        quota = cache.get(cache_key)
        if quota is None:
            quota = QuotaService.get_snapshot(user).to_dict()
            cache.set(
                cache_key,
                quota,
                get_bidding_setting("CACHE_TIMEOUT_SHORT", 60),
            )
        return quota

    @staticmethod
    def invalidate_user_quota(user_id) -> None:
        CacheManager.invalidate("bidding", user_id=user_id)
