import logging

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.core.utils.cache_manager import CacheManager

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender="bidding.BidAttempt")
@receiver([post_save, post_delete], sender="bidding.ProductThreshold")
@receiver([post_save, post_delete], sender="bidding.BidCouponBalance")
@receiver([post_save, post_delete], sender="bidding.UserSpending")
def invalidate_bidding_stats(sender, instance, **kwargs):
    """Drop the dashboard counters once the change is committed."""

    def invalidate_caches():
        CacheManager.invalidate_key("bidding_admin", "stats")
        logger.debug(f"Bidding stats invalidated after {sender.__name__} change")

    transaction.on_commit(invalidate_caches)


@receiver([post_save, post_delete], sender="bidding.BidCouponBalance")
@receiver([post_save, post_delete], sender="bidding.UserSpending")
def invalidate_user_quota(sender, instance, **kwargs):
    """Admin edits to a user's coupons or spend must show up in their quota."""
    user_id = instance.user_id
    transaction.on_commit(lambda: CacheManager.invalidate("bidding", user_id=user_id))


@receiver(post_delete, sender="bidding.BidAttempt")
def invalidate_attempt_summary(sender, instance, **kwargs):
    """Deleting attempts from the admin frees them up for the bidder."""
    user_id, product_id = instance.user_id, instance.product_id
    transaction.on_commit(
        lambda: CacheManager.invalidate("bidding", user_id=user_id, product_id=product_id)
    )
