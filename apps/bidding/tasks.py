import logging

from celery import shared_task
from django.utils import timezone

from apps.bidding.services.spending import SpendingService

logger = logging.getLogger("bidding_performance")


@shared_task
def record_order_spend(user_id, amount):
    """
    Credit a completed order to the buyer's spend total.
    Called by the order pipeline once payment clears.
    """
    start_time = timezone.now()

    spending = SpendingService.record_order_spend(user_id, amount)

    duration = (timezone.now() - start_time).total_seconds() * 1000
    logger.info(f"Recorded spend of {amount} for user {user_id} in {duration:.2f}ms")

    return {
        "user_id": user_id,
        "total_spent": str(spending.total_spent),
        "spend_level": spending.spend_level,
    }
