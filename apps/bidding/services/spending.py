import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F

from apps.bidding.models import UserSpending
from apps.bidding.utils.config import get_bidding_setting
from apps.bidding.utils.money import Number, to_decimal
from apps.core.utils.cache_manager import CacheManager

logger = logging.getLogger("bidding_performance")


def spend_level_for(total_spent: Number) -> int:
    """Highest level whose spend amount has been reached."""
    thresholds = get_bidding_setting("SPEND_LEVEL_THRESHOLDS", {1: 3000, 2: 5000})
    spent = to_decimal(total_spent)
    level = 0
    for candidate, amount in sorted(thresholds.items(), key=lambda item: int(item[0])):
        if spent >= to_decimal(amount):
            level = int(candidate)
    return level


class SpendingService:
    @staticmethod
    @transaction.atomic
    def record_order_spend(user_id, amount: Number) -> UserSpending:
        """
        Add a completed order's amount to the user's total and raise their
        spend level when a threshold is crossed. Levels never go down.
        """
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValueError("Order amount must be positive")

        spending, _ = UserSpending.objects.get_or_create(user_id=user_id)
        spending = UserSpending.objects.select_for_update().get(pk=spending.pk)
        UserSpending.objects.filter(pk=spending.pk).update(
            total_spent=F("total_spent") + amount
        )
        spending.refresh_from_db()

        level = spend_level_for(spending.total_spent)
        if level > spending.spend_level:
            logger.info(
                f"User {user_id} reached spend level {level} "
                f"(total spent {spending.total_spent})"
            )
            spending.spend_level = level
            spending.save(update_fields=["spend_level", "updated_at"])

        transaction.on_commit(lambda: CacheManager.invalidate("bidding", user_id=user_id))
        return spending
