import logging
from decimal import Decimal
from typing import Any, Dict

from django.core.cache import cache
from django.db import IntegrityError, transaction

from apps.bidding.models import BidAttempt
from apps.bidding.utils.config import get_bidding_setting, max_attempts
from apps.bidding.utils.exceptions import AttemptsExhausted
from apps.core.utils.cache_key_manager import CacheKeyManager

logger = logging.getLogger("bidding_performance")


class NegotiationState:
    NOT_STARTED = "NOT_STARTED"
    NEGOTIATING = "NEGOTIATING"
    ACCEPTED = "ACCEPTED"
    EXHAUSTED = "EXHAUSTED"


class AttemptLedger:
    """Append-only log of bids per (user, product), capped at MAX_ATTEMPTS"""

    @staticmethod
    def get_attempt_count(user, product_id: str) -> int:
        return BidAttempt.objects.filter(user=user, product_id=product_id).count()

    @staticmethod
    def exhausted_error(attempts_used: int) -> AttemptsExhausted:
        cap = max_attempts()
        return AttemptsExhausted(
            f"Maximum bid attempts ({cap}) reached for this product",
            attemptsUsed=attempts_used,
            maxAttempts=cap,
        )

    @staticmethod
    def ensure_attempts_left(user, product_id: str) -> int:
        """Return the number of attempts already used, or raise when none are left."""
        attempts_used = AttemptLedger.get_attempt_count(user, product_id)
        if attempts_used >= max_attempts():
            raise AttemptLedger.exhausted_error(attempts_used)
        return attempts_used

    @staticmethod
    def record_attempt(
        user,
        product_id: str,
        bid_amount: Decimal,
        final_threshold: Decimal,
        accepted: bool,
        attempt_number: int,
        used_free_coupon: bool,
    ) -> BidAttempt:
        """
        Append one attempt. A clash on (user, product_id, attempt_number) or an
        attempt number past the cap means a concurrent bid got there first.
        """
        try:
            with transaction.atomic():
                return BidAttempt.objects.create(
                    user=user,
                    product_id=product_id,
                    bid_amount=bid_amount,
                    final_threshold=final_threshold,
                    status=(
                        BidAttempt.Status.ACCEPTED
                        if accepted
                        else BidAttempt.Status.REJECTED
                    ),
                    attempt_number=attempt_number,
                    used_free_coupon=used_free_coupon,
                )
        except IntegrityError:
            logger.warning(
                f"Attempt {attempt_number} for user {user.pk} on {product_id} "
                "rejected by the database"
            )
            raise AttemptLedger.exhausted_error(
                AttemptLedger.get_attempt_count(user, product_id)
            )

    @staticmethod
    def get_state(user, product_id: str) -> str:
        attempts = BidAttempt.objects.filter(user=user, product_id=product_id)
        count = attempts.count()
        if count == 0:
            return NegotiationState.NOT_STARTED
        if attempts.filter(status=BidAttempt.Status.ACCEPTED).exists():
            return NegotiationState.ACCEPTED
        if count >= max_attempts():
            return NegotiationState.EXHAUSTED
        return NegotiationState.NEGOTIATING

    @staticmethod
    def get_attempt_summary(user, product_id: str) -> Dict[str, Any]:
        cache_key = CacheKeyManager.make_key(
            "bidding", "attempts", user_id=user.pk, product_id=product_id
        )
        summary = cache.get(cache_key)
        if summary is not None:
            return summary

        attempts_used = AttemptLedger.get_attempt_count(user, product_id)
        cap = max_attempts()
        summary = {
            "productId": product_id,
            "attemptsUsed": attempts_used,
            "maxAttempts": cap,
            "attemptsRemaining": max(0, cap - attempts_used),
            "state": AttemptLedger.get_state(user, product_id),
        }
        cache.set(cache_key, summary, get_bidding_setting("CACHE_TIMEOUT_SHORT", 60))
        return summary
