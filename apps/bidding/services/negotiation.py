import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.bidding.models import BidAttempt
from apps.bidding.services.attempts import AttemptLedger
from apps.bidding.services.eligibility import EligibilityService
from apps.bidding.services.quota import QuotaService
from apps.bidding.services.thresholds import (
    ThresholdData,
    ThresholdService,
    compute_final_threshold,
)
from apps.bidding.utils.config import get_bidding_setting, max_attempts
from apps.bidding.utils.exceptions import BidError, InternalError, Unauthorized
from apps.bidding.utils.money import Number, format_amount, to_decimal
from apps.core.utils.cache_manager import CacheManager

logger = logging.getLogger("bidding_performance")

REJECTED_MESSAGE = "Your bid is too low. Try a slightly higher amount."


@dataclass
class BidEvaluation:
    accepted: bool
    bid_amount: Decimal
    final_threshold: Decimal
    attempts_used: int
    max_attempts: int
    used_free_coupon: bool
    attempt: Optional[BidAttempt] = None
    suggested_increases: List[int] = field(default_factory=list)

    @property
    def attempts_remaining(self) -> int:
        return max(0, self.max_attempts - self.attempts_used)

    @property
    def message(self) -> str:
        if self.accepted:
            return (
                f"Congratulations! Your bid of {format_amount(self.bid_amount)} "
                "has been accepted!"
            )
        return REJECTED_MESSAGE

    def to_response(self) -> Dict[str, Any]:
        """Public body; the threshold itself is never disclosed to the bidder."""
        data = {
            "success": True,
            "accepted": self.accepted,
            "bidPrice": self.bid_amount,
            "message": self.message,
        }
        if not self.accepted:
            data["suggestedIncreases"] = self.suggested_increases
            data["attemptsRemaining"] = self.attempts_remaining
        data["attemptsUsed"] = self.attempts_used
        data["maxAttempts"] = self.max_attempts
        return data


class BidNegotiationService:
    """Runs one bid through eligibility, quota, attempts and pricing"""

    @staticmethod
    def evaluate_bid(
        user,
        product_id: str,
        bid_amount: Number,
        product_category: str,
        product_price: Number,
        product_original_price: Number,
        use_free_coupon: bool = False,
    ) -> BidEvaluation:
        """
        Evaluate a bid and record the attempt.

        Everything from the quota check to the coupon decrement runs in one
        transaction holding a row lock on the user's coupon balance, so two
        bids from the same user are evaluated one after the other and either
        both the attempt and its coupon are written or neither is.

        Raises a BidError subclass when the bid cannot be evaluated.
        """
        start_time = timezone.now()

        if user is None or not user.is_authenticated:
            raise Unauthorized()

        EligibilityService.ensure_eligible(product_category, product_price)
        bid_amount = to_decimal(bid_amount)

        try:
            with transaction.atomic():
                quota = QuotaService.check_access(user, lock=True)
                attempts_used = AttemptLedger.ensure_attempts_left(user, product_id)

                product_threshold, _ = ThresholdService.get_or_create_threshold(
                    product_id, product_price, product_original_price
                )
                final_threshold = compute_final_threshold(
                    ThresholdData.from_model(product_threshold),
                    quota.spend_level,
                    quota.total_spent,
                )
                accepted = bid_amount >= final_threshold
                used_free_coupon = quota.should_use_coupon(use_free_coupon)

                attempt = AttemptLedger.record_attempt(
                    user=user,
                    product_id=product_id,
                    bid_amount=bid_amount,
                    final_threshold=final_threshold,
                    accepted=accepted,
                    attempt_number=attempts_used + 1,
                    used_free_coupon=used_free_coupon,
                )

                if used_free_coupon and not QuotaService.consume_coupon(user):
                    raise InternalError()

                transaction.on_commit(
                    lambda: CacheManager.invalidate(
                        "bidding", user_id=user.pk, product_id=product_id
                    )
                )
        except BidError:
            raise
        except DatabaseError as exc:
            logger.exception(f"Bid evaluation failed for user {user.pk} on {product_id}")
            raise InternalError() from exc

        evaluation = BidEvaluation(
            accepted=accepted,
            bid_amount=bid_amount,
            final_threshold=final_threshold,
            attempts_used=attempt.attempt_number,
            max_attempts=max_attempts(),
            used_free_coupon=used_free_coupon,
            attempt=attempt,
        )

        duration = (timezone.now() - start_time).total_seconds() * 1000
        if accepted:
            logger.info(
                f"Bid accepted for user {user.pk} on {product_id} in {duration:.2f}ms: "
                f"bid={bid_amount} threshold={final_threshold}"
            )
        else:
            evaluation.suggested_increases = list(
                get_bidding_setting("SUGGESTED_INCREASES", [50, 100, 200])
            )
            gap = math.ceil((final_threshold - bid_amount) / 50) * 50
            logger.info(
                f"Bid rejected for user {user.pk} on {product_id} in {duration:.2f}ms: "
                f"bid={bid_amount} threshold={final_threshold} gap={gap}"
            )
        return evaluation
