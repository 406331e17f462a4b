from rest_framework import status

from apps.core.exceptions import ServiceError


class BidError(ServiceError):
    """Base exception for bid evaluation failures."""

    code = "bid_error"
    message = "Bid could not be evaluated"

    def get_payload(self):
        payload = super().get_payload()
        payload["eligible"] = False
        return payload


class Unauthorized(BidError):
    code = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized - Please login to place a bid"

    def get_payload(self):
        return {"error": self.code, "message": self.message}


class IneligibleCategory(BidError):
    code = "category_excluded"
    message = "This product category does not support bidding"


class IneligiblePrice(BidError):
    code = "below_price_floor"
    message = "Bidding is only available for products priced 1,000 or above"


class QuotaExceeded(BidError):
    code = "spend_required"
    status_code = status.HTTP_403_FORBIDDEN
    message = (
        "You need to spend at least 3,000 to unlock Reverse Bidding, "
        "or use your free bid coupon"
    )


class AttemptsExhausted(BidError):
    code = "max_attempts"
    message = "Maximum bid attempts reached for this product"


class InternalError(BidError):
    code = "internal_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def get_payload(self):
        return {"error": self.code, "message": self.message}
