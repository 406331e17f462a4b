from apps.core.throttle import BaseCacheThrottle


class BidEvaluateRateThrottle(BaseCacheThrottle):
    """Limits how fast one user can submit bids"""

    scope = "bid_evaluate"


class BidReadRateThrottle(BaseCacheThrottle):
    scope = "bid_read"


class BidAdminRateThrottle(BaseCacheThrottle):
    scope = "bid_admin"
