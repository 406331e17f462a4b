from rest_framework.throttling import UserRateThrottle
import logging

logger = logging.getLogger(__name__)


class BaseCacheThrottle(UserRateThrottle):
    """
    Base cache-based throttle. Subclasses only need to set `scope`.
    """

    def get_cache_key(self, request, view):
        """
        Generates a key like "throttle_{scope}_{user_id_or_ip}".
        """
        if request.user and request.user.is_authenticated:
            user_identifier = str(request.user.pk)
        else:
            user_identifier = self.get_ident(request)

        return f"throttle_{self.scope}_{user_identifier}"

    def allow_request(self, request, view):
        # If no rate is configured for this scope, skip throttling
        if self.rate is None:
            return True

        self.key = self.get_cache_key(request, view)
        if self.key is None:
            return True

        self.history = self.cache.get(self.key, [])
        self.now = self.timer()

        # History is newest-first; drop timestamps older than the window
        while self.history and self.history[-1] <= self.now - self.duration:
            self.history.pop()

        if len(self.history) >= self.num_requests:
            logger.warning(
                f"Rate limit exceeded for {self.scope}: "
                f"key={self.key}, requests={len(self.history)}, "
                f"limit={self.num_requests}, window={self.duration}s"
            )
            return self.throttle_failure()

        return self.throttle_success()

    def wait(self):
        """
        Remaining seconds before the next request is allowed:
        "window - (now - oldest_request)".
        """
        if not getattr(self, "history", None):
            return None
        remaining = self.duration - (self.now - self.history[-1])
        return max(remaining, 0)
