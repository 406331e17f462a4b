import logging
import time

from django.conf import settings
from django.utils.deprecation import MiddlewareMixin


class PerformanceMonitoringMiddleware(MiddlewareMixin):
    """
    Times requests under the prefixes in settings.PERFORMANCE_API_PREFIXES and
    logs them to "{short_name}_performance": server errors at ERROR, slow
    requests at WARNING, the rest at INFO. Every timed response carries an
    X-Response-Time header in milliseconds.
    """

    def process_request(self, request):
        for prefix, short_name in settings.PERFORMANCE_API_PREFIXES.items():
            if request.path.startswith(prefix):
                request._perf_start = time.perf_counter()
                request._perf_short_name = short_name
                break

    def process_response(self, request, response):
        if not hasattr(request, "_perf_start"):
            return response

        duration_ms = (time.perf_counter() - request._perf_start) * 1000
        short_name = request._perf_short_name
        logger = logging.getLogger(f"{short_name}_performance")

        user = getattr(request, "user", None)
        user_id = user.pk if user is not None and user.is_authenticated else "anon"
        summary = (
            f"{request.method} {request.path} user={user_id} "
            f"status={response.status_code} in {duration_ms:.2f}ms"
        )

        if response.status_code >= 500:
            logger.error(f"{short_name} API error: {summary}")
        elif duration_ms > settings.SLOW_REQUEST_THRESHOLD_SEC * 1000:
            logger.warning(f"Slow {short_name} API request: {summary}")
        else:
            logger.info(f"{short_name} API request: {summary}")

        response["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
