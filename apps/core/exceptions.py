import logging

from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    NotAuthenticated,
    Throttled,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.core.utils.extract_error import extract_validation_error_message

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """
    Base class for business-rule failures raised by service layers.

    Subclasses set ``code`` (machine readable reason), ``status_code`` and a
    default ``message``; any keyword arguments become extra response fields.
    """

    code = "error"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request could not be processed"

    def __init__(self, message=None, **extra):
        self.message = message or self.message
        self.extra = extra
        super().__init__(self.message)

    def get_payload(self):
        return {"error": self.code, "message": self.message, **self.extra}


def custom_exception_handler(exc, context):
    """
    Render every failure as a structured JSON body with a reason code and a
    human readable message. Service errors carry their own payload, auth
    failures become ``unauthorized``, throttling keeps a dynamic wait message
    and anything unexpected is logged and returned as ``internal_error``.
    """
    if isinstance(exc, ServiceError):
        return Response(exc.get_payload(), status=exc.status_code)

    # Let DRF build the default error response first (status code, headers).
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response(
            {"error": "internal_error", "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        response.data = {
            "error": "unauthorized",
            "message": "Unauthorized - Please login to place a bid",
        }
        response.status_code = status.HTTP_401_UNAUTHORIZED

    elif isinstance(exc, Throttled):
        wait_seconds = int(exc.wait) if exc.wait is not None else None
        view = context.get("view", None)
        throttles = [] if view is None else getattr(view, "get_throttles", lambda: [])()
        scope = getattr(throttles[0], "scope", None) if throttles else None

        if scope == "bid_evaluate":
            detail = "Too many bids. Please wait before placing another bid."
        elif wait_seconds is not None:
            detail = f"Request rate limit exceeded. Please wait {wait_seconds} seconds and try again."
        else:
            detail = "Request rate limit exceeded. Please try again later."

        response.data = {
            "error": "throttled",
            "message": detail,
            "retry_after": wait_seconds,
        }
        response.status_code = status.HTTP_429_TOO_MANY_REQUESTS

    elif isinstance(exc, ValidationError):
        response.data = {
            "error": "invalid_request",
            "message": extract_validation_error_message(exc),
            "fields": exc.detail,
        }

    return response
