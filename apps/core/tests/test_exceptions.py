import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.exceptions import Throttled, ValidationError
from rest_framework.test import APIClient

from apps.core.exceptions import ServiceError, custom_exception_handler
from apps.core.utils.cache_key_manager import CacheKeyManager


class OutOfStock(ServiceError):
    code = "out_of_stock"
    status_code = status.HTTP_409_CONFLICT
    message = "Sold out"


class TestCustomExceptionHandler:
    def test_service_error_payload(self):
        response = custom_exception_handler(OutOfStock(remaining=0), {})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {
            "error": "out_of_stock",
            "message": "Sold out",
            "remaining": 0,
        }

    def test_unhandled_error_becomes_internal_error(self):
        response = custom_exception_handler(RuntimeError("boom"), {})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {
            "error": "internal_error",
            "message": "Internal server error",
        }

    def test_validation_error(self):
        exc = ValidationError({"bidAmount": ["This field is required."]})

        response = custom_exception_handler(exc, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "invalid_request"
        assert response.data["message"] == "bidAmount: This field is required."

    def test_throttled(self):
        response = custom_exception_handler(Throttled(wait=12), {})

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.data["error"] == "throttled"
        assert response.data["retry_after"] == 12


class TestCacheKeyManager:
    def test_make_key(self):
        key = CacheKeyManager.make_key(
            "bidding", "attempts", user_id=7, product_id="watch-1"
        )

        assert key == "bidding:attempts:user:7:product:watch-1"

    def test_placeholders(self):
        assert CacheKeyManager.get_template_placeholders("bidding", "attempts") == [
            "user_id",
            "product_id",
        ]

    def test_unknown_resource(self):
        with pytest.raises(KeyError):
            CacheKeyManager.make_key("unknown", "quota")


@pytest.mark.django_db
def test_response_time_header():
    response = APIClient().get(
        reverse("bid-eligibility"), {"category": "shoes", "price": "1500"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response["X-Response-Time"].endswith("ms")
