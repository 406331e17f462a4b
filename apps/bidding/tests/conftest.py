from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.bidding.models import BidCouponBalance, UserSpending


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def create_user(db):
    User = get_user_model()
    return User.objects.create_user(
        username="bidder",
        email="bidder@example.com",
        password="testpassword123",
    )


@pytest.fixture
def staff_user(db):
    User = get_user_model()
    return User.objects.create_user(
        username="operator",
        email="operator@example.com",
        password="testpassword123",
        is_staff=True,
    )


@pytest.fixture
def loyal_user(db):
    """Level 2 customer who has spent 6,000."""
    User = get_user_model()
    user = User.objects.create_user(
        username="loyal",
        email="loyal@example.com",
        password="testpassword123",
    )
    UserSpending.objects.create(user=user, total_spent=Decimal("6000"), spend_level=2)
    return user


@pytest.fixture
def broke_user(db):
    """No free bids left and only 500 spent."""
    User = get_user_model()
    user = User.objects.create_user(
        username="broke",
        email="broke@example.com",
        password="testpassword123",
    )
    UserSpending.objects.create(user=user, total_spent=Decimal("500"), spend_level=0)
    BidCouponBalance.objects.create(
        user=user, free_bids_remaining=0, total_free_bids_used=5
    )
    return user


@pytest.fixture
def bid_payload():
    return {
        "productId": "watch-123",
        "bidAmount": "4000",
        "productCategory": "watches",
        "productPrice": "4999",
        "productOriginalPrice": "9999",
        "useFreeCoupon": True,
    }
