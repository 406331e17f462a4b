from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.bidding.models import BidAttempt, BidCouponBalance
from apps.bidding.services.quota import QuotaService


@pytest.mark.django_db
class TestEvaluateBidEndpoint:
    @property
    def url(self):
        return reverse("bid-evaluate")

    def test_requires_authentication(self, api_client, bid_payload):
        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {
            "error": "unauthorized",
            "message": "Unauthorized - Please login to place a bid",
        }

    def test_invalid_request(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        del bid_payload["bidAmount"]

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "invalid_request"
        assert "bidAmount" in response.data["fields"]

    def test_non_positive_bid(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        bid_payload["bidAmount"] = "0"

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "invalid_request"

    def test_excluded_category(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        bid_payload["productCategory"] = "Electronics"

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "category_excluded"
        assert response.data["eligible"] is False

    def test_price_floor(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        bid_payload.update({"productPrice": "999", "bidAmount": "900"})

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "below_price_floor"

    def test_spend_required(self, api_client, broke_user, bid_payload):
        api_client.force_authenticate(user=broke_user)

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        body = response.json()
        assert body["error"] == "spend_required"
        assert body["eligible"] is False
        assert body["freeBidsRemaining"] == 0
        assert body["totalSpent"] == 500
        assert body["spendRequired"] == 2500

    def test_rejected_bid(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["accepted"] is False
        assert body["bidPrice"] == 4000
        assert body["message"] == "Your bid is too low. Try a slightly higher amount."
        assert body["suggestedIncreases"] == [50, 100, 200]
        assert body["attemptsRemaining"] == 2
        assert body["attemptsUsed"] == 1
        assert body["maxAttempts"] == 3

    def test_accepted_bid(self, api_client, loyal_user, bid_payload):
        api_client.force_authenticate(user=loyal_user)
        bid_payload.update(
            {
                "productId": "bag-9",
                "bidAmount": "8700",
                "productCategory": "bags",
                "productPrice": "10000",
                "productOriginalPrice": "10000",
            }
        )

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["accepted"] is True
        assert body["bidPrice"] == 8700
        assert body["attemptsUsed"] == 1
        assert "suggestedIncreases" not in body

    def test_max_attempts(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        for _ in range(3):
            api_client.post(self.url, bid_payload, format="json")

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "max_attempts"
        assert response.data["attemptsUsed"] == 3
        assert response.data["maxAttempts"] == 3
        assert BidAttempt.objects.filter(user=create_user).count() == 3

    def test_missing_category(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        del bid_payload["productCategory"]

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "invalid_request"
        assert "productCategory" in response.data["fields"]
        assert not BidAttempt.objects.exists()

    def test_failed_coupon_decrement(
        self, api_client, create_user, bid_payload, monkeypatch
    ):
        api_client.force_authenticate(user=create_user)
        monkeypatch.setattr(QuotaService, "consume_coupon", lambda user: False)

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {
            "error": "internal_error",
            "message": "Internal server error",
        }
        assert not BidAttempt.objects.exists()

    def test_legacy_coupon_key(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        del bid_payload["useFreeCoupon"]
        bid_payload["useFreeCopon"] = True

        response = api_client.post(self.url, bid_payload, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert BidCouponBalance.objects.get(user=create_user).free_bids_remaining == 4


@pytest.mark.django_db
class TestBidderReadEndpoints:
    def test_quota(self, api_client, create_user):
        api_client.force_authenticate(user=create_user)

        response = api_client.get(reverse("bid-quota"))

        assert response.status_code == status.HTTP_200_OK
        data = response.data["data"]
        assert data["freeBidsRemaining"] == 5
        assert data["canBid"] is True
        assert data["spendRequired"] == Decimal("3000")

    def test_quota_refreshes_after_bid(
        self, api_client, create_user, bid_payload, django_capture_on_commit_callbacks
    ):
        api_client.force_authenticate(user=create_user)
        api_client.get(reverse("bid-quota"))

        with django_capture_on_commit_callbacks(execute=True):
            api_client.post(reverse("bid-evaluate"), bid_payload, format="json")

        response = api_client.get(reverse("bid-quota"))
        assert response.data["data"]["freeBidsRemaining"] == 4

    def test_quota_requires_authentication(self, api_client):
        response = api_client.get(reverse("bid-quota"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_attempts(self, api_client, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        api_client.post(reverse("bid-evaluate"), bid_payload, format="json")

        response = api_client.get(
            reverse("bid-attempts", kwargs={"product_id": "watch-123"})
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.data["data"]
        assert data["attemptsUsed"] == 1
        assert data["attemptsRemaining"] == 2
        assert data["state"] == "NEGOTIATING"

    def test_attempts_not_started(self, api_client, create_user):
        api_client.force_authenticate(user=create_user)

        response = api_client.get(reverse("bid-attempts", kwargs={"product_id": "other"}))

        assert response.data["data"]["state"] == "NOT_STARTED"
        assert response.data["data"]["attemptsRemaining"] == 3

    def test_eligibility_is_public(self, api_client):
        response = api_client.get(
            reverse("bid-eligibility"), {"category": "watches", "price": "4999"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["eligible"] is True
        assert response.data["data"]["suggested"] is True

    def test_eligibility_excluded(self, api_client):
        response = api_client.get(
            reverse("bid-eligibility"), {"category": "mobiles", "price": "40000"}
        )

        assert response.data["data"]["eligible"] is False
        assert response.data["data"]["reason"] == "category_excluded"

    def test_eligibility_requires_price(self, api_client):
        response = api_client.get(reverse("bid-eligibility"), {"category": "watches"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "invalid_request"


@pytest.mark.django_db
class TestAdminEndpoints:
    @pytest.fixture
    def bids(self, create_user, loyal_user):
        BidAttempt.objects.create(
            user=create_user,
            product_id="watch-123",
            bid_amount=Decimal("4000"),
            final_threshold=Decimal("5939"),
            status=BidAttempt.Status.REJECTED,
            attempt_number=1,
            used_free_coupon=True,
        )
        BidAttempt.objects.create(
            user=loyal_user,
            product_id="bag-9",
            bid_amount=Decimal("8700"),
            final_threshold=Decimal("7920"),
            status=BidAttempt.Status.ACCEPTED,
            attempt_number=1,
        )

    def test_staff_only(self, api_client, create_user):
        api_client.force_authenticate(user=create_user)

        assert api_client.get(reverse("bid-attempt-list")).status_code == 403
        assert api_client.get(reverse("bidding-admin-stats")).status_code == 403

    def test_list_attempts(self, api_client, staff_user, bids):
        api_client.force_authenticate(user=staff_user)

        response = api_client.get(reverse("bid-attempt-list"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 2

    def test_filter_attempts(self, api_client, staff_user, bids):
        api_client.force_authenticate(user=staff_user)

        response = api_client.get(reverse("bid-attempt-list"), {"status": "accepted"})

        assert response.data["count"] == 1
        assert response.data["results"][0]["product_id"] == "bag-9"

        response = api_client.get(
            reverse("bid-attempt-list"), {"used_free_coupon": "true"}
        )
        assert response.data["count"] == 1
        assert response.data["results"][0]["user"]["email"] == "bidder@example.com"

    def test_thresholds(self, api_client, staff_user, create_user, bid_payload):
        api_client.force_authenticate(user=create_user)
        api_client.post(reverse("bid-evaluate"), bid_payload, format="json")
        api_client.force_authenticate(user=staff_user)

        response = api_client.get(
            reverse("product-threshold-detail", kwargs={"product_id": "watch-123"})
        )

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data["data"]["min_safe_threshold"]) == Decimal("5939")

    def test_stats(self, api_client, staff_user, bids):
        api_client.force_authenticate(user=staff_user)

        response = api_client.get(reverse("bidding-admin-stats"))

        assert response.status_code == status.HTTP_200_OK
        data = response.data["data"]
        assert data["totalBids"] == 2
        assert data["acceptedBids"] == 1
        assert data["rejectedBids"] == 1
        assert data["acceptanceRate"] == 50
        assert data["freeCouponBids"] == 1
