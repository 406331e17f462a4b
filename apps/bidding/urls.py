from django.urls import include, path
from rest_framework.routers import DefaultRouter

from apps.bidding.views import (
    BidAttemptAdminViewSet,
    BiddingAdminViewSet,
    BidViewSet,
    ProductThresholdAdminViewSet,
)

router = DefaultRouter()
router.register(r"bids/admin/attempts", BidAttemptAdminViewSet, basename="bid-attempt")
router.register(
    r"bids/admin/thresholds", ProductThresholdAdminViewSet, basename="product-threshold"
)
router.register(r"bids/admin", BiddingAdminViewSet, basename="bidding-admin")
router.register(r"bids", BidViewSet, basename="bid")

urlpatterns = [
    path("", include(router.urls)),
]

"""
Endpoints (mounted under /api/v1/):

Bidder:
1. POST /bids/evaluate/
   Body: {"productId", "bidAmount", "productCategory", "productPrice",
          "productOriginalPrice", "useFreeCoupon"}
2. GET /bids/quota/
3. GET /bids/attempts/{product_id}/
4. GET /bids/eligibility/?category=watches&price=4999   (public)

Staff:
5. GET /bids/admin/attempts/?status=rejected&product_id=watch-123&user=4&used_free_coupon=true
6. GET /bids/admin/attempts/{id}/
7. GET /bids/admin/thresholds/?is_clearance=true
8. GET /bids/admin/thresholds/{product_id}/
9. GET /bids/admin/stats/
"""
