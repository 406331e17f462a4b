import logging

from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from apps.bidding.models import BidAttempt, ProductThreshold
from apps.bidding.schema import (
    BID_ATTEMPTS,
    BID_ELIGIBILITY,
    BIDDING_STATS,
    EVALUATE_BID,
    USER_QUOTA,
)
from apps.bidding.serializers import (
    BidAttemptSerializer,
    EligibilityQuerySerializer,
    EvaluateBidSerializer,
    ProductThresholdSerializer,
)
from apps.bidding.services.analytics import BiddingAnalyticsService
from apps.bidding.services.attempts import AttemptLedger
from apps.bidding.services.eligibility import EligibilityService
from apps.bidding.services.negotiation import BidNegotiationService
from apps.bidding.services.quota import QuotaService
from apps.bidding.utils.filters import BidAttemptFilter, ProductThresholdFilter
from apps.bidding.utils.rate_limiting import (
    BidAdminRateThrottle,
    BidEvaluateRateThrottle,
    BidReadRateThrottle,
)
from apps.core.views import BaseReadOnlyViewSet, BaseResponseMixin

logger = logging.getLogger("bidding_performance")


class BidViewSet(BaseResponseMixin, viewsets.ViewSet):
    """Bid submission and the bidder's own quota/attempt reads"""

    permission_classes = [IsAuthenticated]
    throttle_classes = [BidReadRateThrottle]

    @EVALUATE_BID
    @action(
        detail=False,
        methods=["post"],
        throttle_classes=[BidEvaluateRateThrottle],
    )
    def evaluate(self, request):
        """
        Evaluate a bid against the product's hidden threshold.
        Failures are raised as BidError and rendered by the exception handler.
        """
        start_time = timezone.now()

        serializer = EvaluateBidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        evaluation = BidNegotiationService.evaluate_bid(
            user=request.user, **serializer.validated_data
        )

        duration = (timezone.now() - start_time).total_seconds() * 1000
        logger.info(f"Bid request handled in {duration:.2f}ms")
        return Response(evaluation.to_response(), status=status.HTTP_200_OK)

    @USER_QUOTA
    @action(detail=False, methods=["get"])
    def quota(self, request):
        return self.success_response(
            data=QuotaService.get_user_quota(request.user),
            message="Bid quota retrieved successfully",
        )

    @BID_ATTEMPTS
    @action(
        detail=False,
        methods=["get"],
        url_path=r"attempts/(?P<product_id>[^/]+)",
        url_name="attempts",
    )
    def attempts(self, request, product_id=None):
        return self.success_response(
            data=AttemptLedger.get_attempt_summary(request.user, product_id),
            message="Bid attempts retrieved successfully",
        )

    @BID_ELIGIBILITY
    @action(detail=False, methods=["get"], permission_classes=[AllowAny])
    def eligibility(self, request):
        serializer = EligibilityQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return self.success_response(
            data=EligibilityService.get_hint(
                serializer.validated_data["category"],
                serializer.validated_data["price"],
            ),
            message="Eligibility checked",
        )


class BidAttemptAdminViewSet(BaseReadOnlyViewSet):
    """Paginated, filterable log of every recorded bid"""

    queryset = BidAttempt.objects.select_related("user")
    serializer_class = BidAttemptSerializer
    permission_classes = [IsAdminUser]
    throttle_classes = [BidAdminRateThrottle]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BidAttemptFilter


class ProductThresholdAdminViewSet(BaseReadOnlyViewSet):
    queryset = ProductThreshold.objects.all()
    serializer_class = ProductThresholdSerializer
    permission_classes = [IsAdminUser]
    throttle_classes = [BidAdminRateThrottle]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductThresholdFilter
    lookup_field = "product_id"
    lookup_value_regex = r"[^/]+"


class BiddingAdminViewSet(BaseResponseMixin, viewsets.ViewSet):
    permission_classes = [IsAdminUser]
    throttle_classes = [BidAdminRateThrottle]

    @BIDDING_STATS
    @action(detail=False, methods=["get"])
    def stats(self, request):
        return self.success_response(
            data=BiddingAnalyticsService.get_bidding_stats(),
            message="Bidding stats retrieved successfully",
        )
