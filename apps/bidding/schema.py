from drf_spectacular.utils import (
    OpenApiExample,
    OpenApiParameter,
    OpenApiResponse,
    OpenApiTypes,
    extend_schema,
    inline_serializer,
)
from rest_framework import serializers

from apps.bidding.serializers import EligibilityQuerySerializer, EvaluateBidSerializer

BID_ERROR_RESPONSE = inline_serializer(
    name="BidErrorResponse",
    fields={
        "error": serializers.CharField(),
        "message": serializers.CharField(),
        "eligible": serializers.BooleanField(required=False),
    },
)

BID_RESULT_RESPONSE = inline_serializer(
    name="BidResultResponse",
    fields={
        "success": serializers.BooleanField(),
        "accepted": serializers.BooleanField(),
        "bidPrice": serializers.DecimalField(max_digits=12, decimal_places=2),
        "message": serializers.CharField(),
        "suggestedIncreases": serializers.ListField(
            child=serializers.IntegerField(), required=False
        ),
        "attemptsRemaining": serializers.IntegerField(required=False),
        "attemptsUsed": serializers.IntegerField(),
        "maxAttempts": serializers.IntegerField(),
    },
)

EVALUATE_BID = extend_schema(
    summary="Evaluate a reverse bid",
    request=EvaluateBidSerializer,
    responses={
        200: BID_RESULT_RESPONSE,
        400: OpenApiResponse(
            BID_ERROR_RESPONSE,
            description="category_excluded, below_price_floor, max_attempts or invalid_request",
        ),
        401: OpenApiResponse(BID_ERROR_RESPONSE, description="unauthorized"),
        403: OpenApiResponse(BID_ERROR_RESPONSE, description="spend_required"),
    },
    examples=[
        OpenApiExample(
            "Bid on a watch",
            value={
                "productId": "watch-123",
                "bidAmount": 4200,
                "productCategory": "watches",
                "productPrice": 4999,
                "productOriginalPrice": 9999,
                "useFreeCoupon": True,
            },
            request_only=True,
        )
    ],
)

USER_QUOTA = extend_schema(summary="Free bid cards and spend access of the caller")

BID_ATTEMPTS = extend_schema(
    summary="Attempts used by the caller on one product",
    parameters=[
        OpenApiParameter(
            name="product_id",
            description="Storefront product identifier",
            required=True,
            type=OpenApiTypes.STR,
            location=OpenApiParameter.PATH,
        )
    ],
)

BID_ELIGIBILITY = extend_schema(
    summary="Advisory bidding eligibility for a product",
    parameters=[EligibilityQuerySerializer],
)

BIDDING_STATS = extend_schema(summary="Aggregate bidding counters")
