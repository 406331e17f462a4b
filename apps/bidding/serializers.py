from decimal import Decimal

from rest_framework import serializers

from apps.bidding.models import BidAttempt, ProductThreshold
from apps.core.serializers import TimestampedModelSerializer, UserShortSerializer


MONEY_MAX = Decimal("9999999999.99")


def money_field(**kwargs):
    return serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        max_value=MONEY_MAX,
        min_value=Decimal("0.00"),
        **kwargs,
    )


class EvaluateBidSerializer(serializers.Serializer):
    """Bid submission, keyed the way the storefront client sends it"""

    # Older clients send the coupon flag under a misspelt key
    LEGACY_ALIASES = {"useFreeCopon": "useFreeCoupon"}

    productId = serializers.CharField(source="product_id", max_length=100)
    bidAmount = money_field(source="bid_amount")
    productCategory = serializers.CharField(
        source="product_category", max_length=100, allow_blank=True
    )
    productPrice = money_field(source="product_price")
    productOriginalPrice = money_field(source="product_original_price")
    useFreeCoupon = serializers.BooleanField(
        source="use_free_coupon", required=False, default=False
    )

    def to_internal_value(self, data):
        missing = [
            (legacy, current)
            for legacy, current in self.LEGACY_ALIASES.items()
            if legacy in data and current not in data
        ]
        if missing:
            data = data.copy()
            for legacy, current in missing:
                data[current] = data[legacy]
        return super().to_internal_value(data)

    def validate_bidAmount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Bid amount must be greater than zero")
        return value

    def validate_productOriginalPrice(self, value):
        if value <= 0:
            raise serializers.ValidationError(
                "Original price must be greater than zero"
            )
        return value


class EligibilityQuerySerializer(serializers.Serializer):
    category = serializers.CharField(required=False, allow_blank=True, default="")
    price = money_field()


class BidAttemptSerializer(TimestampedModelSerializer):
    """Operator view of one recorded bid"""

    user = UserShortSerializer(read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    formatted_bid_amount = serializers.SerializerMethodField()

    class Meta:
        model = BidAttempt
        fields = [
            "id",
            "user",
            "product_id",
            "bid_amount",
            "formatted_bid_amount",
            "final_threshold",
            "status",
            "status_display",
            "attempt_number",
            "used_free_coupon",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_formatted_bid_amount(self, obj) -> str:
        return f"{obj.bid_amount:,.2f}"


class ProductThresholdSerializer(TimestampedModelSerializer):
    class Meta:
        model = ProductThreshold
        fields = [
            "id",
            "product_id",
            "seller_cost",
            "base_threshold",
            "min_safe_threshold",
            "demand_level",
            "is_clearance",
            "clearance_threshold",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
