import django_filters

from apps.bidding.models import BidAttempt, ProductThreshold


class BidAttemptFilter(django_filters.FilterSet):
    """Filter class for the bid attempt log"""

    status = django_filters.ChoiceFilter(choices=BidAttempt.Status.choices)
    product_id = django_filters.CharFilter(field_name="product_id")
    user = django_filters.NumberFilter(field_name="user__id")
    used_free_coupon = django_filters.BooleanFilter()
    created_after = django_filters.DateTimeFilter(
        field_name="created_at", lookup_expr="gte"
    )
    created_before = django_filters.DateTimeFilter(
        field_name="created_at", lookup_expr="lte"
    )

    class Meta:
        model = BidAttempt
        fields = [
            "status",
            "product_id",
            "user",
            "used_free_coupon",
            "created_after",
            "created_before",
        ]


class ProductThresholdFilter(django_filters.FilterSet):
    demand_level = django_filters.ChoiceFilter(
        choices=ProductThreshold.DemandLevel.choices
    )
    is_clearance = django_filters.BooleanFilter()

    class Meta:
        model = ProductThreshold
        fields = ["demand_level", "is_clearance"]
