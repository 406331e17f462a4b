from django import forms
from django.contrib import admin

from apps.bidding.models import (
    BidAttempt,
    BidCouponBalance,
    ProductThreshold,
    UserSpending,
)


class ProductThresholdAdminForm(forms.ModelForm):
    class Meta:
        model = ProductThreshold
        fields = "__all__"

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get("is_clearance") and cleaned_data.get("clearance_threshold") is None:
            self.add_error(
                "clearance_threshold", "A clearance product needs a clearance threshold"
            )
        clearance = cleaned_data.get("clearance_threshold")
        if clearance is not None and clearance < 0:
            self.add_error("clearance_threshold", "Clearance threshold cannot be negative")
        return cleaned_data


@admin.register(ProductThreshold)
class ProductThresholdAdmin(admin.ModelAdmin):
    """
    Operators flag clearance stock here. The computed prices are read-only:
    they are a snapshot taken on the first bid for the product.
    """

    form = ProductThresholdAdminForm
    list_display = (
        "product_id",
        "base_threshold",
        "min_safe_threshold",
        "demand_level",
        "is_clearance",
        "clearance_threshold",
        "created_at",
    )
    list_filter = ("demand_level", "is_clearance")
    list_editable = ("is_clearance", "clearance_threshold")
    search_fields = ("product_id",)
    readonly_fields = (
        "seller_cost",
        "base_threshold",
        "min_safe_threshold",
        "demand_level",
        "created_at",
        "updated_at",
    )
    fieldsets = (
        (
            "Computed",
            {
                "fields": (
                    "product_id",
                    "seller_cost",
                    "base_threshold",
                    "min_safe_threshold",
                    "demand_level",
                )
            },
        ),
        ("Clearance", {"fields": ("is_clearance", "clearance_threshold")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )
    actions = ["end_clearance"]

    def get_changelist_form(self, request, **kwargs):
        # Inline list edits go through the same clearance checks
        kwargs.setdefault("form", ProductThresholdAdminForm)
        return super().get_changelist_form(request, **kwargs)

    @admin.action(description="End clearance for selected products")
    def end_clearance(self, request, queryset):
        updated = queryset.update(is_clearance=False, clearance_threshold=None)
        self.message_user(request, f"Clearance ended for {updated} product(s)")


@admin.register(BidAttempt)
class BidAttemptAdmin(admin.ModelAdmin):
    list_display = (
        "product_id",
        "user_email",
        "bid_amount",
        "final_threshold",
        "status",
        "attempt_number",
        "used_free_coupon",
        "created_at",
    )
    list_filter = ("status", "used_free_coupon")
    search_fields = ("product_id", "user__email", "user__username")
    date_hierarchy = "created_at"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def user_email(self, obj):
        return obj.user.email or obj.user.get_username()

    user_email.short_description = "User"


@admin.register(UserSpending)
class UserSpendingAdmin(admin.ModelAdmin):
    list_display = ("user", "total_spent", "spend_level", "updated_at")
    list_filter = ("spend_level",)
    search_fields = ("user__email", "user__username")
    readonly_fields = ("total_spent", "spend_level", "created_at", "updated_at")


@admin.register(BidCouponBalance)
class BidCouponBalanceAdmin(admin.ModelAdmin):
    list_display = ("user", "free_bids_remaining", "total_free_bids_used", "updated_at")
    search_fields = ("user__email", "user__username")
    readonly_fields = ("total_free_bids_used", "created_at", "updated_at")
