import pytest

from apps.bidding.services.eligibility import EligibilityService
from apps.bidding.utils.exceptions import IneligibleCategory, IneligiblePrice


class TestEligibilityService:
    @pytest.mark.parametrize("category", ["mobiles", "Laptops", "  ELECTRONICS "])
    def test_fixed_price_categories(self, category):
        result = EligibilityService.check(category, 50000)
        assert result.eligible is False
        assert result.reason == "category_excluded"

    def test_price_floor(self):
        result = EligibilityService.check("watches", 999)
        assert result.eligible is False
        assert result.reason == "below_price_floor"

    def test_floor_is_inclusive(self):
        assert EligibilityService.check("watches", 1000).eligible is True

    def test_category_checked_before_price(self):
        assert EligibilityService.check("mobiles", 10).reason == "category_excluded"

    def test_unlisted_category_is_still_eligible(self):
        # The storefront allow-list is advisory only
        assert EligibilityService.check("garden", 2500).eligible is True

    def test_ensure_eligible_raises(self):
        with pytest.raises(IneligibleCategory):
            EligibilityService.ensure_eligible("electronics", 5000)
        with pytest.raises(IneligiblePrice) as exc_info:
            EligibilityService.ensure_eligible("shoes", 500)

        payload = exc_info.value.get_payload()
        assert payload["error"] == "below_price_floor"
        assert payload["eligible"] is False


class TestSuggestedCategories:
    @pytest.mark.parametrize(
        "category", ["fashion", "Watches", "mens-clothing", "women", "sports footwear"]
    )
    def test_suggested(self, category):
        assert EligibilityService.is_suggested_category(category) is True

    @pytest.mark.parametrize("category", ["garden", "", None])
    def test_not_suggested(self, category):
        assert EligibilityService.is_suggested_category(category) is False

    def test_hint_never_suggests_ineligible_product(self):
        hint = EligibilityService.get_hint("watches", 500)
        assert hint["eligible"] is False
        assert hint["suggested"] is False
