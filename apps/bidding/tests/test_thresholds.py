from decimal import Decimal

import pytest

from apps.bidding.models import ProductThreshold
from apps.bidding.services.thresholds import (
    ClearanceOverride,
    DemandAdjuster,
    LoyaltyAdjuster,
    ThresholdCalculator,
    ThresholdData,
    ThresholdService,
    compute_final_threshold,
)


class TestThresholdCalculator:
    def test_watch_below_cost_floor(self):
        data = ThresholdCalculator.calculate(4999, 9999)

        assert data.seller_cost == Decimal("5499")
        assert data.base_threshold == Decimal("4499")
        assert data.min_safe_threshold == Decimal("5939")
        assert data.demand_level == ProductThreshold.DemandLevel.MEDIUM

    def test_rounds_half_up(self):
        # 4985 * 0.90 = 4486.5 and 550 * 1.08 = 594
        data = ThresholdCalculator.calculate(4985, 1000)
        assert data.base_threshold == Decimal("4487")
        assert data.min_safe_threshold == Decimal("594")

    @pytest.mark.parametrize(
        "price,level",
        [
            (5001, "high"),
            (5000, "medium"),
            (2001, "medium"),
            (2000, "low"),
            (1000, "low"),
        ],
    )
    def test_demand_level_boundaries(self, price, level):
        assert ThresholdCalculator.demand_level_for(price) == level

    def test_is_deterministic(self):
        assert ThresholdCalculator.calculate(7321, 8100) == ThresholdCalculator.calculate(
            7321, 8100
        )


class TestLoyaltyAdjuster:
    @pytest.mark.parametrize(
        "spend_level,total_spent,multiplier",
        [
            (0, 0, Decimal("1")),
            (0, 2999, Decimal("1")),
            (0, 3000, Decimal("0.96")),
            (0, 4000, Decimal("0.92")),
            (1, 0, Decimal("0.92")),
            (0, 5000, Decimal("0.88")),
            (2, 0, Decimal("0.88")),
        ],
    )
    def test_tiers(self, spend_level, total_spent, multiplier):
        assert LoyaltyAdjuster.multiplier_for(spend_level, total_spent) == multiplier

    def test_clamped_to_floor(self):
        result = LoyaltyAdjuster.adjust(Decimal("4499"), Decimal("5939"), 2, 6000)
        assert result == Decimal("5939")

    def test_higher_spend_never_raises_threshold(self):
        base, floor = Decimal("9000"), Decimal("1000")
        previous = None
        for spent in range(0, 7000, 250):
            current = LoyaltyAdjuster.adjust(base, floor, 0, spent)
            if previous is not None:
                assert current <= previous
            previous = current


class TestDemandAdjuster:
    def test_high_demand_keeps_threshold(self):
        assert DemandAdjuster.adjust(Decimal("7920"), Decimal("5940"), "high") == Decimal(
            "7920"
        )

    def test_low_demand_discount(self):
        assert DemandAdjuster.adjust(Decimal("1000"), Decimal("500"), "low") == Decimal(
            "930"
        )

    def test_clamped_to_floor(self):
        assert DemandAdjuster.adjust(Decimal("5939"), Decimal("5939"), "medium") == Decimal(
            "5939"
        )


class TestClearanceOverride:
    def make_data(self, **overrides):
        values = {
            "seller_cost": Decimal("2750"),
            "base_threshold": Decimal("4500"),
            "min_safe_threshold": Decimal("2970"),
            "demand_level": "medium",
            "is_clearance": True,
            "clearance_threshold": Decimal("3200"),
        }
        values.update(overrides)
        return ThresholdData(**values)

    def test_applies_to_level_one_only(self):
        data = self.make_data()
        assert ClearanceOverride.apply(Decimal("4000"), data, 1) == Decimal("3200")
        assert ClearanceOverride.apply(Decimal("4000"), data, 0) == Decimal("4000")
        assert ClearanceOverride.apply(Decimal("4000"), data, 2) == Decimal("4000")

    def test_never_below_floor(self):
        data = self.make_data(clearance_threshold=Decimal("1000"))
        assert ClearanceOverride.apply(Decimal("4000"), data, 1) == Decimal("2970")

    def test_ignored_without_clearance_price(self):
        data = self.make_data(clearance_threshold=None)
        assert ClearanceOverride.apply(Decimal("4000"), data, 1) == Decimal("4000")


class TestComputeFinalThreshold:
    def test_new_customer_gets_floor(self):
        data = ThresholdCalculator.calculate(4999, 9999)
        assert compute_final_threshold(data, 0, 0) == Decimal("5939")

    def test_loyal_customer_on_premium_product(self):
        data = ThresholdCalculator.calculate(10000, 10000)
        assert data.min_safe_threshold == Decimal("5940")
        assert compute_final_threshold(data, 2, 6000) == Decimal("7920")

    @pytest.mark.parametrize("price,original", [(1000, 5000), (2500, 2500), (9000, 30000)])
    @pytest.mark.parametrize("spend_level,total_spent", [(0, 0), (1, 3500), (2, 9000)])
    def test_never_below_floor(self, price, original, spend_level, total_spent):
        data = ThresholdCalculator.calculate(price, original)
        final = compute_final_threshold(data, spend_level, total_spent)
        assert final >= data.min_safe_threshold


@pytest.mark.django_db
class TestThresholdService:
    def test_creates_once(self):
        threshold, created = ThresholdService.get_or_create_threshold("sku-1", 4999, 9999)

        assert created is True
        assert threshold.min_safe_threshold == Decimal("5939")
        assert threshold.is_clearance is False

    def test_keeps_first_price_snapshot(self):
        ThresholdService.get_or_create_threshold("sku-1", 4999, 9999)
        threshold, created = ThresholdService.get_or_create_threshold("sku-1", 20000, 20000)

        assert created is False
        assert threshold.base_threshold == Decimal("4499")
        assert ProductThreshold.objects.filter(product_id="sku-1").count() == 1
