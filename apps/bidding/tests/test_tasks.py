from decimal import Decimal

import pytest

from apps.bidding.models import UserSpending
from apps.bidding.services.spending import spend_level_for
from apps.bidding.tasks import record_order_spend


@pytest.mark.parametrize(
    "total_spent,level",
    [(0, 0), (2999, 0), (3000, 1), (4999, 1), (5000, 2), (25000, 2)],
)
def test_spend_level_for(total_spent, level):
    assert spend_level_for(total_spent) == level


@pytest.mark.django_db
class TestRecordOrderSpend:
    def test_creates_spending_row(self, create_user):
        result = record_order_spend.delay(create_user.id, "1200.50").get()

        spending = UserSpending.objects.get(user=create_user)
        assert spending.total_spent == Decimal("1200.50")
        assert spending.spend_level == 0
        assert result["spend_level"] == 0

    def test_levels_up_as_spend_accumulates(self, create_user):
        record_order_spend(create_user.id, 2000)
        record_order_spend(create_user.id, 1500)
        assert UserSpending.objects.get(user=create_user).spend_level == 1

        record_order_spend(create_user.id, 1500)
        spending = UserSpending.objects.get(user=create_user)
        assert spending.total_spent == Decimal("5000")
        assert spending.spend_level == 2

    def test_level_never_drops(self, loyal_user):
        record_order_spend(loyal_user.id, 10)
        assert UserSpending.objects.get(user=loyal_user).spend_level == 2

    def test_rejects_non_positive_amount(self, create_user):
        with pytest.raises(ValueError):
            record_order_spend(create_user.id, 0)
