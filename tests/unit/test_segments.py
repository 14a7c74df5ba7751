"""
Unit Tests - Segment Classifiers
"""
import pytest

from gold_analytics.reporting.segments import (
    AgeGroup,
    AverageComparison,
    ChangeDirection,
    CostRange,
    CustomerSegment,
    ProductSegment,
    classify_age,
    classify_average,
    classify_change,
    classify_cost,
    classify_customer,
    classify_product,
)


class TestClassifyAge:
    """Tests for age buckets"""

    @pytest.mark.parametrize("age,expected", [
        (0, AgeGroup.UNDER_20),
        (19, AgeGroup.UNDER_20),
        (20, AgeGroup.AGE_20_29),
        (29, AgeGroup.AGE_20_29),
        (30, AgeGroup.AGE_30_39),
        (45, AgeGroup.AGE_40_49),
        (50, AgeGroup.AGE_50_PLUS),
        (87, AgeGroup.AGE_50_PLUS),
    ])
    def test_bucket_boundaries(self, age, expected):
        """Test bucket boundaries"""
        assert classify_age(age) == expected

    def test_unknown_age_has_no_group(self):
        """Test unknown age has no group"""
        assert classify_age(None) is None

    def test_labels(self):
        """Enum values are the report labels"""
        assert AgeGroup.UNDER_20.value == "Under 20"
        assert AgeGroup.AGE_50_PLUS.value == "50 and above"


class TestClassifyCustomer:
    """Tests for VIP / Regular / New segmentation"""

    def test_vip_needs_history_and_spend(self):
        """Test VIP needs history and spend"""
        assert classify_customer(12, 5000.01) == CustomerSegment.VIP

    def test_spend_of_exactly_5000_is_regular(self):
        """Test spend of exactly 5000 is regular"""
        assert classify_customer(24, 5000) == CustomerSegment.REGULAR

    def test_short_history_is_new_regardless_of_spend(self):
        """Test short history is new regardless of spend"""
        assert classify_customer(11, 1_000_000) == CustomerSegment.NEW

    def test_zero_lifespan_is_new(self):
        """Test zero lifespan is new"""
        assert classify_customer(0, 0) == CustomerSegment.NEW


class TestClassifyProduct:
    """Tests for product revenue segments"""

    def test_mid_range(self):
        """Test mid range"""
        assert classify_product(12000) == ProductSegment.MID_RANGE

    def test_high_performer(self):
        """Test high performer"""
        assert classify_product(60000) == ProductSegment.HIGH_PERFORMER

    def test_boundaries(self):
        """Test revenue on a band edge falls in the middle band"""
        assert classify_product(50000) == ProductSegment.MID_RANGE
        assert classify_product(10000) == ProductSegment.MID_RANGE
        assert classify_product(9999.99) == ProductSegment.LOW_PERFORMER

    def test_labels(self):
        """Test segment labels"""
        assert ProductSegment.HIGH_PERFORMER.value == "High-Performer"
        assert ProductSegment.LOW_PERFORMER.value == "Low-Performer"


class TestClassifyCost:
    """Tests for cost bands"""

    @pytest.mark.parametrize("cost,expected", [
        (0, CostRange.BELOW_100),
        (99.99, CostRange.BELOW_100),
        (100, CostRange.FROM_100_TO_500),
        (500, CostRange.FROM_100_TO_500),
        (500.01, CostRange.FROM_500_TO_1000),
        (1000, CostRange.FROM_500_TO_1000),
        (1000.01, CostRange.ABOVE_1000),
    ])
    def test_bands(self, cost, expected):
        """Test cost band edges"""
        assert classify_cost(cost) == expected

    def test_missing_cost(self):
        """Test missing cost"""
        assert classify_cost(None) is None


class TestDirections:
    """Tests for change and average comparisons"""

    def test_change_direction(self):
        """Test change direction"""
        assert classify_change(10) == ChangeDirection.INCREASE
        assert classify_change(-0.5) == ChangeDirection.DECREASE
        assert classify_change(0) == ChangeDirection.NO_CHANGE

    def test_missing_prior_period_is_no_change(self):
        """Test missing prior period is no change"""
        assert classify_change(None) == ChangeDirection.NO_CHANGE

    def test_average_comparison(self):
        """Test average comparison"""
        assert classify_average(1) == AverageComparison.ABOVE_AVG
        assert classify_average(-1) == AverageComparison.BELOW_AVG
        assert classify_average(0) == AverageComparison.AVG
        assert classify_average(0).value == "Avg"
