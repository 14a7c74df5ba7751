"""
Fixed-Threshold Classifications

Every categorical bucket used by the reports and the analytical queries is a
``str`` enumeration plus a pure classifier over plain numbers. The enum value
is the label that ends up in the output frames.
"""

from enum import Enum
from typing import Optional


class AgeGroup(str, Enum):
    """Customer age bucket"""
    UNDER_20 = "Under 20"
    AGE_20_29 = "20-29"
    AGE_30_39 = "30-39"
    AGE_40_49 = "40-49"
    AGE_50_PLUS = "50 and above"


class CustomerSegment(str, Enum):
    """Customer segment by relationship length and spend"""
    VIP = "VIP"
    REGULAR = "Regular"
    NEW = "New"


class ProductSegment(str, Enum):
    """Product segment by total revenue"""
    HIGH_PERFORMER = "High-Performer"
    MID_RANGE = "Mid-Range"
    LOW_PERFORMER = "Low-Performer"


class CostRange(str, Enum):
    """Product cost band"""
    BELOW_100 = "Below 100"
    FROM_100_TO_500 = "100-500"
    FROM_500_TO_1000 = "500-1000"
    ABOVE_1000 = "Above 1000"


class ChangeDirection(str, Enum):
    """Direction of a period-over-period change"""
    INCREASE = "Increase"
    DECREASE = "Decrease"
    NO_CHANGE = "No Change"


class AverageComparison(str, Enum):
    """Position of a value relative to its average"""
    ABOVE_AVG = "Above Avg"
    BELOW_AVG = "Below Avg"
    AVG = "Avg"


# Segment thresholds
VIP_MIN_LIFESPAN_MONTHS = 12
VIP_MIN_SALES = 5000
HIGH_PERFORMER_MIN_SALES = 50000
MID_RANGE_MIN_SALES = 10000


def classify_age(age: Optional[int]) -> Optional[AgeGroup]:
    """Bucket an age in years; unknown age has no group"""
    if age is None:
        return None
    if age < 20:
        return AgeGroup.UNDER_20
    if age < 30:
        return AgeGroup.AGE_20_29
    if age < 40:
        return AgeGroup.AGE_30_39
    if age < 50:
        return AgeGroup.AGE_40_49
    return AgeGroup.AGE_50_PLUS


def classify_customer(lifespan: int, total_sales: float) -> CustomerSegment:
    """
    Segment a customer.

    VIP and Regular both need at least a year of history; spend above 5000
    separates them. Everyone else is New.
    """
    if lifespan >= VIP_MIN_LIFESPAN_MONTHS:
        if total_sales > VIP_MIN_SALES:
            return CustomerSegment.VIP
        return CustomerSegment.REGULAR
    return CustomerSegment.NEW


def classify_product(total_sales: float) -> ProductSegment:
    """Segment a product by its total revenue"""
    if total_sales > HIGH_PERFORMER_MIN_SALES:
        return ProductSegment.HIGH_PERFORMER
    if total_sales >= MID_RANGE_MIN_SALES:
        return ProductSegment.MID_RANGE
    return ProductSegment.LOW_PERFORMER


def classify_cost(cost: Optional[float]) -> Optional[CostRange]:
    """Band a product cost; 500 falls in 100-500"""
    if cost is None:
        return None
    if cost < 100:
        return CostRange.BELOW_100
    if cost <= 500:
        return CostRange.FROM_100_TO_500
    if cost <= 1000:
        return CostRange.FROM_500_TO_1000
    return CostRange.ABOVE_1000


def classify_change(delta: Optional[float]) -> ChangeDirection:
    """Direction of a delta; a missing prior period counts as no change"""
    if delta is None or delta == 0:
        return ChangeDirection.NO_CHANGE
    if delta > 0:
        return ChangeDirection.INCREASE
    return ChangeDirection.DECREASE


def classify_average(delta: Optional[float]) -> AverageComparison:
    """Position relative to the average given ``value - average``"""
    if delta is None or delta == 0:
        return AverageComparison.AVG
    if delta > 0:
        return AverageComparison.ABOVE_AVG
    return AverageComparison.BELOW_AVG
