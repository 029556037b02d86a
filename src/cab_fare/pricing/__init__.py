"""Rate resolution and fare calculation."""

from .calculator import FareCalculator, calculate_fare
from .car_category import get_car_category, map_car_to_subtype
from .models import (
    FareBreakdown,
    FareResult,
    LegacyCabTypeRule,
    PricingRule,
    RateMeterRule,
    ServiceType,
    TripRequest,
    TripType,
)
from .multipliers import (
    DEFAULT_CAR_CATEGORY,
    ROUND_TRIP_KM_PER_DAY,
    SERVICE_MULTIPLIERS,
    TRIP_MULTIPLIERS,
)
from .resolver import RateResolver, RuleStore, resolve_rate

__all__ = [
    "FareCalculator",
    "calculate_fare",
    "RateResolver",
    "RuleStore",
    "resolve_rate",
    "get_car_category",
    "map_car_to_subtype",
    "FareBreakdown",
    "FareResult",
    "LegacyCabTypeRule",
    "PricingRule",
    "RateMeterRule",
    "ServiceType",
    "TripRequest",
    "TripType",
    "DEFAULT_CAR_CATEGORY",
    "ROUND_TRIP_KM_PER_DAY",
    "SERVICE_MULTIPLIERS",
    "TRIP_MULTIPLIERS",
]
