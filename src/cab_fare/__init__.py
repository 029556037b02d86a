"""Fare calculation and rate resolution for cab bookings."""

from .pricing import (
    FareCalculator,
    FareResult,
    RateResolver,
    TripRequest,
    calculate_fare,
    resolve_rate,
)

__all__ = [
    "FareCalculator",
    "FareResult",
    "RateResolver",
    "TripRequest",
    "calculate_fare",
    "resolve_rate",
]
