"""Fare computation for local, airport and outstation trips."""

import math

from ..core.exceptions import (
    DistanceUnavailableError,
    PricingConfigurationError,
    ValidationError,
)
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
from .multipliers import ROUND_TRIP_KM_PER_DAY, legacy_multiplier
from .numeric import is_positive, round_half_up
from .resolver import parse_service_type, parse_trip_type


class FareCalculator:
    """Calculates a fare from a trip request and its resolved pricing rule.

    Pure: no I/O, and identical inputs give identical results. Breakdown
    fields are reported as computed; only ``FareResult.fare`` is rounded.
    """

    def calculate(self, request: TripRequest, rule: PricingRule) -> FareResult:
        service = parse_service_type(request.service_type)
        self._validate_measurements(request)

        if service is ServiceType.LOCAL:
            return self._local(request, rule)
        if service is ServiceType.AIRPORT:
            return self._airport(request, rule)

        trip = parse_trip_type(request.trip_type)
        if trip is None:
            raise ValidationError(
                "trip_type is required for outstation trips",
                details={"field": "trip_type", "service_type": service.value},
            )
        if trip is TripType.ROUND_TRIP:
            return self._round_trip(request, rule)
        return self._outstation_by_distance(request, rule, trip)

    def _local(self, request: TripRequest, rule: PricingRule) -> FareResult:
        hours = _whole_number(request.number_of_hours, "number_of_hours")
        if hours is None:
            raise ValidationError(
                "number_of_hours is required for local trips",
                details={"field": "number_of_hours"},
            )

        if isinstance(rule, RateMeterRule):
            if not is_positive(rule.per_hour_rate):
                raise _missing_rate(rule, request, "per_hour_rate")
            time_charge = hours * rule.per_hour_rate
            multiplier = 1.0
        else:
            if is_positive(rule.per_hour_rate):
                time_charge = hours * rule.per_hour_rate
            elif is_positive(rule.per_minute_rate):
                time_charge = rule.per_minute_rate * (hours * 60)
            else:
                raise _missing_rate(rule, request, "per_hour_rate")
            multiplier = legacy_multiplier(ServiceType.LOCAL)

        return _build_result(
            base_fare=rule.base_fare,
            distance_charge=0.0,
            time_charge=time_charge,
            multiplier=multiplier,
            distance_km=0.0,
            minutes=hours * 60,
        )

    def _round_trip(self, request: TripRequest, rule: PricingRule) -> FareResult:
        days = _days_or_default(request.number_of_days)
        distance_km = float(ROUND_TRIP_KM_PER_DAY * days)
        minutes = request.duration_min or 0.0

        if isinstance(rule, RateMeterRule):
            return _build_result(
                base_fare=rule.base_fare,
                distance_charge=distance_km * rule.per_km_rate,
                time_charge=0.0,
                multiplier=1.0,
                distance_km=distance_km,
                minutes=minutes,
            )

        # Legacy round trips are priced on the scaled base fare alone.
        return _build_result(
            base_fare=rule.base_fare,
            distance_charge=0.0,
            time_charge=0.0,
            multiplier=legacy_multiplier(ServiceType.OUTSTATION, TripType.ROUND_TRIP),
            distance_km=distance_km,
            minutes=minutes,
        )

    def _outstation_by_distance(
        self, request: TripRequest, rule: PricingRule, trip: TripType
    ) -> FareResult:
        distance_km = request.distance_km or 0.0
        minutes = request.duration_min or 0.0
        distance_charge = distance_km * rule.per_km_rate

        if isinstance(rule, RateMeterRule):
            return _build_result(
                base_fare=rule.base_fare,
                distance_charge=distance_charge,
                time_charge=0.0,
                multiplier=1.0,
                distance_km=distance_km,
                minutes=minutes,
            )

        return _build_result(
            base_fare=rule.base_fare,
            distance_charge=distance_charge,
            time_charge=minutes * (rule.per_minute_rate or 0.0),
            multiplier=legacy_multiplier(ServiceType.OUTSTATION, trip),
            distance_km=distance_km,
            minutes=minutes,
        )

    def _airport(self, request: TripRequest, rule: PricingRule) -> FareResult:
        if request.distance_km is None or request.duration_min is None:
            raise DistanceUnavailableError(
                "Could not determine the distance for this airport trip, please try again",
                details={
                    "distance_km": request.distance_km,
                    "duration_min": request.duration_min,
                },
            )

        distance_km = request.distance_km
        minutes = request.duration_min
        multiplier = (
            1.0
            if isinstance(rule, RateMeterRule)
            else legacy_multiplier(ServiceType.AIRPORT)
        )
        return _build_result(
            base_fare=rule.base_fare,
            distance_charge=distance_km * rule.per_km_rate,
            time_charge=minutes * (rule.per_minute_rate or 0.0),
            multiplier=multiplier,
            distance_km=distance_km,
            minutes=minutes,
        )

    @staticmethod
    def _validate_measurements(request: TripRequest) -> None:
        for field in ("distance_km", "duration_min"):
            value = getattr(request, field)
            if value is not None and (not math.isfinite(value) or value < 0):
                raise ValidationError(
                    f"{field} must be a finite non-negative number",
                    details={"field": field, "value": value},
                )


def calculate_fare(request: TripRequest, rule: PricingRule) -> FareResult:
    """Compute the fare for ``request`` under ``rule``."""
    return FareCalculator().calculate(request, rule)


def _build_result(
    *,
    base_fare: float,
    distance_charge: float,
    time_charge: float,
    multiplier: float,
    distance_km: float,
    minutes: float,
) -> FareResult:
    subtotal = base_fare + distance_charge + time_charge
    return FareResult(
        fare=round_half_up(subtotal * multiplier),
        distance_km=distance_km,
        estimated_time_minutes=minutes,
        breakdown=FareBreakdown(
            base_fare=base_fare,
            distance_charge=distance_charge,
            time_charge=time_charge,
            service_multiplier=multiplier,
            subtotal=subtotal,
        ),
    )


def _whole_number(value: float | None, field: str) -> int | None:
    if value is None:
        return None
    if not math.isfinite(value) or value < 1 or value != int(value):
        raise ValidationError(
            f"{field} must be a whole number of at least 1",
            details={"field": field, "value": value},
        )
    return int(value)


def _days_or_default(value: float | None) -> int:
    if value is None or (math.isfinite(value) and value <= 0):
        return 1
    days = _whole_number(value, "number_of_days")
    return days if days is not None else 1


def _missing_rate(
    rule: RateMeterRule | LegacyCabTypeRule, request: TripRequest, field: str
) -> PricingConfigurationError:
    category = rule.car_category if isinstance(rule, RateMeterRule) else rule.name
    return PricingConfigurationError(
        f"Pricing rule {rule.id} has no {field} configured for {request.service_type} trips",
        details={
            "rule_id": rule.id,
            "rule_kind": rule.kind,
            "service_type": request.service_type,
            "car_category": category,
            "field": field,
        },
    )
