"""Fixed multiplier tables and constants shared by rule resolution and fare math."""

from types import MappingProxyType

from .models import ServiceType, TripType

# Applied to legacy cab-type subtotals only; rate meters carry their own prices.
SERVICE_MULTIPLIERS = MappingProxyType(
    {
        ServiceType.LOCAL: 1.0,
        ServiceType.AIRPORT: 1.2,
        ServiceType.OUTSTATION: 1.5,
    }
)

TRIP_MULTIPLIERS = MappingProxyType(
    {
        TripType.ONE_WAY: 1.0,
        TripType.ROUND_TRIP: 1.8,
        TripType.MULTIPLE_WAY: 2.2,
    }
)

# Round trips are billed on a fixed allowance, not the provider distance.
# The rate meter's base_km_per_day is not consulted here.
ROUND_TRIP_KM_PER_DAY = 300

DEFAULT_CAR_CATEGORY = "Sedan"


def service_multiplier(service_type: ServiceType) -> float:
    return SERVICE_MULTIPLIERS[service_type]


def trip_multiplier(trip_type: TripType | None) -> float:
    if trip_type is None:
        return 1.0
    return TRIP_MULTIPLIERS[trip_type]


def legacy_multiplier(service_type: ServiceType, trip_type: TripType | None = None) -> float:
    """Combined multiplier for a legacy cab-type rule.

    The trip multiplier applies to outstation trips only.
    """
    combined = service_multiplier(service_type)
    if service_type is ServiceType.OUTSTATION:
        combined *= trip_multiplier(trip_type)
    return combined
