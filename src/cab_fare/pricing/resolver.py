"""Selection of the single pricing rule that applies to a fare request.

Rules are tried from most to least specific:

1. the rate meter for the exact service type and car category (and trip
   type, for outstation trips);
2. any active rate meter for the service type, preferring the same trip type,
   then rows without one, then the requested car category;
3. a legacy cab-type row: by id, by name equal to the service type, or the
   first active one;

and a ConfigurationError is raised when none of these exist.
"""

import logging
from typing import Protocol

from ..core.exceptions import ConfigurationError, ValidationError
from .models import LegacyCabTypeRule, PricingRule, RateMeterRule, ServiceType, TripType
from .multipliers import legacy_multiplier

logger = logging.getLogger(__name__)


class RuleStore(Protocol):
    """Read-only, key-based access to configured pricing rows."""

    def find_rate_meter(
        self, service_type: ServiceType, car_category: str, trip_type: TripType | None
    ) -> RateMeterRule | None: ...

    def list_rate_meters(self, service_type: ServiceType) -> list[RateMeterRule]: ...

    def get_cab_type(self, cab_type_id: int) -> LegacyCabTypeRule | None: ...

    def find_cab_type_by_name(self, name: str) -> LegacyCabTypeRule | None: ...

    def first_cab_type(self) -> LegacyCabTypeRule | None: ...


def parse_service_type(value: ServiceType | str) -> ServiceType:
    try:
        return ServiceType(str(value).strip().lower())
    except ValueError as e:
        raise ValidationError(
            f"Unknown service type: {value!r}",
            details={"field": "service_type", "value": value},
        ) from e


def parse_trip_type(value: TripType | str | None) -> TripType | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return TripType(value)
    except ValueError as e:
        raise ValidationError(
            f"Unknown trip type: {value!r}",
            details={"field": "trip_type", "value": value},
        ) from e


class RateResolver:
    """Resolves a PricingRule from a RuleStore."""

    def __init__(self, store: RuleStore):
        self.store = store

    def resolve(
        self,
        service_type: ServiceType | str,
        car_category: str,
        trip_type: TripType | str | None = None,
        cab_type_id: int | None = None,
    ) -> PricingRule:
        service = parse_service_type(service_type)
        trip = parse_trip_type(trip_type) if service is ServiceType.OUTSTATION else None
        category = (car_category or "").strip()

        if category:
            specific = self.store.find_rate_meter(service, category, trip)
            if specific is not None:
                logger.debug(
                    "Resolved rate meter %s for %s/%s/%s",
                    specific.id,
                    service.value,
                    category,
                    trip.value if trip else "-",
                )
                return specific

        generic = self._pick_generic(service, category, trip)
        if generic is not None:
            logger.warning(
                "No rate meter for %s/%s, using %s rate meter %s",
                service.value,
                category or "<none>",
                generic.car_category,
                generic.id,
            )
            return generic

        legacy = self._find_legacy(service, cab_type_id)
        if legacy is not None:
            logger.warning(
                "No rate meter for service type %s, falling back to cab type %s (multiplier %.2f)",
                service.value,
                legacy.name or legacy.id,
                legacy_multiplier(service, trip),
            )
            return legacy

        logger.error("No pricing rule available for %s/%s", service.value, category or "<none>")
        raise ConfigurationError(
            "no pricing rule available",
            details={"service_type": service.value, "car_category": category},
        )

    def _pick_generic(
        self, service: ServiceType, category: str, trip: TripType | None
    ) -> RateMeterRule | None:
        candidates = self.store.list_rate_meters(service)
        if not candidates:
            return None

        def preference(rule: RateMeterRule) -> tuple[int, bool, int]:
            if trip is not None and rule.trip_type is trip:
                rank = 0
            elif rule.trip_type is None:
                rank = 1
            else:
                rank = 2
            other_category = rule.car_category.strip().lower() != category.lower()
            return rank, other_category, rule.id if rule.id is not None else 0

        return min(candidates, key=preference)

    def _find_legacy(
        self, service: ServiceType, cab_type_id: int | None
    ) -> LegacyCabTypeRule | None:
        if cab_type_id is not None:
            by_id = self.store.get_cab_type(cab_type_id)
            if by_id is not None:
                return by_id

        by_name = self.store.find_cab_type_by_name(service.value)
        if by_name is not None:
            return by_name

        return self.store.first_cab_type()


def resolve_rate(
    store: RuleStore,
    service_type: ServiceType | str,
    car_category: str,
    trip_type: TripType | str | None = None,
    cab_type_id: int | None = None,
) -> PricingRule:
    """Resolve the applicable pricing rule against ``store``."""
    return RateResolver(store).resolve(service_type, car_category, trip_type, cab_type_id)
