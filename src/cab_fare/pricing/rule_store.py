"""RuleStore backed by the rate_meters and cab_types tables."""

from sqlalchemy.orm import Session

from ..db.repositories import CabTypeRepository, RateMeterRepository
from ..db.schema import CabType, RateMeter
from .models import LegacyCabTypeRule, RateMeterRule, ServiceType, TripType
from .numeric import coerce_int, coerce_number, optional_rate


def rate_meter_to_rule(row: RateMeter) -> RateMeterRule:
    return RateMeterRule(
        id=row.id,
        service_type=ServiceType(row.service_type),
        car_category=row.car_category,
        trip_type=row.trip_type or None,
        base_fare=coerce_number(row.base_fare),
        per_km_rate=coerce_number(row.per_km_rate),
        per_minute_rate=optional_rate(row.per_minute_rate),
        per_hour_rate=optional_rate(row.per_hour_rate),
        extra_km_rate=optional_rate(row.extra_km_rate),
        min_km=coerce_int(row.min_km),
        base_km_per_day=coerce_int(row.base_km_per_day),
        driver_charges=optional_rate(row.driver_charges),
        night_charges=optional_rate(row.night_charges),
    )


def cab_type_to_rule(row: CabType) -> LegacyCabTypeRule:
    return LegacyCabTypeRule(
        id=row.id,
        name=row.name,
        base_fare=coerce_number(row.base_fare),
        per_km_rate=coerce_number(row.per_km_rate),
        per_minute_rate=optional_rate(row.per_minute_rate),
        per_hour_rate=optional_rate(row.per_hour_rate),
    )


class SqlRuleStore:
    """Reads pricing rules fresh from the database on every call."""

    def __init__(self, session: Session):
        self.rate_meters = RateMeterRepository(session)
        self.cab_types = CabTypeRepository(session)

    def find_rate_meter(
        self, service_type: ServiceType, car_category: str, trip_type: TripType | None
    ) -> RateMeterRule | None:
        outstation = service_type is ServiceType.OUTSTATION
        row = self.rate_meters.find_specific(
            service_type.value,
            car_category,
            trip_type.rate_meter_key if trip_type else None,
            match_trip_type=outstation,
        )
        return rate_meter_to_rule(row) if row is not None else None

    def list_rate_meters(self, service_type: ServiceType) -> list[RateMeterRule]:
        return [
            rate_meter_to_rule(row)
            for row in self.rate_meters.list_active_for_service(service_type.value)
        ]

    def get_cab_type(self, cab_type_id: int) -> LegacyCabTypeRule | None:
        row = self.cab_types.get_active(cab_type_id)
        return cab_type_to_rule(row) if row is not None else None

    def find_cab_type_by_name(self, name: str) -> LegacyCabTypeRule | None:
        row = self.cab_types.find_active_by_name(name)
        return cab_type_to_rule(row) if row is not None else None

    def first_cab_type(self) -> LegacyCabTypeRule | None:
        row = self.cab_types.first_active()
        return cab_type_to_rule(row) if row is not None else None
