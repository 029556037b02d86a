"""Operator-facing reads and writes of rate meters, keyed by cab type.

Each cab type belongs to one service type; its name is the car category
under which its rate meters are stored.
"""

import logging

from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..db.repositories import CabTypeRepository, LocalPackageRepository, RateMeterRepository
from ..db.schema import CabType, RateMeter
from .models import ServiceType, TripType
from .multipliers import ROUND_TRIP_KM_PER_DAY
from .numeric import coerce_int, coerce_number

logger = logging.getLogger(__name__)

DEFAULT_ONE_WAY_MIN_KM = 130


class AirportRates(BaseModel):
    base_fare: float = Field(default=0.0, ge=0)
    per_km_rate: float = Field(default=0.0, ge=0)
    driver_charges: float = Field(default=0.0, ge=0)
    night_charges: float = Field(default=0.0, ge=0)


class OneWayRates(BaseModel):
    min_km: int = Field(default=DEFAULT_ONE_WAY_MIN_KM, ge=0)
    base_fare: float = Field(default=0.0, ge=0)
    extra_km_rate: float = Field(default=0.0, ge=0)
    driver_charges: float = Field(default=0.0, ge=0)
    night_charges: float = Field(default=0.0, ge=0)


class RoundTripRates(BaseModel):
    base_km_per_day: int = Field(default=ROUND_TRIP_KM_PER_DAY, ge=0)
    per_km_rate: float = Field(default=0.0, ge=0)
    extra_km_rate: float = Field(default=0.0, ge=0)
    driver_charges: float = Field(default=0.0, ge=0)
    night_charges: float = Field(default=0.0, ge=0)


class MultipleStopsRates(BaseModel):
    base_fare: float = Field(default=0.0, ge=0)
    per_km_rate: float = Field(default=0.0, ge=0)
    driver_charges: float = Field(default=0.0, ge=0)
    night_charges: float = Field(default=0.0, ge=0)


class OutstationRates(BaseModel):
    one_way: OneWayRates | None = None
    round_trip: RoundTripRates | None = None
    multiple_stops: MultipleStopsRates | None = None


class LocalRates(BaseModel):
    base_fare: float = Field(default=0.0, ge=0)
    package_4h: float | None = Field(default=None, ge=0)
    package_8h: float | None = Field(default=None, ge=0)
    package_12h: float | None = Field(default=None, ge=0)
    extra_hour_rate: float | None = Field(default=None, ge=0)


class RateBookService:
    """Reads and writes the rate meters behind each cab type."""

    def __init__(self, session: Session):
        self.session = session
        self.cab_types = CabTypeRepository(session)
        self.rate_meters = RateMeterRepository(session)
        self.packages = LocalPackageRepository(session)

    def get_airport_rates(self, cab_type_id: int) -> AirportRates:
        cab_type = self._cab_type(cab_type_id, ServiceType.AIRPORT)
        row = self.rate_meters.find_specific(ServiceType.AIRPORT.value, cab_type.name, None)
        if row is None:
            return AirportRates()
        return AirportRates(
            base_fare=coerce_number(row.base_fare),
            per_km_rate=coerce_number(row.per_km_rate),
            driver_charges=coerce_number(row.driver_charges),
            night_charges=coerce_number(row.night_charges),
        )

    def set_airport_rates(self, cab_type_id: int, rates: AirportRates) -> AirportRates:
        cab_type = self._cab_type(cab_type_id, ServiceType.AIRPORT)
        self.rate_meters.upsert(
            ServiceType.AIRPORT.value, cab_type.name, None, **rates.model_dump()
        )
        logger.info("Updated airport rates for cab type %s (%s)", cab_type.id, cab_type.name)
        return self.get_airport_rates(cab_type_id)

    def get_outstation_rates(self, cab_type_id: int) -> OutstationRates:
        cab_type = self._cab_type(cab_type_id, ServiceType.OUTSTATION)
        one_way = self._outstation_row(cab_type, TripType.ONE_WAY)
        round_trip = self._outstation_row(cab_type, TripType.ROUND_TRIP)
        multiple_stops = self._outstation_row(cab_type, TripType.MULTIPLE_WAY)

        return OutstationRates(
            one_way=OneWayRates(
                min_km=coerce_int(one_way.min_km, DEFAULT_ONE_WAY_MIN_KM),
                base_fare=coerce_number(one_way.base_fare),
                extra_km_rate=coerce_number(one_way.extra_km_rate),
                driver_charges=coerce_number(one_way.driver_charges),
                night_charges=coerce_number(one_way.night_charges),
            )
            if one_way
            else None,
            round_trip=RoundTripRates(
                base_km_per_day=coerce_int(round_trip.base_km_per_day, ROUND_TRIP_KM_PER_DAY),
                per_km_rate=coerce_number(round_trip.per_km_rate),
                extra_km_rate=coerce_number(round_trip.extra_km_rate),
                driver_charges=coerce_number(round_trip.driver_charges),
                night_charges=coerce_number(round_trip.night_charges),
            )
            if round_trip
            else None,
            multiple_stops=MultipleStopsRates(
                base_fare=coerce_number(multiple_stops.base_fare),
                per_km_rate=coerce_number(multiple_stops.per_km_rate),
                driver_charges=coerce_number(multiple_stops.driver_charges),
                night_charges=coerce_number(multiple_stops.night_charges),
            )
            if multiple_stops
            else None,
        )

    def set_outstation_rates(self, cab_type_id: int, rates: OutstationRates) -> OutstationRates:
        """Upsert the trip types present in ``rates``; absent ones are untouched."""
        cab_type = self._cab_type(cab_type_id, ServiceType.OUTSTATION)
        updates: list[tuple[TripType, BaseModel | None]] = [
            (TripType.ONE_WAY, rates.one_way),
            (TripType.ROUND_TRIP, rates.round_trip),
            (TripType.MULTIPLE_WAY, rates.multiple_stops),
        ]
        for trip_type, values in updates:
            if values is None:
                continue
            self.rate_meters.upsert(
                ServiceType.OUTSTATION.value,
                cab_type.name,
                trip_type.rate_meter_key,
                **values.model_dump(),
            )
        logger.info("Updated outstation rates for cab type %s (%s)", cab_type.id, cab_type.name)
        return self.get_outstation_rates(cab_type_id)

    def get_local_rates(self, cab_type_id: int) -> LocalRates:
        cab_type = self._cab_type(cab_type_id, ServiceType.LOCAL)
        rows = self.packages.get_packages(cab_type.id)
        fares = {row.hours: row.package_fare for row in rows}
        extra = next((row.extra_hour_rate for row in rows if row.extra_hour_rate is not None), None)
        return LocalRates(
            base_fare=coerce_number(cab_type.base_fare),
            package_4h=fares.get(4),
            package_8h=fares.get(8),
            package_12h=fares.get(12),
            extra_hour_rate=extra,
        )

    def set_local_rates(self, cab_type_id: int, rates: LocalRates) -> LocalRates:
        cab_type = self._cab_type(cab_type_id, ServiceType.LOCAL)
        cab_type.base_fare = rates.base_fare
        self.packages.replace_packages(
            cab_type.id,
            {4: rates.package_4h, 8: rates.package_8h, 12: rates.package_12h},
            rates.extra_hour_rate,
        )
        logger.info("Updated local packages for cab type %s (%s)", cab_type.id, cab_type.name)
        return self.get_local_rates(cab_type_id)

    def _cab_type(self, cab_type_id: int, service_type: ServiceType) -> CabType:
        cab_type = self.cab_types.get(cab_type_id)
        if cab_type is None or cab_type.service_type != service_type.value:
            raise NotFoundError(
                "Cab type not found",
                details={"cab_type_id": cab_type_id, "service_type": service_type.value},
            )
        return cab_type

    def _outstation_row(self, cab_type: CabType, trip_type: TripType) -> RateMeter | None:
        return self.rate_meters.find_specific(
            ServiceType.OUTSTATION.value, cab_type.name, trip_type.rate_meter_key
        )
