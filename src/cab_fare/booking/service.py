"""Fare quotes and booking creation on top of the pricing engine."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..core.exceptions import (
    ConfigurationError,
    DistanceProviderError,
    DistanceUnavailableError,
    NotFoundError,
    ValidationError,
)
from ..db.repositories import BookingRepository, CarOptionRepository
from ..db.schema import Booking
from ..db.transaction import transaction
from ..fare_logging import log_booking_context
from ..geo.airport import anchor_airport_trip
from ..geo.distance_matrix import NoRouteFoundError
from ..geo.maps_link import booking_maps_links
from ..geo.models import Coordinates, DistanceResult
from ..pricing.calculator import FareCalculator
from ..pricing.car_category import get_car_category
from ..pricing.models import FareResult, PricingRule, ServiceType, TripRequest, TripType
from ..pricing.multipliers import DEFAULT_CAR_CATEGORY
from ..pricing.resolver import RateResolver, parse_service_type, parse_trip_type
from ..pricing.rule_store import SqlRuleStore

logger = logging.getLogger(__name__)


class DistanceProvider(Protocol):
    def resolve_distance_and_time(
        self, origin: Coordinates, destination: Coordinates
    ) -> DistanceResult: ...


class QuoteRequest(BaseModel):
    service_type: str
    trip_type: str | None = None
    car_category: str | None = None
    car_option_id: int | None = None
    cab_type_id: int | None = None
    number_of_hours: float | None = None
    number_of_days: float | None = None
    distance_km: float | None = None
    duration_min: float | None = None
    pickup: Coordinates | None = None
    drop: Coordinates | None = None


class BookingRequest(QuoteRequest):
    from_location: str = Field(min_length=1)
    to_location: str = ""
    passenger_name: str | None = None
    passenger_phone: str | None = None
    cab_id: int | None = None
    pickup_datetime: datetime | None = None
    drop_datetime: datetime | None = None


@dataclass(frozen=True)
class PricedTrip:
    result: FareResult
    rule: PricingRule
    trip: TripRequest
    pickup: Coordinates | None
    drop: Coordinates | None


class FareQuoteService:
    """Prices trips and records bookings against one database session."""

    def __init__(
        self,
        session: Session,
        distance_provider: DistanceProvider | None = None,
        calculator: FareCalculator | None = None,
        default_car_category: str = DEFAULT_CAR_CATEGORY,
    ):
        self.session = session
        self.distance_provider = distance_provider
        self.calculator = calculator or FareCalculator()
        self.default_car_category = default_car_category
        self.resolver = RateResolver(SqlRuleStore(session))
        self.bookings = BookingRepository(session)
        self.car_options = CarOptionRepository(session)

    def quote(self, request: QuoteRequest) -> FareResult:
        return self.price(request).result

    def price(self, request: QuoteRequest) -> PricedTrip:
        """Resolve distance and pricing rule for ``request`` and compute its fare."""
        service = parse_service_type(request.service_type)
        trip_type = (
            parse_trip_type(request.trip_type) if service is ServiceType.OUTSTATION else None
        )
        category = self._car_category(request)
        pickup, drop = request.pickup, request.drop

        distance_km, duration_min = request.distance_km, request.duration_min
        if service is ServiceType.AIRPORT:
            if pickup is not None or drop is not None:
                pickup, drop = anchor_airport_trip(pickup, drop)
            if distance_km is None or duration_min is None:
                distance_km, duration_min = self._airport_distance(pickup, drop)
        elif service is ServiceType.OUTSTATION and trip_type is not TripType.ROUND_TRIP:
            if distance_km is None:
                distance_km, duration_min = self._outstation_distance(
                    pickup, drop, duration_min
                )
        else:
            distance_km = None

        trip = TripRequest(
            service_type=service.value,
            car_category=category,
            trip_type=trip_type.value if trip_type else None,
            distance_km=distance_km,
            duration_min=duration_min,
            number_of_hours=request.number_of_hours,
            number_of_days=request.number_of_days,
        )
        rule = self.resolver.resolve(service, category, trip_type, request.cab_type_id)
        result = self.calculator.calculate(trip, rule)
        logger.info(
            "Quoted %s %s fare %.2f using %s %s",
            service.value,
            category,
            result.fare,
            rule.kind,
            rule.id,
        )
        return PricedTrip(result=result, rule=rule, trip=trip, pickup=pickup, drop=drop)

    def create_booking(self, request: BookingRequest) -> Booking:
        name = (request.passenger_name or "").strip()
        phone = (request.passenger_phone or "").strip()
        if not name or not phone:
            raise ValidationError(
                "Passenger name and phone are required",
                details={"passenger_name": bool(name), "passenger_phone": bool(phone)},
            )

        priced = self.price(request)
        result, trip = priced.result, priced.trip

        with transaction(self.session):
            booking = self.bookings.create(
                from_location=request.from_location.strip(),
                to_location=request.to_location.strip(),
                passenger_name=name,
                passenger_phone=phone,
                service_type=trip.service_type,
                trip_type=trip.trip_type,
                car_category=trip.car_category,
                car_option_id=request.car_option_id,
                cab_id=request.cab_id,
                cab_type_id=request.cab_type_id,
                number_of_hours=_as_int(request.number_of_hours),
                number_of_days=_as_int(request.number_of_days),
                distance_km=result.distance_km,
                estimated_time_minutes=result.estimated_time_minutes,
                fare_amount=result.fare,
                pricing_rule=f"{priced.rule.kind}:{priced.rule.id}",
                pickup_lat=priced.pickup.lat if priced.pickup else None,
                pickup_lng=priced.pickup.lng if priced.pickup else None,
                destination_lat=priced.drop.lat if priced.drop else None,
                destination_lng=priced.drop.lng if priced.drop else None,
                pickup_datetime=request.pickup_datetime,
                drop_datetime=request.drop_datetime,
            )
            booking.maps_link = booking_maps_links(booking)["pickup"]

        with log_booking_context(
            booking.id, service_type=trip.service_type, car_category=trip.car_category
        ):
            logger.info("Booking %s created with fare %.2f", booking.id, booking.fare_amount)
        return booking

    def get_booking(self, booking_id: int) -> Booking:
        booking = self.bookings.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found", details={"booking_id": booking_id})
        return booking

    def _car_category(self, request: QuoteRequest) -> str:
        if request.car_category and request.car_category.strip():
            return request.car_category.strip()
        option = None
        if request.car_option_id is not None:
            option = self.car_options.get(request.car_option_id)
            if option is None:
                logger.warning(
                    "Unknown car option %s, using default category", request.car_option_id
                )
        return get_car_category(option, self.default_car_category)

    def _airport_distance(
        self, pickup: Coordinates | None, drop: Coordinates | None
    ) -> tuple[float | None, float | None]:
        if pickup is None or drop is None or self.distance_provider is None:
            return None, None
        try:
            resolved = self.distance_provider.resolve_distance_and_time(pickup, drop)
        except (DistanceProviderError, NoRouteFoundError, ConfigurationError) as e:
            logger.error("Distance lookup failed for airport trip: %s", e)
            raise DistanceUnavailableError(
                "Could not determine the distance for this airport trip, please try again",
                details={"reason": e.message},
            ) from e
        return resolved.distance_km, resolved.duration_min

    def _outstation_distance(
        self,
        pickup: Coordinates | None,
        drop: Coordinates | None,
        duration_min: float | None,
    ) -> tuple[float | None, float | None]:
        if pickup is None or drop is None or self.distance_provider is None:
            return None, duration_min
        try:
            resolved = self.distance_provider.resolve_distance_and_time(pickup, drop)
        except (DistanceProviderError, NoRouteFoundError, ConfigurationError) as e:
            logger.warning("Distance lookup failed for outstation trip, pricing without it: %s", e)
            return None, duration_min
        return resolved.distance_km, resolved.duration_min


def _as_int(value: float | None) -> int | None:
    return int(value) if value is not None else None
