"""Pricing rules, trip requests and fare results."""

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServiceType(StrEnum):
    LOCAL = "local"
    AIRPORT = "airport"
    OUTSTATION = "outstation"


class TripType(StrEnum):
    """Outstation trip type.

    Rate meters store the third variant as ``multiple_stops`` while bookings
    use ``multiple_way``; both parse to ``MULTIPLE_WAY``.
    """

    ONE_WAY = "one_way"
    ROUND_TRIP = "round_trip"
    MULTIPLE_WAY = "multiple_way"

    @classmethod
    def _missing_(cls, value: object) -> "TripType | None":
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            if normalized in ("multiple_stops", "multi_stop", "multiple_way"):
                return cls.MULTIPLE_WAY
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def rate_meter_key(self) -> str:
        if self is TripType.MULTIPLE_WAY:
            return "multiple_stops"
        return self.value


class RateMeterRule(BaseModel):
    """Operator-configured rate for a service type, car category and trip type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rate_meter"] = "rate_meter"
    id: int | None = None
    service_type: ServiceType
    car_category: str
    trip_type: TripType | None = None
    base_fare: float = Field(default=0.0, ge=0)
    per_km_rate: float = Field(default=0.0, ge=0)
    per_minute_rate: float | None = Field(default=None, ge=0)
    per_hour_rate: float | None = Field(default=None, ge=0)
    extra_km_rate: float | None = Field(default=None, ge=0)
    min_km: int | None = Field(default=None, ge=0)
    base_km_per_day: int | None = Field(default=None, ge=0)
    driver_charges: float | None = Field(default=None, ge=0)
    night_charges: float | None = Field(default=None, ge=0)

    @field_validator("trip_type", mode="before")
    @classmethod
    def blank_trip_type_is_generic(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LegacyCabTypeRule(BaseModel):
    """Older cab-type pricing row used when no rate meter matches."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["legacy_cab_type"] = "legacy_cab_type"
    id: int | None = None
    name: str | None = None
    base_fare: float = Field(default=0.0, ge=0)
    per_km_rate: float = Field(default=0.0, ge=0)
    per_minute_rate: float | None = Field(default=None, ge=0)
    per_hour_rate: float | None = Field(default=None, ge=0)


PricingRule = Annotated[RateMeterRule | LegacyCabTypeRule, Field(discriminator="kind")]


class TripRequest(BaseModel):
    """Trip parameters for a single fare computation.

    Fields are deliberately loose; branch requirements are checked by the
    calculator so that a malformed request fails with our ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    service_type: str
    car_category: str = "Sedan"
    trip_type: str | None = None
    distance_km: float | None = None
    duration_min: float | None = None
    number_of_hours: float | None = None
    number_of_days: float | None = None


class FareBreakdown(BaseModel):
    """Itemized fare components, reported unrounded."""

    model_config = ConfigDict(frozen=True)

    base_fare: float = Field(ge=0)
    distance_charge: float = Field(ge=0)
    time_charge: float = Field(ge=0)
    service_multiplier: float = Field(ge=1.0)
    subtotal: float = Field(ge=0)


class FareResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    fare: float = Field(ge=0)
    distance_km: float = Field(ge=0)
    estimated_time_minutes: float = Field(ge=0)
    breakdown: FareBreakdown
