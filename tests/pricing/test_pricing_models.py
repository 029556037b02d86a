import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from cab_fare.pricing import (
    FareBreakdown,
    LegacyCabTypeRule,
    PricingRule,
    RateMeterRule,
    ServiceType,
    TripRequest,
    TripType,
)


@pytest.mark.unit
class TestTripType:
    @pytest.mark.parametrize(
        "raw", ["multiple_way", "multiple_stops", "Multiple-Stops", "multi_stop"]
    )
    def test_multi_stop_spellings_normalize(self, raw):
        assert TripType(raw) is TripType.MULTIPLE_WAY

    def test_case_and_dashes_normalize(self):
        assert TripType("Round-Trip") is TripType.ROUND_TRIP
        assert TripType(" ONE_WAY ") is TripType.ONE_WAY

    def test_unknown_value_raises(self):
        with pytest.raises(ValueError):
            TripType("sightseeing")

    def test_rate_meter_key(self):
        assert TripType.MULTIPLE_WAY.rate_meter_key == "multiple_stops"
        assert TripType.ROUND_TRIP.rate_meter_key == "round_trip"


@pytest.mark.unit
class TestRules:
    def test_rate_meter_blank_trip_type_is_generic(self):
        rule = RateMeterRule(service_type="outstation", car_category="Sedan", trip_type="  ")
        assert rule.trip_type is None

    def test_rate_meter_accepts_stored_trip_key(self):
        rule = RateMeterRule(
            service_type="outstation", car_category="Sedan", trip_type="multiple_stops"
        )
        assert rule.trip_type is TripType.MULTIPLE_WAY
        assert rule.service_type is ServiceType.OUTSTATION

    def test_negative_rates_rejected(self):
        with pytest.raises(PydanticValidationError):
            RateMeterRule(service_type="local", car_category="Sedan", per_km_rate=-1)

    def test_rules_are_immutable(self):
        rule = LegacyCabTypeRule(id=1, name="Sedan", base_fare=100)
        with pytest.raises(PydanticValidationError):
            rule.base_fare = 200

    def test_discriminated_union(self):
        adapter = TypeAdapter(PricingRule)

        meter = adapter.validate_python(
            {"kind": "rate_meter", "service_type": "airport", "car_category": "SUV"}
        )
        legacy = adapter.validate_python({"kind": "legacy_cab_type", "id": 3, "base_fare": 50})

        assert isinstance(meter, RateMeterRule)
        assert isinstance(legacy, LegacyCabTypeRule)


@pytest.mark.unit
class TestTripRequestAndBreakdown:
    def test_trip_request_defaults(self):
        request = TripRequest(service_type="local")
        assert request.car_category == "Sedan"
        assert request.trip_type is None
        assert request.distance_km is None

    def test_breakdown_multiplier_at_least_one(self):
        with pytest.raises(PydanticValidationError):
            FareBreakdown(
                base_fare=0,
                distance_charge=0,
                time_charge=0,
                service_multiplier=0.5,
                subtotal=0,
            )
