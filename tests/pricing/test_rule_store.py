"""Resolution against the SQLite-backed rule store."""

import pytest

from cab_fare.core.exceptions import ConfigurationError
from cab_fare.db.repositories import CabTypeRepository, RateMeterRepository
from cab_fare.pricing import LegacyCabTypeRule, RateMeterRule, RateResolver, ServiceType, TripType
from cab_fare.pricing.rule_store import SqlRuleStore, cab_type_to_rule, rate_meter_to_rule


@pytest.mark.unit
class TestRowConversion:
    def test_rate_meter_row_to_rule(self, empty_session):
        row = RateMeterRepository(empty_session).upsert(
            "outstation",
            "SUV",
            "multiple_stops",
            base_fare=120,
            per_km_rate=18,
            per_hour_rate=None,
            min_km=130,
        )

        rule = rate_meter_to_rule(row)

        assert isinstance(rule, RateMeterRule)
        assert rule.id == row.id
        assert rule.trip_type is TripType.MULTIPLE_WAY
        assert rule.per_hour_rate is None
        assert rule.min_km == 130

    def test_cab_type_row_to_rule(self, empty_session):
        row = CabTypeRepository(empty_session).create(
            "Economy", base_fare=90, per_km_rate=11, per_minute_rate=None
        )

        rule = cab_type_to_rule(row)

        assert isinstance(rule, LegacyCabTypeRule)
        assert rule.name == "Economy"
        assert rule.per_minute_rate is None


@pytest.mark.unit
class TestSqlRuleStore:
    def test_seeded_database_resolves_specific_meter(self, session):
        rule = RateResolver(SqlRuleStore(session)).resolve("airport", "Innova Crysta")

        assert isinstance(rule, RateMeterRule)
        assert rule.car_category == "Innova Crysta"
        assert rule.base_fare == 140.0

    @pytest.mark.parametrize("trip_type", ["one_way", "round_trip", "multiple_way"])
    def test_seeded_outstation_meter_keeps_car_category(self, session, trip_type):
        # Seeded outstation rows have no trip type, so lookups use the generic tier.
        rule = RateResolver(SqlRuleStore(session)).resolve("outstation", "SUV", trip_type)

        assert isinstance(rule, RateMeterRule)
        assert rule.car_category == "SUV"
        assert (rule.base_fare, rule.per_km_rate) == (120.0, 18.0)

    def test_trip_specific_meter_wins_for_outstation(self, session):
        RateMeterRepository(session).upsert(
            "outstation", "SUV", "round_trip", base_fare=0, per_km_rate=16
        )

        rule = RateResolver(SqlRuleStore(session)).resolve("outstation", "SUV", "round_trip")

        assert rule.car_category == "SUV"
        assert rule.trip_type is TripType.ROUND_TRIP

    def test_local_ignores_stored_trip_type(self, empty_session):
        RateMeterRepository(empty_session).upsert(
            "local", "Sedan", "one_way", per_hour_rate=100
        )

        rule = SqlRuleStore(empty_session).find_rate_meter(ServiceType.LOCAL, "Sedan", None)

        assert rule is not None
        assert rule.trip_type is TripType.ONE_WAY

    def test_legacy_fallback_from_database(self, empty_session):
        CabTypeRepository(empty_session).create("Sedan", base_fare=100, per_hour_rate=150)
        airport = CabTypeRepository(empty_session).create(
            "airport", service_type="airport", base_fare=300
        )

        rule = RateResolver(SqlRuleStore(empty_session)).resolve("airport", "Sedan")

        assert isinstance(rule, LegacyCabTypeRule)
        assert rule.id == airport.id

    def test_empty_database_has_no_rule(self, empty_session):
        with pytest.raises(ConfigurationError):
            RateResolver(SqlRuleStore(empty_session)).resolve("local", "Sedan")
