"""Tests for database initialization and default seed data."""

import pytest
from sqlalchemy import func, select, text

from cab_fare.db.database import (
    DEFAULT_CAR_OPTIONS,
    DEFAULT_RATE_METERS,
    SCHEMA_VERSION,
    init_database,
    seed_car_options,
    seed_rate_meters,
)
from cab_fare.db.schema import AppMetadata, CarOption, RateMeter


@pytest.mark.unit
class TestInitDatabase:
    def test_creates_tables(self, temp_sqlite_db):
        session_maker = init_database(str(temp_sqlite_db))

        with session_maker() as session:
            tables = {
                row[0]
                for row in session.execute(
                    text("SELECT name FROM sqlite_master WHERE type='table'")
                ).fetchall()
            }

        assert {
            "rate_meters",
            "cab_types",
            "local_package_rates",
            "car_options",
            "bookings",
            "route_cache",
            "app_metadata",
        } <= tables

    def test_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "fares.db"
        init_database(str(db_path))
        assert db_path.exists()

    def test_records_schema_version(self, session):
        meta = session.get(AppMetadata, "schema_version")
        assert meta is not None
        assert meta.value == SCHEMA_VERSION

    def test_seeds_defaults(self, session):
        meters = session.execute(select(func.count()).select_from(RateMeter)).scalar()
        options = session.execute(select(func.count()).select_from(CarOption)).scalar()

        assert meters == len(DEFAULT_RATE_METERS)
        assert options == len(DEFAULT_CAR_OPTIONS)

    def test_seed_can_be_disabled(self, empty_session):
        assert empty_session.execute(select(RateMeter)).first() is None
        assert empty_session.get(AppMetadata, "schema_version") is not None

    def test_reinitializing_does_not_duplicate(self, temp_sqlite_db):
        init_database(str(temp_sqlite_db))
        session_maker = init_database(str(temp_sqlite_db))

        with session_maker() as session:
            meters = session.execute(select(func.count()).select_from(RateMeter)).scalar()
        assert meters == len(DEFAULT_RATE_METERS)


@pytest.mark.unit
class TestSeedData:
    def test_seeded_rate_meters_are_generic(self, session):
        trip_types = session.execute(select(RateMeter.trip_type).distinct()).scalars().all()
        assert trip_types == [None]

    def test_local_sedan_defaults(self, session):
        row = session.execute(
            select(RateMeter).where(
                RateMeter.service_type == "local", RateMeter.car_category == "Sedan"
            )
        ).scalar_one()

        assert row.base_fare == 50.0
        assert row.per_hour_rate == 200.0
        assert row.is_active is True

    def test_seed_rate_meters_keeps_operator_edits(self, session):
        row = session.execute(
            select(RateMeter).where(
                RateMeter.service_type == "airport", RateMeter.car_category == "SUV"
            )
        ).scalar_one()
        row.base_fare = 999.0
        session.commit()

        assert seed_rate_meters(session) == 0
        session.refresh(row)
        assert row.base_fare == 999.0

    def test_car_options_carry_subtype(self, session):
        subtypes = dict(session.execute(select(CarOption.name, CarOption.car_subtype)).all())

        assert subtypes["Dzire"] == "Sedan"
        assert subtypes["Rumion"] == "SUV"
        assert subtypes["Crysta"] == "Innova Crysta"
        assert subtypes["Tempo Traveller 9+1"] == "Tempo"
        assert subtypes["Minibus 30 seater"] == "Minibus"

    def test_seed_car_options_repairs_subtype(self, session):
        option = session.execute(select(CarOption).where(CarOption.name == "Ertiga")).scalar_one()
        option.car_subtype = None
        session.commit()

        assert seed_car_options(session) == 0
        assert option.car_subtype == "SUV"
