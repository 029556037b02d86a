import os

# Keep developer environment variables from leaking into Settings() in tests.
for _key in list(os.environ):
    if _key.startswith(("FARE_", "DB_", "GOOGLE_MAPS_", "ROUTE_CACHE_")):
        del os.environ[_key]

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy.orm import Session, sessionmaker

from cab_fare.db.database import init_database
from cab_fare.pricing import LegacyCabTypeRule, RateMeterRule, ServiceType, TripType
from tests.factories import PricingFactory, create_faker_instance

if TYPE_CHECKING:
    from faker.proxy import Faker


class InMemoryRuleStore:
    """RuleStore over plain lists, for resolver tests without a database."""

    def __init__(
        self,
        rate_meters: list[RateMeterRule] | None = None,
        cab_types: list[LegacyCabTypeRule] | None = None,
    ):
        self.rate_meters = list(rate_meters or [])
        self.cab_types = list(cab_types or [])

    def find_rate_meter(
        self, service_type: ServiceType, car_category: str, trip_type: TripType | None
    ) -> RateMeterRule | None:
        matches = [
            rule
            for rule in self.rate_meters
            if rule.service_type is service_type
            and rule.car_category.lower() == car_category.strip().lower()
            and (service_type is not ServiceType.OUTSTATION or rule.trip_type is trip_type)
        ]
        matches.sort(key=lambda rule: (rule.trip_type is not None, rule.id or 0))
        return matches[0] if matches else None

    def list_rate_meters(self, service_type: ServiceType) -> list[RateMeterRule]:
        return [rule for rule in self.rate_meters if rule.service_type is service_type]

    def get_cab_type(self, cab_type_id: int) -> LegacyCabTypeRule | None:
        return next((cab for cab in self.cab_types if cab.id == cab_type_id), None)

    def find_cab_type_by_name(self, name: str) -> LegacyCabTypeRule | None:
        return next(
            (cab for cab in self.cab_types if (cab.name or "").lower() == name.lower()), None
        )

    def first_cab_type(self) -> LegacyCabTypeRule | None:
        return min(self.cab_types, key=lambda cab: cab.id or 0, default=None)


@pytest.fixture
def fake() -> "Faker":
    """Seeded Faker instance for deterministic test data."""
    return create_faker_instance(seed=42)


@pytest.fixture
def pricing_factory() -> PricingFactory:
    return PricingFactory(seed=42)


@pytest.fixture
def rule_store() -> InMemoryRuleStore:
    return InMemoryRuleStore()


@pytest.fixture
def temp_sqlite_db(tmp_path):
    """Temporary SQLite database for persistence tests."""
    return tmp_path / "test_cab_fare.db"


@pytest.fixture
def session_maker(temp_sqlite_db) -> sessionmaker[Any]:
    """Seeded database with default rate meters and car options."""
    return init_database(str(temp_sqlite_db))


@pytest.fixture
def empty_session_maker(temp_sqlite_db) -> sessionmaker[Any]:
    return init_database(str(temp_sqlite_db), seed=False)


@pytest.fixture
def session(session_maker) -> Iterator[Session]:
    with session_maker() as session:
        yield session


@pytest.fixture
def empty_session(empty_session_maker) -> Iterator[Session]:
    with empty_session_maker() as session:
        yield session
