"""Rate meter repository for pricing rule lookups and admin upserts."""

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..schema import RateMeter

RATE_FIELDS = (
    "base_fare",
    "per_km_rate",
    "per_minute_rate",
    "per_hour_rate",
    "extra_km_rate",
    "min_km",
    "base_km_per_day",
    "driver_charges",
    "night_charges",
)


def _trip_type_matches(trip_type: str | None):
    # Generic rows are stored with NULL or an empty string.
    if trip_type is None:
        return or_(RateMeter.trip_type.is_(None), RateMeter.trip_type == "")
    return RateMeter.trip_type == trip_type


class RateMeterRepository:
    """Repository for rate meter rows."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, rate_meter_id: int) -> RateMeter | None:
        """Get rate meter by ID."""
        return self.session.get(RateMeter, rate_meter_id)

    def find_specific(
        self,
        service_type: str,
        car_category: str,
        trip_type: str | None = None,
        match_trip_type: bool = True,
    ) -> RateMeter | None:
        """Find the active row for a service type and car category.

        Categories compare case-insensitively. When ``match_trip_type`` is
        False any trip type matches, generic rows first.
        """
        stmt = select(RateMeter).where(
            RateMeter.service_type == service_type,
            func.lower(func.trim(RateMeter.car_category)) == car_category.strip().lower(),
            RateMeter.is_active.is_(True),
        )
        if match_trip_type:
            stmt = stmt.where(_trip_type_matches(trip_type))
        stmt = stmt.order_by(
            func.coalesce(RateMeter.trip_type, "") != "",
            RateMeter.id,
        ).limit(1)
        return self.session.execute(stmt).scalar()

    def list_active_for_service(self, service_type: str) -> list[RateMeter]:
        """List active rows for a service type ordered by ID."""
        stmt = (
            select(RateMeter)
            .where(RateMeter.service_type == service_type, RateMeter.is_active.is_(True))
            .order_by(RateMeter.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def find_for_admin(
        self, service_type: str, car_category: str, trip_type: str | None
    ) -> RateMeter | None:
        """Find a row regardless of its active flag, for admin edits."""
        stmt = (
            select(RateMeter)
            .where(
                RateMeter.service_type == service_type,
                RateMeter.car_category == car_category,
                _trip_type_matches(trip_type),
            )
            .order_by(RateMeter.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar()

    def upsert(
        self,
        service_type: str,
        car_category: str,
        trip_type: str | None,
        **fields: Any,
    ) -> RateMeter:
        """Create or update the row for (service type, category, trip type)."""
        unknown = set(fields) - set(RATE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown rate meter fields: {sorted(unknown)}")

        row = self.find_for_admin(service_type, car_category, trip_type)
        if row is None:
            row = RateMeter(
                service_type=service_type,
                car_category=car_category,
                trip_type=trip_type,
            )
            self.session.add(row)
        for key, value in fields.items():
            setattr(row, key, value)
        self.session.flush()
        return row

    def deactivate(self, rate_meter_id: int) -> bool:
        """Mark a row inactive. Returns False when it does not exist."""
        row = self.session.get(RateMeter, rate_meter_id)
        if row is None:
            return False
        row.is_active = False
        return True
