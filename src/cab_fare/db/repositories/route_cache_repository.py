"""Route cache repository for persistent distance/duration storage."""

from datetime import timedelta
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session

from ..schema import RouteCache
from ..utils import utc_now


class RouteCacheRepository:
    """Repository for persisting resolved distances to SQLite."""

    def __init__(self, session: Session):
        self.session = session

    def save(
        self,
        origin_key: str,
        dest_key: str,
        distance_km: float,
        duration_min: float,
    ) -> None:
        """Save or update a route in the cache."""
        cache_key = f"{origin_key}|{dest_key}"
        stmt = insert(RouteCache).values(
            cache_key=cache_key,
            origin_key=origin_key,
            dest_key=dest_key,
            distance_km=distance_km,
            duration_min=duration_min,
            created_at=utc_now(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["cache_key"],
            set_={
                "distance_km": stmt.excluded.distance_km,
                "duration_min": stmt.excluded.duration_min,
                "created_at": stmt.excluded.created_at,
            },
        )
        self.session.execute(stmt)

    def load(self, origin_key: str, dest_key: str, ttl_seconds: int = 600) -> dict[str, Any] | None:
        """Load a route from the cache if it exists and is not expired."""
        cache_key = f"{origin_key}|{dest_key}"
        route = self.session.get(RouteCache, cache_key)

        if route is None:
            return None

        cutoff = utc_now() - timedelta(seconds=ttl_seconds)
        if route.created_at < cutoff:
            return None

        return {
            "distance_km": route.distance_km,
            "duration_min": route.duration_min,
        }

    def clear_all(self) -> None:
        """Delete all routes from the cache."""
        stmt = delete(RouteCache)
        self.session.execute(stmt)

    def count(self) -> int:
        """Return total number of cached routes."""
        stmt = select(func.count()).select_from(RouteCache)
        return self.session.execute(stmt).scalar() or 0
