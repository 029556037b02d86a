import logging
import time
from collections import OrderedDict
from typing import Any

from sqlalchemy.orm import sessionmaker

from ..db.repositories import RouteCacheRepository
from ..db.transaction import transaction
from .distance_matrix import DistanceMatrixClient
from .models import Coordinates, DistanceResult

logger = logging.getLogger(__name__)


class RouteCacheService:
    """LRU + TTL cache in front of the Distance Matrix client.

    Keys round both endpoints to ``precision`` decimals so nearby pickups
    share an entry. With a ``session_factory`` every resolved distance is
    also written to the route_cache table and read back on a memory miss.
    """

    def __init__(
        self,
        client: DistanceMatrixClient,
        maxsize: int = 10000,
        ttl_seconds: int = 600,
        precision: int = 3,
        session_factory: sessionmaker[Any] | None = None,
    ):
        self.client = client
        self.maxsize = maxsize
        self.ttl_seconds = ttl_seconds
        self.precision = precision
        self.session_factory = session_factory
        self.cache: OrderedDict[str, tuple[DistanceResult, float]] = OrderedDict()
        self.requests = 0
        self.hits = 0
        self.misses = 0

    def _keys(self, origin: Coordinates, destination: Coordinates) -> tuple[str, str]:
        return origin.rounded(self.precision), destination.rounded(self.precision)

    def _lookup(self, cache_key: str) -> DistanceResult | None:
        entry = self.cache.get(cache_key)
        if entry is None:
            return None
        result, stored_at = entry
        if time.monotonic() - stored_at > self.ttl_seconds:
            del self.cache[cache_key]
            return None
        self.cache.move_to_end(cache_key)
        return result

    def _store(self, cache_key: str, result: DistanceResult) -> None:
        self.cache[cache_key] = (result, time.monotonic())
        self.cache.move_to_end(cache_key)
        if len(self.cache) > self.maxsize:
            self.cache.popitem(last=False)

    def _load_persisted(self, origin_key: str, dest_key: str) -> DistanceResult | None:
        if self.session_factory is None:
            return None
        with self.session_factory() as session:
            row = RouteCacheRepository(session).load(origin_key, dest_key, self.ttl_seconds)
        if row is None:
            return None
        return DistanceResult(
            distance_km=row["distance_km"], duration_min=round(row["duration_min"])
        )

    def _persist(self, origin_key: str, dest_key: str, result: DistanceResult) -> None:
        if self.session_factory is None:
            return
        with self.session_factory() as session, transaction(session):
            RouteCacheRepository(session).save(
                origin_key, dest_key, result.distance_km, result.duration_min
            )

    def _cached(self, origin_key: str, dest_key: str) -> DistanceResult | None:
        self.requests += 1
        cache_key = f"{origin_key}|{dest_key}"

        result = self._lookup(cache_key)
        if result is None:
            result = self._load_persisted(origin_key, dest_key)
            if result is not None:
                self._store(cache_key, result)

        if result is not None:
            self.hits += 1
            return result

        self.misses += 1
        return None

    def _remember(self, origin_key: str, dest_key: str, result: DistanceResult) -> None:
        self._store(f"{origin_key}|{dest_key}", result)
        self._persist(origin_key, dest_key, result)

    def resolve_distance_and_time(
        self, origin: Coordinates, destination: Coordinates
    ) -> DistanceResult:
        origin_key, dest_key = self._keys(origin, destination)
        result = self._cached(origin_key, dest_key)
        if result is not None:
            return result

        result = self.client.get_distance_sync(origin, destination)
        logger.debug(
            "Resolved %s -> %s: %.1f km, %d min",
            origin_key,
            dest_key,
            result.distance_km,
            result.duration_min,
        )
        self._remember(origin_key, dest_key, result)
        return result

    async def get_distance(self, origin: Coordinates, destination: Coordinates) -> DistanceResult:
        origin_key, dest_key = self._keys(origin, destination)
        result = self._cached(origin_key, dest_key)
        if result is not None:
            return result

        result = await self.client.get_distance(origin, destination)
        self._remember(origin_key, dest_key, result)
        return result

    def get_cache_stats(self) -> dict[str, float | int]:
        hit_rate = self.hits / self.requests if self.requests > 0 else 0.0
        return {
            "requests": self.requests,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": hit_rate,
            "cache_size": len(self.cache),
        }

    def clear_cache(self) -> None:
        """Drop every cached route, persisted ones included, and reset stats."""
        self.cache.clear()
        if self.session_factory is not None:
            with self.session_factory() as session, transaction(session):
                RouteCacheRepository(session).clear_all()
        self.requests = 0
        self.hits = 0
        self.misses = 0
