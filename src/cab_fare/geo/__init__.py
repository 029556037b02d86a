"""Distance lookup, route caching and location helpers."""

from .airport import KIA, anchor_airport_trip, is_airport
from .distance_matrix import (
    DistanceMatrixClient,
    DistanceServiceError,
    DistanceTimeoutError,
    NoRouteFoundError,
)
from .maps_link import booking_maps_links, build_maps_link
from .models import Coordinates, DistanceResult
from .route_cache import RouteCacheService

__all__ = [
    "KIA",
    "anchor_airport_trip",
    "is_airport",
    "DistanceMatrixClient",
    "DistanceServiceError",
    "DistanceTimeoutError",
    "NoRouteFoundError",
    "booking_maps_links",
    "build_maps_link",
    "Coordinates",
    "DistanceResult",
    "RouteCacheService",
]
