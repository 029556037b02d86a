"""Repository layer for database CRUD operations."""

from .booking_repository import BookingRepository
from .cab_type_repository import CabTypeRepository
from .car_option_repository import CarOptionRepository
from .local_package_repository import LocalPackageRepository
from .rate_meter_repository import RateMeterRepository
from .route_cache_repository import RouteCacheRepository

__all__ = [
    "BookingRepository",
    "CabTypeRepository",
    "CarOptionRepository",
    "LocalPackageRepository",
    "RateMeterRepository",
    "RouteCacheRepository",
]
