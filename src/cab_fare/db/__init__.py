"""Database persistence module."""

from .database import init_database
from .schema import (
    AppMetadata,
    Booking,
    CabType,
    CarOption,
    LocalPackageRate,
    RateMeter,
    RouteCache,
)
from .transaction import transaction

__all__ = [
    "init_database",
    "AppMetadata",
    "Booking",
    "CabType",
    "CarOption",
    "LocalPackageRate",
    "RateMeter",
    "RouteCache",
    "transaction",
]
