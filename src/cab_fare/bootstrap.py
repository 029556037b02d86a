"""Wires settings, logging, database and distance lookup into ready-to-use services."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from .booking import FareQuoteService
from .core.retry import RetryConfig
from .db.database import init_database
from .fare_logging import setup_logging
from .geo import DistanceMatrixClient, RouteCacheService
from .pricing.rate_book import RateBookService
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    session_factory: sessionmaker[Any]
    distance_client: DistanceMatrixClient
    route_cache: RouteCacheService

    def quote_service(self, session: Session) -> FareQuoteService:
        return FareQuoteService(
            session,
            distance_provider=self.route_cache,
            default_car_category=self.settings.fare.default_car_category,
        )

    def rate_book(self, session: Session) -> RateBookService:
        return RateBookService(session)


def create_distance_client(settings: Settings) -> DistanceMatrixClient:
    """Create the Distance Matrix client with settings."""
    maps = settings.google_maps
    if not maps.api_key:
        logger.warning("GOOGLE_MAPS_API_KEY not set, distance lookups will fail")
    return DistanceMatrixClient(
        base_url=maps.base_url,
        api_key=maps.api_key,
        timeout=maps.timeout,
        retry_config=RetryConfig(
            max_attempts=maps.max_retries + 1,
            base_delay=maps.retry_base_delay,
        ),
    )


def build_services(settings: Settings | None = None) -> Services:
    settings = settings or get_settings()

    setup_logging(
        level=settings.fare.log_level,
        json_output=settings.fare.log_format == "json",
        environment=settings.fare.environment,
    )

    session_factory = init_database(settings.database.path, seed=settings.database.seed_defaults)
    client = create_distance_client(settings)
    cache = RouteCacheService(
        client,
        maxsize=settings.route_cache.maxsize,
        ttl_seconds=settings.route_cache.ttl_seconds,
        precision=settings.route_cache.coordinate_precision,
        session_factory=session_factory,
    )

    logger.info(
        "Fare services ready (database=%s, environment=%s)",
        settings.database.path,
        settings.fare.environment,
    )
    return Services(
        settings=settings,
        session_factory=session_factory,
        distance_client=client,
        route_cache=cache,
    )
