from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FareSettings(BaseSettings):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"
    default_car_category: str = Field(
        default="Sedan",
        min_length=1,
        description="Car category used when the requested car option cannot be classified",
    )

    model_config = SettingsConfigDict(env_prefix="FARE_")


class DatabaseSettings(BaseSettings):
    path: str = "data/cab_fare.db"
    seed_defaults: bool = True

    model_config = SettingsConfigDict(env_prefix="DB_")


class GoogleMapsSettings(BaseSettings):
    api_key: str = ""
    base_url: str = "https://maps.googleapis.com/maps/api"
    timeout: float = Field(default=10.0, gt=0.0, le=60.0)

    # Distance Matrix retry configuration
    max_retries: int = Field(default=2, ge=0, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0.1, le=5.0)

    model_config = SettingsConfigDict(env_prefix="GOOGLE_MAPS_")

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Google Maps base URL must start with http:// or https://")
        return v.rstrip("/")


class RouteCacheSettings(BaseSettings):
    maxsize: int = Field(default=10000, ge=1)
    ttl_seconds: int = Field(default=600, ge=1)
    coordinate_precision: int = Field(
        default=3,
        ge=1,
        le=6,
        description="Decimal places kept in cache keys (3 places is roughly 100 m)",
    )

    model_config = SettingsConfigDict(env_prefix="ROUTE_CACHE_")


class Settings(BaseSettings):
    fare: FareSettings = Field(default_factory=FareSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    google_maps: GoogleMapsSettings = Field(default_factory=GoogleMapsSettings)
    route_cache: RouteCacheSettings = Field(default_factory=RouteCacheSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
