"""Core utilities shared by pricing, persistence and the distance provider."""

from .exceptions import (
    CabFareError,
    ConfigurationError,
    DistanceProviderError,
    DistanceUnavailableError,
    NotFoundError,
    PermanentError,
    PricingConfigurationError,
    TransientError,
    ValidationError,
)
from .retry import RetryConfig, with_retry, with_retry_sync

__all__ = [
    "CabFareError",
    "TransientError",
    "DistanceProviderError",
    "DistanceUnavailableError",
    "PermanentError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "PricingConfigurationError",
    "RetryConfig",
    "with_retry",
    "with_retry_sync",
]
