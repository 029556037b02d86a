"""Standardized exception hierarchy for fare computation and booking."""

from typing import Any


class CabFareError(Exception):
    """Base exception for all cab-fare errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientError(CabFareError):
    """Errors that may succeed on retry."""

    pass


class DistanceProviderError(TransientError):
    """Distance provider could not return a distance for a coordinate pair."""

    pass


class DistanceUnavailableError(TransientError):
    """Airport fare requested but distance and duration could not be resolved.

    Usually reflects an upstream geocoding fault; the user can try again.
    """

    pass


class PermanentError(CabFareError):
    """Errors that will not succeed on retry."""

    pass


class ValidationError(PermanentError):
    """Invalid trip request or booking payload."""

    pass


class NotFoundError(PermanentError):
    """Requested entity does not exist."""

    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration (e.g. no pricing configured at all)."""

    pass


class PricingConfigurationError(PermanentError):
    """A pricing rule was found but lacks a rate field its branch requires.

    ``details`` carries ``rule_id``, ``service_type``, ``car_category`` and
    ``field`` so operators know which rule is incomplete.
    """

    pass
