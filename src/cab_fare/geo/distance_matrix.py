import logging
from typing import Any

import httpx
import requests

from ..core.exceptions import (
    ConfigurationError,
    DistanceProviderError,
    ValidationError,
)
from ..core.retry import RetryConfig, with_retry, with_retry_sync
from .models import Coordinates, DistanceResult

logger = logging.getLogger(__name__)

NO_ROUTE_STATUSES = frozenset({"NOT_FOUND", "ZERO_RESULTS"})


class NoRouteFoundError(ValidationError):
    """No drivable route between the coordinates. Inherits from ValidationError (non-retryable)."""

    pass


class DistanceServiceError(DistanceProviderError):
    """Distance Matrix error (5xx, network failure or non-OK status). Retryable."""

    pass


class DistanceTimeoutError(DistanceProviderError):
    """Distance Matrix request timeout. Retryable."""

    pass


def parse_distance_response(data: dict[str, Any]) -> DistanceResult:
    """Extract the single origin/destination element of a Distance Matrix payload."""
    status = data.get("status")
    if status != "OK":
        message = data.get("error_message") or status or "missing status"
        raise DistanceServiceError(
            f"Distance Matrix returned {message}", details={"status": status}
        )

    try:
        element = data["rows"][0]["elements"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise DistanceServiceError("Distance Matrix response has no route element") from e
    if not isinstance(element, dict):
        raise DistanceServiceError("Distance Matrix response has no route element")

    element_status = element.get("status")
    if element_status in NO_ROUTE_STATUSES:
        raise NoRouteFoundError(
            "No route found between coordinates", details={"status": element_status}
        )
    if element_status != "OK":
        raise DistanceServiceError(
            f"Distance Matrix element status {element_status}",
            details={"status": element_status},
        )

    try:
        meters = float(element["distance"]["value"])
        seconds = float(element["duration"]["value"])
    except (KeyError, TypeError, ValueError) as e:
        raise DistanceServiceError("Distance Matrix element has no distance or duration") from e
    return DistanceResult(distance_km=meters / 1000, duration_min=round(seconds / 60))


def _decode(response: httpx.Response | requests.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise DistanceServiceError("Distance Matrix returned a non-JSON body") from e
    if not isinstance(data, dict):
        raise DistanceServiceError("Distance Matrix returned an unexpected payload")
    return data


class DistanceMatrixClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        retry_config: RetryConfig | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig(max_attempts=1)

    @property
    def url(self) -> str:
        return f"{self.base_url}/distancematrix/json"

    def _params(self, origin: Coordinates, destination: Coordinates) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("Google Maps API key is not configured")
        return {
            "origins": origin.as_param(),
            "destinations": destination.as_param(),
            "units": "metric",
            "mode": "driving",
            "key": self.api_key,
        }

    async def get_distance(self, origin: Coordinates, destination: Coordinates) -> DistanceResult:
        """Driving distance and duration between two coordinates."""
        params = self._params(origin, destination)
        return await with_retry(
            lambda: self._fetch(params),
            config=self.retry_config,
            operation_name="distance_matrix",
        )

    async def _fetch(self, params: dict[str, str]) -> DistanceResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url, params=params)

                if response.status_code >= 500:
                    raise DistanceServiceError(
                        f"Distance Matrix server error: {response.status_code}"
                    )

                return parse_distance_response(_decode(response))

        except httpx.TimeoutException as e:
            raise DistanceTimeoutError(f"Request timed out after {self.timeout}s") from e
        except httpx.NetworkError as e:
            raise DistanceServiceError(f"Network error: {e}") from e

    def get_distance_sync(self, origin: Coordinates, destination: Coordinates) -> DistanceResult:
        """Synchronous variant for callers that hold a database session."""
        params = self._params(origin, destination)
        return with_retry_sync(
            lambda: self._fetch_sync(params),
            config=self.retry_config,
            operation_name="distance_matrix",
        )

    def _fetch_sync(self, params: dict[str, str]) -> DistanceResult:
        try:
            response = requests.get(self.url, params=params, timeout=self.timeout)

            if response.status_code >= 500:
                raise DistanceServiceError(
                    f"Distance Matrix server error: {response.status_code}"
                )

            return parse_distance_response(_decode(response))

        except requests.Timeout as e:
            raise DistanceTimeoutError(f"Request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise DistanceServiceError(f"Network error: {e}") from e
