from unittest.mock import MagicMock, patch

import httpx
import pytest
import requests
import respx
from httpx import Response

from cab_fare.core.exceptions import ConfigurationError, DistanceProviderError
from cab_fare.core.retry import RetryConfig
from cab_fare.geo import (
    Coordinates,
    DistanceMatrixClient,
    DistanceResult,
    DistanceServiceError,
    DistanceTimeoutError,
    NoRouteFoundError,
)
from cab_fare.geo.distance_matrix import parse_distance_response

MG_ROAD = Coordinates(lat=12.9756, lng=77.6066)
KIA = Coordinates(lat=13.1986, lng=77.7066)
DISTANCE_URL = "https://maps.example.test/api/distancematrix/json"


@pytest.fixture
def client() -> DistanceMatrixClient:
    return DistanceMatrixClient(base_url="https://maps.example.test/api/", api_key="test-key")


@pytest.fixture
def valid_response() -> dict:
    return {
        "status": "OK",
        "origin_addresses": ["MG Road, Bengaluru"],
        "destination_addresses": ["Kempegowda International Airport"],
        "rows": [
            {
                "elements": [
                    {
                        "status": "OK",
                        "distance": {"text": "35.4 km", "value": 35412},
                        "duration": {"text": "52 mins", "value": 3110},
                    }
                ]
            }
        ],
    }


def _sync_response(status_code: int, payload: dict | None = None) -> MagicMock:
    response = MagicMock(status_code=status_code)
    response.json.return_value = payload or {}
    return response


async def test_distance_request_valid(client: DistanceMatrixClient, valid_response: dict):
    async with respx.mock:
        route = respx.get(DISTANCE_URL).mock(return_value=Response(200, json=valid_response))

        result = await client.get_distance(MG_ROAD, KIA)

        assert route.called
        params = route.calls.last.request.url.params
        assert params["origins"] == "12.9756,77.6066"
        assert params["destinations"] == "13.1986,77.7066"
        assert params["key"] == "test-key"
        assert params["units"] == "metric"
        assert result == DistanceResult(distance_km=35.412, duration_min=52)


async def test_no_route_found(client: DistanceMatrixClient, valid_response: dict):
    valid_response["rows"][0]["elements"][0] = {"status": "ZERO_RESULTS"}
    async with respx.mock:
        respx.get(DISTANCE_URL).mock(return_value=Response(200, json=valid_response))

        with pytest.raises(NoRouteFoundError):
            await client.get_distance(MG_ROAD, Coordinates(lat=0.0, lng=0.0))


async def test_server_error(client: DistanceMatrixClient):
    async with respx.mock:
        respx.get(DISTANCE_URL).mock(return_value=Response(503, text="Service Unavailable"))

        with pytest.raises(DistanceServiceError):
            await client.get_distance(MG_ROAD, KIA)


async def test_timeout(client: DistanceMatrixClient):
    async with respx.mock:
        respx.get(DISTANCE_URL).mock(side_effect=httpx.TimeoutException("Request timed out"))

        with pytest.raises(DistanceTimeoutError):
            await client.get_distance(MG_ROAD, KIA)


async def test_network_error(client: DistanceMatrixClient):
    async with respx.mock:
        respx.get(DISTANCE_URL).mock(side_effect=httpx.NetworkError("Connection failed"))

        with pytest.raises(DistanceServiceError):
            await client.get_distance(MG_ROAD, KIA)


async def test_retries_transient_failures(valid_response: dict):
    client = DistanceMatrixClient(
        base_url="https://maps.example.test/api",
        api_key="test-key",
        retry_config=RetryConfig(max_attempts=2, base_delay=0.01),
    )
    async with respx.mock:
        route = respx.get(DISTANCE_URL).mock(
            side_effect=[Response(500), Response(200, json=valid_response)]
        )

        result = await client.get_distance(MG_ROAD, KIA)

        assert route.call_count == 2
        assert result.distance_km == pytest.approx(35.412)


async def test_non_json_body(client: DistanceMatrixClient):
    async with respx.mock:
        respx.get(DISTANCE_URL).mock(return_value=Response(200, text="<html>quota</html>"))

        with pytest.raises(DistanceServiceError, match="non-JSON"):
            await client.get_distance(MG_ROAD, KIA)


async def test_missing_api_key_fails_before_request():
    client = DistanceMatrixClient(base_url="https://maps.example.test/api", api_key="")
    async with respx.mock:
        route = respx.get(DISTANCE_URL).mock(return_value=Response(200, json={}))

        with pytest.raises(ConfigurationError):
            await client.get_distance(MG_ROAD, KIA)

        assert not route.called


def test_sync_request_valid(client: DistanceMatrixClient, valid_response: dict):
    with patch(
        "cab_fare.geo.distance_matrix.requests.get",
        return_value=_sync_response(200, valid_response),
    ) as mock_get:
        result = client.get_distance_sync(MG_ROAD, KIA)

    assert result.duration_min == 52
    assert mock_get.call_args.args[0] == DISTANCE_URL
    assert mock_get.call_args.kwargs["timeout"] == 10.0


def test_sync_server_error(client: DistanceMatrixClient):
    with (
        patch(
            "cab_fare.geo.distance_matrix.requests.get",
            return_value=_sync_response(500),
        ),
        pytest.raises(DistanceServiceError),
    ):
        client.get_distance_sync(MG_ROAD, KIA)


def test_sync_timeout(client: DistanceMatrixClient):
    with (
        patch(
            "cab_fare.geo.distance_matrix.requests.get",
            side_effect=requests.Timeout("slow"),
        ),
        pytest.raises(DistanceTimeoutError),
    ):
        client.get_distance_sync(MG_ROAD, KIA)


def test_sync_connection_error(client: DistanceMatrixClient):
    with (
        patch(
            "cab_fare.geo.distance_matrix.requests.get",
            side_effect=requests.ConnectionError("refused"),
        ),
        pytest.raises(DistanceServiceError),
    ):
        client.get_distance_sync(MG_ROAD, KIA)


def test_sync_element_without_distance(client: DistanceMatrixClient):
    payload = {"status": "OK", "rows": [{"elements": [{"status": "OK"}]}]}
    with (
        patch(
            "cab_fare.geo.distance_matrix.requests.get",
            return_value=_sync_response(200, payload),
        ),
        pytest.raises(DistanceServiceError),
    ):
        client.get_distance_sync(MG_ROAD, KIA)


class TestParseDistanceResponse:
    def test_request_denied(self):
        with pytest.raises(DistanceServiceError, match="API key is invalid"):
            parse_distance_response(
                {"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."}
            )

    def test_missing_element(self):
        with pytest.raises(DistanceServiceError):
            parse_distance_response({"status": "OK", "rows": []})

    @pytest.mark.parametrize(
        "element",
        [
            {"status": "OK"},
            {"status": "OK", "distance": {"value": 1500}},
            {"status": "OK", "distance": {"value": "far"}, "duration": {"value": 60}},
            "OK",
        ],
    )
    def test_malformed_element(self, element):
        with pytest.raises(DistanceServiceError):
            parse_distance_response({"status": "OK", "rows": [{"elements": [element]}]})

    def test_not_found_element_is_permanent(self):
        with pytest.raises(NoRouteFoundError):
            parse_distance_response(
                {"status": "OK", "rows": [{"elements": [{"status": "NOT_FOUND"}]}]}
            )

    def test_provider_errors_are_retryable(self):
        assert issubclass(DistanceServiceError, DistanceProviderError)
        assert issubclass(DistanceTimeoutError, DistanceProviderError)
        assert not issubclass(NoRouteFoundError, DistanceProviderError)

    def test_rounds_duration_to_minutes(self):
        result = parse_distance_response(
            {
                "status": "OK",
                "rows": [
                    {
                        "elements": [
                            {
                                "status": "OK",
                                "distance": {"value": 1500},
                                "duration": {"value": 89},
                            }
                        ]
                    }
                ],
            }
        )
        assert result.distance_km == 1.5
        assert result.duration_min == 1
