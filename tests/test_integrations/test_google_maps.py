"""
Tests for the Google Maps integration.

Tests API client, parser, caching, and error handling with mocked responses.
"""

import httpx
import pytest
import respx

from landquote.core.errors import GeocodingError
from landquote.integrations.google_maps import (
    GoogleMapsClient,
    GoogleMapsClientConfig,
    GoogleMapsResponseParser,
)
from landquote.integrations.google_maps.zip_table import drive_seconds_for_zip, extract_zip_code
from landquote.models.geocoding import DistanceMatrixResult, GeocodeResult
from landquote.models.location import Coordinates, PropertyType

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DISTANCE_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

# Mock Google Maps API responses
MOCK_GEOCODE_OK = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "2400 Pioneer Trail, New Smyrna Beach, FL 32168, USA",
            "place_id": "ChIJ-test-place",
            "types": ["street_address"],
            "geometry": {"location": {"lat": 28.9877, "lng": -80.9712}},
            "address_components": [
                {"long_name": "2400", "short_name": "2400", "types": ["street_number"]},
                {"long_name": "32168", "short_name": "32168", "types": ["postal_code"]},
            ],
        }
    ],
}

MOCK_GEOCODE_PARTIAL = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "Pioneer Trail, New Smyrna Beach, FL, USA",
            "types": ["route"],
            "partial_match": True,
            "geometry": {"location": {"lat": 28.99, "lng": -80.98}},
        }
    ],
}

MOCK_GEOCODE_ZERO = {"status": "ZERO_RESULTS", "results": []}

MOCK_GEOCODE_DENIED = {
    "status": "REQUEST_DENIED",
    "error_message": "The provided API key is invalid.",
    "results": [],
}

MOCK_DISTANCE_OK = {
    "status": "OK",
    "rows": [
        {
            "elements": [
                {
                    "status": "OK",
                    "distance": {"value": 48200, "text": "48.2 km"},
                    "duration": {"value": 2460, "text": "41 mins"},
                }
            ]
        }
    ],
}

MOCK_DISTANCE_NOT_FOUND = {
    "status": "OK",
    "rows": [{"elements": [{"status": "ZERO_RESULTS"}]}],
}

BASE = Coordinates(latitude=29.0216, longitude=-81.0770)
SITE = Coordinates(latitude=28.9877, longitude=-80.9712)


class TestGoogleMapsResponseParser:
    """Tests for GoogleMapsResponseParser."""

    def test_parse_geocode_success(self) -> None:
        """Test parsing a canonical street address."""
        parser = GoogleMapsResponseParser()
        result = parser.parse_geocode_response(MOCK_GEOCODE_OK, query="2400 Pioneer Trail")

        assert result.coordinates.latitude == 28.9877
        assert result.coordinates.longitude == -80.9712
        assert result.formatted_address.startswith("2400 Pioneer Trail")
        assert result.place_id == "ChIJ-test-place"
        assert result.zip_code == "32168"
        assert result.property_type == PropertyType.RESIDENTIAL
        assert result.is_canonical is True

    def test_parse_partial_match(self) -> None:
        """Test partial matches are not canonical."""
        parser = GoogleMapsResponseParser()
        result = parser.parse_geocode_response(MOCK_GEOCODE_PARTIAL)

        assert result.partial_match is True
        assert result.is_canonical is False
        assert result.zip_code is None
        assert result.property_type == PropertyType.AGRICULTURAL

    def test_parse_zero_results(self) -> None:
        """Test ZERO_RESULTS raises with the provider status."""
        parser = GoogleMapsResponseParser()

        with pytest.raises(GeocodingError) as exc_info:
            parser.parse_geocode_response(MOCK_GEOCODE_ZERO, query="nowhere")

        assert exc_info.value.details["provider_status"] == "ZERO_RESULTS"

    def test_parse_error_message(self) -> None:
        """Test the provider error message is surfaced."""
        parser = GoogleMapsResponseParser()

        with pytest.raises(GeocodingError, match="API key is invalid"):
            parser.parse_geocode_response(MOCK_GEOCODE_DENIED)

    def test_parse_missing_location(self) -> None:
        """Test a result without geometry is rejected."""
        parser = GoogleMapsResponseParser()
        data = {"status": "OK", "results": [{"formatted_address": "Somewhere"}]}

        with pytest.raises(GeocodingError):
            parser.parse_geocode_response(data)

    def test_detect_property_type_order(self) -> None:
        """Test the first mapped type wins."""
        parser = GoogleMapsResponseParser()

        assert parser.detect_property_type(["establishment", "premise"]) == PropertyType.RESIDENTIAL
        assert parser.detect_property_type(["point_of_interest"]) == PropertyType.COMMERCIAL
        assert parser.detect_property_type(["locality", "political"]) is None

    def test_parse_distance_matrix(self) -> None:
        """Test parsing a single route."""
        parser = GoogleMapsResponseParser()
        result = parser.parse_distance_matrix(MOCK_DISTANCE_OK)

        assert result.distance_meters == 48200
        assert result.duration_seconds == 2460

    def test_parse_distance_matrix_no_route(self) -> None:
        """Test an element status other than OK raises."""
        parser = GoogleMapsResponseParser()

        with pytest.raises(GeocodingError, match="No route"):
            parser.parse_distance_matrix(MOCK_DISTANCE_NOT_FOUND)

    def test_parse_distance_matrix_empty(self) -> None:
        """Test a response without rows raises."""
        parser = GoogleMapsResponseParser()

        with pytest.raises(GeocodingError):
            parser.parse_distance_matrix({"status": "OK", "rows": []})


class TestGoogleMapsClientConfig:
    """Tests for client construction."""

    def test_client_initialization(self) -> None:
        """Test client initializes with default config."""
        client = GoogleMapsClient()

        assert client.config.timeout == 5.0
        assert client.config.max_retries == 0
        assert client.is_configured is False

    def test_client_custom_config(self) -> None:
        """Test client initializes with custom config."""
        config = GoogleMapsClientConfig(api_key="abc", timeout=10.0, max_retries=2, cache_ttl=60)
        client = GoogleMapsClient(config)

        assert client.is_configured is True
        assert client.config.timeout == 10.0
        assert client.config.max_retries == 2
        assert client.config.cache_ttl == 60

    def test_generate_cache_key(self) -> None:
        """Test cache key generation."""
        client = GoogleMapsClient()

        key1 = client._generate_cache_key(address="1 main st", query_type="geocode")
        key2 = client._generate_cache_key(query_type="geocode", address="1 main st")
        key3 = client._generate_cache_key(address="2 main st", query_type="geocode")

        assert key1 == key2
        assert key1 != key3


@pytest.mark.asyncio
class TestGoogleMapsClient:
    """Tests for GoogleMapsClient queries."""

    @respx.mock
    async def test_geocode_success(self) -> None:
        """Test successful forward geocode."""
        route = respx.get(GEOCODE_URL).mock(return_value=httpx.Response(200, json=MOCK_GEOCODE_OK))

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            result = await client.geocode_address("2400 Pioneer Trail, New Smyrna Beach")

        assert isinstance(result, GeocodeResult)
        assert result.zip_code == "32168"
        request = route.calls.last.request
        assert request.url.params["key"] == "test-key"
        assert request.url.params["region"] == "us"

    @respx.mock
    async def test_geocode_zero_results_returns_none(self) -> None:
        """Test provider failures are reported as None."""
        respx.get(GEOCODE_URL).mock(return_value=httpx.Response(200, json=MOCK_GEOCODE_ZERO))

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            assert await client.geocode_address("nowhere at all") is None

    @respx.mock
    async def test_geocode_http_error_returns_none(self) -> None:
        """Test HTTP errors are reported as None."""
        respx.get(GEOCODE_URL).mock(return_value=httpx.Response(500))

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            assert await client.geocode_address("1 Main St") is None

    async def test_geocode_without_key(self) -> None:
        """Test an unconfigured client returns None without a request."""
        async with GoogleMapsClient() as client:
            assert await client.geocode_address("1 Main St") is None

    async def test_geocode_empty_address(self) -> None:
        """Test blank input is skipped."""
        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            assert await client.geocode_address("   ") is None

    @respx.mock
    async def test_geocode_caching(self) -> None:
        """Test that lookups are cached case-insensitively."""
        route = respx.get(GEOCODE_URL).mock(return_value=httpx.Response(200, json=MOCK_GEOCODE_OK))

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            first = await client.geocode_address("2400 Pioneer Trail")
            second = await client.geocode_address("2400 PIONEER TRAIL")

            assert first == second
            assert route.call_count == 1

            client.clear_cache()
            await client.geocode_address("2400 Pioneer Trail")
            assert route.call_count == 2

    @respx.mock
    async def test_cache_disabled(self) -> None:
        """Test every call hits the API when caching is off."""
        route = respx.get(GEOCODE_URL).mock(return_value=httpx.Response(200, json=MOCK_GEOCODE_OK))
        config = GoogleMapsClientConfig(api_key="test-key", cache_enabled=False)

        async with GoogleMapsClient(config) as client:
            await client.geocode_address("2400 Pioneer Trail")
            await client.geocode_address("2400 Pioneer Trail")

        assert route.call_count == 2

    @respx.mock
    async def test_timeout_retry(self) -> None:
        """Test retry logic on timeout."""
        route = respx.get(GEOCODE_URL).mock(
            side_effect=[
                httpx.TimeoutException("Timeout"),
                httpx.TimeoutException("Timeout"),
                httpx.Response(200, json=MOCK_GEOCODE_OK),
            ]
        )
        config = GoogleMapsClientConfig(api_key="test-key", max_retries=3, retry_backoff_factor=0.0)

        async with GoogleMapsClient(config) as client:
            result = await client.geocode_address("2400 Pioneer Trail")

        assert isinstance(result, GeocodeResult)
        assert route.call_count == 3

    @respx.mock
    async def test_no_retry_by_default(self) -> None:
        """Test a single timeout fails the lookup with default config."""
        route = respx.get(GEOCODE_URL).mock(side_effect=httpx.TimeoutException("Timeout"))

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            assert await client.geocode_address("2400 Pioneer Trail") is None

        assert route.call_count == 1

    @respx.mock
    async def test_reverse_geocode(self) -> None:
        """Test reverse geocoding sends latlng."""
        route = respx.get(GEOCODE_URL).mock(return_value=httpx.Response(200, json=MOCK_GEOCODE_OK))

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            result = await client.reverse_geocode(SITE)

        assert isinstance(result, GeocodeResult)
        assert route.calls.last.request.url.params["latlng"] == "28.9877,-80.9712"

    @respx.mock
    async def test_distance_matrix(self) -> None:
        """Test a successful distance matrix lookup."""
        route = respx.get(DISTANCE_URL).mock(
            return_value=httpx.Response(200, json=MOCK_DISTANCE_OK)
        )

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            result = await client.distance_matrix(BASE, SITE)

        assert isinstance(result, DistanceMatrixResult)
        assert result.distance_meters == 48200
        params = route.calls.last.request.url.params
        assert params["origins"] == "29.0216,-81.077"
        assert params["units"] == "metric"

    @respx.mock
    async def test_distance_matrix_no_route(self) -> None:
        """Test a missing route is reported as None."""
        respx.get(DISTANCE_URL).mock(return_value=httpx.Response(200, json=MOCK_DISTANCE_NOT_FOUND))

        async with GoogleMapsClient(GoogleMapsClientConfig(api_key="test-key")) as client:
            assert await client.distance_matrix(BASE, SITE) is None


class TestZipTable:
    """Tests for the ZIP code drive time table."""

    def test_extract_zip_code(self) -> None:
        """Test the last five-digit group is used."""
        assert extract_zip_code("1234 Main St, New Smyrna Beach, FL 32168") == "32168"
        assert extract_zip_code("12345 Road 5, Orlando, FL 32801-1234") == "32801"
        assert extract_zip_code("No zip here") is None

    def test_drive_seconds_for_zip(self) -> None:
        """Test known ZIPs convert minutes to seconds."""
        assert drive_seconds_for_zip("32801") == 3600.0
        assert drive_seconds_for_zip("99999") is None
        assert drive_seconds_for_zip(None) is None
