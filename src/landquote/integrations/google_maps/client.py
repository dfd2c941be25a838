"""
Google Maps Platform API client.

Implements API client with:
- API key authentication
- Timeout handling
- Optional retry with exponential backoff (off by default)
- In-memory TTL caching
- Credential redaction in logs
"""

import asyncio
import hashlib
import logging
import time
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import BaseModel, Field

from landquote.core.errors import GeocodingError
from landquote.models.geocoding import DistanceMatrixResult, GeocodeResult
from landquote.models.location import Coordinates
from landquote.utils.logging import redact_sensitive

from .parser import GoogleMapsResponseParser

logger = logging.getLogger(__name__)


class GoogleMapsClientConfig(BaseModel):
    """Configuration for the Google Maps client."""

    geocode_url: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Geocoding API endpoint",
    )
    distance_matrix_url: str = Field(
        default="https://maps.googleapis.com/maps/api/distancematrix/json",
        description="Distance Matrix API endpoint",
    )
    api_key: Optional[str] = Field(None, description="Server-side API key")
    timeout: float = Field(default=5.0, description="Request timeout in seconds", ge=0.5, le=30.0)
    max_retries: int = Field(default=0, description="Maximum number of retries", ge=0, le=5)
    retry_backoff_factor: float = Field(
        default=0.5, description="Exponential backoff factor", ge=0.0, le=10.0
    )
    region: Optional[str] = Field(default="us", description="Region bias for geocoding")
    cache_enabled: bool = Field(default=True, description="Enable caching")
    cache_ttl: int = Field(default=86400, description="Cache TTL in seconds (24 hours)", ge=0)


class GoogleMapsClient:
    """
    Client for the Google Geocoding and Distance Matrix APIs.

    Query methods never raise: provider and network failures are logged and
    reported as None so the caller can fall back.
    """

    def __init__(self, config: Optional[GoogleMapsClientConfig] = None) -> None:
        """
        Initialize Google Maps client.

        Args:
            config: Client configuration
        """
        self.config = config or GoogleMapsClientConfig()
        self.client = httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout))
        self.parser = GoogleMapsResponseParser()
        self._cache: Dict[str, Tuple[Any, float]] = {}

        logger.info(
            f"Google Maps client initialized, timeout: {self.config.timeout}s, "
            f"key configured: {self.is_configured}"
        )

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.config.api_key)

    async def __aenter__(self) -> "GoogleMapsClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    def _generate_cache_key(self, **kwargs: Any) -> str:
        """
        Generate cache key from query parameters.

        Args:
            **kwargs: Query parameters

        Returns:
            SHA256 hash of parameters
        """
        key_string = str(sorted(kwargs.items()))
        return hashlib.sha256(key_string.encode()).hexdigest()

    def _get_from_cache(self, cache_key: str) -> Optional[Any]:
        """
        Get a result from cache if available and not expired.

        Args:
            cache_key: Cache key

        Returns:
            Cached result or None
        """
        if not self.config.cache_enabled or cache_key not in self._cache:
            return None

        data, timestamp = self._cache[cache_key]
        age = time.time() - timestamp
        if age < self.config.cache_ttl:
            logger.debug(f"Cache hit for key {cache_key[:8]}... (age: {age:.1f}s)")
            return data

        logger.debug(f"Cache expired for key {cache_key[:8]}... (age: {age:.1f}s)")
        del self._cache[cache_key]
        return None

    def _put_in_cache(self, cache_key: str, data: Any) -> None:
        """
        Store a result in cache.

        Args:
            cache_key: Cache key
            data: Parsed result to cache
        """
        if not self.config.cache_enabled:
            return

        self._cache[cache_key] = (data, time.time())
        logger.debug(f"Cached data for key {cache_key[:8]}...")

    def clear_cache(self) -> None:
        """Drop every cached result."""
        self._cache.clear()

    async def _make_request(
        self,
        url: str,
        params: Dict[str, Any],
        retry_count: int = 0,
    ) -> Dict[str, Any]:
        """
        Make HTTP request with optional retries.

        Args:
            url: API endpoint
            params: Query parameters (the API key is added here)
            retry_count: Current retry attempt

        Returns:
            JSON response data

        Raises:
            GeocodingError: If no API key is configured
            httpx.HTTPError: On request failure after retries
        """
        if not self.config.api_key:
            raise GeocodingError("Google Maps API key is not configured")

        request_params = {**params, "key": self.config.api_key}

        try:
            logger.debug(
                f"Making request to {url} with params: {redact_sensitive(request_params)}"
            )
            response = await self.client.get(url, params=request_params)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPError as e:
            logger.warning(
                f"Request failed (attempt {retry_count + 1}): {redact_sensitive(str(e))}"
            )

            if retry_count < self.config.max_retries:
                backoff = self.config.retry_backoff_factor * (2**retry_count)
                logger.info(f"Retrying in {backoff:.2f}s...")
                await asyncio.sleep(backoff)
                return await self._make_request(url, params, retry_count + 1)

            raise

    async def geocode_address(self, address: str) -> Optional[GeocodeResult]:
        """
        Forward geocode a free-text address.

        Args:
            address: Address text

        Returns:
            GeocodeResult for the best match, or None on any failure
        """
        address = address.strip()
        if not address:
            logger.warning("Skipping geocode of empty address")
            return None

        cache_key = self._generate_cache_key(address=address.lower(), query_type="geocode")
        cached = self._get_from_cache(cache_key)
        if cached:
            return cached

        params: Dict[str, Any] = {"address": address}
        if self.config.region:
            params["region"] = self.config.region

        try:
            data = await self._make_request(self.config.geocode_url, params)
            result = self.parser.parse_geocode_response(data, query=address)
        except (GeocodingError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Geocoding failed for '{address}': {redact_sensitive(str(e))}")
            return None

        self._put_in_cache(cache_key, result)
        return result

    async def reverse_geocode(self, coordinates: Coordinates) -> Optional[GeocodeResult]:
        """
        Reverse geocode a coordinate pair.

        Args:
            coordinates: Point to look up

        Returns:
            GeocodeResult for the nearest address, or None on any failure
        """
        query = coordinates.to_query()
        cache_key = self._generate_cache_key(latlng=query, query_type="reverse")
        cached = self._get_from_cache(cache_key)
        if cached:
            return cached

        try:
            data = await self._make_request(self.config.geocode_url, {"latlng": query})
            result = self.parser.parse_geocode_response(data, query=query)
        except (GeocodingError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Reverse geocoding failed for {query}: {redact_sensitive(str(e))}")
            return None

        self._put_in_cache(cache_key, result)
        return result

    async def distance_matrix(
        self,
        origin: Coordinates,
        destination: Coordinates,
    ) -> Optional[DistanceMatrixResult]:
        """
        Road distance and drive time between two points.

        Args:
            origin: Start point
            destination: End point

        Returns:
            DistanceMatrixResult, or None on any failure
        """
        cache_key = self._generate_cache_key(
            origin=origin.to_query(),
            destination=destination.to_query(),
            query_type="distance",
        )
        cached = self._get_from_cache(cache_key)
        if cached:
            return cached

        params = {
            "origins": origin.to_query(),
            "destinations": destination.to_query(),
            "units": "metric",
        }

        try:
            data = await self._make_request(self.config.distance_matrix_url, params)
            result = self.parser.parse_distance_matrix(data)
        except (GeocodingError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Distance matrix lookup failed: {redact_sensitive(str(e))}")
            return None

        self._put_in_cache(cache_key, result)
        return result
