"""
Google Maps Platform response parser.

Parses Geocoding and Distance Matrix API responses into LandQuote models.
"""

import logging
from typing import Any, Dict, List, Optional

from landquote.core.errors import GeocodingError
from landquote.models.geocoding import DistanceMatrixResult, GeocodeResult
from landquote.models.location import Coordinates, PropertyType

logger = logging.getLogger(__name__)


class GoogleMapsResponseParser:
    """Parser for Google Geocoding and Distance Matrix API responses."""

    # Place types checked in order; the first match decides
    PROPERTY_TYPE_MAPPING = (
        ("premise", PropertyType.RESIDENTIAL),
        ("street_address", PropertyType.RESIDENTIAL),
        ("establishment", PropertyType.COMMERCIAL),
        ("point_of_interest", PropertyType.COMMERCIAL),
        ("route", PropertyType.AGRICULTURAL),
        ("natural_feature", PropertyType.AGRICULTURAL),
    )

    def detect_property_type(self, types: List[str]) -> Optional[PropertyType]:
        """
        Map provider place types to a property type.

        Args:
            types: Provider place types

        Returns:
            PropertyType, or None when no type is recognised
        """
        for place_type, property_type in self.PROPERTY_TYPE_MAPPING:
            if place_type in types:
                return property_type
        return None

    def _parse_zip_code(self, components: List[Dict[str, Any]]) -> Optional[str]:
        """
        Extract the postal code from address components.

        Args:
            components: Provider address_components list

        Returns:
            Postal code or None
        """
        for component in components:
            if "postal_code" in component.get("types", []):
                return component.get("short_name") or component.get("long_name")
        return None

    def _check_status(self, data: Dict[str, Any], query: Optional[str]) -> None:
        status = data.get("status", "UNKNOWN_ERROR")
        if status != "OK":
            message = data.get("error_message") or f"Provider returned status {status}"
            raise GeocodingError(message, provider_status=status, query=query)

    def parse_geocode_response(
        self,
        data: Dict[str, Any],
        query: Optional[str] = None,
    ) -> GeocodeResult:
        """
        Parse a Geocoding API response.

        Args:
            data: Raw JSON response
            query: Address or "lat,lng" that was queried

        Returns:
            GeocodeResult for the first match

        Raises:
            GeocodingError: If the status is not OK, there are no results,
                or the first result has no usable location
        """
        self._check_status(data, query)

        results = data.get("results") or []
        if not results:
            raise GeocodingError("No geocoding results", provider_status="ZERO_RESULTS", query=query)

        result = results[0]
        try:
            location = result["geometry"]["location"]
            coordinates = Coordinates(latitude=location["lat"], longitude=location["lng"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(
                "Geocoding result has no usable location",
                query=query,
                details={"error": str(e)},
            ) from e

        types = list(result.get("types", []))
        parsed = GeocodeResult(
            coordinates=coordinates,
            formatted_address=result.get("formatted_address", ""),
            place_id=result.get("place_id"),
            types=tuple(types),
            partial_match=bool(result.get("partial_match", False)),
            zip_code=self._parse_zip_code(result.get("address_components", [])),
            property_type=self.detect_property_type(types),
        )

        logger.debug(
            f"Parsed geocode result: {parsed.formatted_address} "
            f"(partial={parsed.partial_match}, types={types})"
        )
        return parsed

    def parse_distance_matrix(self, data: Dict[str, Any]) -> DistanceMatrixResult:
        """
        Parse a single-origin, single-destination Distance Matrix response.

        Args:
            data: Raw JSON response

        Returns:
            DistanceMatrixResult

        Raises:
            GeocodingError: If the status is not OK or the route is missing
        """
        self._check_status(data, None)

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise GeocodingError("Distance matrix response has no elements") from e

        element_status = element.get("status", "UNKNOWN_ERROR")
        if element_status != "OK":
            raise GeocodingError(
                f"No route found (status {element_status})",
                provider_status=element_status,
            )

        return DistanceMatrixResult(
            distance_meters=element["distance"]["value"],
            duration_seconds=element["duration"]["value"],
        )
