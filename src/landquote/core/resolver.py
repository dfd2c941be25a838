"""
Property location resolver.

Turns an address or a dropped map pin into a PropertyLocation. Geocoding
failures never escape: an unresolvable address gets the fallback coordinate
and ``verified=False`` so a quote can still be produced.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from landquote.core.config import Settings
from landquote.core.config import settings as default_settings
from landquote.core.errors import ValidationError
from landquote.core.pricing.geo import (
    corrected_bounds_area_m2,
    estimate_drive_seconds,
    haversine_distance,
)
from landquote.core.pricing.zones import DEFAULT_ZONES, ServiceZone, classify_distance
from landquote.integrations.google_maps import GoogleMapsClient, GoogleMapsClientConfig
from landquote.integrations.google_maps.zip_table import drive_seconds_for_zip, extract_zip_code
from landquote.models.geocoding import GeocodeResult
from landquote.models.location import (
    BoundingBox,
    Coordinates,
    DriveRoute,
    DurationSource,
    PropertyLocation,
)

logger = logging.getLogger(__name__)

LocationInput = Union[str, Coordinates, Sequence[float], Mapping[str, Any]]

DEFAULT_ACCESSIBILITY_SCORE = 7.0
LARGE_PARCEL_M2 = 40000.0
SMALL_PARCEL_M2 = 4000.0


def accessibility_score_for(bounds: Optional[BoundingBox]) -> float:
    """
    Equipment access score for a provider-resolved property.

    Larger parcels are easier to work; very small ones are cramped.

    Args:
        bounds: Explicit property outline, if any

    Returns:
        Score from 1 (hardest) to 10 (easiest)
    """
    score = DEFAULT_ACCESSIBILITY_SCORE
    if bounds is not None:
        area = corrected_bounds_area_m2(bounds)
        if area > LARGE_PARCEL_M2:
            score += 1
        elif area < SMALL_PARCEL_M2:
            score -= 1
    return max(1.0, min(10.0, score))


def coerce_coordinates(value: Any) -> Optional[Coordinates]:
    """
    Interpret a location input as coordinates.

    Args:
        value: Coordinates, (lat, lng) pair, mapping with lat/lng keys, or text

    Returns:
        Coordinates, or None when the input is address text

    Raises:
        ValidationError: If the input looks like coordinates but is malformed
    """
    if isinstance(value, Coordinates):
        return value
    if value is None or isinstance(value, str):
        return None

    if isinstance(value, Mapping):
        lat = value.get("latitude", value.get("lat"))
        lng = value.get("longitude", value.get("lng"))
    elif isinstance(value, Sequence) and len(value) == 2:
        lat, lng = value
    else:
        raise ValidationError(
            "Location must be an address or a (latitude, longitude) pair",
            field="location",
            details={"received": repr(value)[:100]},
        )

    if isinstance(lat, bool) or isinstance(lng, bool):
        raise ValidationError("Coordinates must be numeric", field="location")

    try:
        return Coordinates(latitude=lat, longitude=lng)
    except PydanticValidationError as e:
        raise ValidationError(
            "Malformed coordinates",
            field="location",
            details={"errors": [err["msg"] for err in e.errors()]},
            suggestions=["Latitude must be within -90..90 and longitude within -180..180"],
        ) from e


def _client_from_settings(settings: Settings) -> GoogleMapsClient:
    return GoogleMapsClient(
        GoogleMapsClientConfig(
            api_key=settings.google_maps_api_key,
            timeout=settings.geocoder_timeout,
            cache_ttl=settings.geocoder_cache_ttl,
        )
    )


async def _drive_route(
    coordinates: Coordinates,
    base: Coordinates,
    zip_code: Optional[str],
    client: Optional[GoogleMapsClient],
) -> DriveRoute:
    """Great-circle distance plus the best available drive time."""
    distance = haversine_distance(base, coordinates)

    if client is not None:
        matrix = await client.distance_matrix(base, coordinates)
        if matrix is not None:
            return DriveRoute(
                distance_meters=distance,
                duration_seconds=matrix.duration_seconds,
                duration_source=DurationSource.PROVIDER,
            )

    zip_seconds = drive_seconds_for_zip(zip_code)
    if zip_seconds is not None:
        return DriveRoute(
            distance_meters=distance,
            duration_seconds=zip_seconds,
            duration_source=DurationSource.ZIP_TABLE,
        )

    return DriveRoute(
        distance_meters=distance,
        duration_seconds=estimate_drive_seconds(distance),
        duration_source=DurationSource.ESTIMATED,
    )


def _build_location(
    coordinates: Coordinates,
    route: DriveRoute,
    *,
    formatted_address: str,
    geocode: Optional[GeocodeResult],
    bounds: Optional[BoundingBox],
    zip_code: Optional[str],
    zones: Sequence[ServiceZone],
) -> PropertyLocation:
    zone = classify_distance(route.distance_meters, zones)
    return PropertyLocation(
        coordinates=coordinates,
        formatted_address=formatted_address,
        verified=geocode is not None and geocode.is_canonical,
        property_type=geocode.property_type.value if geocode and geocode.property_type else None,
        accessibility_score=accessibility_score_for(bounds) if geocode is not None else None,
        distance_from_base=route,
        service_zone=zone.name,
        zip_code=zip_code,
        place_id=geocode.place_id if geocode else None,
    )


async def resolve_location(
    address_or_coordinates: LocationInput,
    *,
    bounds: Optional[BoundingBox] = None,
    client: Optional[GoogleMapsClient] = None,
    settings: Optional[Settings] = None,
    zones: Sequence[ServiceZone] = DEFAULT_ZONES,
) -> PropertyLocation:
    """
    Resolve an address or coordinate pair to a PropertyLocation.

    Coordinates skip forward geocoding; a reverse lookup is attempted for the
    address and property type. Address text is geocoded, and any provider
    failure yields an unverified location at the fallback coordinate with the
    raw text kept as the address.

    Args:
        address_or_coordinates: Address text, Coordinates, (lat, lng) pair,
            or mapping with latitude/longitude keys
        bounds: Explicit property outline, if the customer drew one
        client: Provider client; one is created from settings when omitted
            and an API key is configured
        settings: Application settings (defaults to the global settings)
        zones: Zone table used for the service_zone label; pass the same
            table the estimate is priced with

    Returns:
        PropertyLocation

    Raises:
        ValidationError: If coordinates were given but are malformed
    """
    settings = settings or default_settings
    coordinates = coerce_coordinates(address_or_coordinates)
    base = Coordinates(latitude=settings.base_latitude, longitude=settings.base_longitude)

    owns_client = client is None and settings.geocoding_enabled
    if owns_client:
        client = _client_from_settings(settings)
    elif client is not None and not client.is_configured:
        client = None

    try:
        if coordinates is not None:
            geocode = await client.reverse_geocode(coordinates) if client else None
            zip_code = geocode.zip_code if geocode else None
            route = await _drive_route(coordinates, base, zip_code, client)
            location = _build_location(
                coordinates,
                route,
                formatted_address=geocode.formatted_address if geocode else coordinates.to_query(),
                geocode=geocode,
                bounds=bounds,
                zip_code=zip_code,
                zones=zones,
            )
            logger.info(
                f"Resolved pin {coordinates.to_query()} to {location.service_zone} zone "
                f"({route.distance_km:.1f} km, verified={location.verified})"
            )
            return location

        address = str(address_or_coordinates or "").strip()
        geocode = await client.geocode_address(address) if client and address else None

        if geocode is None:
            fallback = Coordinates(
                latitude=settings.fallback_latitude,
                longitude=settings.fallback_longitude,
            )
            zip_code = extract_zip_code(address)
            route = await _drive_route(fallback, base, zip_code, None)
            logger.warning(
                f"Could not verify address '{address}', using fallback coordinate "
                f"{fallback.to_query()}"
            )
            return _build_location(
                fallback,
                route,
                formatted_address=address,
                geocode=None,
                bounds=bounds,
                zip_code=zip_code,
                zones=zones,
            )

        zip_code = geocode.zip_code or extract_zip_code(geocode.formatted_address)
        route = await _drive_route(geocode.coordinates, base, zip_code, client)
        location = _build_location(
            geocode.coordinates,
            route,
            formatted_address=geocode.formatted_address,
            geocode=geocode,
            bounds=bounds,
            zip_code=zip_code,
            zones=zones,
        )
        logger.info(
            f"Resolved '{address}' to {location.formatted_address} in "
            f"{location.service_zone} zone ({route.distance_km:.1f} km)"
        )
        return location

    finally:
        if owns_client and client is not None:
            await client.close()
