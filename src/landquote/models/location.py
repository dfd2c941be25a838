"""
Location models for the estimation engine.

A PropertyLocation is built once per quote request by the resolver and is
never mutated afterwards; moving the map pin produces a new one.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PropertyType(str, Enum):
    """Property classifications that influence access and pricing."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    AGRICULTURAL = "agricultural"
    INDUSTRIAL = "industrial"


class DurationSource(str, Enum):
    """Where a drive-time figure came from."""

    PROVIDER = "provider"  # Distance Matrix API
    ZIP_TABLE = "zip_table"  # Static ZIP -> minutes lookup
    ESTIMATED = "estimated"  # Derived from great-circle distance


class Coordinates(BaseModel):
    """
    WGS84 coordinate pair in decimal degrees.

    Attributes:
        latitude: Latitude (-90 to 90)
        longitude: Longitude (-180 to 180)
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude (WGS84)")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude (WGS84)")

    def as_tuple(self) -> tuple[float, float]:
        """Return (latitude, longitude)."""
        return (self.latitude, self.longitude)

    def to_query(self) -> str:
        """Format as the provider's "lat,lng" query string."""
        return f"{self.latitude},{self.longitude}"


class BoundingBox(BaseModel):
    """
    Explicit property boundary drawn by the customer.

    Attributes:
        north: Northern latitude
        south: Southern latitude
        east: Eastern longitude
        west: Western longitude
    """

    model_config = ConfigDict(frozen=True)

    north: float = Field(..., ge=-90, le=90)
    south: float = Field(..., ge=-90, le=90)
    east: float = Field(..., ge=-180, le=180)
    west: float = Field(..., ge=-180, le=180)

    @model_validator(mode="after")
    def _check_orientation(self) -> "BoundingBox":
        if self.north < self.south:
            raise ValueError("north must be greater than or equal to south")
        return self


class DriveRoute(BaseModel):
    """
    Distance and drive time from the service base.

    Attributes:
        distance_meters: Great-circle distance in meters
        duration_seconds: Estimated one-way drive time in seconds
        duration_source: Where the drive time came from
    """

    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(..., ge=0, description="Great-circle distance (m)")
    duration_seconds: float = Field(..., ge=0, description="Drive time (s)")
    duration_source: DurationSource = Field(default=DurationSource.ESTIMATED)

    @property
    def distance_km(self) -> float:
        """Distance in kilometers."""
        return self.distance_meters / 1000

    @property
    def duration_minutes(self) -> float:
        """Drive time in minutes."""
        return self.duration_seconds / 60


class PropertyLocation(BaseModel):
    """
    Resolved property location.

    Attributes:
        coordinates: Verified or fallback coordinates
        formatted_address: Canonical address, or the raw input when unresolved
        verified: Address matched a canonical geocoding result
        property_type: Best-effort property classification; free text is
            tolerated so unknown values can fail closed downstream
        accessibility_score: Equipment access score, 1-10 (10 = easiest)
        distance_from_base: Distance and drive time from the service base
        service_zone: Zone label derived from the distance
        zip_code: Postal code when known
        place_id: Provider place identifier when known
    """

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    formatted_address: str = ""
    verified: bool = False
    property_type: Optional[str] = None
    accessibility_score: Optional[float] = Field(None, ge=1, le=10)
    distance_from_base: DriveRoute
    service_zone: str = ""
    zip_code: Optional[str] = None
    place_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "coordinates": {
                "latitude": self.coordinates.latitude,
                "longitude": self.coordinates.longitude,
            },
            "formatted_address": self.formatted_address,
            "verified": self.verified,
            "property_type": self.property_type,
            "accessibility_score": self.accessibility_score,
            "distance_meters": self.distance_from_base.distance_meters,
            "duration_seconds": self.distance_from_base.duration_seconds,
            "duration_source": self.distance_from_base.duration_source.value,
            "service_zone": self.service_zone,
            "zip_code": self.zip_code,
            "place_id": self.place_id,
        }
