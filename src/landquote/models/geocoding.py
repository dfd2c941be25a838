"""
Parsed geocoding provider results.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from landquote.models.location import Coordinates, PropertyType


class GeocodeResult(BaseModel):
    """
    First match of a forward or reverse geocoding query.

    Attributes:
        coordinates: Location of the match
        formatted_address: Provider's canonical address
        place_id: Provider place identifier
        types: Provider place types
        partial_match: Provider could only match part of the query
        zip_code: Postal code component, if present
        property_type: Property type implied by the place types
    """

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    formatted_address: str = ""
    place_id: Optional[str] = None
    types: Tuple[str, ...] = ()
    partial_match: bool = False
    zip_code: Optional[str] = None
    property_type: Optional[PropertyType] = None

    @property
    def is_canonical(self) -> bool:
        """Whether the match is exact enough to mark an address verified."""
        return not self.partial_match


class DistanceMatrixResult(BaseModel):
    """
    Road distance and drive time between two points.

    Attributes:
        distance_meters: Road distance
        duration_seconds: Drive time without traffic
    """

    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(..., ge=0)
    duration_seconds: float = Field(..., ge=0)
