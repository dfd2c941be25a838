"""
Data models and schemas.
"""

from .errors import ErrorDetail, ErrorResponse
from .estimate import AdjustmentResult, Estimate, PackageInfo, ZoneInfo
from .geocoding import DistanceMatrixResult, GeocodeResult
from .location import (
    BoundingBox,
    Coordinates,
    DriveRoute,
    DurationSource,
    PropertyLocation,
    PropertyType,
)
from .project import PackageType, ProjectParameters, UrgencyTier, normalize_tags

__all__ = [
    # Location models
    "Coordinates",
    "BoundingBox",
    "DriveRoute",
    "DurationSource",
    "PropertyLocation",
    "PropertyType",
    # Project models
    "PackageType",
    "UrgencyTier",
    "ProjectParameters",
    "normalize_tags",
    # Estimate models
    "AdjustmentResult",
    "Estimate",
    "PackageInfo",
    "ZoneInfo",
    # Provider results
    "GeocodeResult",
    "DistanceMatrixResult",
    # Error models
    "ErrorDetail",
    "ErrorResponse",
]
