"""
Project parameter models.

Package and urgency are kept as plain strings so that malformed client input
reaches the pricing tables, where it fails closed to a default instead of
rejecting the whole quote.
"""

from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from landquote.models.location import BoundingBox


class PackageType(str, Enum):
    """Service packages, named by the largest vegetation diameter cleared."""

    SMALL = "small"  # 4" DBH
    MEDIUM = "medium"  # 6" DBH
    LARGE = "large"  # 8" DBH
    XLARGE = "xlarge"  # 10" DBH


class UrgencyTier(str, Enum):
    """Scheduling urgency."""

    STANDARD = "standard"
    PRIORITY = "priority"
    EMERGENCY = "emergency"


def normalize_tags(tags: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    """
    Collapse free-form tags into a sorted tuple with set semantics.

    Whitespace is trimmed, empty tags are dropped and duplicates are removed
    case-insensitively (the first spelling seen wins).

    Args:
        tags: Iterable of tag values

    Returns:
        Sorted tuple of distinct tags
    """
    if tags is None:
        return ()
    if isinstance(tags, str):
        tags = [tags]

    seen: dict[str, str] = {}
    for tag in tags:
        text = str(tag).strip()
        if text and text.lower() not in seen:
            seen[text.lower()] = text
    return tuple(sorted(seen.values(), key=str.lower))


class ProjectParameters(BaseModel):
    """
    Caller-supplied project description.

    Attributes:
        acreage: Area to clear in acres
        package: Requested package key (small/medium/large/xlarge)
        obstacles: Site risk tags, e.g. "power lines overhead"
        urgency: Scheduling tier (standard/priority/emergency)
        access_concerns: Equipment access tags, e.g. "narrow gate"
        bounds: Optional explicit property boundary
    """

    model_config = ConfigDict(frozen=True)

    acreage: float = Field(..., gt=0, le=1000, description="Acres to clear")
    package: str = Field(default=PackageType.MEDIUM.value, description="Package key")
    obstacles: Tuple[str, ...] = Field(default=(), description="Obstacle tags")
    urgency: str = Field(default=UrgencyTier.STANDARD.value, description="Urgency tier")
    access_concerns: Tuple[str, ...] = Field(default=(), description="Access concern tags")
    bounds: Optional[BoundingBox] = Field(None, description="Property bounding box")

    @field_validator("package", "urgency", mode="before")
    @classmethod
    def _normalize_key(cls, value: Any) -> str:
        if isinstance(value, Enum):
            value = value.value
        return str(value).strip().lower()

    @field_validator("obstacles", "access_concerns", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Tuple[str, ...]:
        return normalize_tags(value)
