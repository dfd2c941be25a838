"""
Shared fixtures for LandQuote tests.
"""

from typing import Callable, Optional

import pytest

from landquote.core.config import Settings
from landquote.models.location import Coordinates, DriveRoute, PropertyLocation
from landquote.models.project import ProjectParameters

BASE_LATITUDE = 29.0216
BASE_LONGITUDE = -81.0770


@pytest.fixture
def make_location() -> Callable[..., PropertyLocation]:
    """Factory for resolved locations at a given distance from the base."""

    def _make(
        distance_meters: float = 0.0,
        verified: bool = False,
        property_type: Optional[str] = None,
        accessibility_score: Optional[float] = None,
        latitude: float = BASE_LATITUDE,
        longitude: float = BASE_LONGITUDE,
    ) -> PropertyLocation:
        return PropertyLocation(
            coordinates=Coordinates(latitude=latitude, longitude=longitude),
            formatted_address="123 Test Rd, New Smyrna Beach, FL 32168",
            verified=verified,
            property_type=property_type,
            accessibility_score=accessibility_score,
            distance_from_base=DriveRoute(
                distance_meters=distance_meters,
                duration_seconds=distance_meters / 15.0,
            ),
        )

    return _make


@pytest.fixture
def bare_location(make_location: Callable[..., PropertyLocation]) -> PropertyLocation:
    """Unverified location at the service base with no extra signals."""
    return make_location()


@pytest.fixture
def five_acre_medium() -> ProjectParameters:
    """5 acres, medium package, standard urgency, nothing else."""
    return ProjectParameters(acreage=5, package="medium")


@pytest.fixture
def offline_settings() -> Settings:
    """Settings with no geocoding key configured."""
    return Settings(google_maps_api_key=None, environment="development")


@pytest.fixture
def online_settings() -> Settings:
    """Settings with a (fake) geocoding key configured."""
    return Settings(google_maps_api_key="test-key", environment="development")
