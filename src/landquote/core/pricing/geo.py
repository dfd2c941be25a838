"""
Great-circle distance and parcel area helpers.
"""

import math

from landquote.models.location import BoundingBox, Coordinates

EARTH_RADIUS_M = 6371000.0

# Rough meters per degree of latitude
METERS_PER_DEGREE = 111000.0

# Straight-line to road distance, and average rural driving speed
ROAD_DISTANCE_FACTOR = 1.25
AVERAGE_SPEED_MPS = 56000.0 / 3600.0


def haversine_distance(origin: Coordinates, destination: Coordinates) -> float:
    """
    Great-circle distance between two points.

    Args:
        origin: Start coordinates
        destination: End coordinates

    Returns:
        Distance in meters
    """
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lng = math.radians(destination.longitude - origin.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def estimate_drive_seconds(distance_meters: float) -> float:
    """
    Drive time estimate used when neither the provider nor the ZIP table
    has an answer.

    Args:
        distance_meters: Great-circle distance

    Returns:
        Estimated one-way drive time in seconds
    """
    return distance_meters * ROAD_DISTANCE_FACTOR / AVERAGE_SPEED_MPS


def bounds_area_m2(bounds: BoundingBox) -> float:
    """
    Flat approximation of a bounding box area, without latitude correction.

    Args:
        bounds: Property bounding box

    Returns:
        Area in square meters
    """
    return abs(
        (bounds.north - bounds.south)
        * (bounds.east - bounds.west)
        * METERS_PER_DEGREE
        * METERS_PER_DEGREE
    )


def corrected_bounds_area_m2(bounds: BoundingBox) -> float:
    """
    Bounding box area with longitude scaled by the cosine of mean latitude.

    Args:
        bounds: Property bounding box

    Returns:
        Area in square meters
    """
    avg_lat = math.radians((bounds.north + bounds.south) / 2)
    lat_meters = (bounds.north - bounds.south) * METERS_PER_DEGREE
    lng_meters = (bounds.east - bounds.west) * METERS_PER_DEGREE * math.cos(avg_lat)
    return abs(lat_meters * lng_meters)
