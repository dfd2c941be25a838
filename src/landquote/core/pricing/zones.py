"""
Travel zone classification.

Zones are contiguous distance bands around the service base. A distance on a
band boundary belongs to the closer, cheaper zone, so each band covers
(min_km, max_km] and the first band also includes zero.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from landquote.core.errors import ConfigurationError


@dataclass(frozen=True)
class ServiceZone:
    """
    One travel band.

    Attributes:
        name: Short zone name
        description: Customer-facing description
        min_km: Lower bound (exclusive, except for the first band)
        max_km: Upper bound (inclusive)
        surcharge_percent: Travel surcharge as a percent of the base price
    """

    name: str
    description: str
    min_km: float
    max_km: float
    surcharge_percent: float

    def contains(self, distance_km: float) -> bool:
        """Whether a distance falls inside this band."""
        if self.min_km == 0:
            return 0 <= distance_km <= self.max_km
        return self.min_km < distance_km <= self.max_km


@dataclass(frozen=True)
class ZoneClassification:
    """
    Zone assigned to a distance.

    Attributes:
        zone: Matching band, or the outermost band when out of area
        distance_km: Classified distance
        out_of_area: Distance lies beyond the outermost band
    """

    zone: ServiceZone
    distance_km: float
    out_of_area: bool = False

    @property
    def name(self) -> str:
        """Zone label for display."""
        return OUT_OF_AREA_NAME if self.out_of_area else self.zone.name

    @property
    def description(self) -> str:
        """Zone description for display."""
        if self.out_of_area:
            return "Outside Service Area - Maximum Travel Surcharge"
        return self.zone.description

    @property
    def surcharge_percent(self) -> float:
        """Surcharge to apply; out-of-area uses the outermost band's rate."""
        return self.zone.surcharge_percent


OUT_OF_AREA_NAME = "Out-of-area"

DEFAULT_ZONES: Tuple[ServiceZone, ...] = (
    ServiceZone("Core", "Core Service Area - Premium Response", 0, 30, 0.0),
    ServiceZone("Primary", "Primary Service Area - Standard", 30, 60, 5.0),
    ServiceZone("Extended", "Extended Service Area - Travel Premium", 60, 100, 15.0),
    ServiceZone("Maximum", "Maximum Service Area - High Travel Cost", 100, 150, 25.0),
)


def validate_zones(zones: Sequence[ServiceZone]) -> None:
    """
    Check that bands start at zero, are contiguous and ascending, and that
    surcharges never decrease with distance.

    Args:
        zones: Ordered zone table

    Raises:
        ConfigurationError: If the table is malformed
    """
    if not zones:
        raise ConfigurationError("Zone table is empty", config_key="zones")
    if zones[0].min_km != 0:
        raise ConfigurationError("First zone must start at 0 km", config_key="zones")

    for previous, current in zip(zones, zones[1:]):
        if current.min_km != previous.max_km:
            raise ConfigurationError(
                f"Zone '{current.name}' does not start where '{previous.name}' ends",
                config_key="zones",
            )
        if current.surcharge_percent < previous.surcharge_percent:
            raise ConfigurationError(
                f"Zone '{current.name}' surcharge is lower than '{previous.name}'",
                config_key="zones",
            )

    for zone in zones:
        if zone.max_km <= zone.min_km:
            raise ConfigurationError(f"Zone '{zone.name}' has an empty range", config_key="zones")


def classify_distance(
    distance_meters: float,
    zones: Sequence[ServiceZone] = DEFAULT_ZONES,
) -> ZoneClassification:
    """
    Map a distance from the service base to its travel zone.

    Args:
        distance_meters: Distance from the base in meters
        zones: Ordered, contiguous zone table

    Returns:
        ZoneClassification; distances past the last band are flagged
        out_of_area and carry the last band's surcharge
    """
    distance_km = max(distance_meters, 0.0) / 1000

    for zone in zones:
        if zone.contains(distance_km):
            return ZoneClassification(zone=zone, distance_km=distance_km)

    return ZoneClassification(zone=zones[-1], distance_km=distance_km, out_of_area=True)


def is_within_service_area(
    distance_meters: float,
    zones: Sequence[ServiceZone] = DEFAULT_ZONES,
) -> bool:
    """Whether a distance falls inside any service band."""
    return not classify_distance(distance_meters, zones).out_of_area
