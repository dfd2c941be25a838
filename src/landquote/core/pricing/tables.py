"""
Immutable bundle of every table the pricing engine reads.

Swapping a PricingTables instance is the only way to retune the engine;
calculation code never holds literals of its own.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from landquote.core.pricing.packages import DEFAULT_PACKAGES, PackageSpec
from landquote.core.pricing.zones import DEFAULT_ZONES, ServiceZone, validate_zones
from landquote.models.location import Coordinates, PropertyType
from landquote.models.project import UrgencyTier


@dataclass(frozen=True)
class GeographicRiskRule:
    """
    Coordinate-range rule adding a logistics premium.

    Any bound left as None is unbounded. Bounds are exclusive so a rule
    reading "south of 27N" is written as max_lat=27.

    Attributes:
        name: Rule label used in breakdowns
        percent: Premium as a percent of the base price
        min_lat: Applies north of this latitude
        max_lat: Applies south of this latitude
        min_lng: Applies east of this longitude
        max_lng: Applies west of this longitude
    """

    name: str
    percent: float
    min_lat: Optional[float] = None
    max_lat: Optional[float] = None
    min_lng: Optional[float] = None
    max_lng: Optional[float] = None

    def matches(self, coordinates: Coordinates) -> bool:
        """Whether the rule applies to a coordinate."""
        lat, lng = coordinates.latitude, coordinates.longitude
        if self.min_lat is not None and not lat > self.min_lat:
            return False
        if self.max_lat is not None and not lat < self.max_lat:
            return False
        if self.min_lng is not None and not lng > self.min_lng:
            return False
        if self.max_lng is not None and not lng < self.max_lng:
            return False
        return True


@dataclass(frozen=True)
class AccessibilityBand:
    """Accessibility scores strictly below upper_score earn percent."""

    upper_score: float
    percent: float


DEFAULT_URGENCY_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {
        UrgencyTier.STANDARD.value: 1.0,
        UrgencyTier.PRIORITY.value: 1.15,
        UrgencyTier.EMERGENCY.value: 1.35,
    }
)

# Checked in order, first match wins
DEFAULT_ACCESSIBILITY_BANDS: Tuple[AccessibilityBand, ...] = (
    AccessibilityBand(upper_score=4, percent=15.0),
    AccessibilityBand(upper_score=6, percent=10.0),
    AccessibilityBand(upper_score=8, percent=5.0),
)

DEFAULT_PROPERTY_PRICE_MODIFIERS: Mapping[str, float] = MappingProxyType(
    {
        PropertyType.RESIDENTIAL.value: 0.0,
        PropertyType.COMMERCIAL.value: -5.0,
        PropertyType.AGRICULTURAL.value: 5.0,
        PropertyType.INDUSTRIAL.value: -3.0,
    }
)

# Days added to (or removed from) the schedule
DEFAULT_PROPERTY_DAY_MODIFIERS: Mapping[str, float] = MappingProxyType(
    {
        PropertyType.RESIDENTIAL.value: 0.0,
        PropertyType.COMMERCIAL.value: -0.5,
        PropertyType.AGRICULTURAL.value: 0.5,
        PropertyType.INDUSTRIAL.value: 0.0,
    }
)

DEFAULT_GEOGRAPHIC_RISK_RULES: Tuple[GeographicRiskRule, ...] = (
    GeographicRiskRule(name="South Florida logistics", percent=5.0, max_lat=27.0),
    GeographicRiskRule(name="Gulf coast logistics", percent=3.0, max_lng=-82.0),
)


@dataclass(frozen=True)
class PricingTables:
    """
    Every lookup table used to price a job.

    Attributes:
        packages: Package key -> PackageSpec
        zones: Ordered travel bands
        urgency_multipliers: Urgency key -> price multiplier
        accessibility_bands: Score bands, checked in order
        property_price_modifiers: Property type -> price percent
        property_day_modifiers: Property type -> days added
        geographic_risk_rules: Regional logistics premiums
        access_concern_percent: Premium per distinct access concern
        obstacle_percent: Premium per distinct obstacle
        small_parcel_m2: Parcels under this area pay the small parcel premium
        small_parcel_percent: Small parcel premium
        large_parcel_m2: Parcels over this area get the large parcel discount
        large_parcel_percent: Large parcel discount (negative)
        min_accessibility_percent: Floor for the combined accessibility percent
    """

    packages: Mapping[str, PackageSpec] = field(default_factory=lambda: DEFAULT_PACKAGES)
    zones: Tuple[ServiceZone, ...] = DEFAULT_ZONES
    urgency_multipliers: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_URGENCY_MULTIPLIERS
    )
    accessibility_bands: Tuple[AccessibilityBand, ...] = DEFAULT_ACCESSIBILITY_BANDS
    property_price_modifiers: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_PROPERTY_PRICE_MODIFIERS
    )
    property_day_modifiers: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_PROPERTY_DAY_MODIFIERS
    )
    geographic_risk_rules: Tuple[GeographicRiskRule, ...] = DEFAULT_GEOGRAPHIC_RISK_RULES
    access_concern_percent: float = 3.0
    obstacle_percent: float = 5.0
    small_parcel_m2: float = 1000.0
    small_parcel_percent: float = 5.0
    large_parcel_m2: float = 100000.0
    large_parcel_percent: float = -3.0
    min_accessibility_percent: float = -100.0

    def __post_init__(self) -> None:
        validate_zones(self.zones)


DEFAULT_PRICING_TABLES = PricingTables()
