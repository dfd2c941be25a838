"""
Price adjustment calculators.

Each calculator is a pure function (base_price, context) -> AdjustmentResult.
They never read each other's output, so the assembler can run them as a list
and sum the amounts. A calculator whose inputs are absent returns a zero
adjustment.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from landquote.core.pricing.geo import bounds_area_m2
from landquote.core.pricing.lookup import lookup_with_default
from landquote.core.pricing.packages import PackageSpec, get_package
from landquote.core.pricing.tables import DEFAULT_PRICING_TABLES, PricingTables
from landquote.core.pricing.zones import ZoneClassification, classify_distance
from landquote.models.estimate import AdjustmentResult
from landquote.models.location import PropertyLocation, PropertyType
from landquote.models.project import ProjectParameters, UrgencyTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EstimateContext:
    """
    Everything the calculators need, resolved once per estimate.

    Table lookups happen here so that every unknown key is logged and
    flagged exactly once.

    Attributes:
        location: Resolved property location
        params: Project parameters
        tables: Pricing tables in use
        zone: Travel zone for the location
        package: Package actually priced
        urgency: Urgency key actually used
        urgency_multiplier: Price multiplier for that urgency
        property_type: Recognised property type, or None when absent or unknown
        data_quality_flags: Inputs that fell back to defaults
    """

    location: PropertyLocation
    params: ProjectParameters
    tables: PricingTables
    zone: ZoneClassification
    package: PackageSpec
    urgency: str
    urgency_multiplier: float
    property_type: Optional[str]
    data_quality_flags: Tuple[str, ...] = ()

    @property
    def accessibility_score(self) -> Optional[float]:
        return self.location.accessibility_score


def build_context(
    location: PropertyLocation,
    params: ProjectParameters,
    tables: PricingTables = DEFAULT_PRICING_TABLES,
) -> EstimateContext:
    """
    Resolve table lookups for a location and project.

    Args:
        location: Resolved property location
        params: Project parameters
        tables: Pricing tables

    Returns:
        EstimateContext with any fallbacks recorded as data-quality flags
    """
    flags: List[str] = []

    package = get_package(params.package, tables.packages)
    if package.flag:
        flags.append(package.flag)

    urgency = lookup_with_default(
        tables.urgency_multipliers, params.urgency, UrgencyTier.STANDARD.value, "urgency"
    )
    if urgency.flag:
        flags.append(urgency.flag)

    property_type: Optional[str] = None
    if location.property_type is not None:
        lookup = lookup_with_default(
            tables.property_price_modifiers,
            location.property_type,
            PropertyType.RESIDENTIAL.value,
            "property type",
        )
        if lookup.flag:
            flags.append(lookup.flag)
        else:
            property_type = lookup.key

    zone = classify_distance(location.distance_from_base.distance_meters, tables.zones)

    return EstimateContext(
        location=location,
        params=params,
        tables=tables,
        zone=zone,
        package=package.value,
        urgency=urgency.key,
        urgency_multiplier=urgency.value,
        property_type=property_type,
        data_quality_flags=tuple(flags),
    )


def _percent_of(base_price: float, percent: float) -> float:
    return base_price * percent / 100


def travel_adjustment(base_price: float, context: EstimateContext) -> AdjustmentResult:
    """
    Zone surcharge plus any regional logistics premium.

    Args:
        base_price: Unrounded base price
        context: Estimate context

    Returns:
        Travel adjustment
    """
    zone = context.zone
    percent = zone.surcharge_percent
    parts = []
    if zone.surcharge_percent:
        parts.append(f"{zone.surcharge_percent:g}% {zone.name} zone surcharge")

    for rule in context.tables.geographic_risk_rules:
        if rule.matches(context.location.coordinates):
            percent += rule.percent
            parts.append(f"{rule.percent:g}% {rule.name}")

    if not percent:
        return AdjustmentResult.zero("travel", f"No travel surcharge ({zone.name} zone)")

    return AdjustmentResult(
        name="travel",
        amount=_percent_of(base_price, percent),
        percent=percent,
        breakdown=", ".join(parts),
    )


def urgency_adjustment(base_price: float, context: EstimateContext) -> AdjustmentResult:
    """
    Scheduling premium from the urgency multiplier table.

    Args:
        base_price: Unrounded base price
        context: Estimate context

    Returns:
        Urgency adjustment
    """
    # Rounded so 1.35 - 1 is exactly 35%
    percent = round((context.urgency_multiplier - 1) * 100, 6)
    if not percent:
        return AdjustmentResult.zero("urgency", f"{context.urgency} scheduling")

    return AdjustmentResult(
        name="urgency",
        amount=_percent_of(base_price, percent),
        percent=percent,
        breakdown=f"{percent:g}% premium, {context.urgency} scheduling",
    )


def accessibility_adjustment(base_price: float, context: EstimateContext) -> AdjustmentResult:
    """
    Access difficulty premium or discount.

    Sums the accessibility score band, a premium per access concern and the
    property type modifier, floored so the discount never exceeds the base
    price.

    Args:
        base_price: Unrounded base price
        context: Estimate context

    Returns:
        Accessibility adjustment
    """
    tables = context.tables
    percent = 0.0
    parts = []

    score = context.accessibility_score
    if score is not None:
        for band in tables.accessibility_bands:
            if score < band.upper_score:
                percent += band.percent
                parts.append(f"{band.percent:g}% access score {score:g}")
                break

    concerns = len(context.params.access_concerns)
    if concerns:
        concern_percent = concerns * tables.access_concern_percent
        percent += concern_percent
        parts.append(f"{concern_percent:g}% for {concerns} access concern(s)")

    if context.property_type is not None:
        modifier = tables.property_price_modifiers[context.property_type]
        if modifier:
            percent += modifier
            parts.append(f"{modifier:+g}% {context.property_type} property")

    percent = max(percent, tables.min_accessibility_percent)
    if not percent:
        return AdjustmentResult.zero("accessibility", "Standard site access")

    return AdjustmentResult(
        name="accessibility",
        amount=_percent_of(base_price, percent),
        percent=percent,
        breakdown=", ".join(parts),
    )


def obstacle_adjustment(base_price: float, context: EstimateContext) -> AdjustmentResult:
    """
    Premium per distinct declared obstacle.

    Args:
        base_price: Unrounded base price
        context: Estimate context

    Returns:
        Obstacle adjustment
    """
    obstacles = context.params.obstacles
    if not obstacles:
        return AdjustmentResult.zero("obstacles", "No obstacles reported")

    percent = len(obstacles) * context.tables.obstacle_percent
    return AdjustmentResult(
        name="obstacles",
        amount=_percent_of(base_price, percent),
        percent=percent,
        breakdown=f"{percent:g}% for {', '.join(obstacles)}",
    )


def property_adjustment(base_price: float, context: EstimateContext) -> AdjustmentResult:
    """
    Parcel size premium or discount from the explicit property outline.

    Args:
        base_price: Unrounded base price
        context: Estimate context

    Returns:
        Property shape adjustment
    """
    bounds = context.params.bounds
    if bounds is None:
        return AdjustmentResult.zero("property", "No property outline provided")

    tables = context.tables
    area = bounds_area_m2(bounds)
    if area < tables.small_parcel_m2:
        percent = tables.small_parcel_percent
        label = "small parcel premium"
    elif area > tables.large_parcel_m2:
        percent = tables.large_parcel_percent
        label = "large parcel discount"
    else:
        return AdjustmentResult.zero("property", f"Standard parcel ({area:,.0f} m2)")

    return AdjustmentResult(
        name="property",
        amount=_percent_of(base_price, percent),
        percent=percent,
        breakdown=f"{percent:+g}% {label} ({area:,.0f} m2)",
    )


Calculator = Callable[[float, EstimateContext], AdjustmentResult]

DEFAULT_CALCULATORS: Tuple[Calculator, ...] = (
    travel_adjustment,
    obstacle_adjustment,
    accessibility_adjustment,
    urgency_adjustment,
    property_adjustment,
)


def run_calculators(
    base_price: float,
    context: EstimateContext,
    calculators: Tuple[Calculator, ...] = DEFAULT_CALCULATORS,
) -> Tuple[AdjustmentResult, ...]:
    """Run every calculator against the same base price and context."""
    results = tuple(calculator(base_price, context) for calculator in calculators)
    logger.debug(
        f"Adjustments for {context.package.key}: "
        + ", ".join(f"{r.name}={r.amount:.2f}" for r in results)
    )
    return results
