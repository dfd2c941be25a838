"""
Estimate assembly.

compute_estimate is synchronous and pure: identical inputs give identical
output, and time only enters through an explicit ``now``.
"""

import hashlib
import json
import logging
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from landquote.core.errors import ValidationError
from landquote.core.pricing.adjustments import (
    DEFAULT_CALCULATORS,
    EstimateContext,
    build_context,
    run_calculators,
)
from landquote.core.pricing.confidence import score_confidence
from landquote.core.pricing.packages import base_price as package_base_price
from landquote.core.pricing.tables import DEFAULT_PRICING_TABLES, PricingTables
from landquote.core.pricing.timeline import estimate_days
from landquote.models.estimate import Estimate, ZoneInfo
from landquote.models.location import PropertyLocation
from landquote.models.project import PackageType, ProjectParameters
from landquote.utils.logging import log_performance

logger = logging.getLogger(__name__)

QUOTE_VALIDITY_DAYS = 30
MULTI_DAY_ACREAGE = 10


def round_half_up(value: float) -> int:
    """Round to whole dollars, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def estimate_cache_key(location: PropertyLocation, params: ProjectParameters) -> str:
    """
    Cache key for an estimate.

    Covers the resolved location (coordinates, address as resolved,
    verification, place and drive time) and every project parameter, plus the
    property outline when one was drawn. Unverified addresses share the
    fallback coordinate, so the address text keeps their keys apart.

    Args:
        location: Resolved property location
        params: Project parameters

    Returns:
        SHA256 hex digest
    """
    payload = {
        "lat": round(location.coordinates.latitude, 6),
        "lng": round(location.coordinates.longitude, 6),
        "address": location.formatted_address,
        "verified": location.verified,
        "place_id": location.place_id,
        "zip_code": location.zip_code,
        "drive_seconds": location.distance_from_base.duration_seconds,
        "acreage": params.acreage,
        "package": params.package,
        "obstacles": list(params.obstacles),
        "urgency": params.urgency,
        "access_concerns": list(params.access_concerns),
    }
    if params.bounds is not None:
        payload["bounds"] = params.bounds.model_dump()
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()


def build_assumptions(
    context: EstimateContext,
    travel: float,
    urgency: float,
    obstacles: float,
    accessibility: float,
    property_shape: float,
) -> List[str]:
    """
    Ordered caveats shown with a quote.

    The minimum charge line is added by the caller since it depends on the
    final total.

    Args:
        context: Estimate context
        travel: Travel surcharge
        urgency: Urgency premium
        obstacles: Obstacle premium
        accessibility: Accessibility adjustment
        property_shape: Property shape adjustment

    Returns:
        List of assumption strings
    """
    location = context.location
    params = context.params
    assumptions = [
        "Weather permitting - no work during heavy rain or storm conditions",
        "Property boundaries clearly marked or provided by customer",
    ]

    if not location.verified:
        assumptions.append("Address verification pending - may require adjustment after site visit")
    if context.zone.out_of_area:
        assumptions.append(
            "Property is outside the standard service area - scheduling subject to availability"
        )
    if travel > 0:
        assumptions.append(
            f"Travel surcharge applied for {context.zone.name} zone "
            f"({context.zone.distance_km:.1f} km from base)"
        )
    if urgency > 0:
        assumptions.append(f"{context.urgency.capitalize()} scheduling premium applied")
    if obstacles > 0:
        assumptions.append("Obstacle pricing based on preliminary assessment - final may vary")

    if accessibility > 0:
        assumptions.append("Access difficulty adjustment applied based on site analysis")
    elif accessibility < 0:
        assumptions.append("Favorable site access discount applied")

    if property_shape > 0:
        assumptions.append("Small parcel inefficiency premium applied")
    elif property_shape < 0:
        assumptions.append("Large parcel efficiency discount applied")

    if params.bounds is not None:
        assumptions.append("Property outline provided - enhanced accuracy applied")
    else:
        assumptions.append("Property boundaries estimated - final scope may vary")

    if params.acreage >= MULTI_DAY_ACREAGE:
        assumptions.append("Multiple day project - timeline may vary based on conditions")
    if context.package.key == PackageType.XLARGE.value:
        assumptions.append("Large tree removal may require additional equipment or manual felling")

    for flag in context.data_quality_flags:
        assumptions.append(f"Input defaulted: {flag}")

    assumptions.append("Final pricing confirmed after on-site evaluation")
    return assumptions


@log_performance(threshold_ms=50.0, log_level=logging.INFO)
def compute_estimate(
    location: PropertyLocation,
    params: ProjectParameters,
    *,
    tables: PricingTables = DEFAULT_PRICING_TABLES,
    now: Optional[datetime] = None,
    validity_days: int = QUOTE_VALIDITY_DAYS,
) -> Estimate:
    """
    Price a job for a resolved location.

    Args:
        location: Location from resolve_location
        params: Project parameters
        tables: Pricing tables
        now: Quote time; when given, quoted_at and valid_until are set
        validity_days: Days the quote stays valid after ``now``

    Returns:
        Immutable Estimate

    Raises:
        ValidationError: If the acreage is not a positive number
    """
    if not params.acreage > 0:
        raise ValidationError(
            f"Acreage must be greater than zero, got {params.acreage}",
            field="acreage",
        )

    context = build_context(location, params, tables)
    base = package_base_price(context.package, params.acreage)

    adjustments = run_calculators(base, context, DEFAULT_CALCULATORS)
    amounts = {adjustment.name: adjustment.amount for adjustment in adjustments}
    travel = amounts.get("travel", 0.0)
    urgency = amounts.get("urgency", 0.0)
    obstacles = amounts.get("obstacles", 0.0)
    accessibility = amounts.get("accessibility", 0.0)
    property_shape = amounts.get("property", 0.0)

    total = round_half_up(base + sum(a.amount for a in adjustments))
    total = max(total, 0)

    assumptions = build_assumptions(
        context, travel, urgency, obstacles, accessibility, property_shape
    )

    minimum = round_half_up(context.package.minimum_charge)
    minimum_applied = total < minimum
    if minimum_applied:
        logger.info(f"Raising total {total} to {context.package.key} minimum charge {minimum}")
        total = minimum
        assumptions.append(f"Minimum charge of ${minimum:,} applied")

    days = estimate_days(
        params.acreage,
        context.package,
        urgency=context.urgency,
        accessibility_score=location.accessibility_score,
        access_concern_count=len(params.access_concerns),
        property_type=context.property_type,
        property_day_modifiers=tables.property_day_modifiers,
    )

    confidence = score_confidence(
        verified=location.verified,
        accessibility_score=location.accessibility_score,
        property_type_known=context.property_type is not None,
        has_obstacles=bool(params.obstacles),
        has_access_concerns=bool(params.access_concerns),
        has_bounds=params.bounds is not None,
        data_quality_flags=len(context.data_quality_flags),
    )

    zone = context.zone
    estimate = Estimate(
        base_price=base,
        travel_surcharge=travel,
        obstacle_adjustment=obstacles,
        accessibility_adjustment=accessibility,
        urgency_adjustment=urgency,
        property_adjustment=property_shape,
        total_price=total,
        estimated_days=days,
        confidence=confidence,
        assumptions=tuple(assumptions),
        adjustments=adjustments,
        zone=ZoneInfo(
            name=zone.name,
            description=zone.description,
            surcharge_percent=zone.surcharge_percent,
            distance_km=round(zone.distance_km, 2),
            drive_minutes=round(location.distance_from_base.duration_minutes, 1),
            out_of_area=zone.out_of_area,
        ),
        package=context.package.to_info(),
        acreage=params.acreage,
        data_quality_flags=context.data_quality_flags,
        minimum_charge_applied=minimum_applied,
        quoted_at=now,
        valid_until=now + timedelta(days=validity_days) if now is not None else None,
    )

    logger.info(
        f"Estimate ${total:,} for {params.acreage:g} acres "
        f"({context.package.key}, {zone.name}, confidence {confidence})"
    )
    return estimate
