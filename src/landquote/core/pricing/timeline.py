"""
Crew-day estimate for a clearing job.
"""

from typing import Mapping, Optional

from landquote.core.pricing.packages import PackageSpec
from landquote.core.pricing.tables import DEFAULT_PROPERTY_DAY_MODIFIERS
from landquote.models.project import UrgencyTier

MIN_DAYS = 0.5

# (days removed, shortest schedule the reduction may produce)
URGENCY_REDUCTIONS: Mapping[str, tuple[float, float]] = {
    UrgencyTier.PRIORITY.value: (1.0, 1.0),
    UrgencyTier.EMERGENCY.value: (2.0, 0.5),
}

DIFFICULT_ACCESS_SCORE = 5
DIFFICULT_ACCESS_DAYS = 1.0
MANY_CONCERNS_THRESHOLD = 2
MANY_CONCERNS_DAYS = 0.5


def estimate_days(
    acreage: float,
    package: PackageSpec,
    urgency: str = UrgencyTier.STANDARD.value,
    accessibility_score: Optional[float] = None,
    access_concern_count: int = 0,
    property_type: Optional[str] = None,
    property_day_modifiers: Mapping[str, float] = DEFAULT_PROPERTY_DAY_MODIFIERS,
) -> float:
    """
    Estimate days on site.

    Starts from the package's days-per-acre rate. Urgent scheduling compresses
    the job but never below its floor, and never lengthens a job that is
    already shorter than the floor. Difficult access, many access concerns
    and the property type then add or remove time.

    Args:
        acreage: Acres to clear
        package: Package being priced
        urgency: Urgency key (already resolved against the multiplier table)
        accessibility_score: 1-10 access score, if known
        access_concern_count: Number of distinct access concerns
        property_type: Recognised property type, if any
        property_day_modifiers: Property type -> days added

    Returns:
        Estimated days, at least 0.5, rounded to hundredths
    """
    days = acreage * package.days_per_acre

    reduction = URGENCY_REDUCTIONS.get(urgency)
    if reduction is not None:
        removed, floor = reduction
        days = max(days - removed, min(days, floor))

    if accessibility_score is not None and accessibility_score < DIFFICULT_ACCESS_SCORE:
        days += DIFFICULT_ACCESS_DAYS

    if access_concern_count > MANY_CONCERNS_THRESHOLD:
        days += MANY_CONCERNS_DAYS

    if property_type is not None:
        days += property_day_modifiers.get(property_type, 0.0)

    return round(max(days, MIN_DAYS), 2)
