"""
Confidence score for an estimate.

The score reflects how much of the input was verified or supplied. It is
capped at 95 because every quote is provisional until a site visit, and
floored at 60.
"""

from typing import Optional

BASE_CONFIDENCE = 80
MIN_CONFIDENCE = 60
MAX_CONFIDENCE = 95

VERIFIED_BONUS = 10
GOOD_ACCESS_BONUS = 5
GOOD_ACCESS_SCORE = 7
PROPERTY_TYPE_BONUS = 5
OBSTACLES_BONUS = 3
ACCESS_CONCERNS_BONUS = 3
BOUNDS_BONUS = 7
DATA_QUALITY_PENALTY = 5


def score_confidence(
    verified: bool = False,
    accessibility_score: Optional[float] = None,
    property_type_known: bool = False,
    has_obstacles: bool = False,
    has_access_concerns: bool = False,
    has_bounds: bool = False,
    data_quality_flags: int = 0,
) -> int:
    """
    Score an estimate's confidence.

    Declared obstacles and access concerns raise confidence: they mean the
    customer assessed the site.

    Args:
        verified: Address matched a canonical geocoding result
        accessibility_score: 1-10 access score, if known
        property_type_known: Property type was recognised
        has_obstacles: Obstacles were declared
        has_access_concerns: Access concerns were declared
        has_bounds: Property outline was supplied
        data_quality_flags: Number of inputs that fell back to defaults

    Returns:
        Integer confidence in [60, 95]
    """
    score = BASE_CONFIDENCE
    if verified:
        score += VERIFIED_BONUS
    if accessibility_score is not None and accessibility_score > GOOD_ACCESS_SCORE:
        score += GOOD_ACCESS_BONUS
    if property_type_known:
        score += PROPERTY_TYPE_BONUS
    if has_obstacles:
        score += OBSTACLES_BONUS
    if has_access_concerns:
        score += ACCESS_CONCERNS_BONUS
    if has_bounds:
        score += BOUNDS_BONUS
    score -= DATA_QUALITY_PENALTY * data_quality_flags

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, score))
