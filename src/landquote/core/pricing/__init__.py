"""
Pricing engine: zones, packages, adjustments, timeline and confidence.
"""

from .assembler import compute_estimate, estimate_cache_key
from .packages import DEFAULT_PACKAGES, PackageSpec, get_package
from .tables import DEFAULT_PRICING_TABLES, GeographicRiskRule, PricingTables
from .zones import DEFAULT_ZONES, ServiceZone, classify_distance, is_within_service_area

__all__ = [
    "compute_estimate",
    "estimate_cache_key",
    "DEFAULT_PACKAGES",
    "PackageSpec",
    "get_package",
    "DEFAULT_PRICING_TABLES",
    "GeographicRiskRule",
    "PricingTables",
    "DEFAULT_ZONES",
    "ServiceZone",
    "classify_distance",
    "is_within_service_area",
]
