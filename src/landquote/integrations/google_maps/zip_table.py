"""
Static drive times from the service base by ZIP code.

Used when the Distance Matrix API is unavailable. Values are approximate
one-way minutes from New Smyrna Beach.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional

DRIVE_MINUTES_BY_ZIP: Mapping[str, int] = MappingProxyType(
    {
        "32168": 10,  # New Smyrna Beach
        "32114": 30,  # Daytona Beach
        "32720": 35,  # DeLand
        "32763": 35,  # Orange City
        "32927": 50,  # Port St. John
        "32789": 55,  # Winter Park
        "32801": 60,  # Orlando
        "34711": 85,  # Clermont
        "34736": 95,  # Groveland
        "33881": 110,  # Winter Haven
        "32601": 120,  # Gainesville
        "32608": 125,  # Gainesville
    }
)

_ZIP_PATTERN = re.compile(r"\b(\d{5})(?:-\d{4})?\b")


def extract_zip_code(address: str) -> Optional[str]:
    """Last five-digit ZIP code found in an address, if any."""
    matches = _ZIP_PATTERN.findall(address or "")
    return matches[-1] if matches else None


def drive_seconds_for_zip(
    zip_code: Optional[str],
    table: Mapping[str, int] = DRIVE_MINUTES_BY_ZIP,
) -> Optional[float]:
    """
    Drive time for a ZIP code.

    Args:
        zip_code: Five-digit ZIP code
        table: ZIP -> minutes table

    Returns:
        Drive time in seconds, or None when the ZIP is not listed
    """
    if not zip_code:
        return None
    minutes = table.get(zip_code[:5])
    return None if minutes is None else minutes * 60.0
