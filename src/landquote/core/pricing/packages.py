"""
Package pricing table.

Each package is named by the largest vegetation diameter (DBH) the crew
clears with it. Prices are dollars per acre; the minimum charge is a flat
floor that covers mobilisation on very small jobs.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from landquote.core.pricing.lookup import TableLookup, lookup_with_default
from landquote.models.estimate import PackageInfo
from landquote.models.project import PackageType


@dataclass(frozen=True)
class PackageSpec:
    """
    Pricing and production details for one package.

    Attributes:
        key: Package key (small/medium/large/xlarge)
        dbh: Diameter label, e.g. '6"'
        name: Display name
        description: Customer-facing description
        price_per_acre: Dollars per acre
        days_per_acre: Crew days needed per acre
        minimum_charge: Flat minimum total in dollars
    """

    key: str
    dbh: str
    name: str
    description: str
    price_per_acre: float
    days_per_acre: float
    minimum_charge: float

    def to_info(self) -> PackageInfo:
        """Display model for estimates and API responses."""
        return PackageInfo(
            key=self.key,
            dbh=self.dbh,
            name=self.name,
            description=self.description,
            price_per_acre=self.price_per_acre,
            minimum_charge=self.minimum_charge,
        )


DEFAULT_PACKAGE = PackageType.MEDIUM.value

DEFAULT_PACKAGES: Mapping[str, PackageSpec] = MappingProxyType(
    {
        PackageType.SMALL.value: PackageSpec(
            key="small",
            dbh='4"',
            name='4" DBH Small Package',
            description="Suitable for light brush, saplings, and trees up to 4 inches diameter",
            price_per_acre=2150.0,
            days_per_acre=1 / 5,
            minimum_charge=1500.0,
        ),
        PackageType.MEDIUM.value: PackageSpec(
            key="medium",
            dbh='6"',
            name='6" DBH Medium Package',
            description="Perfect for mixed vegetation, brush, and trees up to 6 inches diameter",
            price_per_acre=2500.0,
            days_per_acre=1 / 4,
            minimum_charge=1750.0,
        ),
        PackageType.LARGE.value: PackageSpec(
            key="large",
            dbh='8"',
            name='8" DBH Large Package',
            description="Handles dense forest, mature trees, and vegetation up to 8 inches diameter",
            price_per_acre=3140.0,
            days_per_acre=1 / 3,
            minimum_charge=2250.0,
        ),
        PackageType.XLARGE.value: PackageSpec(
            key="xlarge",
            dbh='10"',
            name='10" DBH X-Large Package',
            description="Heavy-duty clearing for large trees and dense forest up to 10 inches diameter",
            price_per_acre=4160.0,
            days_per_acre=1 / 2,
            minimum_charge=2750.0,
        ),
    }
)


def get_package(
    package: Any,
    packages: Mapping[str, PackageSpec] = DEFAULT_PACKAGES,
) -> TableLookup[PackageSpec]:
    """
    Look up a package, failing closed to the medium package.

    Args:
        package: Requested package key
        packages: Package table

    Returns:
        TableLookup wrapping the PackageSpec used
    """
    return lookup_with_default(packages, package, DEFAULT_PACKAGE, "package")


def price_per_acre(package: Any, packages: Mapping[str, PackageSpec] = DEFAULT_PACKAGES) -> float:
    """Dollars per acre for a package (unknown packages price as medium)."""
    return get_package(package, packages).value.price_per_acre


def base_price(spec: PackageSpec, acreage: float) -> float:
    """
    Package price times acreage, unrounded.

    Args:
        spec: Package being priced
        acreage: Acres to clear

    Returns:
        Base price in dollars
    """
    return spec.price_per_acre * acreage
