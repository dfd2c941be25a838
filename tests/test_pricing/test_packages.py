"""
Tests for the package table and fail-closed lookups.
"""

import logging

import pytest

from landquote.core.pricing.lookup import lookup_with_default, normalize_key
from landquote.core.pricing.packages import (
    DEFAULT_PACKAGES,
    base_price,
    get_package,
    price_per_acre,
)
from landquote.models.project import PackageType


class TestPackageTable:
    """Tests for package prices."""

    @pytest.mark.parametrize(
        "package,price,dbh",
        [
            ("small", 2150, '4"'),
            ("medium", 2500, '6"'),
            ("large", 3140, '8"'),
            ("xlarge", 4160, '10"'),
        ],
    )
    def test_prices(self, package: str, price: float, dbh: str) -> None:
        """Test price per acre and DBH label for every package."""
        spec = DEFAULT_PACKAGES[package]

        assert spec.price_per_acre == price
        assert spec.dbh == dbh
        assert price_per_acre(package) == price

    def test_heavier_packages_take_longer(self) -> None:
        """Test days per acre grows with package size."""
        rates = [DEFAULT_PACKAGES[p.value].days_per_acre for p in PackageType]
        assert rates == sorted(rates)

    def test_table_is_read_only(self) -> None:
        """Test the default table cannot be mutated."""
        with pytest.raises(TypeError):
            DEFAULT_PACKAGES["mega"] = DEFAULT_PACKAGES["small"]  # type: ignore[index]

    @pytest.mark.parametrize("acreage", [0.1, 1, 2.5, 7.3, 1000])
    def test_base_price_exact(self, acreage: float) -> None:
        """Test base price is price times acreage with no rounding."""
        spec = DEFAULT_PACKAGES["large"]
        assert base_price(spec, acreage) == 3140.0 * acreage

    def test_to_info(self) -> None:
        """Test display model conversion."""
        info = DEFAULT_PACKAGES["medium"].to_info()

        assert info.key == "medium"
        assert info.name == '6" DBH Medium Package'
        assert info.minimum_charge == 1750.0


class TestGetPackage:
    """Tests for fail-closed package lookup."""

    def test_known_package(self) -> None:
        """Test a known key is used as-is."""
        lookup = get_package("large")

        assert lookup.key == "large"
        assert lookup.fell_back is False
        assert lookup.flag is None

    def test_enum_and_case_insensitive(self) -> None:
        """Test enums and odd casing resolve."""
        assert get_package(PackageType.XLARGE).key == "xlarge"
        assert get_package("  Small ").key == "small"

    def test_unknown_package_falls_back_to_medium(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown packages fail closed, log a warning and raise a flag."""
        with caplog.at_level(logging.WARNING):
            lookup = get_package("jumbo")

        assert lookup.key == "medium"
        assert lookup.value.price_per_acre == 2500
        assert lookup.fell_back is True
        assert lookup.flag == "unknown package 'jumbo', used 'medium'"
        assert "Unknown package 'jumbo'" in caplog.text


class TestLookupWithDefault:
    """Tests for the generic table lookup."""

    def test_none_key_falls_back(self) -> None:
        """Test None resolves to the default."""
        lookup = lookup_with_default({"a": 1, "b": 2}, None, "a", "letters")

        assert lookup.value == 1
        assert lookup.fell_back is True

    def test_missing_default_raises(self) -> None:
        """Test a broken default key is a programming error."""
        with pytest.raises(KeyError):
            lookup_with_default({"a": 1}, "z", "b", "letters")

    def test_normalize_key(self) -> None:
        """Test key normalization."""
        assert normalize_key(" Priority ") == "priority"
        assert normalize_key(PackageType.SMALL) == "small"
        assert normalize_key(None) == ""
