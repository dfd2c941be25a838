"""
Tests for the adjustment calculators.
"""

from typing import Callable

import pytest

from landquote.core.pricing.adjustments import (
    DEFAULT_CALCULATORS,
    accessibility_adjustment,
    build_context,
    obstacle_adjustment,
    property_adjustment,
    run_calculators,
    travel_adjustment,
    urgency_adjustment,
)
from landquote.core.pricing.tables import GeographicRiskRule, PricingTables
from landquote.models.location import BoundingBox, Coordinates, PropertyLocation
from landquote.models.project import ProjectParameters

BASE = 12500.0


@pytest.fixture
def params() -> ProjectParameters:
    """Plain 5-acre medium job."""
    return ProjectParameters(acreage=5, package="medium")


class TestBuildContext:
    """Tests for context resolution."""

    def test_clean_input_has_no_flags(
        self, make_location: Callable[..., PropertyLocation], params: ProjectParameters
    ) -> None:
        """Test known keys produce no data-quality flags."""
        context = build_context(make_location(property_type="commercial"), params)

        assert context.data_quality_flags == ()
        assert context.package.key == "medium"
        assert context.urgency == "standard"
        assert context.property_type == "commercial"

    def test_unknown_values_are_flagged(self, make_location: Callable[..., PropertyLocation]) -> None:
        """Test unknown package, urgency and property type each raise a flag."""
        params = ProjectParameters(acreage=5, package="jumbo", urgency="asap")
        context = build_context(make_location(property_type="castle"), params)

        assert len(context.data_quality_flags) == 3
        assert context.package.key == "medium"
        assert context.urgency == "standard"
        assert context.property_type is None

    def test_missing_property_type_not_flagged(
        self, bare_location: PropertyLocation, params: ProjectParameters
    ) -> None:
        """Test an absent property type is neutral, not a data-quality issue."""
        context = build_context(bare_location, params)

        assert context.property_type is None
        assert context.data_quality_flags == ()


class TestTravelAdjustment:
    """Tests for the travel/geographic calculator."""

    def test_core_zone_is_free(self, bare_location: PropertyLocation, params: ProjectParameters) -> None:
        """Test no surcharge in the Core zone."""
        result = travel_adjustment(BASE, build_context(bare_location, params))

        assert result.amount == 0
        assert result.name == "travel"

    def test_zone_surcharge(
        self, make_location: Callable[..., PropertyLocation], params: ProjectParameters
    ) -> None:
        """Test the Extended zone applies 15%."""
        result = travel_adjustment(BASE, build_context(make_location(80000), params))

        assert result.amount == pytest.approx(1875.0)
        assert result.percent == 15.0
        assert "Extended" in result.breakdown

    def test_geographic_risk_rule(
        self, make_location: Callable[..., PropertyLocation], params: ProjectParameters
    ) -> None:
        """Test the south Florida rule adds 5% even in the Core zone."""
        location = make_location(latitude=26.5, longitude=-81.5)
        result = travel_adjustment(BASE, build_context(location, params))

        assert result.percent == 5.0
        assert result.amount == pytest.approx(625.0)

    def test_rules_stack(
        self, make_location: Callable[..., PropertyLocation], params: ProjectParameters
    ) -> None:
        """Test both default rules and the zone surcharge add up."""
        location = make_location(45000, latitude=26.5, longitude=-82.5)
        result = travel_adjustment(BASE, build_context(location, params))

        assert result.percent == 13.0

    def test_custom_rule_table(
        self, make_location: Callable[..., PropertyLocation], params: ProjectParameters
    ) -> None:
        """Test rules are read from the pricing tables."""
        tables = PricingTables(
            geographic_risk_rules=(GeographicRiskRule(name="Island", percent=10.0, min_lat=28.0),)
        )
        result = travel_adjustment(BASE, build_context(make_location(), params, tables))

        assert result.percent == 10.0

    def test_monotonic_in_distance(
        self, make_location: Callable[..., PropertyLocation], params: ProjectParameters
    ) -> None:
        """Test the surcharge never decreases with distance."""
        distances = [0, 10000, 30000, 30001, 59999, 60000, 90000, 100001, 150000, 200000]
        amounts = [
            travel_adjustment(BASE, build_context(make_location(d), params)).amount
            for d in distances
        ]

        assert amounts == sorted(amounts)


class TestUrgencyAdjustment:
    """Tests for the urgency calculator."""

    @pytest.mark.parametrize(
        "urgency,amount",
        [("standard", 0.0), ("priority", 1875.0), ("emergency", 4375.0)],
    )
    def test_multipliers(self, bare_location: PropertyLocation, urgency: str, amount: float) -> None:
        """Test each tier's premium on a 12,500 base."""
        params = ProjectParameters(acreage=5, urgency=urgency)
        result = urgency_adjustment(BASE, build_context(bare_location, params))

        assert result.amount == amount

    def test_emergency_breakdown(self, bare_location: PropertyLocation) -> None:
        """Test the breakdown text."""
        params = ProjectParameters(acreage=5, urgency="emergency")
        result = urgency_adjustment(BASE, build_context(bare_location, params))

        assert result.breakdown == "35% premium, emergency scheduling"

    def test_unknown_urgency_is_standard(self, bare_location: PropertyLocation) -> None:
        """Test unknown urgency fails closed to no premium."""
        params = ProjectParameters(acreage=5, urgency="yesterday")
        result = urgency_adjustment(BASE, build_context(bare_location, params))

        assert result.amount == 0


class TestAccessibilityAdjustment:
    """Tests for the accessibility calculator."""

    @pytest.mark.parametrize(
        "score,percent",
        [(1, 15.0), (3.9, 15.0), (4, 10.0), (5.5, 10.0), (6, 5.0), (7.9, 5.0), (8, 0.0), (10, 0.0)],
    )
    def test_score_bands(
        self,
        make_location: Callable[..., PropertyLocation],
        params: ProjectParameters,
        score: float,
        percent: float,
    ) -> None:
        """Test score banding."""
        context = build_context(make_location(accessibility_score=score), params)
        result = accessibility_adjustment(BASE, context)

        assert result.amount == pytest.approx(BASE * percent / 100)

    def test_missing_score_is_neutral(self, bare_location: PropertyLocation, params: ProjectParameters) -> None:
        """Test no score means no band premium."""
        result = accessibility_adjustment(BASE, build_context(bare_location, params))

        assert result.amount == 0
        assert result.breakdown == "Standard site access"

    def test_access_concerns(self, bare_location: PropertyLocation) -> None:
        """Test 3% per distinct access concern."""
        params = ProjectParameters(
            acreage=5, access_concerns=["Narrow gate", "narrow gate ", "soft ground"]
        )
        result = accessibility_adjustment(BASE, build_context(bare_location, params))

        assert result.percent == 6.0
        assert result.amount == pytest.approx(750.0)

    @pytest.mark.parametrize(
        "property_type,percent",
        [("residential", 0.0), ("commercial", -5.0), ("agricultural", 5.0), ("industrial", -3.0)],
    )
    def test_property_type_modifier(
        self,
        make_location: Callable[..., PropertyLocation],
        params: ProjectParameters,
        property_type: str,
        percent: float,
    ) -> None:
        """Test the property type modifier table."""
        context = build_context(make_location(property_type=property_type), params)
        result = accessibility_adjustment(BASE, context)

        assert result.amount == pytest.approx(BASE * percent / 100)

    def test_sources_are_additive(self, make_location: Callable[..., PropertyLocation]) -> None:
        """Test band, concerns and property type sum."""
        params = ProjectParameters(acreage=5, access_concerns=["steep slope"])
        location = make_location(accessibility_score=5, property_type="commercial")
        result = accessibility_adjustment(BASE, build_context(location, params))

        # 10% band + 3% concern - 5% commercial
        assert result.percent == 8.0

    def test_discount_floored_at_base_price(
        self, make_location: Callable[..., PropertyLocation], params: ProjectParameters
    ) -> None:
        """Test a pathological discount never exceeds the base price."""
        tables = PricingTables(
            property_price_modifiers={"residential": 0.0, "commercial": -250.0}
        )
        context = build_context(make_location(property_type="commercial"), params, tables)
        result = accessibility_adjustment(BASE, context)

        assert result.percent == -100.0
        assert result.amount == -BASE


class TestObstacleAdjustment:
    """Tests for the obstacle calculator."""

    def test_no_obstacles(self, bare_location: PropertyLocation, params: ProjectParameters) -> None:
        """Test zero adjustment without obstacles."""
        assert obstacle_adjustment(BASE, build_context(bare_location, params)).amount == 0

    def test_per_obstacle(self, bare_location: PropertyLocation) -> None:
        """Test 5% per distinct obstacle."""
        params = ProjectParameters(
            acreage=5, obstacles=["power lines overhead", "fence", "Fence"]
        )
        result = obstacle_adjustment(BASE, build_context(bare_location, params))

        assert result.percent == 10.0
        assert result.amount == pytest.approx(1250.0)
        assert "fence" in result.breakdown


class TestPropertyAdjustment:
    """Tests for the property shape calculator."""

    def test_no_bounds(self, bare_location: PropertyLocation, params: ProjectParameters) -> None:
        """Test zero adjustment without an outline."""
        assert property_adjustment(BASE, build_context(bare_location, params)).amount == 0

    def test_small_parcel(self, bare_location: PropertyLocation) -> None:
        """Test parcels under 1000 m2 pay 5%."""
        bounds = BoundingBox(north=29.0001, south=29.0, east=-81.0, west=-81.0001)
        params = ProjectParameters(acreage=0.5, bounds=bounds)
        result = property_adjustment(BASE, build_context(bare_location, params))

        assert result.percent == 5.0
        assert result.amount == pytest.approx(625.0)

    def test_large_parcel(self, bare_location: PropertyLocation) -> None:
        """Test parcels over 100000 m2 get 3% off."""
        bounds = BoundingBox(north=29.01, south=29.0, east=-81.0, west=-81.01)
        params = ProjectParameters(acreage=30, bounds=bounds)
        result = property_adjustment(BASE, build_context(bare_location, params))

        assert result.percent == -3.0
        assert result.amount == pytest.approx(-375.0)

    def test_standard_parcel(self, bare_location: PropertyLocation) -> None:
        """Test mid-sized parcels are neutral."""
        bounds = BoundingBox(north=29.002, south=29.0, east=-81.0, west=-81.002)
        params = ProjectParameters(acreage=10, bounds=bounds)

        assert property_adjustment(BASE, build_context(bare_location, params)).amount == 0


class TestRunCalculators:
    """Tests for running the calculator list."""

    def test_runs_every_calculator(self, bare_location: PropertyLocation, params: ProjectParameters) -> None:
        """Test one result per calculator, in order."""
        results = run_calculators(BASE, build_context(bare_location, params))

        assert len(results) == len(DEFAULT_CALCULATORS)
        assert [r.name for r in results] == [
            "travel",
            "obstacles",
            "accessibility",
            "urgency",
            "property",
        ]

    def test_custom_calculator_list(self, bare_location: PropertyLocation, params: ProjectParameters) -> None:
        """Test calculators can be omitted."""
        results = run_calculators(BASE, build_context(bare_location, params), (urgency_adjustment,))

        assert [r.name for r in results] == ["urgency"]

    def test_geographic_rule_matching(self) -> None:
        """Test an unbounded rule matches everywhere and a bounded one filters."""
        point = Coordinates(latitude=30.0, longitude=-81.0)

        assert GeographicRiskRule(name="All", percent=1.0).matches(point) is True
        assert GeographicRiskRule(name="South", percent=1.0, max_lat=27.0).matches(point) is False
