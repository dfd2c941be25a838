"""
Estimate output models.

An Estimate is assembled fresh per request and never mutated afterwards.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class AdjustmentResult(BaseModel):
    """
    One named price adjustment.

    Attributes:
        name: Adjustment identifier (travel, urgency, ...)
        amount: Signed dollar amount, unrounded
        percent: Percent of the base price the amount represents
        breakdown: Short human-readable explanation
    """

    model_config = ConfigDict(frozen=True)

    name: str
    amount: float = 0.0
    percent: Optional[float] = None
    breakdown: str = ""

    @classmethod
    def zero(cls, name: str, breakdown: str) -> "AdjustmentResult":
        """Create a zero adjustment that still explains itself."""
        return cls(name=name, amount=0.0, percent=0.0, breakdown=breakdown)


class ZoneInfo(BaseModel):
    """
    Zone and distance metadata for display.

    Attributes:
        name: Zone name (Core, Primary, ...)
        description: Customer-facing zone description
        surcharge_percent: Zone travel surcharge
        distance_km: Great-circle distance from the service base
        drive_minutes: One-way drive time
        out_of_area: Property lies beyond the last service band
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    surcharge_percent: float
    distance_km: float
    drive_minutes: float
    out_of_area: bool = False


class PackageInfo(BaseModel):
    """Display details of the package that was priced."""

    model_config = ConfigDict(frozen=True)

    key: str
    dbh: str
    name: str
    description: str
    price_per_acre: float
    minimum_charge: float


class Estimate(BaseModel):
    """
    Priced, time-boxed, confidence-scored quote.

    Attributes:
        base_price: Package price per acre times acreage
        travel_surcharge: Zone surcharge plus regional logistics premium
        obstacle_adjustment: Premium for declared site obstacles
        accessibility_adjustment: Access difficulty premium or discount
        urgency_adjustment: Scheduling premium
        property_adjustment: Parcel size premium or discount
        total_price: Sum of the above, rounded once to whole dollars
        estimated_days: Crew days on site (minimum 0.5)
        confidence: 60-95 score of how much input was verified
        assumptions: Ordered caveats shown with the quote
        adjustments: Itemised adjustment breakdown
        zone: Zone and distance metadata
        package: Package display details
        data_quality_flags: Input values that fell back to defaults
        minimum_charge_applied: Total was raised to the package minimum
        quoted_at: Issue time, only when the caller supplied one
        valid_until: Expiry time, only when quoted_at is set
    """

    model_config = ConfigDict(frozen=True)

    base_price: float
    travel_surcharge: float = 0.0
    obstacle_adjustment: float = 0.0
    accessibility_adjustment: float = 0.0
    urgency_adjustment: float = 0.0
    property_adjustment: float = 0.0
    total_price: int
    estimated_days: float = Field(..., ge=0.5)
    confidence: int = Field(..., ge=60, le=95)
    assumptions: Tuple[str, ...] = ()
    adjustments: Tuple[AdjustmentResult, ...] = ()
    zone: ZoneInfo
    package: PackageInfo
    acreage: float
    data_quality_flags: Tuple[str, ...] = ()
    minimum_charge_applied: bool = False
    quoted_at: Optional[datetime] = None
    valid_until: Optional[datetime] = None

    @property
    def price_per_acre(self) -> float:
        """Effective price per acre including adjustments."""
        return self.total_price / self.acreage

    def breakdown(self) -> Dict[str, float]:
        """Dollar breakdown keyed by line item."""
        return {
            "base_price": self.base_price,
            "travel_surcharge": self.travel_surcharge,
            "obstacle_adjustment": self.obstacle_adjustment,
            "accessibility_adjustment": self.accessibility_adjustment,
            "urgency_adjustment": self.urgency_adjustment,
            "property_adjustment": self.property_adjustment,
        }

    def summary_lines(self) -> List[str]:
        """Plain-text lines for notification e-mails."""
        lines = [
            f"{self.package.name}: {self.acreage:g} acres at ${self.package.price_per_acre:,.0f}/acre",
            f"Base price: ${self.base_price:,.2f}",
        ]
        for adjustment in self.adjustments:
            if adjustment.amount:
                lines.append(f"{adjustment.breakdown}: ${adjustment.amount:,.2f}")
        lines.append(f"Total: ${self.total_price:,}")
        lines.append(f"Estimated duration: {self.estimated_days:g} days")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return self.model_dump(mode="json")
