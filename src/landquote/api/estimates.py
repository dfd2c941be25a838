"""
Quote API endpoints: packages, zones, location resolution and estimates.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, model_validator

from landquote.core.config import Settings, settings
from landquote.core.estimate_store import (
    EstimateRepository,
    InMemoryEstimateRepository,
    StoredEstimate,
)
from landquote.core.pricing import (
    DEFAULT_PRICING_TABLES,
    compute_estimate,
    estimate_cache_key,
)
from landquote.core.resolver import resolve_location
from landquote.models.errors import ErrorResponse
from landquote.models.estimate import Estimate, PackageInfo
from landquote.models.location import BoundingBox, Coordinates, PropertyLocation
from landquote.models.project import ProjectParameters

logger = logging.getLogger(__name__)

router = APIRouter(tags=["estimates"])

# In-memory storage for estimates (in production, use a database)
estimate_repository = InMemoryEstimateRepository()


def get_settings() -> Settings:
    """Settings dependency."""
    return settings


def get_repository() -> EstimateRepository:
    """Estimate repository dependency."""
    return estimate_repository


class LocationRequest(BaseModel):
    """Address text or a dropped pin, with an optional property outline."""

    address: Optional[str] = Field(None, max_length=500, description="Street address")
    coordinates: Optional[Coordinates] = Field(None, description="Map pin")
    bounds: Optional[BoundingBox] = Field(None, description="Property outline")

    @model_validator(mode="after")
    def _require_location(self) -> "LocationRequest":
        if self.coordinates is None and not (self.address and self.address.strip()):
            raise ValueError("Either address or coordinates is required")
        return self

    @property
    def query(self) -> Union[Coordinates, str, None]:
        """Resolver input; a pin wins over address text."""
        return self.coordinates if self.coordinates is not None else self.address


class EstimateRequest(LocationRequest):
    """Location plus project details to price."""

    project: ProjectParameters = Field(..., description="Project parameters")
    save: bool = Field(default=True, description="Store the estimate for later retrieval")

    @model_validator(mode="after")
    def _single_outline(self) -> "EstimateRequest":
        project_bounds = self.project.bounds
        if self.bounds is not None and project_bounds is not None and self.bounds != project_bounds:
            raise ValueError("bounds and project.bounds disagree; send the outline once")
        return self

    @property
    def outline(self) -> Optional[BoundingBox]:
        """The property outline from either place it may be sent."""
        return self.bounds or self.project.bounds


class EstimateResponse(BaseModel):
    """A computed or previously stored estimate."""

    estimate_id: Optional[str] = Field(None, description="Identifier when stored")
    location: PropertyLocation
    estimate: Estimate
    cached: bool = Field(default=False, description="Served from a stored, still valid quote")


class EstimateSummary(BaseModel):
    """Row in the recent estimates list."""

    estimate_id: str
    formatted_address: str
    acreage: float
    package: str
    total_price: int
    confidence: int
    created_at: datetime


class ZoneResponse(BaseModel):
    """Travel zone band."""

    name: str
    description: str
    min_km: float
    max_km: float
    surcharge_percent: float


@router.get(
    "/packages",
    response_model=List[PackageInfo],
    summary="List service packages",
)
async def list_packages() -> List[PackageInfo]:
    """
    List the priced service packages.

    Returns:
        Package details, smallest first
    """
    return [spec.to_info() for spec in DEFAULT_PRICING_TABLES.packages.values()]


@router.get(
    "/zones",
    response_model=List[ZoneResponse],
    summary="List travel zones",
)
async def list_zones() -> List[ZoneResponse]:
    """
    List the travel zone bands around the service base.

    Returns:
        Zones ordered by distance
    """
    return [
        ZoneResponse(
            name=zone.name,
            description=zone.description,
            min_km=zone.min_km,
            max_km=zone.max_km,
            surcharge_percent=zone.surcharge_percent,
        )
        for zone in DEFAULT_PRICING_TABLES.zones
    ]


@router.post(
    "/locations/resolve",
    response_model=PropertyLocation,
    responses={400: {"model": ErrorResponse, "description": "Malformed coordinates"}},
    summary="Resolve a property location",
)
async def resolve(
    request: LocationRequest,
    app_settings: Settings = Depends(get_settings),
) -> PropertyLocation:
    """
    Geocode an address or pin and measure its distance from the base.

    Unresolvable addresses still succeed with ``verified=false``.
    """
    return await resolve_location(
        request.query,
        bounds=request.bounds,
        settings=app_settings,
        zones=DEFAULT_PRICING_TABLES.zones,
    )


@router.post(
    "/estimates",
    response_model=EstimateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        422: {"model": ErrorResponse, "description": "Request validation failed"},
    },
    summary="Create an estimate",
)
async def create_estimate(
    request: EstimateRequest,
    app_settings: Settings = Depends(get_settings),
    repository: EstimateRepository = Depends(get_repository),
) -> EstimateResponse:
    """
    Resolve the location and price the project.

    A stored quote for identical inputs is reused while it is still valid.

    Args:
        request: Location and project parameters

    Returns:
        EstimateResponse
    """
    bounds = request.outline
    params = request.project
    if params.bounds is None and bounds is not None:
        params = params.model_copy(update={"bounds": bounds})

    location = await resolve_location(
        request.query,
        bounds=bounds,
        settings=app_settings,
        zones=DEFAULT_PRICING_TABLES.zones,
    )
    cache_key = estimate_cache_key(location, params)
    now = datetime.now(timezone.utc)

    existing = await repository.find_by_cache_key(cache_key)
    if existing is not None and existing.estimate.valid_until and existing.estimate.valid_until > now:
        logger.info(f"Reusing stored estimate {existing.estimate_id}")
        return EstimateResponse(
            estimate_id=existing.estimate_id,
            location=existing.location,
            estimate=existing.estimate,
            cached=True,
        )

    estimate = compute_estimate(
        location,
        params,
        now=now,
        validity_days=app_settings.quote_validity_days,
    )

    if not request.save:
        return EstimateResponse(location=location, estimate=estimate)

    record = await repository.save(
        StoredEstimate(cache_key=cache_key, location=location, parameters=params, estimate=estimate)
    )
    return EstimateResponse(estimate_id=record.estimate_id, location=location, estimate=estimate)


@router.get(
    "/estimates",
    response_model=List[EstimateSummary],
    summary="List recent estimates",
)
async def list_estimates(
    limit: int = 20,
    repository: EstimateRepository = Depends(get_repository),
) -> List[EstimateSummary]:
    """
    List stored estimates, newest first.

    Args:
        limit: Maximum number of rows

    Returns:
        Estimate summaries
    """
    records = await repository.list_recent(limit=max(1, min(limit, 100)))
    return [
        EstimateSummary(
            estimate_id=record.estimate_id,
            formatted_address=record.location.formatted_address,
            acreage=record.parameters.acreage,
            package=record.estimate.package.key,
            total_price=record.estimate.total_price,
            confidence=record.estimate.confidence,
            created_at=record.created_at,
        )
        for record in records
    ]


@router.get(
    "/estimates/{estimate_id}",
    response_model=EstimateResponse,
    responses={404: {"model": ErrorResponse, "description": "Estimate not found"}},
    summary="Get a stored estimate",
)
async def get_estimate(
    estimate_id: str,
    repository: EstimateRepository = Depends(get_repository),
) -> EstimateResponse:
    """
    Fetch a stored estimate.

    Args:
        estimate_id: Estimate identifier

    Returns:
        EstimateResponse
    """
    record = await repository.get(estimate_id)
    return EstimateResponse(
        estimate_id=record.estimate_id,
        location=record.location,
        estimate=record.estimate,
    )
