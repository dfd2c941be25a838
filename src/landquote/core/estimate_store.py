"""
Estimate persistence boundary.

The pricing core never imports this module. Callers compose
``await resolve_location(...)``, ``compute_estimate(...)`` and then
optionally ``await repository.save(...)``.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from landquote.core.errors import NotFoundError
from landquote.models.estimate import Estimate
from landquote.models.location import PropertyLocation
from landquote.models.project import ProjectParameters

logger = logging.getLogger(__name__)


class StoredEstimate(BaseModel):
    """
    An estimate saved alongside the inputs that produced it.

    Attributes:
        estimate_id: Unique identifier
        cache_key: estimate_cache_key() of the inputs
        location: Resolved location
        parameters: Project parameters
        estimate: Computed estimate
        created_at: When the record was saved (UTC)
    """

    model_config = ConfigDict(frozen=True)

    estimate_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    cache_key: str
    location: PropertyLocation
    parameters: ProjectParameters
    estimate: Estimate
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EstimateRepository(ABC):
    """Abstract async store for computed estimates."""

    @abstractmethod
    async def save(self, record: StoredEstimate) -> StoredEstimate:
        """Persist a record and return it."""

    @abstractmethod
    async def get(self, estimate_id: str) -> StoredEstimate:
        """
        Fetch a record by id.

        Raises:
            NotFoundError: If no record has that id
        """

    @abstractmethod
    async def find_by_cache_key(self, cache_key: str) -> Optional[StoredEstimate]:
        """Most recent record for a cache key, or None."""

    @abstractmethod
    async def list_recent(self, limit: int = 20) -> List[StoredEstimate]:
        """Newest records first."""


class InMemoryEstimateRepository(EstimateRepository):
    """Process-local repository (in production, use a database)."""

    def __init__(self) -> None:
        self._records: Dict[str, StoredEstimate] = {}
        self._by_cache_key: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def save(self, record: StoredEstimate) -> StoredEstimate:
        async with self._lock:
            self._records[record.estimate_id] = record
            self._by_cache_key[record.cache_key] = record.estimate_id
        logger.info(f"Saved estimate {record.estimate_id} (${record.estimate.total_price:,})")
        return record

    async def get(self, estimate_id: str) -> StoredEstimate:
        record = self._records.get(estimate_id)
        if record is None:
            raise NotFoundError(
                f"Estimate {estimate_id} not found",
                resource="estimate",
                resource_id=estimate_id,
            )
        return record

    async def find_by_cache_key(self, cache_key: str) -> Optional[StoredEstimate]:
        estimate_id = self._by_cache_key.get(cache_key)
        return self._records.get(estimate_id) if estimate_id else None

    async def list_recent(self, limit: int = 20) -> List[StoredEstimate]:
        records = sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)
        return records[:limit]

    def clear(self) -> None:
        """Remove every record."""
        self._records.clear()
        self._by_cache_key.clear()
