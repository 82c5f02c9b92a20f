"""Cache entry and statistics models."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from .base import CamelModel


class CacheEntry(BaseModel):
    """Cached payload stamped with its insertion time (epoch ms) and data version."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: Any
    timestamp: int
    version: str


class CacheStats(CamelModel):
    size: int
    max_size: int
    hits: int
    misses: int
    evictions: int
    hit_rate: float
