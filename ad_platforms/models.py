"""
Data objects shared by the store, the API and the CLI.

AdPlatform and PlatformStatistics are plain frozen dataclasses used inside the
core. The result and response types are Pydantic models serialized with
explicit camelCase field aliases on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, Field, computed_field


# ── Core entities ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class AdPlatform:
    """A named ad platform and the normalized locations it serves."""
    name: str
    locations: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class PlatformStatistics:
    platforms_count: int
    locations_count: int


# ── Results ───────────────────────────────────────────────────────────

class LoadResult(BaseModel):
    """Outcome of a full dataset replacement."""
    success: bool
    message: str = ""
    processed_platforms: int = Field(0, alias="processedPlatforms")
    errors: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class SearchResult(BaseModel):
    location: str
    ad_platforms: list[str] = Field(default_factory=list, alias="adPlatforms")

    model_config = {"populate_by_name": True}

    @computed_field
    @property
    def count(self) -> int:
        return len(self.ad_platforms)


# ── API response models ───────────────────────────────────────────────

class StatisticsResponse(BaseModel):
    platforms_count: int = Field(..., alias="platformsCount")
    locations_count: int = Field(..., alias="locationsCount")
    timestamp: datetime

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    status: str = "Healthy"
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
    details: str = ""
