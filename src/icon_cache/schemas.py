from __future__ import annotations

from pydantic import BaseModel, Field


class IconIdentity(BaseModel):
    model_config = {"populate_by_name": True}

    icon_name: str = Field(..., min_length=1, alias="iconName")
    library: str = Field(..., min_length=1)


class WarmupRequest(BaseModel):
    icons: list[IconIdentity]
    limit: int | None = Field(None, ge=1)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class TierStats(BaseModel):
    model_config = {"populate_by_name": True}

    size: int
    calculated_size: int = Field(..., alias="calculatedSize")
    max_size: int = Field(..., alias="maxSize")
    max_entries: int = Field(..., alias="maxEntries")


class CacheStatsData(BaseModel):
    svg: TierStats
    png: TierStats
    metadata: TierStats
    search: TierStats
    timestamp: str


class CacheStatsResponse(BaseModel):
    success: bool = True
    data: CacheStatsData


class InvalidationResponse(BaseModel):
    success: bool = True
    removed: int | None = None


class WarmupResponse(BaseModel):
    model_config = {"populate_by_name": True}

    success: bool = True
    icons_processed: int = Field(..., alias="iconsProcessed")
    warmed: int
    skipped: int
    failed: int


class CleanupResponse(BaseModel):
    success: bool = True
    before: dict[str, int]
    after: dict[str, int]
