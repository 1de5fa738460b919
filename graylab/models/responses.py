"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    steps_registered: int = 0


class RegionInfo(BaseModel):
    label: int
    area: int
    centroid_row: int
    centroid_col: int
    orientation: float


class AnalyzeResponse(BaseModel):
    width: int
    height: int
    maxval: int
    threshold: int | None = None
    label_max: int = 0
    labeling_ok: bool = False
    regions: list[RegionInfo] = Field(default_factory=list)
    best_label: int | None = None
    masked_pgm: str | None = None
    processing_time_ms: float = 0.0
    steps_completed: int = 0
    steps_failed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)


class MatchResponse(BaseModel):
    method: str
    row: int
    col: int
    score: float


class ClusterResponse(BaseModel):
    assignments: list[int]
    centres: list[int]
