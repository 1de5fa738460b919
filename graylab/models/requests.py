"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    pgm: str = Field(..., description="Plain PGM (P2) or PBM (P1) text")
    smooth: bool = Field(default=False, description="Apply 3x3 median smoothing first")
    stretch_contrast: bool = Field(default=False, description="Stretch contrast before thresholding")
    queue_capacity: int | None = Field(
        default=None,
        ge=0,
        description="Flood-fill queue bound (omit for unbounded)",
    )
    min_area_fraction: float = Field(
        default=0.01,
        ge=0.0,
        le=1.0,
        description="Smallest region, as a share of the image, eligible for selection",
    )


class MatchRequest(BaseModel):
    target: str = Field(..., description="Plain PNM text of the image to search")
    template: str = Field(..., description="Plain PNM text of the template")
    method: Literal["nearest", "similarity"] = Field(
        default="similarity",
        description="nearest = sum of absolute differences, similarity = normalized correlation",
    )


class ClusterRequest(BaseModel):
    values: list[int] = Field(..., description="Scalar features, in seeding order")
    k: int = Field(..., ge=1, description="Number of clusters")
    max_iterations: int | None = Field(default=None, ge=1, description="Optional pass cap")
