"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from graylab import __version__
from graylab.engine.registry import get_registry
from graylab.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        steps_registered=get_registry().count,
    )
