"""POST /api/analyze — full segmentation pipeline on a PGM body."""

from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter, Depends, HTTPException

from graylab.config import Settings
from graylab.dependencies import get_settings
from graylab.engine.config import PipelineConfig
from graylab.engine.context import AnalysisContext
from graylab.engine.pipeline import create_pipeline
from graylab.models.requests import AnalyzeRequest
from graylab.models.responses import AnalyzeResponse, RegionInfo
from graylab.pnm.parser import parse_pnm
from graylab.pnm.serializer import serialize_pnm

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    req: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    start = time.perf_counter()

    try:
        grid = parse_pnm(req.pgm)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    queue_capacity = req.queue_capacity
    if queue_capacity is None:
        queue_capacity = settings.graylab_queue_capacity

    config = PipelineConfig(
        smooth=req.smooth,
        stretch_contrast=req.stretch_contrast,
        queue_capacity=queue_capacity,
        min_area_fraction=req.min_area_fraction,
    )
    pipeline = create_pipeline(config)
    # Pipeline is CPU-bound; run it in a thread so the event loop stays free
    ctx = await asyncio.get_running_loop().run_in_executor(
        None, pipeline.run, AnalysisContext(source=grid)
    )

    elapsed = (time.perf_counter() - start) * 1000

    return AnalyzeResponse(
        width=grid.width,
        height=grid.height,
        maxval=grid.maxval,
        threshold=ctx.threshold,
        label_max=ctx.label_max,
        labeling_ok=ctx.labeling_ok,
        regions=[
            RegionInfo(
                label=p.label,
                area=p.area,
                centroid_row=p.centroid_row,
                centroid_col=p.centroid_col,
                orientation=round(p.orientation, 3),
            )
            for p in ctx.regions
        ],
        best_label=ctx.best_label,
        masked_pgm=serialize_pnm(ctx.source) if ctx.masked else None,
        processing_time_ms=round(elapsed, 1),
        steps_completed=len(ctx.completed_steps),
        steps_failed=len(ctx.errors),
        errors=ctx.errors,
    )
