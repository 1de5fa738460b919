"""S3.02 — Mask the source grid to the winning region."""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.moments import extract_region


@step(
    id="S3.02",
    stage=Stage.SELECT,
    dependencies=["S3.01"],
    description="Zero every source pixel outside the selected region",
)
def mask_source(ctx: AnalysisContext) -> None:
    if ctx.best_label is None or ctx.labeled is None:
        return
    extract_region(ctx.source, ctx.labeled, ctx.best_label)
    ctx.masked = True
