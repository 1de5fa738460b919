"""S1.01 — Otsu threshold."""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.threshold import find_threshold


@step(
    id="S1.01",
    stage=Stage.BINARIZE,
    dependencies=["S0.02"],
    description="Find the Otsu binarization threshold",
)
def otsu_threshold(ctx: AnalysisContext) -> None:
    if ctx.working is None:
        ctx.working = ctx.source.copy()
    ctx.threshold = find_threshold(ctx.working)
