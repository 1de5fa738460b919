"""S0.01 — Median smoothing.

3×3 median over interior pixels to knock out salt-and-pepper noise before
the histogram is taken. Off unless PipelineConfig.smooth is set.
"""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.filters import smooth_with_median


@step(
    id="S0.01",
    stage=Stage.PREPROCESS,
    description="3x3 median smoothing of the working grid",
)
def median_smoothing(ctx: AnalysisContext) -> None:
    base = ctx.working if ctx.working is not None else ctx.source
    ctx.working = smooth_with_median(base)
