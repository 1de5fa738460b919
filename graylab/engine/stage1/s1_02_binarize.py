"""S1.02 — Binarize.

Samples above the threshold become foreground (maxval), the rest background.
"""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.filters import binarize


@step(
    id="S1.02",
    stage=Stage.BINARIZE,
    dependencies=["S1.01"],
    description="Binarize the working grid at the threshold",
)
def binarize_working(ctx: AnalysisContext) -> None:
    if ctx.working is None or ctx.threshold is None:
        return
    ctx.binary = binarize(ctx.working, ctx.threshold)
