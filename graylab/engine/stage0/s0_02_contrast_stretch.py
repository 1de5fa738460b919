"""S0.02 — Contrast stretch.

Linear stretch of the occupied sample range onto [0, maxval].
"""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.filters import adjust_contrast


@step(
    id="S0.02",
    stage=Stage.PREPROCESS,
    dependencies=["S0.01"],
    description="Stretch the working grid to the full sample range",
)
def contrast_stretch(ctx: AnalysisContext) -> None:
    base = ctx.working if ctx.working is not None else ctx.source
    ctx.working = adjust_contrast(base)
