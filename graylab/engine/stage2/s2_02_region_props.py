"""S2.02 — Region properties (area, centroid, orientation)."""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.moments import region_props


@step(
    id="S2.02",
    stage=Stage.SEGMENT,
    dependencies=["S2.01"],
    description="Compute moments per labeled region",
)
def measure_regions(ctx: AnalysisContext) -> None:
    if ctx.labeled is None:
        return
    ctx.props = region_props(ctx.labeled, ctx.label_max)
