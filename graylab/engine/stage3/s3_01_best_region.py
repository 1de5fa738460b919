"""S3.01 — Best region.

Largest region weighted by how upright its principal axis stands. Regions
under PipelineConfig.min_area_fraction of the image are ignored.
"""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.moments import select_best_region


@step(
    id="S3.01",
    stage=Stage.SELECT,
    dependencies=["S2.02"],
    description="Select the best-scoring region",
)
def best_region(ctx: AnalysisContext) -> None:
    if not ctx.props:
        return
    ctx.best_label = select_best_region(
        ctx.props, ctx.source.area, ctx.config.min_area_fraction
    )
