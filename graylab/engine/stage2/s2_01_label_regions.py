"""S2.01 — Region labeling.

8-connected flood fill of the binary grid. The binary grid is relabeled in
place; on failure the completed label count is kept on the context and the
step raises so the pipeline records the error.
"""

from __future__ import annotations

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, step
from graylab.utils.labeling import label_all


@step(
    id="S2.01",
    stage=Stage.SEGMENT,
    dependencies=["S1.02"],
    description="Label 8-connected foreground regions",
)
def label_regions(ctx: AnalysisContext) -> None:
    if ctx.binary is None:
        return

    label_max, ok = label_all(ctx.binary, ctx.config.queue_capacity)
    ctx.label_max = label_max
    ctx.labeling_ok = ok
    if not ok:
        # overflow always stops below maxval; exhaustion stops at it
        if label_max + 1 >= ctx.binary.maxval:
            raise RuntimeError(
                f"labeling aborted after {label_max} complete regions; "
                f"label space exhausted (maxval {ctx.binary.maxval})"
            )
        raise RuntimeError(
            f"labeling aborted after {label_max} complete regions; "
            "retry with a larger queue capacity"
        )
    ctx.labeled = ctx.binary
