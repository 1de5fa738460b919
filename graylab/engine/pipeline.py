"""Pipeline orchestrator — runs steps in dependency order with config gating."""

from __future__ import annotations

import logging
import time

from graylab.engine.config import PipelineConfig
from graylab.engine.context import AnalysisContext
from graylab.engine.registry import StepRegistry, get_registry

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the segmentation steps."""

    def __init__(
        self,
        registry: StepRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        """Run every enabled step on the given context.

        A step that raises is recorded in ``ctx.errors`` and the run goes on;
        later steps check the context for the inputs they need.
        """
        start = time.perf_counter()
        ctx.config = self.config

        skip_ids = self._config_gate()
        requested = {s.id for s in self.registry.all()} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info(
            "Pipeline: %d steps queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_steps.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d steps in %.0fms",
            len(ctx.completed_steps),
            len(ordered),
            total,
        )
        return ctx

    def _config_gate(self) -> set[str]:
        """Steps switched off by the pipeline config."""
        skip: set[str] = set()
        if not self.config.smooth:
            skip.add("S0.01")  # Median smoothing
        if not self.config.stretch_contrast:
            skip.add("S0.02")  # Contrast stretch
        return skip


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config)
