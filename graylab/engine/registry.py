"""Step registry — analysis steps declare themselves with ``@step`` and are ordered by dependency.

    @step(id="S1.01", stage=Stage.BINARIZE, dependencies=["S0.02"])
    def otsu_threshold(ctx: AnalysisContext) -> None:
        ctx.threshold = find_threshold(ctx.working)

Each step lives in its own module under a ``stageN`` package;
``register_steps`` imports them all.
"""

from __future__ import annotations

import enum
import heapq
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from graylab.engine.context import AnalysisContext

logger = logging.getLogger(__name__)

StepFn = Callable[["AnalysisContext"], None]


class Stage(enum.IntEnum):
    PREPROCESS = 0
    BINARIZE = 1
    SEGMENT = 2
    SELECT = 3


@dataclass
class StepSpec:
    id: str
    stage: Stage
    fn: StepFn
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StepRegistry:
    def __init__(self) -> None:
        self._steps: dict[str, StepSpec] = {}

    def register(self, spec: StepSpec) -> None:
        if spec.id in self._steps:
            raise ValueError(f"Duplicate step ID: {spec.id}")
        self._steps[spec.id] = spec
        logger.debug("Registered step %s (%s)", spec.id, spec.stage.name)

    def all(self) -> list[StepSpec]:
        return sorted(self._steps.values(), key=lambda s: (s.stage, s.id))

    @property
    def count(self) -> int:
        return len(self._steps)

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[StepSpec]:
        """Requested steps (all when None) with every step after the ones it depends on.

        Among steps that are ready at the same time the lowest id runs first.
        Dependencies outside the requested set are ignored rather than pulled
        in, so a gated-off step simply drops out of the chain.
        """
        ids = set(self._steps) if requested_ids is None else set(requested_ids) & set(self._steps)

        waiting_on = {sid: {d for d in self._steps[sid].dependencies if d in ids} for sid in ids}
        dependents: dict[str, list[str]] = {sid: [] for sid in ids}
        for sid, deps in waiting_on.items():
            for dep in deps:
                dependents[dep].append(sid)

        ready = [sid for sid, deps in waiting_on.items() if not deps]
        heapq.heapify(ready)
        ordered: list[StepSpec] = []
        while ready:
            sid = heapq.heappop(ready)
            ordered.append(self._steps[sid])
            for nxt in dependents[sid]:
                waiting_on[nxt].discard(sid)
                if not waiting_on[nxt]:
                    heapq.heappush(ready, nxt)

        if len(ordered) != len(ids):
            stuck = sorted(sid for sid, deps in waiting_on.items() if deps)
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered


_registry = StepRegistry()


def get_registry() -> StepRegistry:
    return _registry


def step(
    *,
    id: str,
    stage: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
) -> Callable[[StepFn], StepFn]:
    """Register the decorated function as a pipeline step."""

    def decorator(fn: StepFn) -> StepFn:
        _registry.register(StepSpec(id, stage, fn, list(dependencies or []), description))
        return fn

    return decorator


def register_steps() -> None:
    """Import every module of the stage packages so their decorators run."""
    for stage in Stage:
        package = importlib.import_module(f"graylab.engine.stage{stage.value}")
        for info in pkgutil.iter_modules(package.__path__, prefix=f"{package.__name__}."):
            importlib.import_module(info.name)
