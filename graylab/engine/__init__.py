"""graylab segmentation engine."""

from graylab.engine.registry import step, Stage, get_registry, register_steps
from graylab.engine.context import AnalysisContext
from graylab.engine.pipeline import Pipeline

__all__ = [
    "step",
    "Stage",
    "get_registry",
    "register_steps",
    "AnalysisContext",
    "Pipeline",
]
