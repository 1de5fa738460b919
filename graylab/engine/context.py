"""AnalysisContext — the single mutable state object flowing through all steps.

The source grid is never modified until the final masking step; every
intermediate grid lives in its own field.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graylab.engine.config import PipelineConfig
from graylab.models.grid import PixelGrid
from graylab.utils.moments import RegionProps


@dataclass
class AnalysisContext:
    """Shared state for one segmentation run."""

    # Input grid; masked in place to the winning region by S3.02
    source: PixelGrid
    # Preprocessed copy of the source, thresholded by S1.01
    working: PixelGrid | None = None

    # --- Binarization ---
    threshold: int | None = None
    binary: PixelGrid | None = None

    # --- Segmentation ---
    # The binary grid after in-place labeling; None until labeling succeeds
    labeled: PixelGrid | None = None
    label_max: int = 0
    labeling_ok: bool = False
    props: list[RegionProps] = field(default_factory=list)

    # --- Selection ---
    best_label: int | None = None
    masked: bool = False

    # --- Bookkeeping ---
    config: PipelineConfig = field(default_factory=PipelineConfig)
    completed_steps: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def regions(self) -> list[RegionProps]:
        """Props of real labels, background entry excluded."""
        return self.props[1:]
