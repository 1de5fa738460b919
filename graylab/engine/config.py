"""Pipeline configuration — controls which steps run and their bounds."""

from __future__ import annotations

from dataclasses import dataclass

from graylab.config import settings
from graylab.utils.moments import DEFAULT_MIN_AREA_FRACTION


@dataclass
class PipelineConfig:
    """Per-run knobs for the segmentation pipeline."""

    # Preprocessing (off by default: the threshold is taken on raw samples)
    smooth: bool = False
    stretch_contrast: bool = False

    # Flood-fill queue bound; None = unbounded
    queue_capacity: int | None = settings.graylab_queue_capacity

    # Regions below this share of the image are never selected
    min_area_fraction: float = DEFAULT_MIN_AREA_FRACTION
