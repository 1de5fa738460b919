"""Region moments — area, centroid and orientation per label, plus region selection."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from graylab.models.grid import PixelGrid, Point

logger = logging.getLogger(__name__)

# Regions smaller than this share of the image never win selection.
DEFAULT_MIN_AREA_FRACTION = 0.01

_RIGHT_ANGLE = 90.0


@dataclass
class RegionProps:
    """Moment statistics of one label. x is the column, y the row."""

    label: int
    area: int = 0
    centroid_row: int = 0
    centroid_col: int = 0
    m20: float = 0.0  # sum of x²
    m02: float = 0.0  # sum of y²
    m11: float = 0.0  # sum of x·y
    orientation: float = 0.0  # degrees, [0, 90]

    @property
    def centroid(self) -> Point:
        return Point(self.centroid_row, self.centroid_col)


def region_props(grid: PixelGrid, label_max: int) -> list[RegionProps]:
    """Moments for labels 0..label_max of a labeled grid.

    Entry 0 describes the background and is normally ignored. Pixels whose
    value exceeds ``label_max`` (e.g. leftover foreground after an aborted
    labeling pass) are not counted anywhere.

    Centroids are truncated to integers and the second moments are corrected
    about that truncated centroid before the orientation is taken, so a
    region whose true centroid falls between pixels can show a small
    spurious tilt.
    """
    n = label_max + 1
    samples = grid.samples
    ys, xs = np.indices(samples.shape)

    keep = samples <= label_max
    lab = samples[keep]
    x = xs[keep].astype(np.float64)
    y = ys[keep].astype(np.float64)

    area = np.bincount(lab, minlength=n)
    sum_x = np.bincount(lab, weights=x, minlength=n)
    sum_y = np.bincount(lab, weights=y, minlength=n)
    sum_xx = np.bincount(lab, weights=x * x, minlength=n)
    sum_yy = np.bincount(lab, weights=y * y, minlength=n)
    sum_xy = np.bincount(lab, weights=x * y, minlength=n)

    props: list[RegionProps] = []
    for i in range(n):
        a = int(area[i])
        p = RegionProps(
            label=i,
            area=a,
            m20=float(sum_xx[i]),
            m02=float(sum_yy[i]),
            m11=float(sum_xy[i]),
        )
        if a:
            cx = int(sum_x[i]) // a
            cy = int(sum_y[i]) // a
            p.centroid_col = cx
            p.centroid_row = cy

            m20_cor = p.m20 - a * cx * cx
            m11_cor = p.m11 - a * cx * cy
            m02_cor = p.m02 - a * cy * cy
            # atan2(0, 0) is 0: symmetric regions have no preferred axis
            rad = 0.5 * math.atan2(2.0 * m11_cor, m20_cor - m02_cor)
            p.orientation = abs(math.degrees(rad))
        props.append(p)

    return props


def select_best_region(
    props: list[RegionProps],
    total_area: int,
    min_area_fraction: float = DEFAULT_MIN_AREA_FRACTION,
) -> int | None:
    """Pick the label with the largest area weighted by uprightness.

    rightness = 1 - (90 - orientation) / 90 is near 1 for regions whose
    principal axis stands perpendicular to the x axis and near 0 for lying
    ones. Labels below ``min_area_fraction`` of ``total_area`` are skipped.
    Returns ``None`` when no label scores above zero.
    """
    min_area = int(total_area * min_area_fraction)
    best_score = 0.0
    best_label = 0

    for p in props[1:]:
        if p.area < min_area:
            continue
        rightness = 1 - (_RIGHT_ANGLE - p.orientation) / _RIGHT_ANGLE
        score = p.area * rightness
        if score > best_score:
            best_score = score
            best_label = p.label

    if best_label == 0:
        logger.warning("select_best_region: no region qualified (min area %d)", min_area)
        return None
    return best_label


def extract_region(source: PixelGrid, labeled: PixelGrid, label: int) -> None:
    """Zero every pixel of ``source`` not carrying ``label`` in ``labeled`` (in place)."""
    if source.shape != labeled.shape:
        raise ValueError(f"shape mismatch: {source.shape} vs {labeled.shape}")
    source.samples[labeled.samples != label] = 0
