"""Point and neighbourhood filters. Every filter returns a new grid."""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from graylab.models.grid import PixelGrid

logger = logging.getLogger(__name__)


class MinMax(NamedTuple):
    min: int
    max: int


def find_min_max(grid: PixelGrid) -> MinMax:
    return MinMax(int(grid.samples.min()), int(grid.samples.max()))


def adjust_contrast(grid: PixelGrid, mm: MinMax | None = None) -> PixelGrid:
    """Stretch [mm.min, mm.max] linearly onto [0, maxval].

    Uniform images and images already spanning the full range come back as
    an unchanged copy.
    """
    mm = mm or find_min_max(grid)
    diff = mm.max - mm.min
    if diff == 0 or (mm.min == 0 and mm.max == grid.maxval):
        logger.info("adjust_contrast: no operation performed")
        return grid.copy()

    stretched = grid.maxval * (grid.samples - mm.min) // diff
    return grid.with_samples(np.clip(stretched, 0, grid.maxval))


def invert(grid: PixelGrid) -> PixelGrid:
    return grid.with_samples(grid.maxval - grid.samples)


def binarize(grid: PixelGrid, threshold: int) -> PixelGrid:
    """Samples above ``threshold`` become maxval, the rest 0."""
    return grid.with_samples(np.where(grid.samples > threshold, grid.maxval, 0))


def pixelize(grid: PixelGrid, block_size: int) -> PixelGrid:
    """Replace each block_size×block_size tile by its truncated mean.

    Tiles on the right and bottom edges may be smaller.
    """
    if block_size < 1:
        raise ValueError(f"block size must be positive, got {block_size}")

    src = grid.samples
    out = np.empty_like(src)
    for r in range(0, grid.height, block_size):
        for c in range(0, grid.width, block_size):
            tile = src[r : r + block_size, c : c + block_size]
            out[r : r + block_size, c : c + block_size] = int(tile.sum()) // tile.size
    return grid.with_samples(out)


def smooth_with_median(grid: PixelGrid) -> PixelGrid:
    """3×3 median filter on interior pixels; the one-pixel border is kept."""
    out = grid.samples.copy()
    if grid.height < 3 or grid.width < 3:
        return grid.with_samples(out)

    windows = sliding_window_view(grid.samples, (3, 3))
    out[1:-1, 1:-1] = np.median(windows.reshape(*windows.shape[:2], 9), axis=-1).astype(np.int64)
    return grid.with_samples(out)


def _spread(grid: PixelGrid, value: int) -> PixelGrid:
    """Copy ``value`` onto the 4-neighbours of every pixel holding it."""
    src = grid.samples
    hit = src == value
    spread = hit.copy()
    spread[:-1, :] |= hit[1:, :]
    spread[1:, :] |= hit[:-1, :]
    spread[:, :-1] |= hit[:, 1:]
    spread[:, 1:] |= hit[:, :-1]

    out = src.copy()
    out[spread] = value
    return grid.with_samples(out)


def erode(grid: PixelGrid) -> PixelGrid:
    """Grow the background (0) by one pixel, 4-connected."""
    return _spread(grid, 0)


def dilate(grid: PixelGrid) -> PixelGrid:
    """Grow the foreground (maxval) by one pixel, 4-connected."""
    return _spread(grid, grid.maxval)
