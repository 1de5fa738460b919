"""Bilinear resampling — scale, rotate, affine.

Each output pixel is mapped back into the source image and interpolated from
the four surrounding source pixels; the result is truncated to an integer.
Every operation builds and returns a new grid.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from graylab.config import settings
from graylab.models.grid import PixelGrid

logger = logging.getLogger(__name__)


def _bilinear(
    src: NDArray[np.int64],
    x: NDArray[np.float64],
    y: NDArray[np.float64],
) -> tuple[NDArray[np.int64], NDArray[np.bool_]]:
    """Interpolate ``src`` at (x, y); also return where the base pixel sits on the last row/col.

    Coordinates must already lie inside [0, width-1] × [0, height-1].
    """
    h, w = src.shape
    xb = np.clip(x.astype(np.int64), 0, w - 1)
    yb = np.clip(y.astype(np.int64), 0, h - 1)
    xd = x - xb
    yd = y - yb
    xn = np.minimum(xb + 1, w - 1)
    yn = np.minimum(yb + 1, h - 1)

    val = (
        src[yb, xb] * (1 - yd) * (1 - xd)
        + src[yn, xb] * yd * (1 - xd)
        + src[yb, xn] * (1 - yd) * xd
        + src[yn, xn] * yd * xd
    )
    on_edge = (yb == h - 1) | (xb == w - 1)
    return np.floor(val).astype(np.int64), on_edge


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scale(grid: PixelGrid, height_factor: float, width_factor: float) -> PixelGrid:
    """Resize by the given factors; new sides are rounded to the nearest pixel.

    Output pixels whose source falls on the last row or column copy that
    source pixel instead of interpolating.
    """
    if height_factor <= 0 or width_factor <= 0:
        raise ValueError("scale factors must be positive")

    new_h = _round_half_up(height_factor * grid.height)
    new_w = _round_half_up(width_factor * grid.width)
    logger.info("scale: %dx%d -> %dx%d", grid.height, grid.width, new_h, new_w)

    if new_h > settings.graylab_max_height or new_w > settings.graylab_max_width:
        raise ValueError(f"cannot scale, result {new_h}x{new_w} would be too big")
    if new_h == 0 or new_w == 0:
        raise ValueError("cannot scale, result would be zero-sized")

    ys = np.arange(new_h, dtype=np.float64) / height_factor
    xs = np.arange(new_w, dtype=np.float64) / width_factor
    y, x = np.meshgrid(ys, xs, indexing="ij")

    src = grid.samples
    val, on_edge = _bilinear(src, x, y)
    base = src[np.clip(y.astype(np.int64), 0, grid.height - 1),
               np.clip(x.astype(np.int64), 0, grid.width - 1)]
    out = np.where(on_edge, base, val)
    return PixelGrid(np.clip(out, 0, grid.maxval), grid.maxval, grid.magic)


def _inverse_mapped(grid: PixelGrid, x_orig: NDArray[np.float64], y_orig: NDArray[np.float64]) -> PixelGrid:
    """Sample ``grid`` at inverse-mapped coordinates; outside or edge sources give 0."""
    h, w = grid.shape
    inside = (x_orig >= 0) & (x_orig <= w - 1) & (y_orig >= 0) & (y_orig <= h - 1)

    xs = np.where(inside, x_orig, 0.0)
    ys = np.where(inside, y_orig, 0.0)
    val, on_edge = _bilinear(grid.samples, xs, ys)

    out = np.where(inside & ~on_edge, val, 0)
    return grid.with_samples(np.clip(out, 0, grid.maxval))


def rotate(grid: PixelGrid, theta: float, x0: float, y0: float) -> PixelGrid:
    """Rotate by ``theta`` radians about (x0, y0); the grid keeps its size."""
    i, j = np.indices(grid.shape, dtype=np.float64)
    sint = math.sin(theta)
    cost = math.cos(theta)
    x_orig = cost * (j - x0) + sint * (i - y0) + x0
    y_orig = -sint * (j - x0) + cost * (i - y0) + y0
    return _inverse_mapped(grid, x_orig, y_orig)


def affine(
    grid: PixelGrid,
    a: float,
    b: float,
    c: float,
    d: float,
    e: float,
    f: float,
) -> PixelGrid:
    """Apply (X, Y) = (a·x + b·y + c, d·x + e·y + f); the grid keeps its size."""
    det = a * e - b * d
    if det == 0:
        raise ValueError("affine: determinant is zero")

    i, j = np.indices(grid.shape, dtype=np.float64)
    x_orig = (e * (j - c) - b * (i - f)) / det
    y_orig = (-d * (j - c) + a * (i - f)) / det
    return _inverse_mapped(grid, x_orig, y_orig)
