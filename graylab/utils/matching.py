"""Template matching — locate a small grid inside a larger one.

Two measures over every top-left offset, scanned row-major:

- nearest: sum of absolute differences, lower is better
- similarity: normalized cross-correlation, higher is better (1.0 = exact)

Ties keep the earliest offset. Accumulators are int64: with maxval ≤ 65535
and sides ≤ 4096 the largest sum, maxval² · h · w, stays below 2⁶³.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from graylab.models.grid import PixelGrid, Point


class MatchResult(NamedTuple):
    offset: Point
    score: float


def _check_fits(target: PixelGrid, template: PixelGrid) -> None:
    if template.height > target.height or template.width > target.width:
        raise ValueError(
            f"template {template.height}x{template.width} larger than "
            f"target {target.height}x{target.width}"
        )


def match_nearest(target: PixelGrid, template: PixelGrid) -> MatchResult:
    """Offset minimizing Σ|target − template| over the template window.

    Branch-and-bound: an offset is abandoned as soon as its running sum
    reaches the best total so far, so it can never replace it. Sums are
    accumulated one template row at a time; pruning at row granularity
    gives the same answer as pruning per pixel.
    """
    _check_fits(target, template)
    tgt = target.samples
    tpl = template.samples
    h, w = tpl.shape

    best: int | None = None
    best_offset = Point(0, 0)

    for i in range(tgt.shape[0] - h + 1):
        for j in range(tgt.shape[1] - w + 1):
            dist = 0
            for k in range(h):
                dist += int(np.abs(tgt[i + k, j : j + w] - tpl[k]).sum())
                if best is not None and dist >= best:
                    break
            else:
                best = dist
                best_offset = Point(i, j)

    return MatchResult(best_offset, float(best))


def match_similarity(target: PixelGrid, template: PixelGrid) -> MatchResult:
    """Offset maximizing dot / (√Σtpl² · √Σwindow²).

    Windows (or templates) with zero energy score 0. When no offset scores
    above 0 the result is offset (0, 0) with score 0.0.
    """
    _check_fits(target, template)
    tgt = target.samples
    tpl = template.samples
    h, w = tpl.shape

    tpl_sqsum = int(np.sum(tpl * tpl))

    windows = sliding_window_view(tgt, (h, w))
    dot = np.einsum("ijkl,kl->ij", windows, tpl)
    window_sqsum = _window_sums(tgt * tgt, h, w)

    best_sim = 0.0
    best_offset = Point(0, 0)
    tpl_norm = math.sqrt(tpl_sqsum)

    for i in range(dot.shape[0]):
        for j in range(dot.shape[1]):
            denom = tpl_norm * math.sqrt(int(window_sqsum[i, j]))
            if denom == 0:
                continue
            sim = int(dot[i, j]) / denom
            if sim > best_sim:
                best_sim = sim
                best_offset = Point(i, j)

    return MatchResult(best_offset, best_sim)


def _window_sums(values: np.ndarray, h: int, w: int) -> np.ndarray:
    """Sum of every h×w window via a zero-padded integral image."""
    integral = np.zeros((values.shape[0] + 1, values.shape[1] + 1), dtype=np.int64)
    integral[1:, 1:] = values.cumsum(axis=0).cumsum(axis=1)
    return integral[h:, w:] - integral[:-h, w:] - integral[h:, :-w] + integral[:-h, :-w]


def cutout(grid: PixelGrid, offset: Point, height: int, width: int) -> PixelGrid:
    """Copy of the height×width window of ``grid`` whose top-left is ``offset``."""
    r, c = offset
    if r < 0 or c < 0 or r + height > grid.height or c + width > grid.width:
        raise ValueError(f"window {height}x{width} at {tuple(offset)} leaves the grid")
    return PixelGrid(grid.samples[r : r + height, c : c + width].copy(), grid.maxval, grid.magic)


def mark_rectangle(grid: PixelGrid, top_left: Point, bottom_right: Point) -> None:
    """Draw a one-pixel maxval border between two corners (in place, clipped to the grid)."""
    r0 = max(top_left.row, 0)
    c0 = max(top_left.col, 0)
    r1 = min(bottom_right.row, grid.height - 1)
    c1 = min(bottom_right.col, grid.width - 1)
    if r0 > r1 or c0 > c1:
        return

    s = grid.samples
    s[r0 : r1 + 1, c0] = grid.maxval
    s[r0 : r1 + 1, c1] = grid.maxval
    s[r0, c0 : c1 + 1] = grid.maxval
    s[r1, c0 : c1 + 1] = grid.maxval
