"""Otsu threshold — binarization cutoff maximizing between-class variance."""

from __future__ import annotations

import numpy as np

from graylab.models.grid import PixelGrid


def histogram(grid: PixelGrid) -> np.ndarray:
    """Pixel count per sample value, indexed 0..maxval."""
    return np.bincount(grid.samples.ravel(), minlength=grid.maxval + 1)


def find_threshold(grid: PixelGrid) -> int:
    """Return the Otsu threshold of ``grid`` in [0, maxval].

    omega[i] and mu[i] come from one prefix pass over the histogram. The
    prefix sums are integer counts divided once by the pixel total, so
    omega is exactly 1.0 from the last populated value onward.

    Values with an empty lower class (omega = 0) are skipped and the scan
    ends at the first value with an empty upper class (omega = 1). Only a
    strictly larger variance replaces the best, so ties keep the lowest
    value. A single-valued image returns maxval.
    """
    maxval = grid.maxval
    counts = histogram(grid).astype(np.int64)
    total = int(counts.sum())

    values = np.arange(maxval + 1, dtype=np.int64)
    omega = np.cumsum(counts) / total
    mu = np.cumsum(counts * values) / total
    mu_total = mu[maxval]

    best_var = 0.0
    best_value = maxval
    for i in range(maxval + 1):
        w = omega[i]
        if w == 0:
            continue
        if w == 1:
            break

        diff = mu_total * w - mu[i]
        var = diff * diff / (w * (1 - w))
        if var > best_var:
            best_var = var
            best_value = i

    return best_value
