"""Tests for the Otsu threshold."""

import numpy as np
from skimage.filters import threshold_otsu

from graylab.models.grid import PixelGrid
from graylab.utils.threshold import find_threshold, histogram


def test_histogram_counts_every_value():
    grid = PixelGrid.from_rows([[0, 2, 2], [3, 3, 3]], 4)
    assert histogram(grid).tolist() == [1, 0, 2, 3, 0]


def test_two_values_threshold_between_them():
    lo, hi = 30, 200
    samples = np.full((8, 8), lo, dtype=np.int64)
    samples[2:5, 3:7] = hi
    value = find_threshold(PixelGrid(samples, 255))
    assert lo <= value < hi
    # every candidate in [lo, hi) ties; the first one is kept
    assert value == lo


def test_uniform_image_returns_maxval():
    grid = PixelGrid(np.full((4, 4), 77, dtype=np.int64), 255)
    assert find_threshold(grid) == 255


def test_all_zero_image_returns_maxval():
    assert find_threshold(PixelGrid.zeros(3, 3, 15)) == 15


def test_three_level_image():
    # 20 pixels each of 10, 12, 15, 200, 210: the split between 15 and 200 wins
    values = [10, 12, 15, 200, 210]
    samples = np.repeat(np.array(values, dtype=np.int64), 20).reshape(10, 10)
    grid = PixelGrid(samples, 255)
    assert find_threshold(grid) == 15
    assert find_threshold(grid) == threshold_otsu(samples)


def test_matches_skimage_on_two_clusters(rng):
    dark = rng.integers(40, 81, size=500)
    bright = rng.integers(160, 201, size=500)
    samples = rng.permutation(np.concatenate([dark, bright])).reshape(25, 40).astype(np.int64)
    value = find_threshold(PixelGrid(samples, 255))
    assert value == int(threshold_otsu(samples))
    assert dark.max() <= value < bright.min()
