"""Tests for bilinear scale, rotate and affine."""

import math

import numpy as np
import pytest

from graylab.models.grid import PixelGrid
from graylab.utils.resample import affine, rotate, scale


@pytest.fixture
def ramp() -> PixelGrid:
    return PixelGrid(np.arange(16, dtype=np.int64).reshape(4, 4) * 10, 255)


def test_upscale_interpolates_and_copies_edges():
    grid = PixelGrid.from_rows([[0, 100], [100, 200]], 255)
    out = scale(grid, 2, 2)
    assert out.samples.tolist() == [
        [0, 50, 100, 100],
        [50, 100, 100, 100],
        [100, 100, 200, 200],
        [100, 100, 200, 200],
    ]
    assert out.maxval == 255


def test_downscale_by_half_samples_every_other_pixel(ramp):
    out = scale(ramp, 0.5, 0.5)
    assert out.shape == (2, 2)
    assert out.samples.tolist() == ramp.samples[::2, ::2].tolist()


def test_scaled_size_rounds_half_up():
    grid = PixelGrid.zeros(1, 5, 9)
    assert scale(grid, 1, 0.5).shape == (1, 3)


@pytest.mark.parametrize("factors", [(0, 1), (1, -2)])
def test_scale_rejects_non_positive_factors(factors):
    with pytest.raises(ValueError, match="positive"):
        scale(PixelGrid.zeros(2, 2, 9), *factors)


def test_scale_rejects_oversized_result():
    with pytest.raises(ValueError, match="too big"):
        scale(PixelGrid.zeros(1, 1, 9), 1, 5000)


def test_scale_rejects_empty_result():
    with pytest.raises(ValueError, match="zero-sized"):
        scale(PixelGrid.zeros(2, 2, 9), 0.1, 1)


def test_affine_translation(ramp):
    out = affine(ramp, 1, 0, 1, 0, 1, 0).samples
    src = ramp.samples
    assert (out[:3, 1:] == src[:3, :3]).all()
    # column 0 maps outside, the last row maps onto the source edge
    assert not out[:, 0].any()
    assert not out[3].any()


def test_identity_affine_blanks_the_edge(ramp):
    out = affine(ramp, 1, 0, 0, 0, 1, 0).samples
    assert (out[:3, :3] == ramp.samples[:3, :3]).all()
    assert not out[3].any()
    assert not out[:, 3].any()


def test_zero_rotation_equals_identity_affine(ramp):
    assert rotate(ramp, 0.0, 1.5, 1.5).samples.tolist() == affine(ramp, 1, 0, 0, 0, 1, 0).samples.tolist()


def test_rotation_keeps_size_and_range(ramp):
    out = rotate(ramp, math.radians(30), 2, 2)
    assert out.shape == ramp.shape
    assert out.samples.min() >= 0
    assert out.samples.max() <= ramp.maxval
    assert ramp.samples[0, 1] == 10


def test_singular_affine():
    with pytest.raises(ValueError, match="determinant"):
        affine(PixelGrid.zeros(2, 2, 9), 1, 2, 0, 2, 4, 0)
