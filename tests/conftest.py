"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from graylab.models.grid import PixelGrid


def _pgm(rows: list[list[int]], maxval: int, comment: str = "") -> str:
    height = len(rows)
    width = len(rows[0])
    lines = ["P2"]
    if comment:
        lines.append(f"# {comment}")
    lines.append(f"{width} {height}")
    lines.append(str(maxval))
    lines.extend(" ".join(str(v) for v in row) for row in rows)
    return "\n".join(lines) + "\n"


def _segment_rows() -> list[list[int]]:
    """20×20, background 20, a lying 3×7 bar (rows 1-3) and a standing 11×3 bar (rows 7-17)."""
    rows = [[20] * 20 for _ in range(20)]
    for r in range(1, 4):
        for c in range(0, 7):
            rows[r][c] = 200
    for r in range(7, 18):
        for c in range(11, 14):
            rows[r][c] = 200
    return rows


# Small graymap with a header comment
SAMPLE_PGM = """P2
# sample graymap
4 3
15
0 3 6 9
12 15 0 3
6 9 12 15
"""

SAMPLE_PBM = """P1
3 2
0 1 0
1 1 1
"""

SEGMENT_ROWS = _segment_rows()
SEGMENT_PGM = _pgm(SEGMENT_ROWS, 255, comment="two bars")

# The standing bar: the region the segmentation pipeline should keep
STANDING_BAR = (slice(7, 18), slice(11, 14))

MATCH_TARGET_ROWS = [
    [10, 10, 10, 10, 10, 10],
    [10, 10, 10, 10, 10, 10],
    [10, 10, 90, 200, 10, 10],
    [10, 10, 150, 60, 10, 10],
    [10, 10, 10, 10, 10, 10],
]
MATCH_TEMPLATE_ROWS = [
    [90, 200],
    [150, 60],
]
MATCH_TARGET_PGM = _pgm(MATCH_TARGET_ROWS, 255)
MATCH_TEMPLATE_PGM = _pgm(MATCH_TEMPLATE_ROWS, 255)
MATCH_OFFSET = (2, 2)


@pytest.fixture
def sample_pgm() -> str:
    return SAMPLE_PGM


@pytest.fixture
def segment_grid() -> PixelGrid:
    return PixelGrid.from_rows(SEGMENT_ROWS, 255)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


def binary_grid(points: list[tuple[int, int]], height: int, width: int, maxval: int = 255) -> PixelGrid:
    """Background grid with ``points`` set to the foreground value."""
    grid = PixelGrid.zeros(height, width, maxval)
    for r, c in points:
        grid.samples[r, c] = maxval
    return grid
