"""PixelGrid — the in-memory raster every analysis step reads and writes."""

from __future__ import annotations

from dataclasses import InitVar, dataclass
from typing import NamedTuple, Sequence

import numpy as np
from numpy.typing import NDArray

from graylab.config import settings

# Plain PGM stores at most 16-bit samples.
PNM_MAXVAL_LIMIT = 65535


class Point(NamedTuple):
    """Integer pixel coordinate, (row, column)."""

    row: int
    col: int


@dataclass(eq=False)
class PixelGrid:
    """Rectangular raster of integer samples, each in [0, maxval].

    Size is checked against ``max_width`` / ``max_height`` at construction,
    falling back to the configured limits. ``samples`` is indexed
    ``[row, col]``.
    """

    samples: NDArray[np.int64]
    maxval: int
    magic: str = "P2"
    max_width: InitVar[int | None] = None
    max_height: InitVar[int | None] = None

    def __post_init__(self, max_width: int | None, max_height: int | None) -> None:
        self.samples = np.asarray(self.samples, dtype=np.int64)
        if self.samples.ndim != 2:
            raise ValueError(f"samples must be 2-D, got {self.samples.ndim}-D")

        height, width = self.samples.shape
        if width == 0 or height == 0:
            raise ValueError("grid must have at least one row and one column")

        limit_w = settings.graylab_max_width if max_width is None else max_width
        limit_h = settings.graylab_max_height if max_height is None else max_height
        if width > limit_w or height > limit_h:
            raise ValueError(
                f"grid {width}x{height} exceeds maximum {limit_w}x{limit_h}"
            )

        if not 0 <= self.maxval <= PNM_MAXVAL_LIMIT:
            raise ValueError(f"maxval {self.maxval} outside [0, {PNM_MAXVAL_LIMIT}]")

        lo = int(self.samples.min())
        hi = int(self.samples.max())
        if lo < 0 or hi > self.maxval:
            raise ValueError(f"samples span [{lo}, {hi}], outside [0, {self.maxval}]")

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        maxval: int,
        magic: str = "P2",
    ) -> PixelGrid:
        return cls(np.array(rows, dtype=np.int64), maxval, magic)

    @classmethod
    def zeros(cls, height: int, width: int, maxval: int, magic: str = "P2") -> PixelGrid:
        return cls(np.zeros((height, width), dtype=np.int64), maxval, magic)

    @property
    def width(self) -> int:
        return int(self.samples.shape[1])

    @property
    def height(self) -> int:
        return int(self.samples.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def area(self) -> int:
        return self.width * self.height

    def __getitem__(self, point: tuple[int, int]) -> int:
        row, col = point
        self._check_bounds(row, col)
        return int(self.samples[row, col])

    def __setitem__(self, point: tuple[int, int], value: int) -> None:
        row, col = point
        self._check_bounds(row, col)
        if not 0 <= value <= self.maxval:
            raise ValueError(f"sample {value} outside [0, {self.maxval}]")
        self.samples[row, col] = value

    def copy(self) -> PixelGrid:
        return PixelGrid(self.samples.copy(), self.maxval, self.magic, self.width, self.height)

    def with_samples(self, samples: NDArray[np.int64]) -> PixelGrid:
        """New grid sharing this grid's maxval and magic.

        A same-shaped result inherits this grid's size as its limit, so grids
        built with explicit limits survive filtering.
        """
        if np.shape(samples) == self.shape:
            return PixelGrid(samples, self.maxval, self.magic, self.width, self.height)
        return PixelGrid(samples, self.maxval, self.magic)

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"({row}, {col}) outside {self.height}x{self.width} grid")
