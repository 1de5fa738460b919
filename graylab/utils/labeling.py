"""Connected-component labeling of a binarized grid (8-connected BFS flood fill).

The grid holds only 0 (background) and maxval (foreground). Each region found
in row-major scan order is written back into the grid as 1, 2, 3, ... so the
result is a labeled grid with the same shape.

Visited state lives in a separate label array, not in the samples, and a
region's pixels reach the grid only once its fill has completed. When a fill
is aborted, the grid keeps every completed label and the aborted region keeps
the foreground value.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from graylab.models.grid import PixelGrid

logger = logging.getLogger(__name__)

# 8-connectivity, row-major neighbour order
_NEIGHBOURS_8 = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class LabelingResult(NamedTuple):
    label_max: int
    ok: bool


def label_all(grid: PixelGrid, queue_capacity: int | None = None) -> LabelingResult:
    """Label every foreground region of ``grid`` in place.

    ``queue_capacity`` bounds the number of pixels waiting in the fill queue;
    ``None`` leaves it unbounded. Returns ``(label_max, ok)``. On failure
    ``label_max`` counts only the regions that were fully labeled:

    - queue overflow: the region being filled is rolled back;
    - label space exhausted: the next label would reach maxval, the
      foreground value itself.

    Either way the caller must start again from a freshly binarized grid,
    since completed regions are already relabeled.
    """
    samples = grid.samples
    foreground = samples == grid.maxval
    labels = np.zeros(samples.shape, dtype=np.int32)
    label_max = 0

    rows, cols = np.nonzero(foreground)
    for r, c in zip(rows.tolist(), cols.tolist()):
        if labels[r, c]:
            continue

        label = label_max + 1
        if label >= grid.maxval:
            logger.warning(
                "label_all: label %d would reach maxval %d, stopping after %d regions",
                label, grid.maxval, label_max,
            )
            return LabelingResult(label_max, False)

        members = _flood_fill(foreground, labels, r, c, label, queue_capacity)
        if members is None:
            logger.warning(
                "label_all: queue overflowed (capacity %d) in region %d, "
                "consider a larger capacity",
                queue_capacity, label,
            )
            return LabelingResult(label_max, False)

        member_rows, member_cols = zip(*members)
        samples[list(member_rows), list(member_cols)] = label
        label_max = label

    logger.debug("label_all: %d regions labeled", label_max)
    return LabelingResult(label_max, True)


def _flood_fill(
    foreground: NDArray[np.bool_],
    labels: NDArray[np.int32],
    start_r: int,
    start_c: int,
    label: int,
    capacity: int | None,
) -> list[tuple[int, int]] | None:
    """BFS from (start_r, start_c). Returns the region's pixels, or None on overflow.

    A pixel is marked in ``labels`` when enqueued, never when dequeued. On
    overflow the marks made by this fill are cleared again.
    """
    rows, cols = foreground.shape
    members: list[tuple[int, int]] = []
    queue: deque[tuple[int, int]] = deque()

    def enqueue(r: int, c: int) -> bool:
        if capacity is not None and len(queue) >= capacity:
            return False
        labels[r, c] = label
        queue.append((r, c))
        members.append((r, c))
        return True

    if not enqueue(start_r, start_c):
        return None

    while queue:
        r, c = queue.popleft()
        for dr, dc in _NEIGHBOURS_8:
            nr, nc = r + dr, c + dc
            if not (0 <= nr < rows and 0 <= nc < cols):
                continue
            if not foreground[nr, nc] or labels[nr, nc]:
                continue
            if not enqueue(nr, nc):
                for mr, mc in members:
                    labels[mr, mc] = 0
                return None

    return members
