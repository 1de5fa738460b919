"""k-means over scalar features with deterministic seeding.

Centres start at the values of the first k features, in input order, so a
given input always yields the same clustering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class Feature:
    value: int
    cluster: int = 0


@dataclass
class _Cluster:
    centre: int
    n_members: int = 0
    sum_values: int = 0


def _trunc_div(total: int, count: int) -> int:
    """Integer mean truncated toward zero."""
    q = abs(total) // count
    return q if total >= 0 else -q


def cluster(
    features: list[Feature],
    k: int,
    max_iterations: int | None = None,
) -> list[int]:
    """Assign each feature to one of ``k`` clusters in place; return the centres.

    Each pass assigns every feature to its nearest centre (ties go to the
    lower cluster index), then moves each centre to the truncated mean of
    its members. Stops when a pass leaves every centre unchanged, or after
    ``max_iterations`` passes when a cap is given.

    Raises ValueError when k is not in [1, len(features)] or a pass leaves
    a cluster without members; both mean the input cannot be clustered
    this way.
    """
    n = len(features)
    if not 1 <= k <= n:
        raise ValueError(f"cluster count {k} must be in [1, {n}]")

    for f in features:
        f.cluster = 0

    clusters = [_Cluster(centre=features[i].value) for i in range(k)]

    passes = 0
    while True:
        passes += 1
        for f in features:
            best_dist: int | None = None
            for idx, c in enumerate(clusters):
                dist = abs(c.centre - f.value)
                if best_dist is None or dist < best_dist:
                    best_dist = dist
                    f.cluster = idx
            chosen = clusters[f.cluster]
            chosen.n_members += 1
            chosen.sum_values += f.value

        finished = True
        for idx, c in enumerate(clusters):
            if c.n_members == 0:
                raise ValueError(f"cluster {idx} has no members (centre {c.centre})")
            old_centre = c.centre
            c.centre = _trunc_div(c.sum_values, c.n_members)
            if c.centre != old_centre:
                finished = False
            c.n_members = 0
            c.sum_values = 0

        if finished:
            break
        if max_iterations is not None and passes >= max_iterations:
            logger.warning("cluster: stopped after %d passes without converging", passes)
            break

    logger.debug("cluster: %d features into %d clusters in %d passes", n, k, passes)
    return [c.centre for c in clusters]
