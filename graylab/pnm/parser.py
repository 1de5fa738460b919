"""Plain-text PNM parser (P2 graymap, P1 bitmap) → PixelGrid."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import numpy as np

from graylab.config import settings
from graylab.models.grid import PNM_MAXVAL_LIMIT, PixelGrid

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"#[^\n]*")

# Magic token → whether the header carries a maximum-value field
_SUPPORTED_MAGIC = {"P2": True, "P1": False}


def parse_pnm(
    text: str,
    max_width: int | None = None,
    max_height: int | None = None,
) -> PixelGrid:
    """Parse plain PNM text into a grid.

    The header is the magic token, width, height and (for P2) the maximum
    sample value; P1 bitmaps have an implied maximum of 1. ``#`` comments
    run to the end of the line. Raises ValueError on any malformed input.
    """
    tokens = _COMMENT_RE.sub(" ", text).split()
    if not tokens:
        raise ValueError("cannot read the header: empty input")

    magic = tokens[0]
    if magic not in _SUPPORTED_MAGIC:
        raise ValueError(f"unsupported magic {magic!r}, expected plain PGM (P2) or PBM (P1)")

    has_maxval = _SUPPORTED_MAGIC[magic]
    header_len = 4 if has_maxval else 3
    if len(tokens) < header_len:
        raise ValueError("cannot read the header")
    try:
        width = int(tokens[1])
        height = int(tokens[2])
        maxval = int(tokens[3]) if has_maxval else 1
    except ValueError as e:
        raise ValueError(f"cannot read the header: {e}") from e

    limit_w = settings.graylab_max_width if max_width is None else max_width
    limit_h = settings.graylab_max_height if max_height is None else max_height
    if width <= 0 or height <= 0:
        raise ValueError(f"invalid image size {width}x{height}")
    if width > limit_w or height > limit_h:
        raise ValueError(f"image is too big: {width}x{height} exceeds {limit_w}x{limit_h}")
    if not 0 <= maxval <= PNM_MAXVAL_LIMIT:
        raise ValueError(f"maximum value {maxval} outside [0, {PNM_MAXVAL_LIMIT}]")

    body = tokens[header_len:]
    n = width * height
    if len(body) < n:
        raise ValueError(f"cannot read a pixel: expected {n} samples, got {len(body)}")
    if len(body) > n:
        logger.debug("parse_pnm: ignoring %d trailing tokens", len(body) - n)

    try:
        flat = np.array([int(t) for t in body[:n]], dtype=np.int64)
    except ValueError as e:
        raise ValueError(f"cannot read a pixel: {e}") from e

    over = np.flatnonzero((flat > maxval) | (flat < 0))
    if over.size:
        idx = int(over[0])
        raise ValueError(
            f"pixel {int(flat[idx])} ({idx // width} {idx % width}) "
            f"exceeds the max {maxval}"
        )

    return PixelGrid(flat.reshape(height, width), maxval, magic, limit_w, limit_h)


def read_pnm(path: str | Path, **limits: int | None) -> PixelGrid:
    """Read and parse a plain PNM file."""
    text = Path(path).read_text(encoding="ascii")
    grid = parse_pnm(text, **limits)
    logger.debug("read_pnm: %s %dx%d max %d", path, grid.width, grid.height, grid.maxval)
    return grid
