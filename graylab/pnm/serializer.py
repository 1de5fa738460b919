"""Write a PixelGrid back out as plain PNM text."""

from __future__ import annotations

from pathlib import Path

from graylab.models.grid import PixelGrid


def serialize_pnm(grid: PixelGrid) -> str:
    """Header lines, then one row of ``%3d``-padded samples per line."""
    lines = [grid.magic, f"{grid.width} {grid.height}"]
    if grid.magic != "P1":
        lines.append(str(grid.maxval))

    for row in grid.samples.tolist():
        lines.append("".join(f"{v:3d} " for v in row))

    return "\n".join(lines) + "\n"


def write_pnm(path: str | Path, grid: PixelGrid) -> None:
    Path(path).write_text(serialize_pnm(grid), encoding="ascii")
