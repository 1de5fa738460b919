"""
graylab command line — run the analysis core on plain PNM files.

Usage:
  graylab match image.pgm template.pgm out.pgm out_template.pgm   # find + mark the best match
  graylab match image.pgm template.pgm out.pgm out_tpl.pgm -m nearest
  graylab segment image.pgm masked.pgm --queue-capacity 65536     # threshold, label, keep best region
  graylab threshold image.pgm                                     # print the Otsu threshold
  graylab cluster 3 1 2 10 11 12 -k 2                             # k-means over integers
  graylab filter image.pgm out.pgm invert
  graylab filter image.pgm out.pgm scale 0.5 0.5
  graylab serve --port 8000                                       # HTTP API
"""

from __future__ import annotations

import argparse
import logging
import math
import sys

from graylab.config import settings
from graylab.engine.config import PipelineConfig
from graylab.engine.context import AnalysisContext
from graylab.engine.pipeline import create_pipeline
from graylab.engine.registry import register_steps
from graylab.models.grid import PixelGrid, Point
from graylab.pnm.parser import read_pnm
from graylab.pnm.serializer import write_pnm
from graylab.utils import filters, resample
from graylab.utils.kmeans import Feature, cluster
from graylab.utils.matching import cutout, mark_rectangle, match_nearest, match_similarity
from graylab.utils.threshold import find_threshold

logger = logging.getLogger("graylab.cli")

# filter name -> (number of numeric arguments, function)
_FILTERS = {
    "invert": (0, filters.invert),
    "contrast": (0, filters.adjust_contrast),
    "median": (0, filters.smooth_with_median),
    "erode": (0, filters.erode),
    "dilate": (0, filters.dilate),
    "pixelize": (1, lambda g, n: filters.pixelize(g, int(n))),
    "binarize": (1, lambda g, t: filters.binarize(g, int(t))),
    "otsu": (0, lambda g: filters.binarize(g, find_threshold(g))),
    "scale": (2, resample.scale),
    "rotate": (3, lambda g, deg, x0, y0: resample.rotate(g, math.radians(deg), x0, y0)),
    "affine": (6, resample.affine),
}


def cmd_match(args: argparse.Namespace) -> int:
    img = read_pnm(args.input)
    tpl = read_pnm(args.template)

    matcher = match_nearest if args.method == "nearest" else match_similarity
    offset, score = matcher(img, tpl)
    label = "distance" if args.method == "nearest" else "similarity"
    print(f"{label}: {score:f}")
    print(f"offset: row {offset.row} col {offset.col}")

    found = cutout(img, offset, tpl.height, tpl.width)
    bottom_right = Point(offset.row + tpl.height - 1, offset.col + tpl.width - 1)
    mark_rectangle(img, offset, bottom_right)

    write_pnm(args.output, img)
    write_pnm(args.template_output, found)
    return 0


def cmd_segment(args: argparse.Namespace) -> int:
    register_steps()
    grid = read_pnm(args.input)
    config = PipelineConfig(
        smooth=args.smooth,
        stretch_contrast=args.contrast,
        queue_capacity=args.queue_capacity,
        min_area_fraction=args.min_area,
    )
    ctx = create_pipeline(config).run(AnalysisContext(source=grid))

    print(f"threshold: {ctx.threshold}")
    print("label num   area   xcenter   ycenter   orientation")
    for p in ctx.regions:
        print(f"{p.label:<9d}   {p.area:<5d}  {p.centroid_col:<8d}  {p.centroid_row:<8d}  {p.orientation:.1f}")

    for step_id, err in sorted(ctx.errors.items()):
        print(f"{step_id}: {err}", file=sys.stderr)

    if not ctx.masked:
        print("no region selected", file=sys.stderr)
        return 1

    print(f"selected label: {ctx.best_label}")
    write_pnm(args.output, ctx.source)
    return 0


def cmd_threshold(args: argparse.Namespace) -> int:
    print(find_threshold(read_pnm(args.input)))
    return 0


def cmd_cluster(args: argparse.Namespace) -> int:
    features = [Feature(v) for v in args.values]
    centres = cluster(features, args.k, args.max_iterations)
    print("centres: " + " ".join(str(c) for c in centres))
    for f in features:
        print(f"{f.value}\t{f.cluster}")
    return 0


def cmd_filter(args: argparse.Namespace) -> int:
    n_params, fn = _FILTERS[args.name]
    if len(args.params) != n_params:
        raise ValueError(f"filter {args.name!r} takes {n_params} numeric arguments, got {len(args.params)}")

    grid: PixelGrid = read_pnm(args.input)
    write_pnm(args.output, fn(grid, *args.params))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "graylab.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.graylab_log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="graylab", description="Grayscale raster analysis on plain PNM files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("match", help="Locate a template and mark it")
    p.add_argument("input", help="Image to search")
    p.add_argument("template", help="Template image")
    p.add_argument("output", help="Image with the match marked")
    p.add_argument("template_output", help="Matched window cut out of the image")
    p.add_argument("-m", "--method", choices=["similarity", "nearest"], default="similarity")
    p.set_defaults(func=cmd_match)

    p = sub.add_parser("segment", help="Threshold, label and keep the best region")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("--queue-capacity", type=int, default=settings.graylab_queue_capacity)
    p.add_argument("--min-area", type=float, default=0.01, help="Minimum region share of the image")
    p.add_argument("--smooth", action="store_true", help="3x3 median smoothing first")
    p.add_argument("--contrast", action="store_true", help="Stretch contrast first")
    p.set_defaults(func=cmd_segment)

    p = sub.add_parser("threshold", help="Print the Otsu threshold")
    p.add_argument("input")
    p.set_defaults(func=cmd_threshold)

    p = sub.add_parser("cluster", help="k-means over integer values")
    p.add_argument("values", type=int, nargs="+")
    p.add_argument("-k", type=int, required=True, help="Number of clusters")
    p.add_argument("--max-iterations", type=int, default=None)
    p.set_defaults(func=cmd_cluster)

    p = sub.add_parser("filter", help="Apply a filter or resampling")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("name", choices=sorted(_FILTERS))
    p.add_argument("params", type=float, nargs="*")
    p.set_defaults(func=cmd_filter)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--reload", action="store_true", help="Reload on code changes")
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, settings.graylab_log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        return args.func(args)
    except (OSError, ValueError) as e:
        logger.error("%s: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
