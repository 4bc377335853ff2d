"""
Command line entry point.

Usage:
    python -m backrooms.run                    # interactive viewer
    python -m backrooms.run --ascii            # print one frame as text
    python -m backrooms.run --benchmark        # time python vs numba casting
    python -m backrooms.run --map level.txt --preset wide
"""

import argparse
import dataclasses
import math
import os
import sys

from .config import PRESETS
from .maps import DEMO_MAP
from .raycast.camera import raycast_camera
from .raycast.world import ArrayWorld, load_ascii_map


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Backrooms grid raycaster")
    parser.add_argument(
        "--map",
        default=None,
        help="ASCII map file ('#' wall, '.' empty, first line is y=0). "
             "Default: built-in demo map",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="default",
        help="Configuration preset (default: default)",
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=None,
        help="Number of rays per frame (overrides preset)",
    )
    parser.add_argument(
        "--max-dist",
        type=float,
        default=None,
        help="Maximum cast distance in cells (overrides preset)",
    )
    parser.add_argument(
        "--plane-width",
        type=float,
        default=None,
        help="Projection plane width, larger = wider FOV (overrides preset)",
    )
    parser.add_argument(
        "--no-numba",
        action="store_true",
        help="Use the pure-Python raycaster",
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Benchmark python vs numba raycasting and exit",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Print a single frame as ASCII and exit",
    )
    return parser


def build_config(args: argparse.Namespace):
    """Apply command line overrides on top of the chosen preset."""
    overrides = {}
    if args.rays is not None:
        overrides["n_rays"] = args.rays
    if args.max_dist is not None:
        overrides["max_dist"] = args.max_dist
    if args.plane_width is not None:
        overrides["projection_plane_width"] = args.plane_width
    if args.no_numba:
        overrides["use_numba"] = False
    if args.map is not None:
        overrides["map_path"] = args.map
    return dataclasses.replace(PRESETS[args.preset], **overrides)


def load_world(config) -> ArrayWorld:
    if config.map_path is None:
        return ArrayWorld.from_ascii(DEMO_MAP)
    return load_ascii_map(config.map_path)


def print_ascii_frame(world: ArrayWorld, config, rows: int = 24):
    from .visualize.columns import column_spans, spans_to_ascii

    params = config.to_camera_params(
        config.start_pos,
        (math.cos(config.start_angle), math.sin(config.start_angle)),
    )
    hits = raycast_camera(world, params)
    print(spans_to_ascii(column_spans(hits, params, rows), rows))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = build_config(args)

    if config.map_path is not None and not os.path.exists(os.path.expanduser(config.map_path)):
        print(f"ERROR: Map file not found: {config.map_path}")
        return 1

    world = load_world(config)
    print(f"[Backrooms] Loaded {world}")

    if args.benchmark:
        from .raycast.numba_raycast import benchmark
        benchmark(world, n_rays=config.n_rays)
        return 0

    if args.ascii:
        print_ascii_frame(world, config)
        return 0

    from .visualize.depth_viewer import DepthViewer

    viewer = DepthViewer(world, config)
    try:
        viewer.run()
    except KeyboardInterrupt:
        print("\n[Backrooms] Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
