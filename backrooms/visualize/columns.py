"""
Project raycast hits onto screen columns.

One column per ray: a wall slice centred on the horizon whose height is
inversely proportional to the hit's distance along the facing vector.
"""

from typing import Optional, Sequence

import numpy as np

from ..raycast.camera import CameraParams, RaycastHit
from ..raycast.direction import Direction


# Column array layout
COL_TOP = 0
COL_BOTTOM = 1
COL_SHADE = 2

# Wall brightness (matches the depth viewer gradient)
SHADE_BASE = 30
SHADE_RANGE = 200

# North/South faces are drawn darker so corners read clearly
NS_SHADE_FACTOR = 0.7


def perpendicular_distance(hit: RaycastHit, params: CameraParams) -> float:
    """
    Distance from the camera to the hit along the facing vector.

    Using this rather than the euclidean distance keeps straight walls
    straight (no fisheye).
    """
    fx, fy = params.facing_unit
    dx = hit.hit_pos[0] - params.pos[0]
    dy = hit.hit_pos[1] - params.pos[1]
    return dx * fx + dy * fy


def side_shade(side: Direction) -> float:
    if side in (Direction.NORTH, Direction.SOUTH):
        return NS_SHADE_FACTOR
    return 1.0


def column_spans(
    hits: Sequence[Optional[RaycastHit]],
    params: CameraParams,
    screen_height: int,
) -> np.ndarray:
    """
    Compute the wall slice for each column.

    Returns:
        (n, 3) int32 array of [top, bottom, shade], top inclusive and
        bottom exclusive, both clipped to the screen. Misses give an
        empty slice at the horizon with shade 0.
    """
    horizon = screen_height // 2
    spans = np.zeros((len(hits), 3), dtype=np.int32)
    spans[:, COL_TOP] = horizon
    spans[:, COL_BOTTOM] = horizon

    for i, hit in enumerate(hits):
        if hit is None:
            continue

        dist = perpendicular_distance(hit, params)
        # Standing on a cell boundary gives a zero distance
        dist = max(dist, 1e-6)

        half = int(screen_height / dist) // 2
        spans[i, COL_TOP] = max(0, horizon - half)
        spans[i, COL_BOTTOM] = min(screen_height, horizon + half)

        depth = min(1.0, dist / params.max_dist)
        intensity = SHADE_BASE + (1.0 - depth) * SHADE_RANGE
        spans[i, COL_SHADE] = int(intensity * side_shade(hit.wall_side))

    return spans


def spans_to_ascii(spans: np.ndarray, screen_height: int) -> str:
    """Render column spans as rows of text, brightest walls as '#'."""
    ramp = " .:-=+*#"
    max_shade = SHADE_BASE + SHADE_RANGE

    rows = []
    for y in range(screen_height):
        row = []
        for top, bottom, shade in spans:
            if top <= y < bottom:
                level = 1 + int(shade / max_shade * (len(ramp) - 2))
                row.append(ramp[min(level, len(ramp) - 1)])
            else:
                row.append(" ")
        rows.append("".join(row))
    return "\n".join(rows)
