"""
Numba-accelerated raycasting over a dense ArrayWorld.

Same geometry as camera.py, compiled with numba so a full frame of rays
can be cast at interactive rates. Results agree with raycast_camera().

Run benchmark: python -m backrooms.raycast.numba_raycast
"""

import math
from typing import Optional

import numpy as np
from numba import njit

from .camera import CameraParams, RaycastHit
from .direction import Direction
from .world import ArrayWorld


# Output columns, one row per ray
OUT_HIT = 0
OUT_HIT_X = 1
OUT_HIT_Y = 2
OUT_WALL_X = 3
OUT_WALL_Y = 4
OUT_SIDE = 5
OUT_COLUMNS = 6

# Direction values (see direction.Direction)
EAST = 0
NORTH = 1
WEST = 2
SOUTH = 3


@njit(cache=True)
def trace_in_box(x: float, y: float, rx: float, ry: float) -> tuple:
    """
    Exit point and side of the unit box (numba-compiled).

    Mirrors the ray into the towards-origin case, then mirrors back.
    Returns (exit_x, exit_y, side).
    """
    flip_x = rx > 0.0
    flip_y = ry > 0.0

    if flip_x:
        x = 1.0 - x
        rx = -rx
    if flip_y:
        y = 1.0 - y
        ry = -ry

    if rx == 0.0 and ry == 0.0:
        raise ValueError("Cannot raycast with zero-valued ray")

    if rx == 0.0:
        ox, oy, side = x, 0.0, SOUTH
    elif ry == 0.0:
        ox, oy, side = 0.0, y, WEST
    else:
        x_int = x - (rx / ry) * y
        y_int = y - (ry / rx) * x
        if x_int < 0.0:
            ox, oy, side = 0.0, y_int, WEST
        else:
            ox, oy, side = x_int, 0.0, SOUTH

    if flip_y:
        oy = 1.0 - oy
        if side == SOUTH:
            side = NORTH
    if flip_x:
        ox = 1.0 - ox
        if side == WEST:
            side = EAST

    return ox, oy, side


@njit(cache=True)
def _exists(grid: np.ndarray, x: int, y: int) -> bool:
    if x < 0 or y < 0 or x >= grid.shape[1] or y >= grid.shape[0]:
        return False
    return grid[y, x] != 0


@njit(cache=True)
def trace_ray_numba(
    grid: np.ndarray,
    px: float, py: float,
    rx: float, ry: float,
    max_dist: float,
    out: np.ndarray,
):
    """
    March a single ray through the grid (numba-compiled).

    Writes [hit, hit_x, hit_y, wall_x, wall_y, side] into out.
    hit is 0.0 when the ray ran out of distance.
    """
    if not (math.isfinite(rx) and math.isfinite(ry)):
        raise ValueError("Cannot raycast with non-finite ray")
    if not (math.isfinite(px) and math.isfinite(py) and math.isfinite(max_dist)):
        raise ValueError("Raycast position and max_dist must be finite")

    max_dist_2 = max_dist * max_dist

    mx, my = px, py
    gx = int(math.floor(mx))
    gy = int(math.floor(my))

    while True:
        dx = mx - px
        dy = my - py
        if dx * dx + dy * dy > max_dist_2:
            out[OUT_HIT] = 0.0
            return

        bx, by, side = trace_in_box(mx - gx, my - gy, rx, ry)
        hx = bx + gx
        hy = by + gy

        if side == EAST:
            qx, qy = gx + 1, gy
        elif side == NORTH:
            qx, qy = gx, gy + 1
        elif side == WEST:
            qx, qy = gx - 1, gy
        else:
            qx, qy = gx, gy - 1

        if _exists(grid, qx, qy):
            out[OUT_HIT] = 1.0
            out[OUT_HIT_X] = hx
            out[OUT_HIT_Y] = hy
            out[OUT_WALL_X] = qx
            out[OUT_WALL_Y] = qy
            # Wall side is the opposite of the direction of travel
            out[OUT_SIDE] = (side + 2) % 4
            return

        mx, my = hx, hy
        gx, gy = qx, qy


@njit(cache=True)
def trace_camera_numba(
    grid: np.ndarray,
    px: float, py: float,
    fx: float, fy: float,
    plane_width: float,
    n_rays: int,
    max_dist: float,
    output: np.ndarray,
):
    """Fan rays across the projection plane and trace each one, in order."""
    left_x = fy
    left_y = -fx

    half_width = plane_width / 2.0
    leftmost_x = fx + half_width * left_x
    leftmost_y = fy + half_width * left_y

    for i in range(n_rays):
        offset = i * plane_width / n_rays
        rx = leftmost_x - offset * left_x
        ry = leftmost_y - offset * left_y
        trace_ray_numba(grid, px, py, rx, ry, max_dist, output[i])


def output_to_hits(output: np.ndarray) -> list[Optional[RaycastHit]]:
    """Convert a raw output array into RaycastHit values."""
    hits = []
    for row in output:
        if row[OUT_HIT] == 0.0:
            hits.append(None)
            continue
        hits.append(RaycastHit(
            hit_pos=(float(row[OUT_HIT_X]), float(row[OUT_HIT_Y])),
            wall=(int(row[OUT_WALL_X]), int(row[OUT_WALL_Y])),
            wall_side=Direction(int(row[OUT_SIDE])),
        ))
    return hits


class NumbaRaycaster:
    """
    Compiled camera raycaster bound to one ArrayWorld.

    Buffers are preallocated and reused between frames. The first cast
    triggers JIT compilation unless warm_up() was called.
    """

    def __init__(self, world: ArrayWorld, n_rays: int = 160):
        self.world = world
        self._grid = world.grid.astype(np.uint8)
        self._output = np.zeros((n_rays, OUT_COLUMNS), dtype=np.float64)

    @property
    def n_rays(self) -> int:
        return self._output.shape[0]

    def warm_up(self):
        """Compile the kernels ahead of the first frame."""
        print("[NumbaRaycast] Warming up JIT compilation...")
        params = CameraParams(
            pos=(0.5, 0.5),
            facing_unit=(1.0, 0.0),
            n_rays=1,
            max_dist=1.0,
            projection_plane_width=1.0,
        )
        self.cast_array(params)
        print("[NumbaRaycast] Ready!")

    def cast_array(self, params: CameraParams) -> np.ndarray:
        """
        Cast a frame and return the raw output.

        Returns:
            (n_rays, 6) float64 array: [hit, hit_x, hit_y, wall_x, wall_y, side]
            The array is reused by the next call.
        """
        if params.n_rays != self._output.shape[0]:
            self._output = np.zeros((params.n_rays, OUT_COLUMNS), dtype=np.float64)

        px, py = params.pos
        fx, fy = params.facing_unit
        trace_camera_numba(
            self._grid,
            float(px), float(py),
            float(fx), float(fy),
            float(params.projection_plane_width),
            params.n_rays,
            float(params.max_dist),
            self._output,
        )
        return self._output

    def cast(self, params: CameraParams) -> list[Optional[RaycastHit]]:
        """Cast a frame. Same results as raycast_camera(world, params)."""
        return output_to_hits(self.cast_array(params))


def benchmark(world: Optional[ArrayWorld] = None, iterations: int = 200, n_rays: int = 320):
    """Benchmark the compiled raycaster against the pure-Python one."""
    import time

    from .camera import raycast_camera
    from ..maps import DEMO_MAP

    print("=" * 60)
    print("  NUMBA RAYCAST BENCHMARK")
    print("=" * 60)

    if world is None:
        world = ArrayWorld.from_ascii(DEMO_MAP)
    params = CameraParams.from_angle(
        pos=(2.5, 2.5),
        theta=math.pi / 4,
        n_rays=n_rays,
        max_dist=64.0,
        projection_plane_width=1.2,
    )

    caster = NumbaRaycaster(world, n_rays)
    caster.warm_up()

    results = {}
    for name, fn in (
        ("python", lambda: raycast_camera(world, params)),
        ("numba", lambda: caster.cast(params)),
    ):
        times = []
        for _ in range(iterations):
            start = time.perf_counter()
            fn()
            times.append(time.perf_counter() - start)
        results[name] = np.array(times) * 1000

    print(f"\n" + "=" * 40)
    print(f"  RESULTS ({n_rays} rays, {iterations} frames)")
    print(f"=" * 40)
    for name, ms in results.items():
        print(f"  {name:>6}: avg {ms.mean():.2f}ms, min {ms.min():.2f}ms, "
              f"max {ms.max():.2f}ms ({1000 / ms.mean():.0f} fps)")
    print(f"=" * 40)

    hits = caster.cast(params)
    print(f"\n[*] Frame hits: {sum(h is not None for h in hits)}/{len(hits)}")
    return results


if __name__ == "__main__":
    benchmark()
