"""
Grid raycasting for a first-person camera.

A camera fans rays across a projection plane 1 unit in front of it, and
each ray is marched cell by cell through the world until it strikes a
wall or runs out of distance.

All functions here are pure: no I/O, no mutation of the world.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional

from .direction import Direction
from .world import RaycastableWorld


class DegenerateRayError(ValueError):
    """Raised when a ray with zero length is cast."""


@dataclass
class CameraParams:
    """Camera pose and projection settings for one frame."""

    pos: tuple[float, float]

    # Must have unit length
    facing_unit: tuple[float, float]

    n_rays: int

    max_dist: float

    # The projection plane is 1 unit away from the camera. Adjusting this
    # value adjusts the FOV.
    projection_plane_width: float

    @classmethod
    def from_angle(
        cls,
        pos: tuple[float, float],
        theta: float,
        n_rays: int,
        max_dist: float,
        projection_plane_width: float,
    ) -> "CameraParams":
        """Build params from a heading in radians (0 = East, pi/2 = North)."""
        return cls(
            pos=pos,
            facing_unit=(math.cos(theta), math.sin(theta)),
            n_rays=n_rays,
            max_dist=max_dist,
            projection_plane_width=projection_plane_width,
        )

    @property
    def fov_degrees(self) -> float:
        return math.degrees(2 * math.atan(self.projection_plane_width / 2))


@dataclass(frozen=True)
class RaycastHit:
    """Where a ray struck a wall."""

    # On the boundary between the last empty cell and the wall cell
    hit_pos: tuple[float, float]

    wall: tuple[int, int]

    # Face of the wall cell that was struck
    wall_side: Direction

    def distance_from(self, pos: tuple[float, float]) -> float:
        return math.hypot(self.hit_pos[0] - pos[0], self.hit_pos[1] - pos[1])


def raycast_camera(
    world: RaycastableWorld,
    params: CameraParams,
) -> list[Optional[RaycastHit]]:
    """
    Raycast along the projection plane.

    Returns one result per ray, leftmost ray first. A None result means
    the ray travelled max_dist without hitting anything.
    """
    rays = gen_rays(
        params.facing_unit,
        params.projection_plane_width,
        params.n_rays,
    )
    return [raycast(world, params.pos, ray, params.max_dist) for ray in rays]


def raycast(
    world: RaycastableWorld,
    pos: tuple[float, float],
    ray: tuple[float, float],
    max_dist: float,
) -> Optional[RaycastHit]:
    """
    Perform a single raycast from the given position along the given ray.

    The ray need not be normalized. Non-finite inputs are rejected, since
    the march could never leave the distance budget.
    """
    if not (math.isfinite(ray[0]) and math.isfinite(ray[1])):
        raise DegenerateRayError(f"Cannot raycast with non-finite ray {ray}")
    if not (math.isfinite(pos[0]) and math.isfinite(pos[1])):
        raise ValueError(f"Raycast position must be finite, got {pos}")
    if not math.isfinite(max_dist):
        raise ValueError(f"max_dist must be finite, got {max_dist}")

    px, py = pos
    max_dist_2 = max_dist * max_dist

    march_x, march_y = px, py
    grid_x, grid_y = math.floor(march_x), math.floor(march_y)

    while True:
        dx = march_x - px
        dy = march_y - py
        if dx * dx + dy * dy > max_dist_2:
            return None

        (box_x, box_y), outgoing = raycast_in_box(
            (march_x - grid_x, march_y - grid_y), ray
        )
        hit_x, hit_y = box_x + grid_x, box_y + grid_y

        step_x, step_y = outgoing.to_unit_vector()
        probe_x, probe_y = grid_x + step_x, grid_y + step_y

        if world.exists(probe_x, probe_y):
            return RaycastHit(
                hit_pos=(hit_x, hit_y),
                wall=(probe_x, probe_y),
                wall_side=-outgoing,
            )

        march_x, march_y = hit_x, hit_y
        grid_x, grid_y = probe_x, probe_y


def gen_rays(
    facing_unit: tuple[float, float],
    projection_plane_width: float,
    n_rays: int,
) -> Iterator[tuple[float, float]]:
    """
    Generate ray directions for a projection plane at distance 1.

    Facing must be a unit vector.
    """
    fx, fy = facing_unit

    # Perpendicular of the facing vector, to the left
    left_x, left_y = fy, -fx

    half_width = projection_plane_width / 2.0
    leftmost_x = fx + half_width * left_x
    leftmost_y = fy + half_width * left_y

    for i in range(n_rays):
        offset = i * projection_plane_width / n_rays
        yield (leftmost_x - offset * left_x, leftmost_y - offset * left_y)


def raycast_in_box(
    pos: tuple[float, float],
    ray: tuple[float, float],
) -> tuple[tuple[float, float], Direction]:
    """
    Raycast to the edge of the box bounded by points (0, 0) and (1, 1).

    Returns the exit point and the side of the box it leaves through.
    Rays heading right or up are mirrored into the towards-origin case
    and the answer mirrored back.
    """
    x, y = pos
    rx, ry = ray

    if rx > 0.0:
        (ox, oy), d = raycast_in_box((1.0 - x, y), (-rx, ry))
        return (1.0 - ox, oy), d.reflect_lr()
    if ry > 0.0:
        (ox, oy), d = _towards_origin((x, 1.0 - y), (rx, -ry))
        return (ox, 1.0 - oy), d.reflect_ud()

    return _towards_origin(pos, ray)


def _towards_origin(
    pos: tuple[float, float],
    ray: tuple[float, float],
) -> tuple[tuple[float, float], Direction]:
    """Only valid when both components of the ray are <= 0."""
    x, y = pos
    rx, ry = ray

    xdir = Direction.EAST if rx > 0.0 else Direction.WEST
    ydir = Direction.NORTH if ry > 0.0 else Direction.SOUTH

    if rx == 0.0 and ry == 0.0:
        raise DegenerateRayError("Cannot raycast with zero-valued ray")
    if rx == 0.0:
        return (x, 0.0), ydir
    if ry == 0.0:
        return (0.0, y), xdir

    x_int = x - (rx / ry) * y
    y_int = y - (ry / rx) * x

    # Exactly through the corner counts as the bottom edge
    if x_int < 0.0:
        return (0.0, y_int), xdir
    return (x_int, 0.0), ydir
