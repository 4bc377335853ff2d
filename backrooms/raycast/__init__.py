"""
Raycast module for first-person grid rendering.

Features:
- Exact ray/cell-edge intersection with wall side reporting
- Cell-by-cell ray marching bounded by a distance budget
- Camera ray fan across a projection plane
- Dense, sparse and empty worlds
- Numba-compiled fast path over dense grids
"""

from .direction import Direction
from .world import RaycastableWorld, ArrayWorld, SetWorld, EmptyWorld, load_ascii_map
from .camera import (
    CameraParams, RaycastHit, DegenerateRayError,
    raycast, raycast_camera, raycast_in_box, gen_rays,
)
from .numba_raycast import NumbaRaycaster

__all__ = [
    "Direction",
    "RaycastableWorld", "ArrayWorld", "SetWorld", "EmptyWorld", "load_ascii_map",
    "CameraParams", "RaycastHit", "DegenerateRayError",
    "raycast", "raycast_camera", "raycast_in_box", "gen_rays",
    "NumbaRaycaster",
]
