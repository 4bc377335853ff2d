"""
Viewer and camera configuration.
"""

from dataclasses import dataclass
from typing import Optional

from .raycast.camera import CameraParams


@dataclass
class ViewerConfig:
    """Configuration for a viewing session."""

    # Display settings
    screen_width: int = 800
    screen_height: int = 600
    target_fps: int = 60

    # Camera settings
    n_rays: int = 200
    max_dist: float = 32.0
    projection_plane_width: float = 1.2  # ~62 degree FOV

    # Movement (per second)
    move_speed: float = 3.0
    turn_speed: float = 2.0  # radians
    collision_margin: float = 0.2

    # Start pose
    start_pos: tuple = (2.5, 2.5)
    start_angle: float = 0.0  # radians, 0 = East

    # Raycasting
    use_numba: bool = True
    map_path: Optional[str] = None  # None = built-in demo map

    def to_camera_params(self, pos, facing_unit) -> CameraParams:
        """Camera params for one frame at the given pose."""
        return CameraParams(
            pos=pos,
            facing_unit=facing_unit,
            n_rays=self.n_rays,
            max_dist=self.max_dist,
            projection_plane_width=self.projection_plane_width,
        )


# Preset configurations
FAST_CONFIG = ViewerConfig(
    screen_width=640,
    screen_height=400,
    n_rays=80,
    max_dist=16.0,
)

DEFAULT_CONFIG = ViewerConfig()

WIDE_CONFIG = ViewerConfig(
    screen_width=1280,
    screen_height=600,
    n_rays=400,
    projection_plane_width=2.0,  # 90 degree FOV
)

PRESETS = {
    "fast": FAST_CONFIG,
    "default": DEFAULT_CONFIG,
    "wide": WIDE_CONFIG,
}
