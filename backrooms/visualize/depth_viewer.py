"""
Real-time first-person view of a grid world.

Two view modes (press V to toggle):
1. FIRST PERSON: one wall slice per ray, brighter = closer
2. MAP VIEW: top-down grid with the ray fan drawn to each hit

Controls:
    W/S or Up/Down     - move forward/back
    A/D or Left/Right  - turn
    V                  - toggle view
    ESC                - quit
"""

import math
import time
from typing import Optional

import numpy as np
import pygame
import pygame.surfarray
from numba import njit

from ..config import ViewerConfig
from ..raycast.camera import CameraParams, RaycastHit, raycast, raycast_camera
from ..raycast.numba_raycast import NumbaRaycaster
from ..raycast.world import ArrayWorld
from .columns import COL_BOTTOM, COL_SHADE, COL_TOP, column_spans


# View modes
VIEW_FIRST_PERSON = 0
VIEW_MAP = 1

# Colors (RGB)
COLOR_CEILING = (20, 20, 28)
COLOR_FLOOR = (45, 40, 30)
COLOR_TEXT = (200, 200, 200)
COLOR_CROSSHAIR = (50, 255, 50)
COLOR_MAP_WALL = (120, 120, 130)
COLOR_MAP_EMPTY = (15, 15, 20)
COLOR_RAY = (200, 180, 60)
COLOR_PLAYER = (50, 255, 50)


@njit(cache=True)
def _render_columns_fast(
    pixels: np.ndarray,
    spans: np.ndarray,
    width: int,
    height: int,
    ceiling: tuple,
    floor: tuple,
):
    """Fill the pixel buffer with ceiling, wall slices and floor."""
    n_cols = spans.shape[0]
    col_width = width / n_cols
    horizon = height // 2

    for col in range(n_cols):
        x_start = int(col * col_width)
        x_end = min(int((col + 1) * col_width), width)
        top = spans[col, COL_TOP]
        bottom = spans[col, COL_BOTTOM]
        shade = spans[col, COL_SHADE]

        for px in range(x_start, x_end):
            for py in range(height):
                if top <= py < bottom:
                    # Slightly warm wall tint
                    pixels[py, px, 0] = min(255, shade + 10)
                    pixels[py, px, 1] = min(255, shade + 5)
                    pixels[py, px, 2] = shade
                elif py < horizon:
                    pixels[py, px, 0] = ceiling[0]
                    pixels[py, px, 1] = ceiling[1]
                    pixels[py, px, 2] = ceiling[2]
                else:
                    pixels[py, px, 0] = floor[0]
                    pixels[py, px, 1] = floor[1]
                    pixels[py, px, 2] = floor[2]


class DepthViewer:
    """
    Interactive pygame viewer for an ArrayWorld.

    Casts one frame per display refresh, through the numba fast path
    unless config.use_numba is False.
    """

    def __init__(self, world: ArrayWorld, config: Optional[ViewerConfig] = None):
        self.world = world
        self.config = config or ViewerConfig()

        self.width = self.config.screen_width
        self.height = self.config.screen_height

        # Camera pose
        self.pos = tuple(self.config.start_pos)
        self.angle = self.config.start_angle

        self.view_mode = VIEW_FIRST_PERSON

        self._caster: Optional[NumbaRaycaster] = None
        if self.config.use_numba:
            self._caster = NumbaRaycaster(world, self.config.n_rays)

        # State
        self.running = False
        self.screen = None
        self.font = None
        self.clock = None

        # Stats
        self.fps = 0.0
        self.cast_ms = 0.0
        self.last_update = time.time()
        self.frame_count = 0

    @property
    def facing(self) -> tuple[float, float]:
        return (math.cos(self.angle), math.sin(self.angle))

    def camera_params(self) -> CameraParams:
        return self.config.to_camera_params(self.pos, self.facing)

    def init_display(self):
        """Initialize pygame display."""
        pygame.init()
        pygame.display.set_caption("Backrooms - Grid Raycaster")
        flags = pygame.HWSURFACE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode((self.width, self.height), flags)
        self.font = pygame.font.SysFont("consolas", 14)
        self.clock = pygame.time.Clock()
        self.running = True

        # Pre-allocate pixel buffer for fast rendering
        self._pixel_buffer = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self._render_surface = pygame.Surface((self.width, self.height))

        if self._caster is not None:
            self._caster.warm_up()

        print("[DepthViewer] Warming up Numba JIT...")
        dummy = np.zeros((1, 3), dtype=np.int32)
        _render_columns_fast(
            self._pixel_buffer, dummy, self.width, self.height,
            COLOR_CEILING, COLOR_FLOOR,
        )
        print("[DepthViewer] JIT ready!")

    def cast_frame(self) -> list[Optional[RaycastHit]]:
        """Cast the rays for the current pose."""
        params = self.camera_params()
        start = time.perf_counter()
        if self._caster is not None:
            hits = self._caster.cast(params)
        else:
            hits = raycast_camera(self.world, params)
        self.cast_ms = (time.perf_counter() - start) * 1000
        return hits

    def try_move(self, distance: float):
        """
        Move along the facing vector, one axis at a time, stopping short
        of walls so the camera slides along them.
        """
        fx, fy = self.facing
        margin = self.config.collision_margin

        for step in ((fx * distance, 0.0), (0.0, fy * distance)):
            length = math.hypot(*step)
            if length == 0.0:
                continue

            hit = raycast(self.world, self.pos, step, length + margin)
            if hit is not None and hit.distance_from(self.pos) <= length + margin:
                continue

            self.pos = (self.pos[0] + step[0], self.pos[1] + step[1])

    def handle_input(self, dt: float):
        keys = pygame.key.get_pressed()

        if keys[pygame.K_a] or keys[pygame.K_LEFT]:
            self.angle += self.config.turn_speed * dt
        if keys[pygame.K_d] or keys[pygame.K_RIGHT]:
            self.angle -= self.config.turn_speed * dt
        if keys[pygame.K_w] or keys[pygame.K_UP]:
            self.try_move(self.config.move_speed * dt)
        if keys[pygame.K_s] or keys[pygame.K_DOWN]:
            self.try_move(-self.config.move_speed * dt)

    def draw_first_person(self, hits: list[Optional[RaycastHit]]):
        """Draw the column view with a crosshair."""
        spans = column_spans(hits, self.camera_params(), self.height)
        _render_columns_fast(
            self._pixel_buffer, spans, self.width, self.height,
            COLOR_CEILING, COLOR_FLOOR,
        )

        # Blit pixel buffer to screen using surfarray
        pygame.surfarray.blit_array(self._render_surface, self._pixel_buffer.swapaxes(0, 1))
        self.screen.blit(self._render_surface, (0, 0))

        cx, cy = self.width // 2, self.height // 2
        size = 10
        pygame.draw.line(self.screen, COLOR_CROSSHAIR, (cx - size, cy), (cx + size, cy), 2)
        pygame.draw.line(self.screen, COLOR_CROSSHAIR, (cx, cy - size), (cx, cy + size), 2)

    def draw_map(self, hits: list[Optional[RaycastHit]]):
        """
        Draw a top-down view of the grid.

        Screen y is flipped so that North is up.
        """
        margin = 20
        cell = max(1, min(
            (self.width - margin * 2) // self.world.width,
            (self.height - margin * 2) // self.world.height,
        ))
        map_h = cell * self.world.height

        def to_screen(x: float, y: float) -> tuple[int, int]:
            return int(margin + x * cell), int(margin + map_h - y * cell)

        self.screen.fill(COLOR_MAP_EMPTY)
        grid = self.world.grid
        for y in range(self.world.height):
            for x in range(self.world.width):
                if grid[y, x]:
                    sx, sy = to_screen(x, y + 1)
                    pygame.draw.rect(self.screen, COLOR_MAP_WALL, (sx, sy, cell, cell))

        origin = to_screen(*self.pos)
        for hit in hits:
            if hit is not None:
                pygame.draw.line(self.screen, COLOR_RAY, origin, to_screen(*hit.hit_pos), 1)

        pygame.draw.circle(self.screen, COLOR_PLAYER, origin, max(3, cell // 4))

    def draw_stats(self, hits: list[Optional[RaycastHit]]):
        """Draw stats overlay."""
        n_hits = sum(h is not None for h in hits)
        lines = [
            f"FPS: {self.fps:.0f}  cast: {self.cast_ms:.2f}ms "
            f"({'numba' if self._caster is not None else 'python'})",
            f"pos: ({self.pos[0]:.2f}, {self.pos[1]:.2f})  "
            f"angle: {math.degrees(self.angle) % 360:.0f}°",
            f"rays: {n_hits}/{len(hits)} hit  [V] Toggle view",
        ]
        for i, line in enumerate(lines):
            text = self.font.render(line, True, COLOR_TEXT)
            self.screen.blit(text, (10, 10 + i * 18))

    def update(self) -> bool:
        """
        Process one frame.

        Returns False once the viewer should close.
        """
        if not self.running:
            return False

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                    return False
                elif event.key == pygame.K_v:
                    self.view_mode = VIEW_MAP if self.view_mode == VIEW_FIRST_PERSON else VIEW_FIRST_PERSON

        dt = self.clock.tick(self.config.target_fps) / 1000.0
        self.handle_input(dt)

        hits = self.cast_frame()
        if self.view_mode == VIEW_FIRST_PERSON:
            self.draw_first_person(hits)
        else:
            self.draw_map(hits)
        self.draw_stats(hits)

        pygame.display.flip()

        # FPS tracking
        self.frame_count += 1
        now = time.time()
        if now - self.last_update >= 1.0:
            self.fps = self.frame_count / (now - self.last_update)
            self.frame_count = 0
            self.last_update = now

        return True

    def run(self):
        """Open the window and loop until closed."""
        self.init_display()
        print("[DepthViewer] WASD/arrows to move, V to toggle view, ESC to exit")
        try:
            while self.update():
                pass
        finally:
            self.close()

    def close(self):
        """Clean up."""
        self.running = False
        pygame.quit()
