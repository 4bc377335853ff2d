"""
Occupancy worlds the raycaster can march through.

A world only has to answer one question: is there a wall at grid cell
(x, y)? Anything outside the stored grid, including negative
coordinates, is empty.
"""

from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

import numpy as np


# ASCII map characters
WALL_CHARS = "#"
EMPTY_CHARS = ". "


@runtime_checkable
class RaycastableWorld(Protocol):
    def exists(self, x: int, y: int) -> bool:
        """Given a grid coordinate, return if there is a wall there or not."""
        ...


class ArrayWorld:
    """
    Dense occupancy grid backed by a 2D numpy bool array.

    The array is indexed [y, x]: row 0 is y=0, the southern edge.
    """

    def __init__(self, grid):
        grid = np.asarray(grid)
        if grid.ndim != 2:
            raise ValueError(f"World grid must be 2D, got shape {grid.shape}")

        self._grid = np.ascontiguousarray(grid != 0, dtype=np.bool_)
        self._grid.flags.writeable = False

    @property
    def grid(self) -> np.ndarray:
        """Read-only [y, x] occupancy array."""
        return self._grid

    @property
    def width(self) -> int:
        return self._grid.shape[1]

    @property
    def height(self) -> int:
        return self._grid.shape[0]

    def exists(self, x: int, y: int) -> bool:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return bool(self._grid[y, x])

    @classmethod
    def from_ascii(cls, text: str) -> "ArrayWorld":
        """
        Build a world from a text map.

        '#' is a wall, '.' or space is empty. The first line is row y=0.
        Short lines are padded with empty cells, blank lines are skipped.
        """
        lines = [line for line in text.splitlines() if line.strip()]
        if not lines:
            raise ValueError("ASCII map is empty")

        width = max(len(line) for line in lines)
        grid = np.zeros((len(lines), width), dtype=np.bool_)

        for y, line in enumerate(lines):
            for x, char in enumerate(line):
                if char in WALL_CHARS:
                    grid[y, x] = True
                elif char not in EMPTY_CHARS:
                    raise ValueError(f"Unknown map character {char!r} at ({x}, {y})")

        return cls(grid)

    def to_ascii(self) -> str:
        return "\n".join(
            "".join("#" if cell else "." for cell in row)
            for row in self._grid
        )

    def __repr__(self) -> str:
        return f"ArrayWorld({self.width}x{self.height}, walls={int(self._grid.sum())})"


class SetWorld:
    """
    Sparse world holding only the coordinates of its wall cells.

    Walls may only sit at non-negative coordinates.
    """

    def __init__(self, walls: Iterable[tuple[int, int]] = ()):
        self.walls = frozenset((int(x), int(y)) for x, y in walls)

        negative = sorted(cell for cell in self.walls if cell[0] < 0 or cell[1] < 0)
        if negative:
            raise ValueError(f"Wall cells must have non-negative coordinates, got {negative}")

    def exists(self, x: int, y: int) -> bool:
        if x < 0 or y < 0:
            return False
        return (x, y) in self.walls


class EmptyWorld:
    """A world with no walls anywhere."""

    def exists(self, x: int, y: int) -> bool:
        return False


def load_ascii_map(path) -> ArrayWorld:
    """Load an ArrayWorld from an ASCII map file."""
    path = Path(path).expanduser()
    with open(path, "r") as f:
        return ArrayWorld.from_ascii(f.read())
