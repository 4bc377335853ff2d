"""
Four-way compass directions on the grid.

Values run counter-clockwise from East, so rotating is +1 and
negating is +2 (mod 4). Grid y grows to the North.
"""

from enum import IntEnum


# Unit step for each direction, indexed by Direction value
# East(0), North(1), West(2), South(3)
DX = (1, 0, -1, 0)
DY = (0, 1, 0, -1)


class Direction(IntEnum):
    """Cardinal direction of travel, or the face of a wall cell."""

    EAST = 0
    NORTH = 1
    WEST = 2
    SOUTH = 3

    def __neg__(self) -> "Direction":
        return Direction((self + 2) % 4)

    def negate(self) -> "Direction":
        return -self

    def rotate_left(self) -> "Direction":
        """Rotate 90 degrees counter-clockwise."""
        return Direction((self + 1) % 4)

    def rotate_right(self) -> "Direction":
        """Rotate 90 degrees clockwise."""
        return -self.rotate_left()

    def reflect_lr(self) -> "Direction":
        """Reflect left to right, and right to left."""
        if self == Direction.EAST:
            return Direction.WEST
        if self == Direction.WEST:
            return Direction.EAST
        return self

    def reflect_ud(self) -> "Direction":
        """Reflect up to down, and down to up."""
        if self == Direction.NORTH:
            return Direction.SOUTH
        if self == Direction.SOUTH:
            return Direction.NORTH
        return self

    def to_unit_vector(self) -> tuple[int, int]:
        return DX[self], DY[self]

    @classmethod
    def from_unit_vector(cls, v) -> "Direction":
        """
        Classify a vector into a cardinal direction.

        The quadrant test is kept exactly as below so that vectors lying
        on the diagonals and axes always classify the same way.
        """
        x, y = v
        above = x >= y
        right = x >= -y

        if above and right:
            return cls.NORTH
        elif above:
            return cls.WEST
        elif not right:
            return cls.SOUTH
        return cls.EAST
