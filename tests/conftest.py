import numpy as np
import pytest

from backrooms.raycast.world import ArrayWorld


@pytest.fixture
def example_world() -> ArrayWorld:
    """9x6 room with a solid border. Rows are y, row 0 is the south wall."""
    data = np.array([
        [1, 1, 3, 1, 1, 1, 1, 1, 1],
        [3, 0, 0, 0, 0, 0, 0, 0, 2],
        [1, 0, 0, 0, 0, 0, 0, 0, 1],
        [2, 0, 0, 0, 0, 0, 3, 0, 1],
        [1, 0, 0, 0, 0, 0, 0, 0, 1],
        [1, 2, 1, 1, 1, 1, 1, 2, 1],
    ])
    return ArrayWorld(data)


@pytest.fixture
def bordered_room() -> ArrayWorld:
    """Same border as example_world, with an empty interior."""
    grid = np.ones((6, 9), dtype=bool)
    grid[1:-1, 1:-1] = False
    return ArrayWorld(grid)
