import numpy as np
import pytest

from backrooms.maps import BORDERED_ROOM, DEMO_MAP
from backrooms.raycast.world import (
    ArrayWorld,
    EmptyWorld,
    RaycastableWorld,
    SetWorld,
    load_ascii_map,
)


def test_array_world_is_indexed_y_then_x():
    grid = np.zeros((2, 3), dtype=bool)
    grid[1, 2] = True
    world = ArrayWorld(grid)

    assert world.width == 3
    assert world.height == 2
    assert world.exists(2, 1)
    assert not world.exists(1, 2)


@pytest.mark.parametrize("x, y", [
    (-1, 0), (0, -1), (-5, -5), (9, 0), (0, 6), (100, 100),
])
def test_out_of_range_is_empty(example_world, x, y):
    assert example_world.exists(x, y) is False


def test_nonzero_values_are_walls(example_world):
    # Fixture uses 1, 2 and 3 for different wall kinds
    assert example_world.exists(2, 0)
    assert example_world.exists(8, 1)
    assert example_world.exists(6, 3)
    assert not example_world.exists(1, 1)


def test_grid_is_read_only(example_world):
    with pytest.raises(ValueError):
        example_world.grid[1, 1] = True


def test_rejects_non_2d_grid():
    with pytest.raises(ValueError):
        ArrayWorld(np.zeros(5))


def test_from_ascii_first_line_is_south():
    world = ArrayWorld.from_ascii("""
##.
...
""")
    assert world.exists(0, 0)
    assert world.exists(1, 0)
    assert not world.exists(2, 0)
    assert not world.exists(0, 1)


def test_from_ascii_pads_short_lines():
    world = ArrayWorld.from_ascii("####\n#")
    assert world.width == 4
    assert world.exists(0, 1)
    assert not world.exists(3, 1)


def test_from_ascii_rejects_unknown_characters():
    with pytest.raises(ValueError):
        ArrayWorld.from_ascii("#X#")


def test_from_ascii_rejects_empty_map():
    with pytest.raises(ValueError):
        ArrayWorld.from_ascii("\n\n")


def test_ascii_round_trip_of_builtin_maps(bordered_room):
    assert np.array_equal(ArrayWorld.from_ascii(BORDERED_ROOM).grid, bordered_room.grid)

    demo = ArrayWorld.from_ascii(DEMO_MAP)
    assert ArrayWorld.from_ascii(demo.to_ascii()).to_ascii() == demo.to_ascii()


def test_load_ascii_map(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("###\n#.#\n###\n")

    world = load_ascii_map(path)
    assert world.width == 3
    assert not world.exists(1, 1)
    assert world.exists(1, 2)


def test_load_ascii_map_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_ascii_map(tmp_path / "missing.txt")


def test_set_world():
    world = SetWorld([(1, 2), (0, 4)])
    assert world.exists(1, 2)
    assert world.exists(0, 4)
    assert not world.exists(2, 1)
    assert not world.exists(-1, 2)


@pytest.mark.parametrize("cell", [(-3, 4), (2, -1), (-1, -1)])
def test_set_world_rejects_negative_cells(cell):
    with pytest.raises(ValueError):
        SetWorld([(1, 1), cell])


def test_empty_world():
    world = EmptyWorld()
    assert not any(world.exists(x, y) for x in range(-3, 3) for y in range(-3, 3))


@pytest.mark.parametrize("world", [
    ArrayWorld(np.ones((2, 2))),
    SetWorld(),
    EmptyWorld(),
])
def test_worlds_satisfy_protocol(world):
    assert isinstance(world, RaycastableWorld)
