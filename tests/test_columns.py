import numpy as np
import pytest

from backrooms.raycast.camera import CameraParams, RaycastHit, raycast_camera
from backrooms.raycast.direction import Direction
from backrooms.visualize.columns import (
    COL_BOTTOM,
    COL_SHADE,
    COL_TOP,
    NS_SHADE_FACTOR,
    column_spans,
    perpendicular_distance,
    side_shade,
    spans_to_ascii,
)


@pytest.fixture
def params():
    return CameraParams(
        pos=(4.5, 2.5),
        facing_unit=(1.0, 0.0),
        n_rays=3,
        max_dist=10.0,
        projection_plane_width=1.0,
    )


def test_perpendicular_distance_ignores_sideways_offset(params):
    straight = RaycastHit((8.0, 2.5), (8, 2), Direction.WEST)
    sideways = RaycastHit((8.0, 4.0), (8, 4), Direction.WEST)

    assert perpendicular_distance(straight, params) == pytest.approx(3.5)
    assert perpendicular_distance(sideways, params) == pytest.approx(3.5)


def test_side_shade():
    assert side_shade(Direction.EAST) == 1.0
    assert side_shade(Direction.WEST) == 1.0
    assert side_shade(Direction.NORTH) == NS_SHADE_FACTOR
    assert side_shade(Direction.SOUTH) == NS_SHADE_FACTOR


def test_column_spans(params):
    hits = [
        None,
        RaycastHit((5.5, 2.5), (6, 2), Direction.WEST),
        RaycastHit((8.5, 3.0), (8, 2), Direction.NORTH),
    ]
    spans = column_spans(hits, params, 100)

    assert spans.shape == (3, 3)
    # Miss: empty slice at the horizon
    assert spans[0, COL_TOP] == spans[0, COL_BOTTOM] == 50
    assert spans[0, COL_SHADE] == 0

    # Distance 1 fills the screen, distance 4 is a quarter of it
    assert (spans[1, COL_TOP], spans[1, COL_BOTTOM]) == (0, 100)
    assert (spans[2, COL_TOP], spans[2, COL_BOTTOM]) == (38, 62)

    # Nearer and East/West facing is brighter
    assert spans[1, COL_SHADE] > spans[2, COL_SHADE]


def test_column_spans_clip_to_screen(params):
    hits = [RaycastHit((4.6, 2.5), (5, 2), Direction.WEST)]
    spans = column_spans(hits, params, 60)
    assert (spans[0, COL_TOP], spans[0, COL_BOTTOM]) == (0, 60)


def test_column_spans_from_camera(bordered_room):
    params = CameraParams.from_angle((4.5, 2.5), 0.0, 40, 20.0, 1.0)
    spans = column_spans(raycast_camera(bordered_room, params), params, 80)

    assert spans.shape == (40, 3)
    assert np.all(spans[:, COL_TOP] < spans[:, COL_BOTTOM])


def test_spans_to_ascii(params):
    hits = [None, RaycastHit((5.5, 2.5), (6, 2), Direction.WEST), None]
    text = spans_to_ascii(column_spans(hits, params, 4), 4)

    rows = text.split("\n")
    assert len(rows) == 4
    assert all(len(row) == 3 for row in rows)
    assert all(row[0] == " " and row[2] == " " for row in rows)
    assert all(row[1] != " " for row in rows)
