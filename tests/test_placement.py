import pytest

from Generate.params import PlotDimensions, RoomSize
from geometry.placement import place


PLOT = PlotDimensions(length=50, width=30)
ROOM = RoomSize(length=12, width=15)


@pytest.mark.parametrize(
    "direction, expected",
    [
        ("northeast", (0, 0)),
        ("north", (7, 0)),
        ("northwest", (15, 0)),
        ("east", (0, 12)),
        ("southeast", (0, 38)),
        ("south", (7, 38)),
        ("southwest", (15, 38)),
        ("west", (15, 12)),
    ],
)
def test_direction_table(direction, expected):
    pos = place(direction, PLOT, ROOM)
    assert (pos.x, pos.y) == expected


def test_north_uses_quarter_width():
    pos = place("north", PlotDimensions(length=50, width=30), RoomSize(length=15, width=12))
    assert (pos.x, pos.y) == (7, 0)


def test_southwest_example():
    pos = place("southwest", PlotDimensions(length=50, width=30), RoomSize(length=12, width=15))
    assert (pos.x, pos.y) == (15, 38)


@pytest.mark.parametrize("direction", ["", "North", "up", "south-west", "centre"])
def test_unrecognized_direction_is_origin(direction):
    pos = place(direction, PLOT, ROOM)
    assert (pos.x, pos.y) == (0, 0)


def test_oversized_room_is_not_clamped():
    pos = place("southwest", PlotDimensions(length=10, width=10), RoomSize(length=12, width=15))
    assert (pos.x, pos.y) == (-5, -2)


def test_integer_inputs_give_integer_outputs():
    pos = place("west", PlotDimensions(length=41, width=30), RoomSize(length=10, width=12))
    assert (pos.x, pos.y) == (18, 10)
    assert isinstance(pos.x, int) and isinstance(pos.y, int)


def test_fractional_plot_floors_quarter_offset():
    pos = place("east", PlotDimensions(length=50.5, width=30), ROOM)
    assert pos.y == 12
