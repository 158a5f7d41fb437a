"""Direction-driven room placement.

Corners sit flush on the two edges they name. Cardinal directions sit flush
on their own edge, offset a quarter of the plot along the other axis.
Nothing is clamped: a room larger than the plot gets negative coordinates.

Plot and room sizes follow the screen convention used by the canvas:
``width`` runs along x, ``length`` along y, and the origin is the
north-east corner.
"""
from __future__ import annotations

from Generate.params import PlotDimensions, Position, RoomSize


def _quarter(extent):
    # floor division matches floor(extent / 4) for ints and floats and lets NaN through
    return extent // 4


def place(direction: str, plot: PlotDimensions, room_size: RoomSize) -> Position:
    """Return the top-left position for a room facing ``direction``.

    Unrecognized directions fall back to the origin.
    """
    length, width = plot.length, plot.width

    if direction == "northeast":
        return Position(x=0, y=0)
    if direction == "north":
        return Position(x=_quarter(width), y=0)
    if direction == "northwest":
        return Position(x=width - room_size.width, y=0)
    if direction == "east":
        return Position(x=0, y=_quarter(length))
    if direction == "southeast":
        return Position(x=0, y=length - room_size.length)
    if direction == "south":
        return Position(x=_quarter(width), y=length - room_size.length)
    if direction == "southwest":
        return Position(x=width - room_size.width, y=length - room_size.length)
    if direction == "west":
        return Position(x=width - room_size.width, y=_quarter(length))
    return Position(x=0, y=0)
