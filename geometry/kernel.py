from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass
class Rect:
    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    def scaled(self, factor: float) -> "Rect":
        return Rect(self.x * factor, self.y * factor, self.w * factor, self.h * factor)


def room_to_rect(room: Dict) -> Rect:
    """Rect for a room dict: x/y from ``position``, w from width, h from length."""
    pos = room.get("position") or {}
    size = room.get("size") or {}
    return Rect(
        float(pos.get("x", 0)),
        float(pos.get("y", 0)),
        float(size.get("width", 0)),
        float(size.get("length", 0)),
    )
