from typing import Dict, List, Optional

import svgwrite

from Generate.constants import (
    CANVAS_BACKGROUND,
    CANVAS_FLAG_LABELS,
    CELL_SIZE,
    COMPASS_COLOR,
    ROOM_BORDER_WIDTH,
    ROOM_COLOR_FALLBACK,
    ROOM_COLORS,
    ROOM_CORNER_RADIUS,
    ROOM_FONT_SIZE,
    ROOM_SUB_FONT_SIZE,
)
from Generate.params import PREFERENCE_FLAGS
from Generate.rules import humanize
from geometry.kernel import room_to_rect


def room_label_lines(room: Dict) -> List[str]:
    """Humanized type, direction, then one line per active preference flag."""
    lines = [humanize(room.get("type", "")), room.get("direction", "")]
    prefs = room.get("preferences") or {}
    lines.extend(CANVAS_FLAG_LABELS[name] for name in PREFERENCE_FLAGS if prefs.get(name))
    return lines


def render_floor_plan_svg(layout_data: Dict, svg_path: Optional[str] = None, scale: int = CELL_SIZE) -> str:
    """Render the plan as an SVG canvas and return the markup.

    The canvas is ``plot.width`` by ``plot.length`` plot units at ``scale``
    pixels per unit, with the compass labels pinned to its edges. Rooms are
    drawn where they were placed, including any part outside the plot.
    When ``svg_path`` is given the drawing is also saved there.
    """
    plot = layout_data.get("plot") or {}
    rooms = (layout_data.get("layout") or {}).get("rooms", [])
    canvas_w = float(plot.get("width", 0)) * scale
    canvas_h = float(plot.get("length", 0)) * scale

    dwg = svgwrite.Drawing(svg_path, profile="full", size=(canvas_w, canvas_h))
    dwg.add(dwg.rect(insert=(0, 0), size=(canvas_w, canvas_h), fill=CANVAS_BACKGROUND))

    # Compass labels
    edge = ROOM_FONT_SIZE * 1.2
    compass = [
        ("North", (canvas_w / 2, edge), "middle"),
        ("South", (canvas_w / 2, canvas_h - edge / 2), "middle"),
        ("West", (edge / 2, canvas_h / 2), "start"),
        ("East", (canvas_w - edge / 2, canvas_h / 2), "end"),
    ]
    for label, insert, anchor in compass:
        dwg.add(dwg.text(label, insert=insert, text_anchor=anchor,
                         font_size=ROOM_FONT_SIZE, font_family="Arial", fill=COMPASS_COLOR))

    for room in rooms:
        rect = room_to_rect(room).scaled(scale)
        group = dwg.g(id=f"room-{room.get('id', '')}")
        group.add(dwg.rect(
            insert=(rect.x, rect.y),
            size=(rect.w, rect.h),
            rx=ROOM_CORNER_RADIUS,
            ry=ROOM_CORNER_RADIUS,
            fill=ROOM_COLORS.get(room.get("type", ""), ROOM_COLOR_FALLBACK),
            stroke="black",
            stroke_opacity=0.1,
            stroke_width=ROOM_BORDER_WIDTH,
        ))

        lines = room_label_lines(room)
        cx, cy = rect.center
        line_h = ROOM_SUB_FONT_SIZE * 1.3
        top = cy - line_h * (len(lines) - 1) / 2
        for i, line in enumerate(lines):
            group.add(dwg.text(
                line,
                insert=(cx, top + i * line_h),
                text_anchor="middle",
                font_size=ROOM_FONT_SIZE if i == 0 else ROOM_SUB_FONT_SIZE,
                font_family="Arial",
                fill="black",
                fill_opacity=0.7 if i == 0 else 0.55,
            ))
        dwg.add(group)

    if svg_path:
        dwg.save()
    return dwg.tostring()
