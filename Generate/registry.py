"""Room registry: the plan being edited.

Holds the plot, the ordered list of placed rooms and the draft room that the
next ``add_room`` call commits. Positions are computed once, when a room is
added; changing the plot afterwards does not move existing rooms.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from Generate.constants import (
    COMBINED_DIRECTION,
    COMBINED_ROOM_TYPE,
    INITIAL_ROOM_TYPE,
    LIST_FLAG_LABELS,
    WASHROOM_DIRECTION,
    WASHROOM_ID_SUFFIX,
    WASHROOM_TYPE,
)
from Generate.params import (
    PREFERENCE_FLAGS,
    Number,
    PlotDimensions,
    Position,
    Preferences,
    Room,
    RoomDraft,
)
from Generate.rules import RuleCatalog, humanize
from geometry.placement import place

log = logging.getLogger(__name__)


class RoomRegistry:
    def __init__(self, catalog: RuleCatalog, plot: Optional[PlotDimensions] = None):
        self.catalog = catalog
        self.plot = plot if plot is not None else PlotDimensions()
        self._rooms: List[Room] = []
        self.draft: RoomDraft
        self.select_room_type(INITIAL_ROOM_TYPE)

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return tuple(self._rooms)

    def set_plot_dimensions(self, plot: PlotDimensions) -> None:
        self.plot = plot

    def select_room_type(self, room_type: str) -> RoomDraft:
        rule = self.catalog.lookup(room_type)
        self.draft = RoomDraft(
            type=room_type,
            length=rule.default_size.length,
            width=rule.default_size.width,
            preferences=rule.preferences.resolve(),
        )
        return self.draft

    def update_draft(
        self,
        length: Optional[Number] = None,
        width: Optional[Number] = None,
        **flags: bool,
    ) -> RoomDraft:
        """Edit the draft size and preference flags; omitted values are kept."""
        unknown = set(flags) - set(PREFERENCE_FLAGS)
        if unknown:
            raise TypeError(f"Unknown preference flags: {sorted(unknown)}")
        data = self.draft.model_dump()
        if length is not None:
            data["length"] = length
        if width is not None:
            data["width"] = width
        data["preferences"] = Preferences.model_validate({**data["preferences"], **flags})
        self.draft = RoomDraft.model_validate(data)
        return self.draft

    def add_room(self) -> List[Room]:
        """Commit the draft and return the rooms appended to the plan."""
        draft = self.draft
        room_id = str(len(self._rooms) + 1)
        rule = self.catalog.lookup(draft.type)
        position = place(rule.direction, self.plot, draft.size)

        if draft.type == "living_room" and draft.preferences.is_combined:
            combined = self.catalog.lookup(COMBINED_ROOM_TYPE)
            added = [
                Room(
                    id=room_id,
                    type=COMBINED_ROOM_TYPE,
                    size=combined.default_size,
                    position=position,
                    direction=COMBINED_DIRECTION,
                    # only the combined flag is shown on the merged area, so is_inside is cleared
                    preferences=Preferences(is_inside=False, is_combined=True),
                )
            ]
        else:
            added = [
                Room(
                    id=room_id,
                    type=draft.type,
                    size=draft.size,
                    position=position,
                    direction=rule.direction,
                    preferences=draft.preferences,
                )
            ]
            if draft.preferences.has_attached_washroom:
                added.append(
                    Room(
                        id=f"{room_id}{WASHROOM_ID_SUFFIX}",
                        type=WASHROOM_TYPE,
                        size=self.catalog.lookup(WASHROOM_TYPE).default_size,
                        position=Position(x=position.x + draft.width, y=position.y),
                        direction=WASHROOM_DIRECTION,
                    )
                )

        self._rooms.extend(added)
        log.info("Added %s", ", ".join(f"{r.type}#{r.id}" for r in added))
        return added

    def remove_room(self, room_id: str) -> List[Room]:
        """Remove every room whose id starts with ``room_id``."""
        removed = [r for r in self._rooms if r.id.startswith(room_id)]
        self._rooms = [r for r in self._rooms if not r.id.startswith(room_id)]
        if removed:
            log.info("Removed %s", ", ".join(f"{r.type}#{r.id}" for r in removed))
        return removed

    def to_layout(self) -> Dict:
        return {
            "plot": self.plot.model_dump(),
            "layout": {"rooms": [r.model_dump() for r in self._rooms]},
        }


def describe_room(room: Room) -> str:
    """One line for the room list, e.g. ``Kitchen (8m × 10m) [southeast]``."""
    parts = [
        humanize(room.type),
        f"({room.size.length}m × {room.size.width}m)",
        f"[{room.direction}]",
    ]
    if room.preferences is not None:
        parts.extend(f"({LIST_FLAG_LABELS[name]})" for name in room.preferences.active())
    return " ".join(parts)
