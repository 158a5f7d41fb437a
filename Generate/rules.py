"""
Vastu directional rules for each room type.

A ``RuleCatalog`` is built once and handed to whatever needs it (the room
registry, the API, the offline generator). It is read-only after
construction.
"""
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from Generate.constants import COMBINED_ROOM_TYPE
from Generate.params import RoomSize, RulePreferences


DIRECTIONS = (
    "north",
    "northeast",
    "east",
    "southeast",
    "south",
    "southwest",
    "west",
    "northwest",
)


class UnknownRoomType(KeyError):
    """Raised when a room type is not part of the catalog."""

    def __init__(self, room_type: str):
        super().__init__(room_type)
        self.room_type = room_type

    def __str__(self) -> str:
        return f"Unknown room type: {self.room_type!r}"


class RoomTypeRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: str
    default_size: RoomSize
    description: str
    preferences: RulePreferences = Field(default_factory=RulePreferences)


def humanize(room_type: str) -> str:
    """``master_bedroom`` -> ``Master Bedroom``."""
    return " ".join(word[:1].upper() + word[1:] for word in room_type.split("_"))


class RuleCatalog:
    def __init__(self, rules: Mapping[str, RoomTypeRule]):
        self._rules = MappingProxyType(dict(rules))

    def lookup(self, room_type: str) -> RoomTypeRule:
        try:
            return self._rules[room_type]
        except KeyError:
            raise UnknownRoomType(room_type) from None

    def __contains__(self, room_type: object) -> bool:
        return room_type in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def types(self) -> List[str]:
        return list(self._rules)

    def selectable_types(self) -> List[str]:
        """Types offered for selection; the combined area is only ever derived."""
        return [t for t in self._rules if t != COMBINED_ROOM_TYPE]

    def option_label(self, room_type: str) -> str:
        rule = self.lookup(room_type)
        return f"{humanize(room_type)} ({rule.direction})"


_VASTU_RULES: Dict[str, dict] = {
    "master_bedroom": {
        "direction": "southwest",
        "default_size": {"length": 12, "width": 15},
        "description": "Master bedroom should be in the Southwest direction for stability and peace.",
        "preferences": {"has_attached_washroom": True},
    },
    "bedroom": {
        "direction": "west",
        "default_size": {"length": 10, "width": 12},
        "description": "Additional bedrooms should be in the West direction.",
        "preferences": {"has_attached_washroom": False},
    },
    "kitchen": {
        "direction": "southeast",
        "default_size": {"length": 8, "width": 10},
        "description": "Kitchen should be in the Southeast direction for positive energy while cooking.",
        "preferences": {"is_open": False},
    },
    "pooja_room": {
        "direction": "northeast",
        "default_size": {"length": 6, "width": 6},
        "description": "Pooja room should be in the Northeast direction for spiritual growth.",
    },
    "bathroom": {
        "direction": "northwest",
        "default_size": {"length": 5, "width": 5},
        "description": "Bathroom should be in the Northwest direction.",
    },
    "living_room": {
        "direction": "north",
        "default_size": {"length": 15, "width": 12},
        "description": "Living room should be in the North or East direction for prosperity.",
        "preferences": {"is_combined": False},
    },
    "dining_room": {
        "direction": "east",
        "default_size": {"length": 10, "width": 12},
        "description": "Dining room should be in the East direction for harmonious meals.",
        "preferences": {"is_combined": False},
    },
    "staircase": {
        "direction": "south",
        "default_size": {"length": 6, "width": 10},
        "description": "Staircase should be in the South or West direction for positive energy flow.",
        "preferences": {"is_inside": True},
    },
    "common_area": {
        "direction": "north",
        "default_size": {"length": 20, "width": 15},
        "description": "Combined living and dining area should be in the North direction.",
    },
}


def default_catalog() -> RuleCatalog:
    """Build the catalog of Vastu placement rules."""
    return RuleCatalog(
        {room_type: RoomTypeRule.model_validate(spec) for room_type, spec in _VASTU_RULES.items()}
    )
