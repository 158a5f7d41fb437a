import json
import os
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from Generate.constants import PLOT_LENGTH_DEFAULT, PLOT_WIDTH_DEFAULT, VERSION

# Plot units keep the caller's numeric type so integer plots give integer positions.
Number = Union[int, float]

PREFERENCE_FLAGS = ("has_attached_washroom", "is_open", "is_inside", "is_combined")


class PlotDimensions(BaseModel):
    length: Number = PLOT_LENGTH_DEFAULT
    width: Number = PLOT_WIDTH_DEFAULT


class RoomSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: Number
    width: Number


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: Number
    y: Number


class Preferences(BaseModel):
    """All preference flags, each present with its default."""

    model_config = ConfigDict(frozen=True)

    has_attached_washroom: bool = False
    is_open: bool = False
    is_inside: bool = True
    is_combined: bool = False

    def active(self) -> List[str]:
        return [name for name in PREFERENCE_FLAGS if getattr(self, name)]


class RulePreferences(BaseModel):
    """Flags a room type declares; ``None`` means the rule does not offer the flag."""

    model_config = ConfigDict(frozen=True)

    has_attached_washroom: Optional[bool] = None
    is_open: Optional[bool] = None
    is_inside: Optional[bool] = None
    is_combined: Optional[bool] = None

    def declared(self) -> List[str]:
        return [name for name in PREFERENCE_FLAGS if getattr(self, name) is not None]

    def resolve(self) -> Preferences:
        values = {name: getattr(self, name) for name in self.declared()}
        return Preferences(**values)


class Room(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    size: RoomSize
    position: Position
    direction: str
    preferences: Optional[Preferences] = None


class RoomDraft(BaseModel):
    type: str
    length: Number
    width: Number
    preferences: Preferences = Field(default_factory=Preferences)

    @property
    def size(self) -> RoomSize:
        return RoomSize(length=self.length, width=self.width)


class PreferenceUpdate(BaseModel):
    """Flags to change on a draft; omitted flags keep their current value."""

    model_config = ConfigDict(extra="forbid")

    has_attached_washroom: Optional[bool] = None
    is_open: Optional[bool] = None
    is_inside: Optional[bool] = None
    is_combined: Optional[bool] = None

    def changes(self) -> Dict[str, bool]:
        return self.model_dump(exclude_none=True)


class RoomRequest(BaseModel):
    """One room entry of an offline plan file."""

    type: str
    length: Optional[Number] = None
    width: Optional[Number] = None
    preferences: PreferenceUpdate = Field(default_factory=lambda: PreferenceUpdate())


class PlanRequest(BaseModel):
    plot: PlotDimensions = Field(default_factory=PlotDimensions)
    rooms: List[RoomRequest] = Field(default_factory=list)


def emit_plan_schema(path: str) -> None:
    """Write the versioned JSON Schema for offline plan files to the given path."""
    schema = PlanRequest.model_json_schema()
    schema["$id"] = f"urn:vastu-floor-plan:plan:{VERSION}"
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2)
