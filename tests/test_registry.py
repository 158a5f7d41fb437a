import pytest
from pydantic import ValidationError

from Generate.params import PlotDimensions, Preferences
from Generate.registry import RoomRegistry, describe_room
from Generate.rules import UnknownRoomType, default_catalog


@pytest.fixture()
def registry():
    return RoomRegistry(default_catalog(), plot=PlotDimensions(length=50, width=30))


def test_initial_draft_is_master_bedroom(registry):
    draft = registry.draft
    assert draft.type == "master_bedroom"
    assert (draft.length, draft.width) == (12, 15)
    assert draft.preferences == Preferences(has_attached_washroom=True)
    assert registry.rooms == ()


def test_select_room_type_resets_draft(registry):
    registry.update_draft(length=99, width=99, is_open=True)
    draft = registry.select_room_type("kitchen")
    assert (draft.length, draft.width) == (8, 10)
    assert draft.preferences == Preferences(
        has_attached_washroom=False, is_open=False, is_inside=True, is_combined=False
    )


def test_select_unknown_type_raises(registry):
    with pytest.raises(UnknownRoomType):
        registry.select_room_type("garage")
    assert registry.draft.type == "master_bedroom"


def test_update_draft_changes_only_named_fields(registry):
    registry.select_room_type("staircase")
    draft = registry.update_draft(width=4, is_inside=False)
    assert (draft.length, draft.width) == (6, 4)
    assert draft.preferences.is_inside is False
    assert draft.preferences.is_open is False


def test_update_draft_rejects_unknown_flag(registry):
    with pytest.raises(TypeError):
        registry.update_draft(has_garden=True)


def test_add_plain_room(registry):
    registry.select_room_type("kitchen")
    added = registry.add_room()
    assert len(added) == 1
    room = added[0]
    assert room.id == "1"
    assert room.type == "kitchen"
    assert room.direction == "southeast"
    assert (room.position.x, room.position.y) == (0, 42)
    assert registry.rooms == (room,)


def test_attached_washroom_is_added_east_of_parent(registry):
    added = registry.add_room()
    assert [r.id for r in added] == ["1", "1-washroom"]
    parent, washroom = added
    assert (parent.position.x, parent.position.y) == (15, 38)
    assert washroom.type == "bathroom"
    assert washroom.direction == "northwest"
    assert (washroom.size.length, washroom.size.width) == (5, 5)
    assert (washroom.position.x, washroom.position.y) == (30, 38)
    assert washroom.preferences is None
    assert len(registry.rooms) == 2


def test_washroom_offset_uses_draft_width(registry):
    registry.update_draft(width=10)
    parent, washroom = registry.add_room()
    assert parent.position.x == 20
    assert washroom.position.x == 30


def test_bedroom_can_opt_into_washroom(registry):
    registry.select_room_type("bedroom")
    registry.update_draft(has_attached_washroom=True)
    added = registry.add_room()
    assert [r.type for r in added] == ["bedroom", "bathroom"]


def test_combined_living_room_becomes_common_area(registry):
    registry.select_room_type("living_room")
    registry.update_draft(length=3, width=4, is_combined=True)
    added = registry.add_room()
    assert len(added) == 1
    room = added[0]
    assert room.id == "1"
    assert room.type == "common_area"
    assert room.direction == "north"
    assert (room.size.length, room.size.width) == (20, 15)
    assert room.preferences.is_combined is True
    assert (room.position.x, room.position.y) == (7, 0)


def test_uncombined_living_room_stays(registry):
    registry.select_room_type("living_room")
    (room,) = registry.add_room()
    assert room.type == "living_room"


def test_ids_follow_room_count(registry):
    registry.add_room()
    registry.select_room_type("kitchen")
    (kitchen,) = registry.add_room()
    assert kitchen.id == "3"


def test_remove_parent_removes_washroom(registry):
    registry.add_room()
    registry.select_room_type("kitchen")
    registry.add_room()
    removed = registry.remove_room("1")
    assert [r.id for r in removed] == ["1", "1-washroom"]
    assert [r.id for r in registry.rooms] == ["3"]


def test_remove_is_a_prefix_match(registry):
    registry.select_room_type("pooja_room")
    for _ in range(10):
        registry.add_room()
    removed = registry.remove_room("1")
    assert [r.id for r in removed] == ["1", "10"]
    assert len(registry.rooms) == 8


def test_ids_can_repeat_after_removal(registry):
    registry.select_room_type("pooja_room")
    registry.add_room()
    registry.add_room()
    registry.remove_room("1")
    (room,) = registry.add_room()
    assert room.id == "2"
    assert [r.id for r in registry.rooms] == ["2", "2"]


def test_plot_change_does_not_move_existing_rooms(registry):
    registry.select_room_type("bathroom")
    (first,) = registry.add_room()
    registry.set_plot_dimensions(PlotDimensions(length=10, width=10))
    (second,) = registry.add_room()
    assert registry.rooms[0].position == first.position
    assert (first.position.x, second.position.x) == (25, 5)


def test_to_layout_shape(registry):
    registry.add_room()
    layout = registry.to_layout()
    assert layout["plot"] == {"length": 50, "width": 30}
    rooms = layout["layout"]["rooms"]
    assert rooms[0]["position"] == {"x": 15, "y": 38}
    assert rooms[0]["size"] == {"length": 12, "width": 15}
    assert rooms[1]["preferences"] is None


def test_describe_room(registry):
    parent, washroom = registry.add_room()
    assert describe_room(parent) == "Master Bedroom (12m × 15m) [southwest] (Attached Washroom) (Inside)"
    assert describe_room(washroom) == "Bathroom (5m × 5m) [northwest]"


def test_update_draft_validates_flag_values(registry):
    draft = registry.update_draft(has_attached_washroom="false", length="14")
    assert draft.preferences.has_attached_washroom is False
    assert draft.length == 14
    with pytest.raises(ValidationError):
        registry.update_draft(is_open="sometimes")
    assert registry.draft.preferences.is_open is False
