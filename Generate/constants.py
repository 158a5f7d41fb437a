# Centralized constants and defaults for floor plan generation

VERSION = "v1"

# Canvas
CELL_SIZE = 40  # pixels per plot unit
CANVAS_BACKGROUND = "#f9fafb"
ROOM_BORDER_WIDTH = 2
ROOM_CORNER_RADIUS = 4
ROOM_FONT_SIZE = 14
ROOM_SUB_FONT_SIZE = 11
COMPASS_COLOR = "#6b7280"

ROOM_COLORS = {
    "master_bedroom": "#90cdf4",
    "bedroom": "#63b3ed",
    "kitchen": "#9ae6b4",
    "living_room": "#fbd38d",
    "dining_room": "#fbd38d",
    "pooja_room": "#feb2b2",
    "bathroom": "#e9d8fd",
    "staircase": "#cbd5e0",
    "common_area": "#fbd38d",
}
ROOM_COLOR_FALLBACK = "#e2e8f0"

# Plot defaults (plot units)
PLOT_LENGTH_DEFAULT = 50
PLOT_WIDTH_DEFAULT = 30

# Room registry
INITIAL_ROOM_TYPE = "master_bedroom"
COMBINED_ROOM_TYPE = "common_area"
WASHROOM_TYPE = "bathroom"
WASHROOM_ID_SUFFIX = "-washroom"
WASHROOM_DIRECTION = "northwest"
COMBINED_DIRECTION = "north"

# Labels drawn on the canvas for active preference flags
CANVAS_FLAG_LABELS = {
    "has_attached_washroom": "Attached Bath",
    "is_open": "Open Layout",
    "is_inside": "Inside",
    "is_combined": "Combined",
}

# Labels used in the room list
LIST_FLAG_LABELS = {
    "has_attached_washroom": "Attached Washroom",
    "is_open": "Open Layout",
    "is_inside": "Inside",
    "is_combined": "Combined",
}

# Export
EXPORT_FILENAME = "floor-plan.png"
