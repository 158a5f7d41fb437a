"""Build a floor plan from a JSON file without running the API.

The plan file lists the plot and the rooms to add, in order::

    {"plot": {"length": 50, "width": 30},
     "rooms": [{"type": "master_bedroom"},
               {"type": "living_room", "preferences": {"is_combined": true}}]}

Each room is selected (resetting size and flags to its rule defaults), then
any explicit size or flags are applied before it is added.
"""
import argparse
import json
import logging
import sys
from typing import Dict, Optional

from pydantic import ValidationError

from Generate.params import PlanRequest
from Generate.registry import RoomRegistry, describe_room
from Generate.rules import RuleCatalog, UnknownRoomType, default_catalog
from render.export import export_png
from render.render_svg import render_floor_plan_svg

log = logging.getLogger(__name__)


def build_plan(request: PlanRequest, catalog: Optional[RuleCatalog] = None) -> RoomRegistry:
    registry = RoomRegistry(catalog if catalog is not None else default_catalog(), plot=request.plot)
    for entry in request.rooms:
        registry.select_room_type(entry.type)
        registry.update_draft(length=entry.length, width=entry.width, **entry.preferences.changes())
        registry.add_room()
    return registry


def write_outputs(layout: Dict, out_prefix: str, png: bool = True) -> Dict[str, Optional[str]]:
    json_path = out_prefix + ".json"
    svg_path = out_prefix + ".svg"
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(layout, f, indent=2)
    render_floor_plan_svg(layout, svg_path)
    png_path = None
    if png and export_png(layout, out_prefix + ".png") is not None:
        png_path = out_prefix + ".png"
    return {"json": json_path, "svg": svg_path, "png": png_path}


def main():
    ap = argparse.ArgumentParser(description="Generate a Vastu floor plan from a plan file")
    ap.add_argument("--plan_json", type=str, required=True)
    ap.add_argument("--out_prefix", type=str, default="floor_plan")
    ap.add_argument("--no_png", action="store_true", help="Skip the PNG export")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        with open(args.plan_json, "r", encoding="utf-8") as f:
            request = PlanRequest.model_validate(json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        log.error("Failed to read plan file %s: %s", args.plan_json, e)
        sys.exit(1)

    try:
        registry = build_plan(request)
    except (UnknownRoomType, TypeError) as e:
        log.error("Invalid room in %s: %s", args.plan_json, e)
        sys.exit(1)

    for room in registry.rooms:
        print(f"{room.id:>12}  {describe_room(room)}")

    paths = write_outputs(registry.to_layout(), args.out_prefix, png=not args.no_png)
    print(f"Saved layout JSON to {paths['json']}")
    print(f"Saved SVG to {paths['svg']}")
    if paths["png"]:
        print(f"Saved PNG to {paths['png']}")


if __name__ == "__main__":
    main()
