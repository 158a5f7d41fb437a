import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Tuple

import requests
from requests.exceptions import RequestException

from Generate.constants import EXPORT_FILENAME


def parse_plot_number(value: str):
    """Whole numbers stay ``int`` so integer plots give integer positions."""
    number = float(value)
    return int(number) if number.is_integer() else number


def parse_room_spec(spec: str) -> Tuple[str, Dict[str, bool]]:
    """``kitchen:open`` -> ``("kitchen", {"is_open": True})``.

    Flags after the colon are comma separated; a ``no-`` prefix clears a flag.
    Accepted flag names are ``washroom``, ``open``, ``inside`` and ``combined``.
    """
    names = {
        "washroom": "has_attached_washroom",
        "open": "is_open",
        "inside": "is_inside",
        "combined": "is_combined",
    }
    room_type, _, flag_part = spec.partition(":")
    flags: Dict[str, bool] = {}
    for raw in filter(None, (f.strip() for f in flag_part.split(","))):
        value = not raw.startswith("no-")
        key = raw[3:] if raw.startswith("no-") else raw
        if key not in names:
            raise argparse.ArgumentTypeError(f"Unknown room flag '{raw}' in '{spec}'")
        flags[names[key]] = value
    return room_type.strip(), flags


def main(argv: List[str] = None):
    parser = argparse.ArgumentParser(description="Build a Vastu floor plan via the API")
    parser.add_argument(
        "--api",
        default="http://localhost:8000",
        help="Base URL of the floor plan API",
    )
    parser.add_argument("--api-key", default="testkey", help="API key for authentication")
    parser.add_argument("--plot-length", type=parse_plot_number, default=None, help="Plot length in metres")
    parser.add_argument("--plot-width", type=parse_plot_number, default=None, help="Plot width in metres")
    parser.add_argument(
        "--room",
        action="append",
        default=[],
        type=parse_room_spec,
        help="Room to add as TYPE[:flag,...], e.g. master_bedroom:no-washroom; repeatable",
    )
    parser.add_argument("--outdir", default="generated_cli", help="Directory to save outputs")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    log = logging.getLogger(__name__)

    base = args.api.rstrip("/")
    headers = {"X-API-Key": args.api_key}
    session = requests.Session()
    session.headers.update(headers)

    try:
        if args.plot_length is not None or args.plot_width is not None:
            resp = session.get(f"{base}/plan")
            resp.raise_for_status()
            plot = dict(resp.json()["plot"])
            if args.plot_length is not None:
                plot["length"] = args.plot_length
            if args.plot_width is not None:
                plot["width"] = args.plot_width
            resp = session.put(f"{base}/plot", json=plot)
            resp.raise_for_status()

        for room_type, flags in args.room:
            resp = session.post(f"{base}/draft/type", json={"type": room_type})
            resp.raise_for_status()
            if flags:
                resp = session.patch(f"{base}/draft", json=flags)
                resp.raise_for_status()
            resp = session.post(f"{base}/rooms")
            resp.raise_for_status()
            for room in resp.json()["added"]:
                print(f"Added {room['type']} #{room['id']} at ({room['position']['x']}, {room['position']['y']})")

        resp = session.get(f"{base}/plan")
        resp.raise_for_status()
        plan = resp.json()
        export_resp = session.get(f"{base}/export")
        export_resp.raise_for_status()
    except RequestException as e:
        print(f"Request to {base} failed: {e}")
        return

    os.makedirs(args.outdir, exist_ok=True)
    json_path = os.path.join(args.outdir, "plan.json")
    try:
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(plan, f, indent=2)
    except OSError as e:
        log.error("Failed to write plan JSON to %s: %s", json_path, e)
        sys.exit(1)
    print(f"Saved plan JSON to {json_path}")

    if export_resp.status_code == 204 or not export_resp.content:
        log.warning("Export produced no image")
        return
    png_path = os.path.join(args.outdir, EXPORT_FILENAME)
    try:
        with open(png_path, "wb") as f:
            f.write(export_resp.content)
    except OSError as e:
        log.error("Failed to write image to %s: %s", png_path, e)
        sys.exit(1)
    print(f"Saved floor plan image to {png_path}")


if __name__ == "__main__":
    main()
