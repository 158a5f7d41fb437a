"""PNG snapshot of the rendered canvas.

Export is best effort: any rendering failure is logged and reported as
``None`` so callers never have to handle it.
"""
import logging
from typing import Dict, Optional

from Generate.constants import EXPORT_FILENAME
from render.render_svg import render_floor_plan_svg

logger = logging.getLogger(__name__)


def export_png(layout_data: Dict, out_png: Optional[str] = None) -> Optional[bytes]:
    """Render the plan to PNG bytes, optionally writing them to ``out_png``."""
    try:
        import cairosvg  # type: ignore

        svg_text = render_floor_plan_svg(layout_data)
        png = cairosvg.svg2png(bytestring=svg_text.encode("utf-8"))
        if out_png:
            with open(out_png, "wb") as f:
                f.write(png)
        return png
    except Exception as exc:
        logger.exception("Error exporting floor plan: %s", exc)
        return None


def content_disposition(filename: str = EXPORT_FILENAME) -> str:
    return f'attachment; filename="{filename}"'
