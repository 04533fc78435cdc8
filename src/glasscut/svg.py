"""SVG serializer for laser cutting.

The document uses a 1:1 millimetre viewBox (``width="Wmm"`` with
``viewBox="0 0 W H"``) so cutters import it at physical size.  Each
:class:`~glasscut.models.PathRecord` becomes one ``<path>``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

import svgwrite

from .models import ADVISORY_CUT, PathRecord, Point
from .pipeline import PuzzleResult

STYLES = {
    "frame": {"stroke": "#222222", "fill": "none"},
    "cut": {"stroke": "#111111", "fill": "none"},
    "tab_highlight": {"stroke": "#f59e42", "fill": "none", "stroke_width": 1.2},
    "advisory_dash": [3, 2],
}


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def path_data(points: Sequence[Point]) -> str:
    """``M x y L x y …`` for a polyline."""
    if not points:
        return ""
    head, *rest = points
    parts = [f"M {_fmt(head[0])} {_fmt(head[1])}"]
    parts.extend(f"L {_fmt(x)} {_fmt(y)}" for x, y in rest)
    return " ".join(parts)


def _record_element(dwg, record: PathRecord, stroke_width: float, highlight: bool):
    if record.is_tab and highlight:
        style = STYLES["tab_highlight"]
        return dwg.path(
            d=path_data(record.points),
            fill=style["fill"],
            stroke=style["stroke"],
            stroke_width=style["stroke_width"],
        )
    style = STYLES["cut"]
    element = dwg.path(
        d=path_data(record.points),
        fill=style["fill"],
        stroke=style["stroke"],
        stroke_width=stroke_width,
    )
    if record.kind == ADVISORY_CUT and not record.is_tab:
        element.dasharray(STYLES["advisory_dash"])
    return element


def build_drawing(result: PuzzleResult, filename: str = "puzzle.svg") -> svgwrite.Drawing:
    frame = result.frame
    params = result.params
    w, h = frame.width, frame.height
    dwg = svgwrite.Drawing(
        filename,
        size=(f"{_fmt(w)}mm", f"{_fmt(h)}mm"),
        viewBox=f"0 0 {_fmt(w)} {_fmt(h)}",
    )
    dwg.add(dwg.rect(
        insert=(0, 0),
        size=(w, h),
        rx=frame.corner_radius,
        ry=frame.corner_radius,
        fill=STYLES["frame"]["fill"],
        stroke=STYLES["frame"]["stroke"],
        stroke_width=frame.stroke_width,
    ))
    cuts = dwg.add(dwg.g(id="cuts"))
    for record in result.records:
        cuts.add(_record_element(dwg, record, frame.stroke_width, params.highlight_tabs))
    return dwg


def build_svg(result: PuzzleResult) -> str:
    """Full SVG document as a string."""
    return build_drawing(result).tostring()


def save_svg(result: PuzzleResult, path: Union[str, Path]) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    dwg = build_drawing(result, str(out))
    dwg.saveas(str(out), pretty=True)
    return out


def default_filename(result: PuzzleResult) -> str:
    """``glasscut-<grid_w>x<grid_h>-<seed>.svg``."""
    p = result.params
    return f"glasscut-{p.grid_width}x{p.grid_height}-{p.seed}.svg"
