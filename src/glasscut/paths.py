"""Path assembly — turn cells, cuts and tabs into tagged polylines.

Each undirected boundary segment is emitted once; segments on the outer
frame are drawn straight and interior curves are clamped inside it.
Interior edges that can carry a renderable tab are split around it: the
curve runs up to the tab's start anchor, the tab outline is emitted as
its own record, and the curve resumes from the end anchor.  Tab outlines
are drawn at :data:`TAB_VISUAL_SCALE` toward their anchor midpoint.

Cells of the innermost primary ring contribute no edges of their own, so
they merge into a single central piece bounded by their neighbours.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .edges import EdgeReconstructor, edge_key, subdivide
from .geometry import clamp_point, is_frame_edge, round_point
from .models import ADVISORY_CUT, NORMAL, Cell, ExtraCut, PathRecord, Point
from .tabs import Tab, TabParams, tab_for_edge

logger = logging.getLogger(__name__)

TAB_VISUAL_SCALE = 0.6


def enumerate_edges(cells: Iterable[Cell]) -> List[Tuple[Point, Point]]:
    """Unique boundary segments in cell order, then polygon order."""
    seen: Set[str] = set()
    edges: List[Tuple[Point, Point]] = []
    for cell in cells:
        if cell.ring_role.is_innermost():
            continue
        for p0, p1 in cell.edges():
            key = edge_key(p0, p1)
            if key in seen:
                continue
            seen.add(key)
            edges.append((p0, p1))
    return edges


def closest_index(polyline: Sequence[Point], pt: Point) -> int:
    best = 0
    best_d = float("inf")
    for i, (x, y) in enumerate(polyline):
        d = (x - pt[0]) ** 2 + (y - pt[1]) ** 2
        if d < best_d:
            best_d = d
            best = i
    return best


def scale_toward(pt: Point, center: Point, factor: float) -> Point:
    return (
        center[0] + (pt[0] - center[0]) * factor,
        center[1] + (pt[1] - center[1]) * factor,
    )


def splice_tab(
    polyline: Sequence[Point],
    tab: Tab,
    scale: float = TAB_VISUAL_SCALE,
) -> Tuple[List[List[Point]], List[Point]]:
    """Split *polyline* around *tab*.

    Returns ``(plain_parts, tab_outline)``.  Both polyline endpoints are
    always kept so pieces still meet at their corners.
    """
    center = tab.center
    outline = [scale_toward(p, center, scale) for p in tab.outline()]
    s_start, s_end = outline[0], outline[-1]

    last = len(polyline) - 1
    i_start = closest_index(polyline, tab.start)
    i_end = max(closest_index(polyline, tab.end), i_start)

    if i_start == 0:
        before = [polyline[0], s_start]
    else:
        before = list(polyline[: i_start + 1])
        before[-1] = s_start
    if i_end == last:
        after = [s_end, polyline[last]]
    else:
        after = list(polyline[i_end:])
        after[0] = s_end

    parts = [part for part in (before, after) if len(part) > 1]
    return parts, outline


def edge_records(
    p0: Point,
    p1: Point,
    reconstructor: EdgeReconstructor,
    tab_params: Optional[TabParams],
    width: float,
    height: float,
    kind: str = NORMAL,
) -> List[PathRecord]:
    """Records for one edge: the plain curve, or curve parts plus a tab.

    Edges lying on the outer frame stay straight and never carry a tab.
    Interior curve samples are clamped into ``[0, width] × [0, height]``.
    """
    if is_frame_edge(p0, p1, width, height):
        a, b = round_point(p0), round_point(p1)
        return [PathRecord(tuple(subdivide(a, b, reconstructor.segments)), kind)]

    polyline = [clamp_point(p, width, height) for p in reconstructor.reconstruct(p0, p1)]
    tab = None
    if tab_params is not None:
        tab = tab_for_edge(polyline[0], polyline[-1], tab_params, width, height)
    if tab is None or tab.too_small:
        return [PathRecord(tuple(polyline), kind)]

    parts, outline = splice_tab(polyline, tab)
    records = [PathRecord(tuple(part), kind) for part in parts]
    records.append(PathRecord(tuple(outline), kind, is_tab=True))
    return records


def build_records(
    cells: Sequence[Cell],
    extra_cuts: Sequence[ExtraCut],
    reconstructor: EdgeReconstructor,
    tab_params: Optional[TabParams],
    width: float,
    height: float,
) -> List[PathRecord]:
    """All polyline records: tessellation edges first, then advisory cuts.

    Pass ``tab_params=None`` to emit plain edges only.
    """
    records: List[PathRecord] = []
    edges = enumerate_edges(cells)
    for p0, p1 in edges:
        records.extend(edge_records(p0, p1, reconstructor, tab_params, width, height))
    for cut in extra_cuts:
        records.extend(
            edge_records(
                cut.start, cut.end, reconstructor, tab_params, width, height,
                kind=ADVISORY_CUT,
            )
        )
    logger.debug(
        "paths: %d edges, %d cuts -> %d records (%d tabs)",
        len(edges), len(extra_cuts), len(records),
        sum(1 for r in records if r.is_tab),
    )
    return records
