"""Radially biased Voronoi tessellation clipped to the canvas rectangle.

Seeds are first pushed towards or away from a focal origin
(:func:`apply_radial_bias`); only the biased positions are fed to Qhull.
Four far-away sentinel sites guarantee that every real cell is bounded,
so each cell can be clipped to the rectangle with a plain convex clip.

Output cells keep the index and ring role of the seed they came from, so
downstream stages never rely on list position.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import QhullError, Voronoi

from .geometry import (
    clamp_point,
    clip_polygon_to_rect,
    dedupe_ring,
    order_ccw,
    polygon_area,
    round_point,
)
from .hashing import quantize
from .models import Cell, Point, Seed

logger = logging.getLogger(__name__)

MIN_CELL_AREA = 1e-9
_SENTINEL_SCALE = 10.0


def apply_radial_bias(
    points: Sequence[Point],
    origin: Tuple[float, float],
    bias_scalar: float = 1.0,
) -> List[Point]:
    """Scale each point's distance from *origin* by ``max(0, bias_scalar)``."""
    ox, oy = origin
    scale = max(0.0, bias_scalar)
    biased: List[Point] = []
    for x, y in points:
        dx = x - ox
        dy = y - oy
        r = math.hypot(dx, dy) * scale
        angle = math.atan2(dy, dx)
        biased.append((ox + r * math.cos(angle), oy + r * math.sin(angle)))
    return biased


def _sentinels(points: Sequence[Point], width: float, height: float) -> List[Point]:
    xs = [p[0] for p in points] + [0.0, width]
    ys = [p[1] for p in points] + [0.0, height]
    cx = (min(xs) + max(xs)) / 2.0
    cy = (min(ys) + max(ys)) / 2.0
    reach = _SENTINEL_SCALE * (max(max(xs) - min(xs), max(ys) - min(ys)) + 1.0)
    return [
        (cx - reach, cy - reach),
        (cx + reach, cy - reach),
        (cx + reach, cy + reach),
        (cx - reach, cy + reach),
    ]


def _finish_polygon(
    raw: Sequence[Point],
    width: float,
    height: float,
) -> Optional[Tuple[Point, ...]]:
    clipped = clip_polygon_to_rect(order_ccw(raw), width, height)
    rounded = dedupe_ring([clamp_point(round_point(p), width, height) for p in clipped])
    if len(rounded) < 3 or polygon_area(rounded) < MIN_CELL_AREA:
        return None
    return tuple(rounded)


def compute_cells(
    seeds: Sequence[Seed],
    width: float,
    height: float,
    *,
    origin: Optional[Tuple[float, float]] = None,
    bias_scalar: float = 1.0,
) -> List[Cell]:
    """One clipped Voronoi :class:`Cell` per surviving seed, in seed order.

    Seeds whose biased position coincides with an earlier seed's get no
    cell.  Degenerate polygons (fewer than 3 vertices after rounding, or
    near-zero area) are dropped.
    """
    if not seeds or width <= 0 or height <= 0:
        return []

    positions = [s.position for s in seeds]
    if origin is not None:
        positions = apply_radial_bias(positions, origin, bias_scalar)

    first_at: Dict[Tuple[int, int], int] = {}
    unique: List[int] = []
    for i, (x, y) in enumerate(positions):
        key = (quantize(x, 9), quantize(y, 9))
        if key in first_at:
            continue
        first_at[key] = i
        unique.append(i)

    sites = [positions[i] for i in unique]
    try:
        vor = Voronoi(np.array(sites + _sentinels(sites, width, height), dtype=float))
    except QhullError as exc:
        logger.warning("voronoi failed for %d sites: %s", len(sites), exc)
        return []

    cells: List[Cell] = []
    dropped = 0
    for k, seed_index in enumerate(unique):
        region = vor.regions[vor.point_region[k]]
        if not region or -1 in region:
            dropped += 1
            continue
        raw = [(float(vor.vertices[v][0]), float(vor.vertices[v][1])) for v in region]
        polygon = _finish_polygon(raw, width, height)
        if polygon is None:
            dropped += 1
            continue
        cells.append(Cell(seed_index, polygon, seeds[seed_index].ring_role))

    logger.debug(
        "tessellation: %d cells from %d seeds (%d duplicate, %d degenerate)",
        len(cells), len(seeds), len(seeds) - len(unique), dropped,
    )
    return cells
