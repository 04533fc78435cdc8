"""Geometry helper functions used across the package."""

from __future__ import annotations

import math
from typing import Callable, List, Sequence

from .hashing import COORD_PRECISION
from .models import Point

FRAME_TOLERANCE = 1e-6


def round_point(p: Point, precision: int = COORD_PRECISION) -> Point:
    """Round both coordinates to *precision* decimals (``-0.0`` → ``0.0``)."""
    return (round(p[0], precision) + 0.0, round(p[1], precision) + 0.0)


def point_less(a: Point, b: Point) -> bool:
    """Lexicographic ``a < b`` on ``(x, y)``."""
    return a[0] < b[0] or (a[0] == b[0] and a[1] < b[1])


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


def lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def polygon_signed_area(polygon: Sequence[Point]) -> float:
    """Signed area via the shoelace formula (positive when CCW)."""
    n = len(polygon)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x0, y0 = polygon[i]
        x1, y1 = polygon[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area / 2.0


def polygon_area(polygon: Sequence[Point]) -> float:
    return abs(polygon_signed_area(polygon))


def polygon_centroid(polygon: Sequence[Point]) -> Point:
    """Vertex mean of *polygon* (``(0, 0)`` when empty)."""
    if not polygon:
        return (0.0, 0.0)
    n = len(polygon)
    return (sum(p[0] for p in polygon) / n, sum(p[1] for p in polygon) / n)


def order_ccw(points: Sequence[Point]) -> List[Point]:
    """Sort the vertices of a convex polygon counter-clockwise about their mean."""
    cx, cy = polygon_centroid(points)
    return sorted(points, key=lambda p: math.atan2(p[1] - cy, p[0] - cx))


def dedupe_ring(points: Sequence[Point]) -> List[Point]:
    """Drop consecutive duplicates, including a repeated closing vertex."""
    out: List[Point] = []
    for p in points:
        if not out or p != out[-1]:
            out.append(p)
    while len(out) > 1 and out[0] == out[-1]:
        out.pop()
    return out


# ═══════════════════════════════════════════════════════════════════
# Rectangle clipping (Sutherland–Hodgman)
# ═══════════════════════════════════════════════════════════════════


def _cross_x(p: Point, q: Point, x: float) -> Point:
    # Interpolate from the lexicographically smaller endpoint so a segment
    # shared by two cells yields the same intersection from either side.
    if point_less(q, p):
        p, q = q, p
    t = (x - p[0]) / (q[0] - p[0])
    return (x, p[1] + (q[1] - p[1]) * t)


def _cross_y(p: Point, q: Point, y: float) -> Point:
    if point_less(q, p):
        p, q = q, p
    t = (y - p[1]) / (q[1] - p[1])
    return (p[0] + (q[0] - p[0]) * t, y)


def _clip_against(
    polygon: Sequence[Point],
    inside: Callable[[Point], bool],
    intersect: Callable[[Point, Point], Point],
) -> List[Point]:
    out: List[Point] = []
    n = len(polygon)
    for i in range(n):
        cur = polygon[i]
        prev = polygon[i - 1]
        if inside(cur):
            if not inside(prev):
                out.append(intersect(prev, cur))
            out.append(cur)
        elif inside(prev):
            out.append(intersect(prev, cur))
    return out


def clip_polygon_to_rect(
    polygon: Sequence[Point],
    width: float,
    height: float,
) -> List[Point]:
    """Clip a convex polygon to ``[0, width] × [0, height]``.

    Vertices created on the frame carry the exact frame coordinate.
    Returns ``[]`` when nothing survives.
    """
    clipped: List[Point] = list(polygon)
    for inside, intersect in (
        (lambda p: p[0] >= 0.0, lambda p, q: _cross_x(p, q, 0.0)),
        (lambda p: p[0] <= width, lambda p, q: _cross_x(p, q, width)),
        (lambda p: p[1] >= 0.0, lambda p, q: _cross_y(p, q, 0.0)),
        (lambda p: p[1] <= height, lambda p, q: _cross_y(p, q, height)),
    ):
        if not clipped:
            return []
        clipped = _clip_against(clipped, inside, intersect)
    return clipped


def clamp_point(p: Point, width: float, height: float) -> Point:
    return (min(max(p[0], 0.0), width), min(max(p[1], 0.0), height))


def is_frame_edge(
    p0: Point,
    p1: Point,
    width: float,
    height: float,
    tol: float = FRAME_TOLERANCE,
) -> bool:
    """True when both endpoints lie on the same side of the outer frame."""
    return (
        (abs(p0[0]) < tol and abs(p1[0]) < tol)
        or (abs(p0[1]) < tol and abs(p1[1]) < tol)
        or (abs(p0[0] - width) < tol and abs(p1[0] - width) < tol)
        or (abs(p0[1] - height) < tol and abs(p1[1] - height) < tol)
    )
