"""Interlocking tab synthesis.

A tab is decided from nothing but one edge's endpoints and the global
:class:`TabParams`.  All discrete choices come from independent bit
fields of a single 64-bit edge hash:

====== ===== ==================================================
bits   width choice
====== ===== ==================================================
0–15   16    centre offset: none / forward / backward (⅓ each)
16–31  16    shape: ThreeArm ⅔, Triangle ⅙, ZShape ⅙
32     1     ZShape: which third-point is displaced
33     1     ZShape: displacement side
====== ===== ==================================================

The hash is taken over the canonical endpoints, so an edge makes the
same choices whichever direction it is walked.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

from .edges import edge_hash
from .geometry import distance, is_frame_edge, lerp
from .hashing import bit_field, unit_field
from .models import Point

# Absolute cap on tab height, mm.
MAX_TAB_HEIGHT = 6.0
# Offset magnitude per unit of position jitter, as a fraction of edge length.
OFFSET_FRACTION = 0.2
Z_DISPLACEMENT = 0.8

THREE_ARM = "three-arm"
TRIANGLE = "triangle"
Z_SHAPE = "z-shape"


@dataclass(frozen=True)
class TabParams:
    """Global tab shape parameters.

    Attributes
    ----------
    min_size : float
        Shortest edge (mm) that may carry a tab, and the smallest
        renderable tab dimension.
    relative_width : float
        Tab base width as a fraction of edge length.
    relative_height : float
        Tab height as a fraction of edge length (capped at 6 mm).
    angle_degrees : float
        Lateral skew of the three-arm tips.
    position_jitter : float
        Scales the optional centre offset along the edge.
    """

    min_size: float = 1.3
    relative_width: float = 0.35
    relative_height: float = 0.15
    angle_degrees: float = -30.0
    position_jitter: float = 0.5


@dataclass(frozen=True)
class Tab:
    """Anchors shared by every tab shape."""

    kind: ClassVar[str] = ""

    start: Point
    end: Point
    too_small: bool

    def outline(self) -> Tuple[Point, ...]:
        return (self.start, self.end)

    @property
    def center(self) -> Point:
        return lerp(self.start, self.end, 0.5)


@dataclass(frozen=True)
class ThreeArmTab(Tab):
    """Trapezoidal key: two tips raised off the edge."""

    kind: ClassVar[str] = THREE_ARM

    left_tip: Point = (0.0, 0.0)
    right_tip: Point = (0.0, 0.0)

    def outline(self) -> Tuple[Point, ...]:
        return (self.start, self.left_tip, self.right_tip, self.end)


@dataclass(frozen=True)
class TriangleTab(Tab):
    kind: ClassVar[str] = TRIANGLE

    tip: Point = (0.0, 0.0)

    def outline(self) -> Tuple[Point, ...]:
        return (self.start, self.tip, self.end)


@dataclass(frozen=True)
class ZShapeTab(Tab):
    """Z connector: one of the two third-points leaves the edge line."""

    kind: ClassVar[str] = Z_SHAPE

    mid1: Point = (0.0, 0.0)
    mid2: Point = (0.0, 0.0)

    def outline(self) -> Tuple[Point, ...]:
        return (self.start, self.mid1, self.mid2, self.end)


# ═══════════════════════════════════════════════════════════════════
# Hash-driven choices
# ═══════════════════════════════════════════════════════════════════


def offset_mode(h: int) -> int:
    """``0`` (centred), ``1`` (forward) or ``-1`` (backward)."""
    u = unit_field(h, 0, 16)
    if u < 1.0 / 3.0:
        return 0
    if u < 2.0 / 3.0:
        return 1
    return -1


def shape_kind(h: int) -> str:
    u = unit_field(h, 16, 16)
    if u < 2.0 / 3.0:
        return THREE_ARM
    if u < 5.0 / 6.0:
        return TRIANGLE
    return Z_SHAPE


# ═══════════════════════════════════════════════════════════════════
# Synthesis
# ═══════════════════════════════════════════════════════════════════


def generate_edge_tab(p0: Point, p1: Point, params: TabParams) -> Optional[Tab]:
    """Tab for the edge *p0* → *p1*, or ``None`` when the edge is too short.

    The returned tab may still be flagged ``too_small``; callers then
    draw the plain edge.
    """
    length = distance(p0, p1)
    if length < params.min_size or length == 0.0:
        return None

    h = edge_hash(p0, p1)
    tx = (p1[0] - p0[0]) / length
    ty = (p1[1] - p0[1]) / length
    nx, ny = -ty, tx

    offset = offset_mode(h) * params.position_jitter * OFFSET_FRACTION * length
    cx = (p0[0] + p1[0]) / 2.0 + tx * offset
    cy = (p0[1] + p1[1]) / 2.0 + ty * offset

    base_width = params.relative_width * length
    height = max(-MAX_TAB_HEIGHT, min(MAX_TAB_HEIGHT, params.relative_height * length))
    skew = math.tan(math.radians(params.angle_degrees)) * abs(height)
    half = base_width / 2.0

    start = (cx - tx * half, cy - ty * half)
    end = (cx + tx * half, cy + ty * half)
    too_small = min(base_width, abs(height)) < params.min_size

    kind = shape_kind(h)
    if kind == TRIANGLE:
        tip = (cx + nx * height, cy + ny * height)
        return TriangleTab(start, end, too_small, tip=tip)

    if kind == Z_SHAPE:
        mid1 = lerp(start, end, 1.0 / 3.0)
        mid2 = lerp(start, end, 2.0 / 3.0)
        lift = Z_DISPLACEMENT * height * (1.0 if bit_field(h, 33, 1) == 0 else -1.0)
        if bit_field(h, 32, 1) == 0:
            mid1 = (mid1[0] + nx * lift, mid1[1] + ny * lift)
        else:
            mid2 = (mid2[0] + nx * lift, mid2[1] + ny * lift)
        return ZShapeTab(start, end, too_small, mid1=mid1, mid2=mid2)

    inset = half - skew
    left_tip = (cx - tx * inset + nx * height, cy - ty * inset + ny * height)
    right_tip = (cx + tx * inset + nx * height, cy + ty * inset + ny * height)
    return ThreeArmTab(start, end, too_small, left_tip=left_tip, right_tip=right_tip)


def tab_for_edge(
    p0: Point,
    p1: Point,
    params: TabParams,
    width: float,
    height: float,
) -> Optional[Tab]:
    """Like :func:`generate_edge_tab` but never tabs the outer frame."""
    if is_frame_edge(p0, p1, width, height):
        return None
    return generate_edge_tab(p0, p1, params)
