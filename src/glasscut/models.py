from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class RingRole:
    """Where a seed came from.

    ``kind`` is ``"primary"`` for seeds on the planned angle/ring grid
    (``ring_index`` is the ring they were sampled from) or ``"fill"`` for
    synthetic outer-fill seeds (``ring_index`` is ``None``).
    """

    kind: str
    ring_index: Optional[int] = None

    @classmethod
    def primary(cls, ring_index: int) -> "RingRole":
        return cls("primary", ring_index)

    @classmethod
    def fill(cls) -> "RingRole":
        return cls("fill")

    @property
    def is_primary(self) -> bool:
        return self.kind == "primary"

    @property
    def is_fill(self) -> bool:
        return self.kind == "fill"

    def is_innermost(self) -> bool:
        return self.kind == "primary" and self.ring_index == 0


@dataclass(frozen=True)
class SamplePlan:
    """Angles (radians, ``[0, 2π)``) and ring radii (mm) for one pass."""

    angles: Tuple[float, ...] = ()
    rings: Tuple[float, ...] = ()

    def site_count(self) -> int:
        return len(self.angles) * len(self.rings)


@dataclass(frozen=True)
class Seed:
    x: float
    y: float
    source_radius: float
    source_angle: float
    ring_role: RingRole

    @property
    def position(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class Cell:
    """Clipped Voronoi polygon owned by one seed.

    *seed_index* indexes the seed list the cell was computed from.
    *polygon* is ordered counter-clockwise with vertices rounded to fixed
    precision; the closing vertex is not repeated.
    """

    seed_index: int
    polygon: Tuple[Point, ...]
    ring_role: RingRole

    def vertex_count(self) -> int:
        return len(self.polygon)

    def edges(self):
        """Yield ``(p0, p1)`` for each boundary segment, in polygon order."""
        n = len(self.polygon)
        for i in range(n):
            yield self.polygon[i], self.polygon[(i + 1) % n]


@dataclass(frozen=True)
class ExtraCut:
    """Advisory cut across an oversized cell, midpoint to midpoint."""

    start: Point
    end: Point
    cell_index: int


@dataclass(frozen=True)
class PathRecord:
    """One polyline handed to a serializer.

    *kind* is ``"normal"`` for tessellation edges and ``"advisory-cut"`` for
    extra cuts.  *is_tab* marks the spliced connector outline.
    """

    points: Tuple[Point, ...]
    kind: str = "normal"
    is_tab: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "is_tab": self.is_tab,
            "points": [list(p) for p in self.points],
        }


@dataclass(frozen=True)
class Frame:
    """The outer rectangle, in millimetres."""

    width: float
    height: float
    corner_radius: float = 0.0
    stroke_width: float = 0.2


NORMAL = "normal"
ADVISORY_CUT = "advisory-cut"
RECORD_KINDS = (NORMAL, ADVISORY_CUT)
