"""Edge reconstruction — canonical keys, subdivision and perturbation.

Every boundary segment is reconstructed exactly once per generation pass
and cached under its :func:`edge_key`.  The polyline is always computed
in canonical direction (lexicographically smaller rounded endpoint
first) from the rounded endpoints, so two cells sharing an edge receive
the same curve no matter which of them asks first or in which direction.

Displacement profile
--------------------
Interior samples at parameter ``t ∈ (0, 1)`` are moved along the unit
normal of the canonical segment by::

    amplitude · sin(πt) · (0.8 + 0.2·sin(2πt)) · wave(t)

where ``sin(πt)`` is the envelope that pins both endpoints, and
``wave`` is either ``sin(2π·frequency·t + phase)`` (``"wave"`` profile,
phase from the edge hash) or seeded value noise keyed by the edge hash
(``"noise"`` profile).
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .geometry import distance, point_less, round_point
from .hashing import hash_points, unit_float
from .models import Point
from .noise import ValueNoise

logger = logging.getLogger(__name__)

PROFILES = ("wave", "noise")


# ═══════════════════════════════════════════════════════════════════
# Canonical identity
# ═══════════════════════════════════════════════════════════════════


def canonical_edge(p0: Point, p1: Point) -> Tuple[Point, Point, bool]:
    """Rounded endpoints in canonical order, plus whether they were swapped."""
    a = round_point(p0)
    b = round_point(p1)
    if point_less(b, a):
        return b, a, True
    return a, b, False


def edge_key(p0: Point, p1: Point) -> str:
    """Direction-independent key ``"x0,y0|x1,y1"`` of an undirected segment."""
    a, b, _ = canonical_edge(p0, p1)
    return f"{a[0]:.6f},{a[1]:.6f}|{b[0]:.6f},{b[1]:.6f}"


def edge_hash(p0: Point, p1: Point) -> int:
    """64-bit hash of the canonical endpoints (direction-independent)."""
    a, b, _ = canonical_edge(p0, p1)
    return hash_points(a, b)


def subdivide(p0: Point, p1: Point, segments: int) -> List[Point]:
    """``segments + 1`` evenly spaced points from *p0* to *p1*.

    ``segments < 2`` returns just the two endpoints.
    """
    if segments < 2:
        return [p0, p1]
    return [
        (p0[0] + (p1[0] - p0[0]) * i / segments, p0[1] + (p1[1] - p0[1]) * i / segments)
        for i in range(segments + 1)
    ]


def envelope(t: float) -> float:
    """Taper that is zero at both endpoints, with a slight asymmetry."""
    return math.sin(math.pi * t) * (0.8 + 0.2 * math.sin(2.0 * math.pi * t))


# ═══════════════════════════════════════════════════════════════════
# Pass-scoped cache
# ═══════════════════════════════════════════════════════════════════


class EdgeCache:
    """Write-once store of reconstructed polylines keyed by edge key.

    Polylines are stored in canonical direction.  One instance belongs to
    exactly one generation pass.
    """

    def __init__(self) -> None:
        self._store: Dict[str, Tuple[Point, ...]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Tuple[Point, ...]]:
        found = self._store.get(key)
        if found is None:
            self.misses += 1
        else:
            self.hits += 1
        return found

    def put(self, key: str, polyline: Sequence[Point]) -> Tuple[Point, ...]:
        # First writer wins for the rest of the pass.
        return self._store.setdefault(key, tuple(polyline))

    def clear(self) -> None:
        self._store.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)


# ═══════════════════════════════════════════════════════════════════
# Reconstructor
# ═══════════════════════════════════════════════════════════════════


class EdgeReconstructor:
    """Subdivide and perturb boundary segments, memoised per pass.

    Parameters
    ----------
    segments : int
        Number of equal steps per edge (``< 2`` keeps edges straight).
    amplitude : float
        Peak normal displacement in mm (``0`` keeps edges straight).
    frequency : float
        Wave cycles per edge for ``"wave"``; noise features per mm for
        ``"noise"``.
    profile : str
        ``"wave"`` or ``"noise"``.
    noise : ValueNoise | None
        Noise source for the ``"noise"`` profile.
    cache : EdgeCache | None
        Shared cache; a private one is created when omitted.
    """

    def __init__(
        self,
        segments: int = 8,
        amplitude: float = 0.0,
        frequency: float = 0.05,
        *,
        profile: str = "wave",
        noise: Optional[ValueNoise] = None,
        cache: Optional[EdgeCache] = None,
    ) -> None:
        if profile not in PROFILES:
            logger.warning("unknown edge profile %r, using 'wave'", profile)
            profile = "wave"
        self.segments = segments
        self.amplitude = amplitude
        self.frequency = frequency
        self.profile = profile
        self.noise = noise if noise is not None else (ValueNoise() if profile == "noise" else None)
        self.cache = cache if cache is not None else EdgeCache()

    def reconstruct(self, p0: Point, p1: Point) -> List[Point]:
        """Polyline from *p0* to *p1*, identical for both directions of an edge.

        Fewer than two segments, or a zero-length edge, give the two
        endpoints exactly as passed.
        """
        a, b, swapped = canonical_edge(p0, p1)
        if self.segments < 2 or a == b:
            return [p0, p1]
        key = edge_key(a, b)
        polyline = self.cache.get(key)
        if polyline is None:
            polyline = self.cache.put(key, self._build(a, b))
        out = list(polyline)
        if swapped:
            out.reverse()
        return out

    def clear(self) -> None:
        self.cache.clear()

    def _build(self, a: Point, b: Point) -> List[Point]:
        length = distance(a, b)
        samples = subdivide(a, b, self.segments)
        if self.amplitude == 0.0:
            return samples

        nx = -(b[1] - a[1]) / length
        ny = (b[0] - a[0]) / length
        h = hash_points(a, b)
        phase = 2.0 * math.pi * unit_float(h)

        out: List[Point] = [a]
        n = len(samples) - 1
        for i in range(1, n):
            t = i / n
            if self.profile == "noise":
                wave = self.noise.fbm(t * length * self.frequency, h)
            else:
                wave = math.sin(2.0 * math.pi * self.frequency * t + phase)
            offset = self.amplitude * envelope(t) * wave
            x, y = samples[i]
            out.append((x + nx * offset, y + ny * offset))
        out.append(b)
        return out
