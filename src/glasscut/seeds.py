"""Seed field — jittered radial sites plus synthetic outer-fill sites.

Primary seeds sit on the planned ``rings × angles`` grid around the
origin, each nudged by a jitter pair that is memoised per grid position
for the lifetime of a generation pass.  When the outermost planned ring
falls short of :data:`planning.OUTER_FRACTION` of the shorter canvas
side, a denser band of fill seeds is synthesised between the last ring
and that limit so the corners of the canvas still get small pieces.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Tuple

from .hashing import hash_values, quantize, signed_unit, splitmix64
from .models import RingRole, SamplePlan, Seed
from .planning import OUTER_FRACTION

logger = logging.getLogger(__name__)

DEFAULT_SEED_VALUE = 12345

# Fill band layout.
FILL_MIN_RINGS = 4
FILL_RING_SPACING = 6.0
FILL_ANGLE_DENSITY = 6
FILL_ANGLE_WOBBLE = 0.1


# ═══════════════════════════════════════════════════════════════════
# Per-pass jitter memo
# ═══════════════════════════════════════════════════════════════════


class JitterCache:
    """Per-(ring radius, angle) jitter pairs for one generation pass.

    Each entry is a pair of unit factors in ``[-1, 1)``; callers scale
    them by the jitter magnitudes.  Values are derived from a hash of the
    puzzle seed and the quantised grid position, so revisiting a site
    always yields the same pair.
    """

    def __init__(self, seed_value: int = DEFAULT_SEED_VALUE) -> None:
        self.seed_value = seed_value
        self._entries: Dict[Tuple[int, int], Tuple[float, float]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, radius: float, angle: float) -> Tuple[float, float]:
        key = (quantize(radius), quantize(angle))
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        h = hash_values(radius, angle, seed=self.seed_value)
        pair = (signed_unit(h), signed_unit(splitmix64(h)))
        self._entries[key] = pair
        return pair

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


# ═══════════════════════════════════════════════════════════════════
# Primary seeds
# ═══════════════════════════════════════════════════════════════════


def _inside(x: float, y: float, width: float, height: float) -> bool:
    return 0.0 <= x <= width and 0.0 <= y <= height


def generate_seeds(
    plan: SamplePlan,
    origin: Tuple[float, float],
    width: float,
    height: float,
    *,
    jitter_radius: float = 0.0,
    jitter_angle: float = 0.0,
    seed_value: int = DEFAULT_SEED_VALUE,
    cache: Optional[JitterCache] = None,
) -> List[Seed]:
    """Jittered cartesian seeds for every ``(ring, angle)`` of *plan*.

    Jitter comes from *cache* when given, otherwise from a fresh
    :class:`JitterCache` seeded with *seed_value*.  Seeds landing outside
    ``[0, width] × [0, height]`` are dropped.
    """
    if cache is None:
        cache = JitterCache(seed_value)
    ox, oy = origin
    seeds: List[Seed] = []
    for ring_index, r0 in enumerate(plan.rings):
        for a0 in plan.angles:
            unit_r, unit_a = cache.get(r0, a0)
            r = r0 + unit_r * jitter_radius
            angle = a0 + unit_a * jitter_angle
            x = ox + r * math.cos(angle)
            y = oy + r * math.sin(angle)
            if not _inside(x, y, width, height):
                continue
            seeds.append(Seed(x, y, r, angle, RingRole.primary(ring_index)))
    return seeds


# ═══════════════════════════════════════════════════════════════════
# Outer fill
# ═══════════════════════════════════════════════════════════════════


def lcg_unit(i: int, seed_value: int) -> float:
    """Linear-congruential fraction in ``[0, 1)`` for index *i*."""
    return ((seed_value * (i + 1) * 9301 + 49297) % 233280) / 233280.0


def needs_fill(plan: SamplePlan, width: float, height: float) -> bool:
    last = plan.rings[-1] if plan.rings else 0.0
    return last < OUTER_FRACTION * min(width, height)


def generate_fill_seeds(
    plan: SamplePlan,
    origin: Tuple[float, float],
    width: float,
    height: float,
    seed_value: int = DEFAULT_SEED_VALUE,
) -> List[Seed]:
    """Synthetic seeds between the last planned ring and the outer limit.

    Returns ``[]`` when the plan already reaches the limit or has no
    rings or angles.  Fill angles wobble by an LCG seeded with *seed_value*
    (``0`` falls back to :data:`DEFAULT_SEED_VALUE`), so the band is fully
    reproducible.
    """
    if not plan.rings or not plan.angles or not needs_fill(plan, width, height):
        return []
    seed_value = seed_value or DEFAULT_SEED_VALUE

    outer_start = plan.rings[-1]
    outer_end = OUTER_FRACTION * min(width, height)
    gap = outer_end - outer_start
    ring_total = max(FILL_MIN_RINGS, math.ceil(gap / FILL_RING_SPACING))
    angle_total = len(plan.angles) * FILL_ANGLE_DENSITY

    ox, oy = origin
    seeds: List[Seed] = []
    for k in range(ring_total):
        r = outer_start + gap * (k + 0.5) / ring_total
        for i in range(angle_total):
            angle = (
                2.0 * math.pi * i / angle_total
                + lcg_unit(i + k * 100, seed_value) * FILL_ANGLE_WOBBLE
            )
            x = ox + r * math.cos(angle)
            y = oy + r * math.sin(angle)
            if 0.0 < x < width and 0.0 < y < height:
                seeds.append(Seed(x, y, r, angle, RingRole.fill()))
    return seeds


def build_seed_field(
    plan: SamplePlan,
    origin: Tuple[float, float],
    width: float,
    height: float,
    *,
    jitter_radius: float = 0.0,
    jitter_angle: float = 0.0,
    seed_value: int = DEFAULT_SEED_VALUE,
    cache: Optional[JitterCache] = None,
) -> List[Seed]:
    """Primary seeds followed by any outer-fill seeds."""
    if cache is None:
        cache = JitterCache(seed_value)
    primary = generate_seeds(
        plan, origin, width, height,
        jitter_radius=jitter_radius,
        jitter_angle=jitter_angle,
        cache=cache,
    )
    fill = generate_fill_seeds(plan, origin, width, height, seed_value)
    logger.debug("seed field: %d primary, %d fill", len(primary), len(fill))
    return primary + fill
