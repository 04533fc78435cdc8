"""Angular and radial sampling plan for the radial seed field."""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

from .models import SamplePlan

logger = logging.getLogger(__name__)

# Outermost planned ring, as a fraction of the shorter canvas side.
OUTER_FRACTION = 0.48


def generate_angles(count: int) -> List[float]:
    """*count* angles evenly spaced over ``[0, 2π)``; ``[]`` if count ≤ 0."""
    if count <= 0:
        return []
    step = 2.0 * math.pi / count
    return [i * step for i in range(count)]


def generate_rings(
    count: int,
    min_radius: float,
    max_radius: float,
    growth: float = 1.0,
) -> List[float]:
    """Return *count* non-decreasing ring radii from *min_radius* to *max_radius*.

    ``growth == 1`` gives an arithmetic progression with both ends included.
    Any other growth gives ``min_radius * growth**i``, clamped to
    *max_radius* once exceeded, with the last ring forced to *max_radius*.

    Inputs that cannot produce a valid plan (``max_radius <= min_radius``,
    ``growth < 1``, non-finite values) yield ``[]`` for ``count >= 2``.
    """
    if count <= 0:
        return []
    if count == 1:
        return [min_radius]
    if not all(math.isfinite(v) for v in (min_radius, max_radius, growth)):
        return []
    if max_radius <= min_radius or growth < 1.0:
        return []

    if growth == 1.0:
        step = (max_radius - min_radius) / (count - 1)
        rings = [min_radius + i * step for i in range(count)]
        rings[-1] = max_radius
        return rings

    rings: List[float] = []
    r = min_radius
    for i in range(count):
        rings.append(r)
        r *= growth
        if r > max_radius and i < count - 1:
            r = max_radius
    rings[-1] = max_radius
    return rings


def radius_bounds(width: float, height: float, min_radius_pct: float) -> Tuple[float, float]:
    """``(min_radius, max_radius)`` for a canvas, in mm."""
    min_side = min(width, height)
    return min_side * min_radius_pct, min_side * OUTER_FRACTION


def build_plan(
    angle_count: int,
    ring_count: int,
    min_radius: float,
    max_radius: float,
    growth: float = 1.0,
) -> SamplePlan:
    plan = SamplePlan(
        angles=tuple(generate_angles(angle_count)),
        rings=tuple(generate_rings(ring_count, min_radius, max_radius, growth)),
    )
    logger.debug(
        "sample plan: %d angles x %d rings (%.3f..%.3f mm)",
        len(plan.angles), len(plan.rings), min_radius, max_radius,
    )
    return plan
