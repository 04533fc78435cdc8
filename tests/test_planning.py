"""Tests for planning.py — angle and ring sampling plan."""

from __future__ import annotations

import math

import pytest

from glasscut.planning import (
    OUTER_FRACTION,
    build_plan,
    generate_angles,
    generate_rings,
    radius_bounds,
)


# ═══════════════════════════════════════════════════════════════════
# Angles
# ═══════════════════════════════════════════════════════════════════


class TestGenerateAngles:
    def test_eighteen_angles(self):
        angles = generate_angles(18)
        assert len(angles) == 18
        for i, a in enumerate(angles):
            assert a == pytest.approx(i * 2 * math.pi / 18)

    def test_even_spacing(self):
        angles = generate_angles(7)
        gaps = [b - a for a, b in zip(angles, angles[1:])]
        assert all(g == pytest.approx(2 * math.pi / 7) for g in gaps)

    def test_half_open_range(self):
        angles = generate_angles(12)
        assert angles[0] == 0.0
        assert all(0.0 <= a < 2 * math.pi for a in angles)

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_is_empty(self, count):
        assert generate_angles(count) == []


# ═══════════════════════════════════════════════════════════════════
# Rings
# ═══════════════════════════════════════════════════════════════════


class TestGenerateRings:
    def test_geometric_growth_ends_at_max(self):
        rings = generate_rings(8, 11.4, 57.6, 1.25)
        assert len(rings) == 8
        assert rings[0] == pytest.approx(11.4)
        assert rings[-1] == 57.6
        assert all(b > a for a, b in zip(rings, rings[1:]))

    def test_arithmetic_when_growth_is_one(self):
        rings = generate_rings(5, 10.0, 50.0, 1.0)
        assert rings == pytest.approx([10.0, 20.0, 30.0, 40.0, 50.0])

    def test_geometric_clamps_once_exceeded(self):
        rings = generate_rings(5, 10.0, 20.0, 2.0)
        assert rings == [10.0, 20.0, 20.0, 20.0, 20.0]

    def test_monotonic_for_many_growths(self):
        for growth in (1.0, 1.05, 1.25, 1.8, 3.0):
            rings = generate_rings(9, 5.0, 60.0, growth)
            assert len(rings) == 9
            assert all(b >= a for a, b in zip(rings, rings[1:]))
            assert rings[-1] == 60.0

    def test_single_ring(self):
        assert generate_rings(1, 12.0, 40.0, 1.3) == [12.0]

    def test_zero_count(self):
        assert generate_rings(0, 12.0, 40.0) == []

    def test_max_not_above_min(self):
        assert generate_rings(4, 40.0, 40.0) == []
        assert generate_rings(4, 50.0, 40.0, 1.2) == []

    def test_shrinking_growth_rejected(self):
        assert generate_rings(4, 10.0, 40.0, 0.9) == []

    def test_non_finite_rejected(self):
        assert generate_rings(4, 10.0, float("inf")) == []
        assert generate_rings(4, 10.0, 40.0, float("nan")) == []


# ═══════════════════════════════════════════════════════════════════
# Plan
# ═══════════════════════════════════════════════════════════════════


def test_radius_bounds_default_canvas():
    min_r, max_r = radius_bounds(240.0, 120.0, 0.095)
    assert min_r == pytest.approx(11.4)
    assert max_r == pytest.approx(57.6)
    assert max_r == pytest.approx(OUTER_FRACTION * 120.0)


def test_build_plan_site_count():
    plan = build_plan(18, 8, 11.4, 57.6, 1.25)
    assert len(plan.angles) == 18
    assert len(plan.rings) == 8
    assert plan.site_count() == 144


def test_build_plan_degenerate_rings():
    plan = build_plan(18, 8, 30.0, 10.0, 1.25)
    assert plan.rings == ()
    assert plan.site_count() == 0
