"""Tests for pipeline.py — the staged generation pass."""

from __future__ import annotations

import math

import pytest

from glasscut.config import DENSE_SHARDS, LARGE_SHARDS, WAVY_EDGES, PuzzleParams
from glasscut.diagnostics import asymmetric_edges, diagnostics_report
from glasscut.geometry import polygon_area
from glasscut.models import ADVISORY_CUT, NORMAL
from glasscut.pipeline import STAGES, GenerationPass, generate_puzzle


@pytest.fixture(scope="module")
def default_result():
    return generate_puzzle(PuzzleParams())


# ═══════════════════════════════════════════════════════════════════
# Default run
# ═══════════════════════════════════════════════════════════════════


class TestDefaultRun:
    def test_plan_matches_canvas(self, default_result):
        plan = default_result.plan
        assert len(plan.angles) == 18
        assert len(plan.rings) == 8
        assert plan.rings[0] == pytest.approx(11.4)
        assert plan.rings[-1] == pytest.approx(57.6)
        assert plan.angles[1] == pytest.approx(2 * math.pi / 18)

    def test_produces_records(self, default_result):
        assert default_result.cells
        assert default_result.records
        assert all(r.kind in (NORMAL, ADVISORY_CUT) for r in default_result.records)
        assert any(r.is_tab for r in default_result.records)

    def test_frame(self, default_result):
        frame = default_result.frame
        assert (frame.width, frame.height) == (240.0, 120.0)
        assert frame.corner_radius == 1.5

    def test_cells_inside_frame(self, default_result):
        for cell in default_result.cells:
            for x, y in cell.polygon:
                assert 0.0 <= x <= 240.0
                assert 0.0 <= y <= 120.0

    def test_cells_cover_frame(self, default_result):
        total = sum(polygon_area(c.polygon) for c in default_result.cells)
        assert total == pytest.approx(240.0 * 120.0, rel=1e-6)

    def test_stage_timings(self, default_result):
        assert tuple(default_result.elapsed) == STAGES
        assert all(t >= 0.0 for t in default_result.elapsed.values())

    def test_advisory_records_last(self, default_result):
        kinds = [r.kind for r in default_result.records]
        if ADVISORY_CUT in kinds:
            first = kinds.index(ADVISORY_CUT)
            assert all(k == ADVISORY_CUT for k in kinds[first:])


# ═══════════════════════════════════════════════════════════════════
# Determinism
# ═══════════════════════════════════════════════════════════════════


class TestDeterminism:
    def test_same_params_same_output(self):
        params = PuzzleParams(seed=321, noise_enabled=True)
        a = generate_puzzle(params)
        b = generate_puzzle(params)
        assert a.records == b.records
        assert a.cells == b.cells

    def test_rerun_after_reset(self):
        generation = GenerationPass(PuzzleParams(seed=5, noise_enabled=True))
        first = generation.run()
        generation.reset()
        assert len(generation.edges.cache) == 0
        assert len(generation.jitter_cache) == 0
        second = generation.run()
        assert first.records == second.records

    def test_seed_changes_output(self):
        a = generate_puzzle(PuzzleParams(seed=1))
        b = generate_puzzle(PuzzleParams(seed=2))
        assert a.records != b.records

    @pytest.mark.parametrize("params", [DENSE_SHARDS, LARGE_SHARDS, WAVY_EDGES])
    def test_presets_symmetric_edges(self, params):
        generation = GenerationPass(params)
        result = generation.run()
        assert result.records
        assert asymmetric_edges(result.cells, generation.edges) == []

    @pytest.mark.parametrize("profile", ["wave", "noise"])
    @pytest.mark.parametrize("seed", [1, 6, 13])
    def test_wavy_edges_stay_inside_frame(self, profile, seed):
        generation = GenerationPass(PuzzleParams(seed=seed, noise_enabled=True, edge_profile=profile))
        result = generation.run()
        report = diagnostics_report(result, generation)
        assert report["clipping"] == {"cell_vertices": 0, "record_points": 0}
        assert report["passed"] is True


# ═══════════════════════════════════════════════════════════════════
# Hooks and options
# ═══════════════════════════════════════════════════════════════════


def test_hooks_called_in_order():
    calls = []
    generate_puzzle(
        PuzzleParams(angle_count=8, ring_count=3),
        before=lambda name, idx, total: calls.append(("before", name, idx, total)),
        after=lambda name, idx, total: calls.append(("after", name, idx, total)),
    )
    assert [c[1] for c in calls if c[0] == "before"] == list(STAGES)
    assert calls[0] == ("before", "plan", 0, 5)
    assert calls[-1] == ("after", "paths", 4, 5)


def test_tabs_disabled():
    result = generate_puzzle(PuzzleParams(tabs_enabled=False))
    assert result.records
    assert not any(r.is_tab for r in result.records)


def test_single_ring_plan_adds_fill_cells():
    # A single ring stops at min_radius, short of the outer limit.
    result = generate_puzzle(PuzzleParams(ring_count=1, origin_y=60.0, bias_scalar=1.0))
    assert any(c.ring_role.is_fill for c in result.cells)
    assert result.records
    for cut in result.extra_cuts:
        cell = next(c for c in result.cells if c.seed_index == cut.cell_index)
        assert cell.ring_role.is_fill


def test_degenerate_params_give_empty_result():
    result = generate_puzzle(PuzzleParams(angle_count=0))
    assert result.seeds == []
    assert result.cells == []
    assert result.records == []


def test_inverted_radii_give_empty_plan():
    result = generate_puzzle(PuzzleParams(min_radius_pct=0.9))
    assert result.plan.rings == ()
    assert result.records == []
