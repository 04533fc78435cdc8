"""Tests for diagnostics module."""

from __future__ import annotations

import pytest

from glasscut.config import PuzzleParams
from glasscut.diagnostics import (
    asymmetric_edges,
    cell_area_stats,
    clipping_violations,
    coverage_ratio,
    diagnostics_lines,
    diagnostics_report,
    out_of_frame_points,
    record_summary,
    role_counts,
    unmatched_interior_edges,
)
from glasscut.edges import EdgeReconstructor
from glasscut.models import Cell, PathRecord, RingRole
from glasscut.pipeline import GenerationPass


@pytest.fixture(scope="module")
def generation():
    gen = GenerationPass(PuzzleParams(seed=11))
    gen.result = gen.run()
    return gen


def test_role_counts(generation):
    counts = role_counts(generation.result.cells)
    assert sum(counts.values()) == len(generation.result.cells)
    assert counts["innermost"] > 0
    assert counts["primary"] > 0


def test_area_stats():
    cells = [
        Cell(0, ((0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)), RingRole.primary(1)),
        Cell(1, ((0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)), RingRole.fill()),
    ]
    stats = cell_area_stats(cells)
    assert stats["area_min"] == pytest.approx(4.0)
    assert stats["area_max"] == pytest.approx(16.0)
    assert stats["area_mean"] == pytest.approx(10.0)
    assert cell_area_stats([])["area_mean"] == 0.0


def test_coverage_is_complete(generation):
    result = generation.result
    assert coverage_ratio(result.cells, result.width, result.height) == pytest.approx(1.0, rel=1e-6)


def test_out_of_frame_points():
    pts = [(0.0, 0.0), (10.0, 5.0), (-1.0, 2.0), (3.0, 11.0)]
    assert out_of_frame_points(pts, 10.0, 10.0) == 2


def test_no_clipping_violations(generation):
    assert clipping_violations(generation.result) == {"cell_vertices": 0, "record_points": 0}


def test_shared_edges_consistent(generation):
    result = generation.result
    assert unmatched_interior_edges(result.cells, result.width, result.height) == []
    assert asymmetric_edges(result.cells, generation.edges) == []


def test_unmatched_edge_detected():
    lonely = [Cell(0, ((10.0, 10.0), (20.0, 10.0), (15.0, 20.0)), RingRole.primary(1))]
    assert len(unmatched_interior_edges(lonely, 100.0, 100.0)) == 3
    assert asymmetric_edges(lonely, EdgeReconstructor(8, 2.0)) == []


def test_record_summary():
    records = [
        PathRecord(((0.0, 0.0), (1.0, 1.0))),
        PathRecord(((0.0, 0.0), (1.0, 1.0), (2.0, 0.0)), is_tab=True),
        PathRecord(((5.0, 5.0), (6.0, 6.0)), "advisory-cut"),
    ]
    summary = record_summary(records)
    assert summary == {"records": 3, "tabs": 1, "advisory_records": 1, "points": 7}


def test_diagnostics_report(generation):
    report = diagnostics_report(generation.result, generation)
    assert report["passed"] is True
    assert report["cells"] == len(generation.result.cells)
    assert report["caches"]["edge_entries"] > 0
    assert set(report["elapsed"]) == {"plan", "seeds", "cells", "splits", "paths"}


def test_report_without_pass(generation):
    report = diagnostics_report(generation.result)
    assert "caches" not in report
    assert report["asymmetric_edges"] == 0


def test_diagnostics_lines(generation):
    lines = diagnostics_lines(diagnostics_report(generation.result, generation))
    assert lines[0].startswith("frame: 240.0 x 120.0")
    assert "quality gates:" in lines
    assert any(line.strip().startswith("passed:") for line in lines)
