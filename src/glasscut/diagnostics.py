from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .edges import EdgeReconstructor, edge_key
from .geometry import is_frame_edge, polygon_area
from .models import ADVISORY_CUT, Cell, PathRecord, Point
from .pipeline import GenerationPass, PuzzleResult


def role_counts(cells: Iterable[Cell]) -> Dict[str, int]:
    counts = {"innermost": 0, "primary": 0, "fill": 0}
    for cell in cells:
        if cell.ring_role.is_fill:
            counts["fill"] += 1
        elif cell.ring_role.is_innermost():
            counts["innermost"] += 1
        else:
            counts["primary"] += 1
    return counts


def cell_area_stats(cells: Sequence[Cell]) -> Dict[str, float]:
    areas = [polygon_area(cell.polygon) for cell in cells]
    return {
        "area_min": _min(areas),
        "area_max": _max(areas),
        "area_mean": _mean(areas),
        "area_total": sum(areas),
    }


def coverage_ratio(cells: Sequence[Cell], width: float, height: float) -> float:
    """Summed cell area over frame area; 1.0 for a gap-free tessellation."""
    frame_area = width * height
    if frame_area <= 0:
        return 0.0
    return sum(polygon_area(cell.polygon) for cell in cells) / frame_area


def out_of_frame_points(
    points: Iterable[Point],
    width: float,
    height: float,
    tol: float = 1e-6,
) -> int:
    return sum(
        1 for x, y in points
        if x < -tol or y < -tol or x > width + tol or y > height + tol
    )


def clipping_violations(result: PuzzleResult, tol: float = 1e-6) -> Dict[str, int]:
    """Cell vertices and record samples lying outside the frame."""
    w, h = result.width, result.height
    cell_points = (p for cell in result.cells for p in cell.polygon)
    record_points = (p for rec in result.records if not rec.is_tab for p in rec.points)
    return {
        "cell_vertices": out_of_frame_points(cell_points, w, h, tol),
        "record_points": out_of_frame_points(record_points, w, h, tol),
    }


def unmatched_interior_edges(cells: Sequence[Cell], width: float, height: float) -> List[str]:
    """Keys of non-frame edges not shared by exactly two cells."""
    counts: Counter = Counter()
    for cell in cells:
        for p0, p1 in cell.edges():
            if not is_frame_edge(p0, p1, width, height):
                counts[edge_key(p0, p1)] += 1
    return sorted(key for key, n in counts.items() if n != 2)


def asymmetric_edges(cells: Sequence[Cell], reconstructor: EdgeReconstructor) -> List[str]:
    """Keys of edges whose polyline differs when walked from the other end."""
    bad: List[str] = []
    seen = set()
    for cell in cells:
        for p0, p1 in cell.edges():
            key = edge_key(p0, p1)
            if key in seen:
                continue
            seen.add(key)
            forward = reconstructor.reconstruct(p0, p1)
            backward = reconstructor.reconstruct(p1, p0)
            if forward != backward[::-1]:
                bad.append(key)
    return bad


def record_summary(records: Sequence[PathRecord]) -> Dict[str, int]:
    return {
        "records": len(records),
        "tabs": sum(1 for r in records if r.is_tab),
        "advisory_records": sum(1 for r in records if r.kind == ADVISORY_CUT),
        "points": sum(len(r.points) for r in records),
    }


def diagnostics_report(
    result: PuzzleResult,
    generation_pass: Optional[GenerationPass] = None,
) -> Dict[str, Any]:
    """Quality report for one generated puzzle.

    When *generation_pass* is given, its edge reconstructor is used for the
    shared-edge symmetry check and its cache counters are included.
    """
    w, h = result.width, result.height
    caches: Optional[Dict[str, int]] = None
    if generation_pass is not None:
        # Snapshot before the symmetry check adds lookups of its own.
        caches = {
            "jitter_entries": len(generation_pass.jitter_cache),
            "jitter_hits": generation_pass.jitter_cache.hits,
            "edge_entries": len(generation_pass.edges.cache),
            "edge_hits": generation_pass.edges.cache.hits,
            "edge_misses": generation_pass.edges.cache.misses,
        }
        reconstructor = generation_pass.edges
    else:
        reconstructor = EdgeReconstructor(
            result.params.edge_segments,
            result.params.effective_amplitude,
            result.params.edge_frequency,
            profile=result.params.edge_profile,
        )
    report: Dict[str, Any] = {
        "frame": {"width": w, "height": h},
        "seeds": len(result.seeds),
        "cells": len(result.cells),
        "roles": role_counts(result.cells),
        "areas": cell_area_stats(result.cells),
        "coverage": coverage_ratio(result.cells, w, h),
        "extra_cuts": len(result.extra_cuts),
        "paths": record_summary(result.records),
        "clipping": clipping_violations(result),
        "unmatched_edges": len(unmatched_interior_edges(result.cells, w, h)),
        "asymmetric_edges": len(asymmetric_edges(result.cells, reconstructor)),
        "elapsed": dict(result.elapsed),
    }
    if caches is not None:
        report["caches"] = caches
    report["passed"] = (
        report["clipping"]["cell_vertices"] == 0
        and report["clipping"]["record_points"] == 0
        and report["asymmetric_edges"] == 0
    )
    return report


def diagnostics_lines(report: Dict[str, Any]) -> List[str]:
    lines = [
        f"frame: {report['frame']['width']:.1f} x {report['frame']['height']:.1f} mm",
        f"seeds: {report['seeds']}  cells: {report['cells']}  extra cuts: {report['extra_cuts']}",
        "roles:",
    ]
    for role, count in report["roles"].items():
        lines.append(f"  {role}: {count}")
    lines.append("areas:")
    for key, value in report["areas"].items():
        lines.append(f"  {key}: {value:.4f}")
    lines.append(f"coverage: {report['coverage']:.4f}")
    lines.append("paths:")
    for key, value in report["paths"].items():
        lines.append(f"  {key}: {value}")
    if "caches" in report:
        lines.append("caches:")
        for key, value in report["caches"].items():
            lines.append(f"  {key}: {value}")
    lines.append("quality gates:")
    lines.append(f"  cell_vertices_outside: {report['clipping']['cell_vertices']}")
    lines.append(f"  record_points_outside: {report['clipping']['record_points']}")
    lines.append(f"  unmatched_edges: {report['unmatched_edges']}")
    lines.append(f"  asymmetric_edges: {report['asymmetric_edges']}")
    lines.append(f"  passed: {report['passed']}")
    return lines


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _min(values: List[float]) -> float:
    return min(values) if values else 0.0


def _max(values: List[float]) -> float:
    return max(values) if values else 0.0
