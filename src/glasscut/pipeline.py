"""Generation pass — runs the full pipeline for one parameter set.

A :class:`GenerationPass` owns the two pass-scoped caches (seed jitter
memo and reconstructed-edge memo) and executes the stages in order:

``plan → seeds → cells → splits → paths``

Each stage is timed; optional hooks fire before and after every stage.
Concurrent or repeated generations with different parameters must each
use their own pass.

Usage
-----
>>> from glasscut.config import PuzzleParams
>>> from glasscut.pipeline import generate_puzzle
>>> result = generate_puzzle(PuzzleParams(seed=42))
>>> len(result.records) > 0
True
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .config import PuzzleParams
from .edges import EdgeCache, EdgeReconstructor
from .models import Cell, ExtraCut, Frame, PathRecord, SamplePlan, Seed
from .noise import ValueNoise
from .paths import build_records
from .planning import build_plan
from .seeds import JitterCache, build_seed_field
from .splitting import find_extra_cuts
from .tessellation import compute_cells

logger = logging.getLogger(__name__)

Hook = Callable[[str, int, int], None]
"""Signature for before/after hooks: ``(stage_name, stage_index, total_stages)``."""

STAGES = ("plan", "seeds", "cells", "splits", "paths")


@dataclass
class PuzzleResult:
    """Everything one pass produced.

    Attributes
    ----------
    records : list[PathRecord]
        Ordered polylines for the serializer.
    frame : Frame
        Outer rectangle.
    elapsed : dict[str, float]
        Wall-clock seconds per stage.
    """

    params: PuzzleParams
    frame: Frame
    plan: SamplePlan = field(default_factory=SamplePlan)
    seeds: List[Seed] = field(default_factory=list)
    cells: List[Cell] = field(default_factory=list)
    extra_cuts: List[ExtraCut] = field(default_factory=list)
    records: List[PathRecord] = field(default_factory=list)
    elapsed: Dict[str, float] = field(default_factory=dict)

    @property
    def width(self) -> float:
        return self.frame.width

    @property
    def height(self) -> float:
        return self.frame.height


class GenerationPass:
    """One pipeline execution context for a fixed :class:`PuzzleParams`.

    Parameters
    ----------
    params : PuzzleParams
        The parameter set; fixed for the lifetime of the pass.
    before, after : Hook | None
        Called around each stage.
    """

    def __init__(
        self,
        params: PuzzleParams,
        *,
        before: Optional[Hook] = None,
        after: Optional[Hook] = None,
    ) -> None:
        self.params = params
        self._before = before
        self._after = after
        self.jitter_cache = JitterCache(params.seed)
        noise = ValueNoise(params.seed) if params.edge_profile == "noise" else None
        self.edges = EdgeReconstructor(
            params.edge_segments,
            params.effective_amplitude,
            params.edge_frequency,
            profile=params.edge_profile,
            noise=noise,
            cache=EdgeCache(),
        )

    def reset(self) -> None:
        """Drop both pass-scoped caches."""
        self.jitter_cache.clear()
        self.edges.clear()

    def run(self) -> PuzzleResult:
        p = self.params
        width, height = p.width, p.height
        result = PuzzleResult(
            params=p,
            frame=Frame(width, height, p.corner_radius, p.stroke_width),
        )

        def plan() -> None:
            min_r, max_r = p.radius_bounds
            result.plan = build_plan(p.angle_count, p.ring_count, min_r, max_r, p.growth_factor)

        def seeds() -> None:
            result.seeds = build_seed_field(
                result.plan, p.origin, width, height,
                jitter_radius=p.jitter_radius_mm,
                jitter_angle=p.jitter_angle,
                seed_value=p.seed,
                cache=self.jitter_cache,
            )

        def cells() -> None:
            result.cells = compute_cells(
                result.seeds, width, height,
                origin=p.origin,
                bias_scalar=p.bias_scalar,
            )

        def splits() -> None:
            result.extra_cuts = find_extra_cuts(result.cells, width, height)

        def paths() -> None:
            result.records = build_records(
                result.cells, result.extra_cuts, self.edges,
                p.tab_params(), width, height,
            )

        steps = (plan, seeds, cells, splits, paths)
        total = len(steps)
        for idx, (name, step) in enumerate(zip(STAGES, steps)):
            if self._before:
                self._before(name, idx, total)
            t0 = time.perf_counter()
            step()
            result.elapsed[name] = time.perf_counter() - t0
            if self._after:
                self._after(name, idx, total)

        logger.info(
            "generated %d records from %d cells (%d seeds, %d extra cuts) in %.3fs",
            len(result.records), len(result.cells), len(result.seeds),
            len(result.extra_cuts), sum(result.elapsed.values()),
        )
        return result


def generate_puzzle(
    params: Optional[PuzzleParams] = None,
    *,
    before: Optional[Hook] = None,
    after: Optional[Hook] = None,
) -> PuzzleResult:
    """Run a fresh :class:`GenerationPass` for *params* (defaults if omitted)."""
    return GenerationPass(params or PuzzleParams(), before=before, after=after).run()
