"""glasscut — broken-glass jigsaw templates for laser cutting.

Public API is organised into layers:

- **Core** — models, hashing, geometry, parameters
- **Pipeline** — planning, seeds, tessellation, splitting, edges, tabs, paths
- **Output** — SVG, JSON, PNG preview (requires matplotlib)
- **Diagnostics** — quality checks and reports
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import Cell, ExtraCut, Frame, PathRecord, RingRole, SamplePlan, Seed
from .hashing import hash_points, hash_values, splitmix64
from .config import (
    DEFAULT,
    DENSE_SHARDS,
    LARGE_SHARDS,
    PRESETS,
    WAVY_EDGES,
    PuzzleParams,
    get_preset,
    validate_params_dict,
)

# ── Pipeline ────────────────────────────────────────────────────────
from .planning import build_plan, generate_angles, generate_rings
from .seeds import JitterCache, build_seed_field, generate_fill_seeds, generate_seeds
from .tessellation import apply_radial_bias, compute_cells
from .splitting import find_extra_cuts
from .edges import EdgeCache, EdgeReconstructor, edge_key
from .tabs import Tab, TabParams, generate_edge_tab
from .paths import build_records
from .pipeline import GenerationPass, PuzzleResult, generate_puzzle

# ── Output ──────────────────────────────────────────────────────────
from .io import load_params, result_to_dict, save_params, save_result_json
from .svg import build_svg, save_svg
from .render import render_png

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import diagnostics_report

__all__ = [
    # Core
    "Cell",
    "ExtraCut",
    "Frame",
    "PathRecord",
    "RingRole",
    "SamplePlan",
    "Seed",
    "hash_points",
    "hash_values",
    "splitmix64",
    "DEFAULT",
    "DENSE_SHARDS",
    "LARGE_SHARDS",
    "PRESETS",
    "WAVY_EDGES",
    "PuzzleParams",
    "get_preset",
    "validate_params_dict",
    # Pipeline
    "build_plan",
    "generate_angles",
    "generate_rings",
    "JitterCache",
    "build_seed_field",
    "generate_fill_seeds",
    "generate_seeds",
    "apply_radial_bias",
    "compute_cells",
    "find_extra_cuts",
    "EdgeCache",
    "EdgeReconstructor",
    "edge_key",
    "Tab",
    "TabParams",
    "generate_edge_tab",
    "build_records",
    "GenerationPass",
    "PuzzleResult",
    "generate_puzzle",
    # Output
    "load_params",
    "result_to_dict",
    "save_params",
    "save_result_json",
    "build_svg",
    "save_svg",
    "render_png",
    # Diagnostics
    "diagnostics_report",
]
