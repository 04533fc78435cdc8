"""Puzzle parameter record, presets and schema.

Usage
-----
>>> from glasscut.config import PuzzleParams, DENSE_SHARDS
>>> params = PuzzleParams(seed=7, angle_count=24)
>>> params.width, params.height
(240.0, 120.0)
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from jsonschema import Draft7Validator

from .planning import radius_bounds
from .tabs import TabParams


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class PuzzleParams:
    """All tuneable parameters for one puzzle.

    Attributes
    ----------
    grid_width, grid_height : int
        Canvas size in cells.
    cell_size : float
        Cell edge in mm; the canvas is ``grid × cell_size`` mm.
    stroke_width : float
        Cut line width in mm (serializer only).
    corner_radius : float
        Frame corner radius in mm (serializer only).
    origin_x, origin_y : float | None
        Focal origin in mm.  ``None`` means horizontal centre / 75% down.
    seed : int
        Puzzle seed value; drives seed jitter and fill wobble.
    angle_count, ring_count : int
        Radial sampling plan.
    growth_factor : float
        Ring growth (1 = evenly spaced rings).
    min_radius_pct : float
        Innermost ring radius as a fraction of the shorter side.
    jitter_radius : float
        Radial jitter as a fraction of the shorter side.
    jitter_angle : float
        Angular jitter in radians.
    bias_scalar : float
        Radial bias applied before tessellation (1 = none).
    edge_segments : int
        Subdivisions per edge.
    edge_amplitude, edge_frequency : float
        Edge perturbation, used only when *noise_enabled*.
    noise_enabled : bool
        Whether edges are perturbed at all.
    edge_profile : str
        ``"wave"`` or ``"noise"``.
    min_tab_size, tab_width, tab_height, tab_angle, tab_position_jitter
        See :class:`~glasscut.tabs.TabParams`.
    tabs_enabled : bool
        Emit plain edges only when *False*.
    highlight_tabs : bool
        Serializer hint to draw tab outlines in a highlight colour.
    """

    grid_width: int = 24
    grid_height: int = 12
    cell_size: float = 10.0
    stroke_width: float = 0.2
    corner_radius: float = 1.5
    origin_x: Optional[float] = None
    origin_y: Optional[float] = None
    seed: int = 12345
    angle_count: int = 18
    ring_count: int = 8
    growth_factor: float = 1.25
    min_radius_pct: float = 0.095
    jitter_radius: float = 0.06
    jitter_angle: float = math.pi / 16
    bias_scalar: float = 1.4
    edge_segments: int = 8
    edge_amplitude: float = 3.0
    edge_frequency: float = 0.05
    noise_enabled: bool = False
    edge_profile: str = "wave"
    min_tab_size: float = 1.3
    tab_width: float = 0.35
    tab_height: float = 0.15
    tab_angle: float = -30.0
    tab_position_jitter: float = 0.5
    tabs_enabled: bool = True
    highlight_tabs: bool = False

    # ── derived values ──────────────────────────────────────────────

    @property
    def width(self) -> float:
        return float(self.grid_width * self.cell_size)

    @property
    def height(self) -> float:
        return float(self.grid_height * self.cell_size)

    @property
    def min_side(self) -> float:
        return min(self.width, self.height)

    @property
    def origin(self) -> Tuple[float, float]:
        ox = self.width / 2.0 if self.origin_x is None else float(self.origin_x)
        oy = self.height * 0.75 if self.origin_y is None else float(self.origin_y)
        return (ox, oy)

    @property
    def radius_bounds(self) -> Tuple[float, float]:
        return radius_bounds(self.width, self.height, self.min_radius_pct)

    @property
    def jitter_radius_mm(self) -> float:
        return self.jitter_radius * self.min_side

    @property
    def effective_amplitude(self) -> float:
        return self.edge_amplitude if self.noise_enabled else 0.0

    def tab_params(self) -> Optional[TabParams]:
        if not self.tabs_enabled:
            return None
        return TabParams(
            min_size=self.min_tab_size,
            relative_width=self.tab_width,
            relative_height=self.tab_height,
            angle_degrees=self.tab_angle,
            position_jitter=self.tab_position_jitter,
        )

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PuzzleParams":
        """Build params from a (partial) mapping; raises ``ValueError`` if invalid."""
        errors = validate_params_dict(payload)
        if errors:
            raise ValueError("Invalid puzzle parameters:\n  " + "\n  ".join(errors))
        return replace(cls(), **payload)

    def with_overrides(self, assignments: Iterable[str]) -> "PuzzleParams":
        """Apply ``key=value`` strings (as given on the command line)."""
        payload = self.to_dict()
        for item in assignments:
            key, sep, raw = item.partition("=")
            key = key.strip()
            if not sep or key not in _FIELD_TYPES:
                raise ValueError(f"Bad override {item!r}; expected <param>=<value>")
            payload[key] = _coerce(key, raw.strip())
        return PuzzleParams.from_dict(payload)


_FIELD_TYPES: Dict[str, str] = {f.name: str(f.type) for f in fields(PuzzleParams)}


def _coerce(key: str, raw: str) -> Any:
    kind = _FIELD_TYPES[key]
    if kind.startswith("Optional") and raw.lower() in ("none", "null", ""):
        return None
    if "bool" in kind:
        lowered = raw.lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"{key} expects a boolean, got {raw!r}")
    if "int" in kind:
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{key} expects an integer, got {raw!r}") from None
    if "float" in kind:
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{key} expects a number, got {raw!r}") from None
    return raw


# ═══════════════════════════════════════════════════════════════════
# Schema
# ═══════════════════════════════════════════════════════════════════

_NUMBER = {"type": "number"}
_NONNEG = {"type": "number", "minimum": 0}
_POSITIVE = {"type": "number", "exclusiveMinimum": 0}

PARAMS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "glasscut puzzle parameters",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "grid_width": {"type": "integer", "minimum": 1},
        "grid_height": {"type": "integer", "minimum": 1},
        "cell_size": _POSITIVE,
        "stroke_width": _NONNEG,
        "corner_radius": _NONNEG,
        "origin_x": {"type": ["number", "null"]},
        "origin_y": {"type": ["number", "null"]},
        "seed": {"type": "integer"},
        "angle_count": {"type": "integer"},
        "ring_count": {"type": "integer"},
        "growth_factor": _NUMBER,
        "min_radius_pct": _NUMBER,
        "jitter_radius": _NONNEG,
        "jitter_angle": _NONNEG,
        "bias_scalar": _NUMBER,
        "edge_segments": {"type": "integer"},
        "edge_amplitude": _NUMBER,
        "edge_frequency": _NUMBER,
        "noise_enabled": {"type": "boolean"},
        "edge_profile": {"enum": ["wave", "noise"]},
        "min_tab_size": _NONNEG,
        "tab_width": _NONNEG,
        "tab_height": _NUMBER,
        "tab_angle": {"type": "number", "minimum": -89, "maximum": 89},
        "tab_position_jitter": _NONNEG,
        "tabs_enabled": {"type": "boolean"},
        "highlight_tabs": {"type": "boolean"},
    },
}

_VALIDATOR = Draft7Validator(PARAMS_SCHEMA)


def validate_params_dict(payload: Any) -> List[str]:
    """Schema errors for a parameter mapping (empty list = valid)."""
    messages: List[str] = []
    for error in sorted(_VALIDATOR.iter_errors(payload), key=lambda e: list(e.path)):
        where = ".".join(str(p) for p in error.path) or "<root>"
        messages.append(f"{where}: {error.message}")
    return messages


# ═══════════════════════════════════════════════════════════════════
# Preset configs
# ═══════════════════════════════════════════════════════════════════

DEFAULT = PuzzleParams()

DENSE_SHARDS = PuzzleParams(
    angle_count=30,
    ring_count=11,
    growth_factor=1.18,
    min_radius_pct=0.06,
    jitter_radius=0.03,
    bias_scalar=1.3,
)

LARGE_SHARDS = PuzzleParams(
    angle_count=10,
    ring_count=5,
    growth_factor=1.45,
    min_radius_pct=0.14,
    jitter_radius=0.08,
    jitter_angle=math.pi / 12,
    bias_scalar=1.5,
)

WAVY_EDGES = PuzzleParams(
    edge_segments=16,
    edge_amplitude=1.5,
    edge_frequency=0.08,
    noise_enabled=True,
    edge_profile="noise",
)

PRESETS: Dict[str, PuzzleParams] = {
    "default": DEFAULT,
    "dense-shards": DENSE_SHARDS,
    "large-shards": LARGE_SHARDS,
    "wavy-edges": WAVY_EDGES,
}


def get_preset(name: str) -> PuzzleParams:
    """Named preset; raises ``KeyError`` for unknown names."""
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}; choose from {sorted(PRESETS)}") from None
