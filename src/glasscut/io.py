from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from jsonschema import Draft7Validator

from .config import PuzzleParams
from .models import RECORD_KINDS
from .pipeline import PuzzleResult

PathLike = Union[str, Path]

RESULT_VERSION = "1.0"


def load_params(path: PathLike) -> PuzzleParams:
    """Read a (partial) parameter file; missing keys take defaults."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return PuzzleParams.from_dict(data)


def save_params(params: PuzzleParams, path: PathLike) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(params.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
    return out


# ═══════════════════════════════════════════════════════════════════
# Result export
# ═══════════════════════════════════════════════════════════════════

_POINT = {
    "type": "array",
    "items": {"type": "number"},
    "minItems": 2,
    "maxItems": 2,
}

RESULT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "glasscut polyline export",
    "type": "object",
    "required": ["version", "units", "frame", "params", "records"],
    "properties": {
        "version": {"type": "string"},
        "units": {"const": "mm"},
        "frame": {
            "type": "object",
            "required": ["width", "height", "corner_radius", "stroke_width"],
            "properties": {
                "width": {"type": "number", "exclusiveMinimum": 0},
                "height": {"type": "number", "exclusiveMinimum": 0},
                "corner_radius": {"type": "number", "minimum": 0},
                "stroke_width": {"type": "number", "minimum": 0},
            },
        },
        "params": {"type": "object"},
        "records": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["kind", "is_tab", "points"],
                "properties": {
                    "kind": {"enum": list(RECORD_KINDS)},
                    "is_tab": {"type": "boolean"},
                    "points": {"type": "array", "items": _POINT, "minItems": 2},
                },
            },
        },
    },
}

_RESULT_VALIDATOR = Draft7Validator(RESULT_SCHEMA)


def result_to_dict(result: PuzzleResult) -> Dict[str, Any]:
    frame = result.frame
    return {
        "version": RESULT_VERSION,
        "units": "mm",
        "frame": {
            "width": frame.width,
            "height": frame.height,
            "corner_radius": frame.corner_radius,
            "stroke_width": frame.stroke_width,
        },
        "params": result.params.to_dict(),
        "records": [record.to_dict() for record in result.records],
    }


def validate_result_payload(payload: Dict[str, Any]) -> List[str]:
    """Schema errors for an exported result (empty list = valid)."""
    return [
        f"{'.'.join(str(p) for p in error.path) or '<root>'}: {error.message}"
        for error in _RESULT_VALIDATOR.iter_errors(payload)
    ]


def save_result_json(result: PuzzleResult, path: PathLike, indent: int = 2) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(result_to_dict(result), indent=indent), encoding="utf-8")
    return out
