"""Tests for config.py — parameter record, overrides, schema and presets."""

from __future__ import annotations

import math

import pytest

from glasscut.config import (
    DEFAULT,
    PRESETS,
    WAVY_EDGES,
    PuzzleParams,
    get_preset,
    validate_params_dict,
)


class TestDerivedValues:
    def test_canvas_size(self):
        p = PuzzleParams()
        assert (p.width, p.height) == (240.0, 120.0)
        assert p.min_side == 120.0

    def test_default_origin(self):
        assert PuzzleParams().origin == (120.0, 90.0)

    def test_explicit_origin(self):
        assert PuzzleParams(origin_x=10.0, origin_y=20.0).origin == (10.0, 20.0)

    def test_radius_bounds(self):
        min_r, max_r = PuzzleParams().radius_bounds
        assert min_r == pytest.approx(11.4)
        assert max_r == pytest.approx(57.6)

    def test_jitter_radius_scales_with_canvas(self):
        assert PuzzleParams(jitter_radius=0.1).jitter_radius_mm == pytest.approx(12.0)

    def test_amplitude_only_when_noise_enabled(self):
        assert PuzzleParams(edge_amplitude=2.0).effective_amplitude == 0.0
        assert PuzzleParams(edge_amplitude=2.0, noise_enabled=True).effective_amplitude == 2.0

    def test_tab_params(self):
        tp = PuzzleParams(tab_width=0.4, tab_angle=-20.0).tab_params()
        assert tp.relative_width == 0.4
        assert tp.angle_degrees == -20.0
        assert PuzzleParams(tabs_enabled=False).tab_params() is None


# ═══════════════════════════════════════════════════════════════════
# Serialisation and overrides
# ═══════════════════════════════════════════════════════════════════


class TestSerialisation:
    def test_round_trip(self):
        p = PuzzleParams(seed=7, origin_x=33.0, edge_profile="noise")
        assert PuzzleParams.from_dict(p.to_dict()) == p

    def test_partial_payload_takes_defaults(self):
        p = PuzzleParams.from_dict({"seed": 99, "ring_count": 4})
        assert p.seed == 99
        assert p.ring_count == 4
        assert p.angle_count == DEFAULT.angle_count

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="colour"):
            PuzzleParams.from_dict({"colour": "red"})

    def test_wrong_type_rejected(self):
        with pytest.raises(ValueError):
            PuzzleParams.from_dict({"grid_width": "wide"})

    def test_bad_profile_rejected(self):
        with pytest.raises(ValueError):
            PuzzleParams.from_dict({"edge_profile": "sawtooth"})


class TestOverrides:
    def test_typed_values(self):
        p = DEFAULT.with_overrides([
            "seed=7",
            "growth_factor=1.5",
            "noise_enabled=true",
            "edge_profile=noise",
            "origin_x=none",
        ])
        assert p.seed == 7
        assert p.growth_factor == 1.5
        assert p.noise_enabled is True
        assert p.edge_profile == "noise"
        assert p.origin_x is None

    def test_optional_float(self):
        assert DEFAULT.with_overrides(["origin_y=42.5"]).origin_y == 42.5

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Bad override"):
            DEFAULT.with_overrides(["nope=1"])

    def test_missing_equals(self):
        with pytest.raises(ValueError):
            DEFAULT.with_overrides(["seed"])

    def test_bad_number(self):
        with pytest.raises(ValueError, match="integer"):
            DEFAULT.with_overrides(["seed=abc"])

    def test_bool_values(self):
        p = DEFAULT.with_overrides(["highlight_tabs=on", "noise_enabled=0"])
        assert p.highlight_tabs is True
        assert p.noise_enabled is False

    def test_bad_bool(self):
        with pytest.raises(ValueError, match="boolean"):
            DEFAULT.with_overrides(["highlight_tabs=ture"])

    def test_source_params_unchanged(self):
        DEFAULT.with_overrides(["seed=1"])
        assert DEFAULT.seed == 12345


# ═══════════════════════════════════════════════════════════════════
# Schema and presets
# ═══════════════════════════════════════════════════════════════════


def test_schema_accepts_defaults():
    assert validate_params_dict(PuzzleParams().to_dict()) == []


def test_schema_reports_paths():
    errors = validate_params_dict({"cell_size": -1})
    assert len(errors) == 1
    assert errors[0].startswith("cell_size:")


def test_schema_rejects_non_object():
    assert validate_params_dict([1, 2, 3])


def test_presets():
    assert set(PRESETS) == {"default", "dense-shards", "large-shards", "wavy-edges"}
    for params in PRESETS.values():
        assert validate_params_dict(params.to_dict()) == []
    assert get_preset("wavy-edges") is WAVY_EDGES
    assert WAVY_EDGES.effective_amplitude > 0


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset("shattered")


def test_default_jitter_angle():
    assert DEFAULT.jitter_angle == pytest.approx(math.pi / 16)
