"""Tests for the glasscut command-line interface."""

from __future__ import annotations

import json

import pytest

from glasscut.cli import build_parser, main
from glasscut.config import PuzzleParams
from glasscut.io import load_params


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


class TestGenerate:
    def test_writes_svg(self, tmp_path, capsys):
        out = tmp_path / "puzzle.svg"
        main(["generate", "--out", str(out), "--set", "angle_count=10", "--set", "ring_count=4"])
        assert out.exists()
        assert out.read_text(encoding="utf-8").lstrip().startswith("<")
        assert f"Saved {out}" in capsys.readouterr().out

    def test_json_and_diagnostics(self, tmp_path, capsys):
        out = tmp_path / "puzzle.svg"
        js = tmp_path / "puzzle.json"
        report = tmp_path / "reports" / "report.json"
        main([
            "generate", "--preset", "default", "--set", "seed=3",
            "--out", str(out), "--json", str(js),
            "--diagnose", "--diagnose-json", str(report),
        ])
        printed = capsys.readouterr().out
        assert "quality gates:" in printed
        assert json.loads(js.read_text(encoding="utf-8"))["params"]["seed"] == 3
        assert json.loads(report.read_text(encoding="utf-8"))["passed"] is True

    def test_params_file(self, tmp_path):
        params_path = tmp_path / "params.json"
        params_path.write_text(json.dumps({"seed": 21, "angle_count": 9}), encoding="utf-8")
        js = tmp_path / "out.json"
        main(["generate", "--params", str(params_path), "--out", str(tmp_path / "a.svg"),
              "--json", str(js)])
        assert json.loads(js.read_text(encoding="utf-8"))["params"]["angle_count"] == 9

    def test_unknown_override_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["generate", "--out", str(tmp_path / "x.svg"), "--set", "wobble=2"])
        assert exc.value.code == 1
        assert "wobble" in capsys.readouterr().out
        assert not (tmp_path / "x.svg").exists()

    def test_missing_params_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["generate", "--params", str(tmp_path / "nope.json"),
                  "--out", str(tmp_path / "x.svg")])
        assert exc.value.code == 1


class TestParamsCommands:
    def test_dump_then_validate(self, tmp_path, capsys):
        path = tmp_path / "params.json"
        main(["dump-params", "--out", str(path)])
        assert load_params(path) == PuzzleParams()
        main(["validate-params", "--in", str(path)])
        assert capsys.readouterr().out.strip().endswith("OK")

    def test_validate_rejects_bad_values(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"ring_count": "many"}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["validate-params", "--in", str(path)])
        assert exc.value.code == 1
        assert "ring_count" in capsys.readouterr().out

    def test_validate_rejects_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["validate-params", "--in", str(path)])
        assert exc.value.code == 1


def test_wavy_preset_passes_quality_gates(tmp_path):
    report = tmp_path / "diag" / "wavy.json"
    main(["generate", "--preset", "wavy-edges", "--out", str(tmp_path / "wavy.svg"),
          "--diagnose-json", str(report)])
    assert json.loads(report.read_text(encoding="utf-8"))["passed"] is True


def test_bad_bool_override_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["generate", "--out", str(tmp_path / "x.svg"), "--set", "highlight_tabs=ture"])
    assert exc.value.code == 1
    assert "boolean" in capsys.readouterr().out
