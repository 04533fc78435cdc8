"""glasscut command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import PRESETS, PuzzleParams, get_preset, validate_params_dict
from .io import load_params, save_params, save_result_json

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="glasscut: broken-glass jigsaw templates")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for progress, -vv for debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate a puzzle SVG")
    generate.add_argument("--params", dest="params_path", help="JSON parameter file")
    generate.add_argument("--preset", choices=sorted(PRESETS), help="Start from a named preset")
    generate.add_argument("--set", dest="overrides", action="append", default=[],
                          metavar="KEY=VALUE", help="Override one parameter (repeatable)")
    generate.add_argument("--out", dest="output_path", required=True)
    generate.add_argument("--json", dest="json_path", help="Also write the polyline records as JSON")
    generate.add_argument("--png", dest="png_path", help="Also render a PNG preview")
    generate.add_argument("--dpi", type=int, default=150)
    generate.add_argument("--diagnose", action="store_true")
    generate.add_argument("--diagnose-json", dest="diagnose_json")

    validate = sub.add_parser("validate-params", help="Validate a JSON parameter file")
    validate.add_argument("--in", dest="input_path", required=True)

    dump = sub.add_parser("dump-params", help="Write a preset's parameters as JSON")
    dump.add_argument("--preset", choices=sorted(PRESETS), default="default")
    dump.add_argument("--out", dest="output_path", required=True)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "generate":
        _cmd_generate(args)

    elif args.command == "validate-params":
        _cmd_validate_params(args)

    elif args.command == "dump-params":
        params = get_preset(args.preset)
        save_params(params, args.output_path)
        print(f"Saved {args.output_path}")


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _resolve_params(args) -> PuzzleParams:
    if args.params_path:
        params = load_params(args.params_path)
    elif args.preset:
        params = get_preset(args.preset)
    else:
        params = PuzzleParams()
    if args.overrides:
        params = params.with_overrides(args.overrides)
    return params


def _cmd_generate(args) -> None:
    from .diagnostics import diagnostics_lines, diagnostics_report
    from .pipeline import GenerationPass
    from .svg import save_svg

    if args.params_path and args.preset:
        logger.warning("--preset ignored because --params was given")
    try:
        params = _resolve_params(args)
    except (OSError, ValueError) as exc:
        print(exc)
        raise SystemExit(1)

    generation = GenerationPass(
        params,
        before=lambda name, idx, total: logger.info("[%d/%d] %s", idx + 1, total, name),
    )
    result = generation.run()
    if not result.records:
        logger.warning("no paths generated; check angle_count, ring_count and radii")

    save_svg(result, args.output_path)
    if args.json_path:
        save_result_json(result, args.json_path)
        print(f"Saved {args.json_path}")
    if args.png_path:
        from .render import render_png
        try:
            render_png(result, args.png_path, dpi=args.dpi)
        except RuntimeError as exc:
            print(exc)
            raise SystemExit(1)
        print(f"Saved {args.png_path}")
    if args.diagnose or args.diagnose_json:
        report = diagnostics_report(result, generation)
        if args.diagnose:
            for line in diagnostics_lines(report):
                print(line)
        if args.diagnose_json:
            out = Path(args.diagnose_json)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved {args.output_path}")


def _cmd_validate_params(args) -> None:
    try:
        payload = json.loads(Path(args.input_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(exc)
        raise SystemExit(1)
    errors: List[str] = validate_params_dict(payload)
    if errors:
        for error in errors:
            print(error)
        raise SystemExit(1)
    print("OK")


if __name__ == "__main__":
    main()
