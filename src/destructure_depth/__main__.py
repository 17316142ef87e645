"""CLI entry-point for destructure_depth.

Usage:
    python -m destructure_depth check <path> [--config FILE] [--max N] [--json]
    python -m destructure_depth check <path> --out report.json --ci
    python -m destructure_depth check <path> --severity warn --max-warnings 10
    python -m destructure_depth validate-options <options.json|options.yml>
    python -m destructure_depth validate <instance.json> <schema_name>
    python -m destructure_depth schema

``<path>`` is an ESTree JSON file, or a directory searched for ``*.json``.
Produce the JSON with any ESTree parser, e.g.
``acorn --ecma2022 --locations src/app.js > build/ast/app.json``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from destructure_depth import __version__
from destructure_depth.utils.exit_codes import ExitCode
from destructure_depth.utils.json_norm import stable_json_dump


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="destructure-depth",
        description="Flag destructuring patterns that nest objects too deeply.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Verbose logging.",
    )
    sub = p.add_subparsers(dest="command")

    # ── check ────────────────────────────────────────────────────────
    check_p = sub.add_parser(
        "check",
        help="Lint ESTree JSON files.",
    )
    check_p.add_argument(
        "path",
        type=Path,
        help="ESTree JSON file, or a directory of parser output (every *.json but project manifests is linted).",
    )
    check_p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON/YAML config file (default: recommended preset).",
    )
    check_p.add_argument(
        "--max",
        dest="max_depth",
        type=int,
        default=None,
        help="Override the maximum object destructuring depth.",
    )
    check_p.add_argument(
        "--severity",
        choices=["warn", "error"],
        default=None,
        help="Override the rule severity.",
    )
    check_p.add_argument(
        "--max-warnings",
        dest="max_warnings",
        type=int,
        default=-1,
        help="Fail when more than N warnings are found (default: unlimited).",
    )
    check_p.add_argument(
        "--include",
        action="append",
        default=None,
        metavar="GLOB",
        help="Glob of files to lint (repeatable, default: **/*.json).",
    )
    check_p.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="DIR",
        help="Directory basename to skip (repeatable).",
    )
    check_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the full report JSON to stdout.",
    )
    check_p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Also write the report JSON to this file.",
    )
    check_p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Enable deterministic output (fixed run id and timestamp).",
    )

    # ── validate-options ─────────────────────────────────────────────
    vo_p = sub.add_parser(
        "validate-options",
        help="Validate the rule's option slots against the bundled schema.",
    )
    vo_p.add_argument("options", type=Path, help="JSON/YAML file holding the options list.")

    # ── validate ─────────────────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON instance against a bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument("schema_name", help="Schema filename, e.g. lint_report.schema.json")

    # ── schema ───────────────────────────────────────────────────────
    sub.add_parser(
        "schema",
        help="Print the rule's options schema.",
    )
    return p


def _print_human(report) -> None:
    """Pretty-print findings grouped by file to stderr."""
    current = None
    for f in report.findings:
        if f.location.path != current:
            current = f.location.path
            print(f"\n{current}", file=sys.stderr)
        pos = f"{f.location.line or 0}:{f.location.column or 0}"
        print(
            f"  {pos:>8}  {f.severity.value:<5}  {f.message}  {f.rule_id}",
            file=sys.stderr,
        )
    for e in report.errors:
        print(f"\n{e.path}\n  error  {e.message}", file=sys.stderr)

    total = len(report.findings)
    if total or report.errors:
        print(
            f"\n✖ {total} problem(s) ({report.error_count} error(s), "
            f"{report.warning_count} warning(s)) in {report.files_checked} file(s)"
            + (f"; {len(report.errors)} file(s) could not be linted" if report.errors else ""),
            file=sys.stderr,
        )
    else:
        print(f"✔ {report.files_checked} file(s) checked, no problems", file=sys.stderr)


def _handle_check(args: argparse.Namespace) -> int:
    """Dispatch ``destructure-depth check <path>``."""
    from dataclasses import replace

    from destructure_depth.api import lint_path, setting_from
    from destructure_depth.core.rule_config import load_config
    from destructure_depth.errors import RuleConfigError
    from destructure_depth.model import Severity

    target: Path = args.path.resolve()
    if not target.exists():
        print(f"error: path does not exist: {target}", file=sys.stderr)
        return ExitCode.ERROR

    try:
        setting = load_config(args.config) if args.config else setting_from()
    except (OSError, RuleConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    if args.max_depth is not None:
        if args.max_depth < 0:
            print("error: --max must be >= 0", file=sys.stderr)
            return ExitCode.ERROR
        setting = replace(setting, config=setting.config.with_max_depth(args.max_depth))
    if args.severity is not None:
        setting = replace(setting, severity=Severity(args.severity))

    report, report_dict = lint_path(
        target,
        setting=setting,
        include=args.include,
        exclude=args.exclude,
        out_path=args.out,
        ci_mode=args.ci_mode,
    )

    _print_human(report)
    if args.json_out:
        stable_json_dump(report_dict, sys.stdout)

    if report.errors:
        return ExitCode.ERROR
    if report.error_count:
        return ExitCode.VIOLATION
    if 0 <= args.max_warnings < report.warning_count:
        print(
            f"error: too many warnings ({report.warning_count}, "
            f"max {args.max_warnings})",
            file=sys.stderr,
        )
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS


def _handle_validate_options(args: argparse.Namespace) -> int:
    """Dispatch ``destructure-depth validate-options <file>``.

    Exit code contract: 0 valid, 1 schema violation, 2 unreadable input.
    """
    import jsonschema

    from destructure_depth.contracts.load import validate_options
    from destructure_depth.core.rule_config import read_document
    from destructure_depth.errors import RuleConfigError

    try:
        options = read_document(args.options)
    except (OSError, RuleConfigError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR

    if options is None:
        options = []
    if isinstance(options, dict):
        # a lone first slot is accepted for convenience
        options = [options]
    try:
        validate_options(options)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    print("OK")
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    """Dispatch ``destructure-depth validate <instance> <schema_name>``."""
    import json

    import jsonschema

    from destructure_depth.contracts.load import validate_file

    try:
        validate_file(args.instance, args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError, json.JSONDecodeError) as e:
        # schema_version mismatch is a ValueError, unknown schema an OSError
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _handle_schema(args: argparse.Namespace) -> int:
    from destructure_depth.contracts.load import OPTIONS_SCHEMA, load_schema

    stable_json_dump(load_schema(OPTIONS_SCHEMA), sys.stdout)
    return ExitCode.SUCCESS


_HANDLERS = {
    "check": _handle_check,
    "validate-options": _handle_validate_options,
    "validate": _handle_validate,
    "schema": _handle_schema,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (see ``utils.exit_codes``)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    handler = _HANDLERS.get(args.command)
    if handler is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR
    return int(handler(args))


if __name__ == "__main__":
    raise SystemExit(main())
