"""
destructure_depth.api
=====================

Programmatic entrypoints for using the rule as a library.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - JSON-friendly outputs that match the bundled report schema

Usage::

    from destructure_depth.api import lint_path, lint_tree, setting_from

    setting = setting_from(["error", {"object": {"max": 1}}])
    findings = lint_tree(program_dict, setting)
    report, report_dict = lint_path("build/ast", setting=setting, ci_mode=True)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from destructure_depth.analyzers.max_depth import MaxDepthRule
from destructure_depth.contracts.load import validate_instance
from destructure_depth.core.discover import discover_estree_files
from destructure_depth.core.rule_config import (
    RuleSetting,
    load_config,
    parse_rule_entry,
)
from destructure_depth.core.runner import run_lint
from destructure_depth.frontend.estree import program_from_document
from destructure_depth.model.finding import Finding
from destructure_depth.model.report import LintReport
from destructure_depth.rules import MAX_DEPTH, RECOMMENDED_CONFIG

__all__ = [
    "lint_path",
    "lint_tree",
    "load_config",
    "setting_from",
    "validate_instance",
]


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def setting_from(entry: Any = None) -> RuleSetting:
    """Build a ``RuleSetting`` from a rule entry (``None`` → recommended)."""
    if entry is None:
        entry = RECOMMENDED_CONFIG["rules"][MAX_DEPTH]
    return parse_rule_entry(entry)


def lint_tree(
    document: Mapping[str, Any],
    setting: Optional[RuleSetting] = None,
    *,
    path: str = "<input>",
) -> list[Finding]:
    """Lint one in-memory ESTree document (``Program``, ``File`` or envelope)."""
    rule = MaxDepthRule(setting or setting_from())
    return rule.lint_program(program_from_document(document), path)


def lint_path(
    root: str | Path,
    *,
    setting: Optional[RuleSetting] = None,
    config_path: str | Path | None = None,
    include: Optional[list[str]] = None,
    exclude: Optional[list[str]] = None,
    out_path: str | Path | None = None,
    ci_mode: bool = False,
) -> tuple[LintReport, dict[str, Any]]:
    """Lint every ESTree JSON file under *root* (or *root* itself).

    Parameters
    ----------
    root:
        Directory to scan, or a single ESTree JSON file.
    setting:
        Rule setting to use.  Takes precedence over *config_path*.
    config_path:
        JSON/YAML config file to load the rule setting from.
    include, exclude:
        Discovery globs / directory basenames.
    out_path:
        Optional file to write the report JSON to.
    ci_mode:
        If True, output is byte-deterministic (fixed run id and timestamp).

    Returns
    -------
    ``(LintReport, report_dict)``

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    RuleConfigError
        If the configuration is invalid.
    """
    root_p = _to_path(root).resolve()
    if not root_p.exists():
        raise FileNotFoundError(f"lint_path: root does not exist: {root_p}")

    if setting is None:
        setting = load_config(_to_path(config_path)) if config_path else setting_from()

    out_p = _to_path(out_path) if out_path is not None else None
    files = discover_estree_files(root_p, include=include, exclude=exclude)
    if out_p is not None:
        # a previous report inside the scanned tree is not an input
        files = [f for f in files if f != out_p.resolve()]
    report = run_lint(root_p, files, setting, out_path=out_p, ci_mode=ci_mode)
    return report, report.to_dict()
