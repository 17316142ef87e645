"""Runner — lints ESTree files with one rule and builds a LintReport."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from destructure_depth.analyzers import Rule
from destructure_depth.analyzers.max_depth import MaxDepthRule
from destructure_depth.contracts.load import REPORT_SCHEMA, validate_instance
from destructure_depth.core.rule_config import RuleSetting
from destructure_depth.errors import EstreeError
from destructure_depth.frontend.estree import load_program
from destructure_depth.model.finding import Finding
from destructure_depth.model.report import FileError, LintReport
from destructure_depth.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)

# Fixed values for deterministic (--ci) output.
DETERMINISTIC_RUN_ID = "00000000-0000-0000-0000-000000000000"
DETERMINISTIC_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def _rel(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _assign_ids(findings: list[Finding]) -> None:
    # Stable IDs: derived from the fingerprint plus position in sorted order
    for i, f in enumerate(findings):
        object.__setattr__(f, "finding_id", f"dd_{f.fingerprint[7:15]}_{i:04d}")


def run_lint(
    root: Path,
    files: list[Path],
    setting: RuleSetting,
    *,
    rule: Rule | None = None,
    out_path: Path | None = None,
    ci_mode: bool = False,
) -> LintReport:
    """Lint every file in *files* and assemble a ``LintReport``.

    *rule* defaults to ``MaxDepthRule(setting)``; *setting* is what the
    report records either way.

    Files that cannot be read, decoded or walked, or are not ESTree JSON,
    are logged, recorded in ``LintReport.errors`` and skipped; they never
    abort the run.
    """
    root = root.resolve()
    base = root if root.is_dir() else root.parent
    if rule is None:
        rule = MaxDepthRule(setting)

    findings: list[Finding] = []
    errors: list[FileError] = []
    checked = 0
    for path in files:
        rel = _rel(path, base)
        try:
            program = load_program(path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, EstreeError) as exc:
            _logger.warning("Skipping '%s': %s", rel, exc)
            errors.append(FileError(path=rel, message=str(exc)))
            continue
        except RecursionError:
            _logger.warning("Skipping '%s': JSON nests too deeply", rel)
            errors.append(FileError(path=rel, message="JSON nests too deeply to decode"))
            continue

        try:
            file_findings = rule.lint_program(program, rel)
        except EstreeError as exc:
            _logger.warning("Skipping '%s': malformed pattern: %s", rel, exc)
            errors.append(FileError(path=rel, message=str(exc)))
            continue
        except RecursionError:
            _logger.warning("Skipping '%s': pattern nests too deeply", rel)
            errors.append(FileError(path=rel, message="pattern nests too deeply to check"))
            continue

        checked += 1
        findings.extend(file_findings)
        _logger.debug("%s: %d finding(s)", rel, len(file_findings))

    findings.sort(
        key=lambda f: (f.location.path, f.location.line or 0, f.location.column or 0)
    )
    _assign_ids(findings)

    report = LintReport(
        severity=setting.severity,
        config=setting.config,
        files_checked=checked,
        findings=findings,
        errors=errors,
    )
    if ci_mode:
        report.run_id = DETERMINISTIC_RUN_ID
        report.created_at = DETERMINISTIC_TIMESTAMP

    # ── validate output against schema ─────────────────────────────
    report_dict = report.to_dict()
    validate_instance(report_dict, REPORT_SCHEMA)

    if out_path is not None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(stable_json_dumps(report_dict), encoding="utf-8")
        _logger.info("Report written to %s", out_path)

    return report
