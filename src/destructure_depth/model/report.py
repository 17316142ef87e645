"""LintReport — the immutable, schema-aligned lint artifact."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from destructure_depth import __version__
from destructure_depth.core.config import EffectiveConfig
from destructure_depth.model import Severity
from destructure_depth.model.finding import Finding
from destructure_depth.rules import MAX_DEPTH


@dataclass(frozen=True, slots=True)
class FileError:
    """A file that could not be linted (unreadable, not JSON, not ESTree)."""

    path: str
    message: str


def _config_dict(config: EffectiveConfig) -> dict[str, Any]:
    return {
        "max_depth": config.max_depth,
        "enabled": {
            kind.value: {"array": toggle.array, "object": toggle.object}
            for kind, toggle in config.enabled.items()
        },
        "enforce_for_renamed_properties": config.enforce_for_renamed_properties,
    }


@dataclass(slots=True)
class LintReport:
    """Assembled lint result matching ``lint_report.schema.json``.

    Constructed by ``core.runner`` once every file has been linted.
    """

    # ── run metadata ────────────────────────────────────────────────
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
    )
    tool_version: str = __version__
    rule_id: str = MAX_DEPTH
    severity: Severity = Severity.ERROR
    config: EffectiveConfig = field(default_factory=EffectiveConfig)

    # ── results ─────────────────────────────────────────────────────
    files_checked: int = 0
    findings: list[Finding] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity is Severity.WARN)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the full report JSON matching the schema."""
        severity_counts: dict[str, int] = {}
        for f in self.findings:
            severity_counts[f.severity.value] = severity_counts.get(f.severity.value, 0) + 1

        return {
            "schema_version": "lint_report_v1",
            "run": {
                "run_id": self.run_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "rule_id": self.rule_id,
                "severity": self.severity.value,
                "config": _config_dict(self.config),
            },
            "summary": {
                "files_checked": self.files_checked,
                "files_failed": len(self.errors),
                "counts": {
                    "findings_total": len(self.findings),
                    "by_severity": severity_counts,
                },
            },
            "findings": [f.to_dict() for f in self.findings],
            "errors": [{"path": e.path, "message": e.message} for e in self.errors],
        }
