"""Finding — a violation placed in a file, ready for reporting."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from . import ConstructKind, Severity


@dataclass(frozen=True, slots=True)
class Location:
    """Source-code location for a finding."""

    path: str
    line: int | None = None
    column: int | None = None
    end_line: int | None = None
    end_column: int | None = None


@dataclass(frozen=True, slots=True)
class Finding:
    """Immutable, schema-aligned lint finding.

    Corresponds to ``findings[]`` in ``lint_report.schema.json``.
    """

    finding_id: str
    rule_id: str
    message_id: str
    severity: Severity
    node_type: ConstructKind
    message: str
    location: Location
    fingerprint: str
    data: dict = field(default_factory=dict)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        loc: dict = {"path": self.location.path}
        for key in ("line", "column", "end_line", "end_column"):
            value = getattr(self.location, key)
            if value is not None:
                loc[key] = value
        return {
            "finding_id": self.finding_id,
            "rule_id": self.rule_id,
            "message_id": self.message_id,
            "severity": self.severity.value,
            "node_type": self.node_type.value,
            "message": self.message,
            "location": loc,
            "fingerprint": self.fingerprint,
            "data": dict(self.data),
        }


def make_fingerprint(
    rule_id: str,
    rel_path: str,
    line: int | None,
    column: int | None,
    message: str,
    occurrence: int = 0,
) -> str:
    """Deterministic finding fingerprint: sha256(rule|path|line|column|message).

    *occurrence* tells apart findings that share a position, e.g. every
    finding of a tree parsed without locations; it is appended only when
    non-zero.
    """
    # Normalize path separators for cross-platform stability
    rel_path = rel_path.replace("\\", "/")
    parts = [rule_id, rel_path, str(line or 0), str(column or 0), message.strip()]
    if occurrence:
        parts.append(str(occurrence))
    payload = "|".join(parts)
    return "sha256:" + hashlib.sha256(payload.encode()).hexdigest()
