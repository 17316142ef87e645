"""``destructure-depth/max-depth``: limit how deeply objects are destructured.

Rules
-----
destructure-depth/max-depth  (message ``tooDeeply``)
    A variable declarator with an initializer, or a plain ``=`` assignment,
    whose object pattern nests deeper than the configured maximum.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from destructure_depth.analyzers.depth import check
from destructure_depth.core.rule_config import RuleSetting
from destructure_depth.frontend.walker import iter_constructs
from destructure_depth.model.finding import Finding, Location, make_fingerprint
from destructure_depth.model.pattern import (
    AssignmentExpression,
    Construct,
    VariableDeclarator,
)
from destructure_depth.model.violation import Violation
from destructure_depth.rules import MAX_DEPTH

logger = logging.getLogger(__name__)


class MaxDepthRule:
    """Reports destructuring patterns nested deeper than ``max_depth``."""

    id: str = MAX_DEPTH
    version: str = "1.0.0"

    def __init__(self, setting: RuleSetting | None = None) -> None:
        self.setting = setting or RuleSetting()

    # ── call sites ───────────────────────────────────────────────────

    def check_variable_declarator(self, node: VariableDeclarator) -> Violation | None:
        # `let { a: { b } };` without a value is never checked
        if node.init is None:
            return None
        return check(node.id, node.init, node, self.setting.config)

    def check_assignment_expression(self, node: AssignmentExpression) -> Violation | None:
        # compound operators (`+=`, `||=`, ...) never destructure
        if node.operator != "=":
            return None
        return check(node.left, node.right, node, self.setting.config)

    def check_construct(self, node: Construct) -> Violation | None:
        if isinstance(node, VariableDeclarator):
            return self.check_variable_declarator(node)
        return self.check_assignment_expression(node)

    # ── whole trees ──────────────────────────────────────────────────

    def check_all(self, constructs: Iterable[Construct]) -> list[Violation]:
        if not self.setting.enabled:
            return []
        violations: list[Violation] = []
        for node in constructs:
            violation = self.check_construct(node)
            if violation is not None:
                violations.append(violation)
        return violations

    def lint_program(self, program: Mapping[str, Any], rel: str) -> list[Finding]:
        """Lint one ESTree ``Program`` and return findings for *rel*."""
        if not self.setting.enabled:
            logger.debug("%s is off; skipping %s", self.id, rel)
            return []
        findings: list[Finding] = []
        seen: dict[tuple[int | None, int | None], int] = {}
        for violation in self.check_all(iter_constructs(program)):
            loc = violation.loc
            position = (loc.line, loc.column) if loc else (None, None)
            occurrence = seen.get(position, 0)
            seen[position] = occurrence + 1
            findings.append(self._to_finding(violation, rel, occurrence))
        return findings

    def _to_finding(self, violation: Violation, rel: str, occurrence: int = 0) -> Finding:
        loc = violation.loc
        line = loc.line if loc else None
        column = loc.column if loc else None
        return Finding(
            finding_id="",  # assigned by the runner
            rule_id=self.id,
            message_id=violation.message_id,
            severity=self.setting.severity,
            node_type=violation.kind,
            message=violation.message,
            location=Location(
                path=rel,
                line=line,
                column=column,
                end_line=loc.end_line if loc else None,
                end_column=loc.end_column if loc else None,
            ),
            fingerprint=make_fingerprint(
                self.id, rel, line, column, violation.message, occurrence
            ),
            data=violation.data,
        )
