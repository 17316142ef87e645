"""Rules turn ESTree programs into findings.

Every rule exposes ``id``, ``version`` and
``lint_program(program, rel) -> list[Finding]``; ``core.runner.run_lint``
accepts any object with that shape and only calls ``lint_program``.

Available rules:
    - MaxDepthRule: ``destructure-depth/max-depth``
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from destructure_depth.model.finding import Finding


class Rule(Protocol):
    """Every rule must expose ``id``, ``version``, and ``lint_program()``."""

    id: str
    version: str

    def lint_program(self, program: Mapping[str, Any], rel: str) -> list[Finding]:
        """Lint one ESTree ``Program`` and return findings for *rel*."""
        ...


# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "MaxDepthRule":
        from .max_depth import MaxDepthRule
        return MaxDepthRule
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
