"""Exceptions raised at the package's input boundaries.

Violations are never raised; they are returned as data.
"""

from __future__ import annotations


class DestructureDepthError(Exception):
    """Base class for every error this package raises on purpose."""


class EstreeError(DestructureDepthError, ValueError):
    """Raised when an ESTree document does not have the expected shape."""

    def __init__(self, message: str, *, node_type: str | None = None) -> None:
        self.node_type = node_type
        super().__init__(message)


class RuleConfigError(DestructureDepthError, ValueError):
    """Raised when a rule entry or its options fail validation.

    ``cause`` holds the underlying ``jsonschema.ValidationError`` when the
    failure came from schema validation.
    """

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
