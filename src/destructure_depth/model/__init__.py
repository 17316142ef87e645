"""Enums shared across the rule, the frontend and the report layer."""

from __future__ import annotations

from enum import Enum


class ConstructKind(str, Enum):
    """Syntactic category of a checked statement.

    Values match the ESTree ``type`` tag of the report node.
    """

    VARIABLE_DECLARATOR = "VariableDeclarator"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"


class DestructuringType(str, Enum):
    """Which destructuring flavour an enable flag refers to."""

    ARRAY = "array"
    OBJECT = "object"


class Severity(str, Enum):
    """ESLint-style rule level."""

    OFF = "off"
    WARN = "warn"
    ERROR = "error"
