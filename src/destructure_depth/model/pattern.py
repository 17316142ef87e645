"""Pattern nodes: the closed set of destructuring targets the rule understands.

The tree is owned by whoever built it (normally ``frontend.estree``) and is
never mutated by the rule.  Every class is a frozen dataclass, so a tree can
be shared freely between checks.

Variants
--------
ObjectPattern       ``{ a, b: { c } }``: ordered properties
ArrayPattern        ``[a, , b]``: holes are ``None``
AssignmentPattern   ``{ c } = {}``: a target paired with a default value
Identifier          ``a``: leaf
RestElement         ``...rest``: leaf for depth purposes
MemberTarget        ``obj.a``: non-binding assignment target, leaf
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from destructure_depth.model import ConstructKind


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node in its source file (1-based lines, 0-based columns)."""

    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class MemberTarget:
    """``a.b`` / ``a[b]`` on the left of an assignment."""

    text: str
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class RestElement:
    argument: "PatternNode"
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class Expression:
    """Opaque right-hand-side expression (or default value)."""

    type: str
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class AssignmentPattern:
    left: "PatternNode"
    right: Expression
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class Property:
    """One ``key: value`` entry of an object pattern.

    ``key`` is ``None`` for computed keys (``{ [k]: v }``).
    """

    key: str | None
    value: "PatternNode"
    shorthand: bool = False
    computed: bool = False
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class ObjectPattern:
    properties: tuple[Union[Property, RestElement], ...] = ()
    loc: SourceLocation | None = None


@dataclass(frozen=True, slots=True)
class ArrayPattern:
    elements: tuple[Optional["PatternNode"], ...] = ()
    loc: SourceLocation | None = None


PatternNode = Union[
    ObjectPattern,
    ArrayPattern,
    AssignmentPattern,
    Identifier,
    RestElement,
    MemberTarget,
]


# ── checked constructs ───────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class VariableDeclarator:
    """``id = init`` inside a ``var``/``let``/``const`` declaration."""

    id: PatternNode
    init: Expression | None = None
    loc: SourceLocation | None = None

    kind = ConstructKind.VARIABLE_DECLARATOR


@dataclass(frozen=True, slots=True)
class AssignmentExpression:
    """``left <operator> right``; only ``=`` can destructure."""

    operator: str
    left: PatternNode
    right: Expression
    loc: SourceLocation | None = None

    kind = ConstructKind.ASSIGNMENT_EXPRESSION


Construct = Union[VariableDeclarator, AssignmentExpression]
