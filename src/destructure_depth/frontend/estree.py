"""ESTree JSON → pattern nodes.

Accepts the JSON that acorn, espree or ``@babel/parser`` (with the
``estree`` plugin) produce.  Only the node types that can appear on the
left of a destructuring are translated; right-hand sides are kept opaque.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from destructure_depth.errors import EstreeError
from destructure_depth.model.pattern import (
    ArrayPattern,
    AssignmentExpression,
    AssignmentPattern,
    Expression,
    Identifier,
    MemberTarget,
    ObjectPattern,
    PatternNode,
    Property,
    RestElement,
    SourceLocation,
    VariableDeclarator,
)

# Babel without the estree plugin, and older espree releases.
_PROPERTY_TYPES = frozenset({"Property", "ObjectProperty"})
_REST_TYPES = frozenset({"RestElement", "RestProperty", "ExperimentalRestProperty"})
_MEMBER_TYPES = frozenset({"MemberExpression", "OptionalMemberExpression"})


def _type_of(node: Any) -> str:
    if not isinstance(node, Mapping) or not isinstance(node.get("type"), str):
        raise EstreeError(f"expected an ESTree node, got {type(node).__name__}")
    return node["type"]


def location_from_estree(node: Mapping[str, Any]) -> SourceLocation | None:
    """Line/column from ``loc``; ``None`` when the parser omitted it."""
    loc = node.get("loc")
    if not isinstance(loc, Mapping) or not isinstance(loc.get("start"), Mapping):
        return None
    start = loc["start"]
    end = loc.get("end")
    if not isinstance(end, Mapping):
        end = {}
    return SourceLocation(
        line=_position(start.get("line")) or 0,
        column=_position(start.get("column")) or 0,
        end_line=_position(end.get("line")),
        end_column=_position(end.get("column")),
    )


def _position(value: Any) -> int | None:
    # JSON numbers only; bools are ints in Python
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _children(node: Mapping[str, Any], key: str) -> list[Any]:
    """Return the list under *key*, ``[]`` when absent."""
    value = node.get(key, [])
    if not isinstance(value, list):
        node_type = node.get("type")
        raise EstreeError(f"{node_type}.{key} is not a list", node_type=node_type)
    return value


def expression_from_estree(node: Mapping[str, Any] | None) -> Expression | None:
    if node is None:
        return None
    return Expression(type=_type_of(node), loc=location_from_estree(node))


def _child(node: Mapping[str, Any], key: str) -> Any:
    """Return the required child *key* of *node*."""
    if key not in node:
        node_type = node.get("type")
        raise EstreeError(f"{node_type} has no '{key}'", node_type=node_type)
    return node[key]


def _key_name(prop: Mapping[str, Any]) -> str | None:
    if prop.get("computed"):
        return None
    key = prop.get("key")
    if not isinstance(key, Mapping):
        return None
    if key.get("type") == "Identifier":
        return key.get("name")
    # Literal / StringLiteral / NumericLiteral keys
    if "value" in key:
        return str(key["value"])
    return None


def _member_text(node: Mapping[str, Any]) -> str:
    obj = node.get("object")
    prop = node.get("property")
    if not isinstance(obj, Mapping):
        obj = {}
    if not isinstance(prop, Mapping):
        prop = {}
    base = obj.get("name") or ("this" if obj.get("type") == "ThisExpression" else "…")
    if node.get("computed"):
        return f"{base}[…]"
    return f"{base}.{prop.get('name', '…')}"


def _property_from_estree(node: Mapping[str, Any]) -> Property | RestElement:
    node_type = _type_of(node)
    if node_type in _REST_TYPES:
        return RestElement(
            argument=pattern_from_estree(_child(node, "argument")),
            loc=location_from_estree(node),
        )
    if node_type not in _PROPERTY_TYPES:
        raise EstreeError(
            f"unexpected {node_type} inside ObjectPattern", node_type=node_type
        )
    return Property(
        key=_key_name(node),
        value=pattern_from_estree(_child(node, "value")),
        shorthand=bool(node.get("shorthand", False)),
        computed=bool(node.get("computed", False)),
        loc=location_from_estree(node),
    )


def pattern_from_estree(node: Mapping[str, Any]) -> PatternNode:
    """Translate one ESTree pattern (binding or assignment target).

    Raises
    ------
    EstreeError
        For node types that cannot appear in a pattern position.
    """
    node_type = _type_of(node)
    loc = location_from_estree(node)

    if node_type == "Identifier":
        return Identifier(name=node.get("name", ""), loc=loc)
    if node_type == "ObjectPattern":
        return ObjectPattern(
            properties=tuple(_property_from_estree(p) for p in _children(node, "properties")),
            loc=loc,
        )
    if node_type == "ArrayPattern":
        return ArrayPattern(
            elements=tuple(
                None if el is None else pattern_from_estree(el)
                for el in _children(node, "elements")
            ),
            loc=loc,
        )
    if node_type == "AssignmentPattern":
        return AssignmentPattern(
            left=pattern_from_estree(_child(node, "left")),
            right=expression_from_estree(_child(node, "right")),
            loc=loc,
        )
    if node_type in _REST_TYPES:
        return RestElement(argument=pattern_from_estree(_child(node, "argument")), loc=loc)
    if node_type in _MEMBER_TYPES:
        return MemberTarget(text=_member_text(node), loc=loc)
    if node_type in {"TSAsExpression", "TSNonNullExpression", "TSTypeAssertion"}:
        return pattern_from_estree(_child(node, "expression"))
    raise EstreeError(f"{node_type} is not a pattern", node_type=node_type)


# ── constructs ───────────────────────────────────────────────────────


def declarator_from_estree(node: Mapping[str, Any]) -> VariableDeclarator:
    return VariableDeclarator(
        id=pattern_from_estree(_child(node, "id")),
        init=expression_from_estree(node.get("init")),
        loc=location_from_estree(node),
    )


def assignment_from_estree(node: Mapping[str, Any]) -> AssignmentExpression:
    return AssignmentExpression(
        operator=node.get("operator", "="),
        left=pattern_from_estree(_child(node, "left")),
        right=expression_from_estree(_child(node, "right")),
        loc=location_from_estree(node),
    )


# ── documents ────────────────────────────────────────────────────────


def program_from_document(document: Any) -> Mapping[str, Any]:
    """Unwrap a parsed JSON document into its ESTree ``Program``.

    Accepts a bare ``Program``/``File`` node or an ``{"ast": ...}`` envelope.
    """
    if isinstance(document, Mapping) and "ast" in document and "type" not in document:
        document = document["ast"]
    node_type = _type_of(document)
    if node_type == "File":  # babel wraps Program in File
        document = document.get("program")
        node_type = _type_of(document)
    if node_type != "Program":
        raise EstreeError(f"expected a Program node, got {node_type}", node_type=node_type)
    return document


def load_program(path: Path) -> Mapping[str, Any]:
    """Read an ESTree JSON file and return its ``Program`` node.

    Raises ``OSError``, ``UnicodeDecodeError``, ``json.JSONDecodeError`` or
    ``EstreeError``.
    """
    document = json.loads(path.read_text(encoding="utf-8"))
    return program_from_document(document)
