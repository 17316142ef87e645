"""Depth analyzer: how deeply an object pattern destructures.

Depth counts nested *object* patterns below the root::

    { a }                     -> 0
    { a: { b } }              -> 1
    { a: { b } = {} }         -> 1   (defaults recurse into the left side)
    { a, b: { c: { d } } }    -> 2
    { a: [ { b } ] }          -> 0   (array nesting is never counted)
"""

from __future__ import annotations

from destructure_depth.core.config import EffectiveConfig
from destructure_depth.model import DestructuringType
from destructure_depth.model.pattern import (
    AssignmentPattern,
    Construct,
    Expression,
    ObjectPattern,
    PatternNode,
    Property,
    RestElement,
)
from destructure_depth.model.violation import Violation


def _nested_object(prop: Property | RestElement) -> ObjectPattern | None:
    """Return the object pattern a property destructures into, if any.

    ``{ a: { b } }`` and ``{ a: { b } = {} }`` both nest ``{ b }``; for the
    defaulted form the left side is the pattern, never the default value.
    """
    if not isinstance(prop, Property):
        return None  # rest element
    value = prop.value
    if isinstance(value, ObjectPattern):
        return value
    if isinstance(value, AssignmentPattern) and isinstance(value.left, ObjectPattern):
        return value.left
    return None


def find_depth(pattern: PatternNode) -> int:
    """Deepest object-pattern nesting below *pattern*.

    Anything that is not an ``ObjectPattern`` (or has no properties) is 0.
    """
    if not isinstance(pattern, ObjectPattern) or not pattern.properties:
        return 0

    depth = 0
    for prop in pattern.properties:
        nested = _nested_object(prop)
        if nested is not None:
            depth = max(depth, 1 + find_depth(nested))
    return depth


def check(
    left: PatternNode,
    right: Expression | None,
    report_node: Construct,
    config: EffectiveConfig,
) -> Violation | None:
    """Decide whether *report_node* destructures too deeply.

    *right* is accepted so both call sites share one signature; the source
    expression does not affect depth.
    """
    if not isinstance(left, ObjectPattern):
        return None
    if not config.should_check(report_node.kind, DestructuringType.OBJECT):
        return None

    depth = find_depth(left)
    if depth > config.max_depth:
        return Violation(report_node=report_node, depth=depth, max_depth=config.max_depth)
    return None
