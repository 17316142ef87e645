"""Traversal driver for ESTree JSON trees.

``EstreeVisitor`` mirrors :class:`ast.NodeVisitor`: every node is handed to
its ``visit_<type>`` method, if the subclass defines one.  The walk keeps an
explicit stack, so tree depth is not bounded by the interpreter's recursion
limit; long ``a + b + ...`` chains and ``else if`` ladders nest deeply.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from destructure_depth.frontend.estree import assignment_from_estree, declarator_from_estree
from destructure_depth.model.pattern import Construct

logger = logging.getLogger(__name__)

# Keys that never hold child nodes.
_SKIP_KEYS = frozenset({"type", "loc", "range", "start", "end", "comments", "tokens", "extra"})


class EstreeVisitor:
    """Base visitor over plain-dict ESTree nodes.

    Nodes are visited depth-first, parents before children, children in
    source order.
    """

    def visit(self, node: Mapping[str, Any]) -> None:
        stack: list[Mapping[str, Any]] = [node]
        while stack:
            current = stack.pop()
            method = getattr(self, "visit_" + str(current.get("type", "")), None)
            if method is not None:
                method(current)
            stack.extend(reversed(child_nodes(current)))


def child_nodes(node: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Direct child nodes of *node*, in key order."""
    children: list[Mapping[str, Any]] = []
    for key, value in node.items():
        if key in _SKIP_KEYS:
            continue
        if isinstance(value, Mapping):
            if "type" in value:
                children.append(value)
        elif isinstance(value, list):
            children.extend(
                item for item in value if isinstance(item, Mapping) and "type" in item
            )
    return children


class ConstructCollector(EstreeVisitor):
    """Collect every ``VariableDeclarator`` and ``AssignmentExpression``.

    Constructs appear in the order a depth-first, pre-order walk meets them,
    which is source order for parser output.  Nested constructs such as
    ``const a = (b = c)`` are collected after their parent.
    """

    def __init__(self) -> None:
        self.constructs: list[Construct] = []

    def visit_VariableDeclarator(self, node: Mapping[str, Any]) -> None:
        self.constructs.append(declarator_from_estree(node))

    def visit_AssignmentExpression(self, node: Mapping[str, Any]) -> None:
        self.constructs.append(assignment_from_estree(node))


def iter_constructs(program: Mapping[str, Any]) -> Iterator[Construct]:
    """Yield the checkable constructs of *program* in source order."""
    collector = ConstructCollector()
    collector.visit(program)
    logger.debug("Collected %d construct(s)", len(collector.constructs))
    yield from collector.constructs
