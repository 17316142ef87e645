"""Tests for the ESTree frontend: pattern translation and construct traversal."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from _estree import arr, assign, default, ident, loc, member, obj, program, prop, rest, var
from destructure_depth.api import lint_tree
from destructure_depth.errors import EstreeError
from destructure_depth.frontend.estree import (
    load_program,
    pattern_from_estree,
    program_from_document,
)
from destructure_depth.frontend.walker import ConstructCollector, iter_constructs
from destructure_depth.model.pattern import (
    ArrayPattern,
    AssignmentExpression,
    AssignmentPattern,
    Identifier,
    MemberTarget,
    ObjectPattern,
    Property,
    RestElement,
    VariableDeclarator,
)

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "estree"


class TestPatternFromEstree:
    def test_identifier(self) -> None:
        assert pattern_from_estree(ident("a")) == Identifier("a")

    def test_shorthand_property(self) -> None:
        pattern = pattern_from_estree(obj(prop("bar")))
        assert isinstance(pattern, ObjectPattern)
        (p,) = pattern.properties
        assert isinstance(p, Property)
        assert p.key == "bar"
        assert p.shorthand is True
        assert p.value == Identifier("bar")

    def test_nested_and_defaulted(self) -> None:
        pattern = pattern_from_estree(obj(prop("a", default(obj(prop("b"))))))
        (p,) = pattern.properties
        assert isinstance(p.value, AssignmentPattern)
        assert isinstance(p.value.left, ObjectPattern)
        assert p.value.right.type == "ObjectExpression"

    def test_rest_element_in_object(self) -> None:
        pattern = pattern_from_estree(obj(prop("a"), rest("others")))
        assert isinstance(pattern.properties[1], RestElement)
        assert pattern.properties[1].argument == Identifier("others")

    def test_babel_rest_property_alias(self) -> None:
        node = obj({"type": "RestProperty", "argument": ident("r")})
        assert isinstance(pattern_from_estree(node).properties[0], RestElement)

    def test_babel_object_property_alias(self) -> None:
        node = obj({
            "type": "ObjectProperty",
            "key": {"type": "StringLiteral", "value": "a-b"},
            "value": obj(prop("c")),
            "computed": False,
            "shorthand": False,
        })
        (p,) = pattern_from_estree(node).properties
        assert p.key == "a-b"
        assert isinstance(p.value, ObjectPattern)

    def test_computed_key_has_no_name(self) -> None:
        node = obj(prop("k", ident("v"), computed=True))
        (p,) = pattern_from_estree(node).properties
        assert p.key is None
        assert p.computed is True

    def test_array_holes(self) -> None:
        pattern = pattern_from_estree(arr(ident("a"), None, ident("b")))
        assert isinstance(pattern, ArrayPattern)
        assert pattern.elements == (Identifier("a"), None, Identifier("b"))

    def test_member_target(self) -> None:
        pattern = pattern_from_estree(member("self", "x"))
        assert pattern == MemberTarget(text="self.x")

    def test_location(self) -> None:
        node = dict(ident("a"), loc=loc(3, 4, 3, 5))
        pattern = pattern_from_estree(node)
        assert pattern.loc is not None
        assert (pattern.loc.line, pattern.loc.column) == (3, 4)
        assert pattern.loc.end_column == 5

    def test_non_pattern_raises(self) -> None:
        with pytest.raises(EstreeError) as exc:
            pattern_from_estree({"type": "CallExpression", "callee": ident("f"), "arguments": []})
        assert exc.value.node_type == "CallExpression"

    def test_property_without_value_raises(self) -> None:
        with pytest.raises(EstreeError):
            pattern_from_estree(obj({"type": "Property", "key": ident("a")}))

    def test_not_a_node_raises(self) -> None:
        with pytest.raises(EstreeError):
            pattern_from_estree("a")  # type: ignore[arg-type]


class TestMalformedNodes:
    @pytest.mark.parametrize(
        "node, node_type, key",
        [
            ({"type": "AssignmentPattern", "right": ident("d")}, "AssignmentPattern", "left"),
            ({"type": "AssignmentPattern", "left": ident("a")}, "AssignmentPattern", "right"),
            ({"type": "RestElement"}, "RestElement", "argument"),
            ({"type": "TSNonNullExpression"}, "TSNonNullExpression", "expression"),
        ],
        ids=["no-left", "no-right", "no-argument", "no-expression"],
    )
    def test_missing_child(self, node: dict, node_type: str, key: str) -> None:
        with pytest.raises(EstreeError) as exc:
            pattern_from_estree(node)
        assert exc.value.node_type == node_type
        assert f"'{key}'" in str(exc.value)

    def test_declarator_without_id(self) -> None:
        with pytest.raises(EstreeError) as exc:
            list(iter_constructs(program({
                "type": "VariableDeclaration",
                "kind": "const",
                "declarations": [{"type": "VariableDeclarator", "init": ident("o")}],
            })))
        assert exc.value.node_type == "VariableDeclarator"

    def test_assignment_without_right(self) -> None:
        statement = {
            "type": "ExpressionStatement",
            "expression": {"type": "AssignmentExpression", "operator": "=", "left": ident("a")},
        }
        with pytest.raises(EstreeError) as exc:
            list(iter_constructs(program(statement)))
        assert exc.value.node_type == "AssignmentExpression"

    def test_properties_must_be_a_list(self) -> None:
        with pytest.raises(EstreeError) as exc:
            pattern_from_estree({"type": "ObjectPattern", "properties": {"a": 1}})
        assert "properties" in str(exc.value)

    def test_non_node_key_has_no_name(self) -> None:
        node = obj({"type": "Property", "key": "a", "value": ident("a")})
        (p,) = pattern_from_estree(node).properties
        assert p.key is None

    def test_member_with_non_node_parts(self) -> None:
        node = {"type": "MemberExpression", "object": "self", "property": 3, "computed": False}
        assert pattern_from_estree(node) == MemberTarget(text="….…")

    @pytest.mark.parametrize("bad_loc", ["1:0", {"start": None}], ids=["string", "no-start"])
    def test_unusable_location_is_dropped(self, bad_loc) -> None:
        assert pattern_from_estree(dict(ident("a"), loc=bad_loc)).loc is None

    def test_mistyped_positions_default(self) -> None:
        bad_loc = {"start": {"line": "3", "column": True}, "end": 7}
        pattern = pattern_from_estree(dict(ident("a"), loc=bad_loc))
        assert (pattern.loc.line, pattern.loc.column) == (0, 0)
        assert pattern.loc.end_line is None


class TestConstructCollector:
    def test_declarator_and_assignment_in_order(self) -> None:
        tree = program(
            var(obj(prop("a")), line=1),
            assign(obj(prop("b")), line=2),
        )
        constructs = list(iter_constructs(tree))
        assert [type(c) for c in constructs] == [VariableDeclarator, AssignmentExpression]
        assert [c.loc.line for c in constructs] == [1, 2]

    def test_declarator_without_init(self) -> None:
        (c,) = iter_constructs(program(var(obj(prop("a")), None, kind="let")))
        assert isinstance(c, VariableDeclarator)
        assert c.init is None

    def test_compound_operator_is_collected(self) -> None:
        (c,) = iter_constructs(program(assign(ident("x"), ident("y"), operator="+=")))
        assert isinstance(c, AssignmentExpression)
        assert c.operator == "+="

    def test_finds_nested_constructs(self) -> None:
        fn = {
            "type": "FunctionDeclaration",
            "id": ident("f"),
            "params": [],
            "body": {
                "type": "BlockStatement",
                "body": [
                    var(obj(prop("a", obj(prop("b")))), line=2),
                    {
                        "type": "IfStatement",
                        "test": ident("c"),
                        "consequent": {"type": "BlockStatement", "body": [assign(obj(prop("d")), line=4)]},
                        "alternate": None,
                    },
                ],
            },
        }
        constructs = list(iter_constructs(program(fn)))
        assert [c.loc.line for c in constructs] == [2, 4]

    def test_assignment_inside_initializer(self) -> None:
        # const a = (b = c);
        inner = {"type": "AssignmentExpression", "operator": "=", "left": ident("b"), "right": ident("c")}
        collector = ConstructCollector()
        collector.visit(program(var(ident("a"), inner)))
        assert [type(c) for c in collector.constructs] == [VariableDeclarator, AssignmentExpression]

    def test_ignores_location_metadata(self) -> None:
        tree = program(var(obj(prop("a"))))
        tree["loc"] = loc(1)
        tree["range"] = [0, 20]
        assert len(list(iter_constructs(tree))) == 1

    def test_deep_expression_chain(self) -> None:
        # ({ x: { y } } = o) + b0 + b1 + ... nested far past the recursion limit
        node = {"type": "AssignmentExpression", "operator": "=",
                "left": obj(prop("x", obj(prop("y")))), "right": ident("o")}
        for i in range(5000):
            node = {"type": "BinaryExpression", "operator": "+", "left": node, "right": ident(f"b{i}")}
        tree = program({"type": "ExpressionStatement", "expression": node})
        (c,) = iter_constructs(tree)
        assert isinstance(c, AssignmentExpression)
        assert len(lint_tree(tree)) == 1


class TestDocuments:
    def test_program_passthrough(self) -> None:
        tree = program()
        assert program_from_document(tree) is tree

    def test_ast_envelope(self) -> None:
        tree = program()
        assert program_from_document({"ast": tree, "source": "x.js"}) is tree

    def test_babel_file_wrapper(self) -> None:
        tree = program()
        assert program_from_document({"type": "File", "program": tree}) is tree

    def test_rejects_other_nodes(self) -> None:
        with pytest.raises(EstreeError):
            program_from_document(ident("a"))

    def test_load_program(self, tmp_path: Path) -> None:
        f = tmp_path / "a.json"
        f.write_text(json.dumps(program(var(obj(prop("a"))))), encoding="utf-8")
        assert load_program(f)["type"] == "Program"

    def test_acorn_fixture(self) -> None:
        tree = load_program(FIXTURES / "nested_declarator.json")
        (c,) = iter_constructs(tree)
        assert isinstance(c, VariableDeclarator)
        assert c.loc is not None and c.loc.line == 1 and c.loc.column == 6
        assert isinstance(c.id, ObjectPattern)
        assert [p.key for p in c.id.properties] == ["foo", "bar"]
