"""Tests for MaxDepthRule: the rule end to end over ESTree programs."""

from __future__ import annotations

import pytest

from _estree import arr, assign, default, ident, loc, member, obj, program, prop, rest, var
from destructure_depth.analyzers.max_depth import MaxDepthRule
from destructure_depth.api import lint_tree, setting_from
from destructure_depth.model import ConstructKind, Severity

DEFAULT = setting_from("error")  # no options: max 0
MAX_1 = setting_from(["error", {"object": {"max": 1}}])


def _lint(tree: dict, setting=DEFAULT) -> list:
    return MaxDepthRule(setting).lint_program(tree, "src/app.json")


# ── valid code ───────────────────────────────────────────────────────


class TestValid:
    @pytest.mark.parametrize(
        "pattern",
        [
            obj(prop("bar")),
            obj(prop("a"), prop("b"), prop("c")),
            obj(prop("a"), rest("others")),
            obj(prop("bar", default(ident("bar")))),
            arr(obj(prop("a", obj(prop("b"))))),
            ident("whole"),
        ],
        ids=["shorthand", "many", "rest", "defaulted-leaf", "array", "identifier"],
    )
    def test_declarator_at_default_max(self, pattern: dict) -> None:
        assert _lint(program(var(pattern))) == []

    def test_nested_within_max(self) -> None:
        # const { foo: { bar } } = {};
        tree = program(var(obj(prop("foo", obj(prop("bar")))), {"type": "ObjectExpression", "properties": []}))
        assert _lint(tree, MAX_1) == []

    def test_assignment_within_max(self) -> None:
        # ({ foo: { bar } } = {});
        tree = program(assign(obj(prop("foo", obj(prop("bar"))))))
        assert _lint(tree, MAX_1) == []

    def test_declarator_without_init(self) -> None:
        # let { a: { b } };
        assert _lint(program(var(obj(prop("a", obj(prop("b")))), None, kind="let"))) == []

    def test_compound_assignment_is_ignored(self) -> None:
        tree = program(assign(obj(prop("a", obj(prop("b")))), operator="+="))
        assert _lint(tree) == []

    def test_member_target(self) -> None:
        assert _lint(program(assign(member("self", "x")))) == []


# ── invalid code ─────────────────────────────────────────────────────


class TestInvalid:
    def test_one_level_var(self) -> None:
        # var { bar: { a } } = object;
        (f,) = _lint(program(var(obj(prop("bar", obj(prop("a")))), kind="var")))
        assert f.message == "Blocks are destructured too deeply (1). Maximum allowed is 0."
        assert f.message_id == "tooDeeply"
        assert f.data == {"depth": 1, "maxDepth": 0}
        assert f.node_type is ConstructKind.VARIABLE_DECLARATOR

    def test_two_levels_const(self) -> None:
        # const { foo, bar: { a: { b } } } = object.foo;
        pattern = obj(prop("foo"), prop("bar", obj(prop("a", obj(prop("b"))))))
        (f,) = _lint(program(var(pattern, {"type": "MemberExpression"})))
        assert f.data == {"depth": 2, "maxDepth": 0}

    def test_defaulted_nesting_above_max(self) -> None:
        # const { one, first: { second: { third } } = {} } = {};
        pattern = obj(
            prop("one"),
            prop("first", default(obj(prop("second", obj(prop("third")))))),
        )
        (f,) = _lint(program(var(pattern, {"type": "ObjectExpression", "properties": []})), MAX_1)
        assert f.message == "Blocks are destructured too deeply (2). Maximum allowed is 1."

    def test_assignment_expression(self) -> None:
        # ({ a: { b } } = object);
        (f,) = _lint(program(assign(obj(prop("a", obj(prop("b")))), line=3)))
        assert f.node_type is ConstructKind.ASSIGNMENT_EXPRESSION
        assert f.location.line == 3

    def test_one_finding_per_construct_in_order(self) -> None:
        tree = program(
            var(obj(prop("a", obj(prop("b")))), line=1),
            var(obj(prop("c")), line=2),
            assign(obj(prop("d", obj(prop("e")))), line=3),
        )
        findings = _lint(tree)
        assert [f.location.line for f in findings] == [1, 3]


# ── options and severity ─────────────────────────────────────────────


class TestSetting:
    def test_severity_off_reports_nothing(self) -> None:
        tree = program(var(obj(prop("a", obj(prop("b", obj(prop("c"))))))))
        assert _lint(tree, setting_from("off")) == []

    def test_warn_severity_is_carried(self) -> None:
        (f,) = _lint(program(var(obj(prop("a", obj(prop("b")))))), setting_from("warn"))
        assert f.severity is Severity.WARN

    def test_disable_declarators_only(self) -> None:
        setting = setting_from(["error", {"VariableDeclarator": {"object": False}}])
        tree = program(
            var(obj(prop("a", obj(prop("b")))), line=1),
            assign(obj(prop("c", obj(prop("d")))), line=2),
        )
        (f,) = _lint(tree, setting)
        assert f.node_type is ConstructKind.ASSIGNMENT_EXPRESSION

    def test_flat_object_false_disables_everything(self) -> None:
        setting = setting_from(["error", {"object": False}])
        tree = program(var(obj(prop("a", obj(prop("b"))))), assign(obj(prop("c", obj(prop("d"))))))
        assert _lint(tree, setting) == []

    def test_renamed_properties_option_is_inert(self) -> None:
        tree = program(var(obj(prop("a", obj(prop("b"))))))
        with_slot = setting_from(["error", {"object": {"max": 0}}, {"enforceForRenamedProperties": True}])
        assert len(_lint(tree, with_slot)) == len(_lint(tree)) == 1

    def test_recommended_preset_is_error_at_default_max(self) -> None:
        assert lint_tree(program(var(obj(prop("a"))))) == []
        (f,) = lint_tree(program(var(obj(prop("a", obj(prop("b")))))))
        assert f.severity is Severity.ERROR
        assert f.data == {"depth": 1, "maxDepth": 0}


class TestFindingShape:
    def test_fingerprint_and_location(self) -> None:
        (f,) = _lint(program(var(obj(prop("a", obj(prop("b")))), line=7)))
        assert f.fingerprint.startswith("sha256:")
        assert len(f.fingerprint) == len("sha256:") + 64
        assert f.location.path == "src/app.json"
        assert (f.location.line, f.location.column) == (7, 0)

    def test_fingerprint_is_stable(self) -> None:
        tree = program(var(obj(prop("a", obj(prop("b"))))))
        assert _lint(tree)[0].fingerprint == _lint(tree)[0].fingerprint

    def test_to_dict(self) -> None:
        (f,) = lint_tree(program(var(obj(prop("a", obj(prop("b")))))), DEFAULT, path="x.json")
        d = f.to_dict()
        assert d["severity"] == "error"
        assert d["node_type"] == "VariableDeclarator"
        assert d["location"]["path"] == "x.json"
        assert d["data"] == {"depth": 1, "maxDepth": 0}

    def test_same_line_findings_have_distinct_fingerprints(self) -> None:
        # const { a: { b } } = x, { c: { d } } = y;
        declaration = {
            "type": "VariableDeclaration",
            "kind": "const",
            "declarations": [
                {"type": "VariableDeclarator", "id": obj(prop("a", obj(prop("b")))),
                 "init": ident("x"), "loc": loc(1, 6)},
                {"type": "VariableDeclarator", "id": obj(prop("c", obj(prop("d")))),
                 "init": ident("y"), "loc": loc(1, 24)},
            ],
        }
        first, second = _lint(program(declaration))
        assert (first.location.line, second.location.line) == (1, 1)
        assert first.fingerprint != second.fingerprint

    def test_findings_without_location_have_distinct_fingerprints(self) -> None:
        pattern = obj(prop("a", obj(prop("b"))))
        declaration = {
            "type": "VariableDeclaration",
            "kind": "const",
            "declarations": [
                {"type": "VariableDeclarator", "id": pattern, "init": ident("x")},
                {"type": "VariableDeclarator", "id": pattern, "init": ident("x")},
            ],
        }
        findings = _lint(program(declaration))
        assert len(findings) == 2
        assert len({f.fingerprint for f in findings}) == 2
