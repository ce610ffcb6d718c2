# tests/test_syntax.py
"""Tests for the tree-sitter front end and node-kind dispatch."""

import pytest

from errstats.errors import LoadError, ParseError
from errstats.syntax import (
    NodeKind,
    condition_of,
    WRAPPER_NODE_TYPES,
    iter_ast_nodes,
    iter_preorder,
    node_kind,
    node_line,
    node_text,
    parse_source,
    string_literal_value,
)


def _parse(src: str):
    return parse_source(src.encode("utf-8"), "t.go")


def _first(tree, node_type):
    for node in iter_preorder(tree.root_node):
        if node.type == node_type:
            return node
    raise AssertionError(f"no {node_type} node")


def _main(body: str) -> str:
    return "package main\n\nfunc main() {\n" + body + "\n}\n"


class TestParsing:

    def test_valid_source(self):
        tree = _parse(_main("\tx := 1\n\t_ = x"))
        assert tree.root_node.type == "source_file"

    def test_syntax_error_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            _parse("package main\n\nfunc main() {\n\tif x := ; {\n}\n")
        err = exc_info.value
        assert err.location is not None
        assert err.location.file == "t.go"
        assert err.location.line >= 1
        assert str(err).startswith("t.go:")

    def test_parse_error_is_a_load_error(self):
        with pytest.raises(LoadError):
            _parse("package main\n\nfunc {\n")

    def test_comments_are_not_traversed(self):
        tree = _parse("package main\n\n// c1\nfunc main() {\n\t// c2\n}\n")
        assert all(n.type != "comment" for n in iter_preorder(tree.root_node))

    def test_preorder_starts_at_root(self):
        tree = _parse(_main(""))
        nodes = list(iter_preorder(tree.root_node))
        assert nodes[0].type == "source_file"
        assert nodes[1].type == "package_clause"

    def test_ast_walk_descends_through_wrapper_nodes(self):
        tree = _parse(_main('\ta, b := f("x\\n", []int{1})\n\tg(a, b)'))
        walked = list(iter_ast_nodes(tree.root_node))
        assert not any(n.type in WRAPPER_NODE_TYPES for n in walked)
        assert [node_text(n) for n in walked if n.type == "identifier"] == [
            "main", "a", "b", "f", "g", "a", "b",
        ]
        assert any(n.type == "int_literal" for n in walked)
        full = list(iter_preorder(tree.root_node))
        assert {"expression_list", "argument_list", "literal_value"} <= {n.type for n in full}

    def test_node_line_is_one_based(self):
        tree = _parse(_main("\tvar y int\n\t_ = y"))
        assert node_line(_first(tree, "var_declaration")) == 4


class TestNodeKind:

    @pytest.mark.parametrize("expr, kind", [
        ("a == b", NodeKind.BINARY_COMPARISON),
        ("a != nil", NodeKind.BINARY_COMPARISON),
        ("a <= b", NodeKind.BINARY_COMPARISON),
        ("a + b", NodeKind.OTHER),
        ("a && b", NodeKind.OTHER),
    ])
    def test_binary_expressions(self, expr, kind):
        tree = _parse(_main(f"\t_ = {expr}"))
        assert node_kind(_first(tree, "binary_expression")) is kind

    def test_statements(self):
        tree = _parse(_main("\tif true {\n\t}\n\tfor {\n\t}"))
        assert node_kind(_first(tree, "if_statement")) is NodeKind.BRANCH
        assert node_kind(_first(tree, "for_statement")) is NodeKind.LOOP

    def test_nil_and_identifiers(self):
        tree = _parse(_main("\t_ = nil\n\t_ = true\n\t_ = x"))
        assert node_kind(_first(tree, "nil")) is NodeKind.NIL
        assert node_kind(_first(tree, "true")) is NodeKind.IDENTIFIER
        ident = [n for n in iter_preorder(tree.root_node)
                 if n.type == "identifier" and node_text(n) == "x"][0]
        assert node_kind(ident) is NodeKind.IDENTIFIER

    def test_selector_is_other(self):
        tree = _parse(_main("\t_ = s.field"))
        assert node_kind(_first(tree, "selector_expression")) is NodeKind.OTHER


class TestConditionOf:

    def test_if_condition(self):
        tree = _parse(_main("\tif err != nil {\n\t}"))
        cond = condition_of(_first(tree, "if_statement"))
        assert node_text(cond) == "err != nil"

    def test_if_with_initializer(self):
        tree = _parse(_main("\tif err := f(); err != nil {\n\t}"))
        cond = condition_of(_first(tree, "if_statement"))
        assert node_text(cond) == "err != nil"

    def test_infinite_loop_has_no_condition(self):
        tree = _parse(_main("\tfor {\n\t\tbreak\n\t}"))
        assert condition_of(_first(tree, "for_statement")) is None

    def test_three_clause_loop(self):
        tree = _parse(_main("\tfor i := 0; i < 3; i++ {\n\t}"))
        assert node_text(condition_of(_first(tree, "for_statement"))) == "i < 3"

    def test_three_clause_loop_without_condition(self):
        tree = _parse(_main("\tfor i := 0; ; i++ {\n\t\tbreak\n\t}"))
        assert condition_of(_first(tree, "for_statement")) is None

    def test_while_style_loop(self):
        tree = _parse(_main("\tfor x < 3 {\n\t}"))
        assert node_text(condition_of(_first(tree, "for_statement"))) == "x < 3"

    def test_range_loop_has_no_condition(self):
        tree = _parse(_main("\tfor _, v := range xs {\n\t\t_ = v\n\t}"))
        assert condition_of(_first(tree, "for_statement")) is None

    def test_other_nodes(self):
        tree = _parse(_main("\tx := 1\n\t_ = x"))
        assert condition_of(tree.root_node) is None


class TestStringLiterals:

    def test_interpreted_and_raw(self):
        tree = _parse('package main\n\nimport (\n\t"fmt"\n\t`os`\n)\n')
        values = [
            string_literal_value(n) for n in iter_preorder(tree.root_node)
            if n.type in ("interpreted_string_literal", "raw_string_literal")
        ]
        assert values == ["fmt", "os"]
