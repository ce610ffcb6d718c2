"""
errstats/syntax.py
══════════════════

Go front end built on tree-sitter, plus the closed node-kind dispatch the
traversal engine works over.

Only a handful of syntax categories matter to the error-check statistics:

    BINARY_COMPARISON   ``a == b``, ``a != b``, ``a < b`` ...
    BRANCH              ``if`` statements
    LOOP                ``for`` statements (with or without a condition)
    IDENTIFIER          bare identifiers, incl. ``true``/``false``/``iota``
    NIL                 the ``nil`` literal
    OTHER               everything else (traversed, structurally ignored)

Comments are not part of the tree the engine sees.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Iterator, List, Optional

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

from errstats.errors import ParseError, SourceLocation

_log = logging.getLogger(__name__)

GO_LANGUAGE = Language(tsgo.language())
_parser = Parser(GO_LANGUAGE)


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — PARSING
# ═════════════════════════════════════════════════════════════════════════

def parse_source(source: bytes, path: str = "<source>") -> Tree:
    """
    Parse Go *source* into a tree-sitter tree.

    Raises
    ------
    ParseError
        If the tree contains an ``ERROR`` or missing node.
    """
    tree = _parser.parse(source)
    if tree.root_node.has_error:
        bad = first_error_node(tree.root_node)
        line = bad.start_point[0] + 1 if bad is not None else 0
        what = "missing " + bad.type if bad is not None and bad.is_missing else "syntax error"
        raise ParseError(
            f"{what} in Go source",
            location=SourceLocation(file=path, line=line),
        )
    return tree


def first_error_node(root: Node) -> Optional[Node]:
    """Return the first ``ERROR`` or missing node in pre-order, if any."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — NODE-KIND DISPATCH
# ═════════════════════════════════════════════════════════════════════════

class NodeKind(Enum):
    BINARY_COMPARISON = auto()
    BRANCH = auto()
    LOOP = auto()
    IDENTIFIER = auto()
    NIL = auto()
    OTHER = auto()


COMPARISON_OPERATORS = frozenset({"==", "!=", "<", "<=", ">", ">="})

# go/ast represents predeclared constants as plain identifiers
_IDENTIFIER_TYPES = frozenset({"identifier", "true", "false", "iota"})


def node_kind(node: Node) -> NodeKind:
    t = node.type
    if t == "binary_expression":
        if binary_operator(node) in COMPARISON_OPERATORS:
            return NodeKind.BINARY_COMPARISON
        return NodeKind.OTHER
    if t == "if_statement":
        return NodeKind.BRANCH
    if t == "for_statement":
        return NodeKind.LOOP
    if t in _IDENTIFIER_TYPES:
        return NodeKind.IDENTIFIER
    if t == "nil":
        return NodeKind.NIL
    return NodeKind.OTHER


def binary_operator(node: Node) -> str:
    op = node.child_by_field_name("operator")
    return op.type if op is not None else ""


def condition_of(node: Node) -> Optional[Node]:
    """
    Return the condition expression guarding a branch or loop.

    ``for`` loops without a condition (``for {}``, ``for ;; {}``) and range
    loops have none.
    """
    if node.type == "if_statement":
        return node.child_by_field_name("condition")
    if node.type != "for_statement":
        return None
    body = node.child_by_field_name("body")
    for child in node.named_children:
        if child.type == "comment" or _same_node(child, body):
            continue
        if child.type == "for_clause":
            return child.child_by_field_name("condition")
        if child.type == "range_clause":
            return None
        return child
    return None


def _same_node(a: Optional[Node], b: Optional[Node]) -> bool:
    if a is None or b is None:
        return False
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — TRAVERSAL AND TEXT HELPERS
# ═════════════════════════════════════════════════════════════════════════

def iter_preorder(root: Node) -> Iterator[Node]:
    """
    Yield every named, non-comment node of the tree in pre-order.

    Iterative, so deeply nested sources never hit the recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        children = [c for c in node.named_children if c.type != "comment"]
        stack.extend(reversed(children))


# grouping nodes with no go/ast counterpart; walked through, never yielded
WRAPPER_NODE_TYPES = frozenset({
    "expression_list",
    "argument_list",
    "statement_list",
    "import_spec_list",
    "literal_value",
    "interpreted_string_literal_content",
    "raw_string_literal_content",
    "escape_sequence",
})


def iter_ast_nodes(root: Node) -> Iterator[Node]:
    """Pre-order walk that yields only nodes a go/ast walk would visit."""
    for node in iter_preorder(root):
        if node.type not in WRAPPER_NODE_TYPES:
            yield node


def statements(node: Optional[Node]) -> Iterator[Node]:
    """
    Yield the statements of a block or case clause, flattening the
    ``statement_list`` wrapper newer grammars insert.
    """
    if node is None:
        return
    for child in node.named_children:
        if child.type == "statement_list":
            for stmt in child.named_children:
                if stmt.type != "comment":
                    yield stmt
        elif child.type == "comment":
            continue
        elif child.type.endswith("_statement") or child.type.endswith("_declaration") \
                or child.type == "block":
            yield child


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def node_line(node: Node) -> int:
    """1-based line of the node's first byte."""
    return node.start_point[0] + 1


def first_line(node: Node, limit: int = 120) -> str:
    text = node_text(node).splitlines()
    head = text[0] if text else ""
    return head if len(head) <= limit else head[:limit] + "..."


def field_nodes(node: Node, name: str) -> List[Node]:
    return [c for c in node.children_by_field_name(name) if c.type != "comment"]


def string_literal_value(node: Optional[Node]) -> str:
    """Decode an interpreted or raw string literal (import paths, tags)."""
    raw = node_text(node)
    if len(raw) >= 2 and raw[0] in "\"`" and raw[-1] == raw[0]:
        raw = raw[1:-1]
    return raw


__all__ = [
    "GO_LANGUAGE",
    "NodeKind",
    "COMPARISON_OPERATORS",
    "parse_source",
    "first_error_node",
    "node_kind",
    "binary_operator",
    "condition_of",
    "iter_preorder",
    "iter_ast_nodes",
    "WRAPPER_NODE_TYPES",
    "statements",
    "node_text",
    "node_line",
    "first_line",
    "field_nodes",
    "string_literal_value",
]
