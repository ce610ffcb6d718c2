"""
errstats/visitor.py
═══════════════════

The traversal and classification engine.

``ErrStatVisitor`` walks every node of a compilation unit in pre-order,
counting nodes and the lines they start on, and classifies the condition
of every ``if`` statement and every conditioned ``for`` loop:

    ┌──────────────────────────┐  not a comparison
    │ condition                ├──────────────────────► NotABinaryComparison
    └────────────┬─────────────┘
                 │ operand not ident/nil
                 ├──────────────────────────────────────► NonIdentifierOperand
                 │ nil ⋄ nil
                 ├──────────────────────────────────────► DoubleNilComparison
                 │ op != "!=", no nil side, type absent
                 │ or type lacks Error() string
                 ├──────────────────────────────────────► NonErrorComparison
                 │ name == error_var_name
                 ├──────────────────────────────────────► ErrorNotNilNamed
                 └──────────────────────────────────────► ErrorNotNilOther

Classification is purely local to the condition's two operands and never
raises: an unresolved type is a miss, not a failure.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Iterable, Optional

from tree_sitter import Node

from errstats.gotypes import implements_error, type_string
from errstats.stats import StatCounters
from errstats.syntax import (
    NodeKind,
    condition_of,
    first_line,
    iter_ast_nodes,
    node_kind,
    node_text,
)

_log = logging.getLogger(__name__)


class Classification(Enum):
    NOT_A_BINARY_COMPARISON = "NotABinaryComparison"
    NON_IDENTIFIER_OPERAND = "NonIdentifierOperand"
    DOUBLE_NIL_COMPARISON = "DoubleNilComparison"
    ERROR_NOT_NIL_NAMED = "ErrorNotNilNamed"
    ERROR_NOT_NIL_OTHER = "ErrorNotNilOther"
    NON_ERROR_COMPARISON = "NonErrorComparison"

    @property
    def is_error_check(self) -> bool:
        return self in (
            Classification.ERROR_NOT_NIL_NAMED,
            Classification.ERROR_NOT_NIL_OTHER,
        )


class ErrStatVisitor:
    """
    Fold compilation units into a ``StatCounters``.

    One visitor may process any number of units; the counters accumulate.
    Give each worker its own visitor and ``StatCounters.merge`` the results
    to partition a run.
    """

    def __init__(
        self,
        counters: Optional[StatCounters] = None,
        error_var_name: str = "err",
    ) -> None:
        self.counters = counters if counters is not None else StatCounters()
        self.error_var_name = error_var_name
        self.classifications: Dict[Classification, int] = {c: 0 for c in Classification}

    def visit_units(self, units: Iterable) -> StatCounters:
        for unit in units:
            self.visit_unit(unit)
        return self.counters

    def visit_unit(self, unit) -> None:
        _log.debug("file %s (package %s)", unit.path, unit.package)
        self.counters.line_count += unit.line_count()
        for node in iter_ast_nodes(unit.root):
            self.visit(node, unit)

    def visit(self, node: Node, unit) -> None:
        pos = unit.position_of(node)
        self.counters.record_position(pos.file, pos.line)
        self.counters.expression_count += 1

        kind = node_kind(node)
        if kind is NodeKind.LOOP:
            _log.debug("for statement")
            cond = condition_of(node)
            if cond is None:
                return
        elif kind is NodeKind.BRANCH:
            _log.debug("if statement")
            cond = condition_of(node)
        else:
            return

        self.counters.condition_count += 1
        _log.debug("line: %s", pos)
        _log.debug("node: %s", first_line(node))
        if cond is None:
            self._apply(Classification.NOT_A_BINARY_COMPARISON)
            return
        result = self.classify(cond, unit, str(pos))
        self._apply(result)

    def classify(self, cond: Node, unit, where: str = "") -> Classification:
        """Classify one condition expression without touching the counters."""
        if node_kind(cond) is not NodeKind.BINARY_COMPARISON:
            return Classification.NOT_A_BINARY_COMPARISON

        lhs = cond.child_by_field_name("left")
        rhs = cond.child_by_field_name("right")
        if lhs is None or node_kind(lhs) not in (NodeKind.IDENTIFIER, NodeKind.NIL):
            _log.debug("skipping, lhs isn't good for us")
            return Classification.NON_IDENTIFIER_OPERAND
        if rhs is None or node_kind(rhs) not in (NodeKind.IDENTIFIER, NodeKind.NIL):
            _log.debug("skipping, rhs isn't good for us")
            return Classification.NON_IDENTIFIER_OPERAND

        lhs_nil = node_kind(lhs) is NodeKind.NIL
        rhs_nil = node_kind(rhs) is NodeKind.NIL
        if lhs_nil and rhs_nil:
            _log.warning("line %s has a double nil check", where)
            return Classification.DOUBLE_NIL_COMPARISON

        op = cond.child_by_field_name("operator")
        if op is None or op.type != "!=":
            return Classification.NON_ERROR_COMPARISON

        if lhs_nil:
            ident = rhs
        elif rhs_nil:
            ident = lhs
        else:
            # neither half nil
            return Classification.NON_ERROR_COMPARISON

        resolved = unit.resolved_type_of(ident)
        if resolved is None:
            _log.debug("no type for %s", node_text(ident))
            return Classification.NON_ERROR_COMPARISON
        if not implements_error(resolved):
            _log.debug("%s is %s, not an error", node_text(ident), type_string(resolved))
            return Classification.NON_ERROR_COMPARISON

        _log.debug("identified error type")
        if node_text(ident) == self.error_var_name:
            _log.debug("identified '%s' name", self.error_var_name)
            return Classification.ERROR_NOT_NIL_NAMED
        return Classification.ERROR_NOT_NIL_OTHER

    def _apply(self, result: Classification) -> None:
        self.classifications[result] += 1
        c = self.counters
        if result is Classification.DOUBLE_NIL_COMPARISON:
            c.double_nil_count += 1
        elif result.is_error_check:
            c.error_check_count += 1
            if result is Classification.ERROR_NOT_NIL_NAMED:
                c.named_err_count += 1


__all__ = ["Classification", "ErrStatVisitor"]
