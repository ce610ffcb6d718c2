# tests/test_visitor.py
"""
Tests for the traversal and classification engine.

The scenario tests run the whole pipeline (load, check, visit) over small
modules and assert on the resulting counters.
"""

import logging

import pytest

from errstats.stats import StatCounters
from errstats.syntax import condition_of, iter_preorder
from errstats.visitor import Classification, ErrStatVisitor

from tests.conftest import (
    CASE01_MAIN_GO,
    CUSTOM_ERROR_GO,
    SCENARIO_A_GO,
    SCENARIO_B_GO,
    SCENARIO_C_GO,
    SCENARIO_D_GO,
    counters_for,
    go_main,
    load_module,
    single_unit,
)


def _conditions(unit):
    return [
        condition_of(n) for n in iter_preorder(unit.root)
        if n.type in ("if_statement", "for_statement")
    ]


def _classify_all(tmp_path, source, **kwargs):
    unit = single_unit(tmp_path, source)
    visitor = ErrStatVisitor(**kwargs)
    return [
        visitor.classify(cond, unit) if cond is not None else None
        for cond in _conditions(unit)
    ]


class TestScenarios:

    def test_os_open_err(self, tmp_path):
        c = counters_for(tmp_path, {"main.go": SCENARIO_A_GO})
        assert (c.condition_count, c.error_check_count, c.named_err_count) == (1, 1, 1)
        assert c.double_nil_count == 0

    def test_pointer_named_err_is_not_an_error(self, tmp_path):
        c = counters_for(tmp_path, {"main.go": SCENARIO_B_GO})
        assert (c.condition_count, c.error_check_count, c.named_err_count) == (1, 0, 0)

    def test_double_nil(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="errstats"):
            c = counters_for(tmp_path, {"main.go": SCENARIO_C_GO})
        assert c.double_nil_count == 1
        assert c.condition_count == 1
        assert c.error_check_count == 0
        assert "double nil check" in caplog.text
        assert "main.go:4" in caplog.text

    def test_selector_operand(self, tmp_path):
        c = counters_for(tmp_path, {"main.go": SCENARIO_D_GO})
        assert (c.condition_count, c.error_check_count) == (1, 0)

    def test_custom_error_type(self, tmp_path):
        c = counters_for(tmp_path, {"main.go": CUSTOM_ERROR_GO})
        assert c.condition_count == 2
        assert c.error_check_count == 1
        assert c.named_err_count == 0

    def test_custom_error_variable_name(self, tmp_path):
        c = counters_for(tmp_path, {"main.go": CUSTOM_ERROR_GO})
        program = load_module(tmp_path / "again", {"main.go": CUSTOM_ERROR_GO})
        renamed = ErrStatVisitor(error_var_name="e").visit_units(program.initial_units())
        assert renamed.named_err_count == 1
        assert renamed.error_check_count == c.error_check_count


class TestCase01:

    @pytest.fixture
    def counters(self, tmp_path) -> StatCounters:
        return counters_for(tmp_path, {"main.go": CASE01_MAIN_GO})

    def test_error_checks(self, counters):
        assert counters.error_check_count == 2
        assert counters.named_err_count == 2
        assert counters.condition_count == 3
        assert counters.double_nil_count == 0

    def test_line_count(self, counters):
        assert counters.line_count == CASE01_MAIN_GO.count("\n")

    def test_percentages(self, counters):
        assert counters.pct_named_err == 100
        assert counters.pct_conditions_are_error_checks == pytest.approx(200 / 3)

    def test_meaningful_lines_skip_blank_and_comment_lines(self, counters):
        assert (counters.expression_count, counters.unique_line_count) == (64, 13)

    def test_classifications(self, tmp_path):
        results = _classify_all(tmp_path, CASE01_MAIN_GO)
        assert results == [
            Classification.ERROR_NOT_NIL_NAMED,
            Classification.ERROR_NOT_NIL_NAMED,
            Classification.NON_ERROR_COMPARISON,
        ]


class TestClassify:

    @pytest.mark.parametrize("cond, expected", [
        ("err != nil", Classification.ERROR_NOT_NIL_NAMED),
        ("nil != err", Classification.ERROR_NOT_NIL_NAMED),
        ("err == nil", Classification.NON_ERROR_COMPARISON),
        ("err != other", Classification.NON_ERROR_COMPARISON),
        ("nil == nil", Classification.DOUBLE_NIL_COMPARISON),
        ("ok", Classification.NOT_A_BINARY_COMPARISON),
        ("!ok", Classification.NOT_A_BINARY_COMPARISON),
        ("err != nil && ok", Classification.NOT_A_BINARY_COMPARISON),
        ("(err != nil)", Classification.NOT_A_BINARY_COMPARISON),
        ("err.Error() != \"\"", Classification.NON_IDENTIFIER_OPERAND),
        ("n != nil", Classification.NON_ERROR_COMPARISON),
        ("missing != nil", Classification.NON_ERROR_COMPARISON),
    ])
    def test_conditions(self, tmp_path, cond, expected):
        src = go_main(f"""
            var err, other error
            var ok bool
            var n *int
            _, _, _, _ = err, other, ok, n
            if {cond} {{
            }}
        """)
        assert _classify_all(tmp_path, src) == [expected]

    def test_for_condition_counts(self, tmp_path):
        src = go_main("""
            var err error
            for err != nil {
                err = nil
            }
            for {
                break
            }
            for _, x := range []int{} {
                _ = x
            }
            for i := 0; i < 2; i++ {
            }
        """)
        c = counters_for(tmp_path, {"main.go": src})
        assert c.condition_count == 2
        assert c.error_check_count == 1

    def test_else_if_counts_each_branch(self, tmp_path):
        src = go_main("""
            var err, e2 error
            if err != nil {
            } else if e2 != nil {
            }
        """)
        c = counters_for(tmp_path, {"main.go": src})
        assert (c.condition_count, c.error_check_count, c.named_err_count) == (2, 2, 1)

    def test_classify_does_not_touch_counters(self, tmp_path):
        unit = single_unit(tmp_path, SCENARIO_A_GO)
        visitor = ErrStatVisitor()
        (cond,) = _conditions(unit)
        assert visitor.classify(cond, unit) is Classification.ERROR_NOT_NIL_NAMED
        assert visitor.counters == StatCounters()


class TestInvariants:

    FILES = {
        "a.go": CUSTOM_ERROR_GO.replace("func main()", "func mainA()"),
        "b.go": go_main("""
            var err error
            if err != nil {
            }
            if nil == nil {
            }
        """),
    }

    def test_count_ordering(self, tmp_path):
        c = counters_for(tmp_path, self.FILES)
        assert c.named_err_count <= c.error_check_count <= c.condition_count
        assert c.condition_count <= c.expression_count
        assert c.unique_line_count <= c.expression_count

    def test_empty_unit_set(self):
        c = ErrStatVisitor().visit_units([])
        assert c == StatCounters()
        assert c.pct_lines_are_error_checks == 0
        assert c.pct_expr_are_error_checks == 0
        assert c.pct_conditions_are_error_checks == 0
        assert c.pct_named_err == 0

    def test_classification_tallies_match_counters(self, tmp_path):
        program = load_module(tmp_path, self.FILES)
        visitor = ErrStatVisitor()
        c = visitor.visit_units(program.initial_units())
        assert sum(visitor.classifications.values()) == c.condition_count
        assert visitor.classifications[Classification.DOUBLE_NIL_COMPARISON] == c.double_nil_count

    def test_order_independent(self, tmp_path):
        program = load_module(tmp_path, self.FILES)
        units = program.initial_units()
        forward = ErrStatVisitor().visit_units(units)
        backward = ErrStatVisitor().visit_units(list(reversed(units)))
        assert forward == backward

    def test_partitioned_runs_merge(self, tmp_path):
        program = load_module(tmp_path, self.FILES)
        first, second = program.initial_units()
        whole = ErrStatVisitor().visit_units([first, second])
        merged = ErrStatVisitor().visit_units([first]).merge(
            ErrStatVisitor().visit_units([second])
        )
        assert merged == whole

    def test_idempotent(self, tmp_path):
        first = counters_for(tmp_path / "one", self.FILES)
        second = counters_for(tmp_path / "two", self.FILES)
        assert first.to_dict() == second.to_dict()

    def test_shared_counters_accumulate(self, tmp_path):
        program = load_module(tmp_path, {"main.go": SCENARIO_A_GO})
        shared = StatCounters()
        ErrStatVisitor(shared).visit_units(program.initial_units())
        ErrStatVisitor(shared).visit_units(program.initial_units())
        assert shared.error_check_count == 2
        assert shared.unique_line_count == ErrStatVisitor().visit_units(
            program.initial_units()
        ).unique_line_count
