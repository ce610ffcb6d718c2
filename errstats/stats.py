"""
errstats/stats.py — run-wide counters and report rendering.

``StatCounters`` is the only mutable state of a run.  It is written by the
traversal engine and read by the renderers below; two counter sets built
from disjoint file sets merge into the counters of their union, so a run
can be partitioned per file and recombined in any order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Set, Tuple

# (file, line)
LinePosition = Tuple[str, int]

REPORT_HEADER = "Statistics about your go files:"


def percent(lhs: int, rhs: int) -> float:
    """``lhs / rhs * 100``, or 0 when *rhs* is 0."""
    if rhs == 0:
        return 0
    return lhs / rhs * 100.0


@dataclass
class StatCounters:
    line_count: int = 0
    unique_positions: Set[LinePosition] = field(default_factory=set)
    expression_count: int = 0
    condition_count: int = 0
    error_check_count: int = 0
    named_err_count: int = 0
    double_nil_count: int = 0

    def record_position(self, file: str, line: int) -> None:
        self.unique_positions.add((file, line))

    @property
    def unique_line_count(self) -> int:
        return len(self.unique_positions)

    @property
    def pct_lines_are_error_checks(self) -> float:
        return percent(self.error_check_count, self.unique_line_count)

    @property
    def pct_expr_are_error_checks(self) -> float:
        return percent(self.error_check_count, self.expression_count)

    @property
    def pct_conditions_are_error_checks(self) -> float:
        return percent(self.error_check_count, self.condition_count)

    @property
    def pct_named_err(self) -> float:
        return percent(self.named_err_count, self.error_check_count)

    def merge(self, other: StatCounters) -> StatCounters:
        """Combine two counter sets: counts add, position sets unite."""
        return StatCounters(
            line_count=self.line_count + other.line_count,
            unique_positions=self.unique_positions | other.unique_positions,
            expression_count=self.expression_count + other.expression_count,
            condition_count=self.condition_count + other.condition_count,
            error_check_count=self.error_check_count + other.error_check_count,
            named_err_count=self.named_err_count + other.named_err_count,
            double_nil_count=self.double_nil_count + other.double_nil_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_count": self.line_count,
            "unique_line_count": self.unique_line_count,
            "expression_count": self.expression_count,
            "condition_count": self.condition_count,
            "error_check_count": self.error_check_count,
            "named_err_count": self.named_err_count,
            "double_nil_count": self.double_nil_count,
            "pct_lines_are_error_checks": self.pct_lines_are_error_checks,
            "pct_expr_are_error_checks": self.pct_expr_are_error_checks,
            "pct_conditions_are_error_checks": self.pct_conditions_are_error_checks,
            "pct_named_err": self.pct_named_err,
        }


def format_value(value: float) -> str:
    """Print integral values without a fractional part, like Go's ``%v``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _statistics_block(c: StatCounters, error_var_name: str) -> str:
    rows = [
        ("Total lines", c.line_count),
        ("Total meaningful lines", c.unique_line_count),
        ("Total expressions", c.expression_count),
        ("Total conditionals", c.condition_count),
        ("Total conditionals that were error checks", c.error_check_count),
        None,
        ("Percent lines that were errchecks", c.pct_lines_are_error_checks),
        ("Percent expressions that were errchecks", c.pct_expr_are_error_checks),
        ("Percent conditionals that were errchecks", c.pct_conditions_are_error_checks),
        (f"Percent of err != nil checks using the var '{error_var_name}'", c.pct_named_err),
    ]
    lines = [REPORT_HEADER]
    for row in rows:
        if row is None:
            lines.append("")
            continue
        label, value = row
        lines.append(f"\t{label}: \t{format_value(value)}")
    return "\n".join(lines) + "\n"


def _anomaly_line(c: StatCounters) -> str:
    return (
        "\tNumber of 'nil != nil' and 'nil == nil' conditionals. FIX THIS: "
        f"\t{c.double_nil_count}\n"
    )


def render_report(c: StatCounters, full: bool = False, error_var_name: str = "err") -> str:
    """
    Render the text report.

    Any double-nil comparison replaces the statistics with a single anomaly
    line, unless *full* asks for both.
    """
    if c.double_nil_count > 0:
        if full:
            return _statistics_block(c, error_var_name) + "\n" + _anomaly_line(c)
        return _anomaly_line(c)
    return _statistics_block(c, error_var_name)


def render_json(c: StatCounters) -> str:
    return json.dumps(c.to_dict(), indent=2, sort_keys=False) + "\n"


__all__ = [
    "StatCounters",
    "LinePosition",
    "REPORT_HEADER",
    "percent",
    "format_value",
    "render_report",
    "render_json",
]
