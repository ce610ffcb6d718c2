"""
errstats — error-check statistics for Go source code.

Walks Go packages, finds the conditions of ``if`` statements and ``for``
loops, and counts how many of them are ``x != nil`` checks of a value whose
static type implements ``error``.

Typical use::

    from errstats import analyze
    counters = analyze(["./..."])
    print(counters.error_check_count, counters.pct_named_err)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from errstats.config import AnalysisConfig
from errstats.errors import (
    ConfigError,
    ErrstatsError,
    LoadError,
    ParseError,
    SourceLocation,
)
from errstats.gotypes import GoType, implements_error, method_set
from errstats.loader import CompilationUnit, Position, Program, load_units
from errstats.stats import StatCounters, render_json, render_report
from errstats.visitor import Classification, ErrStatVisitor

__version__ = "0.1.0"

_log = logging.getLogger(__name__)


def analyze(patterns: List[str], config: Optional[AnalysisConfig] = None) -> StatCounters:
    """
    Load the packages named by *patterns* and return their statistics.

    Raises
    ------
    LoadError
        If the patterns cannot be loaded.
    """
    config = config or AnalysisConfig()
    program = load_units(list(patterns), config.include_transitive, config)
    units = program.all_units() if config.include_transitive else program.initial_units()
    visitor = ErrStatVisitor(error_var_name=config.error_var_name)
    counters = visitor.visit_units(units)
    _log.info(
        "%d file(s): %d conditionals, %d error checks",
        len(units), counters.condition_count, counters.error_check_count,
    )
    return counters


__all__ = [
    "__version__",
    "analyze",
    "AnalysisConfig",
    "Classification",
    "CompilationUnit",
    "ConfigError",
    "ErrStatVisitor",
    "ErrstatsError",
    "GoType",
    "LoadError",
    "ParseError",
    "Position",
    "Program",
    "SourceLocation",
    "StatCounters",
    "implements_error",
    "load_units",
    "method_set",
    "render_json",
    "render_report",
]
