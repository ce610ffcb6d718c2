# errstats/errors.py
"""
Error types and exit codes.

Error Hierarchy:
────────────────
    ErrstatsError (base)
    ├── LoadError      - patterns cannot be resolved or loaded
    │   └── ParseError - a Go source file does not parse
    └── ConfigError    - unknown log level, invalid configuration

These are the *fatal* failures of a run: they propagate to the CLI, get
printed to stderr, and end the process with ``EXIT_ERROR``.  Problems
inside classification (unresolved types, odd syntactic shapes) are never
raised; the engine treats them as "not an error check".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

EXIT_OK: int = 0
EXIT_ERROR: int = 1


@dataclass(frozen=True)
class SourceLocation:
    """A specific point in source code."""
    file: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        if self.line:
            return f"{self.file}:{self.line}"
        return self.file


class ErrstatsError(Exception):
    """
    Base exception for all errstats failures.

    Carries an optional source location so messages read like compiler
    diagnostics (``file:line: message``).
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = location
        self.cause = cause

    def __str__(self) -> str:
        if self.location is not None and self.location.file:
            return f"{self.location}: {self.message}"
        return self.message


class LoadError(ErrstatsError):
    """The requested patterns could not be resolved into packages."""


class ParseError(LoadError):
    """A Go source file could not be parsed."""


class ConfigError(ErrstatsError):
    """Invalid configuration, e.g. an unrecognised log level."""


__all__ = [
    "EXIT_OK",
    "EXIT_ERROR",
    "SourceLocation",
    "ErrstatsError",
    "LoadError",
    "ParseError",
    "ConfigError",
]
