"""
errstats/config.py — analysis configuration.

Tuning knobs for one analysis run, with defaults drawn from the Go
environment variables the go tool itself honours.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from errstats.errors import ConfigError

_log = logging.getLogger(__name__)

# logrus level names, as accepted by -loglevel
LOG_LEVELS: Dict[str, int] = {
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}

OUTPUT_FORMATS = ("text", "json")

_MACHINE_TO_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}


def parse_log_level(name: str) -> int:
    """Map a logrus-style level name to a ``logging`` level."""
    level = LOG_LEVELS.get(name.strip().lower())
    if level is None:
        raise ConfigError(f"Cannot parse level: {name!r}")
    return level


def host_goos() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("freebsd"):
        return "freebsd"
    return "linux"


def host_goarch() -> str:
    return _MACHINE_TO_GOARCH.get(platform.machine().lower(), "amd64")


def _default_gopath() -> Optional[Path]:
    env = os.environ.get("GOPATH")
    if env:
        return Path(env.split(os.pathsep)[0])
    return Path.home() / "go"


def _go_tool() -> Optional[str]:
    return shutil.which("go")


def go_env(name: str) -> Optional[str]:
    """
    Ask the installed go tool for an environment value (``go env NAME``).

    Returns ``None`` when no go binary is on PATH or the query fails.
    """
    go = _go_tool()
    if go is None:
        return None
    try:
        result = subprocess.run(
            [go, "env", name],
            capture_output=True, text=True, timeout=30,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        _log.debug("go env %s failed: %s", name, exc)
        return None
    if result.returncode != 0:
        _log.debug("go env %s exited %d: %s", name, result.returncode, result.stderr.strip())
        return None
    value = result.stdout.strip()
    return value or None


def _default_goroot() -> Optional[Path]:
    env = os.environ.get("GOROOT")
    if not env:
        env = go_env("GOROOT")
        if env:
            _log.debug("GOROOT from go env: %s", env)
    return Path(env) if env else None


@dataclass
class AnalysisConfig:
    """Settings for one errstats run."""
    include_transitive: bool = False
    log_level: str = "info"
    error_var_name: str = "err"
    include_tests: bool = False
    output_format: str = "text"
    full_report: bool = False
    goroot: Optional[Path] = field(default_factory=_default_goroot)
    gopath: Optional[Path] = field(default_factory=_default_gopath)
    goos: str = field(default_factory=lambda: os.environ.get("GOOS") or host_goos())
    goarch: str = field(default_factory=lambda: os.environ.get("GOARCH") or host_goarch())

    def validate(self) -> List[str]:
        """Return a list of validation problems (empty if valid)."""
        problems: List[str] = []
        if self.log_level.strip().lower() not in LOG_LEVELS:
            problems.append(f"unknown log level {self.log_level!r}")
        if self.output_format not in OUTPUT_FORMATS:
            problems.append(f"unknown output format {self.output_format!r}")
        if not self.error_var_name.isidentifier():
            problems.append(f"error variable name {self.error_var_name!r} is not an identifier")
        return problems


__all__ = [
    "AnalysisConfig",
    "LOG_LEVELS",
    "OUTPUT_FORMATS",
    "parse_log_level",
    "host_goos",
    "host_goarch",
    "go_env",
]
