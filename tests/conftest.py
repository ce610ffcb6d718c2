# tests/conftest.py
"""
Shared Go sources and helpers for the errstats test-suite.

Tests build small Go modules under ``tmp_path`` and load them with an
isolated configuration (no GOROOT and no go tool lookup, a private GOPATH, linux/amd64), so the
results never depend on the machine's Go installation.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

from errstats.config import AnalysisConfig
from errstats.gotypes import GoType
from errstats.loader import CompilationUnit, Program, load_units
from errstats.stats import StatCounters
from errstats.syntax import iter_preorder, node_line, node_text
from errstats.visitor import ErrStatVisitor

MODULE_PATH = "example.com/m"

# The reference test case: two error checks, both on a variable named err,
# and one `err` that is a *os.File.
CASE01_MAIN_GO = """\
package main

import (
\t"errors"
\t"fmt"
\t"os"
)

// meaningless comment

func main() {
\t_, err := fmt.Println("vim-go")
\tif err != nil {
\t\tpanic("1")
\t}
\tif err := errors.New(""); err != nil {
\t\t// meaningless comment
\t\tpanic("2")
\t}
\tif err := (&os.File{}); err != nil {
\t\tpanic("3")
\t}
}
"""

SCENARIO_A_GO = """\
package main

import "os"

func main() {
	f, err := os.Open("config.yaml")
	if err != nil {
		return
	}
	_ = f
}
"""

SCENARIO_B_GO = """\
package main

type thing struct{ name string }

func lookup() *thing { return &thing{} }

func main() {
	if err := lookup(); err != nil {
		return
	}
}
"""

SCENARIO_C_GO = """\
package main

func main() {
	if nil != nil {
		return
	}
}
"""

SCENARIO_D_GO = """\
package main

type holder struct{ field error }

func main() {
	var someStruct holder
	if someStruct.field != nil {
		return
	}
}
"""

CUSTOM_ERROR_GO = """\
package main

type MyErr struct{ msg string }

func (e *MyErr) Error() string { return e.msg }

func newMyErr() *MyErr { return nil }

func main() {
	e := newMyErr()
	if e != nil {
		return
	}
	var v MyErr
	if v != nil {
		return
	}
}
"""


UTIL_GO = """\
package util

import "errors"

func Check() error { return errors.New("x") }
"""

USES_UTIL_GO = """\
package main

import "example.com/m/util"

func main() {
	e := util.Check()
	if e != nil {
	}
}
"""

# a main package importing a sibling package of the same module
USES_UTIL = {"main.go": USES_UTIL_GO, "util/util.go": UTIL_GO}


def go_main(body: str, imports: Iterable[str] = (), decls: str = "") -> str:
    """Wrap *body* in ``package main`` / ``func main()``."""
    lines = ["package main", ""]
    imports = list(imports)
    if imports:
        lines.append("import (")
        lines.extend(f'\t"{imp}"' for imp in imports)
        lines.append(")")
        lines.append("")
    if decls:
        lines.append(textwrap.dedent(decls).strip("\n"))
        lines.append("")
    lines.append("func main() {")
    lines.append(textwrap.indent(textwrap.dedent(body).strip("\n"), "\t"))
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_go_module(
    root: Path,
    files: Dict[str, str],
    module: str = MODULE_PATH,
) -> Path:
    """Create a Go module at *root* holding *files* (relative path → text)."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "go.mod").write_text(f"module {module}\n\ngo 1.22\n", encoding="utf-8")
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def isolated_config(tmp_path: Path, **overrides) -> AnalysisConfig:
    values = dict(
        goroot=None,
        gopath=tmp_path / "gopath",
        goos="linux",
        goarch="amd64",
    )
    values.update(overrides)
    return AnalysisConfig(**values)


def load_module(
    tmp_path: Path,
    files: Dict[str, str],
    patterns: Optional[List[str]] = None,
    include_transitive: bool = False,
    **overrides,
) -> Program:
    root = write_go_module(tmp_path / "mod", files)
    config = isolated_config(tmp_path, include_transitive=include_transitive, **overrides)
    return load_units(patterns or [str(root)], include_transitive, config, cwd=root)


def counters_for(tmp_path: Path, files: Dict[str, str], **overrides) -> StatCounters:
    program = load_module(tmp_path, files, **overrides)
    return ErrStatVisitor().visit_units(program.initial_units())


def single_unit(tmp_path: Path, source: str) -> CompilationUnit:
    program = load_module(tmp_path, {"main.go": source})
    units = program.initial_units()
    assert len(units) == 1
    return units[0]


def ident_type(unit: CompilationUnit, name: str, line: int) -> Optional[GoType]:
    """Resolved type of the first identifier *name* on 1-based *line*."""
    for node in iter_preorder(unit.root):
        if node.type == "identifier" and node_line(node) == line and node_text(node) == name:
            return unit.resolved_type_of(node)
    raise AssertionError(f"no identifier {name!r} on line {line}")


def line_of(source: str, needle: str) -> int:
    """1-based line of the first line of *source* containing *needle*."""
    for idx, text in enumerate(source.splitlines(), start=1):
        if needle in text:
            return idx
    raise AssertionError(f"{needle!r} not found")


@pytest.fixture
def config(tmp_path: Path) -> AnalysisConfig:
    return isolated_config(tmp_path)


@pytest.fixture(autouse=True)
def _isolated_go_env(monkeypatch, tmp_path: Path) -> None:
    """Keep the host's Go environment out of configurations built from defaults."""
    monkeypatch.delenv("GOROOT", raising=False)
    monkeypatch.setattr("errstats.config._go_tool", lambda: None)
    monkeypatch.setenv("GOPATH", str(tmp_path / "gopath"))
    monkeypatch.setenv("GOOS", "linux")
    monkeypatch.setenv("GOARCH", "amd64")
