"""
errstats/loader.py — turn command-line patterns into checked Go packages.

The loader plays the part of ``golang.org/x/tools/go/loader`` for the
statistics engine:

    patterns ──► package directories ──► parsed CompilationUnits
                                               │
                    imports resolved recursively (source, stub, opaque)
                                               │
                                      PackageChecker per package
                                               │
                                            Program

Only the *initial* packages (and, on request, source-loaded dependencies)
contribute units to the statistics; every other package exists purely to
give identifiers their types.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from tree_sitter import Node, Tree

from errstats.checker import PackageChecker, guess_package_name
from errstats.config import AnalysisConfig
from errstats.errors import LoadError, ParseError, SourceLocation
from errstats.gotypes import GoType
from errstats.stdlib import is_standard_library, stub_source
from errstats.syntax import node_text, parse_source

_log = logging.getLogger(__name__)

AD_HOC_PACKAGE = "command-line-arguments"

# newest go1.N release tag satisfied by every file we load
GO_MINOR_RELEASE = 24

KNOWN_OS = frozenset({
    "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
    "ios", "js", "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris",
    "wasip1", "windows", "zos",
})

KNOWN_ARCH = frozenset({
    "386", "amd64", "amd64p32", "arm", "armbe", "arm64", "arm64be",
    "loong64", "mips", "mipsle", "mips64", "mips64le", "mips64p32",
    "mips64p32le", "ppc", "ppc64", "ppc64le", "riscv", "riscv64", "s390",
    "s390x", "sparc", "sparc64", "wasm",
})

UNIX_OS = frozenset({
    "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
    "ios", "linux", "netbsd", "openbsd", "solaris",
})

_SKIPPED_DIRS = frozenset({"testdata", "vendor"})


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — UNITS, PACKAGES, PROGRAM
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Position:
    """A file:line source position, as reported in logs."""
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


class CompilationUnit:
    """One parsed Go source file of a package."""

    def __init__(self, path: str, package: str, source: bytes, tree: Tree) -> None:
        self.path = path
        self.package = package
        self.source = source
        self.tree = tree
        # (start_byte, end_byte) of an identifier → its static type
        self.types: Dict[Tuple[int, int], GoType] = {}

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def declarations(self) -> List[Node]:
        return [
            child for child in self.root.named_children
            if child.type not in ("package_clause", "import_declaration", "comment")
        ]

    def position_of(self, node: Node) -> Position:
        return Position(self.path, node.start_point[0] + 1)

    def line_count(self) -> int:
        """
        Number of lines in the file, counted the way ``go/token`` does: a
        trailing newline does not start a new line.
        """
        newlines = self.source.count(b"\n")
        if self.source.endswith(b"\n"):
            return newlines
        return newlines + 1

    def resolved_type_of(self, node: Node) -> Optional[GoType]:
        return self.types.get((node.start_byte, node.end_byte))

    def __repr__(self) -> str:
        return f"CompilationUnit({self.path!r}, package={self.package!r})"


class PackageKind:
    SOURCE = "source"
    STUB = "stub"
    OPAQUE = "opaque"


class Package:
    """A Go package: its files, its scope, and how it was obtained."""

    def __init__(
        self,
        path: str,
        name: str,
        kind: str = PackageKind.SOURCE,
        directory: Optional[Path] = None,
    ) -> None:
        self.path = path
        self.name = name
        self.kind = kind
        self.directory = directory
        self.units: List[CompilationUnit] = []
        self.scope = None
        self.checker: Optional[PackageChecker] = None

    @property
    def imports(self) -> List[str]:
        out: List[str] = []
        for unit in self.units:
            for path in _import_paths(unit.root):
                if path not in out:
                    out.append(path)
        return out

    def __repr__(self) -> str:
        return f"Package({self.path!r}, kind={self.kind})"


class Program:
    """The result of a load: initial packages plus every resolved dependency."""

    def __init__(self, initial: List[Package], packages: Dict[str, Package]) -> None:
        self.initial = initial
        self.packages = packages

    def initial_units(self) -> List[CompilationUnit]:
        units: List[CompilationUnit] = []
        for pkg in sorted(self.initial, key=lambda p: p.path):
            units.extend(sorted(pkg.units, key=lambda u: u.path))
        return units

    def dependencies(self) -> List[Package]:
        initial = {id(p) for p in self.initial}
        return [
            pkg for _, pkg in sorted(self.packages.items())
            if id(pkg) not in initial and pkg.kind == PackageKind.SOURCE
        ]

    def all_units(self) -> List[CompilationUnit]:
        units = self.initial_units()
        for pkg in self.dependencies():
            units.extend(sorted(pkg.units, key=lambda u: u.path))
        return units


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — BUILD CONSTRAINTS
# ═════════════════════════════════════════════════════════════════════════

_BUILD_TOKEN = re.compile(r"\s*(\(|\)|!|&&|\|\||[A-Za-z0-9_.]+)")


class BuildExprError(ValueError):
    pass


class _BuildExprParser:
    """
    Recursive-descent parser for ``//go:build`` expressions:

        expr  := and ('||' and)*
        and   := unary ('&&' unary)*
        unary := '!' unary | '(' expr ')' | tag
    """

    def __init__(self, text: str) -> None:
        self.tokens = self._tokenize(text)
        self.pos = 0

    @staticmethod
    def _tokenize(text: str) -> List[str]:
        tokens: List[str] = []
        pos = 0
        text = text.rstrip()
        while pos < len(text):
            m = _BUILD_TOKEN.match(text, pos)
            if m is None:
                raise BuildExprError(f"unexpected character in build expression: {text[pos:]!r}")
            tokens.append(m.group(1))
            pos = m.end()
        return tokens

    def parse(self) -> Callable[[Set[str]], bool]:
        if not self.tokens:
            raise BuildExprError("empty build expression")
        fn = self._or()
        if self.pos != len(self.tokens):
            raise BuildExprError(f"unexpected token {self.tokens[self.pos]!r}")
        return fn

    def _peek(self) -> Optional[str]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _or(self) -> Callable[[Set[str]], bool]:
        terms = [self._and()]
        while self._peek() == "||":
            self.pos += 1
            terms.append(self._and())
        return lambda tags: any(t(tags) for t in terms)

    def _and(self) -> Callable[[Set[str]], bool]:
        terms = [self._unary()]
        while self._peek() == "&&":
            self.pos += 1
            terms.append(self._unary())
        return lambda tags: all(t(tags) for t in terms)

    def _unary(self) -> Callable[[Set[str]], bool]:
        tok = self._peek()
        if tok is None:
            raise BuildExprError("unexpected end of build expression")
        self.pos += 1
        if tok == "!":
            inner = self._unary()
            return lambda tags: not inner(tags)
        if tok == "(":
            inner = self._or()
            if self._peek() != ")":
                raise BuildExprError("missing ')' in build expression")
            self.pos += 1
            return inner
        if tok in (")", "&&", "||"):
            raise BuildExprError(f"unexpected token {tok!r}")
        return lambda tags: tok in tags


def parse_build_expr(text: str) -> Callable[[Set[str]], bool]:
    """Compile a ``//go:build`` expression into a predicate over tag sets."""
    return _BuildExprParser(text).parse()


def _plus_build_line(text: str) -> Callable[[Set[str]], bool]:
    # "// +build a,b !c": space-separated OR of comma-separated AND terms
    options = []
    for option in text.split():
        terms = option.split(",")
        options.append(terms)

    def match(tags: Set[str]) -> bool:
        for terms in options:
            if all((t[1:] not in tags) if t.startswith("!") else (t in tags) for t in terms):
                return True
        return False

    return match


def build_tags(goos: str, goarch: str) -> Set[str]:
    tags = {goos, goarch, "gc"}
    if goos in UNIX_OS:
        tags.add("unix")
    if goos == "android":
        tags.add("linux")
    if goos == "illumos":
        tags.add("solaris")
    if goos == "ios":
        tags.add("darwin")
    tags.update(f"go1.{minor}" for minor in range(1, GO_MINOR_RELEASE + 1))
    return tags


def matches_file_name(name: str, goos: str, goarch: str) -> bool:
    """Apply the ``*_GOOS``, ``*_GOARCH`` and ``*_GOOS_GOARCH`` file name rules."""
    stem = name.split(".", 1)[0]
    if "_" not in stem:
        return True
    parts = stem.split("_")[1:]
    if parts and parts[-1] == "test":
        parts = parts[:-1]
    tags = build_tags(goos, goarch)
    n = len(parts)
    if n >= 2 and parts[-2] in KNOWN_OS and parts[-1] in KNOWN_ARCH:
        return parts[-2] in tags and parts[-1] in tags
    if n >= 1 and parts[-1] in KNOWN_OS:
        return parts[-1] in tags
    if n >= 1 and parts[-1] in KNOWN_ARCH:
        return parts[-1] in tags
    return True


def matches_build_constraints(source: bytes, goos: str, goarch: str, path: str = "") -> bool:
    """Evaluate the ``//go:build`` (or legacy ``// +build``) header of a file."""
    go_build: Optional[str] = None
    plus_build: List[str] = []
    in_block = False
    for raw in source.decode("utf-8", errors="replace").splitlines():
        line = raw.strip()
        if in_block:
            if "*/" in line:
                in_block = False
            continue
        if not line:
            continue
        if line.startswith("/*"):
            in_block = "*/" not in line[2:]
            continue
        if not line.startswith("//"):
            break
        comment = line[2:].strip()
        if line.startswith("//go:build") and go_build is None:
            go_build = line[len("//go:build"):]
        elif comment.startswith("+build"):
            plus_build.append(comment[len("+build"):])

    tags = build_tags(goos, goarch)
    if go_build is not None:
        try:
            return parse_build_expr(go_build)(tags)
        except BuildExprError as exc:
            _log.warning("%s: invalid //go:build line (%s); including file", path, exc)
            return True
    return all(_plus_build_line(text)(tags) for text in plus_build)


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — MODULE AND DIRECTORY LOOKUP
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class Module:
    root: Path
    path: str
    requires: Dict[str, str]


_MODULE_LINE = re.compile(r"^\s*module\s+(\S+)")
_REQUIRE_LINE = re.compile(r"^\s*(?:require\s+)?([^\s()]+)\s+(v[^\s]+)")


def read_module(go_mod: Path) -> Optional[Module]:
    try:
        text = go_mod.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        _log.warning("cannot read %s: %s", go_mod, exc)
        return None
    path = ""
    requires: Dict[str, str] = {}
    in_require = False
    for line in text.splitlines():
        line = line.split("//", 1)[0]
        m = _MODULE_LINE.match(line)
        if m:
            path = m.group(1).strip('"')
            continue
        stripped = line.strip()
        if stripped.startswith("require ("):
            in_require = True
            continue
        if in_require and stripped == ")":
            in_require = False
            continue
        if in_require or stripped.startswith("require "):
            r = _REQUIRE_LINE.match(stripped)
            if r:
                requires[r.group(1)] = r.group(2)
    if not path:
        return None
    return Module(go_mod.parent, path, requires)


def find_module(start: Path) -> Optional[Module]:
    """Find the module enclosing directory *start* by walking up to ``go.mod``."""
    for directory in [start, *start.parents]:
        candidate = directory / "go.mod"
        if candidate.is_file():
            return read_module(candidate)
    return None


def escape_module_path(path: str) -> str:
    """Module cache escaping: upper-case letters become ``!`` + lower-case."""
    return re.sub(r"[A-Z]", lambda m: "!" + m.group(0).lower(), path)


def _import_paths(root: Node) -> Iterator[str]:
    for decl in root.named_children:
        if decl.type != "import_declaration":
            continue
        for spec in _iter_import_specs(decl):
            path_node = spec.child_by_field_name("path")
            text = node_text(path_node)
            if len(text) >= 2:
                yield text[1:-1]


def _iter_import_specs(decl: Node) -> Iterator[Node]:
    for child in decl.named_children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            for spec in child.named_children:
                if spec.type == "import_spec":
                    yield spec


def package_clause_name(root: Node) -> str:
    for child in root.named_children:
        if child.type == "package_clause":
            for inner in child.named_children:
                if inner.type == "package_identifier":
                    return node_text(inner)
    return ""


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — LOADER
# ═════════════════════════════════════════════════════════════════════════

class Loader:
    """
    Resolve patterns and imports into ``Package`` objects.

    Packages are memoised by import path, so each one is parsed and
    checked once however many packages import it.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None, cwd: Optional[Path] = None) -> None:
        self.config = config or AnalysisConfig()
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.packages: Dict[str, Package] = {}
        self._module_cache: Dict[Path, Optional[Module]] = {}

    # ── Entry point ──────────────────────────────────────────────────

    def load(self, patterns: List[str], include_transitive: bool = False) -> Program:
        if not patterns:
            raise LoadError("no packages to analyze: give at least one pattern")
        initial = self._expand_patterns(patterns)
        for pkg in initial:
            self._check(pkg)
        for pkg in initial:
            pkg.checker.check_bodies()
        if include_transitive:
            for pkg in list(self.packages.values()):
                if pkg.kind == PackageKind.SOURCE and pkg.checker is not None:
                    pkg.checker.check_bodies()
        program = Program(initial, dict(self.packages))
        _log.info(
            "loaded %d package(s), %d dependenc%s",
            len(initial),
            len(program.packages) - len(initial),
            "y" if len(program.packages) - len(initial) == 1 else "ies",
        )
        return program

    # ── Patterns ─────────────────────────────────────────────────────

    def _expand_patterns(self, patterns: List[str]) -> List[Package]:
        go_files = [p for p in patterns if p.endswith(".go")]
        if go_files:
            if len(go_files) != len(patterns):
                raise LoadError("named files must all be .go files: " + " ".join(patterns))
            return [self._load_files(go_files)]

        initial: List[Package] = []
        seen: Set[str] = set()
        for pattern in patterns:
            if not pattern.strip():
                raise LoadError("empty package pattern")
            for pkg in self._expand_pattern(pattern):
                if pkg.path not in seen:
                    seen.add(pkg.path)
                    initial.append(pkg)
        return initial

    def _expand_pattern(self, pattern: str) -> List[Package]:
        if "..." in pattern:
            return self._expand_recursive(pattern)
        directory = self._local_dir(pattern)
        if directory is not None:
            if not directory.is_dir():
                raise LoadError(f"directory {pattern} does not exist")
            pkg = self._load_dir(directory, self._import_path_of(directory), initial=True)
            if pkg is None:
                raise LoadError(f"no buildable Go source files in {directory}")
            return [pkg]
        located = self._locate(pattern, self.cwd)
        if located is None:
            raise LoadError(f"cannot find package {pattern!r}")
        pkg = self._load_dir(located, pattern, initial=True)
        if pkg is None:
            raise LoadError(f"no buildable Go source files in {located}")
        return [pkg]

    def _expand_recursive(self, pattern: str) -> List[Package]:
        if not (pattern == "..." or pattern.endswith("/...")):
            raise LoadError(f"unsupported pattern {pattern!r}: '...' must end the pattern")
        prefix = pattern[: -len("...")].rstrip("/") or "."
        base = self._local_dir(prefix)
        if base is None:
            base = self._locate(prefix, self.cwd)
        if base is None or not base.is_dir():
            raise LoadError(f"pattern {pattern!r} matched no packages")
        found: List[Package] = []
        for directory in self._walk_package_dirs(base):
            pkg = self._load_dir(directory, self._import_path_of(directory), initial=True)
            if pkg is not None:
                found.append(pkg)
        if not found:
            raise LoadError(f"pattern {pattern!r} matched no packages")
        return found

    def _walk_package_dirs(self, base: Path) -> Iterator[Path]:
        for dirpath, dirnames, _ in os.walk(base):
            current = Path(dirpath)
            kept = []
            for name in sorted(dirnames):
                if name.startswith((".", "_")) or name in _SKIPPED_DIRS:
                    continue
                # nested modules are separate units of versioning
                if (current / name / "go.mod").is_file():
                    continue
                kept.append(name)
            dirnames[:] = kept
            yield current

    def _local_dir(self, pattern: str) -> Optional[Path]:
        """Filesystem path for relative/absolute patterns, else None."""
        if pattern in (".", "..") or pattern.startswith(("./", "../", "/")) or os.path.isabs(pattern):
            return Path(os.path.normpath(self.cwd / pattern))
        candidate = self.cwd / pattern
        if candidate.is_dir() and "." not in pattern.split("/", 1)[0]:
            return Path(os.path.normpath(candidate))
        return None

    # ── Directory → import path and back ─────────────────────────────

    def _module_for(self, directory: Path) -> Optional[Module]:
        if directory not in self._module_cache:
            self._module_cache[directory] = find_module(directory)
        return self._module_cache[directory]

    def _import_path_of(self, directory: Path) -> str:
        module = self._module_for(directory)
        if module is not None:
            rel = os.path.relpath(directory, module.root)
            if not rel.startswith(".."):
                return module.path if rel == "." else f"{module.path}/{Path(rel).as_posix()}"
        for root in self._src_roots():
            rel = os.path.relpath(directory, root)
            if not rel.startswith("..") and rel != ".":
                return Path(rel).as_posix()
        return "_" + directory.as_posix()

    def _src_roots(self) -> List[Path]:
        roots: List[Path] = []
        if self.config.gopath is not None:
            roots.append(self.config.gopath / "src")
        if self.config.goroot is not None:
            roots.append(self.config.goroot / "src")
        return roots

    def _locate(self, import_path: str, from_dir: Path) -> Optional[Path]:
        """Directory holding the source of *import_path*, if any."""
        module = self._module_for(from_dir)
        if module is not None:
            if import_path == module.path or import_path.startswith(module.path + "/"):
                rel = import_path[len(module.path):].lstrip("/")
                candidate = module.root / rel
                if candidate.is_dir():
                    return candidate
            # vendor directories from the importing package up to the module root
            for directory in [from_dir, *from_dir.parents]:
                candidate = directory / "vendor" / import_path
                if candidate.is_dir():
                    return candidate
                if directory == module.root:
                    break
            cached = self._module_cache_dir(module, import_path)
            if cached is not None:
                return cached
        if self.config.goroot is not None and is_standard_library(import_path):
            candidate = self.config.goroot / "src" / import_path
            if candidate.is_dir():
                return candidate
        if self.config.gopath is not None:
            candidate = self.config.gopath / "src" / import_path
            if candidate.is_dir():
                return candidate
        return None

    def _module_cache_dir(self, module: Module, import_path: str) -> Optional[Path]:
        if self.config.gopath is None:
            return None
        best = ""
        for required in module.requires:
            if (import_path == required or import_path.startswith(required + "/")) \
                    and len(required) > len(best):
                best = required
        if not best:
            return None
        version = module.requires[best]
        root = self.config.gopath / "pkg" / "mod" / f"{escape_module_path(best)}@{version}"
        candidate = root / import_path[len(best):].lstrip("/")
        return candidate if candidate.is_dir() else None

    # ── Reading packages ─────────────────────────────────────────────

    def _select_files(self, directory: Path) -> List[Path]:
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            raise LoadError(f"cannot read directory {directory}", cause=exc) from exc
        files: List[Path] = []
        for entry in entries:
            name = entry.name
            if not name.endswith(".go") or name.startswith((".", "_")) or not entry.is_file():
                continue
            if name.endswith("_test.go") and not self.config.include_tests:
                continue
            if not matches_file_name(name, self.config.goos, self.config.goarch):
                _log.debug("%s: excluded by file name constraint", entry)
                continue
            files.append(entry)
        return files

    def _read_unit(self, path: Path, strict: bool) -> Optional[CompilationUnit]:
        try:
            source = path.read_bytes()
        except OSError as exc:
            if strict:
                raise LoadError(f"cannot read {path}", location=SourceLocation(str(path)), cause=exc) from exc
            _log.warning("cannot read %s: %s", path, exc)
            return None
        if not matches_build_constraints(source, self.config.goos, self.config.goarch, str(path)):
            _log.debug("%s: excluded by build constraints", path)
            return None
        try:
            tree = parse_source(source, str(path))
        except ParseError:
            if strict:
                raise
            _log.warning("skipping unparsable dependency file %s", path)
            return None
        name = package_clause_name(tree.root_node)
        return CompilationUnit(str(path), name, source, tree)

    def _load_dir(self, directory: Path, import_path: str, initial: bool) -> Optional[Package]:
        if import_path in self.packages:
            return self.packages[import_path]
        units: List[CompilationUnit] = []
        for path in self._select_files(directory):
            unit = self._read_unit(path, strict=initial)
            if unit is not None:
                units.append(unit)
        units = self._consistent_units(units)
        if not units:
            return None
        pkg = Package(import_path, units[0].package, PackageKind.SOURCE, directory)
        pkg.units = units
        self.packages[import_path] = pkg
        _log.debug("loaded %s from %s (%d files)", import_path, directory, len(units))
        return pkg

    def _consistent_units(self, units: List[CompilationUnit]) -> List[CompilationUnit]:
        if not units:
            return units
        name = units[0].package
        kept = [units[0]]
        for unit in units[1:]:
            if unit.package == name:
                kept.append(unit)
            elif self.config.include_tests and unit.package == name + "_test":
                _log.debug("%s: external test package %s not loaded", unit.path, unit.package)
            else:
                _log.warning(
                    "%s: package %s does not match %s; skipping file",
                    unit.path, unit.package, name,
                )
        return kept

    def _load_files(self, files: List[str]) -> Package:
        units: List[CompilationUnit] = []
        directory: Optional[Path] = None
        for name in files:
            path = Path(os.path.normpath(self.cwd / name))
            if not path.is_file():
                raise LoadError(f"no such file {name}")
            if directory is None:
                directory = path.parent
            unit = self._read_unit(path, strict=True)
            if unit is not None:
                units.append(unit)
        units = self._consistent_units(units)
        if not units:
            raise LoadError("build constraints exclude all named Go files")
        pkg = Package(AD_HOC_PACKAGE, units[0].package, PackageKind.SOURCE, directory)
        pkg.units = units
        self.packages[AD_HOC_PACKAGE] = pkg
        return pkg

    # ── Imports and checking ─────────────────────────────────────────

    def _check(self, pkg: Package) -> Package:
        if pkg.checker is None:
            from_dir = pkg.directory or self.cwd
            pkg.checker = PackageChecker(pkg, lambda path: self._import(path, from_dir))
            pkg.checker.collect()
        return pkg

    def _import(self, import_path: str, from_dir: Path) -> Optional[Package]:
        pkg = self.packages.get(import_path)
        if pkg is None:
            pkg = self._resolve_import(import_path, from_dir)
            self.packages.setdefault(import_path, pkg)
            pkg = self.packages[import_path]
        if pkg.kind == PackageKind.OPAQUE:
            return pkg
        return self._check(pkg)

    def _resolve_import(self, import_path: str, from_dir: Path) -> Package:
        if import_path not in ("C", "unsafe"):
            directory = self._locate(import_path, from_dir)
            if directory is not None:
                pkg = self._load_dir(directory, import_path, initial=False)
                if pkg is not None:
                    return pkg
            stub = stub_source(import_path)
            if stub is not None:
                return self._load_stub(import_path, stub)
        _log.debug("import %s is opaque", import_path)
        return Package(import_path, guess_package_name(import_path), PackageKind.OPAQUE)

    def _load_stub(self, import_path: str, text: str) -> Package:
        source = text.encode("utf-8")
        label = f"<stub {import_path}>"
        tree = parse_source(source, label)
        name = package_clause_name(tree.root_node)
        pkg = Package(import_path, name, PackageKind.STUB)
        pkg.units = [CompilationUnit(label, name, source, tree)]
        _log.debug("using declaration stub for %s", import_path)
        return pkg


def load_units(
    patterns: List[str],
    include_transitive: bool = False,
    config: Optional[AnalysisConfig] = None,
    cwd: Optional[Path] = None,
) -> Program:
    """
    Load and type-check the packages named by *patterns*.

    Raises
    ------
    LoadError
        If a pattern cannot be resolved or an initial file cannot be parsed.
    """
    return Loader(config, cwd).load(patterns, include_transitive)


__all__ = [
    "AD_HOC_PACKAGE",
    "Position",
    "CompilationUnit",
    "PackageKind",
    "Package",
    "Program",
    "Module",
    "Loader",
    "load_units",
    "find_module",
    "read_module",
    "escape_module_path",
    "parse_build_expr",
    "build_tags",
    "matches_file_name",
    "matches_build_constraints",
    "package_clause_name",
]
