# tests/test_stdlib.py
"""Tests for the standard-library declaration stubs."""

import pytest

from errstats.checker import ObjKind
from errstats.gotypes import GoType, TypeKind, implements_error
from errstats.loader import Loader, PackageKind, package_clause_name
from errstats.stdlib import STDLIB_STUBS, is_standard_library, stub_source
from errstats.syntax import parse_source

from tests.conftest import isolated_config


@pytest.fixture
def loader(tmp_path):
    return Loader(isolated_config(tmp_path), cwd=tmp_path)


def _member(loader, tmp_path, import_path, name):
    pkg = loader._import(import_path, tmp_path)
    assert pkg.kind == PackageKind.STUB
    obj = pkg.scope.lookup_local(name)
    assert obj is not None, f"{import_path}.{name} not declared"
    return obj


class TestStubSources:

    @pytest.mark.parametrize("import_path", sorted(STDLIB_STUBS))
    def test_every_stub_parses(self, import_path):
        tree = parse_source(stub_source(import_path).encode("utf-8"), import_path)
        assert package_clause_name(tree.root_node) == import_path.rsplit("/", 1)[-1]

    def test_unknown_package(self):
        assert stub_source("github.com/pkg/errors") is None

    @pytest.mark.parametrize("path, expected", [
        ("fmt", True),
        ("net/http", True),
        ("golang.org/x/tools/go/loader", False),
        ("example.com/m", False),
    ])
    def test_is_standard_library(self, path, expected):
        assert is_standard_library(path) is expected


class TestStubTypes:

    def test_errors_new_returns_error(self, loader, tmp_path):
        obj = _member(loader, tmp_path, "errors", "New")
        assert obj.kind is ObjKind.FUNC
        sig = obj.resolve()
        assert implements_error(sig.results[0])

    def test_os_open_results(self, loader, tmp_path):
        sig = _member(loader, tmp_path, "os", "Open").resolve()
        f_type, err_type = sig.results
        assert f_type.kind is TypeKind.POINTER
        assert not implements_error(f_type)
        assert implements_error(err_type)

    def test_path_error_pointer_is_an_error(self, loader, tmp_path):
        obj = _member(loader, tmp_path, "io/fs", "PathError")
        assert obj.kind is ObjKind.TYPE
        t = obj.resolve()
        assert not implements_error(t)
        assert implements_error(GoType.pointer(t))

    def test_io_eof_is_an_error_var(self, loader, tmp_path):
        obj = _member(loader, tmp_path, "io", "EOF")
        assert obj.kind is ObjKind.VAR
        assert implements_error(obj.resolve())

    def test_stub_imports_resolve(self, loader, tmp_path):
        # ioutil refers to io, io/fs and os
        sig = _member(loader, tmp_path, "io/ioutil", "TempFile").resolve()
        assert implements_error(sig.results[1])
