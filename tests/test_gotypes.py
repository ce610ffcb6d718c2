# tests/test_gotypes.py
"""
Tests for the Go type model: method sets and the error capability.
These build types directly and need no parser.
"""

import pytest

from errstats.gotypes import (
    ANY,
    BOOL,
    ERROR,
    INT,
    STRING,
    UNTYPED_NIL,
    GoType,
    TypeKind,
    core_type,
    implements_error,
    lookup_field,
    lookup_method,
    method_set,
    type_string,
)

ERROR_SIG = GoType.func(results=(STRING,))


def _struct_named(name, fields=None, embedded=None):
    return GoType.named(name, package="p", underlying=GoType.struct(fields, embedded))


class TestErrorCapability:

    def test_predeclared_error(self):
        assert implements_error(ERROR)

    def test_bare_interface_with_error_method(self):
        assert implements_error(GoType.interface({"Error": ERROR_SIG}))

    def test_untyped_nil_and_absent(self):
        assert not implements_error(UNTYPED_NIL)
        assert not implements_error(None)

    def test_basic_types(self):
        assert not implements_error(INT)
        assert not implements_error(STRING)

    def test_value_receiver_satisfies_both_t_and_pointer(self):
        t = _struct_named("E")
        t.add_method("Error", ERROR_SIG, pointer_receiver=False)
        assert implements_error(t)
        assert implements_error(GoType.pointer(t))

    def test_pointer_receiver_only_satisfies_pointer(self):
        t = _struct_named("E")
        t.add_method("Error", ERROR_SIG, pointer_receiver=True)
        assert not implements_error(t)
        assert implements_error(GoType.pointer(t))

    @pytest.mark.parametrize("sig", [
        GoType.func(results=(INT,)),
        GoType.func(params=(INT,), results=(STRING,)),
        GoType.func(params=(GoType.slice(ANY),), results=(STRING,), variadic=True),
        GoType.func(results=(STRING, BOOL)),
        GoType.func(),
    ])
    def test_wrong_signatures(self, sig):
        t = _struct_named("E")
        t.add_method("Error", sig, pointer_receiver=False)
        assert not implements_error(t)

    def test_name_plays_no_part(self):
        t = _struct_named("error")
        assert not implements_error(t)

    def test_named_string_result_is_not_string(self):
        mystring = GoType.named("mystring", package="p", underlying=STRING)
        t = _struct_named("E")
        t.add_method("Error", GoType.func(results=(mystring,)), pointer_receiver=False)
        assert not implements_error(t)

    def test_promoted_through_embedded_pointer(self):
        inner = _struct_named("Inner")
        inner.add_method("Error", ERROR_SIG, pointer_receiver=True)
        outer = _struct_named("Outer", embedded=[GoType.pointer(inner)])
        assert implements_error(outer)

    def test_promoted_pointer_method_needs_addressable_outer(self):
        inner = _struct_named("Inner")
        inner.add_method("Error", ERROR_SIG, pointer_receiver=True)
        outer = _struct_named("Outer", embedded=[inner])
        assert not implements_error(outer)
        assert implements_error(GoType.pointer(outer))

    def test_promoted_through_embedded_interface(self):
        outer = _struct_named("Wrapper", embedded=[ERROR])
        assert implements_error(outer)

    def test_interface_embedding(self):
        temporary = GoType.named(
            "Temporary", package="net",
            underlying=GoType.interface(
                {"Temporary": GoType.func(results=(BOOL,))}, embedded=[ERROR]
            ),
        )
        assert implements_error(temporary)
        assert set(method_set(temporary)) == {"Error", "Temporary"}

    def test_pointer_to_interface_has_no_methods(self):
        assert not implements_error(GoType.pointer(ERROR))

    def test_type_parameter_uses_constraint(self):
        assert implements_error(GoType.type_param("T", ERROR))
        assert not implements_error(GoType.type_param("T", ANY))

    def test_tuple_is_never_an_error(self):
        assert not implements_error(GoType.tuple_of((INT, ERROR)))


class TestLazyNamedTypes:

    def test_resolver_runs_once(self):
        calls = []

        def resolve():
            calls.append(1)
            return GoType.struct()

        t = GoType.named("T", resolver=resolve)
        assert t.underlying().kind is TypeKind.STRUCT
        assert t.underlying().kind is TypeKind.STRUCT
        assert calls == [1]

    def test_named_of_named_takes_underlying(self):
        base = _struct_named("Base")
        derived = GoType.named("Derived", resolver=lambda: base)
        assert derived.underlying() is base.underlying()

    def test_cycle_yields_none(self):
        holder = {}
        holder["t"] = GoType.named("T", resolver=lambda: holder["t"].underlying())
        assert holder["t"].underlying() is None

    def test_recursive_struct_through_pointer(self):
        node = GoType.named("Node", package="p")
        node.set_underlying(GoType.struct({"next": GoType.pointer(node)}))
        assert lookup_field(node, "next").elem is node


class TestLookups:

    def test_field_on_pointer(self):
        t = _struct_named("S", fields={"err": ERROR})
        assert lookup_field(GoType.pointer(t), "err") is ERROR

    def test_promoted_field(self):
        inner = _struct_named("Inner", fields={"Err": ERROR})
        outer = _struct_named("Outer", embedded=[GoType.pointer(inner)])
        assert lookup_field(outer, "Err") is ERROR

    def test_embedded_field_by_type_name(self):
        inner = _struct_named("Inner")
        outer = _struct_named("Outer", embedded=[inner])
        assert lookup_field(outer, "Inner") is inner

    def test_pointer_method_callable_on_value(self):
        t = _struct_named("S")
        close_sig = GoType.func(results=(ERROR,))
        t.add_method("Close", close_sig, pointer_receiver=True)
        assert lookup_method(t, "Close") is close_sig

    def test_core_type_of_type_param(self):
        tp = GoType.type_param("T", GoType.slice(INT))
        assert core_type(tp).kind is TypeKind.SLICE


class TestTypeString:

    @pytest.mark.parametrize("t, expected", [
        (ERROR, "error"),
        (GoType.pointer(GoType.named("File", package="os")), "*os.File"),
        (GoType.map_of(STRING, GoType.slice(INT)), "map[string][]int"),
        (GoType.func(params=(INT,), results=(INT, ERROR)), "func(int) (int, error)"),
        (UNTYPED_NIL, "untyped nil"),
        (None, "<unknown>"),
    ])
    def test_rendering(self, t, expected):
        assert type_string(t) == expected

    def test_variadic(self):
        sig = GoType.func(params=(STRING, GoType.slice(ANY)), variadic=True)
        assert type_string(sig) == "func(string, ...interface{})"
