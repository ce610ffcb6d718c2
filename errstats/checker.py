"""
errstats/checker.py
═══════════════════

Name resolution and type inference for parsed Go packages.

The checker answers one question for the traversal engine: *what is the
static type of this identifier?*  It does not report type errors.  Code
that does not type-check simply leaves some identifiers unresolved, and
the classifier treats unresolved operands as non-errors.

Phases (per package):

    1. collect   package-level declarations into the package scope and
                 imports into per-file scopes; nothing is resolved yet
    2. methods   attach method declarations to their receiver base types
    3. bodies    walk initializers and function bodies in source order,
                 opening a scope per block and recording the type of
                 every identifier evaluated as an expression

Package-level objects resolve lazily on first use, so declaration order
never matters.  Scopes mirror Go's: universe → package → file → function
→ nested blocks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from tree_sitter import Node

from errstats.gotypes import (
    ANY,
    BOOL,
    BYTE,
    COMPLEX128,
    FLOAT64,
    INT,
    RUNE,
    STRING,
    UNIVERSE_TYPES,
    UNTYPED_NIL,
    GoType,
    TypeKind,
    core_type,
    lookup_field,
    lookup_method,
)
from errstats.syntax import (
    COMPARISON_OPERATORS,
    binary_operator,
    field_nodes,
    node_text,
    statements,
    string_literal_value,
)

_log = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — OBJECTS AND SCOPES
# ═════════════════════════════════════════════════════════════════════════

class ObjKind(Enum):
    VAR = auto()
    CONST = auto()
    TYPE = auto()
    FUNC = auto()
    PKGNAME = auto()
    BUILTIN = auto()
    NIL = auto()


class Obj:
    """
    A named language entity: variable, constant, type, function, imported
    package name or builtin.

    The type is either known up front or produced on demand by *lazy*.
    """

    __slots__ = ("kind", "name", "_type", "_lazy", "_resolving", "package")

    def __init__(
        self,
        kind: ObjKind,
        name: str,
        type: Optional[GoType] = None,
        lazy: Optional[Callable[[], Optional[GoType]]] = None,
        package=None,
    ) -> None:
        self.kind = kind
        self.name = name
        self._type = type
        self._lazy = lazy
        self._resolving = False
        # PKGNAME only: the imported package (anything with a ``scope``)
        self.package = package

    def resolve(self) -> Optional[GoType]:
        if self._lazy is not None:
            if self._resolving:
                return None
            self._resolving = True
            try:
                self._type = self._lazy()
            finally:
                self._resolving = False
                self._lazy = None
        return self._type

    def __repr__(self) -> str:
        return f"Obj({self.kind.name}, {self.name!r})"


class Scope:
    """
    A lexical scope containing object bindings.

    Supports nested scopes with parent lookup.  A file scope remembers the
    compilation unit it belongs to (inherited by every nested scope), so
    types can be recorded against the right file, and any dot-imported
    packages whose exported names it makes visible.
    """

    def __init__(
        self,
        name: str,
        parent: Optional[Scope] = None,
        kind: str = "block",
        unit=None,
    ) -> None:
        self.name = name
        self.parent = parent
        self.kind = kind  # "universe", "package", "file", "func", "block"
        self.unit = unit if unit is not None else (parent.unit if parent else None)
        self.dot_imports: List = []
        self._objects: Dict[str, Obj] = {}

    def define(self, obj: Obj) -> Optional[Obj]:
        """
        Bind *obj* in this scope.  The blank identifier is never bound.
        Returns the previous binding, if any.
        """
        if obj.name == "_":
            return None
        existing = self._objects.get(obj.name)
        self._objects[obj.name] = obj
        return existing

    def lookup_local(self, name: str) -> Optional[Obj]:
        obj = self._objects.get(name)
        if obj is not None:
            return obj
        for pkg in self.dot_imports:
            if pkg.scope is not None:
                obj = pkg.scope.lookup_local(name)
                if obj is not None:
                    return obj
        return None

    def lookup(self, name: str) -> Optional[Obj]:
        scope: Optional[Scope] = self
        while scope is not None:
            obj = scope.lookup_local(name)
            if obj is not None:
                return obj
            scope = scope.parent
        return None

    def names(self) -> List[str]:
        return sorted(self._objects)

    def __contains__(self, name: str) -> bool:
        return name in self._objects


_BUILTIN_FUNCS = (
    "append", "cap", "clear", "close", "complex", "copy", "delete", "imag",
    "len", "make", "max", "min", "new", "panic", "print", "println", "real",
    "recover",
)


def _build_universe() -> Scope:
    universe = Scope("universe", kind="universe")
    for name, t in UNIVERSE_TYPES.items():
        if "." not in name:
            universe.define(Obj(ObjKind.TYPE, name, type=t))
    universe.define(Obj(ObjKind.CONST, "true", type=BOOL))
    universe.define(Obj(ObjKind.CONST, "false", type=BOOL))
    universe.define(Obj(ObjKind.CONST, "iota", type=INT))
    universe.define(Obj(ObjKind.NIL, "nil", type=UNTYPED_NIL))
    for name in _BUILTIN_FUNCS:
        universe.define(Obj(ObjKind.BUILTIN, name))
    return universe


UNIVERSE = _build_universe()

_VERSION_SUFFIX = re.compile(r"^v[0-9]+$")


def guess_package_name(import_path: str) -> str:
    """
    Best guess at the package name an unresolved import declares: the last
    path element, skipping a major-version suffix and a ``go-`` prefix.
    """
    parts = [p for p in import_path.split("/") if p]
    if not parts:
        return import_path
    name = parts[-1]
    if _VERSION_SUFFIX.match(name) and len(parts) > 1:
        name = parts[-2]
    if "." in name:
        head, _, tail = name.partition(".")
        name = head if _VERSION_SUFFIX.match(tail) else name
    if name.startswith("go-"):
        name = name[3:]
    return name.replace("-", "_").replace(".", "_")


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — PACKAGE CHECKER
# ═════════════════════════════════════════════════════════════════════════

Importer = Callable[[str], Optional[object]]


@dataclass
class _Signature:
    type: GoType
    bindings: List[Tuple[Node, Optional[GoType]]]


class PackageChecker:
    """
    Resolve the names of one package and infer identifier types.

    *package* must expose ``path``, ``name`` and ``units`` (each unit with
    ``path``, ``tree`` and a ``types`` dict).  The checker assigns
    ``package.scope``.  *importer* maps an import path to a package that
    has already been collected (or ``None`` if it cannot be found).
    """

    def __init__(self, package, importer: Importer) -> None:
        self.package = package
        self.importer = importer
        self.scope = Scope(f"package {package.path}", parent=UNIVERSE, kind="package")
        package.scope = self.scope
        self._file_scopes: List[Tuple[object, Scope]] = []
        self._methods: List[Tuple[Node, Scope]] = []
        self._funcs: List[Tuple[Node, Scope]] = []
        self._var_specs: List[Tuple[Node, Scope]] = []
        self._spec_cache: Dict[Tuple[int, int, int], List[Optional[GoType]]] = {}
        self._collected = False
        self._bodies_checked = False

    # ── Phases 1 and 2 ───────────────────────────────────────────────

    def collect(self) -> None:
        if self._collected:
            return
        self._collected = True
        _log.debug("collecting declarations of %s", self.package.path)
        for unit in self.package.units:
            file_scope = Scope(unit.path, parent=self.scope, kind="file", unit=unit)
            self._file_scopes.append((unit, file_scope))
            root = unit.tree.root_node
            for decl in root.named_children:
                t = decl.type
                if t == "import_declaration":
                    self._collect_imports(decl, file_scope)
                elif t == "function_declaration":
                    self._collect_func(decl, file_scope)
                elif t == "method_declaration":
                    self._methods.append((decl, file_scope))
                elif t == "type_declaration":
                    self._declare_types(decl, file_scope, self.scope)
                elif t == "var_declaration":
                    for spec in _specs(decl, "var_spec"):
                        self._declare_var_spec(spec, file_scope, self.scope)
                        self._var_specs.append((spec, file_scope))
                elif t == "const_declaration":
                    self._declare_const_decl(decl, file_scope, self.scope)
        for decl, file_scope in self._methods:
            self._attach_method(decl, file_scope)

    def _collect_imports(self, decl: Node, file_scope: Scope) -> None:
        specs: List[Node] = []
        for child in decl.named_children:
            if child.type == "import_spec":
                specs.append(child)
            elif child.type == "import_spec_list":
                specs.extend(c for c in child.named_children if c.type == "import_spec")
        for spec in specs:
            path = string_literal_value(spec.child_by_field_name("path"))
            alias = spec.child_by_field_name("name")
            pkg = self.importer(path)
            if alias is not None and alias.type == "blank_identifier":
                continue
            if alias is not None and alias.type == "dot":
                if pkg is not None:
                    file_scope.dot_imports.append(pkg)
                continue
            if alias is not None:
                name = node_text(alias)
            elif pkg is not None and getattr(pkg, "name", ""):
                name = pkg.name
            else:
                name = guess_package_name(path)
            file_scope.define(Obj(ObjKind.PKGNAME, name, package=pkg))

    def _collect_func(self, decl: Node, file_scope: Scope) -> None:
        self._funcs.append((decl, file_scope))
        name = node_text(decl.child_by_field_name("name"))
        if name in ("init", "_"):
            return
        self.scope.define(Obj(
            ObjKind.FUNC, name,
            lazy=lambda: self._func_signature(decl, file_scope)[0].type,
        ))

    def _attach_method(self, decl: Node, file_scope: Scope) -> None:
        receiver = decl.child_by_field_name("receiver")
        recv_decl = _first_param(receiver)
        if recv_decl is None:
            return
        base, pointer = _receiver_base(recv_decl.child_by_field_name("type"))
        if base is None:
            return
        obj = self.scope.lookup_local(node_text(base))
        if obj is None or obj.kind is not ObjKind.TYPE:
            return
        named = obj.resolve()
        if named is None or named.kind is not TypeKind.NAMED:
            return
        sig, _ = self._func_signature(decl, file_scope)
        named.add_method(node_text(decl.child_by_field_name("name")), sig.type, pointer)

    # ── Phase 3 ──────────────────────────────────────────────────────

    def check_bodies(self) -> None:
        """Infer types for every package-level initializer and function body."""
        self.collect()
        if self._bodies_checked:
            return
        self._bodies_checked = True
        _log.debug("checking bodies of %s", self.package.path)
        for spec, file_scope in self._var_specs:
            self._spec_types(spec, file_scope)
        for decl, file_scope in self._funcs + self._methods:
            body = decl.child_by_field_name("body")
            if body is None:
                continue
            sig, fscope = self._func_signature(decl, file_scope)
            for name_node, t in sig.bindings:
                self._define_var(fscope, name_node, t)
            self._block_statements(body, fscope)

    # ── Declarations ─────────────────────────────────────────────────

    def _declare_types(self, decl: Node, lookup_scope: Scope, target: Scope) -> None:
        for spec in decl.named_children:
            name_node = spec.child_by_field_name("name")
            if name_node is None:
                continue
            name = node_text(name_node)
            type_node = spec.child_by_field_name("type")
            if spec.type == "type_alias":
                target.define(Obj(
                    ObjKind.TYPE, name,
                    lazy=lambda n=type_node, s=lookup_scope: self.resolve_type(n, s),
                ))
            elif spec.type == "type_spec":
                inner = self._type_param_scope(
                    spec.child_by_field_name("type_parameters"), lookup_scope
                )
                named = GoType.named(
                    name,
                    package=self.package.name,
                    resolver=lambda n=type_node, s=inner: self.resolve_type(n, s),
                )
                target.define(Obj(ObjKind.TYPE, name, type=named))

    def _declare_var_spec(self, spec: Node, lookup_scope: Scope, target: Scope) -> None:
        for idx, name_node in enumerate(field_nodes(spec, "name")):
            target.define(Obj(
                ObjKind.VAR, node_text(name_node),
                lazy=lambda i=idx: _at(self._spec_types(spec, lookup_scope), i),
            ))

    def _declare_const_decl(self, decl: Node, lookup_scope: Scope, target: Scope) -> None:
        # an empty const spec repeats the previous spec's type and values
        prev_type: Optional[Node] = None
        prev_values: Optional[Node] = None
        for spec in _specs(decl, "const_spec"):
            type_node = spec.child_by_field_name("type")
            values = spec.child_by_field_name("value")
            if type_node is None and values is None:
                type_node, values = prev_type, prev_values
            else:
                prev_type, prev_values = type_node, values
            for idx, name_node in enumerate(field_nodes(spec, "name")):
                target.define(Obj(
                    ObjKind.CONST, node_text(name_node),
                    lazy=lambda i=idx, t=type_node, v=values: self._const_type(
                        t, v, i, lookup_scope
                    ),
                ))

    def _const_type(
        self, type_node: Optional[Node], values: Optional[Node], idx: int, scope: Scope
    ) -> Optional[GoType]:
        if type_node is not None:
            return self.resolve_type(type_node, scope)
        exprs = _expr_list(values)
        if idx < len(exprs):
            return self.expr(exprs[idx], scope)
        return None

    def _spec_types(self, spec: Node, scope: Scope) -> List[Optional[GoType]]:
        """Types of the names a ``var`` spec declares, computed once."""
        key = (id(scope.unit), spec.start_byte, spec.end_byte)
        cached = self._spec_cache.get(key)
        if cached is not None:
            return cached
        names = field_nodes(spec, "name")
        type_node = spec.child_by_field_name("type")
        values = _expr_list(spec.child_by_field_name("value"))
        declared = self.resolve_type(type_node, scope) if type_node is not None else None
        if values:
            inferred = self._values_for(names, values, scope)
        else:
            inferred = [None] * len(names)
        result = [declared if declared is not None else t for t in inferred]
        self._spec_cache[key] = result
        for name_node, t in zip(names, result):
            self._record(name_node, t, scope)
        return result

    def _values_for(
        self, names: Sequence[Node], values: Sequence[Node], scope: Scope
    ) -> List[Optional[GoType]]:
        """Types assigned to *names* by the right-hand side *values*."""
        if len(values) == 1 and len(names) > 1:
            types = self.expr_multi(values[0], scope, len(names))
        else:
            types = [self.expr(v, scope) for v in values]
        types = list(types) + [None] * (len(names) - len(types))
        return types[: len(names)]

    def _define_var(self, scope: Scope, name_node: Node, t: Optional[GoType]) -> None:
        scope.define(Obj(ObjKind.VAR, node_text(name_node), type=t))
        self._record(name_node, t, scope)

    # ── Signatures ───────────────────────────────────────────────────

    def _type_param_scope(self, tparams: Optional[Node], parent: Scope) -> Scope:
        if tparams is None:
            return parent
        scope = Scope("type parameters", parent=parent, kind="block")
        for decl in tparams.named_children:
            if decl.type != "type_parameter_declaration":
                continue
            constraint_node = decl.child_by_field_name("type")
            for name_node in field_nodes(decl, "name"):
                name = node_text(name_node)
                tp = GoType.type_param(name, None)
                scope.define(Obj(ObjKind.TYPE, name, type=tp))
            constraint = self.resolve_type(constraint_node, scope) if constraint_node else None
            for name_node in field_nodes(decl, "name"):
                obj = scope.lookup_local(node_text(name_node))
                if obj is not None and obj.resolve() is not None:
                    obj.resolve().constraint = constraint
        return scope

    def _func_signature(self, decl: Node, file_scope: Scope) -> Tuple[_Signature, Scope]:
        """
        Signature of a function or method declaration, plus the function
        scope its parameters are to be bound in.
        """
        fscope = Scope(node_text(decl.child_by_field_name("name")), parent=file_scope, kind="func")
        fscope = self._type_param_scope(decl.child_by_field_name("type_parameters"), fscope)
        bindings: List[Tuple[Node, Optional[GoType]]] = []
        receiver = decl.child_by_field_name("receiver")
        if receiver is not None:
            recv_decl = _first_param(receiver)
            if recv_decl is not None:
                recv_type_node = recv_decl.child_by_field_name("type")
                fscope = self._receiver_type_params(recv_type_node, fscope)
                recv_type = self.resolve_type(recv_type_node, fscope)
                for name_node in field_nodes(recv_decl, "name"):
                    bindings.append((name_node, recv_type))
        sig = self.signature(
            decl.child_by_field_name("parameters"),
            decl.child_by_field_name("result"),
            fscope,
        )
        sig.bindings[:0] = bindings
        return sig, Scope("body", parent=fscope, kind="func")

    def _receiver_type_params(self, type_node: Optional[Node], parent: Scope) -> Scope:
        # func (l *List[T]) ...: T is declared by the receiver
        node = type_node
        while node is not None and node.type in ("pointer_type", "parenthesized_type"):
            node = node.named_children[0] if node.named_children else None
        if node is None or node.type != "generic_type":
            return parent
        args = node.child_by_field_name("type_arguments")
        if args is None:
            return parent
        scope = Scope("receiver type parameters", parent=parent, kind="block")
        for arg in args.named_children:
            ident = arg
            while ident.type in ("type_elem", "type_constraint") and ident.named_children:
                ident = ident.named_children[0]
            if ident.type in ("type_identifier", "identifier"):
                name = node_text(ident)
                scope.define(Obj(ObjKind.TYPE, name, type=GoType.type_param(name, ANY)))
        return scope

    def signature(
        self, params: Optional[Node], result: Optional[Node], scope: Scope
    ) -> _Signature:
        param_types, variadic, bindings = self._param_list(params, scope)
        if result is None:
            result_types: List[GoType] = []
        elif result.type == "parameter_list":
            result_types, _, result_bindings = self._param_list(result, scope)
            bindings.extend(result_bindings)
        else:
            rt = self.resolve_type(result, scope)
            result_types = [rt if rt is not None else GoType.interface()]
        sig = GoType.func(tuple(param_types), tuple(result_types), variadic)
        return _Signature(sig, bindings)

    def _param_list(self, node: Optional[Node], scope: Scope):
        types: List[GoType] = []
        bindings: List[Tuple[Node, Optional[GoType]]] = []
        variadic = False
        if node is None:
            return types, variadic, bindings
        for decl in node.named_children:
            if decl.type not in ("parameter_declaration", "variadic_parameter_declaration"):
                continue
            t = self.resolve_type(decl.child_by_field_name("type"), scope)
            if decl.type == "variadic_parameter_declaration":
                t = GoType.slice(t)
                variadic = True
            if t is None:
                t = GoType.interface()
            names = field_nodes(decl, "name")
            for name_node in names:
                bindings.append((name_node, t))
            types.extend([t] * max(1, len(names)))
        return types, variadic, bindings

    # ═════════════════════════════════════════════════════════════════
    #  PART 3 — TYPE EXPRESSIONS
    # ═════════════════════════════════════════════════════════════════

    def resolve_type(self, node: Optional[Node], scope: Scope) -> Optional[GoType]:
        """Resolve a type expression node to a ``GoType``."""
        if node is None:
            return None
        t = node.type
        if t in ("type_identifier", "identifier"):
            obj = scope.lookup(node_text(node))
            if obj is not None and obj.kind is ObjKind.TYPE:
                return obj.resolve()
            return None
        if t in ("qualified_type", "selector_expression"):
            return self._qualified_type(node, scope)
        if t in ("pointer_type", "parenthesized_type", "type_elem", "type_constraint"):
            inner = node.named_children
            if t == "pointer_type":
                return GoType.pointer(self.resolve_type(inner[0], scope)) if inner else None
            if len(inner) == 1:
                return self.resolve_type(inner[0], scope)
            # a union of types: only its (empty) method set is of interest
            return GoType.interface()
        if t == "unary_expression" and binary_operator(node) == "*":
            return GoType.pointer(self.resolve_type(node.child_by_field_name("operand"), scope))
        if t == "slice_type":
            return GoType.slice(self.resolve_type(node.child_by_field_name("element"), scope))
        if t in ("array_type", "implicit_length_array_type"):
            return GoType.array(self.resolve_type(node.child_by_field_name("element"), scope))
        if t == "map_type":
            return GoType.map_of(
                self.resolve_type(node.child_by_field_name("key"), scope),
                self.resolve_type(node.child_by_field_name("value"), scope),
            )
        if t == "channel_type":
            return GoType.chan(self.resolve_type(node.child_by_field_name("value"), scope))
        if t == "function_type":
            return self.signature(
                node.child_by_field_name("parameters"),
                node.child_by_field_name("result"),
                scope,
            ).type
        if t == "struct_type":
            return self._struct_type(node, scope)
        if t == "interface_type":
            return self._interface_type(node, scope)
        if t == "generic_type":
            return self.resolve_type(node.child_by_field_name("type"), scope)
        if t == "negated_type":
            return None
        return None

    def _qualified_type(self, node: Node, scope: Scope) -> Optional[GoType]:
        if node.type == "qualified_type":
            pkg_node = node.child_by_field_name("package")
            name_node = node.child_by_field_name("name")
        else:
            pkg_node = node.child_by_field_name("operand")
            name_node = node.child_by_field_name("field")
        obj = self._package_member(pkg_node, name_node, scope)
        if obj is not None and obj.kind is ObjKind.TYPE:
            return obj.resolve()
        return None

    def _package_member(
        self, pkg_node: Optional[Node], name_node: Optional[Node], scope: Scope
    ) -> Optional[Obj]:
        if pkg_node is None or name_node is None:
            return None
        if pkg_node.type not in ("package_identifier", "identifier"):
            return None
        pkg_obj = scope.lookup(node_text(pkg_node))
        if pkg_obj is None or pkg_obj.kind is not ObjKind.PKGNAME:
            return None
        pkg = pkg_obj.package
        if pkg is None or pkg.scope is None:
            return None
        return pkg.scope.lookup_local(node_text(name_node))

    def _struct_type(self, node: Node, scope: Scope) -> GoType:
        fields: Dict[str, GoType] = {}
        embedded: List[GoType] = []
        body = next((c for c in node.named_children if c.type == "field_declaration_list"), None)
        if body is None:
            return GoType.struct()
        for decl in body.named_children:
            if decl.type != "field_declaration":
                continue
            ftype = self.resolve_type(decl.child_by_field_name("type"), scope)
            names = field_nodes(decl, "name")
            if names:
                for name_node in names:
                    fields[node_text(name_node)] = ftype if ftype is not None else GoType.interface()
                continue
            if ftype is None:
                continue
            if any(c.type == "*" for c in decl.children):
                ftype = GoType.pointer(ftype)
            embedded.append(ftype)
        return GoType.struct(fields, embedded)

    def _interface_type(self, node: Node, scope: Scope) -> GoType:
        methods: Dict[str, GoType] = {}
        embedded: List[GoType] = []
        for elem in node.named_children:
            if elem.type == "method_elem":
                sig = self.signature(
                    elem.child_by_field_name("parameters"),
                    elem.child_by_field_name("result"),
                    scope,
                )
                methods[node_text(elem.child_by_field_name("name"))] = sig.type
            elif elem.type in ("type_elem", "constraint_elem"):
                if len(elem.named_children) != 1:
                    continue
                emb = self.resolve_type(elem.named_children[0], scope)
                if emb is not None and emb.is_interface:
                    embedded.append(emb)
        return GoType.interface(methods, embedded)

    def _type_of_type_expr(self, node: Node, scope: Scope) -> Optional[GoType]:
        """
        If *node* (in expression position) denotes a type, resolve it;
        otherwise return None.
        """
        t = node.type
        if t == "parenthesized_expression" and node.named_children:
            return self._type_of_type_expr(node.named_children[0], scope)
        if t == "identifier":
            obj = scope.lookup(node_text(node))
            if obj is not None and obj.kind is ObjKind.TYPE:
                return obj.resolve()
            return None
        if t == "selector_expression":
            obj = self._package_member(
                node.child_by_field_name("operand"), node.child_by_field_name("field"), scope
            )
            if obj is not None and obj.kind is ObjKind.TYPE:
                return obj.resolve()
            return None
        if t == "unary_expression" and binary_operator(node) == "*":
            inner = self._type_of_type_expr(node.child_by_field_name("operand"), scope)
            return GoType.pointer(inner) if inner is not None else None
        if t in _TYPE_NODE_TYPES:
            return self.resolve_type(node, scope)
        return None

    # ═════════════════════════════════════════════════════════════════
    #  PART 4 — EXPRESSIONS
    # ═════════════════════════════════════════════════════════════════

    def _record(self, node: Node, t: Optional[GoType], scope: Scope) -> None:
        unit = scope.unit
        if t is None or unit is None:
            return
        unit.types[(node.start_byte, node.end_byte)] = t

    def expr(self, node: Optional[Node], scope: Scope) -> Optional[GoType]:
        """Infer the type of a single-valued expression."""
        if node is None:
            return None
        handler = _EXPR_HANDLERS.get(node.type)
        if handler is None:
            return None
        t = handler(self, node, scope)
        if t is not None and t.kind is TypeKind.TUPLE and len(t.params) == 1:
            return t.params[0]
        return t

    def expr_multi(self, node: Node, scope: Scope, want: int) -> List[Optional[GoType]]:
        """
        Types produced by *node* in a context expecting *want* values:
        multi-result calls and the comma-ok forms.
        """
        t = node.type
        if t == "parenthesized_expression" and node.named_children:
            return self.expr_multi(node.named_children[0], scope, want)
        if want == 2 and t == "index_expression":
            operand = core_type(self.expr(node.child_by_field_name("operand"), scope))
            self.expr(node.child_by_field_name("index"), scope)
            if operand is not None and operand.kind is TypeKind.MAP:
                return [operand.elem, BOOL]
            return [None, BOOL]
        if want == 2 and t == "type_assertion_expression":
            return [self.expr(node, scope), BOOL]
        if want == 2 and t == "unary_expression" and binary_operator(node) == "<-":
            return [self.expr(node, scope), BOOL]
        result = _EXPR_HANDLERS.get(t, lambda *_: None)(self, node, scope)
        if result is not None and result.kind is TypeKind.TUPLE:
            return list(result.params)
        return [result]

    def _identifier(self, node: Node, scope: Scope) -> Optional[GoType]:
        obj = scope.lookup(node_text(node))
        if obj is None or obj.kind in (ObjKind.TYPE, ObjKind.PKGNAME, ObjKind.BUILTIN):
            return None
        t = obj.resolve()
        self._record(node, t, scope)
        return t

    def _literal(self, node: Node, scope: Scope) -> Optional[GoType]:
        return _LITERAL_TYPES.get(node.type)

    def _predeclared(self, node: Node, scope: Scope) -> Optional[GoType]:
        # true/false/iota/nil can be shadowed like any identifier
        return self._identifier(node, scope)

    def _parenthesized(self, node: Node, scope: Scope) -> Optional[GoType]:
        if not node.named_children:
            return None
        return self.expr(node.named_children[0], scope)

    def _unary(self, node: Node, scope: Scope) -> Optional[GoType]:
        op = binary_operator(node)
        operand = self.expr(node.child_by_field_name("operand"), scope)
        if op == "&":
            return GoType.pointer(operand) if operand is not None else None
        if op == "*":
            base = core_type(operand)
            return base.elem if base is not None and base.kind is TypeKind.POINTER else None
        if op == "<-":
            base = core_type(operand)
            return base.elem if base is not None and base.kind is TypeKind.CHAN else None
        if op == "!":
            return BOOL
        return operand

    def _binary(self, node: Node, scope: Scope) -> Optional[GoType]:
        op = binary_operator(node)
        left = self.expr(node.child_by_field_name("left"), scope)
        right = self.expr(node.child_by_field_name("right"), scope)
        if op in COMPARISON_OPERATORS or op in ("&&", "||"):
            return BOOL
        if op in ("<<", ">>"):
            return left
        # a defined type wins over an untyped constant operand
        if right is not None and right.kind is TypeKind.NAMED and (
            left is None or left.kind is not TypeKind.NAMED
        ):
            return right
        return left if left is not None else right

    def _selector(self, node: Node, scope: Scope) -> Optional[GoType]:
        operand = node.child_by_field_name("operand")
        field_node = node.child_by_field_name("field")
        name = node_text(field_node)
        if operand is not None and operand.type == "identifier":
            obj = scope.lookup(node_text(operand))
            if obj is not None and obj.kind is ObjKind.PKGNAME:
                member = self._package_member(operand, field_node, scope)
                if member is None or member.kind in (ObjKind.TYPE, ObjKind.PKGNAME):
                    return None
                return member.resolve()
            if obj is not None and obj.kind is ObjKind.TYPE:
                # method expression T.M
                return None
        base = self.expr(operand, scope)
        if base is None:
            return None
        found = lookup_field(base, name)
        if found is not None:
            return found
        return lookup_method(base, name)

    def _call(self, node: Node, scope: Scope) -> Optional[GoType]:
        func = node.child_by_field_name("function")
        args = node.child_by_field_name("arguments")
        if func is None:
            return None
        if func.type == "identifier":
            obj = scope.lookup(node_text(func))
            if obj is not None and obj.kind is ObjKind.BUILTIN:
                return self._builtin_call(obj.name, args, scope)
        conversion = self._type_of_type_expr(func, scope)
        if conversion is not None:
            self._arguments(args, scope)
            return conversion
        ftype = core_type(self.expr(func, scope))
        self._arguments(args, scope)
        if ftype is None or ftype.kind is not TypeKind.FUNC:
            return None
        if not ftype.results:
            return None
        if len(ftype.results) == 1:
            return ftype.results[0]
        return GoType.tuple_of(ftype.results)

    def _arguments(self, args: Optional[Node], scope: Scope) -> List[Optional[GoType]]:
        out: List[Optional[GoType]] = []
        if args is None:
            return out
        for arg in args.named_children:
            if arg.type == "comment":
                continue
            if arg.type == "variadic_argument":
                arg = arg.named_children[0] if arg.named_children else arg
            if arg.type in _TYPE_NODE_TYPES:
                out.append(self.resolve_type(arg, scope))
                continue
            out.append(self.expr(arg, scope))
        return out

    def _builtin_call(self, name: str, args: Optional[Node], scope: Scope) -> Optional[GoType]:
        arg_nodes = [a for a in args.named_children if a.type != "comment"] if args else []
        if name in ("new", "make") and arg_nodes:
            first = self._type_of_type_expr(arg_nodes[0], scope)
            if first is None:
                first = self.resolve_type(arg_nodes[0], scope)
            for extra in arg_nodes[1:]:
                self.expr(extra, scope)
            return GoType.pointer(first) if name == "new" else first
        types = self._arguments(args, scope)
        if name in ("len", "cap", "copy"):
            return INT
        if name in ("append", "min", "max"):
            return types[0] if types else None
        if name == "complex":
            return COMPLEX128
        if name in ("real", "imag"):
            return FLOAT64
        if name == "recover":
            return ANY
        return None

    def _index(self, node: Node, scope: Scope) -> Optional[GoType]:
        operand = self.expr(node.child_by_field_name("operand"), scope)
        self.expr(node.child_by_field_name("index"), scope)
        base = core_type(operand)
        if base is None:
            return None
        if base.kind is TypeKind.POINTER:
            base = core_type(base.elem)
            if base is None:
                return None
        if base.kind in (TypeKind.SLICE, TypeKind.ARRAY, TypeKind.MAP):
            return base.elem
        if base is STRING:
            return BYTE
        if base.kind is TypeKind.FUNC:
            # explicit instantiation of a generic function
            return operand
        return None

    def _slice(self, node: Node, scope: Scope) -> Optional[GoType]:
        operand = self.expr(node.child_by_field_name("operand"), scope)
        for fname in ("start", "end", "capacity"):
            self.expr(node.child_by_field_name(fname), scope)
        base = core_type(operand)
        if base is None:
            return None
        if base.kind is TypeKind.POINTER:
            inner = core_type(base.elem)
            if inner is not None and inner.kind is TypeKind.ARRAY:
                return GoType.slice(inner.elem)
            return None
        if base.kind is TypeKind.ARRAY:
            return GoType.slice(base.elem)
        return operand

    def _assertion(self, node: Node, scope: Scope) -> Optional[GoType]:
        self.expr(node.child_by_field_name("operand"), scope)
        return self.resolve_type(node.child_by_field_name("type"), scope)

    def _conversion(self, node: Node, scope: Scope) -> Optional[GoType]:
        self.expr(node.child_by_field_name("operand"), scope)
        return self.resolve_type(node.child_by_field_name("type"), scope)

    def _composite(self, node: Node, scope: Scope) -> Optional[GoType]:
        t = self.resolve_type(node.child_by_field_name("type"), scope)
        self._literal_value(node.child_by_field_name("body"), t, scope)
        return t

    def _literal_value(self, body: Optional[Node], t: Optional[GoType], scope: Scope) -> None:
        if body is None:
            return
        base = core_type(t)
        is_struct = base is None or base.kind is TypeKind.STRUCT
        for elem in body.named_children:
            if elem.type == "keyed_element":
                parts = [c for c in elem.named_children if c.type != "comment"]
                if len(parts) == 2:
                    key, value = parts
                    key_inner = key.named_children[0] if key.named_children else key
                    # struct field names are not expressions
                    if not (is_struct and key_inner.type == "identifier"):
                        self._element(key_inner, None, scope)
                    self._element(value, self._element_type(base), scope)
            elif elem.type == "literal_element":
                self._element(elem, self._element_type(base), scope)

    def _element(self, node: Node, t: Optional[GoType], scope: Scope) -> None:
        if node.type == "literal_element" and node.named_children:
            node = node.named_children[0]
        if node.type == "literal_value":
            self._literal_value(node, t, scope)
        else:
            self.expr(node, scope)

    @staticmethod
    def _element_type(base: Optional[GoType]) -> Optional[GoType]:
        if base is None or base.kind is TypeKind.STRUCT:
            return None
        return base.elem

    def _func_literal(self, node: Node, scope: Scope) -> Optional[GoType]:
        fscope = Scope("func literal", parent=scope, kind="func")
        sig = self.signature(
            node.child_by_field_name("parameters"),
            node.child_by_field_name("result"),
            fscope,
        )
        for name_node, t in sig.bindings:
            self._define_var(fscope, name_node, t)
        self._block_statements(node.child_by_field_name("body"), fscope)
        return sig.type

    # ═════════════════════════════════════════════════════════════════
    #  PART 5 — STATEMENTS
    # ═════════════════════════════════════════════════════════════════

    def _block_statements(self, block: Optional[Node], scope: Scope) -> None:
        for stmt in statements(block):
            self.statement(stmt, scope)

    def statement(self, node: Node, scope: Scope) -> None:
        handler = _STMT_HANDLERS.get(node.type)
        if handler is not None:
            handler(self, node, scope)
            return
        # expression statements and anything unrecognised: evaluate children
        for child in node.named_children:
            if child.type != "comment":
                self.expr(child, scope)

    def _block(self, node: Node, scope: Scope) -> None:
        self._block_statements(node, Scope("block", parent=scope))

    def _short_var_decl(self, node: Node, scope: Scope) -> None:
        left = _expr_list(node.child_by_field_name("left"))
        right = _expr_list(node.child_by_field_name("right"))
        self._bind(left, right, scope)

    def _bind(self, names: Sequence[Node], values: Sequence[Node], scope: Scope) -> None:
        """``a, b := ...``: redeclared names in the same scope are reused."""
        types = self._values_for(names, values, scope)
        for name_node, t in zip(names, types):
            name = node_text(name_node)
            if name == "_":
                continue
            existing = scope.lookup_local(name) if name in scope else None
            if existing is not None and existing.kind is ObjKind.VAR:
                self._record(name_node, existing.resolve(), scope)
                continue
            self._define_var(scope, name_node, t)

    def _assignment(self, node: Node, scope: Scope) -> None:
        for value in _expr_list(node.child_by_field_name("right")):
            self.expr(value, scope)
        for target in _expr_list(node.child_by_field_name("left")):
            self.expr(target, scope)

    def _var_decl(self, node: Node, scope: Scope) -> None:
        for spec in _specs(node, "var_spec"):
            names = field_nodes(spec, "name")
            types = self._spec_types(spec, scope)
            for name_node, t in zip(names, types):
                scope.define(Obj(ObjKind.VAR, node_text(name_node), type=t))

    def _const_decl(self, node: Node, scope: Scope) -> None:
        self._declare_const_decl(node, scope, scope)

    def _type_decl(self, node: Node, scope: Scope) -> None:
        self._declare_types(node, scope, scope)

    def _return(self, node: Node, scope: Scope) -> None:
        for child in node.named_children:
            for value in _expr_list(child):
                self.expr(value, scope)

    def _if(self, node: Node, scope: Scope) -> None:
        inner = Scope("if", parent=scope)
        init = node.child_by_field_name("initializer")
        if init is not None:
            self.statement(init, inner)
        self.expr(node.child_by_field_name("condition"), inner)
        self._block(node.child_by_field_name("consequence"), inner)
        alternative = node.child_by_field_name("alternative")
        if alternative is not None:
            self.statement(alternative, inner)

    def _for(self, node: Node, scope: Scope) -> None:
        inner = Scope("for", parent=scope)
        body = node.child_by_field_name("body")
        for child in node.named_children:
            if child.type == "comment" or child == body:
                continue
            if child.type == "for_clause":
                init = child.child_by_field_name("initializer")
                if init is not None:
                    self.statement(init, inner)
                self.expr(child.child_by_field_name("condition"), inner)
                update = child.child_by_field_name("update")
                if update is not None:
                    self.statement(update, inner)
            elif child.type == "range_clause":
                self._range(child, inner)
            else:
                self.expr(child, inner)
        if body is not None:
            self._block(body, inner)

    def _range(self, clause: Node, scope: Scope) -> None:
        ranged = core_type(self.expr(clause.child_by_field_name("right"), scope))
        key_t: Optional[GoType] = None
        value_t: Optional[GoType] = None
        if ranged is not None and ranged.kind is TypeKind.POINTER:
            ranged = core_type(ranged.elem)
        if ranged is None:
            pass
        elif ranged.kind in (TypeKind.SLICE, TypeKind.ARRAY):
            key_t, value_t = INT, ranged.elem
        elif ranged is STRING:
            key_t, value_t = INT, RUNE
        elif ranged.kind is TypeKind.MAP:
            key_t, value_t = ranged.key, ranged.elem
        elif ranged.kind is TypeKind.CHAN:
            key_t = ranged.elem
        elif ranged.kind is TypeKind.FUNC and ranged.params:
            yield_t = core_type(ranged.params[0])
            if yield_t is not None and yield_t.kind is TypeKind.FUNC:
                key_t = _at(list(yield_t.params), 0)
                value_t = _at(list(yield_t.params), 1)
        elif ranged.kind is TypeKind.BASIC:
            key_t = ranged
        left = _expr_list(clause.child_by_field_name("left"))
        if _has_token(clause, ":="):
            for name_node, t in zip(left, (key_t, value_t)):
                if node_text(name_node) != "_":
                    self._define_var(scope, name_node, t)
        else:
            for target in left:
                self.expr(target, scope)

    def _expression_switch(self, node: Node, scope: Scope) -> None:
        inner = Scope("switch", parent=scope)
        init = node.child_by_field_name("initializer")
        if init is not None:
            self.statement(init, inner)
        self.expr(node.child_by_field_name("value"), inner)
        for case in node.named_children:
            if case.type == "expression_case":
                for value in _expr_list(case.child_by_field_name("value")):
                    self.expr(value, inner)
            if case.type in ("expression_case", "default_case"):
                self._block_statements(case, Scope("case", parent=inner))

    def _type_switch(self, node: Node, scope: Scope) -> None:
        inner = Scope("type switch", parent=scope)
        init = node.child_by_field_name("initializer")
        if init is not None:
            self.statement(init, inner)
        subject = self.expr(node.child_by_field_name("value"), inner)
        alias = _expr_list(node.child_by_field_name("alias"))
        for case in node.named_children:
            if case.type not in ("type_case", "default_case"):
                continue
            case_scope = Scope("case", parent=inner)
            bound = subject
            if case.type == "type_case":
                case_types = [c for c in field_nodes(case, "type")]
                if len(case_types) == 1 and case_types[0].type != "nil":
                    bound = self.resolve_type(case_types[0], inner)
            for name_node in alias:
                self._define_var(case_scope, name_node, bound)
            self._block_statements(case, case_scope)

    def _select(self, node: Node, scope: Scope) -> None:
        for case in node.named_children:
            if case.type not in ("communication_case", "default_case"):
                continue
            case_scope = Scope("case", parent=scope)
            comm = case.child_by_field_name("communication")
            if comm is not None and comm.type == "receive_statement":
                left = _expr_list(comm.child_by_field_name("left"))
                right = comm.child_by_field_name("right")
                if left and _has_token(comm, ":="):
                    self._bind(left, [right] if right is not None else [], case_scope)
                else:
                    self.expr(right, case_scope)
                    for target in left:
                        self.expr(target, case_scope)
            elif comm is not None:
                self.statement(comm, case_scope)
            self._block_statements(case, case_scope)

    def _labeled(self, node: Node, scope: Scope) -> None:
        for child in node.named_children:
            if child.type not in ("label_name", "comment"):
                self.statement(child, scope)

    def _send(self, node: Node, scope: Scope) -> None:
        self.expr(node.child_by_field_name("channel"), scope)
        self.expr(node.child_by_field_name("value"), scope)

    def _nothing(self, node: Node, scope: Scope) -> None:
        return None


# ═════════════════════════════════════════════════════════════════════════
#  PART 6 — DISPATCH TABLES AND HELPERS
# ═════════════════════════════════════════════════════════════════════════

_LITERAL_TYPES: Dict[str, GoType] = {
    "int_literal": INT,
    "float_literal": FLOAT64,
    "imaginary_literal": COMPLEX128,
    "rune_literal": RUNE,
    "interpreted_string_literal": STRING,
    "raw_string_literal": STRING,
}

_TYPE_NODE_TYPES = frozenset({
    "array_type", "channel_type", "function_type", "generic_type",
    "implicit_length_array_type", "interface_type", "map_type",
    "pointer_type", "qualified_type", "slice_type", "struct_type",
    "type_identifier",
})

_EXPR_HANDLERS: Dict[str, Callable[[PackageChecker, Node, Scope], Optional[GoType]]] = {
    "identifier": PackageChecker._identifier,
    "true": PackageChecker._predeclared,
    "false": PackageChecker._predeclared,
    "iota": PackageChecker._predeclared,
    "nil": PackageChecker._predeclared,
    "parenthesized_expression": PackageChecker._parenthesized,
    "unary_expression": PackageChecker._unary,
    "binary_expression": PackageChecker._binary,
    "selector_expression": PackageChecker._selector,
    "call_expression": PackageChecker._call,
    "index_expression": PackageChecker._index,
    "slice_expression": PackageChecker._slice,
    "type_assertion_expression": PackageChecker._assertion,
    "type_conversion_expression": PackageChecker._conversion,
    "composite_literal": PackageChecker._composite,
    "func_literal": PackageChecker._func_literal,
}
_EXPR_HANDLERS.update({name: PackageChecker._literal for name in _LITERAL_TYPES})

_STMT_HANDLERS: Dict[str, Callable[[PackageChecker, Node, Scope], None]] = {
    "block": PackageChecker._block,
    "short_var_declaration": PackageChecker._short_var_decl,
    "assignment_statement": PackageChecker._assignment,
    "var_declaration": PackageChecker._var_decl,
    "const_declaration": PackageChecker._const_decl,
    "type_declaration": PackageChecker._type_decl,
    "return_statement": PackageChecker._return,
    "if_statement": PackageChecker._if,
    "for_statement": PackageChecker._for,
    "expression_switch_statement": PackageChecker._expression_switch,
    "type_switch_statement": PackageChecker._type_switch,
    "select_statement": PackageChecker._select,
    "labeled_statement": PackageChecker._labeled,
    "send_statement": PackageChecker._send,
    "break_statement": PackageChecker._nothing,
    "continue_statement": PackageChecker._nothing,
    "goto_statement": PackageChecker._nothing,
    "fallthrough_statement": PackageChecker._nothing,
    "empty_statement": PackageChecker._nothing,
}


def _specs(decl: Node, spec_type: str) -> Iterable[Node]:
    for child in decl.named_children:
        if child.type == spec_type:
            yield child
        elif child.type.endswith("_spec_list"):
            for spec in child.named_children:
                if spec.type == spec_type:
                    yield spec


def _expr_list(node: Optional[Node]) -> List[Node]:
    if node is None:
        return []
    if node.type == "expression_list":
        return [c for c in node.named_children if c.type != "comment"]
    return [node]


def _first_param(params: Optional[Node]) -> Optional[Node]:
    if params is None:
        return None
    for child in params.named_children:
        if child.type == "parameter_declaration":
            return child
    return None


def _receiver_base(type_node: Optional[Node]) -> Tuple[Optional[Node], bool]:
    """Base type name of a receiver and whether it is a pointer receiver."""
    pointer = False
    node = type_node
    while node is not None:
        if node.type == "pointer_type":
            pointer = True
        elif node.type == "generic_type":
            node = node.child_by_field_name("type")
            continue
        elif node.type == "type_identifier":
            return node, pointer
        elif node.type != "parenthesized_type":
            return None, pointer
        node = node.named_children[0] if node.named_children else None
    return None, pointer


def _has_token(node: Node, token: str) -> bool:
    return any(not c.is_named and c.type == token for c in node.children)


def _at(items: List[Optional[GoType]], idx: int) -> Optional[GoType]:
    return items[idx] if 0 <= idx < len(items) else None


__all__ = [
    "ObjKind",
    "Obj",
    "Scope",
    "UNIVERSE",
    "PackageChecker",
    "guess_package_name",
]
