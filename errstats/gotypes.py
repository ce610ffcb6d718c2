"""
errstats/gotypes.py
═══════════════════

Type descriptions for Go programs and the structural error-capability
test the classifier relies on.

Theory
──────
Go types are modelled as a small term algebra:

    τ ::= basic(name)                 (bool, int, string, ...)
        | named(pkg, name, τ_u)       (defined type, underlying τ_u)
        | ptr(τ) | slice(τ) | array(τ) | chan(τ) | map(τ_k, τ_v)
        | func([τ_p...], [τ_r...], variadic)
        | struct({f_i: τ_i}, embedded)
        | interface({m_i: func}, embedded)
        | tuple(τ_1, ..., τ_n)        (multi-value call results)
        | typeparam(name, constraint)
        | nil                         (the untyped nil value)

Named types are created before their underlying type is known and filled
in lazily, so recursive and forward declarations resolve without ordering
constraints.

A type satisfies the *error capability* iff its method set contains
``Error() string``: no parameters, not variadic, and exactly one result of
the predeclared ``string`` type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import (
    Callable,
    Dict,
    List,
    Optional,
    Tuple,
)


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — TYPE REPRESENTATION
# ═════════════════════════════════════════════════════════════════════════

class TypeKind(Enum):
    """Discriminant for the type term algebra."""
    BASIC = auto()
    NAMED = auto()
    POINTER = auto()
    SLICE = auto()
    ARRAY = auto()
    MAP = auto()
    CHAN = auto()
    FUNC = auto()
    STRUCT = auto()
    INTERFACE = auto()
    TUPLE = auto()
    TYPEPARAM = auto()
    NIL = auto()


# Max embedding depth followed when promoting methods.
MAX_EMBED_DEPTH = 8


@dataclass(eq=False)
class GoType:
    """
    A node in the type term algebra.

    For compound types the attributes encode structure:
      - POINTER/SLICE/ARRAY/CHAN: ``elem``
      - MAP:       ``key`` and ``elem``
      - FUNC:      ``params``, ``results``, ``variadic``
      - STRUCT:    ``fields`` (name → type) and ``embedded``
      - INTERFACE: ``methods`` (name → FUNC type) and ``embedded``
      - NAMED:     ``name``, ``package``, ``methods`` (declared methods),
                   ``pointer_methods`` (names with pointer receivers) and
                   the lazily resolved underlying type
      - TUPLE:     ``params`` holds the component types
      - TYPEPARAM: ``name`` and ``constraint``

    Identity is object identity.
    """

    kind: TypeKind
    name: str = ""
    package: str = ""
    elem: Optional[GoType] = None
    key: Optional[GoType] = None
    params: Tuple[GoType, ...] = ()
    results: Tuple[GoType, ...] = ()
    variadic: bool = False
    fields: Dict[str, GoType] = field(default_factory=dict)
    embedded: List[GoType] = field(default_factory=list)
    methods: Dict[str, GoType] = field(default_factory=dict)
    pointer_methods: set = field(default_factory=set)
    constraint: Optional[GoType] = None

    # NAMED only: underlying type, or a thunk that produces it
    _underlying: Optional[GoType] = field(default=None, repr=False)
    _resolver: Optional[Callable[[], Optional[GoType]]] = field(
        default=None, repr=False
    )
    _resolving: bool = field(default=False, repr=False)

    # ── Factory methods ──────────────────────────────────────────────

    @classmethod
    def basic(cls, name: str) -> GoType:
        return cls(kind=TypeKind.BASIC, name=name)

    @classmethod
    def named(
        cls,
        name: str,
        package: str = "",
        underlying: Optional[GoType] = None,
        resolver: Optional[Callable[[], Optional[GoType]]] = None,
    ) -> GoType:
        return cls(
            kind=TypeKind.NAMED,
            name=name,
            package=package,
            _underlying=underlying,
            _resolver=resolver,
        )

    @classmethod
    def pointer(cls, elem: Optional[GoType]) -> GoType:
        return cls(kind=TypeKind.POINTER, elem=elem)

    @classmethod
    def slice(cls, elem: Optional[GoType]) -> GoType:
        return cls(kind=TypeKind.SLICE, elem=elem)

    @classmethod
    def array(cls, elem: Optional[GoType]) -> GoType:
        return cls(kind=TypeKind.ARRAY, elem=elem)

    @classmethod
    def map_of(cls, key: Optional[GoType], elem: Optional[GoType]) -> GoType:
        return cls(kind=TypeKind.MAP, key=key, elem=elem)

    @classmethod
    def chan(cls, elem: Optional[GoType]) -> GoType:
        return cls(kind=TypeKind.CHAN, elem=elem)

    @classmethod
    def func(
        cls,
        params: Tuple[GoType, ...] = (),
        results: Tuple[GoType, ...] = (),
        variadic: bool = False,
    ) -> GoType:
        return cls(
            kind=TypeKind.FUNC,
            params=tuple(params),
            results=tuple(results),
            variadic=variadic,
        )

    @classmethod
    def struct(
        cls,
        fields: Optional[Dict[str, GoType]] = None,
        embedded: Optional[List[GoType]] = None,
    ) -> GoType:
        return cls(
            kind=TypeKind.STRUCT,
            fields=dict(fields or {}),
            embedded=list(embedded or []),
        )

    @classmethod
    def interface(
        cls,
        methods: Optional[Dict[str, GoType]] = None,
        embedded: Optional[List[GoType]] = None,
    ) -> GoType:
        return cls(
            kind=TypeKind.INTERFACE,
            methods=dict(methods or {}),
            embedded=list(embedded or []),
        )

    @classmethod
    def tuple_of(cls, items: Tuple[GoType, ...]) -> GoType:
        return cls(kind=TypeKind.TUPLE, params=tuple(items))

    @classmethod
    def type_param(cls, name: str, constraint: Optional[GoType]) -> GoType:
        return cls(kind=TypeKind.TYPEPARAM, name=name, constraint=constraint)

    # ── Queries ──────────────────────────────────────────────────────

    def underlying(self) -> Optional[GoType]:
        """
        Return the underlying type.

        Only NAMED types differ from themselves here.  A pending resolver
        runs once; a cycle through the resolver yields ``None``.
        """
        if self.kind is not TypeKind.NAMED:
            return self
        if self._underlying is None and self._resolver is not None:
            if self._resolving:
                return None
            self._resolving = True
            try:
                resolved = self._resolver()
            finally:
                self._resolving = False
            self._resolver = None
            # type T U: the underlying of T is the underlying of U
            if resolved is not None and resolved.kind is TypeKind.NAMED:
                resolved = resolved.underlying()
            self._underlying = resolved
        return self._underlying

    def set_underlying(self, underlying: Optional[GoType]) -> None:
        self._underlying = underlying
        self._resolver = None

    def add_method(self, name: str, sig: GoType, pointer_receiver: bool) -> None:
        """Attach a declared method to a NAMED type."""
        self.methods[name] = sig
        if pointer_receiver:
            self.pointer_methods.add(name)
        else:
            self.pointer_methods.discard(name)

    @property
    def is_interface(self) -> bool:
        u = self.underlying()
        return u is not None and u.kind is TypeKind.INTERFACE

    @property
    def is_pointer(self) -> bool:
        return self.kind is TypeKind.POINTER

    def __str__(self) -> str:
        return type_string(self)


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — UNIVERSE
# ═════════════════════════════════════════════════════════════════════════

BASIC_TYPE_NAMES = (
    "bool", "string",
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
    "float32", "float64", "complex64", "complex128",
    "unsafe.Pointer",
)

BASIC_TYPES: Dict[str, GoType] = {n: GoType.basic(n) for n in BASIC_TYPE_NAMES}
# byte and rune are aliases, not distinct types
BASIC_TYPES["byte"] = BASIC_TYPES["uint8"]
BASIC_TYPES["rune"] = BASIC_TYPES["int32"]

STRING = BASIC_TYPES["string"]
BOOL = BASIC_TYPES["bool"]
INT = BASIC_TYPES["int"]
FLOAT64 = BASIC_TYPES["float64"]
COMPLEX128 = BASIC_TYPES["complex128"]
RUNE = BASIC_TYPES["rune"]
BYTE = BASIC_TYPES["byte"]

UNTYPED_NIL = GoType(kind=TypeKind.NIL, name="nil")

ERROR_INTERFACE = GoType.interface(methods={"Error": GoType.func(results=(STRING,))})
ERROR = GoType.named("error", underlying=ERROR_INTERFACE)

# any = interface{}
ANY = GoType.interface()
COMPARABLE = GoType.named("comparable", underlying=GoType.interface())

UNIVERSE_TYPES: Dict[str, GoType] = dict(BASIC_TYPES)
UNIVERSE_TYPES.update({
    "error": ERROR,
    "any": ANY,
    "comparable": COMPARABLE,
})


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — METHOD SETS AND THE ERROR CAPABILITY
# ═════════════════════════════════════════════════════════════════════════

def _interface_methods(iface: GoType, depth: int = 0) -> Dict[str, GoType]:
    """All methods of an interface, embedded interfaces included."""
    out: Dict[str, GoType] = {}
    if depth > MAX_EMBED_DEPTH:
        return out
    for emb in iface.embedded:
        u = emb.underlying()
        if u is not None and u.kind is TypeKind.INTERFACE:
            out.update(_interface_methods(u, depth + 1))
    out.update(iface.methods)
    return out


def _promoted_methods(
    struct: GoType, addressable: bool, depth: int
) -> Dict[str, GoType]:
    """Methods promoted through the embedded fields of *struct*."""
    out: Dict[str, GoType] = {}
    if depth > MAX_EMBED_DEPTH:
        return out
    for emb in struct.embedded:
        if emb.kind is TypeKind.POINTER or emb.is_interface:
            promoted = method_set(emb, depth + 1)
        elif addressable:
            promoted = method_set(GoType.pointer(emb), depth + 1)
        else:
            promoted = method_set(emb, depth + 1)
        for name, sig in promoted.items():
            # shallower depth wins: direct fields/methods are set later
            out.setdefault(name, sig)
    return out


def method_set(t: Optional[GoType], depth: int = 0) -> Dict[str, GoType]:
    """
    Compute the method set of *t* following Go's rules.

    - ``T`` (named, non-interface): value-receiver methods plus methods
      promoted from embedded fields of its underlying struct
    - ``*T``: value and pointer receiver methods, plus promotions
    - interface types: their methods, embedded interfaces included
    - type parameters: the methods of their constraint
    """
    if t is None or depth > MAX_EMBED_DEPTH:
        return {}

    if t.kind is TypeKind.TYPEPARAM:
        return method_set(t.constraint, depth + 1)

    if t.kind is TypeKind.INTERFACE:
        return _interface_methods(t)

    if t.kind is TypeKind.POINTER:
        base = t.elem
        if base is None:
            return {}
        if base.kind is TypeKind.NAMED:
            u = base.underlying()
            if u is not None and u.kind is TypeKind.INTERFACE:
                # pointer to interface has no methods
                return {}
            out: Dict[str, GoType] = {}
            if u is not None and u.kind is TypeKind.STRUCT:
                out.update(_promoted_methods(u, True, depth))
            out.update(base.methods)
            return out
        if base.kind is TypeKind.STRUCT:
            return _promoted_methods(base, True, depth)
        return {}

    if t.kind is TypeKind.NAMED:
        u = t.underlying()
        if u is not None and u.kind is TypeKind.INTERFACE:
            return _interface_methods(u)
        out = {}
        if u is not None and u.kind is TypeKind.STRUCT:
            out.update(_promoted_methods(u, False, depth))
        out.update({
            name: sig for name, sig in t.methods.items()
            if name not in t.pointer_methods
        })
        return out

    if t.kind is TypeKind.STRUCT:
        return _promoted_methods(t, False, depth)

    return {}


def _is_error_signature(sig: Optional[GoType]) -> bool:
    if sig is None or sig.kind is not TypeKind.FUNC:
        return False
    if sig.params or sig.variadic or len(sig.results) != 1:
        return False
    return sig.results[0] is STRING


def implements_error(t: Optional[GoType]) -> bool:
    """
    Return True iff *t* structurally satisfies the ``error`` interface.

    Decided purely from the method set; the type's name plays no part.
    The untyped nil and unresolved types never satisfy it.
    """
    if t is None or t.kind in (TypeKind.NIL, TypeKind.TUPLE):
        return False
    return _is_error_signature(method_set(t).get("Error"))


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — HELPERS
# ═════════════════════════════════════════════════════════════════════════

def deref(t: Optional[GoType]) -> Optional[GoType]:
    """Strip one level of pointer indirection."""
    if t is not None and t.kind is TypeKind.POINTER:
        return t.elem
    return t


def core_type(t: Optional[GoType]) -> Optional[GoType]:
    """Underlying type, looking through type parameters to their constraint."""
    if t is None:
        return None
    if t.kind is TypeKind.TYPEPARAM:
        return core_type(t.constraint)
    return t.underlying()


def lookup_field(t: Optional[GoType], name: str, depth: int = 0) -> Optional[GoType]:
    """
    Find field *name* on *t* (auto-dereferencing pointers), searching
    embedded fields breadth-first the way Go promotes them.
    """
    if t is None or depth > MAX_EMBED_DEPTH:
        return None
    base = core_type(deref(t))
    if base is None or base.kind is not TypeKind.STRUCT:
        return None
    if name in base.fields:
        return base.fields[name]
    for emb in base.embedded:
        inner = deref(emb)
        if inner is not None and inner.kind is TypeKind.NAMED and inner.name == name:
            return emb
    for emb in base.embedded:
        found = lookup_field(emb, name, depth + 1)
        if found is not None:
            return found
    return None


def lookup_method(t: Optional[GoType], name: str) -> Optional[GoType]:
    """
    Find method *name* callable on a value of type *t*.

    Go lets addressable values call pointer methods, so the method set
    of ``*T`` is consulted for named non-interface types.
    """
    if t is None:
        return None
    found = method_set(t).get(name)
    if found is not None:
        return found
    if t.kind is TypeKind.NAMED and not t.is_interface:
        return method_set(GoType.pointer(t)).get(name)
    return None


def type_string(t: Optional[GoType]) -> str:
    """Render *t* the way ``go/types`` prints it (approximately)."""
    if t is None:
        return "<unknown>"
    k = t.kind
    if k is TypeKind.BASIC or k is TypeKind.TYPEPARAM:
        return t.name
    if k is TypeKind.NAMED:
        if t.package:
            return f"{t.package}.{t.name}"
        return t.name
    if k is TypeKind.NIL:
        return "untyped nil"
    if k is TypeKind.POINTER:
        return "*" + type_string(t.elem)
    if k is TypeKind.SLICE:
        return "[]" + type_string(t.elem)
    if k is TypeKind.ARRAY:
        return "[...]" + type_string(t.elem)
    if k is TypeKind.CHAN:
        return "chan " + type_string(t.elem)
    if k is TypeKind.MAP:
        return f"map[{type_string(t.key)}]{type_string(t.elem)}"
    if k is TypeKind.FUNC:
        params = ", ".join(type_string(p) for p in t.params)
        if t.variadic and t.params:
            last = t.params[-1]
            head = ", ".join(type_string(p) for p in t.params[:-1])
            tail = "..." + type_string(last.elem if last.kind is TypeKind.SLICE else last)
            params = f"{head}, {tail}" if head else tail
        if not t.results:
            return f"func({params})"
        if len(t.results) == 1:
            return f"func({params}) {type_string(t.results[0])}"
        res = ", ".join(type_string(r) for r in t.results)
        return f"func({params}) ({res})"
    if k is TypeKind.STRUCT:
        parts = [f"{n} {type_string(ft)}" for n, ft in t.fields.items()]
        parts.extend(type_string(e) for e in t.embedded)
        return "struct{" + "; ".join(parts) + "}"
    if k is TypeKind.INTERFACE:
        parts = [type_string(e) for e in t.embedded]
        parts.extend(
            name + type_string(sig)[len("func"):] for name, sig in t.methods.items()
        )
        return "interface{" + "; ".join(parts) + "}"
    if k is TypeKind.TUPLE:
        return "(" + ", ".join(type_string(p) for p in t.params) + ")"
    return "<unknown>"


__all__ = [
    "TypeKind",
    "GoType",
    "BASIC_TYPES",
    "UNIVERSE_TYPES",
    "STRING",
    "BOOL",
    "INT",
    "FLOAT64",
    "COMPLEX128",
    "RUNE",
    "BYTE",
    "ERROR",
    "ANY",
    "UNTYPED_NIL",
    "method_set",
    "implements_error",
    "deref",
    "core_type",
    "lookup_field",
    "lookup_method",
    "type_string",
]
