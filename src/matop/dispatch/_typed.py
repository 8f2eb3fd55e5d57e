"""
Typed Functions

A TypedFunction holds an immutable table of Signature -> implementation and
dispatches calls on the kinds of all positional arguments.

Resolution:
    1. kinds = kind_of(arg) for each argument
    2. cache hit -> call
    3. otherwise keep the matching signatures with the lowest rank;
       one implementation -> cache and call, several -> AmbiguousSignature,
       none -> NoMatchingSignature

Self reference:
    Implementations that need to call the function they belong to (n-ary
    reduction, Array -> Matrix delegation) are registered through
    refer_to_self() or refer_to(). The builders run once, when the typed
    function is constructed, and receive the typed function itself or the
    already resolved implementations of the named signatures.

Example:
    >>> add = typed('add', {
    ...     'number, number': lambda x, y: x + y,
    ...     'any, any, ...any': refer_to_self(
    ...         lambda self: lambda x, y, *rest: self(self(x, y), *rest)),
    ... })
    >>> add(1, 2, 3)
    6
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .._errors import AmbiguousSignature, NoMatchingSignature, SignatureError
from .._typing import Kind, kind_of, type_name
from ._signature import Signature, parse_signature

logger = logging.getLogger("matop.dispatch")

__all__ = [
    'TypedFunction',
    'typed',
    'refer_to',
    'refer_to_self',
    'is_typed_function',
    'specialize',
]


# =============================================================================
# Reference Markers
# =============================================================================

class _ReferToSelf:
    """Table entry resolved by calling builder(typed_function)."""

    __slots__ = ('builder',)

    def __init__(self, builder: Callable[["TypedFunction"], Callable]):
        self.builder = builder


class _ReferTo:
    """Table entry resolved by calling builder(*resolved_implementations)."""

    __slots__ = ('signatures', 'builder')

    def __init__(self, signatures: Tuple[str, ...], builder: Callable[..., Callable]):
        self.signatures = signatures
        self.builder = builder


def refer_to_self(builder: Callable[["TypedFunction"], Callable]) -> _ReferToSelf:
    """
    Register an implementation that needs its own typed function.

    Args:
        builder: Called once with the finished TypedFunction; returns the
            implementation.
    """
    return _ReferToSelf(builder)


def refer_to(*signatures: str, builder: Callable[..., Callable]) -> _ReferTo:
    """
    Register an implementation that needs other implementations of the same
    typed function.

    Args:
        *signatures: Signatures whose implementations the builder receives,
            in order. Exact patterns of the table, or concrete type lists
            resolved by specificity.
        builder: Called once with the resolved implementations.
    """
    if not signatures:
        raise SignatureError("refer_to() needs at least one signature")
    return _ReferTo(tuple(signatures), builder)


# =============================================================================
# TypedFunction
# =============================================================================

def _best_match(table: Mapping[Signature, Any], kinds: Sequence[Kind]) -> List[Tuple[Signature, Any]]:
    """Return all matching entries sharing the lowest rank."""
    best_rank = None
    best: List[Tuple[Signature, Any]] = []
    for sig, impl in table.items():
        if not sig.matches(kinds):
            continue
        rank = sig.rank
        if best_rank is None or rank < best_rank:
            best_rank = rank
            best = [(sig, impl)]
        elif rank == best_rank:
            best.append((sig, impl))
    return best


def _distinct(entries: List[Tuple[Signature, Any]]) -> List[Tuple[Signature, Any]]:
    seen: List[Tuple[Signature, Any]] = []
    for sig, impl in entries:
        if not any(impl is other for _, other in seen):
            seen.append((sig, impl))
    return seen


class TypedFunction:
    """
    A function dispatching on the runtime kinds of its arguments.

    Instances are created by typed(). The signature table is immutable
    after construction; the only state written afterwards is the
    resolution cache.

    Attributes:
        name: Function name used in error messages.
    """

    def __init__(self, name: str, table: Dict[Signature, Any]):
        self.name = name
        self.__name__ = name
        self._table: Dict[Signature, Callable] = {}
        self._cache: Dict[Tuple[Kind, ...], Callable] = {}
        self._resolve_table(table)
        self._signatures = MappingProxyType({str(sig): impl for sig, impl in self._table.items()})
        logger.debug("Built typed function %s with %d signatures", name, len(self._table))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _resolve_table(self, raw: Dict[Signature, Any]):
        """Run the reference builders, detecting cycles."""
        resolving: List[Signature] = []

        def lookup(spec: str) -> Signature:
            sig = parse_signature(spec)
            if sig in raw:
                return sig
            if sig.is_concrete:
                best = _distinct(_best_match(raw, sig.kinds()))
                if len(best) == 1:
                    return best[0][0]
            raise SignatureError(
                f"Reference to unknown signature {spec!r} in function {self.name}"
            )

        def resolve(sig: Signature) -> Callable:
            if sig in self._table:
                return self._table[sig]
            entry = raw[sig]
            if sig in resolving:
                chain = " -> ".join(str(s) for s in resolving + [sig])
                raise SignatureError(f"Circular reference in function {self.name}: {chain}")
            resolving.append(sig)
            try:
                if isinstance(entry, _ReferToSelf):
                    impl = entry.builder(self)
                elif isinstance(entry, _ReferTo):
                    deps = [resolve(lookup(s)) for s in entry.signatures]
                    impl = entry.builder(*deps)
                else:
                    impl = entry
            finally:
                resolving.pop()
            if not callable(impl):
                raise SignatureError(
                    f"Implementation of {self.name}({sig}) is not callable: {impl!r}"
                )
            self._table[sig] = impl
            return impl

        for sig in raw:
            resolve(sig)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def signatures(self) -> Mapping[str, Callable]:
        """Read-only mapping of normalized pattern -> implementation."""
        return self._signatures

    def find(self, signature: Union[str, Sequence[str]]) -> Callable:
        """
        Find the implementation of a signature.

        Exact patterns are looked up directly; concrete type lists are
        resolved like a call with arguments of those types.

        Raises:
            NoMatchingSignature: If nothing matches.
        """
        sig = parse_signature(signature)
        impl = self._table.get(sig)
        if impl is not None:
            return impl
        if sig.is_concrete:
            return self.resolve(*sig.kinds())
        raise NoMatchingSignature(self.name, [str(p) for p in sig.params])

    def resolve(self, *kinds: Kind) -> Callable:
        """Return the implementation selected for arguments of the given kinds."""
        impl = self._cache.get(kinds)
        if impl is None:
            impl = self._lookup(kinds, [k.value for k in kinds])
        return impl

    def _lookup(self, kinds: Tuple[Kind, ...], names: Sequence[str]) -> Callable:
        best = _distinct(_best_match(self._table, kinds))
        if not best:
            raise NoMatchingSignature(self.name, names, list(self._signatures))
        if len(best) > 1:
            raise AmbiguousSignature(self.name, names, [str(sig) for sig, _ in best])
        sig, impl = best[0]
        logger.debug("Resolved %s(%s) -> %s", self.name, ", ".join(names), sig)
        self._cache[kinds] = impl
        return impl

    # -------------------------------------------------------------------------
    # Call
    # -------------------------------------------------------------------------

    def __call__(self, *args: Any) -> Any:
        kinds = tuple(kind_of(a) for a in args)
        impl = self._cache.get(kinds)
        if impl is None:
            impl = self._lookup(kinds, [type_name(a) for a in args])
        return impl(*args)

    def __repr__(self) -> str:
        return f"TypedFunction({self.name!r}, signatures={len(self._table)})"


# =============================================================================
# Construction Helpers
# =============================================================================

def _merge(name: str, tables: Sequence[Union[Mapping[str, Any], TypedFunction]]) -> Dict[Signature, Any]:
    merged: Dict[Signature, Any] = {}
    for table in tables:
        if isinstance(table, TypedFunction):
            items = table._table.items()
        elif isinstance(table, Mapping):
            items = ((parse_signature(spec), impl) for spec, impl in table.items())
        else:
            raise SignatureError(
                f"Signature table of {name} must be a mapping or a TypedFunction, "
                f"got {type(table).__name__}"
            )
        for sig, impl in items:
            existing = merged.get(sig)
            if existing is not None and existing is not impl:
                raise SignatureError(f"Signature {str(sig)!r} is defined twice in function {name}")
            merged[sig] = impl
    return merged


def typed(name: str, *tables: Union[Mapping[str, Any], TypedFunction]) -> TypedFunction:
    """
    Create a typed function.

    Args:
        name: Function name, used in error messages.
        *tables: Mappings of signature pattern -> implementation (or a
            refer_to / refer_to_self marker), or TypedFunctions whose
            signatures are merged in.

    Returns:
        A new TypedFunction.

    Raises:
        SignatureError: On malformed patterns, a signature defined twice
            with different implementations, or unresolvable references.
    """
    return TypedFunction(name, _merge(name, tables))


def is_typed_function(obj: Any) -> bool:
    return isinstance(obj, TypedFunction)


def specialize(op: Callable, datatype: Optional[str]) -> Callable:
    """
    Narrow a binary kernel to operands of one datatype.

    Returns op.find((datatype, datatype)) when op is a TypedFunction with a
    matching signature, op itself otherwise.
    """
    if datatype is None or not isinstance(op, TypedFunction):
        return op
    try:
        return op.find((datatype, datatype))
    except (NoMatchingSignature, AmbiguousSignature, SignatureError):
        return op
