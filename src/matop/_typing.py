"""
Type System for matop

Defines the closed set of dispatch types (Kind) and the classification of
runtime values into kinds. Dispatch never inspects type names at call time:
signatures are parsed into sets of Kind once, and each call only computes
kind_of() for its arguments.

Type names (as used in signature strings):

    number        int, float, numpy integer/floating scalars
    BigNumber     decimal.Decimal
    Fraction      fractions.Fraction
    Complex       complex, numpy complex scalars
    Unit          sympy expression carrying physical units
    boolean       bool, numpy.bool_
    string        str
    null          None
    Array         list / tuple (nested)
    DenseMatrix   matop.DenseMatrix
    SparseMatrix  matop.SparseMatrix
    Object        anything else (only matched by 'any')

The alias 'Matrix' stands for 'DenseMatrix | SparseMatrix'.

Example:
    >>> from matop._typing import kind_of, Kind
    >>> kind_of(3.5)
    <Kind.NUMBER: 'number'>
    >>> kind_of([[1, 2]]) is Kind.ARRAY
    True
"""

import numbers
import sys
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, FrozenSet, Optional, Tuple, Type

__all__ = [
    'Kind',
    'MATRIX_KINDS',
    'TYPE_ALIASES',
    'kind_of',
    'type_name',
    'lookup_type_name',
    'register_class',
]


class Kind(Enum):
    """Closed enumeration of dispatch types."""

    NUMBER = 'number'
    BIGNUMBER = 'BigNumber'
    FRACTION = 'Fraction'
    COMPLEX = 'Complex'
    UNIT = 'Unit'
    BOOLEAN = 'boolean'
    STRING = 'string'
    NULL = 'null'
    ARRAY = 'Array'
    DENSE_MATRIX = 'DenseMatrix'
    SPARSE_MATRIX = 'SparseMatrix'
    OBJECT = 'Object'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"<Kind.{self.name}: {self.value!r}>"


MATRIX_KINDS: FrozenSet[Kind] = frozenset({Kind.DENSE_MATRIX, Kind.SPARSE_MATRIX})

# Names usable in signatures that expand to several kinds
TYPE_ALIASES: Dict[str, FrozenSet[Kind]] = {
    'Matrix': MATRIX_KINDS,
}

_KIND_BY_NAME: Dict[str, Kind] = {k.value: k for k in Kind}

# Declaration order, used to print unions canonically
KIND_ORDER: Dict[Kind, int] = {k: i for i, k in enumerate(Kind)}


# =============================================================================
# Classification
# =============================================================================

# Exact class -> kind. Filled lazily by the slow path and by register_class().
_KIND_BY_CLASS: Dict[Type, Kind] = {
    bool: Kind.BOOLEAN,
    int: Kind.NUMBER,
    float: Kind.NUMBER,
    Decimal: Kind.BIGNUMBER,
    Fraction: Kind.FRACTION,
    complex: Kind.COMPLEX,
    str: Kind.STRING,
    type(None): Kind.NULL,
    list: Kind.ARRAY,
    tuple: Kind.ARRAY,
}


def _is_library_loaded(name: str) -> bool:
    """Check if a library is already loaded in sys.modules."""
    return name in sys.modules


def register_class(cls: Type, kind: Kind) -> None:
    """
    Register a class as belonging to a dispatch kind.

    Used by the matrix module to register its storage classes.
    """
    _KIND_BY_CLASS[cls] = kind


def _classify(value: Any) -> Tuple[Kind, bool]:
    """Slow path of kind_of(). Returns (kind, cacheable)."""
    if isinstance(value, bool):
        return Kind.BOOLEAN, True
    if _is_library_loaded('numpy'):
        import numpy as np
        if isinstance(value, np.bool_):
            return Kind.BOOLEAN, True
    if isinstance(value, Fraction):
        return Kind.FRACTION, True
    if isinstance(value, Decimal):
        return Kind.BIGNUMBER, True
    if isinstance(value, numbers.Real):
        return Kind.NUMBER, True
    if isinstance(value, numbers.Complex):
        return Kind.COMPLEX, True
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY, True
    for cls, kind in list(_KIND_BY_CLASS.items()):
        if kind in MATRIX_KINDS and isinstance(value, cls):
            return kind, True
    # A sympy expression is a Unit only if it carries a quantity, which
    # depends on the value rather than on its class.
    if _is_library_loaded('sympy'):
        from sympy import Expr
        if isinstance(value, Expr):
            from sympy.physics.units.quantities import Quantity
            if value.has(Quantity):
                return Kind.UNIT, False
            return Kind.OBJECT, False
    return Kind.OBJECT, True


def kind_of(value: Any) -> Kind:
    """
    Return the dispatch kind of a runtime value.

    Args:
        value: Any Python object.

    Returns:
        The Kind the dispatcher uses for this value.
    """
    kind = _KIND_BY_CLASS.get(type(value))
    if kind is not None:
        return kind
    kind, cacheable = _classify(value)
    if cacheable:
        _KIND_BY_CLASS[type(value)] = kind
    return kind


def type_name(value: Any) -> str:
    """
    Human readable type name of a value, used in error messages.

    Known kinds print as their signature name; unknown objects print as
    their Python class name.
    """
    kind = kind_of(value)
    if kind is Kind.OBJECT:
        return type(value).__name__
    return kind.value


def lookup_type_name(name: str) -> Optional[FrozenSet[Kind]]:
    """
    Resolve a signature type name to the set of kinds it matches.

    Returns None for unknown names.
    """
    if name in TYPE_ALIASES:
        return TYPE_ALIASES[name]
    kind = _KIND_BY_NAME.get(name)
    if kind is None:
        return None
    return frozenset({kind})
