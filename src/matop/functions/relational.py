"""
Relational functions.

Comparisons are tolerance aware: two numbers within the configured epsilon
compare equal, so larger(x, y) is false and larger_eq(x, y) is true for
nearly equal x and y.
"""

from typing import Any, Collection, Dict

from .._errors import DomainError
from .._typing import Kind
from ..dispatch import TypedFunction, typed
from ..matrix.algorithms import build_suite
from ._context import FunctionContext

__all__ = [
    'create_equal_scalar',
    'create_compare',
    'create_equal',
    'create_unequal',
    'create_larger',
    'create_larger_eq',
    'create_smaller',
    'create_smaller_eq',
]

_ORDERED = (Kind.NUMBER, Kind.BIGNUMBER, Kind.FRACTION, Kind.BOOLEAN, Kind.UNIT)
_NON_NULL = 'boolean | number | BigNumber | Fraction | Complex | Unit | string'


def _no_ordering(x, y):
    raise DomainError("No ordering relation is defined for complex numbers")


def create_equal_scalar(ctx: FunctionContext) -> TypedFunction:
    """equal_scalar(x, y): nearly-equal test of two scalars of the same kind."""
    tower = ctx.tower
    table: Dict[str, Any] = {
        f'{kind.value}, {kind.value}': tower.traits_for(kind).nearly_equal
        for kind in _ORDERED + (Kind.COMPLEX,)
    }
    table['string, string'] = lambda x, y: x == y
    table['null, null'] = lambda x, y: True
    return typed('equalScalar', table)


def _ordering(ctx: FunctionContext, name: str, accept: Collection[int]) -> TypedFunction:
    """Scalar comparison true when compare(x, y) is one of accept."""
    tower = ctx.tower
    table: Dict[str, Any] = {}
    for kind in _ORDERED:
        traits = tower.traits_for(kind)
        table[f'{kind.value}, {kind.value}'] = (
            lambda x, y, compare=traits.compare: compare(x, y) in accept
        )
    table['Complex, Complex'] = _no_ordering
    table['string, string'] = lambda x, y: _compare_strings(x, y) in accept
    return typed(name, table)


def _compare_strings(x: str, y: str) -> int:
    return (x > y) - (x < y)


def _relational(ctx: FunctionContext, name: str, scalar: TypedFunction, keeps_zero: bool) -> TypedFunction:
    """
    Lift a scalar relation to matrices.

    keeps_zero: Whether the relation is true for two zeros (equal, larger_eq,
        smaller_eq). Cells absent from both sparse operands then become true,
        which requires a dense result.
    """
    algos = ctx.algorithms
    return typed(name, build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_full if keeps_zero else algos.sparse_sparse_union,
        dense_sparse=algos.dense_sparse_full,
        sparse_scalar=algos.sparse_scalar_full,
    ))


# =============================================================================
# compare
# =============================================================================

def create_compare(ctx: FunctionContext) -> TypedFunction:
    """
    compare(x, y): 1 when x > y, -1 when x < y, 0 when nearly equal.

    The result has the kind of the operands (Decimal for BigNumber,
    Fraction for Fraction).
    """
    tower = ctx.tower
    table: Dict[str, Any] = {
        f'{kind.value}, {kind.value}': tower.traits_for(kind).compare
        for kind in _ORDERED
    }
    table['Complex, Complex'] = _no_ordering
    table['string, string'] = _compare_strings
    return _relational(ctx, 'compare', typed('compare', table), keeps_zero=False)


# =============================================================================
# equal / unequal
# =============================================================================

def create_equal(ctx: FunctionContext, equal_scalar: TypedFunction) -> TypedFunction:
    """equal(x, y): elementwise equal_scalar."""
    scalar = typed('equal', equal_scalar, {
        f'null, {_NON_NULL}': lambda x, y: False,
        f'{_NON_NULL}, null': lambda x, y: False,
    })
    return _relational(ctx, 'equal', scalar, keeps_zero=True)


def create_unequal(ctx: FunctionContext, equal_scalar: TypedFunction) -> TypedFunction:
    """unequal(x, y): negation of equal."""
    table: Dict[str, Any] = {
        pattern: (lambda x, y, eq=impl: not eq(x, y))
        for pattern, impl in equal_scalar.signatures.items()
    }
    table[f'null, {_NON_NULL}'] = lambda x, y: True
    table[f'{_NON_NULL}, null'] = lambda x, y: True
    return _relational(ctx, 'unequal', typed('unequal', table), keeps_zero=False)


# =============================================================================
# larger / smaller
# =============================================================================

def create_larger(ctx: FunctionContext) -> TypedFunction:
    """larger(x, y): x > y beyond tolerance."""
    return _relational(ctx, 'larger', _ordering(ctx, 'larger', (1,)), keeps_zero=False)


def create_larger_eq(ctx: FunctionContext) -> TypedFunction:
    """larger_eq(x, y): x > y or nearly equal."""
    return _relational(ctx, 'largerEq', _ordering(ctx, 'largerEq', (0, 1)), keeps_zero=True)


def create_smaller(ctx: FunctionContext) -> TypedFunction:
    """smaller(x, y): x < y beyond tolerance."""
    return _relational(ctx, 'smaller', _ordering(ctx, 'smaller', (-1,)), keeps_zero=False)


def create_smaller_eq(ctx: FunctionContext) -> TypedFunction:
    """smaller_eq(x, y): x < y or nearly equal."""
    return _relational(ctx, 'smallerEq', _ordering(ctx, 'smallerEq', (-1, 0)), keeps_zero=True)
