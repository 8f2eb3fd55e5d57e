"""
Bitwise functions on integer numbers and integer BigNumbers.
"""

from decimal import Decimal
from typing import Callable

from .._errors import DomainError
from .._numeric import _integral
from ..dispatch import TypedFunction, refer_to_self, typed
from ..matrix import DenseMatrix, zeros_like
from ..matrix.algorithms import build_suite
from ._context import FunctionContext

__all__ = [
    'create_bit_and',
    'create_bit_or',
    'create_bit_xor',
    'create_right_arith_shift',
    'create_right_log_shift',
]


def _integer_kernels(name: str, fn: Callable[[int, int], int]) -> dict:
    """Scalar signatures of fn for number and BigNumber operands."""

    def check(x, y):
        if not (_integral(x) and _integral(y)):
            raise DomainError(f"Integers expected in function {name}")

    def number(x, y):
        check(x, y)
        return fn(int(x), int(y))

    def bignumber(x, y):
        check(x, y)
        return Decimal(fn(int(x), int(y)))

    return {
        'number, number': number,
        'BigNumber, BigNumber': bignumber,
    }


def _arith_shift(x: int, y: int) -> int:
    if y < 0:
        raise DomainError("Shift count must be non-negative in function rightArithShift")
    return x >> y


def _log_shift(x: int, y: int) -> int:
    return (x & 0xFFFFFFFF) >> (y & 31)


# =============================================================================
# and / or / xor
# =============================================================================

def create_bit_and(ctx: FunctionContext) -> TypedFunction:
    """bit_and(x, y): x & y. A zero on either side gives zero."""
    algos = ctx.algorithms
    scalar = typed('bitAnd', _integer_kernels('bitAnd', lambda x, y: x & y))
    return typed('bitAnd', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_intersect,
        dense_sparse=algos.dense_sparse_zero,
        sparse_scalar=algos.sparse_scalar_zero,
    ))


def create_bit_or(ctx: FunctionContext) -> TypedFunction:
    """bit_or(x, y): x | y. A zero operand leaves the other unchanged."""
    algos = ctx.algorithms
    scalar = typed('bitOr', _integer_kernels('bitOr', lambda x, y: x | y))
    return typed('bitOr', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_identity,
        dense_sparse=algos.dense_sparse_identity,
        sparse_scalar=algos.sparse_scalar_identity,
    ))


def create_bit_xor(ctx: FunctionContext) -> TypedFunction:
    """bit_xor(x, y): x ^ y. A zero operand leaves the other unchanged."""
    algos = ctx.algorithms
    scalar = typed('bitXor', _integer_kernels('bitXor', lambda x, y: x ^ y))
    return typed('bitXor', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_identity,
        dense_sparse=algos.dense_sparse_identity,
        sparse_scalar=algos.sparse_scalar_identity,
    ))


# =============================================================================
# Shifts
# =============================================================================

def _create_shift(
    ctx: FunctionContext,
    name: str,
    fn: Callable[[int, int], int],
    zero_shift_identity: bool = True,
) -> TypedFunction:
    """
    Build a right shift.

    Shifting zero gives zero, so positions absent from a sparse left operand
    stay zero. When shifting by zero gives the value itself
    (zero_shift_identity), lone left entries are copied as well; otherwise
    they are shifted by zero like any other cell.
    """
    algos = ctx.algorithms

    def matrix_by_scalar(self):
        def impl(x, y):
            if zero_shift_identity and ctx.is_zero(y):
                return x.clone()
            if x.storage() == 'sparse':
                return algos.sparse_scalar_zero(x, y, self, False)
            return algos.dense_scalar(x, y, self, False)
        return impl

    def scalar_by_matrix(self):
        def impl(x, y):
            if ctx.is_zero(x):
                return zeros_like(y)
            if y.storage() == 'sparse':
                if zero_shift_identity:
                    return algos.sparse_scalar_identity(y, x, self, True)
                return algos.sparse_scalar_full(y, x, self, True)
            return algos.dense_scalar(y, x, self, True)
        return impl

    if zero_shift_identity:
        sparse_sparse, dense_sparse = algos.sparse_sparse_left_identity, algos.dense_sparse_identity
    else:
        sparse_sparse, dense_sparse = algos.sparse_sparse_left, algos.dense_sparse_full

    scalar = typed(name, _integer_kernels(name, fn))
    return typed(
        name,
        build_suite(
            scalar,
            sparse_sparse=sparse_sparse,
            dense_sparse=dense_sparse,
            sparse_dense=algos.dense_sparse_zero,
        ),
        {
            'SparseMatrix | DenseMatrix, number | BigNumber': refer_to_self(matrix_by_scalar),
            'number | BigNumber, SparseMatrix | DenseMatrix': refer_to_self(scalar_by_matrix),
            'Array, number | BigNumber': refer_to_self(
                lambda self: lambda x, y: self(DenseMatrix(x), y).value_of()),
            'number | BigNumber, Array': refer_to_self(
                lambda self: lambda x, y: self(x, DenseMatrix(y)).value_of()),
        },
    )


def create_right_arith_shift(ctx: FunctionContext) -> TypedFunction:
    """right_arith_shift(x, y): sign-propagating x >> y."""
    return _create_shift(ctx, 'rightArithShift', _arith_shift)


def create_right_log_shift(ctx: FunctionContext) -> TypedFunction:
    """
    right_log_shift(x, y): zero-filling 32-bit x >>> y.

    Negative values are taken modulo 2**32 even for a zero shift count.
    """
    return _create_shift(ctx, 'rightLogShift', _log_shift, zero_shift_identity=False)
