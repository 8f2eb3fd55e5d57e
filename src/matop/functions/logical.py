"""
Logical functions. Operands are tested for truthiness with the rule of their
own kind (NaN is false, a unit is true when its magnitude is non-zero).
"""

from ..dispatch import TypedFunction, refer_to, refer_to_self, typed
from ..matrix import DenseMatrix, zeros
from ..matrix.algorithms import build_suite
from ._context import FunctionContext

__all__ = [
    'create_logical_and',
    'create_logical_or',
    'create_logical_xor',
]

_TRUTHY = 'boolean | number | BigNumber | Fraction | Complex | Unit'


def _logical_scalar(ctx: FunctionContext, name: str, fn) -> TypedFunction:
    truthy = ctx.truthy
    return typed(name, {
        f'{_TRUTHY}, {_TRUTHY}': lambda x, y: fn(truthy(x), truthy(y)),
    })


def create_logical_and(ctx: FunctionContext) -> TypedFunction:
    """
    logical_and(x, y): true when both operands are truthy.

    Against a falsy scalar every cell is false, so the matrix is not
    traversed at all.
    """
    algos = ctx.algorithms
    scalar = _logical_scalar(ctx, 'and', lambda x, y: x and y)

    def false_like(m):
        return zeros(m.shape, m.storage(), 'boolean')

    def matrix_and_scalar(self):
        def impl(x, y):
            if not ctx.truthy(y):
                return false_like(x)
            if x.storage() == 'sparse':
                return algos.sparse_scalar_zero(x, y, self, False)
            return algos.dense_scalar(x, y, self, False)
        return impl

    def scalar_and_matrix(self):
        def impl(x, y):
            if not ctx.truthy(x):
                return false_like(y)
            if y.storage() == 'sparse':
                return algos.sparse_scalar_zero(y, x, self, True)
            return algos.dense_scalar(y, x, self, True)
        return impl

    return typed(
        'and',
        build_suite(
            scalar,
            sparse_sparse=algos.sparse_sparse_intersect,
            dense_sparse=algos.dense_sparse_zero,
        ),
        {
            'SparseMatrix | DenseMatrix, any': refer_to_self(matrix_and_scalar),
            'any, SparseMatrix | DenseMatrix': refer_to_self(scalar_and_matrix),
            'Array, any': refer_to('SparseMatrix | DenseMatrix, any', builder=lambda impl: (
                lambda x, y: impl(DenseMatrix(x), y).value_of())),
            'any, Array': refer_to('any, SparseMatrix | DenseMatrix', builder=lambda impl: (
                lambda x, y: impl(x, DenseMatrix(y)).value_of())),
        },
    )


def create_logical_or(ctx: FunctionContext) -> TypedFunction:
    """logical_or(x, y): true when either operand is truthy."""
    algos = ctx.algorithms
    scalar = _logical_scalar(ctx, 'or', lambda x, y: x or y)
    return typed('or', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_union,
        dense_sparse=algos.dense_sparse_full,
        sparse_scalar=algos.sparse_scalar_full,
    ))


def create_logical_xor(ctx: FunctionContext) -> TypedFunction:
    """logical_xor(x, y): true when exactly one operand is truthy."""
    algos = ctx.algorithms
    scalar = _logical_scalar(ctx, 'xor', lambda x, y: x != y)
    return typed('xor', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_union,
        dense_sparse=algos.dense_sparse_full,
        sparse_scalar=algos.sparse_scalar_full,
    ))
