"""
Elementwise Algorithm Family

One traversal per storage pair and zero-handling variant. Every traversal
takes (a, b, op, inverse=False); traversals producing sparse results also
take the keyword is_zero used to keep computed zeros out of the result.

    Name                          Operands  Result  Computes op
    ----------------------------  --------  ------  ------------------------------
    dense_dense                   D x D     dense   every cell
    dense_scalar                  D x s     dense   every cell
    dense_sparse_identity         D x S     dense   S explicit (D value elsewhere)
    dense_sparse_zero             D x S     sparse  S explicit
    dense_sparse_full             D x S     dense   every cell
    sparse_sparse_identity        S x S     sparse  both explicit (lone values copied)
    sparse_sparse_intersect       S x S     sparse  both explicit
    sparse_sparse_union           S x S     sparse  either explicit
    sparse_sparse_left            S x S     sparse  A explicit
    sparse_sparse_left_identity   S x S     sparse  both explicit (lone A copied)
    sparse_sparse_full            S x S     dense   every cell
    sparse_scalar_zero            S x s     sparse  explicit entries
    sparse_scalar_identity        S x s     dense   explicit entries (s elsewhere)
    sparse_scalar_full            S x s     dense   every cell

Choosing a variant that skips cells is only correct when op provably maps
the skipped inputs to zero (or to the copied value).
"""

from functools import wraps
from typing import Callable

from ._common import ZeroTest
from ._dense import dense_dense, dense_scalar
from ._mixed import dense_sparse_full, dense_sparse_identity, dense_sparse_zero
from ._scalar import sparse_scalar_full, sparse_scalar_identity, sparse_scalar_zero
from ._sparse import (
    sparse_sparse_full,
    sparse_sparse_identity,
    sparse_sparse_intersect,
    sparse_sparse_left,
    sparse_sparse_left_identity,
    sparse_sparse_union,
)
from ._suite import build_suite

__all__ = [
    'dense_dense',
    'dense_scalar',
    'dense_sparse_identity',
    'dense_sparse_zero',
    'dense_sparse_full',
    'sparse_sparse_identity',
    'sparse_sparse_intersect',
    'sparse_sparse_union',
    'sparse_sparse_left',
    'sparse_sparse_left_identity',
    'sparse_sparse_full',
    'sparse_scalar_zero',
    'sparse_scalar_identity',
    'sparse_scalar_full',
    'build_suite',
    'Algorithms',
    'ALGORITHMS',
]

ALGORITHMS = {
    fn.__name__: fn
    for fn in (
        dense_dense, dense_scalar,
        dense_sparse_identity, dense_sparse_zero, dense_sparse_full,
        sparse_sparse_identity, sparse_sparse_intersect, sparse_sparse_union,
        sparse_sparse_left, sparse_sparse_left_identity, sparse_sparse_full,
        sparse_scalar_zero, sparse_scalar_identity, sparse_scalar_full,
    )
}

# Traversals whose result is sparse and that therefore need a zero test
_SPARSE_RESULT = frozenset({
    'dense_sparse_zero',
    'sparse_sparse_identity',
    'sparse_sparse_intersect',
    'sparse_sparse_union',
    'sparse_sparse_left',
    'sparse_sparse_left_identity',
    'sparse_scalar_zero',
})


def _bind(fn: Callable, is_zero: ZeroTest) -> Callable:
    @wraps(fn)
    def bound(a, b, op, inverse=False):
        return fn(a, b, op, inverse, is_zero=is_zero)
    return bound


class Algorithms:
    """
    The traversal family with the zero test of one configuration bound in.

    Attributes are the traversal functions, named as in this module; the
    sparse-result ones are wrapped so they no longer take is_zero.

    Example:
        >>> algos = Algorithms(numeric_tower(config).is_zero)
        >>> algos.sparse_sparse_union(a, b, subtract)
    """

    def __init__(self, is_zero: ZeroTest):
        self.is_zero = is_zero
        for name, fn in ALGORITHMS.items():
            setattr(self, name, _bind(fn, is_zero) if name in _SPARSE_RESULT else fn)

    def __repr__(self) -> str:
        return f"Algorithms({len(ALGORITHMS)} traversals)"
