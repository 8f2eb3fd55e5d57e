"""
Dense traversals.

    dense_dense   DD  op on every cell pair, dense result
    dense_scalar  Ds  op on every cell against a scalar, dense result

Both work on any number of dimensions.
"""

from typing import Any, List

from .._dense import DenseMatrix
from ._common import Kernel, kernel_for, require_same_shape, scalar_kernel, shared_datatype


def _zip_cells(x: List, y: List, cf: Kernel, inverse: bool, depth: int) -> List:
    if depth == 1:
        if inverse:
            return [cf(v, u) for u, v in zip(x, y)]
        return [cf(u, v) for u, v in zip(x, y)]
    return [_zip_cells(u, v, cf, inverse, depth - 1) for u, v in zip(x, y)]


def _map_cells(x: List, b: Any, cf: Kernel, inverse: bool, depth: int) -> List:
    if depth == 1:
        if inverse:
            return [cf(b, u) for u in x]
        return [cf(u, b) for u in x]
    return [_map_cells(u, b, cf, inverse, depth - 1) for u in x]


def dense_dense(a: DenseMatrix, b: DenseMatrix, op: Kernel, inverse: bool = False) -> DenseMatrix:
    """
    Apply op to every pair of corresponding cells.

    Args:
        a, b: Dense matrices of identical shape.
        op: Binary kernel.
        inverse: Evaluate op(b_ij, a_ij) instead of op(a_ij, b_ij).

    Returns:
        Dense matrix C with C_ij = op(A_ij, B_ij).

    Raises:
        DimensionMismatch: If the shapes differ (nothing is computed).
    """
    require_same_shape(a, b)
    dt = shared_datatype(a, b)
    cf = kernel_for(op, dt)
    data = _zip_cells(a.data, b.data, cf, inverse, a.ndim)
    return DenseMatrix._new(data, a.shape, dt)


def dense_scalar(a: DenseMatrix, b: Any, op: Kernel, inverse: bool = False) -> DenseMatrix:
    """
    Apply op to every cell of a against the scalar b.

    Args:
        a: Dense matrix.
        b: Scalar.
        op: Binary kernel.
        inverse: Evaluate op(b, a_ij) instead of op(a_ij, b).

    Returns:
        Dense matrix C with C_ij = op(A_ij, b).
    """
    cf, dt = scalar_kernel(a, b, op)
    data = _map_cells(a.data, b, cf, inverse, a.ndim)
    return DenseMatrix._new(data, a.shape, dt)
