"""
Dense x sparse traversals.

    dense_sparse_identity  DS1  dense result, op where S is explicit, D elsewhere
    dense_sparse_zero      DS0  sparse result, op where S is explicit only
    dense_sparse_full      DSf  dense result, op on every cell

Sparse x dense reuses these with the operands swapped and inverse=True, so
op(s_ij, d_ij) is evaluated.
"""

from typing import Any, List, Optional

from .._dense import DenseMatrix
from .._sparse import SparseMatrix
from ._common import (
    Kernel,
    ZeroTest,
    default_is_zero,
    kernel_for,
    require_2d,
    shared_datatype,
    zero_for,
)


def dense_sparse_identity(
    a: DenseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
) -> DenseMatrix:
    """
    Dense result; op where b has an explicit entry, a's value elsewhere.

    Valid when op(d, 0) == d (op(0, d) == d with inverse), e.g. addition.
    """
    require_2d(a, b)
    dt = shared_datatype(a, b)
    cf = kernel_for(op, dt)

    data = [list(row) for row in a.data]
    values, index, ptr = b.values, b.index, b.ptr
    for j in range(b.cols):
        for k in range(ptr[j], ptr[j + 1]):
            i = index[k]
            if inverse:
                data[i][j] = cf(values[k], data[i][j])
            else:
                data[i][j] = cf(data[i][j], values[k])
    return DenseMatrix._new(data, a.shape, dt)


def dense_sparse_zero(
    a: DenseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
    *, is_zero: Optional[ZeroTest] = None,
) -> SparseMatrix:
    """
    Sparse result; op only where b has an explicit entry.

    Valid when op(d, 0) == 0 (op(0, d) == 0 with inverse), e.g.
    multiplication. Computed zeros are not stored.
    """
    require_2d(a, b)
    if is_zero is None:
        is_zero = default_is_zero()
    dt = shared_datatype(a, b)
    cf = kernel_for(op, dt)

    dense = a.data
    values, index, ptr = b.values, b.index, b.ptr
    c_values: List[Any] = []
    c_index: List[int] = []
    c_ptr = [0]
    for j in range(b.cols):
        for k in range(ptr[j], ptr[j + 1]):
            i = index[k]
            v = cf(values[k], dense[i][j]) if inverse else cf(dense[i][j], values[k])
            if not is_zero(v):
                c_values.append(v)
                c_index.append(i)
        c_ptr.append(len(c_values))
    return SparseMatrix._new(c_values, c_index, c_ptr, b.shape, dt)


def dense_sparse_full(
    a: DenseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
) -> DenseMatrix:
    """
    Dense result; op on every cell, the zero substituted where b is absent.
    """
    require_2d(a, b)
    dt = shared_datatype(a, b)
    cf = kernel_for(op, dt)

    rows, cols = a.shape
    dense = a.data
    values, index, ptr = b.values, b.index, b.ptr
    data = [[None] * cols for _ in range(rows)]
    # workspace: x holds column j of b, w marks the rows present in it
    x: List[Any] = [None] * rows
    w = [-1] * rows
    for j in range(cols):
        for k in range(ptr[j], ptr[j + 1]):
            x[index[k]] = values[k]
            w[index[k]] = j
        for i in range(rows):
            d = dense[i][j]
            s = x[i] if w[i] == j else zero_for(dt, d)
            data[i][j] = cf(s, d) if inverse else cf(d, s)
    return DenseMatrix._new(data, a.shape, dt)
