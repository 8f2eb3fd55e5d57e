"""
Sparse x scalar traversals.

    sparse_scalar_zero      Ss0  sparse result, op on explicit entries only
    sparse_scalar_identity  Ss1  dense result, op on explicit entries, scalar elsewhere
    sparse_scalar_full      Ssf  dense result, op on every cell

Scalar x sparse uses the same functions with inverse=True.
"""

from typing import Any, List, Optional

from .._dense import DenseMatrix
from .._sparse import SparseMatrix
from ._common import Kernel, ZeroTest, default_is_zero, scalar_kernel, zero_for


def sparse_scalar_zero(
    a: SparseMatrix, b: Any, op: Kernel, inverse: bool = False,
    *, is_zero: Optional[ZeroTest] = None,
) -> SparseMatrix:
    """
    Sparse result; op(a_ij, b) on explicit entries, absent cells stay zero.

    Valid when op(0, b) == 0 (op(b, 0) == 0 with inverse).
    """
    if is_zero is None:
        is_zero = default_is_zero()
    cf, dt = scalar_kernel(a, b, op)

    values, index, ptr = a.values, a.index, a.ptr
    c_values: List[Any] = []
    c_index: List[int] = []
    c_ptr = [0]
    for j in range(a.cols):
        for k in range(ptr[j], ptr[j + 1]):
            v = cf(b, values[k]) if inverse else cf(values[k], b)
            if not is_zero(v):
                c_values.append(v)
                c_index.append(index[k])
        c_ptr.append(len(c_values))
    return SparseMatrix._new(c_values, c_index, c_ptr, a.shape, dt)


def sparse_scalar_identity(
    a: SparseMatrix, b: Any, op: Kernel, inverse: bool = False,
) -> DenseMatrix:
    """
    Dense result; op on explicit entries, b itself in every other cell.

    Valid when op(0, b) == b (op(b, 0) == b with inverse), e.g. addition.
    """
    cf, dt = scalar_kernel(a, b, op)
    rows, cols = a.shape
    data = [[b] * cols for _ in range(rows)]
    values, index, ptr = a.values, a.index, a.ptr
    for j in range(cols):
        for k in range(ptr[j], ptr[j + 1]):
            data[index[k]][j] = cf(b, values[k]) if inverse else cf(values[k], b)
    return DenseMatrix._new(data, a.shape, dt)


def sparse_scalar_full(
    a: SparseMatrix, b: Any, op: Kernel, inverse: bool = False,
) -> DenseMatrix:
    """Dense result; op on every cell, the zero substituted for absent cells."""
    cf, dt = scalar_kernel(a, b, op)
    rows, cols = a.shape
    absent = None
    if a.nnz < rows * cols:
        zero = zero_for(a.datatype, b)
        absent = cf(b, zero) if inverse else cf(zero, b)
    data = [[absent] * cols for _ in range(rows)]
    values, index, ptr = a.values, a.index, a.ptr
    for j in range(cols):
        for k in range(ptr[j], ptr[j + 1]):
            data[index[k]][j] = cf(b, values[k]) if inverse else cf(values[k], b)
    return DenseMatrix._new(data, a.shape, dt)
