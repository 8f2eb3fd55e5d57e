"""
Sparse x sparse traversals.

Each column is merged with two pointers over the sorted row indices of both
operands. A variant is defined by what happens to an entry present in both
operands, only in A, or only in B:

    variant                      both   only A       only B       result
    sparse_sparse_identity  SS10  op     copy a       copy b       sparse
    sparse_sparse_intersect SS00  op     -            -            sparse
    sparse_sparse_union     SSf0  op     op(a, 0)     op(0, b)     sparse
    sparse_sparse_left      SfS0  op     op(a, 0)     -            sparse
    sparse_sparse_left_identity S1S0  op  copy a      -            sparse
    sparse_sparse_full      SSff  op on every cell                  dense

A skipped cell ("-") is an implicit zero of the result. Computed zeros are
not stored in sparse results.
"""

from typing import Any, Callable, List, Optional

from .._dense import DenseMatrix
from .._sparse import SparseMatrix
from ._common import (
    Kernel,
    ZeroTest,
    default_is_zero,
    kernel_for,
    require_same_shape,
    shared_datatype,
    zero_for,
)

# Marker for "store the operand's value unchanged"
_COPY = object()


def _merge(
    a: SparseMatrix,
    b: SparseMatrix,
    both: Callable[[Any, Any], Any],
    only_a: Any,
    only_b: Any,
    is_zero: ZeroTest,
    datatype: Optional[str],
) -> SparseMatrix:
    """
    Per-column two-pointer merge.

    Args:
        both: Called with (a_value, b_value) where both are explicit.
        only_a / only_b: None to skip, _COPY to store the value as is, or a
            callable applied to the lone value.
    """
    rows, cols = a.shape
    av, ai, ap = a.values, a.index, a.ptr
    bv, bi, bp = b.values, b.index, b.ptr

    values: List[Any] = []
    index: List[int] = []
    ptr = [0]
    for j in range(cols):
        ka, ka_end = ap[j], ap[j + 1]
        kb, kb_end = bp[j], bp[j + 1]
        while ka < ka_end or kb < kb_end:
            ia = ai[ka] if ka < ka_end else rows
            ib = bi[kb] if kb < kb_end else rows
            if ia == ib:
                i = ia
                v = both(av[ka], bv[kb])
                ka += 1
                kb += 1
            elif ia < ib:
                i = ia
                lone, handler = av[ka], only_a
                ka += 1
                if handler is None:
                    continue
                if handler is _COPY:
                    values.append(lone)
                    index.append(i)
                    continue
                v = handler(lone)
            else:
                i = ib
                lone, handler = bv[kb], only_b
                kb += 1
                if handler is None:
                    continue
                if handler is _COPY:
                    values.append(lone)
                    index.append(i)
                    continue
                v = handler(lone)
            if not is_zero(v):
                values.append(v)
                index.append(i)
        ptr.append(len(values))
    return SparseMatrix._new(values, index, ptr, a.shape, datatype)


def _prepare(a: SparseMatrix, b: SparseMatrix, op: Kernel, is_zero: Optional[ZeroTest]):
    require_same_shape(a, b)
    dt = shared_datatype(a, b)
    return kernel_for(op, dt), dt, (is_zero if is_zero is not None else default_is_zero())


def sparse_sparse_identity(
    a: SparseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
    *, is_zero: Optional[ZeroTest] = None,
) -> SparseMatrix:
    """
    op where both are explicit; a lone explicit value is copied.

    Valid when op(x, 0) == x and op(0, y) == y, e.g. addition.
    """
    cf, dt, is_zero = _prepare(a, b, op, is_zero)
    return _merge(a, b, cf, _COPY, _COPY, is_zero, dt)


def sparse_sparse_intersect(
    a: SparseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
    *, is_zero: Optional[ZeroTest] = None,
) -> SparseMatrix:
    """
    op only where both are explicit.

    Valid when op(x, 0) == op(0, y) == 0, e.g. lcm or bitwise and.
    """
    cf, dt, is_zero = _prepare(a, b, op, is_zero)
    return _merge(a, b, cf, None, None, is_zero, dt)


def sparse_sparse_union(
    a: SparseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
    *, is_zero: Optional[ZeroTest] = None,
) -> SparseMatrix:
    """
    op where either is explicit, with the zero substituted for the absent one.

    Valid when op(0, 0) == 0, e.g. subtraction or comparison.
    """
    cf, dt, is_zero = _prepare(a, b, op, is_zero)
    return _merge(
        a, b, cf,
        lambda x: cf(x, zero_for(dt, x)),
        lambda y: cf(zero_for(dt, y), y),
        is_zero, dt,
    )


def sparse_sparse_left(
    a: SparseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
    *, is_zero: Optional[ZeroTest] = None,
) -> SparseMatrix:
    """
    op where a is explicit (zero substituted for an absent b); zero elsewhere.

    Valid when op(0, y) == 0, e.g. multiplication.
    """
    cf, dt, is_zero = _prepare(a, b, op, is_zero)
    return _merge(
        a, b, cf,
        lambda x: cf(x, zero_for(dt, x)),
        None,
        is_zero, dt,
    )


def sparse_sparse_left_identity(
    a: SparseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
    *, is_zero: Optional[ZeroTest] = None,
) -> SparseMatrix:
    """
    op where both are explicit; a's value where only a is; zero elsewhere.

    Valid when op(x, 0) == x and op(0, y) == 0, e.g. right shifts.
    """
    cf, dt, is_zero = _prepare(a, b, op, is_zero)
    return _merge(a, b, cf, _COPY, None, is_zero, dt)


def sparse_sparse_full(
    a: SparseMatrix, b: SparseMatrix, op: Kernel, inverse: bool = False,
) -> DenseMatrix:
    """
    Dense result; op on every cell, zeros substituted for absent entries.

    Required when op(0, 0) != 0, e.g. equality or division.
    """
    require_same_shape(a, b)
    dt = shared_datatype(a, b)
    cf = kernel_for(op, dt)

    rows, cols = a.shape
    av, ai, ap = a.values, a.index, a.ptr
    bv, bi, bp = b.values, b.index, b.ptr
    # zero used where neither operand has an entry
    if dt is not None:
        neither = zero_for(dt, None)
    elif av or bv:
        neither = zero_for(None, av[0] if av else bv[0])
    else:
        neither = 0

    data = [[None] * cols for _ in range(rows)]
    xa: List[Any] = [None] * rows
    xb: List[Any] = [None] * rows
    wa = [-1] * rows
    wb = [-1] * rows
    for j in range(cols):
        for k in range(ap[j], ap[j + 1]):
            xa[ai[k]] = av[k]
            wa[ai[k]] = j
        for k in range(bp[j], bp[j + 1]):
            xb[bi[k]] = bv[k]
            wb[bi[k]] = j
        for i in range(rows):
            has_a, has_b = wa[i] == j, wb[i] == j
            if has_a and has_b:
                data[i][j] = cf(xa[i], xb[i])
            elif has_a:
                data[i][j] = cf(xa[i], zero_for(dt, xa[i]))
            elif has_b:
                data[i][j] = cf(zero_for(dt, xb[i]), xb[i])
            else:
                data[i][j] = cf(neither, neither)
    return DenseMatrix._new(data, a.shape, dt)
