"""
Algorithm Suite Builder

Expands a scalar kernel plus a choice of traversals into the signature table
covering every operand storage combination:

    DenseMatrix x DenseMatrix, Array x Array,
    Array x DenseMatrix, DenseMatrix x Array           dense_dense
    SparseMatrix x SparseMatrix                        sparse_sparse
    DenseMatrix x SparseMatrix, Array x SparseMatrix   dense_sparse
    SparseMatrix x DenseMatrix, SparseMatrix x Array   sparse_dense (inverse)
    DenseMatrix / Array x scalar (both orders)         dense_scalar
    SparseMatrix x scalar                              sparse_scalar
    scalar x SparseMatrix                              scalar_sparse (inverse)

Array operands are wrapped in DenseMatrix; Array x Array and Array x scalar
results are unwrapped back to nested lists.

Example:
    >>> table = build_suite(add_scalar,
    ...                     sparse_sparse=algorithms.sparse_sparse_identity,
    ...                     dense_sparse=algorithms.dense_sparse_identity,
    ...                     sparse_scalar=algorithms.sparse_scalar_identity)
    >>> add = typed('add', table)
"""

import logging
from typing import Any, Callable, Dict, Optional, Union

from ...dispatch import TypedFunction, refer_to_self
from .._dense import DenseMatrix
from ._dense import dense_dense, dense_scalar

logger = logging.getLogger("matop.suite")

__all__ = ['build_suite']

Algorithm = Callable[..., Any]


def _route(algorithm: Algorithm, impl: Callable) -> Callable:
    impl.algorithm = algorithm
    return impl


def _signatures_for(
    elop: Callable,
    sparse_sparse: Optional[Algorithm],
    dense_sparse: Optional[Algorithm],
    sparse_dense: Optional[Algorithm],
    with_dense_scalar: bool,
    sparse_scalar: Optional[Algorithm],
    scalar_sparse: Optional[Algorithm],
    scalar: str,
) -> Dict[str, Callable]:
    """Signature table for a resolved kernel."""
    table: Dict[str, Callable] = {
        'DenseMatrix, DenseMatrix': _route(
            dense_dense, lambda x, y: dense_dense(x, y, elop)),
        'Array, Array': _route(
            dense_dense, lambda x, y: dense_dense(DenseMatrix(x), DenseMatrix(y), elop).value_of()),
        'Array, DenseMatrix': _route(
            dense_dense, lambda x, y: dense_dense(DenseMatrix(x), y, elop)),
        'DenseMatrix, Array': _route(
            dense_dense, lambda x, y: dense_dense(x, DenseMatrix(y), elop)),
    }

    if sparse_sparse is not None:
        table['SparseMatrix, SparseMatrix'] = _route(
            sparse_sparse, lambda x, y: sparse_sparse(x, y, elop, False))

    if dense_sparse is not None:
        table['DenseMatrix, SparseMatrix'] = _route(
            dense_sparse, lambda x, y: dense_sparse(x, y, elop, False))
        table['Array, SparseMatrix'] = _route(
            dense_sparse, lambda x, y: dense_sparse(DenseMatrix(x), y, elop, False))

    if sparse_dense is not None:
        table['SparseMatrix, DenseMatrix'] = _route(
            sparse_dense, lambda x, y: sparse_dense(y, x, elop, True))
        table['SparseMatrix, Array'] = _route(
            sparse_dense, lambda x, y: sparse_dense(DenseMatrix(y), x, elop, True))

    if with_dense_scalar:
        table[f'DenseMatrix, {scalar}'] = _route(
            dense_scalar, lambda x, y: dense_scalar(x, y, elop, False))
        table[f'{scalar}, DenseMatrix'] = _route(
            dense_scalar, lambda x, y: dense_scalar(y, x, elop, True))
        table[f'Array, {scalar}'] = _route(
            dense_scalar, lambda x, y: dense_scalar(DenseMatrix(x), y, elop, False).value_of())
        table[f'{scalar}, Array'] = _route(
            dense_scalar, lambda x, y: dense_scalar(DenseMatrix(y), x, elop, True).value_of())

    if sparse_scalar is not None:
        table[f'SparseMatrix, {scalar}'] = _route(
            sparse_scalar, lambda x, y: sparse_scalar(x, y, elop, False))

    if scalar_sparse is not None:
        table[f'{scalar}, SparseMatrix'] = _route(
            scalar_sparse, lambda x, y: scalar_sparse(y, x, elop, True))

    return table


def build_suite(
    elop: Optional[Callable] = None,
    *,
    sparse_sparse: Optional[Algorithm] = None,
    dense_sparse: Optional[Algorithm] = None,
    sparse_dense: Optional[Algorithm] = None,
    dense_scalar: bool = False,
    sparse_scalar: Optional[Algorithm] = None,
    scalar_sparse: Union[Algorithm, bool, None] = None,
    scalar: str = 'any',
) -> Dict[str, Any]:
    """
    Build the matrix signature table of an elementwise function.

    Args:
        elop: Scalar kernel. When it is a TypedFunction its own signatures
            are merged into the table. When None, the table refers to the
            typed function it ends up in (refer_to_self).
        sparse_sparse: Traversal for SparseMatrix x SparseMatrix.
        dense_sparse: Traversal for DenseMatrix x SparseMatrix.
        sparse_dense: Traversal for SparseMatrix x DenseMatrix, called with
            swapped operands and inverse=True. Defaults to dense_sparse.
        dense_scalar: Add the dense x scalar signatures even without a
            sparse_scalar traversal.
        sparse_scalar: Traversal for SparseMatrix x scalar. Giving it also
            adds the dense x scalar signatures.
        scalar_sparse: Traversal for scalar x SparseMatrix (inverse=True).
            Defaults to sparse_scalar; False omits the signature.
        scalar: Type constraint of the scalar operand.

    Returns:
        A new dict of signature -> implementation, suitable for typed().
        Each implementation exposes the traversal it routes to as its
        ``algorithm`` attribute.
    """
    if sparse_dense is None:
        sparse_dense = dense_sparse
    if scalar_sparse is None:
        scalar_sparse = sparse_scalar
    elif scalar_sparse is False:
        scalar_sparse = None
    with_dense_scalar = bool(dense_scalar) or sparse_scalar is not None

    options = (sparse_sparse, dense_sparse, sparse_dense, with_dense_scalar,
               sparse_scalar, scalar_sparse, scalar)

    if elop is None:
        # Each entry resolves against the finished typed function
        template = _signatures_for(lambda x, y: None, *options)
        table: Dict[str, Any] = {
            signature: _self_entry(signature, options)
            for signature in template
        }
    else:
        table = _signatures_for(elop, *options)
        if isinstance(elop, TypedFunction):
            table.update(elop.signatures)

    logger.debug("Built matrix suite with %d signatures (scalar=%s)", len(table), scalar)
    return table


def _self_entry(signature: str, options: tuple):
    def builder(self: TypedFunction) -> Callable:
        return _signatures_for(self, *options)[signature]
    return refer_to_self(builder)
