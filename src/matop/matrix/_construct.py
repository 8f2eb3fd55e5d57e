"""
Matrix constructors.
"""

from typing import Any, Optional, Sequence

from .._config import DEFAULT_CONFIG, Config
from .._errors import InvalidArgument
from .._numeric import numeric_tower, zero_of
from ._base import MatrixBase, StorageFormat
from ._dense import DenseMatrix
from ._sparse import SparseMatrix

__all__ = ['matrix', 'sparse', 'zeros', 'zeros_like', 'full']


def _is_numpy_array(data: Any) -> bool:
    return type(data).__module__ == 'numpy' and hasattr(data, 'dtype')


def _is_scipy_sparse(data: Any) -> bool:
    return type(data).__module__.startswith('scipy.sparse')


def matrix(
    data: Any = None,
    storage: Optional[str] = None,
    datatype: Optional[str] = None,
    config: Optional[Config] = None,
) -> MatrixBase:
    """
    Create a matrix.

    Args:
        data: Nested list/tuple, DenseMatrix, SparseMatrix, numpy array or
            scipy sparse matrix.
        storage: 'dense' or 'sparse'. Defaults to the storage of a matrix
            argument, otherwise to config.matrix.storage.
        datatype: Optional scalar type name of all elements.
        config: Configuration providing the default storage and the zero test
            used when building sparse storage.

    Returns:
        DenseMatrix or SparseMatrix.

    Example:
        >>> matrix([[1, 0], [0, 1]], 'sparse').nnz
        2
    """
    config = config or DEFAULT_CONFIG
    if storage is None:
        if isinstance(data, MatrixBase):
            storage = data.storage()
        elif _is_scipy_sparse(data):
            storage = StorageFormat.SPARSE
        else:
            storage = config.matrix.storage
    if storage not in (StorageFormat.DENSE, StorageFormat.SPARSE):
        raise InvalidArgument(f"Unknown matrix storage: {storage!r}")

    if _is_scipy_sparse(data):
        result: MatrixBase = SparseMatrix.from_scipy(data, datatype)
    elif _is_numpy_array(data):
        result = DenseMatrix.from_numpy(data, datatype)
    elif isinstance(data, MatrixBase):
        if datatype is None or datatype == data.datatype:
            result = data.clone()
        else:
            result = DenseMatrix(data, datatype)
    else:
        result = DenseMatrix(data, datatype)

    if storage == StorageFormat.SPARSE and isinstance(result, DenseMatrix):
        return SparseMatrix.from_dense(result, datatype=result.datatype,
                                       is_zero=numeric_tower(config).is_zero)
    if storage == StorageFormat.DENSE and isinstance(result, SparseMatrix):
        return result.to_dense()
    return result


def sparse(data: Any = None, datatype: Optional[str] = None, config: Optional[Config] = None) -> SparseMatrix:
    """Create a sparse matrix (see matrix())."""
    return matrix(data, StorageFormat.SPARSE, datatype, config)


def zeros(shape: Sequence[int], storage: str = StorageFormat.DENSE, datatype: Optional[str] = None) -> MatrixBase:
    """
    All-zero matrix.

    Dense cells hold the datatype's zero (0 when there is none); a sparse
    result has no explicit entries.
    """
    if storage == StorageFormat.SPARSE:
        return SparseMatrix.empty(tuple(shape), datatype)
    zero = zero_of(datatype)
    return DenseMatrix.filled(shape, 0 if zero is None else zero, datatype)


def zeros_like(m: MatrixBase) -> MatrixBase:
    """All-zero matrix with the shape, storage and datatype of m."""
    return zeros(m.shape, m.storage(), m.datatype)


def full(shape: Sequence[int], value: Any, datatype: Optional[str] = None) -> DenseMatrix:
    """Dense matrix with every cell set to value."""
    return DenseMatrix.filled(shape, value, datatype)
