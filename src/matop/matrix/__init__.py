"""
Matrix storage and elementwise traversal.

    DenseMatrix   nested lists, N-dimensional
    SparseMatrix  compressed sparse column, 2-dimensional
    algorithms    elementwise traversals for every storage pair, and the
                  suite builder lifting a scalar kernel to matrices
"""

from ._base import MatrixBase, StorageFormat
from ._construct import full, matrix, sparse, zeros, zeros_like
from ._dense import DenseMatrix
from ._sparse import SparseMatrix

__all__ = [
    'MatrixBase',
    'StorageFormat',
    'DenseMatrix',
    'SparseMatrix',
    'matrix',
    'sparse',
    'zeros',
    'zeros_like',
    'full',
]
