"""
Sparse Matrix (Compressed Sparse Column)

Two-dimensional matrix storing only explicit entries:

    values[k]  value of the k-th explicit entry
    index[k]   row of the k-th explicit entry
    ptr[j]     offset of the first entry of column j (len(ptr) == columns + 1)

Entries of column j are values[ptr[j]:ptr[j + 1]], with strictly increasing
rows. Absent cells are implicitly the zero of the matrix datatype. An entry
stored with a zero value is still explicit: traversals visit it.

Example:
    >>> s = SparseMatrix.from_dense([[5, 0], [0, 3]])
    >>> s.values, s.index, s.ptr
    ([5, 3], [0, 1], [0, 1, 2])
    >>> s.density()
    0.5
"""

from bisect import bisect_left
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from .._config import DEFAULT_CONFIG
from .._errors import DimensionMismatch, InvalidArgument
from .._numeric import numeric_tower, zero_of
from .._typing import Kind, register_class
from ._base import MatrixBase, StorageFormat
from ._dense import DenseMatrix, datatype_of_dtype

__all__ = ['SparseMatrix']


def _default_is_zero() -> Callable[[Any], bool]:
    return numeric_tower(DEFAULT_CONFIG).is_zero


class SparseMatrix(MatrixBase):
    """
    Sparse matrix in compressed sparse column layout.

    Args:
        values: Explicit entry values.
        index: Row index of each entry.
        ptr: Column pointers, length columns + 1.
        shape: (rows, columns).
        datatype: Optional scalar type name of all elements.

    Raises:
        InvalidArgument: If the arrays violate the CSC invariants.
        DimensionMismatch: If shape is not two-dimensional.
    """

    __slots__ = ('_values', '_index', '_ptr', '_shape', '_datatype')

    def __init__(
        self,
        values: Sequence[Any],
        index: Sequence[int],
        ptr: Sequence[int],
        shape: Tuple[int, int],
        datatype: Optional[str] = None,
    ):
        shape = tuple(shape)
        if len(shape) != 2:
            raise DimensionMismatch(len(shape), 2, "Sparse matrices must be two-dimensional")
        self._values = list(values)
        self._index = [int(i) for i in index]
        self._ptr = [int(p) for p in ptr]
        self._shape = (int(shape[0]), int(shape[1]))
        self._datatype = datatype
        self._validate()

    @classmethod
    def _new(
        cls,
        values: List[Any],
        index: List[int],
        ptr: List[int],
        shape: Tuple[int, int],
        datatype: Optional[str] = None,
    ) -> "SparseMatrix":
        """Wrap freshly built arrays without copying or validating."""
        m = cls.__new__(cls)
        m._values = values
        m._index = index
        m._ptr = ptr
        m._shape = (shape[0], shape[1])
        m._datatype = datatype
        return m

    def _validate(self) -> None:
        """Check the CSC invariants."""
        rows, cols = self._shape
        if rows < 0 or cols < 0:
            raise InvalidArgument(f"Invalid shape: {list(self._shape)}")
        ptr, index = self._ptr, self._index
        if len(ptr) != cols + 1:
            raise InvalidArgument(f"ptr size mismatch: expected {cols + 1}, got {len(ptr)}")
        if ptr[0] != 0:
            raise InvalidArgument(f"ptr must start at 0, got {ptr[0]}")
        if len(index) != len(self._values) or ptr[-1] != len(index):
            raise InvalidArgument(
                f"Inconsistent sizes: {len(self._values)} values, {len(index)} row indices, "
                f"ptr ends at {ptr[-1]}"
            )
        for j in range(cols):
            start, end = ptr[j], ptr[j + 1]
            if end < start:
                raise InvalidArgument(f"ptr must be non-decreasing (column {j})")
            previous = -1
            for k in range(start, end):
                i = index[k]
                if not 0 <= i < rows:
                    raise InvalidArgument(f"Row index {i} out of range in column {j}")
                if i <= previous:
                    raise InvalidArgument(f"Row indices must be strictly increasing in column {j}")
                previous = i

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_dense(
        cls,
        dense: Any,
        datatype: Optional[str] = None,
        is_zero: Optional[Callable[[Any], bool]] = None,
    ) -> "SparseMatrix":
        """
        Create from 2-D nested data or a DenseMatrix, dropping zero cells.

        Args:
            dense: Nested list [rows][cols] or DenseMatrix.
            datatype: Datatype of the result (defaults to the DenseMatrix's).
            is_zero: Zero test (defaults to the default configuration's).
        """
        if not isinstance(dense, DenseMatrix):
            dense = DenseMatrix(dense)
        if dense.ndim != 2:
            raise DimensionMismatch(dense.ndim, 2, "Sparse matrices must be two-dimensional")
        if datatype is None:
            datatype = dense.datatype
        if is_zero is None:
            is_zero = _default_is_zero()

        rows, cols = dense.shape
        data = dense.data
        values: List[Any] = []
        index: List[int] = []
        ptr = [0]
        for j in range(cols):
            for i in range(rows):
                value = data[i][j]
                if not is_zero(value):
                    values.append(value)
                    index.append(i)
            ptr.append(len(values))
        return cls._new(values, index, ptr, (rows, cols), datatype)

    @classmethod
    def from_triplets(
        cls,
        triplets: Iterable[Tuple[Any, int, int]],
        shape: Tuple[int, int],
        datatype: Optional[str] = None,
    ) -> "SparseMatrix":
        """
        Create from (value, row, column) triplets in any order.

        Every triplet becomes an explicit entry, zero values included.

        Raises:
            InvalidArgument: On out of range or duplicate coordinates.
        """
        rows, cols = shape
        entries = sorted(((int(j), int(i), v) for v, i, j in triplets), key=lambda e: (e[0], e[1]))
        values: List[Any] = []
        index: List[int] = []
        ptr = [0] * (cols + 1)
        previous = None
        for j, i, v in entries:
            if not (0 <= i < rows and 0 <= j < cols):
                raise InvalidArgument(f"Index [{i}, {j}] out of range for shape {[rows, cols]}")
            if previous == (j, i):
                raise InvalidArgument(f"Duplicate entry at [{i}, {j}]")
            previous = (j, i)
            values.append(v)
            index.append(i)
            ptr[j + 1] += 1
        for j in range(cols):
            ptr[j + 1] += ptr[j]
        return cls._new(values, index, ptr, (rows, cols), datatype)

    @classmethod
    def empty(cls, shape: Tuple[int, int], datatype: Optional[str] = None) -> "SparseMatrix":
        """All-zero sparse matrix (no explicit entries)."""
        rows, cols = int(shape[0]), int(shape[1])
        if rows < 0 or cols < 0:
            raise InvalidArgument(f"Invalid shape: {[rows, cols]}")
        return cls._new([], [], [0] * (cols + 1), (rows, cols), datatype)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        return self._shape

    @property
    def datatype(self) -> Optional[str]:
        return self._datatype

    @property
    def values(self) -> List[Any]:
        """Explicit entry values (read-only by convention)."""
        return self._values

    @property
    def index(self) -> List[int]:
        """Row index of each entry (read-only by convention)."""
        return self._index

    @property
    def ptr(self) -> List[int]:
        """Column pointers (read-only by convention)."""
        return self._ptr

    @property
    def rows(self) -> int:
        return self._shape[0]

    @property
    def cols(self) -> int:
        return self._shape[1]

    @property
    def nnz(self) -> int:
        """Number of explicit entries."""
        return len(self._values)

    def storage(self) -> str:
        return StorageFormat.SPARSE

    def density(self) -> float:
        """Explicit entries / cells (0 for a matrix without cells)."""
        total = self.size
        return self.nnz / total if total > 0 else 0.0

    @property
    def zero(self) -> Any:
        """Value of absent cells."""
        zero = zero_of(self._datatype)
        return 0 if zero is None else zero

    # =========================================================================
    # Element Access
    # =========================================================================

    def _find(self, i: int, j: int) -> Tuple[int, bool]:
        """Position of row i in column j, and whether it is present."""
        start, end = self._ptr[j], self._ptr[j + 1]
        k = bisect_left(self._index, i, start, end)
        return k, k < end and self._index[k] == i

    def get(self, index: Tuple[int, int]) -> Any:
        i, j = self._check_index(index)
        k, found = self._find(i, j)
        return self._values[k] if found else self.zero

    def set(
        self,
        index: Tuple[int, int],
        value: Any,
        is_zero: Optional[Callable[[Any], bool]] = None,
    ) -> "SparseMatrix":
        """
        Set the element at index in place. Returns self.

        A zero value removes the entry; anything else inserts or replaces.
        """
        i, j = self._check_index(index)
        if is_zero is None:
            is_zero = _default_is_zero()
        k, found = self._find(i, j)
        if is_zero(value):
            if found:
                del self._values[k]
                del self._index[k]
                for c in range(j + 1, len(self._ptr)):
                    self._ptr[c] -= 1
            return self
        if found:
            self._values[k] = value
        else:
            self._values.insert(k, value)
            self._index.insert(k, i)
            for c in range(j + 1, len(self._ptr)):
                self._ptr[c] += 1
        return self

    # =========================================================================
    # Iteration
    # =========================================================================

    def iter_entries(self) -> Iterator[Tuple[Any, int, int]]:
        """Yield (value, row, column) of explicit entries, column-major."""
        values, index, ptr = self._values, self._index, self._ptr
        for j in range(self._shape[1]):
            for k in range(ptr[j], ptr[j + 1]):
                yield values[k], index[k], j

    def iter_column(self, j: int) -> Iterator[Tuple[int, Any]]:
        """Yield (row, value) of the explicit entries of column j."""
        if not 0 <= j < self._shape[1]:
            raise IndexError(f"Column {j} out of range for shape {list(self._shape)}")
        for k in range(self._ptr[j], self._ptr[j + 1]):
            yield self._index[k], self._values[k]

    # =========================================================================
    # Conversion
    # =========================================================================

    def clone(self) -> "SparseMatrix":
        return SparseMatrix._new(
            list(self._values), list(self._index), list(self._ptr), self._shape, self._datatype
        )

    def to_dense(self) -> DenseMatrix:
        rows, cols = self._shape
        zero = self.zero
        data = [[zero] * cols for _ in range(rows)]
        for value, i, j in self.iter_entries():
            data[i][j] = value
        return DenseMatrix._new(data, self._shape, self._datatype)

    def to_sparse(self, is_zero: Optional[Callable[[Any], bool]] = None) -> "SparseMatrix":
        return self

    def to_list(self) -> List:
        return self.to_dense().value_of()

    def map(self, fn: Callable[[Any], Any], is_zero: Optional[Callable[[Any], bool]] = None) -> "SparseMatrix":
        """
        Apply fn to explicit entries only; results that are zero are dropped.

        Absent cells are not visited, so fn(0) is assumed to be 0.
        """
        if is_zero is None:
            is_zero = _default_is_zero()
        values: List[Any] = []
        index: List[int] = []
        ptr = [0]
        for j in range(self._shape[1]):
            for k in range(self._ptr[j], self._ptr[j + 1]):
                value = fn(self._values[k])
                if not is_zero(value):
                    values.append(value)
                    index.append(self._index[k])
            ptr.append(len(values))
        return SparseMatrix._new(values, index, ptr, self._shape, self._datatype)

    def to_scipy(self):
        """Convert to scipy.sparse.csc_matrix (explicit zeros are kept)."""
        import numpy as np
        import scipy.sparse as sp

        return sp.csc_matrix(
            (np.asarray(self._values), np.asarray(self._index, dtype=np.int64),
             np.asarray(self._ptr, dtype=np.int64)),
            shape=self._shape,
        )

    @classmethod
    def from_scipy(cls, mat: Any, datatype: Optional[str] = None) -> "SparseMatrix":
        """
        Create from any scipy sparse matrix or array.

        Stored zeros stay explicit. The datatype is inferred from the dtype
        when not given.
        """
        import scipy.sparse as sp

        if not sp.issparse(mat):
            raise TypeError(f"Expected a scipy sparse matrix, got {type(mat).__name__}")
        csc = sp.csc_matrix(mat, copy=True)
        csc.sum_duplicates()
        csc.sort_indices()
        if datatype is None:
            datatype = datatype_of_dtype(csc.dtype)
        return cls._new(
            csc.data.tolist(), csc.indices.tolist(), csc.indptr.tolist(), csc.shape, datatype
        )

    # =========================================================================
    # Comparison
    # =========================================================================

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return (
            self._shape == other._shape
            and self._ptr == other._ptr
            and self._index == other._index
            and self._values == other._values
        )

    __hash__ = None

    def __repr__(self) -> str:
        dt = f", datatype={self._datatype!r}" if self._datatype else ""
        return f"SparseMatrix(shape={list(self._shape)}, nnz={self.nnz}{dt})"


register_class(SparseMatrix, Kind.SPARSE_MATRIX)
