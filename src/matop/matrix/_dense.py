"""
Dense Matrix

Nested list storage with an explicit shape. Any number of dimensions (at
least one); every cell holds a value.

Example:
    >>> m = DenseMatrix([[1, 2, 3], [4, 5, 6]])
    >>> m.shape
    (2, 3)
    >>> m.get((1, 2))
    6
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple

from .._errors import DimensionMismatch
from .._typing import Kind, register_class
from ._base import MatrixBase, StorageFormat

__all__ = ['DenseMatrix', 'datatype_of_dtype']


# numpy dtype.kind -> datatype name
_DTYPE_KINDS = {
    'b': Kind.BOOLEAN.value,
    'i': Kind.NUMBER.value,
    'u': Kind.NUMBER.value,
    'f': Kind.NUMBER.value,
    'c': Kind.COMPLEX.value,
}


def datatype_of_dtype(dtype: Any) -> Optional[str]:
    """Datatype name matching a numpy dtype, or None."""
    return _DTYPE_KINDS.get(dtype.kind)


def _infer_shape(data: Sequence) -> Tuple[int, ...]:
    """Shape of nested data, following the first element at each level."""
    shape = []
    level: Any = data
    while isinstance(level, (list, tuple)):
        shape.append(len(level))
        if not level:
            break
        level = level[0]
    return tuple(shape)


def _copy_validated(data: Sequence, shape: Tuple[int, ...], dim: int = 0) -> List:
    """Deep copy nested data into lists, rejecting ragged nesting."""
    if len(data) != shape[dim]:
        raise DimensionMismatch(len(data), shape[dim])
    if dim == len(shape) - 1:
        for value in data:
            if isinstance(value, (list, tuple)):
                raise DimensionMismatch(
                    len(shape) + 1, len(shape),
                    f"Dimension mismatch: nested data deeper than {len(shape)} dimensions",
                )
        return list(data)
    copied = []
    for child in data:
        if not isinstance(child, (list, tuple)):
            raise DimensionMismatch(
                dim + 1, len(shape),
                f"Dimension mismatch: scalar found at depth {dim + 1} of {len(shape)}",
            )
        copied.append(_copy_validated(child, shape, dim + 1))
    return copied


def _deep_copy(data: List, depth: int) -> List:
    if depth <= 1:
        return list(data)
    return [_deep_copy(child, depth - 1) for child in data]


def _deep_map(data: List, fn: Callable[[Any], Any], depth: int) -> List:
    if depth <= 1:
        return [fn(value) for value in data]
    return [_deep_map(child, fn, depth - 1) for child in data]


def _filled(shape: Tuple[int, ...], value: Any) -> List:
    if len(shape) == 1:
        return [value] * shape[0]
    return [_filled(shape[1:], value) for _ in range(shape[0])]


class DenseMatrix(MatrixBase):
    """
    Dense N-dimensional matrix.

    Args:
        data: Nested list/tuple data, or another matrix to copy.
        datatype: Optional scalar type name of all elements ('number',
            'BigNumber', ...).

    Raises:
        DimensionMismatch: If the nesting is ragged.

    Attributes:
        data: Internal nested lists (read-only by convention).
    """

    __slots__ = ('_data', '_shape', '_datatype')

    def __init__(self, data: Any = None, datatype: Optional[str] = None):
        if data is None:
            data = []
        if isinstance(data, MatrixBase):
            source = data if isinstance(data, DenseMatrix) else data.to_dense()
            self._data = _deep_copy(source._data, source.ndim)
            self._shape = source.shape
            self._datatype = datatype if datatype is not None else source.datatype
            return
        if not isinstance(data, (list, tuple)):
            raise TypeError(f"DenseMatrix data must be a nested list, got {type(data).__name__}")
        shape = _infer_shape(data)
        self._data = _copy_validated(data, shape)
        self._shape = shape
        self._datatype = datatype

    @classmethod
    def _new(cls, data: List, shape: Tuple[int, ...], datatype: Optional[str] = None) -> "DenseMatrix":
        """Wrap freshly built nested lists without copying or validating."""
        m = cls.__new__(cls)
        m._data = data
        m._shape = tuple(shape)
        m._datatype = datatype
        return m

    @classmethod
    def filled(cls, shape: Sequence[int], value: Any, datatype: Optional[str] = None) -> "DenseMatrix":
        """Dense matrix of the given shape with every cell set to value."""
        shape = tuple(int(n) for n in shape)
        if not shape or any(n < 0 for n in shape):
            raise DimensionMismatch(shape, "non-negative sizes", f"Invalid shape: {list(shape)}")
        return cls._new(_filled(shape, value), shape, datatype)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def datatype(self) -> Optional[str]:
        return self._datatype

    @property
    def data(self) -> List:
        return self._data

    def storage(self) -> str:
        return StorageFormat.DENSE

    # =========================================================================
    # Element Access
    # =========================================================================

    def get(self, index: Tuple[int, ...]) -> Any:
        index = self._check_index(index)
        value: Any = self._data
        for i in index:
            value = value[i]
        return value

    def set(self, index: Tuple[int, ...], value: Any) -> "DenseMatrix":
        """Set the element at index in place. Returns self."""
        index = self._check_index(index)
        target = self._data
        for i in index[:-1]:
            target = target[i]
        target[index[-1]] = value
        return self

    # =========================================================================
    # Conversion
    # =========================================================================

    def clone(self) -> "DenseMatrix":
        return DenseMatrix._new(_deep_copy(self._data, self.ndim), self._shape, self._datatype)

    def to_list(self) -> List:
        return _deep_copy(self._data, self.ndim)

    def value_of(self) -> List:
        """The internal nested list (no copy)."""
        return self._data

    def map(self, fn: Callable[[Any], Any]) -> "DenseMatrix":
        return DenseMatrix._new(_deep_map(self._data, fn, self.ndim), self._shape, self._datatype)

    def to_sparse(self, is_zero: Optional[Callable[[Any], bool]] = None) -> "MatrixBase":
        """Convert to SparseMatrix, dropping zero cells (2-D only)."""
        from ._sparse import SparseMatrix
        return SparseMatrix.from_dense(self, datatype=self._datatype, is_zero=is_zero)

    def to_dense(self) -> "DenseMatrix":
        return self

    def to_numpy(self, dtype: Any = None):
        """Convert to numpy.ndarray."""
        import numpy as np
        return np.array(self._data, dtype=dtype)

    @classmethod
    def from_numpy(cls, array: Any, datatype: Optional[str] = None) -> "DenseMatrix":
        """
        Create from a numpy array.

        The datatype is inferred from the array dtype when not given
        (integer/float -> 'number', bool -> 'boolean', complex -> 'Complex').
        """
        import numpy as np
        array = np.asarray(array)
        if array.ndim == 0:
            raise DimensionMismatch(0, 1, "Cannot create a matrix from a 0-d array")
        if datatype is None:
            datatype = datatype_of_dtype(array.dtype)
        return cls._new(array.tolist(), array.shape, datatype)

    # =========================================================================
    # Comparison
    # =========================================================================

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self._shape == other._shape and self._data == other._data

    __hash__ = None


register_class(DenseMatrix, Kind.DENSE_MATRIX)
