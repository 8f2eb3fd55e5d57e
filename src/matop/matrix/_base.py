"""
Matrix Base Class

Defines the accessor interface shared by DenseMatrix and SparseMatrix. The
elementwise algorithms rely only on this interface plus the storage-specific
attributes documented on each subclass.

Type Hierarchy:

    MatrixBase (ABC)
    ├── DenseMatrix  - nested lists, N-dimensional
    └── SparseMatrix - compressed sparse column, 2-dimensional
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple

__all__ = ['MatrixBase', 'StorageFormat']


class StorageFormat:
    """Enumeration of matrix storage formats."""
    DENSE = 'dense'
    SPARSE = 'sparse'


class MatrixBase(ABC):
    """
    Abstract base class for matrices.

    Required Properties (subclasses must implement):
        shape: Dimension sizes
        datatype: Optional scalar type name of all elements

    Required Methods (subclasses must implement):
        storage(): 'dense' or 'sparse'
        get(index): Element at an index
        clone(): Independent copy
        to_list(): Nested list copy of all elements
        map(fn): Elementwise map into a new matrix
    """

    # =========================================================================
    # Abstract Interface
    # =========================================================================

    @property
    @abstractmethod
    def shape(self) -> Tuple[int, ...]:
        """Dimension sizes."""
        ...

    @property
    @abstractmethod
    def datatype(self) -> Optional[str]:
        """Scalar type name shared by all elements, or None."""
        ...

    @abstractmethod
    def storage(self) -> str:
        """Storage format ('dense' or 'sparse')."""
        ...

    @abstractmethod
    def get(self, index: Tuple[int, ...]) -> Any:
        """Element at index."""
        ...

    @abstractmethod
    def clone(self) -> "MatrixBase":
        """Independent copy sharing no storage with this matrix."""
        ...

    @abstractmethod
    def to_list(self) -> List:
        """All elements as a (new) nested list."""
        ...

    @abstractmethod
    def map(self, fn: Callable[[Any], Any]) -> "MatrixBase":
        """Apply fn elementwise, returning a new matrix of the same storage."""
        ...

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    @property
    def size(self) -> int:
        """Total number of cells."""
        total = 1
        for n in self.shape:
            total *= n
        return total

    def value_of(self) -> List:
        """Nested list of all elements."""
        return self.to_list()

    def _check_index(self, index: Tuple[int, ...]) -> Tuple[int, ...]:
        if isinstance(index, int):
            index = (index,)
        index = tuple(index)
        if len(index) != self.ndim:
            raise IndexError(
                f"Index {list(index)} does not match matrix dimensions {list(self.shape)}"
            )
        for i, n in zip(index, self.shape):
            if not 0 <= i < n:
                raise IndexError(f"Index {list(index)} out of range for shape {list(self.shape)}")
        return index

    def __repr__(self) -> str:
        dt = f", datatype={self.datatype!r}" if self.datatype else ""
        return f"{type(self).__name__}({self.to_list()!r}{dt})"
