"""
Tests for DenseMatrix, SparseMatrix and the constructors.
"""

import pytest
from decimal import Decimal

from matop import (
    DenseMatrix,
    DimensionMismatch,
    InvalidArgument,
    SparseMatrix,
    full,
    matrix,
    sparse,
    zeros,
    zeros_like,
)


class TestDenseMatrix:
    """Test dense storage."""

    def test_shape(self):
        """Test shape inference."""
        m = DenseMatrix([[1, 2, 3], [4, 5, 6]])
        assert m.shape == (2, 3)
        assert m.ndim == 2
        assert m.size == 6
        assert m.storage() == 'dense'

    def test_three_dimensions(self):
        """Test N-dimensional data."""
        m = DenseMatrix([[[1, 2], [3, 4]], [[5, 6], [7, 8]]])
        assert m.shape == (2, 2, 2)
        assert m.get((1, 0, 1)) == 6

    def test_ragged_rejected(self):
        """Test ragged nesting raises DimensionMismatch."""
        with pytest.raises(DimensionMismatch):
            DenseMatrix([[1, 2], [3]])
        with pytest.raises(DimensionMismatch):
            DenseMatrix([[1, 2], 3])

    def test_copies_input(self):
        """Test construction copies the nested lists."""
        data = [[1, 2], [3, 4]]
        m = DenseMatrix(data)
        data[0][0] = 99
        assert m.get((0, 0)) == 1

    def test_get_set(self):
        """Test element access."""
        m = DenseMatrix([[1, 2], [3, 4]])
        m.set((1, 0), 30)
        assert m.get((1, 0)) == 30
        with pytest.raises(IndexError):
            m.get((2, 0))
        with pytest.raises(IndexError):
            m.get((0,))

    def test_clone_independent(self):
        """Test clones share no storage."""
        m = DenseMatrix([[1, 2], [3, 4]])
        c = m.clone()
        c.set((0, 0), 10)
        assert m.get((0, 0)) == 1
        assert c == DenseMatrix([[10, 2], [3, 4]])

    def test_map_keeps_datatype(self):
        """Test elementwise map."""
        m = DenseMatrix([[1, 2], [3, 4]], datatype='number')
        doubled = m.map(lambda x: x * 2)
        assert doubled.to_list() == [[2, 4], [6, 8]]
        assert doubled.datatype == 'number'

    def test_not_a_list(self):
        """Test non-list data is rejected."""
        with pytest.raises(TypeError):
            DenseMatrix(5)


class TestSparseMatrix:
    """Test CSC storage."""

    def test_from_dense(self, sparse_a):
        """Test column-major compression."""
        assert sparse_a.values == [1, 4, 3, 2, 5]
        assert sparse_a.index == [0, 2, 1, 0, 2]
        assert sparse_a.ptr == [0, 2, 3, 5]
        assert sparse_a.nnz == 5
        assert sparse_a.density() == pytest.approx(5 / 9)

    def test_to_dense(self, sparse_a, dense_a):
        """Test decompression restores the dense matrix."""
        assert sparse_a.to_dense() == dense_a
        assert sparse_a.to_list() == dense_a.to_list()

    def test_get(self, sparse_a):
        """Test element access of explicit and absent cells."""
        assert sparse_a.get((2, 0)) == 4
        assert sparse_a.get((1, 0)) == 0

    def test_set_insert_and_remove(self, sparse_a):
        """Test in-place updates keep the invariants."""
        sparse_a.set((1, 0), 7)
        assert sparse_a.get((1, 0)) == 7
        assert sparse_a.ptr == [0, 3, 4, 6]
        sparse_a.set((0, 0), 0)
        assert sparse_a.get((0, 0)) == 0
        assert sparse_a.nnz == 5
        assert sparse_a.index[:2] == [1, 2]

    def test_validation(self):
        """Test malformed arrays are rejected."""
        with pytest.raises(InvalidArgument):
            SparseMatrix([1, 2], [0, 1], [0, 1], (2, 2))
        with pytest.raises(InvalidArgument):
            SparseMatrix([1, 2], [1, 0], [0, 2, 2], (2, 2))
        with pytest.raises(InvalidArgument):
            SparseMatrix([1], [5], [0, 1, 1], (2, 2))
        with pytest.raises(DimensionMismatch):
            SparseMatrix([], [], [0], (1, 1, 1))

    def test_explicit_zero_kept(self):
        """Test an explicitly stored zero stays an entry."""
        s = SparseMatrix([0, 5], [0, 1], [0, 1, 2], (2, 2))
        assert s.nnz == 2
        assert s.to_list() == [[0, 0], [0, 5]]

    def test_from_triplets(self):
        """Test building from unordered triplets."""
        s = SparseMatrix.from_triplets([(3, 1, 1), (1, 0, 0), (2, 1, 0)], (2, 2))
        assert s.to_list() == [[1, 0], [2, 3]]
        with pytest.raises(InvalidArgument):
            SparseMatrix.from_triplets([(1, 0, 0), (2, 0, 0)], (2, 2))

    def test_map_skips_absent(self, sparse_a):
        """Test map visits explicit entries only."""
        seen = []
        result = sparse_a.map(lambda x: seen.append(x) or x * 10)
        assert sorted(seen) == [1, 2, 3, 4, 5]
        assert result.to_list() == [[10, 0, 20], [0, 30, 0], [40, 0, 50]]

    def test_iter_entries(self, sparse_a):
        """Test column-major iteration."""
        assert list(sparse_a.iter_entries())[:2] == [(1, 0, 0), (4, 2, 0)]
        assert list(sparse_a.iter_column(2)) == [(0, 2), (2, 5)]

    def test_zero_of_datatype(self):
        """Test absent cells use the datatype's zero."""
        s = SparseMatrix.empty((1, 2), datatype='BigNumber')
        assert s.get((0, 1)) == Decimal(0)
        assert isinstance(s.get((0, 1)), Decimal)

    def test_equality(self, sparse_a):
        """Test structural equality."""
        assert sparse_a == sparse_a.clone()
        assert sparse_a != SparseMatrix.empty((3, 3))


class TestConstructors:
    """Test matrix construction helpers."""

    def test_matrix_default_dense(self):
        """Test dense is the default storage."""
        assert isinstance(matrix([[1, 2]]), DenseMatrix)

    def test_matrix_sparse(self):
        """Test sparse storage from nested lists."""
        s = matrix([[1, 0], [0, 1]], 'sparse')
        assert isinstance(s, SparseMatrix)
        assert s.nnz == 2
        assert isinstance(sparse([[1, 0]]), SparseMatrix)

    def test_matrix_converts_storage(self, sparse_a, dense_a):
        """Test conversion between storages."""
        assert matrix(sparse_a, 'dense') == dense_a
        assert matrix(dense_a, 'sparse') == sparse_a

    def test_matrix_keeps_storage(self, sparse_a):
        """Test a matrix argument keeps its storage by default."""
        copy = matrix(sparse_a)
        assert isinstance(copy, SparseMatrix)
        assert copy is not sparse_a

    def test_unknown_storage(self):
        """Test invalid storage names."""
        with pytest.raises(ValueError):
            matrix([[1]], 'diagonal')

    def test_zeros(self):
        """Test all-zero matrices."""
        assert zeros((2, 2)).to_list() == [[0, 0], [0, 0]]
        z = zeros((2, 3), 'sparse')
        assert isinstance(z, SparseMatrix)
        assert z.nnz == 0
        assert zeros((1, 1), datatype='Fraction').get((0, 0)) == 0

    def test_zeros_like(self, sparse_a):
        """Test zeros with another matrix's shape and storage."""
        z = zeros_like(sparse_a)
        assert isinstance(z, SparseMatrix)
        assert z.shape == (3, 3)

    def test_full(self):
        """Test constant matrices."""
        assert full((2, 2), 7).to_list() == [[7, 7], [7, 7]]
