"""
Tests for numpy and scipy.sparse interoperability.
"""

import numpy as np
import pytest

from matop import DenseMatrix, Kind, SparseMatrix, kind_of, matrix


class TestScipyInterop:
    """Test conversion from/to scipy.sparse."""

    def test_from_scipy(self, scipy_csc_matrix):
        """Test CSC arrays are taken over."""
        m = SparseMatrix.from_scipy(scipy_csc_matrix)
        assert m.shape == (3, 4)
        assert m.nnz == 6
        assert m.datatype == 'number'
        assert m.to_list() == [
            [1.0, 0, 2.0, 0],
            [0, 3.0, 0, 4.0],
            [5.0, 0, 0, 6.0],
        ]

    def test_from_csr(self, requires_scipy):
        """Test other scipy formats are converted to CSC."""
        import scipy.sparse as sp
        csr = sp.csr_matrix(np.array([[0, 1], [2, 0]]))
        m = SparseMatrix.from_scipy(csr)
        assert m.ptr == [0, 1, 2]
        assert m.index == [1, 0]
        assert m.values == [2, 1]

    def test_to_scipy(self, scipy_csc_matrix):
        """Test conversion back preserves every entry."""
        back = SparseMatrix.from_scipy(scipy_csc_matrix).to_scipy()
        np.testing.assert_array_equal(back.toarray(), scipy_csc_matrix.toarray())

    def test_matrix_constructor(self, scipy_csc_matrix):
        """Test matrix() keeps scipy input sparse unless told otherwise."""
        assert isinstance(matrix(scipy_csc_matrix), SparseMatrix)
        assert isinstance(matrix(scipy_csc_matrix, 'dense'), DenseMatrix)

    def test_not_sparse(self, requires_scipy):
        with pytest.raises(TypeError):
            SparseMatrix.from_scipy(np.eye(2))

    def test_functions_on_converted(self, fns, scipy_csc_matrix):
        """Test a converted matrix flows through the function catalogue."""
        m = SparseMatrix.from_scipy(scipy_csc_matrix)
        result = fns.add(m, m)
        assert isinstance(result, SparseMatrix)
        np.testing.assert_allclose(result.to_scipy().toarray(), 2 * scipy_csc_matrix.toarray())


class TestNumpyInterop:
    """Test conversion from/to numpy."""

    def test_from_numpy(self):
        """Test datatype inference from the dtype."""
        assert DenseMatrix.from_numpy(np.array([[1, 2]])).datatype == 'number'
        assert DenseMatrix.from_numpy(np.array([1.5])).datatype == 'number'
        assert DenseMatrix.from_numpy(np.array([True])).datatype == 'boolean'
        assert DenseMatrix.from_numpy(np.array([1j])).datatype == 'Complex'

    def test_to_numpy(self, dense_a):
        np.testing.assert_array_equal(
            dense_a.to_numpy(), np.array([[1, 0, 2], [0, 3, 0], [4, 0, 5]]))

    def test_matrix_constructor(self):
        """Test matrix() on arrays."""
        m = matrix(np.array([[1.0, 0.0], [0.0, 2.0]]), 'sparse')
        assert isinstance(m, SparseMatrix)
        assert m.nnz == 2

    def test_numpy_scalars(self, fns):
        """Test numpy scalars dispatch as numbers and booleans."""
        assert kind_of(np.float64(1.5)) is Kind.NUMBER
        assert kind_of(np.int64(3)) is Kind.NUMBER
        assert kind_of(np.bool_(True)) is Kind.BOOLEAN
        assert fns.add(np.float64(1.5), 2) == pytest.approx(3.5)
        assert fns.larger(np.int64(3), 2) is True
