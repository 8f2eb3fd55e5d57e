"""
Tests for the trigonometric functions.
"""

import cmath
import math

import pytest
from decimal import Decimal

from matop import DenseMatrix, DomainError, NoMatchingSignature, SparseMatrix


class TestAtan2:
    """Test atan2."""

    def test_numbers(self, fns):
        assert fns.atan2(1, 1) == pytest.approx(math.pi / 4)
        assert fns.atan2(0, 0) == 0
        assert fns.atan2(-1, 0) == pytest.approx(-math.pi / 2)

    def test_bignumber(self, fns, requires_sympy):
        """Test BigNumber operands are evaluated at the configured precision."""
        result = fns.atan2(Decimal(1), Decimal(1))
        assert isinstance(result, Decimal)
        assert float(result) == pytest.approx(math.pi / 4, abs=1e-15)
        assert fns.atan2(Decimal(0), Decimal(0)) == Decimal(0)

    def test_mixed_kinds(self, fns):
        """Test there is no implicit conversion between number and BigNumber."""
        with pytest.raises(NoMatchingSignature):
            fns.atan2(1, Decimal(1))

    def test_sparse_sparse(self, fns):
        """Test the union traversal keeps the result sparse."""
        y = SparseMatrix.from_dense([[1, 0], [0, 0]])
        x = SparseMatrix.from_dense([[0, 0], [0, 1]])
        result = fns.atan2(y, x)
        assert isinstance(result, SparseMatrix)
        assert result.nnz == 1
        assert result.get((0, 0)) == pytest.approx(math.pi / 2)

    def test_dense_sparse(self, fns):
        """Test every cell is computed against a sparse operand."""
        result = fns.atan2(DenseMatrix([[1, -1]]), SparseMatrix.from_dense([[0, 0]]))
        assert isinstance(result, DenseMatrix)
        assert result.to_list()[0] == pytest.approx([math.pi / 2, -math.pi / 2])

    def test_sparse_scalar(self, fns):
        """Test absent cells are computed against the scalar."""
        result = fns.atan2(SparseMatrix.from_dense([[1, 0]]), 1)
        assert isinstance(result, DenseMatrix)
        assert result.to_list()[0] == pytest.approx([math.pi / 4, 0.0])


class TestReciprocalFunctions:
    """Test cot and csc."""

    def test_numbers(self, fns):
        assert fns.cot(2) == pytest.approx(-0.45765755436028577)
        assert fns.csc(2) == pytest.approx(1.099750170294617)

    def test_poles(self, fns):
        """Test zero denominators give signed infinity."""
        assert fns.cot(0) == math.inf
        assert fns.csc(-0.0) == -math.inf

    def test_complex(self, fns):
        assert fns.cot(1 + 1j) == pytest.approx(1 / cmath.tan(1 + 1j))
        assert fns.csc(1 + 1j) == pytest.approx(1 / cmath.sin(1 + 1j))

    def test_bignumber(self, fns, requires_sympy):
        result = fns.cot(Decimal('0.5'))
        assert isinstance(result, Decimal)
        assert float(result) == pytest.approx(1 / math.tan(0.5))

    def test_no_matrices(self, fns):
        """Test matrices are rejected."""
        with pytest.raises(NoMatchingSignature):
            fns.cot([[1]])

    def test_angles(self, fns, requires_sympy):
        """Test angle units are converted to radians."""
        from sympy.physics.units import degree, meter

        assert fns.cot(45 * degree) == pytest.approx(1.0)
        assert fns.csc(90 * degree) == pytest.approx(1.0)
        with pytest.raises(DomainError, match='must be an angle'):
            fns.cot(meter)
