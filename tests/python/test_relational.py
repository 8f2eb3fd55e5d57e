"""
Tests for the relational functions.
"""

import math

import pytest
from decimal import Decimal
from fractions import Fraction

from matop import Config, DenseMatrix, DomainError, SparseMatrix, ToleranceConfig, create


class TestEqualScalar:
    """Test the nearly-equal scalar kernel."""

    def test_tolerance(self, fns):
        """Test rounding errors compare equal."""
        assert fns.equal_scalar(0.1 + 0.2, 0.3) is True
        assert fns.equal_scalar(1.0, 1.001) is False

    def test_nan_and_infinity(self, fns):
        """Test special values."""
        assert fns.equal_scalar(math.nan, math.nan) is False
        assert fns.equal_scalar(math.inf, math.inf) is True
        assert fns.equal_scalar(math.inf, 1e308) is False

    def test_kinds(self, fns):
        """Test other kinds."""
        assert fns.equal_scalar(Decimal('0.1'), Decimal('0.1000')) is True
        assert fns.equal_scalar(Fraction(1, 3), Fraction(2, 6)) is True
        assert fns.equal_scalar('a', 'a') is True
        assert fns.equal_scalar(None, None) is True


class TestCompare:
    """Test compare."""

    def test_numbers(self, fns):
        """Test the three outcomes."""
        assert fns.compare(2, 1) == 1
        assert fns.compare(1, 2) == -1
        assert fns.compare(0.1 + 0.2, 0.3) == 0

    def test_result_kind(self, fns):
        """Test the result keeps the operand kind."""
        assert fns.compare(Decimal(2), Decimal(1)) == Decimal(1)
        assert isinstance(fns.compare(Decimal(2), Decimal(1)), Decimal)
        assert isinstance(fns.compare(Fraction(1), Fraction(2)), Fraction)

    def test_nan(self, fns):
        """Test NaN operands."""
        assert math.isnan(fns.compare(math.nan, 1))

    def test_complex(self, fns):
        """Test complex numbers have no ordering."""
        with pytest.raises(DomainError):
            fns.compare(1j, 2j)

    def test_sparse(self, fns, sparse_a, sparse_b):
        """Test sparse compare stays sparse."""
        result = fns.compare(sparse_a, sparse_b)
        assert isinstance(result, SparseMatrix)
        assert result.to_list() == [[-1, 0, 1], [0, 1, -1], [-1, 0, -1]]


class TestEqual:
    """Test equal and unequal."""

    def test_scalars(self, fns):
        """Test scalar equality."""
        assert fns.equal(0.1 + 0.2, 0.3) is True
        assert fns.unequal(0.1 + 0.2, 0.3) is False
        assert fns.equal(None, 0) is False
        assert fns.unequal(None, 0) is True

    def test_sparse_is_dense(self, fns, sparse_a, sparse_b):
        """Test equal on sparse matrices is dense (absent cells are equal)."""
        result = fns.equal(sparse_a, sparse_b)
        assert isinstance(result, DenseMatrix)
        assert result.to_list() == [
            [False, True, False],
            [True, False, False],
            [False, True, False],
        ]

    def test_unequal_sparse(self, fns, sparse_a, sparse_b):
        """Test unequal on sparse matrices stays sparse."""
        result = fns.unequal(sparse_a, sparse_b)
        assert isinstance(result, SparseMatrix)
        assert result.nnz == 6

    def test_dense_scalar(self, fns, dense_a):
        """Test matrix == scalar."""
        assert fns.equal(dense_a, 0).to_list() == [
            [False, True, False],
            [True, False, True],
            [False, True, False],
        ]

    def test_custom_tolerance(self):
        """Test the tolerance comes from the configuration."""
        loose = create(Config(tolerance=ToleranceConfig(epsilon=1e-3)))
        assert loose.equal(1.0, 1.0005) is True
        assert create().equal(1.0, 1.0005) is False


class TestOrdering:
    """Test larger, larger_eq, smaller and smaller_eq."""

    def test_scalars(self, fns):
        """Test strict and non-strict comparisons."""
        assert fns.larger(2, 1) is True
        assert fns.larger(1, 1) is False
        assert fns.larger_eq(1, 1) is True
        assert fns.smaller(1, 2) is True
        assert fns.smaller_eq(2, 1) is False

    def test_nearly_equal_not_larger(self, fns):
        """Test values within tolerance are not ordered."""
        assert fns.larger(0.1 + 0.2, 0.3) is False
        assert fns.smaller(0.3, 0.1 + 0.2) is False
        assert fns.larger_eq(0.3, 0.1 + 0.2) is True

    def test_bignumber_and_fraction(self, fns):
        """Test ordering of exact kinds."""
        assert fns.larger(Decimal('0.3'), Decimal('0.2')) is True
        assert fns.smaller(Fraction(1, 3), Fraction(1, 2)) is True

    def test_strings(self, fns):
        """Test lexical ordering."""
        assert fns.larger('b', 'a') is True
        assert fns.smaller_eq('a', 'a') is True

    def test_complex(self, fns):
        """Test complex operands are rejected."""
        with pytest.raises(DomainError):
            fns.larger(1j, 1j)

    def test_nan(self, fns):
        """Test comparisons with NaN are false."""
        assert fns.larger(math.nan, 1) is False
        assert fns.smaller_eq(math.nan, 1) is False

    def test_sparse_storage(self, fns, sparse_a, sparse_b):
        """Test strict comparisons stay sparse, non-strict become dense."""
        larger = fns.larger(sparse_a, sparse_b)
        assert isinstance(larger, SparseMatrix)
        assert larger.to_list() == [[0, 0, 1], [0, 1, 0], [0, 0, 0]]
        larger_eq = fns.larger_eq(sparse_a, sparse_b)
        assert isinstance(larger_eq, DenseMatrix)
        assert larger_eq.get((0, 1)) is True

    def test_sparse_scalar(self, fns, sparse_a):
        """Test sparse x scalar comparisons are dense."""
        result = fns.smaller(sparse_a, 3)
        assert isinstance(result, DenseMatrix)
        assert result.to_list() == [
            [True, True, True],
            [True, False, True],
            [False, True, False],
        ]

    def test_arrays(self, fns):
        """Test nested lists."""
        assert fns.larger([[1, 5]], [[2, 2]]) == [[False, True]]
