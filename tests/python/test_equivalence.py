"""
Tests that operand storage never changes the result of a function.

Every binary elementwise function gives the same cells for dense, sparse
and nested-list operands in any combination, and a scalar operand behaves
like a dense matrix filled with it.
"""

import math

import pytest

from matop import FUNCTION_NAMES, DenseMatrix, SparseMatrix


# =============================================================================
# Operands
# =============================================================================

# Cells explicit in both, only in A, only in B and in neither
A = [[-8, 0, -3], [0, 0, -2]]
B = [[2, 1, 0], [0, 4, 3]]

# Fully populated, odd roots of both signs
ROOTS = [[3, -3, 1], [-1, 3, -3]]

# name -> (left, right, scalars, scalar may come first)
CASES = {
    'add': (A, B, (0, 2), True),
    'subtract': (A, B, (0, 2), True),
    'dot_multiply': (A, B, (0, 2), True),
    'dot_divide': (A, B, (0, 2), True),
    'dot_pow': (A, B, (0, 2), True),
    'mod': (A, B, (0, 3), False),
    'gcd': (A, B, (0, 2), True),
    'lcm': (A, B, (0, 2), True),
    'nth_root': (A, ROOTS, (3, -3), False),
    'bit_and': (A, B, (0, 2), True),
    'bit_or': (A, B, (0, 2), True),
    'bit_xor': (A, B, (0, 2), True),
    'right_arith_shift': (A, B, (0, 2), False),
    'right_log_shift': (A, B, (0, 2), True),
    'logical_and': (A, B, (0, 2), True),
    'logical_or': (A, B, (0, 2), True),
    'logical_xor': (A, B, (0, 2), True),
    'compare': (A, B, (0, 2), True),
    'equal': (A, B, (0, 2), True),
    'unequal': (A, B, (0, 2), True),
    'larger': (A, B, (0, 2), True),
    'larger_eq': (A, B, (0, 2), True),
    'smaller': (A, B, (0, 2), True),
    'smaller_eq': (A, B, (0, 2), True),
    'atan2': (A, B, (0, 2), True),
}

STORAGES = ('dense', 'sparse', 'array')


def as_storage(data, storage):
    if storage == 'dense':
        return DenseMatrix(data)
    if storage == 'sparse':
        return SparseMatrix.from_dense(data)
    return [list(row) for row in data]


def cells(result):
    return result if isinstance(result, list) else result.to_list()


def assert_same_cells(actual, expected):
    """Compare nested cells, treating NaN as equal to NaN."""
    assert len(actual) == len(expected)
    for got_row, want_row in zip(actual, expected):
        assert len(got_row) == len(want_row)
        for got, want in zip(got_row, want_row):
            if isinstance(want, float) and math.isnan(want):
                assert isinstance(got, float) and math.isnan(got)
            else:
                assert got == want


def full(shape, value):
    rows, cols = shape
    return [[value] * cols for _ in range(rows)]


# =============================================================================
# Tests
# =============================================================================

class TestCoverage:
    """Test the cases below cover the catalogue."""

    def test_every_matrix_function_has_a_case(self, fns):
        lifted = {
            name for name in FUNCTION_NAMES
            if 'SparseMatrix, SparseMatrix' in fns[name].signatures
        }
        assert lifted == set(CASES)


class TestStoragePairs:
    """Test every storage pair agrees with dense x dense."""

    @pytest.mark.parametrize("name", sorted(CASES))
    @pytest.mark.parametrize("left", STORAGES)
    @pytest.mark.parametrize("right", STORAGES)
    def test_matches_dense(self, fns, name, left, right):
        a, b, _, _ = CASES[name]
        fn = fns[name]
        expected = fn(DenseMatrix(a), DenseMatrix(b)).to_list()
        result = fn(as_storage(a, left), as_storage(b, right))
        assert_same_cells(cells(result), expected)


class TestBroadcast:
    """Test a scalar operand behaves like a filled dense matrix."""

    @pytest.mark.parametrize("name", sorted(CASES))
    @pytest.mark.parametrize("storage", ('dense', 'sparse'))
    def test_matrix_by_scalar(self, fns, name, storage):
        a, _, scalars, _ = CASES[name]
        fn = fns[name]
        shape = (len(a), len(a[0]))
        for s in scalars:
            expected = fn(DenseMatrix(a), DenseMatrix(full(shape, s))).to_list()
            assert_same_cells(cells(fn(as_storage(a, storage), s)), expected)

    @pytest.mark.parametrize("name", sorted(n for n in CASES if CASES[n][3]))
    @pytest.mark.parametrize("storage", ('dense', 'sparse'))
    def test_scalar_by_matrix(self, fns, name, storage):
        a, _, scalars, _ = CASES[name]
        fn = fns[name]
        shape = (len(a), len(a[0]))
        for s in scalars:
            expected = fn(DenseMatrix(full(shape, s)), DenseMatrix(a)).to_list()
            assert_same_cells(cells(fn(s, as_storage(a, storage))), expected)


class TestAbsentCells:
    """Test the fixed rules for absent sparse cells."""

    def test_dot_multiply_absent_cell_is_exact_zero(self, fns):
        """Test Infinity against an absent cell gives zero, unlike dense IEEE."""
        left = [[math.inf, 2]]
        right = [[0, 3]]
        dense = fns.dot_multiply(DenseMatrix(left), DenseMatrix(right)).to_list()
        assert math.isnan(dense[0][0])
        for storage in STORAGES:
            result = fns.dot_multiply(as_storage(left, storage), SparseMatrix.from_dense(right))
            assert cells(result) == [[0, 6]]

    def test_negative_root_of_absent_cell(self, fns):
        assert fns.nth_root(SparseMatrix.from_dense([[0, 8]]), -3).to_list() == [[math.inf, 0.5]]
