"""
Pytest configuration and shared fixtures for matop tests.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from matop import DenseMatrix, SparseMatrix, create  # noqa: E402

# Try to import scipy
try:
    import scipy.sparse as sp
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False

# Try to import sympy
try:
    import sympy  # noqa: F401
    HAS_SYMPY = True
except ImportError:
    HAS_SYMPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture(scope="session")
def requires_sympy():
    """Skip test if sympy is not available."""
    if not HAS_SYMPY:
        pytest.skip("sympy not available")


@pytest.fixture(scope="session")
def fns():
    """Function namespace built from the default configuration."""
    return create()


@pytest.fixture
def dense_a():
    """Dense 3x3 matrix.

    Matrix:
    [[1, 0, 2],
     [0, 3, 0],
     [4, 0, 5]]
    """
    return DenseMatrix([[1, 0, 2], [0, 3, 0], [4, 0, 5]])


@pytest.fixture
def sparse_a():
    """Same matrix as dense_a in CSC storage."""
    return SparseMatrix.from_dense([[1, 0, 2], [0, 3, 0], [4, 0, 5]])


@pytest.fixture
def sparse_b():
    """Sparse 3x3 matrix overlapping sparse_a in two cells.

    Matrix:
    [[6, 0, 0],
     [0, 0, 7],
     [8, 0, 9]]
    """
    return SparseMatrix.from_dense([[6, 0, 0], [0, 0, 7], [8, 0, 9]])


@pytest.fixture
def scipy_csc_matrix(requires_scipy):
    """Create a scipy CSC matrix for interop testing."""
    import numpy as np
    return sp.csc_matrix([
        [1, 0, 2, 0],
        [0, 3, 0, 4],
        [5, 0, 0, 6]
    ], dtype=np.float64)


# =============================================================================
# Helper Functions
# =============================================================================

class Recorder:
    """Binary kernel that records every call."""

    def __init__(self, fn=lambda x, y: x + y):
        self.fn = fn
        self.calls = []

    def __call__(self, x, y):
        self.calls.append((x, y))
        return self.fn(x, y)


@pytest.fixture
def recorder():
    """Factory of call-recording kernels."""
    return Recorder
