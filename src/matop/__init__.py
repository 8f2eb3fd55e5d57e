"""
matop - Typed Elementwise Matrix Operations

Multiple-dispatch functions over scalars, nested arrays, dense matrices and
compressed sparse column matrices:
- Signature-based dispatch on the runtime kinds of all arguments
- Dense (N-dimensional) and CSC sparse (2-dimensional) storage
- One traversal per storage pair, skipping zeros wherever the kernel allows
- number, BigNumber (Decimal), Fraction, Complex and Unit (sympy) kernels
- numpy / scipy.sparse interoperability

Modules:
- dispatch: typed functions, signatures and self references
- matrix: DenseMatrix, SparseMatrix and constructors
- matrix.algorithms: elementwise traversals and the suite builder
- functions: the function catalogue built from a Config

Architecture:
    ┌──────────────────────────────────────────────┐
    │   TypedFunction (signature -> kernel)        │
    ├──────────────────────────────────────────────┤
    │   build_suite: storage pair -> traversal     │
    ├──────────────────────────────────────────────┤
    │   DenseMatrix | SparseMatrix | scalar kinds  │
    └──────────────────────────────────────────────┘

Example:
    >>> import matop
    >>> a = matop.sparse([[1, 0], [0, 2]])
    >>> b = matop.matrix([[0, 3], [0, 4]], 'sparse')
    >>> matop.add(a, b).to_list()
    [[1, 3], [0, 6]]
    >>>
    >>> # Functions with a custom tolerance
    >>> fns = matop.create(matop.Config(tolerance=matop.ToleranceConfig(epsilon=1e-6)))
    >>> fns.equal(1.0, 1.0000001)
    True
"""

__version__ = '0.1.0'


from ._config import (
    Config,
    DEFAULT_CONFIG,
    MatrixConfig,
    NumericConfig,
    ToleranceConfig,
    get_config,
)
from ._errors import (
    AmbiguousMatchError,
    AmbiguousSignature,
    DimensionError,
    DimensionMismatch,
    DomainError,
    InvalidArgument,
    MatopError,
    NoMatchError,
    NoMatchingSignature,
    SignatureError,
)
from ._typing import Kind, kind_of, type_name
from .dispatch import TypedFunction, refer_to, refer_to_self, typed
from .functions import FUNCTION_NAMES, MathFunctions, create
from .matrix import (
    DenseMatrix,
    MatrixBase,
    SparseMatrix,
    StorageFormat,
    full,
    matrix,
    sparse,
    zeros,
    zeros_like,
)
from .matrix.algorithms import Algorithms, build_suite


# =============================================================================
# Default Functions
# =============================================================================

_default = create(DEFAULT_CONFIG)

add = _default.add
subtract = _default.subtract
dot_multiply = _default.dot_multiply
dot_divide = _default.dot_divide
dot_pow = _default.dot_pow
mod = _default.mod
gcd = _default.gcd
lcm = _default.lcm
ceil = _default.ceil
floor = _default.floor
round = _default.round
sign = _default.sign
nth_root = _default.nth_root
bit_and = _default.bit_and
bit_or = _default.bit_or
bit_xor = _default.bit_xor
right_arith_shift = _default.right_arith_shift
right_log_shift = _default.right_log_shift
logical_and = _default.logical_and
logical_or = _default.logical_or
logical_xor = _default.logical_xor
equal_scalar = _default.equal_scalar
compare = _default.compare
equal = _default.equal
unequal = _default.unequal
larger = _default.larger
larger_eq = _default.larger_eq
smaller = _default.smaller
smaller_eq = _default.smaller_eq
atan2 = _default.atan2
cot = _default.cot
csc = _default.csc
to = _default.to

__all__ = [
    # Version
    '__version__',

    # Configuration
    'Config',
    'ToleranceConfig',
    'NumericConfig',
    'MatrixConfig',
    'DEFAULT_CONFIG',
    'get_config',

    # Errors
    'MatopError',
    'NoMatchingSignature',
    'AmbiguousSignature',
    'InvalidArgument',
    'SignatureError',
    'DimensionMismatch',
    'DomainError',
    'NoMatchError',
    'AmbiguousMatchError',
    'DimensionError',

    # Dispatch
    'Kind',
    'kind_of',
    'type_name',
    'TypedFunction',
    'typed',
    'refer_to',
    'refer_to_self',

    # Matrices
    'MatrixBase',
    'StorageFormat',
    'DenseMatrix',
    'SparseMatrix',
    'matrix',
    'sparse',
    'zeros',
    'zeros_like',
    'full',

    # Algorithms
    'Algorithms',
    'build_suite',

    # Function catalogue
    'MathFunctions',
    'create',
    'FUNCTION_NAMES',
] + list(FUNCTION_NAMES)
