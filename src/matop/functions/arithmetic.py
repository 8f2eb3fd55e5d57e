"""
Arithmetic functions.

Each factory builds the scalar kernels of one function from the numeric
traits of a configuration and lifts them to matrices with build_suite().
The traversal chosen for each storage pair follows from the kernel's
behaviour on zero operands:

    add          x + 0 = x, 0 + 0 = 0         identity everywhere
    subtract     x - 0 = x, 0 - y = -y        union / dense for S - D
    dot_multiply x * 0 = 0                    zero-skipping
    dot_divide   0 / 0 = NaN                  full
    dot_pow      0 ** 0 = 1                   full
    mod          x mod 0 = x, 0 mod y = 0     union
    gcd          gcd(x, 0) = |x|              union
    lcm          lcm(x, 0) = 0                intersect
    sign         sign(0) = 0                  map over stored entries
"""

import decimal
import math
from decimal import Decimal
from fractions import Fraction
from functools import reduce
from typing import Any, Callable

import numpy as np

from .._errors import DomainError
from .._numeric import check_digits
from ..dispatch import TypedFunction, refer_to_self, typed
from ..matrix import DenseMatrix
from ..matrix.algorithms import build_suite
from ._context import FunctionContext, logger

__all__ = [
    'create_add',
    'create_subtract',
    'create_dot_multiply',
    'create_dot_divide',
    'create_dot_pow',
    'create_mod',
    'create_gcd',
    'create_lcm',
    'create_ceil',
    'create_floor',
    'create_round',
    'create_sign',
    'create_nth_root',
    'divide_number',
    'pow_number',
]


def _n_ary(self: TypedFunction) -> Callable:
    """Left fold for calls with more than two arguments."""
    def fold(x, y, *rest):
        return reduce(self, rest, self(x, y))
    return fold


# =============================================================================
# Number Kernels
# =============================================================================

def divide_number(x, y):
    """IEEE division: x / 0 is +-Infinity, 0 / 0 is NaN."""
    try:
        return x / y
    except ZeroDivisionError:
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(x) / np.float64(y))


def pow_number(x, y):
    """x ** y, falling back to IEEE results on division by zero or overflow."""
    try:
        return x ** y
    except (ZeroDivisionError, OverflowError):
        with np.errstate(all='ignore'):
            return float(np.power(np.float64(x), np.float64(y)))


def _divide_exact(x, y):
    try:
        return x / y
    except ZeroDivisionError:
        raise DomainError("Cannot divide by zero") from None


def _pow_fraction(x, y):
    if y.denominator != 1:
        raise DomainError("Function pow does not support non-integer exponents for fractions")
    try:
        return x ** int(y)
    except ZeroDivisionError:
        raise DomainError("Cannot raise zero to a negative power") from None


def _pow_complex(x, y):
    try:
        return x ** y
    except ZeroDivisionError:
        raise DomainError("Cannot raise zero to a negative or complex power") from None


def _mod_exact(x, y):
    if y == 0:
        return x
    if y < 0:
        raise DomainError("Cannot calculate mod for a negative divisor")
    return x % y


# =============================================================================
# add / subtract
# =============================================================================

def _unit_add(units, sign: int):
    def kernel(x, y):
        mx, my, unit = units.magnitudes(x, y)
        return (mx + sign * my) * unit
    return kernel


def create_add(ctx: FunctionContext) -> TypedFunction:
    """add(x, y, ...): sum of two or more values."""
    dc = ctx.tower.bignumber.context
    scalar = typed('addScalar', {
        'number, number': lambda x, y: x + y,
        'Complex, Complex': lambda x, y: x + y,
        'BigNumber, BigNumber': dc.add,
        'Fraction, Fraction': lambda x, y: x + y,
        'Unit, Unit': _unit_add(ctx.tower.unit, 1),
    })
    algos = ctx.algorithms
    return typed(
        'add',
        build_suite(
            scalar,
            sparse_sparse=algos.sparse_sparse_identity,
            dense_sparse=algos.dense_sparse_identity,
            sparse_scalar=algos.sparse_scalar_identity,
        ),
        {'any, any, ...any': refer_to_self(_n_ary)},
    )


def create_subtract(ctx: FunctionContext) -> TypedFunction:
    """subtract(x, y): difference x - y."""
    dc = ctx.tower.bignumber.context
    scalar = typed('subtractScalar', {
        'number, number': lambda x, y: x - y,
        'Complex, Complex': lambda x, y: x - y,
        'BigNumber, BigNumber': dc.subtract,
        'Fraction, Fraction': lambda x, y: x - y,
        'Unit, Unit': _unit_add(ctx.tower.unit, -1),
    })
    algos = ctx.algorithms
    return typed('subtract', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_union,
        dense_sparse=algos.dense_sparse_identity,
        sparse_dense=algos.dense_sparse_full,
        sparse_scalar=algos.sparse_scalar_full,
        scalar_sparse=algos.sparse_scalar_identity,
    ))


# =============================================================================
# dot_multiply / dot_divide / dot_pow
# =============================================================================

def create_dot_multiply(ctx: FunctionContext) -> TypedFunction:
    """
    dot_multiply(x, y): elementwise product.

    An absent sparse cell is an exact zero and its product is zero, even
    against Infinity or NaN. Only dense operands follow IEEE there.
    """
    dc = ctx.tower.bignumber.context
    scalar = typed('multiplyScalar', {
        'number, number': lambda x, y: x * y,
        'Complex, Complex': lambda x, y: x * y,
        'BigNumber, BigNumber': dc.multiply,
        'Fraction, Fraction': lambda x, y: x * y,
        'Unit, number': lambda x, y: x * y,
        'number, Unit': lambda x, y: x * y,
        'Unit, Unit': lambda x, y: x * y,
    })
    algos = ctx.algorithms
    return typed('dotMultiply', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_intersect,
        dense_sparse=algos.dense_sparse_zero,
        sparse_scalar=algos.sparse_scalar_zero,
    ))


def create_dot_divide(ctx: FunctionContext) -> TypedFunction:
    """dot_divide(x, y): elementwise quotient."""
    dc = ctx.tower.bignumber.context
    units = ctx.tower.unit

    def divide_units(x, y):
        try:
            mx, my, _ = units.magnitudes(x, y)
        except DomainError:
            return x / y
        return divide_number(mx, my)

    def divide_unit_number(x, y):
        if y == 0:
            raise DomainError("Cannot divide by zero")
        return x / y

    scalar = typed('divideScalar', {
        'number, number': divide_number,
        'Complex, Complex': _divide_exact,
        'BigNumber, BigNumber': dc.divide,
        'Fraction, Fraction': _divide_exact,
        'Unit, number': divide_unit_number,
        'Unit, Unit': divide_units,
    })
    algos = ctx.algorithms
    return typed('dotDivide', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_full,
        dense_sparse=algos.dense_sparse_full,
        sparse_scalar=algos.sparse_scalar_full,
    ))


def create_dot_pow(ctx: FunctionContext) -> TypedFunction:
    """dot_pow(x, y): elementwise power."""
    dc = ctx.tower.bignumber.context
    scalar = typed('powScalar', {
        'number, number': pow_number,
        'Complex, Complex': _pow_complex,
        'BigNumber, BigNumber': dc.power,
        'Fraction, Fraction': _pow_fraction,
        'Unit, number': lambda x, y: x ** y,
    })
    algos = ctx.algorithms
    return typed('dotPow', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_full,
        dense_sparse=algos.dense_sparse_full,
        sparse_scalar=algos.sparse_scalar_full,
    ))


# =============================================================================
# mod / gcd / lcm
# =============================================================================

def create_mod(ctx: FunctionContext) -> TypedFunction:
    """mod(x, y): x - y * floor(x / y), with mod(x, 0) = x."""
    dc = ctx.tower.bignumber.context

    def mod_big(x, y):
        if y.is_zero():
            return x
        if y < 0:
            raise DomainError("Cannot calculate mod for a negative divisor")
        quotient = dc.divide(x, y).to_integral_value(rounding=decimal.ROUND_FLOOR, context=dc)
        return dc.subtract(x, dc.multiply(y, quotient))

    scalar = typed('mod', {
        'number, number': _mod_exact,
        'BigNumber, BigNumber': mod_big,
        'Fraction, Fraction': _mod_exact,
    })
    algos = ctx.algorithms
    return typed('mod', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_union,
        dense_sparse=algos.dense_sparse_full,
        sparse_dense=algos.dense_sparse_zero,
        sparse_scalar=algos.sparse_scalar_zero,
        scalar_sparse=algos.sparse_scalar_full,
    ))


def create_gcd(ctx: FunctionContext) -> TypedFunction:
    """gcd(a, b, ...): greatest common divisor of integers (or fractions)."""
    tower = ctx.tower
    scalar = typed('gcd', {
        'number, number': tower.number.gcd,
        'BigNumber, BigNumber': tower.bignumber.gcd,
        'Fraction, Fraction': tower.fraction.gcd,
    })
    algos = ctx.algorithms
    return typed(
        'gcd',
        build_suite(
            scalar,
            sparse_sparse=algos.sparse_sparse_union,
            dense_sparse=algos.dense_sparse_full,
            sparse_scalar=algos.sparse_scalar_full,
        ),
        {'any, any, ...any': refer_to_self(_n_ary)},
    )


def create_lcm(ctx: FunctionContext) -> TypedFunction:
    """lcm(a, b, ...): least common multiple of integers (or fractions)."""
    tower = ctx.tower
    scalar = typed('lcm', {
        'number, number': tower.number.lcm,
        'BigNumber, BigNumber': tower.bignumber.lcm,
        'Fraction, Fraction': tower.fraction.lcm,
    })
    algos = ctx.algorithms
    return typed(
        'lcm',
        build_suite(
            scalar,
            sparse_sparse=algos.sparse_sparse_intersect,
            dense_sparse=algos.dense_sparse_zero,
            sparse_scalar=algos.sparse_scalar_zero,
        ),
        {'any, any, ...any': refer_to_self(_n_ary)},
    )


# =============================================================================
# ceil / floor / round
# =============================================================================

_DIGITS = 'number | BigNumber'
_ROUNDABLE = 'number | Complex | Fraction | BigNumber'


def _create_rounding(ctx: FunctionContext, name: str, method: str) -> TypedFunction:
    """
    Build ceil, floor or round.

    One argument rounds to an integer; a second argument gives the number
    of decimals. Matrices are mapped elementwise and sparse zeros are
    skipped, since rounding zero gives zero.
    """
    tower = ctx.tower
    algos = ctx.algorithms

    def unary(traits):
        fn = getattr(traits, method)
        return lambda x: fn(x)

    def binary(traits, limit=None):
        fn = getattr(traits, method)
        return lambda x, n: fn(x, check_digits(n, limit))

    def scalar_first_sparse(self):
        def impl(x, y):
            if ctx.is_zero(x):
                return ctx.zeros(y)
            return algos.sparse_scalar_full(y, x, self, True)
        return impl

    return typed(name, {
        'number': unary(tower.number),
        f'number, {_DIGITS}': binary(tower.number, 15),
        'BigNumber': unary(tower.bignumber),
        f'BigNumber, {_DIGITS}': binary(tower.bignumber),
        'Fraction': unary(tower.fraction),
        f'Fraction, {_DIGITS}': binary(tower.fraction),
        'Complex': unary(tower.complex),
        f'Complex, {_DIGITS}': binary(tower.complex, 15),

        'Array': refer_to_self(lambda self: lambda x: DenseMatrix(x).map(self).value_of()),
        'DenseMatrix': refer_to_self(lambda self: lambda x: x.map(self)),
        'SparseMatrix': refer_to_self(lambda self: lambda x: x.map(self, is_zero=ctx.is_zero)),

        f'SparseMatrix, {_DIGITS}': refer_to_self(
            lambda self: lambda x, n: algos.sparse_scalar_zero(x, n, self, False)),
        f'DenseMatrix, {_DIGITS}': refer_to_self(
            lambda self: lambda x, n: algos.dense_scalar(x, n, self, False)),
        f'Array, {_DIGITS}': refer_to_self(
            lambda self: lambda x, n: algos.dense_scalar(DenseMatrix(x), n, self, False).value_of()),

        f'{_ROUNDABLE}, SparseMatrix': refer_to_self(scalar_first_sparse),
        f'{_ROUNDABLE}, DenseMatrix': refer_to_self(
            lambda self: lambda x, y: algos.dense_scalar(y, x, self, True)),
        f'{_ROUNDABLE}, Array': refer_to_self(
            lambda self: lambda x, y: algos.dense_scalar(DenseMatrix(y), x, self, True).value_of()),
    })


def create_ceil(ctx: FunctionContext) -> TypedFunction:
    """ceil(x[, n]): round towards +Infinity."""
    return _create_rounding(ctx, 'ceil', 'ceil')


def create_floor(ctx: FunctionContext) -> TypedFunction:
    """floor(x[, n]): round towards -Infinity."""
    return _create_rounding(ctx, 'floor', 'floor')


def create_round(ctx: FunctionContext) -> TypedFunction:
    """round(x[, n]): round half away from zero."""
    return _create_rounding(ctx, 'round', 'round')


# =============================================================================
# sign
# =============================================================================

def _sign_number(x):
    if x != x:
        return x
    return (x > 0) - (x < 0)


def create_sign(ctx: FunctionContext) -> TypedFunction:
    """
    sign(x): 1, -1 or 0. Complex values give the unit vector x / |x|.

    Matrices are mapped elementwise; sparse zeros are skipped since
    sign(0) is 0.
    """
    units = ctx.tower.unit

    def sign_complex(z):
        if z.imag == 0:
            return complex(_sign_number(z.real))
        return z / abs(z)

    return typed('sign', {
        'number': _sign_number,
        'BigNumber': lambda x: x.compare(Decimal(0)),
        'Fraction': lambda x: Fraction(_sign_number(x.numerator)),
        'Complex': sign_complex,
        'Unit': refer_to_self(lambda self: lambda x: self(units.coefficient(x))),

        'Array': refer_to_self(lambda self: lambda x: DenseMatrix(x).map(self).value_of()),
        'DenseMatrix': refer_to_self(lambda self: lambda x: x.map(self)),
        'SparseMatrix': refer_to_self(lambda self: lambda x: x.map(self, is_zero=ctx.is_zero)),
    })


# =============================================================================
# nth_root
# =============================================================================

def _nth_root_number(a, root=2):
    inverse = root < 0
    if inverse:
        root = -root
    if root == 0:
        raise DomainError("Root must be non-zero")
    if a < 0 and abs(root) % 2 != 1:
        raise DomainError("Root must be odd when a is negative.")
    if a == 0:
        return math.inf if inverse else 0
    if not math.isfinite(a):
        return 0 if inverse else a

    x = abs(a) ** (1 / root)
    if float(root).is_integer():
        nearest = round(x)
        if nearest ** int(root) == abs(a):
            x = float(nearest)
    x = -x if a < 0 else x
    return 1 / x if inverse else x


def _complex_root(*args):
    raise DomainError("Complex number not supported in function nthRoot. Use nthRoots instead.")


def create_nth_root(ctx: FunctionContext) -> TypedFunction:
    """
    nth_root(a[, root]): real root of a (square root by default).

    A sparse matrix of roots must have no implicit zeros (density 1), as a
    zero root is undefined. The root of zero is zero for a positive root and
    Infinity for a negative one, so absent radicands are only skipped for a
    positive scalar root.
    """
    dc = ctx.tower.bignumber.context
    algos = ctx.algorithms

    def nth_root_big(a, root=Decimal(2)):
        inverse = root < 0
        if inverse:
            root = -root
        if root.is_zero():
            raise DomainError("Root must be non-zero")
        if a < 0 and dc.remainder(root, Decimal(2)) != 1:
            raise DomainError("Root must be odd when a is negative.")
        if a.is_zero():
            return Decimal('Infinity') if inverse else Decimal(0)
        if not a.is_finite():
            return Decimal(0) if inverse else a
        x = dc.power(dc.abs(a), dc.divide(Decimal(1), root))
        x = -x if a < 0 else x
        return dc.divide(Decimal(1), x) if inverse else x

    def require_dense_roots(y):
        if y.density() != 1:
            raise DomainError("Root must be non-zero")

    def sparse_sparse(x, y, op, inverse=False):
        require_dense_roots(y)
        return algos.sparse_sparse_union(x, y, op, inverse)

    def dense_sparse(x, y, op, inverse=False):
        require_dense_roots(y)
        return algos.dense_sparse_identity(x, y, op, inverse)

    def sparse_by_root(x, root, op, inverse=False):
        if root > 0:
            return algos.sparse_scalar_zero(x, root, op, inverse)
        return algos.sparse_scalar_full(x, root, op, inverse)

    def scalar_first_sparse(self):
        def impl(x, y):
            require_dense_roots(y)
            return algos.sparse_scalar_full(y, x, self, True)
        return impl

    scalar = typed('nthRoot', {
        'number': _nth_root_number,
        'number, number': _nth_root_number,
        'BigNumber': nth_root_big,
        'BigNumber, BigNumber': nth_root_big,
        'Complex': _complex_root,
        'Complex, number': _complex_root,
    })
    return typed(
        'nthRoot',
        build_suite(
            scalar,
            sparse_sparse=sparse_sparse,
            dense_sparse=dense_sparse,
            sparse_dense=algos.dense_sparse_full,
            sparse_scalar=sparse_by_root,
            scalar_sparse=False,
            scalar='number | BigNumber',
        ),
        {'number | BigNumber, SparseMatrix': refer_to_self(scalar_first_sparse)},
    )


logger.debug("Arithmetic function factories loaded")
