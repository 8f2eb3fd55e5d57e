"""
Trigonometric functions.

atan2 is lifted to matrices. cot and csc are scalar functions and accept
angles given as units (radian, degree, ...); they do not apply to matrices.
"""

import cmath
import math
from decimal import Decimal

from .._errors import DomainError
from ..dispatch import TypedFunction, refer_to_self, typed
from ..matrix.algorithms import build_suite
from ._context import FunctionContext

__all__ = ['create_atan2', 'create_cot', 'create_csc']


def _reciprocal(value):
    if value == 0:
        return math.copysign(math.inf, value)
    return 1 / value


def _reciprocal_complex(value):
    if value == 0:
        raise DomainError("Cannot divide by zero")
    return 1 / value


def _evaluate_big(ctx: FunctionContext, fn_name: str):
    """BigNumber kernel evaluating a sympy function at the configured precision."""
    dc = ctx.tower.bignumber.context

    def kernel(x):
        import sympy

        digits = dc.prec + 5
        value = getattr(sympy, fn_name)(sympy.Float(str(x), digits)).evalf(digits)
        return dc.create_decimal(str(value))

    return kernel


def _angle_signature(ctx: FunctionContext, name: str):
    """Unit signature converting an angle to radians before calling the function."""
    units = ctx.tower.unit

    def builder(self):
        def impl(u):
            from sympy.physics.units import radian

            try:
                angle = units.magnitude_in(u, radian)
            except DomainError:
                raise DomainError(f"A Unit argument to {name} must be an angle.") from None
            return self(angle)
        return impl

    return refer_to_self(builder)


# =============================================================================
# atan2
# =============================================================================

def create_atan2(ctx: FunctionContext) -> TypedFunction:
    """
    atan2(y, x): angle of the point (x, y) in radians, in [-pi, pi].

    BigNumber operands are evaluated with sympy at the configured precision.
    """
    dc = ctx.tower.bignumber.context

    def atan2_big(y, x):
        import sympy

        if y.is_zero() and x.is_zero():
            return Decimal(0)
        digits = dc.prec + 5
        angle = sympy.atan2(sympy.Float(str(y), digits), sympy.Float(str(x), digits))
        return dc.create_decimal(str(angle.evalf(digits)))

    scalar = typed('atan2', {
        'number, number': math.atan2,
        'BigNumber, BigNumber': atan2_big,
    })
    algos = ctx.algorithms
    return typed('atan2', build_suite(
        scalar,
        sparse_sparse=algos.sparse_sparse_union,
        dense_sparse=algos.dense_sparse_full,
        sparse_dense=algos.dense_sparse_full,
        sparse_scalar=algos.sparse_scalar_full,
        scalar='number | BigNumber',
    ))


# =============================================================================
# cot / csc
# =============================================================================

def create_cot(ctx: FunctionContext) -> TypedFunction:
    """cot(x) = 1 / tan(x)."""
    dc = ctx.tower.bignumber.context
    tan_big = _evaluate_big(ctx, 'tan')
    return typed('cot', {
        'number': lambda x: _reciprocal(math.tan(x)),
        'Complex': lambda z: _reciprocal_complex(cmath.tan(z)),
        'BigNumber': lambda x: dc.divide(Decimal(1), tan_big(x)),
        'Unit': _angle_signature(ctx, 'cot'),
    })


def create_csc(ctx: FunctionContext) -> TypedFunction:
    """csc(x) = 1 / sin(x)."""
    dc = ctx.tower.bignumber.context
    sin_big = _evaluate_big(ctx, 'sin')
    return typed('csc', {
        'number': lambda x: _reciprocal(math.sin(x)),
        'Complex': lambda z: _reciprocal_complex(cmath.sin(z)),
        'BigNumber': lambda x: dc.divide(Decimal(1), sin_big(x)),
        'Unit': _angle_signature(ctx, 'csc'),
    })
