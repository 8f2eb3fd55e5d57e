"""
Unit conversion.
"""

from ..dispatch import TypedFunction, typed
from ..matrix.algorithms import build_suite
from ._context import FunctionContext

__all__ = ['create_to']


def create_to(ctx: FunctionContext) -> TypedFunction:
    """
    to(x, unit): x expressed in unit.

    Raises DomainError when the dimensions of x and unit differ. Matrices of
    units are converted elementwise; sparse storage is not supported.
    """
    units = ctx.tower.unit

    def convert(x, unit):
        _, target = units.split(unit)
        return units.magnitude_in(x, target) * target

    scalar = typed('to', {'Unit, Unit': convert})
    return typed('to', build_suite(scalar, dense_scalar=True, scalar='Unit'))
