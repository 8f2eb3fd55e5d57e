"""
Helpers shared by the traversal algorithms.
"""

from typing import Any, Callable, Optional, Tuple

from ..._config import DEFAULT_CONFIG
from ..._errors import DimensionMismatch
from ..._numeric import numeric_tower, zero_like, zero_of
from ..._typing import kind_of
from ...dispatch import specialize
from .._base import MatrixBase

Kernel = Callable[[Any, Any], Any]
ZeroTest = Callable[[Any], bool]


def default_is_zero() -> ZeroTest:
    return numeric_tower(DEFAULT_CONFIG).is_zero


def shared_datatype(a: MatrixBase, b: MatrixBase) -> Optional[str]:
    """Datatype of both operands when they agree, else None."""
    dt = a.datatype
    if dt is not None and dt == b.datatype:
        return dt
    return None


def kernel_for(op: Kernel, datatype: Optional[str]) -> Kernel:
    """The kernel narrowed to datatype, when both operands share one."""
    return specialize(op, datatype)


def scalar_kernel(a: MatrixBase, scalar: Any, op: Kernel) -> Tuple[Kernel, Optional[str]]:
    """
    Kernel and result datatype for matrix x scalar.

    Only specialized when the scalar has the kind named by the matrix
    datatype; no conversion is applied to the scalar.
    """
    dt = a.datatype
    if dt is not None and kind_of(scalar).value == dt:
        return specialize(op, dt), dt
    return op, None


def zero_for(datatype: Optional[str], other: Any) -> Any:
    """Value substituted for an absent cell paired with other."""
    zero = zero_of(datatype)
    if zero is not None:
        return zero
    return zero_like(other)


def require_same_shape(a: MatrixBase, b: MatrixBase) -> None:
    if len(a.shape) != len(b.shape):
        raise DimensionMismatch(len(a.shape), len(b.shape))
    if a.shape != b.shape:
        raise DimensionMismatch(a.shape, b.shape)


def require_2d(a: MatrixBase, b: MatrixBase) -> None:
    """Dense x sparse traversals only exist for matrices."""
    for m in (a, b):
        if len(m.shape) != 2:
            raise DimensionMismatch(len(m.shape), 2)
    if a.shape != b.shape:
        raise DimensionMismatch(a.shape, b.shape)
