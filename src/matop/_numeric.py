"""
Numeric Capabilities

One traits object per scalar kind exposes the handful of operations the
kernels and the traversal algorithms need from a number: its zero, a
tolerance-aware zero test, nearly-equal, ordering, truthiness, integer test,
floor/ceil/round and gcd/lcm.

Traits are built from a Config, so the tolerance and the BigNumber precision
are fixed when the function namespace is created:

    >>> from matop._config import DEFAULT_CONFIG
    >>> tower = numeric_tower(DEFAULT_CONFIG)
    >>> tower.is_zero(1e-20)
    True
    >>> tower.zero_like(Decimal('3.5'))
    Decimal('0')
"""

import decimal
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from fractions import Fraction
from functools import lru_cache
from typing import Any, Dict, Optional

from ._config import Config
from ._errors import DomainError
from ._typing import Kind, kind_of

__all__ = [
    'NumericTraits',
    'NumberTraits',
    'BigNumberTraits',
    'FractionTraits',
    'ComplexTraits',
    'BooleanTraits',
    'UnitTraits',
    'NumericTower',
    'numeric_tower',
    'zero_of',
    'zero_like',
    'check_digits',
]


# Wide enough to hold any float with 15 decimals
_FLOAT_CONTEXT = decimal.Context(prec=400, rounding=decimal.ROUND_HALF_UP)


def _int_lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // math.gcd(a, b)


def check_digits(digits: Any, limit: Optional[int] = None) -> int:
    """
    Validate a decimal count for round().

    Args:
        digits: Number of decimals, must be a non-negative integer.
        limit: Optional inclusive upper bound.

    Raises:
        DomainError: If digits is not an integer or is out of range.
    """
    if isinstance(digits, bool) or not _integral(digits):
        raise DomainError("Number of decimals in function round must be an integer")
    n = int(digits)
    if n < 0 or (limit is not None and n > limit):
        upper = limit if limit is not None else "inf"
        raise DomainError(f"Number of decimals in function round must be in the range of 0-{upper}")
    return n


def _integral(value: Any) -> bool:
    if isinstance(value, int):
        return True
    if isinstance(value, Fraction):
        return value.denominator == 1
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    try:
        return math.isfinite(value) and float(value).is_integer()
    except (TypeError, ValueError):
        return False


# =============================================================================
# Base Class
# =============================================================================

class NumericTraits(ABC):
    """
    Capability interface of one scalar kind.

    Subclasses must provide zero, nearly_equal and compare. Capabilities a
    kind does not have raise DomainError.
    """

    kind: Kind = Kind.OBJECT
    zero: Any = 0

    def __init__(self, config: Config):
        self.config = config
        self.epsilon = config.tolerance.epsilon
        self.abs_tol = config.tolerance.abs_tol

    # -------------------------------------------------------------------------
    # Core
    # -------------------------------------------------------------------------

    @abstractmethod
    def nearly_equal(self, x: Any, y: Any) -> bool:
        """Tolerance-aware equality."""

    @abstractmethod
    def compare(self, x: Any, y: Any) -> Any:
        """Return -1, 0 or 1 (in the kind's own representation)."""

    def is_zero(self, x: Any) -> bool:
        return self.nearly_equal(x, self.zero)

    def truthy(self, x: Any) -> bool:
        return bool(x)

    def negate(self, x: Any) -> Any:
        return -x

    # -------------------------------------------------------------------------
    # Optional capabilities
    # -------------------------------------------------------------------------

    def _unsupported(self, name: str):
        return DomainError(f"Function {name} is not defined for type {self.kind.value}")

    def is_integer(self, x: Any) -> bool:
        raise self._unsupported("isInteger")

    def floor(self, x: Any, digits: int = 0) -> Any:
        raise self._unsupported("floor")

    def ceil(self, x: Any, digits: int = 0) -> Any:
        raise self._unsupported("ceil")

    def round(self, x: Any, digits: int = 0) -> Any:
        raise self._unsupported("round")

    def gcd(self, x: Any, y: Any) -> Any:
        raise self._unsupported("gcd")

    def lcm(self, x: Any, y: Any) -> Any:
        raise self._unsupported("lcm")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(epsilon={self.epsilon}, abs_tol={self.abs_tol})"


# =============================================================================
# number
# =============================================================================

class NumberTraits(NumericTraits):
    """Machine numbers: int, float and numpy scalars."""

    kind = Kind.NUMBER
    zero = 0

    def nearly_equal(self, x, y) -> bool:
        if x == y:
            return True
        if x != x or y != y:
            return False
        if abs(x) == math.inf or abs(y) == math.inf:
            return False
        diff = abs(x - y)
        return diff <= max(self.epsilon * max(abs(x), abs(y)), self.abs_tol)

    def compare(self, x, y):
        if x != x or y != y:
            return math.nan
        if self.nearly_equal(x, y):
            return 0
        return 1 if x > y else -1

    def truthy(self, x) -> bool:
        return x == x and x != 0

    def is_integer(self, x) -> bool:
        return _integral(x)

    def _snap(self, x, fn, digits: int):
        """Apply fn, treating values within tolerance of the rounded value as exact."""
        if isinstance(x, int):
            return x
        if not math.isfinite(x):
            return x
        if digits == 0:
            nearest = self.round(x)
            if self.nearly_equal(x, nearest):
                return nearest
            return float(fn(x))
        scale = 10.0 ** digits
        nearest = self.round(x, digits)
        if self.nearly_equal(x, nearest):
            return nearest
        return float(fn(x * scale)) / scale

    def floor(self, x, digits: int = 0):
        return self._snap(x, math.floor, digits)

    def ceil(self, x, digits: int = 0):
        return self._snap(x, math.ceil, digits)

    def round(self, x, digits: int = 0):
        if isinstance(x, int) and digits >= 0:
            return x
        if not math.isfinite(x):
            return x
        quantum = Decimal(1).scaleb(-digits)
        value = Decimal(repr(float(x))).quantize(quantum, context=_FLOAT_CONTEXT)
        return float(value)

    def _check_integers(self, name: str, x, y):
        if not (_integral(x) and _integral(y)):
            raise DomainError(f"Parameters in function {name} must be integer numbers")

    def gcd(self, x, y):
        self._check_integers("gcd", x, y)
        result = math.gcd(int(x), int(y))
        return result if isinstance(x, int) and isinstance(y, int) else float(result)

    def lcm(self, x, y):
        self._check_integers("lcm", x, y)
        result = _int_lcm(int(x), int(y))
        return result if isinstance(x, int) and isinstance(y, int) else float(result)


# =============================================================================
# BigNumber
# =============================================================================

class BigNumberTraits(NumericTraits):
    """
    Arbitrary precision decimals.

    All arithmetic goes through the configured decimal context so that the
    precision does not depend on the thread's current context.
    """

    kind = Kind.BIGNUMBER
    zero = Decimal(0)

    def __init__(self, config: Config):
        super().__init__(config)
        self.context = config.decimal_context()
        self.d_epsilon = Decimal(repr(self.epsilon))
        self.d_abs_tol = Decimal(repr(self.abs_tol))

    def nearly_equal(self, x, y) -> bool:
        if x.is_nan() or y.is_nan():
            return False
        if x == y:
            return True
        if x.is_infinite() or y.is_infinite():
            return False
        ctx = self.context
        diff = ctx.abs(ctx.subtract(x, y))
        bound = ctx.multiply(self.d_epsilon, max(ctx.abs(x), ctx.abs(y)))
        return diff <= max(bound, self.d_abs_tol)

    def compare(self, x, y):
        if x.is_nan() or y.is_nan():
            return Decimal('NaN')
        if self.nearly_equal(x, y):
            return Decimal(0)
        return Decimal(1) if x > y else Decimal(-1)

    def truthy(self, x) -> bool:
        return not x.is_nan() and not x.is_zero()

    def is_integer(self, x) -> bool:
        return _integral(x)

    def _integral_value(self, x, rounding, digits: int):
        ctx = self.context
        if not x.is_finite():
            return x
        if digits == 0:
            return x.to_integral_value(rounding=rounding, context=ctx)
        return x.quantize(Decimal(1).scaleb(-digits), rounding=rounding, context=ctx)

    def _snap(self, x, rounding, digits: int):
        nearest = self.round(x, digits)
        if self.nearly_equal(x, nearest):
            return nearest
        return self._integral_value(x, rounding, digits)

    def floor(self, x, digits: int = 0):
        return self._snap(x, decimal.ROUND_FLOOR, digits)

    def ceil(self, x, digits: int = 0):
        return self._snap(x, decimal.ROUND_CEILING, digits)

    def round(self, x, digits: int = 0):
        return self._integral_value(x, self.context.rounding, digits)

    def _check_integers(self, name: str, x, y):
        if not (self.is_integer(x) and self.is_integer(y)):
            raise DomainError(f"Parameters in function {name} must be integer numbers")

    def gcd(self, x, y):
        self._check_integers("gcd", x, y)
        ctx = self.context
        a, b = ctx.abs(x), ctx.abs(y)
        while not b.is_zero():
            a, b = b, ctx.remainder(a, b)
        return a

    def lcm(self, x, y):
        self._check_integers("lcm", x, y)
        if x.is_zero() or y.is_zero():
            return Decimal(0)
        ctx = self.context
        return ctx.divide_int(ctx.abs(ctx.multiply(x, y)), self.gcd(x, y))


# =============================================================================
# Fraction
# =============================================================================

class FractionTraits(NumericTraits):
    """Exact rationals. Comparisons are exact."""

    kind = Kind.FRACTION
    zero = Fraction(0)

    def nearly_equal(self, x, y) -> bool:
        return x == y

    def is_zero(self, x) -> bool:
        return x == 0

    def compare(self, x, y):
        if x == y:
            return Fraction(0)
        return Fraction(1) if x > y else Fraction(-1)

    def is_integer(self, x) -> bool:
        return x.denominator == 1

    def floor(self, x, digits: int = 0):
        scale = 10 ** digits
        return Fraction(math.floor(x * scale), scale)

    def ceil(self, x, digits: int = 0):
        scale = 10 ** digits
        return Fraction(math.ceil(x * scale), scale)

    def round(self, x, digits: int = 0):
        scale = 10 ** digits
        scaled = abs(x * scale)
        rounded = math.floor(scaled + Fraction(1, 2))
        return Fraction(rounded if x >= 0 else -rounded, scale)

    def gcd(self, x, y):
        return Fraction(
            math.gcd(x.numerator, y.numerator),
            _int_lcm(x.denominator, y.denominator),
        )

    def lcm(self, x, y):
        if x == 0 or y == 0:
            return Fraction(0)
        return Fraction(
            _int_lcm(x.numerator, y.numerator),
            math.gcd(x.denominator, y.denominator),
        )


# =============================================================================
# Complex
# =============================================================================

class ComplexTraits(NumericTraits):
    """Complex numbers. Rounding works on both components."""

    kind = Kind.COMPLEX
    zero = 0j

    def __init__(self, config: Config):
        super().__init__(config)
        self._real = NumberTraits(config)

    def nearly_equal(self, x, y) -> bool:
        if x == y:
            return True
        if x != x or y != y:
            return False
        diff = abs(x - y)
        if diff == math.inf:
            return False
        return diff <= max(self.epsilon * max(abs(x), abs(y)), self.abs_tol)

    def compare(self, x, y):
        raise DomainError("No ordering relation is defined for complex numbers")

    def is_integer(self, x) -> bool:
        return x.imag == 0 and _integral(x.real)

    def _componentwise(self, fn, x, digits):
        return complex(fn(x.real, digits), fn(x.imag, digits))

    def floor(self, x, digits: int = 0):
        return self._componentwise(self._real.floor, x, digits)

    def ceil(self, x, digits: int = 0):
        return self._componentwise(self._real.ceil, x, digits)

    def round(self, x, digits: int = 0):
        return self._componentwise(self._real.round, x, digits)


# =============================================================================
# boolean
# =============================================================================

class BooleanTraits(NumericTraits):
    kind = Kind.BOOLEAN
    zero = False

    def nearly_equal(self, x, y) -> bool:
        return bool(x) == bool(y)

    def compare(self, x, y):
        return (int(x) > int(y)) - (int(x) < int(y))

    def is_integer(self, x) -> bool:
        return True

    def floor(self, x, digits: int = 0):
        return int(x)

    ceil = floor
    round = floor


# =============================================================================
# Unit
# =============================================================================

class UnitTraits(NumericTraits):
    """
    Physical quantities represented as sympy expressions.

    A value is split into a numeric coefficient and a unit part with
    as_coeff_Mul(); values are compared after converting the right operand
    into the unit of the left operand.
    """

    kind = Kind.UNIT
    zero = 0

    def __init__(self, config: Config):
        super().__init__(config)
        self._real = NumberTraits(config)

    @staticmethod
    def split(value):
        """Return (coefficient, unit) of a unit expression."""
        coeff, unit = value.as_coeff_Mul()
        return coeff, unit

    @staticmethod
    def _to_python(number):
        if number.is_Integer:
            return int(number)
        if number.is_Rational:
            return Fraction(int(number.p), int(number.q))
        return float(number)

    def magnitude_in(self, value, unit):
        """
        Express value as a plain number of the given unit.

        Raises:
            DomainError: If the dimensions of value and unit differ.
        """
        from sympy.physics.units import convert_to
        from sympy.physics.units.quantities import Quantity

        ratio = (convert_to(value, unit) / unit).simplify()
        if ratio.has(Quantity) or not ratio.is_number:
            raise DomainError("Units do not match")
        return self._to_python(ratio)

    def coefficient(self, value):
        """Numeric coefficient of a unit expression as a Python number."""
        coeff, _ = self.split(value)
        return self._to_python(coeff)

    def magnitudes(self, x, y):
        """Return the magnitudes of x and y, both in the unit of x."""
        coeff, unit = self.split(x)
        return self._to_python(coeff), self.magnitude_in(y, unit), unit

    def nearly_equal(self, x, y) -> bool:
        mx, my, _ = self.magnitudes(x, y)
        return self._real.nearly_equal(float(mx), float(my))

    def is_zero(self, x) -> bool:
        coeff, _ = self.split(x)
        return self._real.is_zero(float(coeff))

    def compare(self, x, y):
        mx, my, _ = self.magnitudes(x, y)
        return self._real.compare(float(mx), float(my))

    def truthy(self, x) -> bool:
        coeff, _ = self.split(x)
        return coeff != 0


# =============================================================================
# Zeros
# =============================================================================

_TRAIT_CLASSES = (NumberTraits, BigNumberTraits, FractionTraits,
                  ComplexTraits, BooleanTraits, UnitTraits)

_ZERO_BY_KIND: Dict[Kind, Any] = {cls.kind: cls.zero for cls in _TRAIT_CLASSES}
_ZERO_BY_NAME: Dict[str, Any] = {cls.kind.value: cls.zero for cls in _TRAIT_CLASSES}


def zero_of(datatype: Optional[str]) -> Any:
    """Zero of a datatype name, or None when the name has no numeric zero."""
    if datatype is None:
        return None
    return _ZERO_BY_NAME.get(datatype)


def zero_like(value: Any) -> Any:
    """Zero of the same numeric type as value (0 for anything else)."""
    return _ZERO_BY_KIND.get(kind_of(value), 0)


# =============================================================================
# Tower
# =============================================================================

class NumericTower:
    """
    All numeric traits for one configuration.

    Attributes:
        config: The configuration the traits were built from.
    """

    def __init__(self, config: Config):
        self.config = config
        self._traits: Dict[Kind, NumericTraits] = {
            cls.kind: cls(config) for cls in _TRAIT_CLASSES
        }

    @property
    def number(self) -> NumberTraits:
        return self._traits[Kind.NUMBER]

    @property
    def bignumber(self) -> BigNumberTraits:
        return self._traits[Kind.BIGNUMBER]

    @property
    def fraction(self) -> FractionTraits:
        return self._traits[Kind.FRACTION]

    @property
    def complex(self) -> ComplexTraits:
        return self._traits[Kind.COMPLEX]

    @property
    def boolean(self) -> BooleanTraits:
        return self._traits[Kind.BOOLEAN]

    @property
    def unit(self) -> UnitTraits:
        return self._traits[Kind.UNIT]

    def traits_for(self, kind: Kind) -> Optional[NumericTraits]:
        """Traits of a kind, or None for non-numeric kinds."""
        return self._traits.get(kind)

    def of(self, value: Any) -> Optional[NumericTraits]:
        """Traits of a value's kind, or None for non-numeric values."""
        return self._traits.get(kind_of(value))

    zero_for = staticmethod(zero_of)
    zero_like = staticmethod(zero_like)

    def is_zero(self, value: Any) -> bool:
        """Tolerance-aware zero test for any scalar."""
        traits = self.of(value)
        if traits is None:
            return value is not None and not isinstance(value, str) and value == 0
        return traits.is_zero(value)

    def truthy(self, value: Any) -> bool:
        """Truthiness of any scalar, using the kind's own rule when it has one."""
        traits = self.of(value)
        if traits is None:
            return bool(value)
        return traits.truthy(value)

    def __repr__(self) -> str:
        return f"NumericTower(epsilon={self.config.tolerance.epsilon})"


@lru_cache(maxsize=None)
def numeric_tower(config: Config) -> NumericTower:
    """Return the (shared) numeric tower of a configuration."""
    return NumericTower(config)
