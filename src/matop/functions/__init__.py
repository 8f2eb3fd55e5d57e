"""
Function Catalogue

Every elementwise function is a TypedFunction built from one configuration:
scalar kernels for each numeric kind plus the matrix signatures produced by
build_suite(). A MathFunctions namespace holds one consistent set.

Example:
    >>> from matop.functions import create
    >>> fns = create()
    >>> fns.add([[1, 2]], [[3, 4]])
    [[4, 6]]
    >>> fns.larger(0.1 + 0.2, 0.3)
    False
"""

import logging
from typing import Dict, Optional

from .._config import DEFAULT_CONFIG, Config
from ..dispatch import TypedFunction
from ._context import FunctionContext
from .arithmetic import (
    create_add,
    create_ceil,
    create_dot_divide,
    create_dot_multiply,
    create_dot_pow,
    create_floor,
    create_gcd,
    create_lcm,
    create_mod,
    create_nth_root,
    create_round,
    create_sign,
    create_subtract,
)
from .bitwise import (
    create_bit_and,
    create_bit_or,
    create_bit_xor,
    create_right_arith_shift,
    create_right_log_shift,
)
from .logical import create_logical_and, create_logical_or, create_logical_xor
from .relational import (
    create_compare,
    create_equal,
    create_equal_scalar,
    create_larger,
    create_larger_eq,
    create_smaller,
    create_smaller_eq,
    create_unequal,
)
from .trigonometry import create_atan2, create_cot, create_csc
from .unit import create_to

logger = logging.getLogger("matop.functions")

__all__ = ['FunctionContext', 'MathFunctions', 'create', 'FUNCTION_NAMES']


_FACTORIES = {
    'add': create_add,
    'subtract': create_subtract,
    'dot_multiply': create_dot_multiply,
    'dot_divide': create_dot_divide,
    'dot_pow': create_dot_pow,
    'mod': create_mod,
    'gcd': create_gcd,
    'lcm': create_lcm,
    'ceil': create_ceil,
    'floor': create_floor,
    'round': create_round,
    'sign': create_sign,
    'nth_root': create_nth_root,
    'bit_and': create_bit_and,
    'bit_or': create_bit_or,
    'bit_xor': create_bit_xor,
    'right_arith_shift': create_right_arith_shift,
    'right_log_shift': create_right_log_shift,
    'logical_and': create_logical_and,
    'logical_or': create_logical_or,
    'logical_xor': create_logical_xor,
    'compare': create_compare,
    'larger': create_larger,
    'larger_eq': create_larger_eq,
    'smaller': create_smaller,
    'smaller_eq': create_smaller_eq,
    'atan2': create_atan2,
    'cot': create_cot,
    'csc': create_csc,
    'to': create_to,
}

FUNCTION_NAMES = tuple(sorted(list(_FACTORIES) + ['equal_scalar', 'equal', 'unequal']))


class MathFunctions:
    """
    One set of typed functions sharing a configuration.

    Functions are attributes named after the operation (add, dot_divide,
    larger_eq, ...). Item access by name is supported as well.

    Attributes:
        config: The configuration every function was built with.
        context: The FunctionContext (numeric traits and traversals).
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or DEFAULT_CONFIG
        self.context = FunctionContext(self.config)
        self._functions: Dict[str, TypedFunction] = {}

        equal_scalar = create_equal_scalar(self.context)
        self._functions['equal_scalar'] = equal_scalar
        self._functions['equal'] = create_equal(self.context, equal_scalar)
        self._functions['unequal'] = create_unequal(self.context, equal_scalar)
        for name, factory in _FACTORIES.items():
            self._functions[name] = factory(self.context)

        for name, fn in self._functions.items():
            setattr(self, name, fn)
        logger.debug("Created %d functions (epsilon=%g)",
                     len(self._functions), self.config.tolerance.epsilon)

    def __getitem__(self, name: str) -> TypedFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise KeyError(f"Unknown function: {name!r}") from None

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def __iter__(self):
        return iter(sorted(self._functions))

    def __repr__(self) -> str:
        return f"MathFunctions({len(self._functions)} functions, {self.config!r})"


def create(config: Optional[Config] = None) -> MathFunctions:
    """Build a function namespace for config (DEFAULT_CONFIG when omitted)."""
    return MathFunctions(config)
