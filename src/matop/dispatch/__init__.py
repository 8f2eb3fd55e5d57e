"""
Multiple dispatch on the runtime kinds of all arguments.

    >>> from matop.dispatch import typed
    >>> f = typed('f', {'number, number': lambda x, y: 'numbers',
    ...                 'any, any': lambda x, y: 'fallback'})
    >>> f(1, 2)
    'numbers'
    >>> f('a', 2)
    'fallback'
"""

from ._signature import Param, Signature, parse_signature
from ._typed import (
    TypedFunction,
    is_typed_function,
    refer_to,
    refer_to_self,
    specialize,
    typed,
)

__all__ = [
    'Param',
    'Signature',
    'parse_signature',
    'TypedFunction',
    'typed',
    'refer_to',
    'refer_to_self',
    'is_typed_function',
    'specialize',
]
