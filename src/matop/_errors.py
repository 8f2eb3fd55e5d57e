"""
Error handling for matop.

Every error raised by the dispatch layer, the matrix layer or a scalar
kernel derives from MatopError and carries a numeric code. The concrete
classes also derive from the matching builtin (TypeError / ValueError) so
callers that only know the builtin taxonomy keep working.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


# =============================================================================
# Error Codes
# =============================================================================

MATOP_OK = 0

# General errors (1-9)
MATOP_ERROR_UNKNOWN = 1
MATOP_ERROR_INTERNAL = 2

# Argument errors (10-19)
MATOP_ERROR_INVALID_ARGUMENT = 10
MATOP_ERROR_DIMENSION_MISMATCH = 11
MATOP_ERROR_DOMAIN_ERROR = 12

# Dispatch errors (20-29)
MATOP_ERROR_NO_MATCHING_SIGNATURE = 20
MATOP_ERROR_AMBIGUOUS_SIGNATURE = 21
MATOP_ERROR_SIGNATURE = 22


_ERROR_MESSAGES = {
    MATOP_OK: "Success",
    MATOP_ERROR_UNKNOWN: "Unknown error",
    MATOP_ERROR_INTERNAL: "Internal error",
    MATOP_ERROR_INVALID_ARGUMENT: "Invalid argument",
    MATOP_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    MATOP_ERROR_DOMAIN_ERROR: "Domain error",
    MATOP_ERROR_NO_MATCHING_SIGNATURE: "No matching signature",
    MATOP_ERROR_AMBIGUOUS_SIGNATURE: "Ambiguous signature",
    MATOP_ERROR_SIGNATURE: "Invalid signature",
}


# =============================================================================
# Exception Classes
# =============================================================================

class MatopError(Exception):
    """
    Base exception for all matop errors.

    Attributes:
        code: Numeric error code (one of the MATOP_ERROR_* constants).
        message: Human readable description.
    """

    OK = MATOP_OK
    ERROR_UNKNOWN = MATOP_ERROR_UNKNOWN
    ERROR_INTERNAL = MATOP_ERROR_INTERNAL
    ERROR_INVALID_ARGUMENT = MATOP_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = MATOP_ERROR_DIMENSION_MISMATCH
    ERROR_DOMAIN_ERROR = MATOP_ERROR_DOMAIN_ERROR
    ERROR_NO_MATCHING_SIGNATURE = MATOP_ERROR_NO_MATCHING_SIGNATURE
    ERROR_AMBIGUOUS_SIGNATURE = MATOP_ERROR_AMBIGUOUS_SIGNATURE
    ERROR_SIGNATURE = MATOP_ERROR_SIGNATURE

    default_code = MATOP_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is None:
            code = self.default_code
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "MatopError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(msg, code)


class NoMatchingSignature(MatopError, TypeError):
    """No registered signature accepts the argument types of a call."""

    default_code = MATOP_ERROR_NO_MATCHING_SIGNATURE

    def __init__(self, name: str, actual: Sequence[str], expected: Sequence[str] = ()):
        self.name = name
        self.actual = tuple(actual)
        self.arity = len(self.actual)
        self.expected = tuple(expected)
        message = (
            f"Unexpected type of argument in function {name} "
            f"(actual: ({', '.join(self.actual)}), arity: {self.arity})"
        )
        if self.expected:
            message += f"; expected one of: {'; '.join(self.expected)}"
        super().__init__(message)


class AmbiguousSignature(MatopError, TypeError):
    """Several equally specific signatures match with different implementations."""

    default_code = MATOP_ERROR_AMBIGUOUS_SIGNATURE

    def __init__(self, name: str, actual: Sequence[str], candidates: Sequence[str]):
        self.name = name
        self.actual = tuple(actual)
        self.candidates = tuple(candidates)
        super().__init__(
            f"Ambiguous call to function {name} with ({', '.join(self.actual)}): "
            f"signatures {' and '.join(repr(c) for c in self.candidates)} are equally specific"
        )


class InvalidArgument(MatopError, ValueError):
    """An argument has the right type but an invalid value (bad storage arrays, bad index)."""

    default_code = MATOP_ERROR_INVALID_ARGUMENT


class SignatureError(MatopError, ValueError):
    """A signature table is malformed (bad pattern, duplicate, dangling reference)."""

    default_code = MATOP_ERROR_SIGNATURE


class DimensionMismatch(MatopError, ValueError):
    """
    Operand shapes are incompatible.

    Attributes:
        actual: Shape (or dimension count) that was found.
        expected: Shape (or dimension count) that was required.
    """

    default_code = MATOP_ERROR_DIMENSION_MISMATCH

    def __init__(self, actual: Any, expected: Any, message: Optional[str] = None):
        self.actual = actual
        self.expected = expected
        if message is None:
            message = f"Dimension mismatch ({_fmt_shape(actual)} != {_fmt_shape(expected)})"
        super().__init__(message)


class DomainError(MatopError, ValueError):
    """A scalar kernel was called outside of its mathematical domain."""

    default_code = MATOP_ERROR_DOMAIN_ERROR


def _fmt_shape(shape: Any) -> str:
    if isinstance(shape, (tuple, list)):
        return "[" + ", ".join(str(s) for s in shape) + "]"
    return str(shape)


# =============================================================================
# Convenience Aliases
# =============================================================================

NoMatchError = NoMatchingSignature
AmbiguousMatchError = AmbiguousSignature
DimensionError = DimensionMismatch


__all__ = [
    "MATOP_OK",
    "MATOP_ERROR_UNKNOWN",
    "MATOP_ERROR_INTERNAL",
    "MATOP_ERROR_INVALID_ARGUMENT",
    "MATOP_ERROR_DIMENSION_MISMATCH",
    "MATOP_ERROR_DOMAIN_ERROR",
    "MATOP_ERROR_NO_MATCHING_SIGNATURE",
    "MATOP_ERROR_AMBIGUOUS_SIGNATURE",
    "MATOP_ERROR_SIGNATURE",
    "MatopError",
    "InvalidArgument",
    "NoMatchingSignature",
    "AmbiguousSignature",
    "SignatureError",
    "DimensionMismatch",
    "DomainError",
    "NoMatchError",
    "AmbiguousMatchError",
    "DimensionError",
]
