"""
Signature Patterns

Parses pattern strings such as ``"number | BigNumber, ...any"`` into
Signature objects once, at registration time. Matching a call then only
compares Kind values against frozensets.

Grammar:
    signature := param ("," param)*  |  ""
    param     := ["..."] type ("|" type)*
    type      := a Kind name, an alias such as "Matrix", or "any"

Only the last parameter may be variadic; a variadic parameter matches one
or more trailing arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple, Union

from .._errors import SignatureError
from .._typing import KIND_ORDER, Kind, lookup_type_name

__all__ = ['Param', 'Signature', 'parse_signature']


@dataclass(frozen=True)
class Param:
    """
    One parameter of a signature.

    Attributes:
        kinds: Accepted kinds, or None for the wildcard 'any'.
        variadic: Whether the parameter absorbs all remaining arguments.
    """
    kinds: Optional[FrozenSet[Kind]]
    variadic: bool = False

    @property
    def is_any(self) -> bool:
        return self.kinds is None

    @property
    def is_union(self) -> bool:
        return self.kinds is not None and len(self.kinds) > 1

    def matches(self, kind: Kind) -> bool:
        return self.kinds is None or kind in self.kinds

    def __str__(self) -> str:
        prefix = "..." if self.variadic else ""
        if self.kinds is None:
            return prefix + "any"
        names = sorted(self.kinds, key=KIND_ORDER.__getitem__)
        return prefix + " | ".join(k.value for k in names)


@dataclass(frozen=True)
class Signature:
    """An ordered sequence of parameters."""
    params: Tuple[Param, ...]

    @property
    def variadic(self) -> bool:
        return bool(self.params) and self.params[-1].variadic

    @property
    def rank(self) -> Tuple[int, int, int]:
        """
        Specificity rank, lower is more specific.

        Ordered by (variadic, number of 'any' params, number of unions).
        """
        n_any = sum(1 for p in self.params if p.is_any)
        n_union = sum(1 for p in self.params if p.is_union)
        return (int(self.variadic), n_any, n_union)

    @property
    def is_concrete(self) -> bool:
        """True when every parameter names exactly one kind."""
        return not self.variadic and all(
            p.kinds is not None and len(p.kinds) == 1 for p in self.params
        )

    def kinds(self) -> Tuple[Kind, ...]:
        """Kinds of a concrete signature, in order."""
        return tuple(next(iter(p.kinds)) for p in self.params)

    def matches(self, kinds: Sequence[Kind]) -> bool:
        params = self.params
        if not self.variadic:
            if len(kinds) != len(params):
                return False
            return all(p.matches(k) for p, k in zip(params, kinds))

        fixed = len(params) - 1
        if len(kinds) < len(params):
            return False
        if not all(p.matches(k) for p, k in zip(params[:fixed], kinds)):
            return False
        last = params[-1]
        return all(last.matches(k) for k in kinds[fixed:])

    def __str__(self) -> str:
        return ", ".join(str(p) for p in self.params)


def _parse_param(text: str, source: str, is_last: bool) -> Param:
    variadic = text.startswith("...")
    if variadic:
        if not is_last:
            raise SignatureError(f"Only the last parameter may be variadic in signature {source!r}")
        text = text[3:].strip()

    names = [name.strip() for name in text.split("|")]
    kinds = set()
    for name in names:
        if not name:
            raise SignatureError(f"Empty type name in signature {source!r}")
        if name == "any":
            return Param(None, variadic)
        resolved = lookup_type_name(name)
        if resolved is None:
            raise SignatureError(f"Unknown type {name!r} in signature {source!r}")
        kinds.update(resolved)
    return Param(frozenset(kinds), variadic)


def parse_signature(spec: Union[str, Sequence[str], Signature]) -> Signature:
    """
    Parse a signature.

    Args:
        spec: Pattern string, a sequence of type names (one per
            parameter), or an already parsed Signature.

    Returns:
        Parsed Signature.

    Raises:
        SignatureError: On unknown type names or a misplaced variadic.
    """
    if isinstance(spec, Signature):
        return spec
    if isinstance(spec, str):
        text = spec.strip()
        parts = [part.strip() for part in text.split(",")] if text else []
        source = spec
    else:
        parts = [str(part).strip() for part in spec]
        source = ", ".join(parts)

    params = []
    for i, part in enumerate(parts):
        if not part:
            raise SignatureError(f"Empty parameter in signature {source!r}")
        params.append(_parse_param(part, source, i == len(parts) - 1))
    return Signature(tuple(params))

