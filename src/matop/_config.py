"""
matop Config - Immutable Configuration

Configuration is a frozen value produced once and passed explicitly into
kernel construction (see matop.create). Kernels never read ambient state, so
two function namespaces built from different configurations can be used
side by side, from any thread.

Example:
    >>> import matop
    >>> loose = matop.DEFAULT_CONFIG.replace(tolerance=matop.ToleranceConfig(epsilon=1e-6))
    >>> fns = matop.create(loose)
    >>> fns.equal(1.0, 1.0 + 1e-9)
    True
"""

from __future__ import annotations

import decimal
import logging
import os
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger("matop.config")


# =============================================================================
# Configuration Sections
# =============================================================================

@dataclass(frozen=True)
class ToleranceConfig:
    """Tolerances used by approximate comparisons and zero tests."""
    epsilon: float = 1e-12         # Relative tolerance
    abs_tol: float = 1e-15         # Absolute floor, used near zero

    def __post_init__(self):
        if self.epsilon < 0 or self.abs_tol < 0:
            raise ValueError("Tolerances must be non-negative")


@dataclass(frozen=True)
class NumericConfig:
    """Configuration for arbitrary precision (BigNumber) arithmetic."""
    precision: int = 64            # Significant digits
    rounding: str = decimal.ROUND_HALF_UP

    def __post_init__(self):
        if self.precision < 1:
            raise ValueError(f"precision must be positive, got {self.precision}")


@dataclass(frozen=True)
class MatrixConfig:
    """Configuration for matrix construction."""
    storage: str = "dense"         # Storage used when converting arrays

    def __post_init__(self):
        if self.storage not in ("dense", "sparse"):
            raise ValueError(f"Unknown matrix storage: {self.storage!r}")


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Complete matop configuration.

    Attributes:
        tolerance: Comparison tolerances.
        numeric: BigNumber precision and rounding.
        matrix: Matrix construction defaults.
    """
    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    numeric: NumericConfig = field(default_factory=NumericConfig)
    matrix: MatrixConfig = field(default_factory=MatrixConfig)

    @property
    def epsilon(self) -> float:
        """Relative comparison tolerance."""
        return self.tolerance.epsilon

    def replace(self, **sections: Any) -> "Config":
        """Return a copy with whole sections replaced."""
        return replace(self, **sections)

    def decimal_context(self) -> decimal.Context:
        """
        Build the decimal context used by BigNumber kernels.

        Traps are disabled so that division by zero and invalid operations
        produce Infinity and NaN instead of raising.
        """
        return decimal.Context(
            prec=self.numeric.precision,
            rounding=self.numeric.rounding,
            traps=[],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """Build a configuration from the output of to_dict()."""
        return cls(
            tolerance=ToleranceConfig(**data.get("tolerance", {})),
            numeric=NumericConfig(**data.get("numeric", {})),
            matrix=MatrixConfig(**data.get("matrix", {})),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Build a configuration, applying overrides from environment variables.

        Recognised variables:
            MATOP_EPSILON: relative tolerance
            MATOP_ABS_TOL: absolute tolerance
            MATOP_PRECISION: BigNumber significant digits
        """
        env = os.environ if environ is None else environ
        config = cls()

        tolerance = {}
        if env.get("MATOP_EPSILON"):
            tolerance["epsilon"] = float(env["MATOP_EPSILON"])
        if env.get("MATOP_ABS_TOL"):
            tolerance["abs_tol"] = float(env["MATOP_ABS_TOL"])
        if tolerance:
            config = config.replace(tolerance=replace(config.tolerance, **tolerance))
            logger.info("Tolerance overridden from environment: %s", tolerance)

        if env.get("MATOP_PRECISION"):
            precision = int(env["MATOP_PRECISION"])
            config = config.replace(numeric=replace(config.numeric, precision=precision))
            logger.info("BigNumber precision overridden from environment: %d", precision)

        return config

    def __repr__(self) -> str:
        return f"Config({self.to_dict()})"


# =============================================================================
# Default Instance
# =============================================================================

DEFAULT_CONFIG = Config.from_env()


def get_config() -> Config:
    """Get the default configuration instance."""
    return DEFAULT_CONFIG


__all__ = [
    "ToleranceConfig",
    "NumericConfig",
    "MatrixConfig",
    "Config",
    "DEFAULT_CONFIG",
    "get_config",
]
