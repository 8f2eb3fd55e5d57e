"""
Construction context shared by the function factories.
"""

import logging
from typing import Any

from .._config import Config
from .._numeric import numeric_tower
from ..matrix import zeros
from ..matrix.algorithms import Algorithms

logger = logging.getLogger("matop.functions")


class FunctionContext:
    """
    Everything a function factory needs from one configuration.

    Attributes:
        config: The configuration.
        tower: Numeric traits built from config.
        algorithms: Traversals with the configuration's zero test bound in.
    """

    def __init__(self, config: Config):
        self.config = config
        self.tower = numeric_tower(config)
        self.algorithms = Algorithms(self.tower.is_zero)

    def is_zero(self, value: Any) -> bool:
        return self.tower.is_zero(value)

    def truthy(self, value: Any) -> bool:
        return self.tower.truthy(value)

    def zeros(self, m, datatype=None):
        """All-zero matrix with the shape and storage of m."""
        return zeros(m.shape, m.storage(), datatype if datatype is not None else m.datatype)

    def __repr__(self) -> str:
        return f"FunctionContext({self.config!r})"
