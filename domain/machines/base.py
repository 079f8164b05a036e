"""Machine interface shared by all trainable models."""

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np


class ProblemType(str, Enum):
    """Kind of labels a machine learns from."""

    BINARY = "binary"
    REGRESSION = "regression"


class Machine(ABC):
    """Trainable model: `train` on labelled features, `apply` to new features."""

    problem_type: ProblemType

    @property
    @abstractmethod
    def is_trained(self) -> bool: ...

    @abstractmethod
    def train(self, *args, **kwargs) -> "Machine": ...

    @abstractmethod
    def apply(self, *args, **kwargs) -> np.ndarray: ...

    def _require_trained(self) -> None:
        if not self.is_trained:
            raise RuntimeError(f"{type(self).__name__} used before train()")
