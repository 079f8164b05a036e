"""Converter interface: dimensionality reduction of dense feature matrices."""

from abc import ABC, abstractmethod

import numpy as np

from domain.kernels.base import as_features


class Converter(ABC):
    """Learns a mapping on `fit` and applies it with `transform`."""

    target_dim: int

    @property
    @abstractmethod
    def is_fitted(self) -> bool: ...

    @abstractmethod
    def fit(self, features: object) -> "Converter": ...

    @abstractmethod
    def transform(self, features: object) -> np.ndarray: ...

    def embed(self, features: object) -> np.ndarray:
        """Fit on `features` and return their embedding, shape (n_examples, target_dim)."""
        x = as_features(features)
        return self.fit(x).transform(x)
