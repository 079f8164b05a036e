"""Kernel functions evaluated between a left hand side and a right hand side feature set."""

from abc import ABC, abstractmethod

import numpy as np

from domain.kernels.normalizers import IdentityKernelNormalizer, KernelNormalizer


def as_features(x: object, what: str = "features") -> np.ndarray:
    """
    Coerce `x` into a dense float64 feature matrix of shape (n_examples, n_features).

    Raises:
        ValueError: If the input is not 2-D or has no examples
    """
    arr = np.array(x, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"{what} must be a 2-D array (n_examples, n_features), got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise ValueError(f"{what} must contain at least one example")
    return arr


def squared_distances(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Pairwise squared euclidean distances, clipped at zero."""
    aa = np.sum(a**2, axis=1)[:, None]
    bb = np.sum(b**2, axis=1)[None, :]
    return np.maximum(aa + bb - 2.0 * (a @ b.T), 0.0)


class Kernel(ABC):
    """
    Base kernel.

    `init(lhs, rhs)` binds the two feature sets and initialises the normalizer;
    `kernel(i, j)` and `get_kernel_matrix()` then return normalized values, while
    `compute(i, j)` and `evaluate(a, b)` return raw ones.
    """

    name = "kernel"

    def __init__(self, normalizer: KernelNormalizer | None = None) -> None:
        self.normalizer: KernelNormalizer = normalizer if normalizer is not None else IdentityKernelNormalizer()
        self.lhs: np.ndarray | None = None
        self.rhs: np.ndarray | None = None

    # --- raw evaluation (implemented by subclasses) ---

    @abstractmethod
    def evaluate(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Raw kernel block between the rows of `a` and the rows of `b`."""

    def diagonal(self, x: np.ndarray) -> np.ndarray:
        """Raw k(x_i, x_i) for every row of `x`."""
        return np.array([self.evaluate(x[i : i + 1], x[i : i + 1])[0, 0] for i in range(x.shape[0])])

    # --- binding ---

    def init(self, lhs: object, rhs: object | None = None) -> "Kernel":
        lhs_arr = as_features(lhs, "lhs")
        rhs_arr = lhs_arr if rhs is None else as_features(rhs, "rhs")
        if lhs_arr.shape[1] != rhs_arr.shape[1]:
            raise ValueError(
                f"lhs and rhs feature dimensions differ: {lhs_arr.shape[1]} != {rhs_arr.shape[1]}"
            )
        self.lhs, self.rhs = lhs_arr, rhs_arr
        self.normalizer.init(self)
        return self

    def set_normalizer(self, normalizer: KernelNormalizer) -> None:
        self.normalizer = normalizer
        if self.lhs is not None:
            normalizer.init(self)

    def cleanup(self) -> None:
        """Drop the bound feature sets."""
        self.lhs = None
        self.rhs = None

    @property
    def num_vec_lhs(self) -> int:
        return 0 if self.lhs is None else int(self.lhs.shape[0])

    @property
    def num_vec_rhs(self) -> int:
        return 0 if self.rhs is None else int(self.rhs.shape[0])

    def _require_init(self) -> tuple[np.ndarray, np.ndarray]:
        if self.lhs is None or self.rhs is None:
            raise RuntimeError(f"{type(self).__name__} used before init(lhs, rhs)")
        return self.lhs, self.rhs

    # --- normalized evaluation ---

    def compute(self, idx_a: int, idx_b: int) -> float:
        """Raw kernel value between lhs[idx_a] and rhs[idx_b]."""
        lhs, rhs = self._require_init()
        if not 0 <= idx_a < lhs.shape[0]:
            raise IndexError(f"lhs index {idx_a} out of range [0, {lhs.shape[0]})")
        if not 0 <= idx_b < rhs.shape[0]:
            raise IndexError(f"rhs index {idx_b} out of range [0, {rhs.shape[0]})")
        return float(self.evaluate(lhs[idx_a : idx_a + 1], rhs[idx_b : idx_b + 1])[0, 0])

    def kernel(self, idx_a: int, idx_b: int) -> float:
        return self.normalizer.normalize(self.compute(idx_a, idx_b), idx_a, idx_b)

    def get_kernel_matrix(self) -> np.ndarray:
        lhs, rhs = self._require_init()
        return self.normalizer.normalize_matrix(self.evaluate(lhs, rhs))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(normalizer={type(self.normalizer).__name__})"


class LinearKernel(Kernel):
    """k(x, y) = x . y"""

    name = "linear"

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return a @ b.T

    def diagonal(self, x: np.ndarray) -> np.ndarray:
        return np.sum(x * x, axis=1)


class GaussianKernel(Kernel):
    """k(x, y) = exp(-||x - y||^2 / width)"""

    name = "gaussian"

    def __init__(self, width: float = 1.0, normalizer: KernelNormalizer | None = None) -> None:
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        super().__init__(normalizer=normalizer)
        self.width = float(width)

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return np.exp(-squared_distances(a, b) / self.width)

    def diagonal(self, x: np.ndarray) -> np.ndarray:
        return np.ones(x.shape[0])


class PolynomialKernel(Kernel):
    """k(x, y) = (x . y + c)^degree with c = 1 when inhomogeneous, else 0."""

    name = "polynomial"

    def __init__(
        self,
        degree: int = 2,
        inhomogeneous: bool = True,
        normalizer: KernelNormalizer | None = None,
    ) -> None:
        if degree < 1:
            raise ValueError(f"degree must be >= 1, got {degree}")
        super().__init__(normalizer=normalizer)
        self.degree = int(degree)
        self.inhomogeneous = bool(inhomogeneous)

    @property
    def _offset(self) -> float:
        return 1.0 if self.inhomogeneous else 0.0

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return (a @ b.T + self._offset) ** self.degree

    def diagonal(self, x: np.ndarray) -> np.ndarray:
        return (np.sum(x * x, axis=1) + self._offset) ** self.degree
