"""Kernel normalizers: per-value rescaling applied on top of a raw kernel."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from domain.kernels.base import Kernel

# Replacement for zero self-similarities in SqrtDiagKernelNormalizer
DIAG_EPSILON = 1e-16


class KernelNormalizer(ABC):
    """
    Base class for kernel normalizers.

    A normalizer is attached to a kernel and is (re)initialised every time the
    kernel's lhs/rhs feature sets change. After that, every kernel value passes
    through `normalize`.
    """

    def init(self, kernel: "Kernel") -> None:
        """Initialise the normalizer for the kernel's current lhs/rhs."""

    @abstractmethod
    def normalize(self, value: float, idx_lhs: int, idx_rhs: int) -> float:
        """Normalize the kernel value between lhs example `idx_lhs` and rhs example `idx_rhs`."""

    @abstractmethod
    def normalize_lhs(self, value: float, idx_lhs: int) -> float:
        """Normalize only the left hand side vector."""

    @abstractmethod
    def normalize_rhs(self, value: float, idx_rhs: int) -> float:
        """Normalize only the right hand side vector."""

    def normalize_matrix(self, matrix: np.ndarray) -> np.ndarray:
        """Normalize a full (num_lhs, num_rhs) block. Subclasses override with a vectorised version."""
        out = np.empty_like(matrix, dtype=float)
        for i, j in np.ndindex(*matrix.shape):
            out[i, j] = self.normalize(float(matrix[i, j]), i, j)
        return out


class IdentityKernelNormalizer(KernelNormalizer):
    """Leaves kernel values untouched."""

    def normalize(self, value: float, idx_lhs: int, idx_rhs: int) -> float:
        return value

    def normalize_lhs(self, value: float, idx_lhs: int) -> float:
        return value

    def normalize_rhs(self, value: float, idx_rhs: int) -> float:
        return value

    def normalize_matrix(self, matrix: np.ndarray) -> np.ndarray:
        return np.asarray(matrix, dtype=float)


def first_element_scale(kernel: "Kernel") -> float:
    """
    Raw kernel value of the first lhs example with itself.

    Raises:
        ValueError: If the kernel has no lhs examples or the value is zero
    """
    if kernel.num_vec_lhs <= 0 or kernel.num_vec_rhs <= 0:
        raise ValueError("Kernel must be initialised with non-empty lhs and rhs")
    first = kernel.lhs[:1]
    scale = float(kernel.evaluate(first, first)[0, 0])
    if scale == 0.0:
        raise ValueError("First-element kernel value is zero; cannot use it as a scale")
    return scale


class FirstElementKernelNormalizer(KernelNormalizer):
    """Divides every kernel value by k(lhs[0], lhs[0])."""

    def __init__(self) -> None:
        self.scale = 1.0

    def init(self, kernel: "Kernel") -> None:
        self.scale = first_element_scale(kernel)

    def normalize(self, value: float, idx_lhs: int, idx_rhs: int) -> float:
        return value / self.scale

    def normalize_lhs(self, value: float, idx_lhs: int) -> float:
        return value / np.sqrt(self.scale)

    def normalize_rhs(self, value: float, idx_rhs: int) -> float:
        return value / np.sqrt(self.scale)

    def normalize_matrix(self, matrix: np.ndarray) -> np.ndarray:
        return np.asarray(matrix, dtype=float) / self.scale


class SqrtDiagKernelNormalizer(KernelNormalizer):
    """
    Normalizes vectors in feature space to norm 1:

        k'(x, y) = k(x, y) / sqrt(k(x, x) * k(y, y))
    """

    def __init__(self) -> None:
        self.sqrtdiag_lhs = np.empty(0)
        self.sqrtdiag_rhs = np.empty(0)

    @staticmethod
    def _sqrt_diag(values: np.ndarray) -> np.ndarray:
        out = np.sqrt(np.abs(values))
        out[out == 0] = DIAG_EPSILON
        return out

    def init(self, kernel: "Kernel") -> None:
        self.sqrtdiag_lhs = self._sqrt_diag(kernel.diagonal(kernel.lhs))
        self.sqrtdiag_rhs = (
            self.sqrtdiag_lhs if kernel.rhs is kernel.lhs else self._sqrt_diag(kernel.diagonal(kernel.rhs))
        )

    def normalize(self, value: float, idx_lhs: int, idx_rhs: int) -> float:
        return value / (self.sqrtdiag_lhs[idx_lhs] * self.sqrtdiag_rhs[idx_rhs])

    def normalize_lhs(self, value: float, idx_lhs: int) -> float:
        return value / self.sqrtdiag_lhs[idx_lhs]

    def normalize_rhs(self, value: float, idx_rhs: int) -> float:
        return value / self.sqrtdiag_rhs[idx_rhs]

    def normalize_matrix(self, matrix: np.ndarray) -> np.ndarray:
        return np.asarray(matrix, dtype=float) / np.outer(self.sqrtdiag_lhs, self.sqrtdiag_rhs)
