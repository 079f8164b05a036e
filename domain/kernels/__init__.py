"""
Kernel functions and kernel normalizers.

Provides:
- Linear, Gaussian and polynomial kernels over dense feature matrices
- Identity, first-element and sqrt-diagonal normalizers
- The taxonomy-driven multitask normalizer
"""

from domain.kernels.base import GaussianKernel, Kernel, LinearKernel, PolynomialKernel, as_features
from domain.kernels.multitask import MultitaskKernelTreeNormalizer
from domain.kernels.normalizers import (
    FirstElementKernelNormalizer,
    IdentityKernelNormalizer,
    KernelNormalizer,
    SqrtDiagKernelNormalizer,
)

__all__ = [
    # Kernels
    "Kernel",
    "LinearKernel",
    "GaussianKernel",
    "PolynomialKernel",
    "as_features",
    # Normalizers
    "KernelNormalizer",
    "IdentityKernelNormalizer",
    "FirstElementKernelNormalizer",
    "SqrtDiagKernelNormalizer",
    "MultitaskKernelTreeNormalizer",
]
