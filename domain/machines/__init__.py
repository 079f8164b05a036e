"""
Trainable models.

- KernelRidgeRegression / KernelRidgeClassifier: single task
- MultitaskKernelRidgeRegression: tasks coupled through a taxonomy
"""

from domain.machines.base import Machine, ProblemType
from domain.machines.kernel_ridge import KernelRidgeClassifier, KernelRidgeRegression
from domain.machines.multitask import MultitaskKernelRidgeRegression

__all__ = [
    "Machine",
    "ProblemType",
    "KernelRidgeRegression",
    "KernelRidgeClassifier",
    "MultitaskKernelRidgeRegression",
]
