"""Kernel ridge regression and its binary classification variant."""

import logging

import numpy as np
import scipy.linalg

from domain.kernels.base import Kernel, as_features
from domain.machines.base import Machine, ProblemType

logger = logging.getLogger(__name__)


def as_labels(labels: object, n_examples: int) -> np.ndarray:
    """Coerce labels into a 1-D array matching the number of examples."""
    y = np.asarray(labels)
    if y.ndim != 1:
        raise ValueError(f"labels must be 1-D, got shape {y.shape}")
    if y.shape[0] != n_examples:
        raise ValueError(f"Got {y.shape[0]} labels for {n_examples} examples")
    return y


class KernelRidgeRegression(Machine):
    """
    Kernel ridge regression: alpha = (K + tau * I)^-1 y.

    The training features are kept with the model; predictions evaluate the
    kernel between them (lhs) and the query features (rhs).
    """

    problem_type = ProblemType.REGRESSION

    def __init__(self, kernel: Kernel, tau: float = 1e-6) -> None:
        if tau < 0:
            raise ValueError(f"tau must be non-negative, got {tau}")
        self.kernel = kernel
        self.tau = float(tau)
        self.alpha_: np.ndarray | None = None
        self.features_: np.ndarray | None = None

    @property
    def is_trained(self) -> bool:
        return self.alpha_ is not None

    def _solve(self, gram: np.ndarray, y: np.ndarray) -> np.ndarray:
        a = gram + self.tau * np.eye(gram.shape[0])
        try:
            return scipy.linalg.solve(a, y, assume_a="sym")
        except scipy.linalg.LinAlgError:
            logger.warning("Kernel matrix is singular (tau=%g); falling back to least squares", self.tau)
            return scipy.linalg.lstsq(a, y)[0]

    def _fit_targets(self, x: np.ndarray, y: np.ndarray) -> None:
        self.kernel.init(x, x)
        gram = self.kernel.get_kernel_matrix()
        self.kernel.cleanup()
        self.alpha_ = self._solve(gram, y)
        self.features_ = x
        logger.debug("%s trained on %d examples", type(self).__name__, x.shape[0])

    def _scores(self, features: object) -> np.ndarray:
        self._require_trained()
        x = as_features(features)
        self.kernel.init(self.features_, x)
        block = self.kernel.get_kernel_matrix()
        self.kernel.cleanup()
        return block.T @ self.alpha_

    def train(self, features: object, labels: object) -> "KernelRidgeRegression":
        x = as_features(features)
        y = as_labels(labels, x.shape[0]).astype(float)
        self._fit_targets(x, y)
        return self

    def apply(self, features: object) -> np.ndarray:
        return self._scores(features)


class KernelRidgeClassifier(KernelRidgeRegression):
    """Binary classifier: regress onto +1/-1 targets and predict by sign."""

    problem_type = ProblemType.BINARY

    def __init__(self, kernel: Kernel, tau: float = 1e-6) -> None:
        super().__init__(kernel=kernel, tau=tau)
        self.classes_: np.ndarray | None = None

    def train(self, features: object, labels: object) -> "KernelRidgeClassifier":
        x = as_features(features)
        y = as_labels(labels, x.shape[0])
        classes = np.unique(y)
        if classes.shape[0] != 2:
            raise ValueError(f"Binary classifier needs exactly two classes, got {classes.tolist()}")
        self.classes_ = classes
        self._fit_targets(x, np.where(y == classes[1], 1.0, -1.0))
        return self

    def decision_function(self, features: object) -> np.ndarray:
        return self._scores(features)

    def apply(self, features: object) -> np.ndarray:
        scores = self.decision_function(features)
        if self.classes_ is None:
            raise RuntimeError(f"{type(self).__name__} has no classes; train() it first")
        return np.where(scores > 0, self.classes_[1], self.classes_[0])
