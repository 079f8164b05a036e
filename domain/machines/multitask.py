"""Multitask kernel ridge regression over a task taxonomy."""

import logging
from collections.abc import Sequence

import numpy as np

from domain.kernels.base import Kernel, as_features
from domain.kernels.multitask import MultitaskKernelTreeNormalizer
from domain.machines.kernel_ridge import KernelRidgeRegression, as_labels
from domain.taxonomy.tree import Taxonomy

logger = logging.getLogger(__name__)


class MultitaskKernelRidgeRegression(KernelRidgeRegression):
    """
    Kernel ridge regression where examples of related tasks share information.

    The kernel gets a MultitaskKernelTreeNormalizer, so the effective kernel is
    the base kernel scaled by the taxonomy similarity of the examples' tasks.
    """

    def __init__(self, kernel: Kernel, taxonomy: Taxonomy, tau: float = 1e-6) -> None:
        super().__init__(kernel=kernel, tau=tau)
        self.taxonomy = taxonomy
        self.normalizer = MultitaskKernelTreeNormalizer(taxonomy=taxonomy)
        self.kernel.cleanup()
        self.kernel.set_normalizer(self.normalizer)
        self.tasks_: list[str] | None = None

    def _check_tasks(self, tasks: Sequence[str], n_examples: int) -> list[str]:
        names = [str(t) for t in tasks]
        if len(names) != n_examples:
            raise ValueError(f"Got {len(names)} task assignments for {n_examples} examples")
        return names

    def train(self, features: object, labels: object, tasks: Sequence[str] = ()) -> "MultitaskKernelRidgeRegression":
        x = as_features(features)
        y = as_labels(labels, x.shape[0]).astype(float)
        names = self._check_tasks(tasks, x.shape[0])

        self.normalizer.set_task_vector(names)
        self._fit_targets(x, y)
        self.tasks_ = names
        logger.debug("Trained on %d tasks", len(set(names)))
        return self

    def apply(self, features: object, tasks: Sequence[str] = ()) -> np.ndarray:
        self._require_trained()
        if self.tasks_ is None:
            raise RuntimeError(f"{type(self).__name__} has no training tasks; train() it first")
        x = as_features(features)
        names = self._check_tasks(tasks, x.shape[0])

        self.normalizer.set_task_vector_lhs(self.tasks_)
        self.normalizer.set_task_vector_rhs(names)
        return self._scores(x)

    def set_node_weight(self, name: str, weight: float) -> None:
        """Change a task node's weight; takes effect on the next train/apply."""
        self.normalizer.set_node_weight(self.taxonomy.get_id(name), weight)
