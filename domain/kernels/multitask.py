"""Multitask kernel normalizer driven by a task taxonomy."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from domain.kernels.normalizers import KernelNormalizer, first_element_scale
from domain.taxonomy.tree import Taxonomy

if TYPE_CHECKING:
    from domain.kernels.base import Kernel

logger = logging.getLogger(__name__)


class MultitaskKernelTreeNormalizer(KernelNormalizer):
    """
    Multitask learning through a modified kernel function.

    Every example belongs to a task (a node of the taxonomy). The kernel value
    between two examples is first normalized by the value of the first lhs
    example with itself and then multiplied with the similarity of the two
    examples' tasks:

        k'(x_i, x_j) = k(x_i, x_j) / k(x_0, x_0) * gamma(task_i, task_j)

    gamma is the summed weight of the tasks' shared ancestors. All pairwise
    gammas are kept in a (num_nodes, num_nodes) dependency matrix which is
    refreshed whenever a weight changes through this normalizer, and rebuilt on
    the next lookup when the taxonomy was changed behind its back.
    """

    def __init__(
        self,
        task_lhs: Sequence[str] = (),
        task_rhs: Sequence[str] = (),
        taxonomy: Taxonomy | None = None,
    ) -> None:
        self.taxonomy = taxonomy if taxonomy is not None else Taxonomy()
        self.scale = 1.0
        self.task_vector_lhs: list[int] = []
        self.task_vector_rhs: list[int] = []

        self.set_task_vector_lhs(task_lhs)
        self.set_task_vector_rhs(task_rhs)

        self.num_nodes = self.taxonomy.num_nodes
        logger.debug("Multitask tree normalizer: num_nodes=%d", self.num_nodes)

        self.dependency_matrix = np.zeros((self.num_nodes, self.num_nodes), dtype=float)
        self._cache_revision = -1
        self.update_cache()

    # --- KernelNormalizer API ---

    def init(self, kernel: "Kernel") -> None:
        num_lhs = kernel.num_vec_lhs
        num_rhs = kernel.num_vec_rhs
        if num_lhs <= 0 or num_rhs <= 0:
            raise ValueError("Kernel must be initialised with non-empty lhs and rhs")
        if len(self.task_vector_lhs) != num_lhs:
            raise ValueError(f"lhs task vector has {len(self.task_vector_lhs)} entries, kernel lhs has {num_lhs}")
        if len(self.task_vector_rhs) != num_rhs:
            raise ValueError(f"rhs task vector has {len(self.task_vector_rhs)} entries, kernel rhs has {num_rhs}")

        # same as first-element normalizer
        self.scale = first_element_scale(kernel)

    def normalize(self, value: float, idx_lhs: int, idx_rhs: int) -> float:
        task_idx_lhs = self.task_vector_lhs[idx_lhs]
        task_idx_rhs = self.task_vector_rhs[idx_rhs]
        task_similarity = self.get_node_similarity(task_idx_lhs, task_idx_rhs)
        return (value / self.scale) * task_similarity

    def normalize_lhs(self, value: float, idx_lhs: int) -> float:
        raise NotImplementedError("normalize_lhs not implemented")

    def normalize_rhs(self, value: float, idx_rhs: int) -> float:
        raise NotImplementedError("normalize_rhs not implemented")

    def normalize_matrix(self, matrix: np.ndarray) -> np.ndarray:
        matrix = np.asarray(matrix, dtype=float)
        expected = (len(self.task_vector_lhs), len(self.task_vector_rhs))
        if matrix.shape != expected:
            raise ValueError(f"Kernel block shape {matrix.shape} does not match task vectors {expected}")
        self._ensure_fresh()
        gamma = self.dependency_matrix[np.ix_(self.task_vector_lhs, self.task_vector_rhs)]
        return (matrix / self.scale) * gamma

    # --- task vectors ---

    def _to_ids(self, names: Sequence[str]) -> list[int]:
        return [self.taxonomy.get_id(name) for name in names]

    def set_task_vector_lhs(self, vec: Sequence[str]) -> None:
        """Assign a task (by name) to each left hand side example."""
        self.task_vector_lhs = self._to_ids(vec)

    def set_task_vector_rhs(self, vec: Sequence[str]) -> None:
        """Assign a task (by name) to each right hand side example."""
        self.task_vector_rhs = self._to_ids(vec)

    def set_task_vector(self, vec: Sequence[str]) -> None:
        """Use the same task assignment on both sides."""
        self.set_task_vector_lhs(vec)
        self.set_task_vector_rhs(vec)

    # --- taxonomy / cache ---

    def update_cache(self) -> None:
        """Recompute the dependency matrix from the taxonomy."""
        self.num_nodes = self.taxonomy.num_nodes
        self.dependency_matrix = self.taxonomy.similarity_matrix()
        self._cache_revision = self.taxonomy.revision

    def _ensure_fresh(self) -> None:
        if self._cache_revision != self.taxonomy.revision:
            logger.debug("Taxonomy changed (revision %d); rebuilding similarity cache", self.taxonomy.revision)
            self.update_cache()

    def get_num_nodes(self) -> int:
        return self.taxonomy.num_nodes

    def get_node_weight(self, idx: int) -> float:
        return self.taxonomy.get_node_weight(idx)

    def set_node_weight(self, idx: int, weight: float) -> None:
        self.taxonomy.set_node_weight(idx, weight)
        self.update_cache()

    def _check_node(self, idx: int) -> None:
        if not 0 <= idx < self.num_nodes:
            raise IndexError(f"Node id {idx} out of range [0, {self.num_nodes})")

    def get_node_similarity(self, node_lhs: int, node_rhs: int) -> float:
        self._ensure_fresh()
        self._check_node(node_lhs)
        self._check_node(node_rhs)
        return float(self.dependency_matrix[node_lhs, node_rhs])

    def set_node_similarity(self, node_lhs: int, node_rhs: int, similarity: float) -> None:
        """
        Override one cached similarity entry.

        The override lasts until the cache is next rebuilt (any taxonomy change).
        """
        self._ensure_fresh()
        self._check_node(node_lhs)
        self._check_node(node_rhs)
        self.dependency_matrix[node_lhs, node_rhs] = float(similarity)
