"""Task taxonomy: a weighted tree of tasks and the node registry built on it."""

import math
from collections.abc import Iterator

import numpy as np

ROOT_NAME = "root"


def _check_weight(weight: float) -> float:
    w = float(weight)
    if not math.isfinite(w) or w < 0:
        raise ValueError(f"Node weight must be finite and non-negative, got {weight!r}")
    return w


class TaxonomyNode:
    """Single node of the task tree."""

    def __init__(self, beta: float = 1.0) -> None:
        self.beta = _check_weight(beta)
        self.parent: TaxonomyNode | None = None
        self.children: list[TaxonomyNode] = []

    def add_child(self, node: "TaxonomyNode") -> None:
        """Attach `node` below this node."""
        node.parent = self
        self.children.append(node)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def path_to_root(self) -> set["TaxonomyNode"]:
        """
        Collect this node and all of its ancestors up to and including the root.

        Returns:
            Set of nodes on the path to the root
        """
        nodes_on_path: set[TaxonomyNode] = set()
        node: TaxonomyNode | None = self
        while node is not None:
            nodes_on_path.add(node)
            node = node.parent
        return nodes_on_path

    def __repr__(self) -> str:
        return f"TaxonomyNode(beta={self.beta}, children={len(self.children)})"


class Taxonomy:
    """
    Registry of task nodes addressed by name or by dense integer id.

    The root is created up front with id 0 under the name "root". Node ids are
    handed out in creation order and never change, so id-based caches stay
    valid as the tree grows. `revision` is bumped on every change.
    """

    def __init__(self, root_beta: float = 1.0) -> None:
        self.root = TaxonomyNode(beta=root_beta)
        self._nodes: list[TaxonomyNode] = [self.root]
        self._names: list[str] = [ROOT_NAME]
        self._name2id: dict[str, int] = {ROOT_NAME: 0}
        self.revision = 0

    # --- lookup ---

    def get_node(self, task_id: int) -> TaxonomyNode:
        if not 0 <= task_id < len(self._nodes):
            raise IndexError(f"Node id {task_id} out of range [0, {len(self._nodes)})")
        return self._nodes[task_id]

    def get_id(self, name: str) -> int:
        try:
            return self._name2id[name]
        except KeyError:
            raise KeyError(f"Unknown task name: {name!r}") from None

    def get_name(self, task_id: int) -> str:
        self.get_node(task_id)
        return self._names[task_id]

    @property
    def name2id(self) -> dict[str, int]:
        return dict(self._name2id)

    @property
    def num_nodes(self) -> int:
        return len(self._nodes)

    @property
    def num_leaves(self) -> int:
        return sum(1 for node in self._nodes if node.is_leaf)

    def __contains__(self, name: object) -> bool:
        return name in self._name2id

    # --- construction ---

    def add_node(self, parent_name: str, child_name: str, beta: float = 1.0) -> TaxonomyNode:
        """
        Create a node named `child_name` below the node named `parent_name`.

        Args:
            parent_name: Name of an existing node
            child_name: Name for the new node (must be unused)
            beta: Weight of the new node

        Returns:
            The newly created node

        Raises:
            ValueError: If a name is empty, the child name is taken, or beta is invalid
            KeyError: If the parent is unknown
        """
        if not child_name:
            raise ValueError("child_name empty")
        if not parent_name:
            raise ValueError("parent_name empty")
        if child_name in self._name2id:
            raise ValueError(f"Task name already registered: {child_name!r}")

        parent = self._nodes[self.get_id(parent_name)]

        child = TaxonomyNode(beta=beta)
        self._nodes.append(child)
        self._names.append(child_name)
        self._name2id[child_name] = len(self._nodes) - 1
        parent.add_child(child)

        self.revision += 1
        return child

    def edges(self) -> Iterator[tuple[str, str, float]]:
        """Yield (parent_name, child_name, beta) for every non-root node in creation order."""
        index_of = {id(node): i for i, node in enumerate(self._nodes)}
        for i, node in enumerate(self._nodes):
            if node.parent is None:
                continue
            yield self._names[index_of[id(node.parent)]], self._names[i], node.beta

    # --- weights ---

    def get_node_weight(self, idx: int) -> float:
        return self.get_node(idx).beta

    def set_node_weight(self, idx: int, weight: float) -> None:
        self.get_node(idx).beta = _check_weight(weight)
        self.revision += 1

    def set_root_beta(self, beta: float) -> None:
        self.set_node_weight(0, beta)

    # --- similarity ---

    def compute_node_similarity(self, task_lhs: int, task_rhs: int) -> float:
        """
        Similarity between two tasks: the summed weights of their shared ancestors.

        Each node counts as its own ancestor, so the similarity of a task with
        itself is the weight sum along its whole path to the root.
        """
        shared = self.get_node(task_lhs).path_to_root() & self.get_node(task_rhs).path_to_root()
        return float(sum(node.beta for node in shared))

    def similarity_matrix(self) -> np.ndarray:
        """All-pairs task similarity, shape (num_nodes, num_nodes)."""
        n = self.num_nodes
        paths = [node.path_to_root() for node in self._nodes]
        out = np.empty((n, n), dtype=float)
        for i in range(n):
            for j in range(i, n):
                gamma = float(sum(node.beta for node in paths[i] & paths[j]))
                out[i, j] = gamma
                out[j, i] = gamma
        return out

    def __repr__(self) -> str:
        return f"Taxonomy(num_nodes={self.num_nodes}, num_leaves={self.num_leaves})"
