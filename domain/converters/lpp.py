"""Locality Preserving Projections."""

import logging

import numpy as np
import scipy.linalg
from scipy import sparse
from sklearn.neighbors import NearestNeighbors

from domain.converters.base import Converter
from domain.kernels.base import as_features

logger = logging.getLogger(__name__)


class LocalityPreservingProjections(Converter):
    """
    Linear dimensionality reduction preserving local neighbourhoods (He & Niyogi, 2003).

    A symmetric k-nearest-neighbour graph is weighted with the heat kernel
    exp(-||x_i - x_j||^2 / width). With D the degree matrix and L = D - W the
    graph Laplacian, the projection is given by the eigenvectors belonging to
    the smallest eigenvalues of

        X^T L X a = lambda X^T D X a

    Unlike Laplacian eigenmaps, the result is an explicit linear map, so new
    examples can be projected with `transform`.

    Args:
        target_dim: Dimension of the embedding
        k: Number of nearest neighbours used to build the graph
        width: Heat kernel width
        n_jobs: Parallel workers for the neighbour search (None = 1, -1 = all cores)
        regularization: Ridge added to X^T D X (relative to its mean diagonal)
    """

    def __init__(
        self,
        target_dim: int = 2,
        k: int = 3,
        width: float = 1.0,
        n_jobs: int | None = None,
        regularization: float = 1e-9,
    ) -> None:
        if target_dim < 1:
            raise ValueError(f"target_dim must be >= 1, got {target_dim}")
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if regularization < 0:
            raise ValueError(f"regularization must be non-negative, got {regularization}")

        self.target_dim = int(target_dim)
        self.k = int(k)
        self.width = float(width)
        self.n_jobs = n_jobs
        self.regularization = float(regularization)

        self.mean_: np.ndarray | None = None
        self.projection_: np.ndarray | None = None
        self.eigenvalues_: np.ndarray | None = None

    @property
    def is_fitted(self) -> bool:
        return self.projection_ is not None

    def _weight_matrix(self, x: np.ndarray) -> sparse.csr_matrix:
        """Symmetric heat-kernel weights on the k-nearest-neighbour graph."""
        n_examples = x.shape[0]
        nn = NearestNeighbors(n_neighbors=self.k + 1, n_jobs=self.n_jobs).fit(x)
        distances, indices = nn.kneighbors(x)

        rows = np.repeat(np.arange(n_examples), self.k + 1)
        cols = indices.ravel()
        dist = distances.ravel()
        # drop self-loops; with duplicate points self is not always the first hit
        keep = cols != rows
        rows, cols, dist = rows[keep], cols[keep], dist[keep]

        weights = sparse.coo_matrix(
            (np.exp(-(dist**2) / self.width), (rows, cols)),
            shape=(n_examples, n_examples),
        ).tocsr()
        return weights.maximum(weights.T).tocsr()

    def fit(self, features: object) -> "LocalityPreservingProjections":
        x = as_features(features)
        n_examples, n_features = x.shape

        if self.target_dim > n_features:
            raise ValueError(f"target_dim={self.target_dim} exceeds the number of features ({n_features})")
        if self.k >= n_examples:
            raise ValueError(f"k={self.k} must be smaller than the number of examples ({n_examples})")

        self.mean_ = x.mean(axis=0)
        xc = x - self.mean_

        w = self._weight_matrix(xc)
        degree = np.asarray(w.sum(axis=1)).ravel()
        laplacian = sparse.diags(degree) - w

        lhs = xc.T @ (laplacian @ xc)
        rhs = xc.T @ (degree[:, None] * xc)
        lhs = 0.5 * (lhs + lhs.T)
        rhs = 0.5 * (rhs + rhs.T)

        ridge = self.regularization * max(float(np.trace(rhs)) / n_features, 1.0)
        rhs = rhs + ridge * np.eye(n_features)

        eigenvalues, eigenvectors = scipy.linalg.eigh(lhs, rhs, subset_by_index=[0, self.target_dim - 1])
        self.eigenvalues_ = eigenvalues
        self.projection_ = eigenvectors

        logger.debug(
            "LPP fitted: n=%d, d=%d -> %d, k=%d, eigenvalues=%s",
            n_examples,
            n_features,
            self.target_dim,
            self.k,
            np.round(eigenvalues, 6).tolist(),
        )
        return self

    def transform(self, features: object) -> np.ndarray:
        if self.projection_ is None or self.mean_ is None:
            raise RuntimeError("LocalityPreservingProjections used before fit()")
        x = as_features(features)
        if x.shape[1] != self.mean_.shape[0]:
            raise ValueError(f"Expected {self.mean_.shape[0]} features, got {x.shape[1]}")
        return (x - self.mean_) @ self.projection_
