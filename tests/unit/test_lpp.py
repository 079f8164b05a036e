import numpy as np
import pytest

from domain.converters import LocalityPreservingProjections
from tools.make_demo_data import make_sine_table


def _sine_data(n: int = 100, dim: int = 3) -> np.ndarray:
    """Noisy phase-shifted sine columns."""
    rng = np.random.default_rng(0)
    x = np.arange(n, dtype=float)[:, None] / 10.0 + np.arange(dim, dtype=float)[None, :]
    return np.sin(x) + 0.01 * rng.normal(size=(n, dim))


def test_sine_example_embeds_to_two_dimensions() -> None:
    data = make_sine_table(n_examples=100, dim=3).to_numpy()
    assert data[0, 1] == pytest.approx(np.sin(1.0 / 300.0 * 3.14))
    assert data[1, 0] == pytest.approx(np.sin(3.0 / 300.0 * 3.14))
    lpp = LocalityPreservingProjections(target_dim=2, k=10, n_jobs=4)

    embedding = lpp.embed(data)

    assert embedding.shape == (100, 2)
    assert np.all(np.isfinite(embedding))
    assert lpp.is_fitted
    assert lpp.projection_.shape == (3, 2)
    assert lpp.eigenvalues_[0] <= lpp.eigenvalues_[1]


def test_transform_reproduces_training_embedding() -> None:
    data = _sine_data()
    lpp = LocalityPreservingProjections(target_dim=2, k=10)
    embedding = lpp.embed(data)
    np.testing.assert_allclose(lpp.transform(data), embedding, atol=1e-10)


def test_transform_projects_new_points_linearly() -> None:
    data = _sine_data()
    lpp = LocalityPreservingProjections(target_dim=1, k=5).fit(data)
    new = data[:4] + 1.0
    np.testing.assert_allclose(lpp.transform(new), (new - lpp.mean_) @ lpp.projection_)


def test_separated_clusters_stay_apart() -> None:
    rng = np.random.default_rng(1)
    left = rng.normal(scale=0.3, size=(20, 2)) + [-5.0, 0.0]
    right = rng.normal(scale=0.3, size=(20, 2)) + [5.0, 0.0]
    data = np.vstack([left, right])

    embedding = LocalityPreservingProjections(target_dim=1, k=5).embed(data).ravel()

    assert np.all(np.sign(embedding[:20]) == np.sign(embedding[0]))
    assert np.all(np.sign(embedding[20:]) == -np.sign(embedding[0]))


def test_duplicate_points_are_handled() -> None:
    data = np.vstack([_sine_data(30, 3), _sine_data(30, 3)[:5]])
    embedding = LocalityPreservingProjections(target_dim=2, k=4).embed(data)
    assert embedding.shape == (35, 2)
    assert np.all(np.isfinite(embedding))


def test_weight_matrix_is_symmetric_without_self_loops() -> None:
    data = _sine_data(40, 3)
    w = LocalityPreservingProjections(k=3)._weight_matrix(data).toarray()
    np.testing.assert_allclose(w, w.T)
    assert np.all(np.diag(w) == 0.0)
    assert np.all((w > 0).sum(axis=1) >= 3)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"target_dim": 0},
        {"k": 0},
        {"width": 0.0},
        {"regularization": -1.0},
    ],
)
def test_invalid_parameters(kwargs) -> None:
    with pytest.raises(ValueError):
        LocalityPreservingProjections(**kwargs)


def test_fit_validates_data_shape() -> None:
    data = _sine_data(20, 3)
    with pytest.raises(ValueError):
        LocalityPreservingProjections(target_dim=4).fit(data)
    with pytest.raises(ValueError):
        LocalityPreservingProjections(k=20).fit(data)


def test_transform_before_fit_raises() -> None:
    with pytest.raises(RuntimeError):
        LocalityPreservingProjections().transform(_sine_data(10, 3))


def test_transform_rejects_wrong_dimension() -> None:
    lpp = LocalityPreservingProjections(target_dim=1, k=3).fit(_sine_data(20, 3))
    with pytest.raises(ValueError):
        lpp.transform(np.ones((2, 2)))
