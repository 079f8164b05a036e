import joblib
import numpy as np
import pytest

from domain.converters import LocalityPreservingProjections
from domain.kernels import GaussianKernel, LinearKernel, PolynomialKernel
from domain.machines import KernelRidgeClassifier, KernelRidgeRegression, Machine, MultitaskKernelRidgeRegression
from infrastructure.io import load_model, save_model
from infrastructure.io.models import MODEL_FORMAT_VERSION

RNG = np.random.default_rng(7)
X_TRAIN = RNG.normal(size=(24, 3))
X_TEST = RNG.normal(size=(6, 3))
TASKS_TRAIN = ["A1", "A2", "B1"] * 8
TASKS_TEST = ["B1", "A1", "A2"] * 2


def _regression(taxonomy):
    return KernelRidgeRegression(PolynomialKernel(degree=2), tau=0.1).train(X_TRAIN, X_TRAIN[:, 0] ** 2)


def _classifier(taxonomy):
    labels = np.where(X_TRAIN[:, 1] > 0, "up", "down")
    return KernelRidgeClassifier(LinearKernel(), tau=0.1).train(X_TRAIN, labels)


def _multitask(taxonomy):
    y = X_TRAIN.sum(axis=1)
    return MultitaskKernelRidgeRegression(GaussianKernel(width=3.0), taxonomy, tau=0.01).train(
        X_TRAIN, y, TASKS_TRAIN
    )


def _apply(obj, x, tasks):
    if isinstance(obj, MultitaskKernelRidgeRegression):
        return obj.apply(x, tasks)
    if isinstance(obj, Machine):
        return obj.apply(x)
    return obj.transform(x)


@pytest.mark.parametrize(
    "build",
    [
        _regression,
        _classifier,
        _multitask,
        lambda taxonomy: LocalityPreservingProjections(target_dim=2, k=5).fit(X_TRAIN),
    ],
    ids=["krr", "krr_classifier", "multitask_krr", "lpp"],
)
def test_trained_model_round_trip(tmp_path, small_taxonomy, build) -> None:
    obj = build(small_taxonomy)
    expected = _apply(obj, X_TEST, TASKS_TEST)

    path = save_model(obj, tmp_path / "nested" / "model.joblib")
    loaded = load_model(path)

    assert type(loaded) is type(obj)
    if isinstance(obj, Machine):
        # predictions need the training features, so they travel with the model
        np.testing.assert_array_equal(loaded.features_, X_TRAIN)
    actual = _apply(loaded, X_TEST, TASKS_TEST)
    if expected.dtype.kind in "fc":
        np.testing.assert_allclose(actual, expected)
    else:
        assert actual.tolist() == expected.tolist()


def test_multitask_model_keeps_its_taxonomy(tmp_path, small_taxonomy) -> None:
    machine = _multitask(small_taxonomy)
    machine.set_node_weight("A", 2.0)
    loaded = load_model(save_model(machine, tmp_path / "mt.joblib"))

    assert loaded.taxonomy.num_nodes == small_taxonomy.num_nodes
    assert loaded.taxonomy.get_node_weight(loaded.taxonomy.get_id("A")) == pytest.approx(2.0)
    # the normalizer still shares the loaded taxonomy
    assert loaded.normalizer.taxonomy is loaded.taxonomy
    assert loaded.kernel.normalizer is loaded.normalizer


def test_saved_payload_layout(tmp_path, small_taxonomy) -> None:
    path = save_model(_regression(small_taxonomy), tmp_path / "krr.joblib")
    payload = joblib.load(path)
    assert payload["format_version"] == MODEL_FORMAT_VERSION
    assert payload["class_name"] == "KernelRidgeRegression"


def test_load_checks_expected_type(tmp_path, small_taxonomy) -> None:
    path = save_model(_regression(small_taxonomy), tmp_path / "krr.joblib")
    with pytest.raises(TypeError):
        load_model(path, expected_type=LocalityPreservingProjections)


def test_load_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_model(tmp_path / "absent.joblib")


def test_load_rejects_foreign_payloads(tmp_path) -> None:
    joblib.dump([1, 2, 3], tmp_path / "list.joblib")
    with pytest.raises(ValueError):
        load_model(tmp_path / "list.joblib")

    joblib.dump({"format_version": 99, "object": None}, tmp_path / "future.joblib")
    with pytest.raises(ValueError):
        load_model(tmp_path / "future.joblib")


def test_save_rejects_untrained_and_foreign_objects(tmp_path) -> None:
    with pytest.raises(ValueError):
        save_model(KernelRidgeRegression(LinearKernel()), tmp_path / "untrained.joblib")
    with pytest.raises(ValueError):
        save_model(LocalityPreservingProjections(), tmp_path / "unfitted.joblib")
    with pytest.raises(TypeError):
        save_model({"not": "a model"}, tmp_path / "dict.joblib")
