import numpy as np
import pytest

from domain.kernels import GaussianKernel, MultitaskKernelTreeNormalizer
from domain.machines import KernelRidgeClassifier, KernelRidgeRegression, MultitaskKernelRidgeRegression, ProblemType


def _task_data(rng: np.random.Generator):
    x = rng.uniform(-2.0, 2.0, size=(30, 2))
    tasks = ["A1"] * 10 + ["A2"] * 10 + ["B1"] * 10
    offsets = {"A1": 0.0, "A2": 0.5, "B1": -3.0}
    y = np.sin(x[:, 0]) + np.array([offsets[t] for t in tasks])
    return x, y, tasks


def test_isolated_tasks_reduce_to_independent_ridge_regressions(small_taxonomy) -> None:
    x, y, tasks = _task_data(np.random.default_rng(0))
    machine = MultitaskKernelRidgeRegression(GaussianKernel(width=2.0), small_taxonomy, tau=0.1)
    for name in ("root", "A", "B"):
        machine.set_node_weight(name, 0.0)

    machine.train(x, y, tasks)
    query = np.array([[0.3, -0.1], [1.2, 0.8]])

    for task in ("A1", "A2", "B1"):
        mask = np.array([t == task for t in tasks])
        single = KernelRidgeRegression(GaussianKernel(width=2.0), tau=0.1).train(x[mask], y[mask])
        np.testing.assert_allclose(machine.apply(query, [task, task]), single.apply(query), atol=1e-8)


def test_related_tasks_help_each_other(small_taxonomy) -> None:
    x, y, tasks = _task_data(np.random.default_rng(1))
    machine = MultitaskKernelRidgeRegression(GaussianKernel(width=2.0), small_taxonomy, tau=0.01)
    machine.train(x, y, tasks)

    preds = machine.apply(x, tasks)
    assert machine.is_trained
    assert machine.problem_type is ProblemType.REGRESSION
    assert isinstance(machine.kernel.normalizer, MultitaskKernelTreeNormalizer)
    assert np.sqrt(np.mean((preds - y) ** 2)) < 0.2


def test_task_assignment_must_match_examples(small_taxonomy) -> None:
    x, y, tasks = _task_data(np.random.default_rng(2))
    machine = MultitaskKernelRidgeRegression(GaussianKernel(), small_taxonomy)
    with pytest.raises(ValueError):
        machine.train(x, y, tasks[:-1])
    machine.train(x, y, tasks)
    with pytest.raises(ValueError):
        machine.apply(x[:2], ["A1"])


def test_unknown_task_raises(small_taxonomy) -> None:
    x, y, tasks = _task_data(np.random.default_rng(3))
    machine = MultitaskKernelRidgeRegression(GaussianKernel(), small_taxonomy).train(x, y, tasks)
    with pytest.raises(KeyError):
        machine.apply(x[:1], ["C"])


def test_apply_before_train_raises(small_taxonomy) -> None:
    with pytest.raises(RuntimeError):
        MultitaskKernelRidgeRegression(GaussianKernel(), small_taxonomy).apply(np.ones((1, 2)), ["A1"])
    with pytest.raises(RuntimeError):
        KernelRidgeRegression(GaussianKernel()).apply(np.ones((1, 2)))


def test_kernel_is_released_after_training() -> None:
    x = np.linspace(-1.0, 1.0, 12)[:, None]
    machine = KernelRidgeRegression(GaussianKernel(), tau=1e-3).train(x, x.ravel() ** 2)
    assert machine.kernel.lhs is None and machine.kernel.rhs is None
    machine.apply(x)
    assert machine.kernel.lhs is None


def test_ridge_regression_interpolates_with_small_tau() -> None:
    x = np.linspace(-1.0, 1.0, 8)[:, None]
    y = 2.0 * x.ravel() + 1.0
    machine = KernelRidgeRegression(GaussianKernel(width=0.5), tau=1e-8).train(x, y)
    np.testing.assert_allclose(machine.apply(x), y, atol=1e-4)


def test_negative_tau_is_rejected() -> None:
    with pytest.raises(ValueError):
        KernelRidgeRegression(GaussianKernel(), tau=-1.0)


def test_classifier_returns_original_labels() -> None:
    x = np.vstack([np.full((5, 2), -1.0), np.full((5, 2), 1.0)]) + np.linspace(0, 0.1, 10)[:, None]
    labels = np.array(["neg"] * 5 + ["pos"] * 5)
    clf = KernelRidgeClassifier(GaussianKernel(width=1.0), tau=1e-3).train(x, labels)

    assert clf.problem_type is ProblemType.BINARY
    assert clf.classes_.tolist() == ["neg", "pos"]
    assert clf.apply(x).tolist() == labels.tolist()
    scores = clf.decision_function(x)
    assert np.all(scores[:5] < 0) and np.all(scores[5:] > 0)


def test_classifier_needs_two_classes() -> None:
    x = np.ones((4, 2))
    with pytest.raises(ValueError):
        KernelRidgeClassifier(GaussianKernel()).train(x, [1, 1, 1, 1])
    with pytest.raises(ValueError):
        KernelRidgeClassifier(GaussianKernel()).train(x, [0, 1, 2, 0])


def test_apply_without_training_state_raises(small_taxonomy) -> None:
    x, y, tasks = _task_data(np.random.default_rng(4))
    machine = MultitaskKernelRidgeRegression(GaussianKernel(), small_taxonomy).train(x, y, tasks)
    machine.tasks_ = None
    with pytest.raises(RuntimeError):
        machine.apply(x[:1], ["A1"])

    clf = KernelRidgeClassifier(GaussianKernel()).train(x, np.where(y > 0, 1, 0))
    clf.classes_ = None
    with pytest.raises(RuntimeError):
        clf.apply(x[:1])


def test_problem_types_match_the_machines() -> None:
    assert {p.value for p in ProblemType} == {"binary", "regression"}
    assert KernelRidgeRegression.problem_type is ProblemType.REGRESSION
    assert MultitaskKernelRidgeRegression.problem_type is ProblemType.REGRESSION
    assert KernelRidgeClassifier.problem_type is ProblemType.BINARY
