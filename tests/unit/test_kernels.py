import numpy as np
import pytest

from domain.kernels import (
    FirstElementKernelNormalizer,
    GaussianKernel,
    IdentityKernelNormalizer,
    LinearKernel,
    PolynomialKernel,
    SqrtDiagKernelNormalizer,
)

X = np.array([[2.0, 0.0], [1.0, 1.0], [0.0, 3.0]])
Y = np.array([[1.0, 0.0], [0.0, 1.0]])


def test_linear_kernel_values() -> None:
    k = LinearKernel().init(X, Y)
    assert k.num_vec_lhs == 3 and k.num_vec_rhs == 2
    assert k.compute(0, 0) == pytest.approx(2.0)
    assert k.compute(2, 1) == pytest.approx(3.0)
    np.testing.assert_allclose(k.get_kernel_matrix(), X @ Y.T)


def test_gaussian_kernel_values() -> None:
    k = GaussianKernel(width=2.0).init(X)
    # ||x0 - x1||^2 = 2
    assert k.kernel(0, 1) == pytest.approx(np.exp(-1.0))
    assert k.kernel(2, 2) == pytest.approx(1.0)
    np.testing.assert_allclose(np.diag(k.get_kernel_matrix()), np.ones(3))


def test_polynomial_kernel_values() -> None:
    inhom = PolynomialKernel(degree=2).init(X, Y)
    hom = PolynomialKernel(degree=3, inhomogeneous=False).init(X, Y)
    assert inhom.compute(1, 0) == pytest.approx((1.0 + 1.0) ** 2)
    assert hom.compute(0, 0) == pytest.approx(8.0)


@pytest.mark.parametrize("kernel_cls", [LinearKernel, GaussianKernel, PolynomialKernel])
def test_matrix_agrees_with_elementwise_kernel(kernel_cls) -> None:
    k = kernel_cls(normalizer=SqrtDiagKernelNormalizer()).init(X, Y)
    mat = k.get_kernel_matrix()
    for i in range(k.num_vec_lhs):
        for j in range(k.num_vec_rhs):
            assert mat[i, j] == pytest.approx(k.kernel(i, j))


@pytest.mark.parametrize("kernel_cls", [LinearKernel, GaussianKernel, PolynomialKernel])
def test_diagonal_matches_evaluate(kernel_cls) -> None:
    k = kernel_cls()
    np.testing.assert_allclose(k.diagonal(X), np.diag(k.evaluate(X, X)))


def test_identity_normalizer_is_default() -> None:
    k = LinearKernel()
    assert isinstance(k.normalizer, IdentityKernelNormalizer)


def test_first_element_normalizer_scales_by_first_lhs_example() -> None:
    k = LinearKernel(normalizer=FirstElementKernelNormalizer()).init(X, Y)
    assert k.normalizer.scale == pytest.approx(4.0)  # x0 . x0
    assert k.kernel(2, 1) == pytest.approx(3.0 / 4.0)
    np.testing.assert_allclose(k.get_kernel_matrix(), (X @ Y.T) / 4.0)


def test_first_element_normalizer_rejects_zero_scale() -> None:
    k = LinearKernel(normalizer=FirstElementKernelNormalizer())
    with pytest.raises(ValueError):
        k.init(np.array([[0.0, 0.0], [1.0, 1.0]]))


def test_sqrt_diag_normalizer_gives_unit_self_similarity() -> None:
    k = LinearKernel(normalizer=SqrtDiagKernelNormalizer()).init(X)
    np.testing.assert_allclose(np.diag(k.get_kernel_matrix()), np.ones(3))
    # cosine similarity between (2,0) and (1,1)
    assert k.kernel(0, 1) == pytest.approx(1.0 / np.sqrt(2.0))


def test_set_normalizer_on_bound_kernel_initialises_it() -> None:
    k = LinearKernel().init(X)
    k.set_normalizer(FirstElementKernelNormalizer())
    assert k.normalizer.scale == pytest.approx(4.0)


def test_use_before_init_raises() -> None:
    k = GaussianKernel()
    with pytest.raises(RuntimeError):
        k.get_kernel_matrix()
    with pytest.raises(RuntimeError):
        k.compute(0, 0)


def test_index_out_of_range_raises() -> None:
    k = LinearKernel().init(X, Y)
    with pytest.raises(IndexError):
        k.compute(3, 0)
    with pytest.raises(IndexError):
        k.compute(0, -1)


@pytest.mark.parametrize(
    "lhs, rhs",
    [
        (np.ones(3), None),  # 1-D
        (np.empty((0, 2)), None),  # no examples
        (np.ones((2, 2)), np.ones((2, 3))),  # dimension mismatch
    ],
)
def test_init_validates_features(lhs, rhs) -> None:
    with pytest.raises(ValueError):
        LinearKernel().init(lhs, rhs)


def test_invalid_parameters() -> None:
    with pytest.raises(ValueError):
        GaussianKernel(width=0.0)
    with pytest.raises(ValueError):
        PolynomialKernel(degree=0)
