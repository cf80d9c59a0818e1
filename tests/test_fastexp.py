import numpy as np
import pytest

from cannyedge.fastexp import approximate_gaussian_kernel, fast_exp
from cannyedge.stages import gaussian_kernel


def test_fast_exp_of_zero_is_exactly_one():
    assert fast_exp(0.0) == np.float32(1.0)


def test_fast_exp_scalar_returns_float32_scalar():
    result = fast_exp(0.5)
    assert np.ndim(result) == 0
    assert result.dtype == np.float32


def test_fast_exp_preserves_shape():
    values = np.linspace(-3.0, 3.0, 12).reshape(3, 4)
    result = fast_exp(values)
    assert result.shape == (3, 4)
    assert result.dtype == np.float32


@pytest.mark.parametrize("x", [-50.0, -10.0, -2.5, -0.3, 0.1, 1.0, 3.7, 20.0, 60.0])
def test_fast_exp_close_to_exact(x):
    expected = np.exp(np.float64(x))
    assert float(fast_exp(x)) == pytest.approx(expected, rel=1e-6)


def test_fast_exp_matches_numpy_over_range():
    values = np.linspace(-20.0, 20.0, 1001, dtype=np.float32)
    np.testing.assert_allclose(fast_exp(values), np.exp(values), rtol=2e-6)


def test_fast_exp_clamps_large_inputs():
    assert fast_exp(1000.0) == fast_exp(88.3762626647949)
    assert np.isfinite(fast_exp(1000.0))


def test_fast_exp_clamps_small_inputs():
    assert fast_exp(-1000.0) == fast_exp(-88.3762626647949)
    assert fast_exp(-1000.0) >= 0.0


def test_fast_exp_is_monotonic():
    values = np.linspace(-30.0, 30.0, 4001, dtype=np.float32)
    result = fast_exp(values)
    np.testing.assert_array_equal(result, np.sort(result))
    assert float(result[0]) < float(result[-1])


def test_fast_exp_product_rule():
    a = fast_exp(1.25)
    b = fast_exp(-0.75)
    assert float(a * b) == pytest.approx(float(fast_exp(0.5)), rel=1e-6)


def test_kernel_is_normalised():
    kernel = approximate_gaussian_kernel(5, 1.0)
    assert kernel.shape == (5, 5)
    assert float(kernel.sum()) == pytest.approx(1.0, abs=1e-6)


def test_kernel_matches_exact_kernel_for_size_five():
    np.testing.assert_allclose(
        approximate_gaussian_kernel(5, 1.0), gaussian_kernel(5, 1.0), rtol=1e-5
    )


@pytest.mark.parametrize("sigma", [0.5, 1.0, 2.0])
def test_kernel_symmetric_with_peak_at_centre(sigma):
    kernel = approximate_gaussian_kernel(5, sigma)
    np.testing.assert_array_equal(kernel, kernel.T)
    np.testing.assert_array_equal(kernel, kernel[::-1, ::-1])
    assert kernel[2, 2] == kernel.max()


def test_columns_beyond_five_use_centre_distance():
    kernel = approximate_gaussian_kernel(7, 1.0)
    center = 7 // 2
    np.testing.assert_array_equal(kernel[:, 5], kernel[:, center])
    np.testing.assert_array_equal(kernel[:, 6], kernel[:, center])
    assert float(kernel.sum()) == pytest.approx(1.0, abs=1e-6)


def test_kernel_of_size_one():
    kernel = approximate_gaussian_kernel(1, 1.0)
    assert kernel.shape == (1, 1)
    assert kernel[0, 0] == np.float32(1.0)


@pytest.mark.parametrize("size", [0, -1, 9, 15])
def test_kernel_rejects_bad_size(size):
    with pytest.raises(ValueError):
        approximate_gaussian_kernel(size, 1.0)


@pytest.mark.parametrize("sigma", [0.0, -1.0])
def test_kernel_rejects_bad_sigma(sigma):
    with pytest.raises(ValueError):
        approximate_gaussian_kernel(5, sigma)