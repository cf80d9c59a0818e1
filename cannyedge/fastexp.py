"""A polynomial approximation of ``exp`` in single precision, and the Gaussian
kernel built from it.

The approximation splits ``x`` into ``n * ln 2 + r`` with ``|r| <= ln 2 / 2``,
evaluates a degree-seven polynomial for ``exp(r)`` and scales the result by
``2 ** n`` by writing ``n`` straight into the exponent bits of a float.
"""

from __future__ import annotations

import numpy as np

_EXP_HI = np.float32(88.3762626647949)
_EXP_LO = np.float32(-88.3762626647949)

_LOG2EF = np.float32(1.44269504088896340735)
_EXP_C1 = np.float32(0.693359375)
_EXP_C2 = np.float32(-2.12194440e-4)

_EXP_P = tuple(
    np.float32(value)
    for value in (
        1.9875691500e-4,
        1.4352314417e-3,
        8.3496402606e-3,
        4.1602886268e-2,
        0.166665036920,
        0.499999999505,
    )
)

# Columns beyond this count have no distance of their own: their horizontal
# distance is taken as zero.
_DISTANCE_LANES = 5
_MAX_KERNEL_SIZE = 8


def _fused_multiply_add(a, b, c):
    """Return ``a * b + c`` rounded once to single precision."""
    exact = a.astype(np.float64) * b.astype(np.float64) + c.astype(np.float64)
    return exact.astype(np.float32)


def _fused_negated_multiply_add(a, b, c):
    """Return ``c - a * b`` rounded once to single precision."""
    exact = c.astype(np.float64) - a.astype(np.float64) * b.astype(np.float64)
    return exact.astype(np.float32)


def fast_exp(x):
    """Approximate ``exp(x)`` in ``float32``.

    Inputs are clamped to about [-88.38, 88.38]. Arrays keep their shape;
    a scalar input gives a ``numpy.float32`` scalar.
    """
    values = np.asarray(x, dtype=np.float32)
    scalar = values.ndim == 0
    values = np.atleast_1d(values)

    clamped = np.maximum(np.minimum(values, _EXP_HI), _EXP_LO)

    fx = np.rint(clamped * _LOG2EF).astype(np.float32)

    c1 = np.full_like(fx, _EXP_C1)
    c2 = np.full_like(fx, _EXP_C2)
    remainder = _fused_negated_multiply_add(fx, c1, clamped)
    remainder = _fused_negated_multiply_add(fx, c2, remainder)

    squared = (remainder * remainder).astype(np.float32)

    poly = _fused_multiply_add(
        np.full_like(remainder, _EXP_P[0]), remainder, np.full_like(remainder, _EXP_P[1])
    )
    for coefficient in _EXP_P[2:]:
        poly = _fused_multiply_add(poly, remainder, np.full_like(remainder, coefficient))
    poly = _fused_multiply_add(poly, squared, remainder)
    poly = (poly + np.float32(1.0)).astype(np.float32)

    exponent = fx.astype(np.int32) + np.int32(127)
    bits = np.left_shift(exponent.astype(np.uint32), np.uint32(23))
    power_of_two = bits.view(np.float32)

    result = (poly * power_of_two).astype(np.float32)
    return result[0] if scalar else result


def approximate_gaussian_kernel(size=5, sigma=1.0):
    """Return a normalised ``size`` x ``size`` Gaussian kernel built with :func:`fast_exp`.

    Only the first five columns carry their own horizontal distance from the
    centre; any further column is treated as lying on the centre column.
    Sizes from 1 to 8 are supported.
    """
    if not 1 <= size <= _MAX_KERNEL_SIZE:
        raise ValueError(
            f"kernel size must be between 1 and {_MAX_KERNEL_SIZE}, got {size}"
        )
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")

    center = size // 2
    row_distances = (np.arange(size) - center).astype(np.float32)
    column_distances = np.array(
        [column - center if column < _DISTANCE_LANES else 0 for column in range(size)],
        dtype=np.float32,
    )
    squared = (
        row_distances[:, None] * row_distances[:, None]
        + column_distances[None, :] * column_distances[None, :]
    ).astype(np.float32)

    denominator = np.float32(2.0) * np.float32(sigma) * np.float32(sigma)
    arguments = ((np.float32(0.0) - squared) / denominator).astype(np.float32)
    kernel = fast_exp(arguments)

    total = kernel.ravel().cumsum(dtype=np.float32)[-1]
    return (kernel / total).astype(np.float32)