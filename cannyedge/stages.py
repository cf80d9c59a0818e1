"""The individual stages of the Canny edge detector.

Every stage takes and returns two-dimensional ``float32`` arrays indexed as
``[row, column]``.  Pixels a stage cannot compute because its neighbourhood
would leave the image are set to zero.
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

STRONG_EDGE = 255.0
WEAK_EDGE = 128.0
NON_EDGE = 0.0

_SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float32)
_SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float32)


def _as_image(image, name="image"):
    array = np.asarray(image, dtype=np.float32)
    if array.ndim != 2:
        raise ValueError(f"{name} must be two-dimensional, got {array.ndim} dimensions")
    return array


def _same_shape(first, second, names):
    if first.shape != second.shape:
        raise ValueError(
            f"{names[0]} and {names[1]} differ in shape: {first.shape} and {second.shape}"
        )


def _convolve_valid(image, kernel):
    """Correlate ``image`` with ``kernel`` over positions where it fits entirely."""
    size = kernel.shape[0]
    windows = sliding_window_view(image, (size, size))
    return np.einsum("ijkl,kl->ij", windows, kernel).astype(np.float32)


def gaussian_kernel(size=5, sigma=1.0):
    """Return a normalised ``size`` x ``size`` Gaussian kernel."""
    if size < 1 or size % 2 == 0:
        raise ValueError(f"kernel size must be a positive odd number, got {size}")
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    distances = np.arange(size) - size // 2
    squared = distances[:, None] ** 2 + distances[None, :] ** 2
    denominator = np.float32(2.0) * np.float32(sigma) * np.float32(sigma)
    kernel = np.exp(-squared.astype(np.float32) / denominator).astype(np.float32)
    return kernel / kernel.sum(dtype=np.float32)


def gaussian_blur(image, kernel_size=5, sigma=1.0):
    """Blur ``image`` with a Gaussian kernel, clamping results to [0, 255]."""
    source = _as_image(image)
    kernel = gaussian_kernel(kernel_size, sigma)
    offset = kernel_size // 2
    blurred = np.zeros_like(source)
    height, width = source.shape
    if height < kernel_size or width < kernel_size:
        return blurred
    values = _convolve_valid(source, kernel)
    blurred[offset:height - offset, offset:width - offset] = np.clip(values, 0.0, 255.0)
    return blurred


def sobel_gradient(image):
    """Return the horizontal and vertical Sobel gradients of ``image``."""
    source = _as_image(image)
    gradient_x = np.zeros_like(source)
    gradient_y = np.zeros_like(source)
    height, width = source.shape
    if height < 3 or width < 3:
        return gradient_x, gradient_y
    gradient_x[1:-1, 1:-1] = _convolve_valid(source, _SOBEL_X)
    gradient_y[1:-1, 1:-1] = _convolve_valid(source, _SOBEL_Y)
    return gradient_x, gradient_y


def gradient_magnitude_and_direction(gradient_x, gradient_y):
    """Return gradient magnitude and direction in degrees within [-180, 180]."""
    gx = _as_image(gradient_x, "gradient_x")
    gy = _as_image(gradient_y, "gradient_y")
    _same_shape(gx, gy, ("gradient_x", "gradient_y"))
    magnitude = np.sqrt(gx * gx + gy * gy).astype(np.float32)
    direction = np.degrees(np.arctan2(gy, gx)).astype(np.float32)
    return magnitude, direction


def non_maximum_suppression(magnitude, direction):
    """Keep only pixels whose magnitude is a local maximum along the gradient."""
    mag = _as_image(magnitude, "magnitude")
    angles = _as_image(direction, "direction")
    _same_shape(mag, angles, ("magnitude", "direction"))
    suppressed = np.zeros_like(mag)
    height, width = mag.shape
    if height < 3 or width < 3:
        return suppressed

    def shifted(dy, dx):
        return mag[1 + dy:height - 1 + dy, 1 + dx:width - 1 + dx]

    angle = angles[1:-1, 1:-1]
    angle = np.where(angle < 0, angle + np.float32(180.0), angle)
    current = mag[1:-1, 1:-1]

    horizontal = ((angle >= 0) & (angle < 22.5)) | (angle >= 157.5)
    diagonal_down = angle >= 112.5
    vertical = angle >= 67.5
    diagonal_up = angle >= 22.5
    conditions = [horizontal, diagonal_down, vertical, diagonal_up]

    q = np.select(
        conditions,
        [shifted(0, 1), shifted(-1, -1), shifted(1, 0), shifted(1, -1)],
        default=np.float32(255.0),
    )
    r = np.select(
        conditions,
        [shifted(0, -1), shifted(1, 1), shifted(-1, 0), shifted(-1, 1)],
        default=np.float32(255.0),
    )
    keep = (current >= q) & (current >= r)
    suppressed[1:-1, 1:-1] = np.where(keep, current, np.float32(0.0))
    return suppressed


def double_threshold(image, low_threshold=20.0, high_threshold=50.0):
    """Classify pixels as non-edges (0), weak edges (128) or strong edges (255)."""
    source = _as_image(image)
    result = np.full_like(source, WEAK_EDGE)
    result[source < low_threshold] = NON_EDGE
    result[source > high_threshold] = STRONG_EDGE
    return result


def edge_tracking(thresholded):
    """Promote weak edges touching a strong interior edge and keep the strong ones."""
    source = _as_image(thresholded, "thresholded")
    edges = np.zeros_like(source)
    height, width = source.shape
    if height < 3 or width < 3:
        return edges

    strong = np.zeros(source.shape, dtype=bool)
    strong[1:-1, 1:-1] = source[1:-1, 1:-1] == STRONG_EDGE

    padded = np.pad(strong, 1)
    near_strong = np.zeros_like(strong)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            near_strong |= padded[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]

    edges[strong] = STRONG_EDGE
    edges[near_strong & (source == WEAK_EDGE)] = STRONG_EDGE
    return edges