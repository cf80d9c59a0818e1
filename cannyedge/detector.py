"""The complete Canny edge detector, with per-stage timings."""

from __future__ import annotations

import time
from dataclasses import dataclass

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from cannyedge.fastexp import approximate_gaussian_kernel
from cannyedge.stages import (
    double_threshold,
    edge_tracking,
    gaussian_blur,
    gaussian_kernel,
    gradient_magnitude_and_direction,
    non_maximum_suppression,
    sobel_gradient,
)

_KERNEL_SIZE = 5
_SIGMA = 1.0


@dataclass(frozen=True)
class StageTimings:
    """Wall-clock seconds spent in each group of stages."""

    gaussian_blur: float
    sobel_gradient: float
    suppression_threshold: float
    edge_tracking: float

    @property
    def total(self):
        """Seconds spent over the whole detection."""
        return (
            self.gaussian_blur
            + self.sobel_gradient
            + self.suppression_threshold
            + self.edge_tracking
        )

    def report(self):
        """Return the timings as a five-line text report."""
        rows = (
            ("Step 1: Gaussian Blur    : ", self.gaussian_blur),
            ("Step 2: Sobel & gradient : ", self.sobel_gradient),
            ("Step 3: NMS & Threshold  : ", self.suppression_threshold),
            ("Step 4: Edge Tracking    : ", self.edge_tracking),
            ("Final :                  : ", self.total),
        )
        return "\n".join(f"{label}\t\t{seconds:g}" for label, seconds in rows)


@dataclass(frozen=True)
class CannyResult:
    """The edge map of an image and the time each stage took."""

    edges: np.ndarray
    timings: StageTimings


def _blur_with_kernel(image, kernel):
    """Convolve with ``kernel`` where it fits, clamp to [0, 255], zero the rest."""
    size = kernel.shape[0]
    offset = size // 2
    blurred = np.zeros_like(image)
    height, width = image.shape
    if height < size or width < size:
        return blurred
    windows = sliding_window_view(image, (size, size))
    values = np.einsum("ijkl,kl->ij", windows, kernel).astype(np.float32)
    blurred[offset:height - offset, offset:width - offset] = np.clip(values, 0.0, 255.0)
    return blurred


def _blur(image, approximate_exp):
    if approximate_exp:
        kernel = approximate_gaussian_kernel(_KERNEL_SIZE, _SIGMA)
        return _blur_with_kernel(image, kernel)
    # Validate the kernel parameters the same way in both paths.
    gaussian_kernel(_KERNEL_SIZE, _SIGMA)
    return gaussian_blur(image, _KERNEL_SIZE, _SIGMA)


def canny_edge_detection(image, approximate_exp=False):
    """Detect edges in a grayscale image.

    Returns a :class:`CannyResult` whose edge map holds 255 on edges and 0
    elsewhere. With ``approximate_exp`` the blur kernel is built with the
    polynomial ``exp`` approximation instead of the exact one.
    """
    source = np.asarray(image, dtype=np.float32)
    if source.ndim != 2:
        raise ValueError(f"image must be two-dimensional, got {source.ndim} dimensions")

    start = time.perf_counter()
    blurred = _blur(source, approximate_exp)
    after_blur = time.perf_counter()

    gradient_x, gradient_y = sobel_gradient(blurred)
    magnitude, direction = gradient_magnitude_and_direction(gradient_x, gradient_y)
    after_gradient = time.perf_counter()

    suppressed = non_maximum_suppression(magnitude, direction)
    thresholded = double_threshold(suppressed)
    after_threshold = time.perf_counter()

    edges = edge_tracking(thresholded)
    end = time.perf_counter()

    timings = StageTimings(
        gaussian_blur=after_blur - start,
        sobel_gradient=after_gradient - after_blur,
        suppression_threshold=after_threshold - after_gradient,
        edge_tracking=end - after_threshold,
    )
    return CannyResult(edges=edges, timings=timings)