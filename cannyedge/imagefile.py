"""Reading and writing 8-bit grayscale images as ``float32`` arrays."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image


def load_grayscale(path):
    """Read the image at ``path`` as a two-dimensional ``float32`` array.

    Colour images are converted to grayscale. Raises :class:`OSError` when
    the file is missing or is not a readable image.
    """
    try:
        with Image.open(os.fspath(path)) as picture:
            gray = picture.convert("L")
            return np.asarray(gray, dtype=np.float32).copy()
    except OSError as exc:
        raise OSError(f"can't read image: {path}") from exc


def to_uint8(image):
    """Clamp ``image`` to [0, 255] and truncate it to ``uint8``.

    Values that are not numbers become zero.
    """
    array = np.asarray(image, dtype=np.float32)
    if array.ndim != 2:
        raise ValueError(f"image must be two-dimensional, got {array.ndim} dimensions")
    cleaned = np.nan_to_num(array, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(cleaned, 0.0, 255.0).astype(np.uint8)


def save_grayscale(image, path):
    """Write ``image`` to ``path`` as an 8-bit grayscale picture.

    The file format follows the extension of ``path``.
    """
    pixels = to_uint8(image)
    Image.fromarray(pixels, mode="L").save(os.fspath(path))