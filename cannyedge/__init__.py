"""Canny edge detection for grayscale images: pipeline stages, an approximate exp, image I/O and a command."""

__version__ = "0.1.0"
__all__ = ["stages", "fastexp", "detector", "imagefile", "cli"]