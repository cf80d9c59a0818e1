[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cannyedge"
version = "0.1.0"
description = "Canny edge detection for grayscale images, stage by stage, with per-stage timings"
requires-python = ">=3.10"
keywords = ["canny", "edge detection", "image processing", "sobel", "gaussian blur"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cannyedge = "cannyedge.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cannyedge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
