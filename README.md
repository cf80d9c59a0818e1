# cannyedge

Canny edge detection for grayscale images. The detector is a pipeline of
separate stages that you can run one by one or all together. Each run also
records how long every stage took.

The pipeline is:

1. Gaussian blur with a 5×5 kernel and sigma 1.0
2. Sobel gradients in x and y
3. Gradient magnitude, and direction in degrees
4. Non-maximum suppression along the gradient direction
5. Double thresholding with thresholds 20 and 50. Values below 20 become 0.
   Values above 50 become strong edges (255). All other values become weak
   edges (128).
6. Edge tracking. A strong pixel marks itself as an edge, and marks as edges
   any weak pixels in its 8-neighbourhood.

Some border pixels have no full neighbourhood for a stage. That stage leaves
them at zero.

## Installation

```
pip install .
```

## Command line

```
cannyedge [input] [output] [--approximate-exp]
```

The command reads `input` as a grayscale image. Colour images are converted
to grayscale. It then runs the detector and prints the time spent in each
stage. Last, it writes the edge map to `output`, and the file format follows
the extension of `output`.

The defaults are `input.jpg` and `output.jpg` in the current directory.

If the input image cannot be read, the command prints `can't read image` to
standard error and exits with status 1.

`--approximate-exp` builds the blur kernel with the polynomial approximation
of the exponential, described below.

## Library use

```python
from cannyedge.imagefile import load_grayscale, save_grayscale
from cannyedge.detector import canny_edge_detection

image = load_grayscale("photo.png")
result = canny_edge_detection(image)
print(result.timings.report())
save_grayscale(result.edges, "edges.png")
```

Images are two-dimensional arrays of pixel values in the range 0–255. Each
stage works in `float32`. Input that is not two-dimensional raises
`ValueError`.

`canny_edge_detection(image, approximate_exp=False)` returns a `CannyResult`.
It has two fields:

- `edges`: the edge map, with 255 on edges and 0 elsewhere
- `timings`: a `StageTimings` record

`StageTimings` holds the seconds spent in four groups of stages:

- `gaussian_blur`
- `sobel_gradient` (Sobel and gradient magnitude and direction)
- `suppression_threshold` (non-maximum suppression and thresholding)
- `edge_tracking`

Its `total` property is the sum of the four. `report()` renders the four
times and the total as a five-line text.

### Stages

The individual stages live in `cannyedge.stages`:

```python
from cannyedge import stages

blurred = stages.gaussian_blur(image, 5, 1.0)
gx, gy = stages.sobel_gradient(blurred)
magnitude, direction = stages.gradient_magnitude_and_direction(gx, gy)
thin = stages.non_maximum_suppression(magnitude, direction)
marked = stages.double_threshold(thin, 20.0, 50.0)
edges = stages.edge_tracking(marked)
```

`stages.gaussian_kernel(size, sigma)` returns the normalised kernel that
`gaussian_blur` uses. It raises `ValueError` in two cases:

- the size is not a positive odd number
- sigma is not positive

`gaussian_blur` clamps its results to 0–255.

`canny_edge_detection` always uses a 5×5 kernel with sigma 1.0 and
thresholds of 20 and 50. For other values, call the stages directly.

### Approximate exponential

`cannyedge.fastexp.fast_exp(x)` approximates `exp` in single precision. It
uses a polynomial, and it clamps its input to about ±88.38. An array input
gives an array of the same shape. A scalar input gives a `numpy.float32`.

`cannyedge.fastexp.approximate_gaussian_kernel(size, sigma)` builds a
normalised Gaussian kernel with `fast_exp`. It accepts sizes from 1 to 8.
Only the first five columns carry their own horizontal distance from the
centre. Any column after the fifth is treated as if it lay on the centre
column.

### Image files

`cannyedge.imagefile` has three functions:

- `load_grayscale(path)` reads an image as a `float32` array. It raises
  `OSError` if the file is missing or cannot be read as an image.
- `to_uint8(image)` clamps values to 0–255 and truncates them to `uint8`.
  NaN becomes 0.
- `save_grayscale(image, path)` converts the image with `to_uint8` and
  writes it.

## Running the tests

```
pip install .[test]
pytest
```