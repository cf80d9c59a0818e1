"""Command line entry point: detect edges in an image file."""

from __future__ import annotations

import argparse
import sys

from cannyedge.detector import canny_edge_detection
from cannyedge.imagefile import load_grayscale, save_grayscale


def _parser():
    parser = argparse.ArgumentParser(
        prog="cannyedge",
        description="Detect edges in a grayscale image with the Canny method.",
    )
    parser.add_argument(
        "input", nargs="?", default="input.jpg", help="image to read (default: input.jpg)"
    )
    parser.add_argument(
        "output", nargs="?", default="output.jpg", help="edge map to write (default: output.jpg)"
    )
    parser.add_argument(
        "--approximate-exp",
        action="store_true",
        help="build the blur kernel with the polynomial exp approximation",
    )
    return parser


def main(argv=None):
    """Run the detector on an image file and print the stage timings."""
    args = _parser().parse_args(argv)
    try:
        image = load_grayscale(args.input)
    except OSError:
        print("can't read image", file=sys.stderr)
        return 1

    result = canny_edge_detection(image, approximate_exp=args.approximate_exp)
    print(result.timings.report())
    save_grayscale(result.edges, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())