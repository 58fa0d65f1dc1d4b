"""
Compute the average (mean) of several TGA images.

Averaging the frames of an animation recovers its static background.
All inputs must have the same dimensions; they are read in lockstep one
row at a time, so only a single row of each image is in memory.

Usage:
    python examples/mean_image.py frames/*.tga --output background.tga
"""

import argparse
import sys
from pathlib import Path
from typing import List

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from PX_Libs.TargaLib import Origin, create_tga, open_tga


def mean_image(input_paths: List[Path], output_path: Path, verbose: bool = True) -> None:
    """Write the per-pixel mean of input_paths to output_path."""
    inputs = [open_tga(path) for path in input_paths]
    try:
        width, height = inputs[0].width, inputs[0].height
        for image in inputs[1:]:
            if (image.width, image.height) != (width, height):
                raise SystemExit(
                    f"size mismatch: {width}x{height} vs {image.width}x{image.height}"
                )

        spec = inputs[0].spec().replace(origin=Origin.UPPER_LEFT)
        if verbose:
            print(f"Inputs: {[str(path) for path in input_paths]}")
            print(f"Output: {output_path}")
            print(f"Dimensions: {width}x{height}")

        with create_tga(output_path, spec) as output:
            for y in range(height):
                if verbose:
                    print(f"Processing line {y + 1} of {height}")
                rows = np.stack([image.get_row_array(y) for image in inputs])
                mean_row = rows.astype(np.float64).mean(axis=0)
                output.put_row_array(y, mean_row.astype(np.uint8))
    finally:
        for image in inputs:
            image.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Average several TGA images pixel by pixel.")
    parser.add_argument("inputs", nargs="+", help="input .tga paths")
    parser.add_argument("--output", default="output.tga", help="output .tga path")
    parser.add_argument("--quiet", action="store_true", help="do not print progress")
    args = parser.parse_args()

    input_paths = [Path(p) for p in args.inputs]
    missing = [p for p in input_paths if not p.exists()]
    if missing:
        raise SystemExit(f"missing inputs: {', '.join(str(p) for p in missing)}")

    mean_image(input_paths, Path(args.output), verbose=not args.quiet)
    print(f"Output written to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
