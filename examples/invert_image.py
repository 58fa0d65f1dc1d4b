"""
Invert the colors of a TGA image.

Reads the input one row at a time and writes the inverted rows to a new
file with the same layout, so images of any size use very little memory.

Usage:
    python examples/invert_image.py input.tga output.tga
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PX_Libs.TargaLib import open_tga, create_tga


def invert_image(input_path: Path, output_path: Path) -> None:
    """Write the color-inverted copy of input_path to output_path."""
    with open_tga(input_path) as source:
        with create_tga(output_path, source.spec()) as target:
            for row, y in source.each_row_rgba():
                target.put_row_rgba(y, [(255 - r, 255 - g, 255 - b, a) for r, g, b, a in row])


def main() -> int:
    parser = argparse.ArgumentParser(description="Invert the colors of a TGA image.")
    parser.add_argument("input", help="input .tga path")
    parser.add_argument("output", help="output .tga path")
    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"missing input: {input_path}")

    invert_image(input_path, Path(args.output))
    print(f"wrote {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
