"""
Row-at-a-time access to uncompressed TGA images.

Images are read and written one full row at a time, so several large
images can be processed together without holding any of them in memory.

Row 0 is always the topmost row of the picture. Files stored bottom-up
(origin LOWER_LEFT) are flipped in row_offset() and nowhere else.

Classes:
    TargaImage: An open TGA image

Functions:
    open_tga: Open an existing TGA image
    create_tga: Create a new TGA image from an ImageSpec

Example:
    >>> with open_tga("input.tga") as source:
    ...     with create_tga("inverted.tga", source.spec()) as target:
    ...         for row, y in source.each_row_rgb():
    ...             target.put_row_rgb(y, [(255 - r, 255 - g, 255 - b) for r, g, b in row])
"""

import logging
import os
from typing import Any, BinaryIO, Dict, Iterator, List, Sequence, Tuple, Union

import numpy as np

from PX_Libs.constants import DESCRIPTOR_UPPER_LEFT, MAX_DIMENSION, TGA_HEADER_SIZE
from PX_Libs.TargaLib.errors import ArgumentError, FormatError, RangeError
from PX_Libs.TargaLib.format_dispatch import header_fields_for_create, select_pixel_format
from PX_Libs.TargaLib.guarded_stream import GuardedStream
from PX_Libs.TargaLib.image_spec import ImageSpec, Origin
from PX_Libs.TargaLib.pixel_formats import PixelFormat, RgbaColor, RgbColor
from PX_Libs.TargaLib.tga_header import ImageHeader, ResolvedSpec, decode_header, encode_header

logger = logging.getLogger(__name__)

PathOrStream = Union[str, os.PathLike, BinaryIO]


class TargaImage:
    """
    An open TGA image.

    Do not instantiate directly; use open_tga() or create_tga(). The image
    owns its stream and closes it in close().

    Row operations may be called from several threads. Closing while
    another thread is still reading or writing is not supported.
    """

    def __init__(
        self,
        stream: BinaryIO,
        header: ImageHeader,
        resolved: ResolvedSpec,
        pixel_format: PixelFormat,
    ):
        self._stream = GuardedStream(stream)
        self._header = header
        self._resolved = resolved
        self._pixel_format = pixel_format
        self._bytes_per_row = pixel_format.bytes_per_pixel * resolved.width

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return (
            f"<TargaImage {self.width}x{self.height} {self._pixel_format.kind.name} "
            f"{self.origin.value} {state}>"
        )

    def __enter__(self) -> "TargaImage":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def header(self) -> ImageHeader:
        return self._header

    @property
    def pixel_format(self) -> PixelFormat:
        return self._pixel_format

    @property
    def width(self) -> int:
        return self._resolved.width

    @property
    def height(self) -> int:
        return self._resolved.height

    @property
    def bits_per_pixel(self) -> int:
        return self._resolved.bits_per_pixel

    @property
    def bytes_per_pixel(self) -> int:
        return self._pixel_format.bytes_per_pixel

    @property
    def bytes_per_row(self) -> int:
        return self._bytes_per_row

    @property
    def color_depth(self) -> int:
        return self._resolved.color_depth

    @property
    def alpha_depth(self) -> int:
        return self._resolved.alpha_depth

    @property
    def origin(self) -> Origin:
        return self._resolved.origin

    @property
    def has_alpha(self) -> bool:
        return self._pixel_format.has_alpha

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def spec(self) -> ImageSpec:
        """
        Return the format specification of this image.

        Passing it to create_tga() produces an image with the same layout.
        """
        self._stream.require_open()
        return ImageSpec(
            width=self.width,
            height=self.height,
            color_depth=self.color_depth,
            has_alpha=self.has_alpha,
            origin=self.origin,
        )

    def close(self) -> None:
        """Close the underlying stream. Later operations raise UseAfterCloseError."""
        if not self.closed:
            logger.debug(f"Closing {self!r}")
        self._stream.close()

    # ------------------------------------------------------------------
    # Raw rows
    # ------------------------------------------------------------------

    def row_offset(self, y: int) -> int:
        """
        Return the file offset of the row at y-coordinate y.

        Raises:
            RangeError: If y is outside [0, height)
        """
        self._stream.require_open()
        if y < 0 or y >= self.height:
            raise RangeError(f"y-coordinate {y} out of range (height {self.height})")

        if self.origin is Origin.LOWER_LEFT:
            y = (self.height - 1) - y

        return self._resolved.pixel_data_offset + self._bytes_per_row * y

    def read_row_bytes(self, y: int) -> bytes:
        """
        Return the raw on-disk bytes of row y.

        You probably want get_row_rgb() or get_row_rgba() instead.

        Raises:
            RangeError: If y is out of range
            FormatError: If the file ends inside the row
        """
        offset = self.row_offset(y)
        data = self._stream.read_at(offset, self._bytes_per_row)
        if len(data) != self._bytes_per_row:
            raise FormatError(
                f"pixel data truncated: row {y} has {len(data)} of {self._bytes_per_row} bytes"
            )
        return data

    def write_row_bytes(self, y: int, raw_data: bytes) -> None:
        """
        Replace the raw on-disk bytes of row y.

        You probably want put_row_rgb() or put_row_rgba() instead.

        Raises:
            ArgumentError: If raw_data is not exactly bytes_per_row long
            RangeError: If y is out of range
        """
        if len(raw_data) != self._bytes_per_row:
            raise ArgumentError(
                f"raw_data length was {len(raw_data)}, expected {self._bytes_per_row}"
            )
        offset = self.row_offset(y)
        self._stream.write_at(offset, bytes(raw_data))

    # ------------------------------------------------------------------
    # Packed colors
    # ------------------------------------------------------------------

    def get_row_colors(self, y: int) -> List[int]:
        """Return row y as packed color integers."""
        return self._pixel_format.colors_from_bytes(self.read_row_bytes(y)).tolist()

    def put_row_colors(self, y: int, colors: Sequence[int]) -> None:
        """Replace row y with packed color integers."""
        self._check_row_length(colors)
        self.write_row_bytes(y, self._pixel_format.bytes_from_colors(colors))

    def _check_row_length(self, row: Sequence[Any]) -> None:
        if len(row) != self.width:
            raise ArgumentError(f"row has {len(row)} pixels, expected {self.width}")

    # ------------------------------------------------------------------
    # Channel tuples
    # ------------------------------------------------------------------

    def get_row_rgb(self, y: int) -> List[RgbColor]:
        """
        Return row y as a list of (r, g, b) tuples.

        Each r, g, b value is an integer between 0 and 255.
        """
        rgb_from_color = self._pixel_format.rgb_from_color
        return [rgb_from_color(color) for color in self.get_row_colors(y)]

    def get_row_rgba(self, y: int) -> List[RgbaColor]:
        """
        Return row y as a list of (r, g, b, a) tuples.

        Each value is an integer between 0 and 255. Images without alpha
        report a = 255.
        """
        rgba_from_color = self._pixel_format.rgba_from_color
        return [rgba_from_color(color) for color in self.get_row_colors(y)]

    def put_row_rgb(self, y: int, row: Sequence[Sequence[int]]) -> None:
        """
        Replace row y with (r, g, b) values.

        Each value is a number between 0 and 255; non-integers are truncated.
        """
        self._check_row_length(row)
        color_from_rgb = self._pixel_format.color_from_rgb
        self.put_row_colors(y, [color_from_rgb(r, g, b) for r, g, b in row])

    def put_row_rgba(self, y: int, row: Sequence[Sequence[int]]) -> None:
        """
        Replace row y with (r, g, b, a) values.

        Images without alpha ignore a.
        """
        self._check_row_length(row)
        color_from_rgba = self._pixel_format.color_from_rgba
        self.put_row_colors(y, [color_from_rgba(r, g, b, a) for r, g, b, a in row])

    # ------------------------------------------------------------------
    # NumPy rows
    # ------------------------------------------------------------------

    def get_row_array(self, y: int) -> np.ndarray:
        """Return row y as a (width, 4) uint8 array of r, g, b, a."""
        colors = self._pixel_format.colors_from_bytes(self.read_row_bytes(y))
        return self._pixel_format.rgba_array_from_colors(colors)

    def put_row_array(self, y: int, array: np.ndarray) -> None:
        """
        Replace row y from a (width, 3) or (width, 4) array.

        Raises:
            ArgumentError: If the array has the wrong shape
        """
        array = np.asarray(array)
        if array.ndim != 2 or array.shape[0] != self.width or array.shape[1] not in (3, 4):
            raise ArgumentError(
                f"expected a ({self.width}, 3) or ({self.width}, 4) array, got {array.shape}"
            )
        colors = self._pixel_format.colors_from_rgba_array(array)
        self.write_row_bytes(y, self._pixel_format.bytes_from_colors(colors))

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def each_row_rgb(self) -> Iterator[Tuple[List[RgbColor], int]]:
        """Yield (get_row_rgb(y), y) for every row, top to bottom."""
        for y in range(self.height):
            yield self.get_row_rgb(y), y

    def each_row_rgba(self) -> Iterator[Tuple[List[RgbaColor], int]]:
        """Yield (get_row_rgba(y), y) for every row, top to bottom."""
        for y in range(self.height):
            yield self.get_row_rgba(y), y


def _is_stream(obj: Any) -> bool:
    return hasattr(obj, "read") or hasattr(obj, "write")


def open_tga(source: PathOrStream) -> TargaImage:
    """
    Open an existing TGA image.

    Args:
        source: A path (opened read-only) or a seekable binary file object
                positioned at the start of the image

    Returns:
        A TargaImage that owns the stream

    Raises:
        FormatError: If the image is not an uncompressed, non-interleaved,
                     true-color TGA in a supported bit depth
    """
    owns_stream = not _is_stream(source)
    stream = open(source, "rb") if owns_stream else source

    try:
        header, resolved = decode_header(stream.read(TGA_HEADER_SIZE))
        pixel_format = select_pixel_format(resolved.bits_per_pixel, resolved.alpha_depth)
    except Exception:
        if owns_stream:
            stream.close()
        raise

    image = TargaImage(stream, header, resolved, pixel_format)
    logger.debug(f"Opened {image!r}")
    return image


def create_tga(destination: PathOrStream, spec: Union[ImageSpec, Dict[str, Any]]) -> TargaImage:
    """
    Create a new TGA image and return it open for reading and writing.

    Only the header is written; every row should then be filled with
    put_row_rgb(), put_row_rgba() or put_row_array().

    Args:
        destination: A path (created or truncated) or a seekable binary
                     file object opened for reading and writing
        spec: An ImageSpec, or a dict with width, height, color_depth and
              optionally has_alpha and origin

    Returns:
        A TargaImage over the new file

    Raises:
        ArgumentError: If the spec cannot be written
    """
    if not isinstance(spec, ImageSpec):
        spec = ImageSpec.from_dict(dict(spec))

    for name, value in (("width", spec.width), ("height", spec.height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ArgumentError(f"{name} must be an integer, got {value!r}")
        if not 0 <= value <= MAX_DIMENSION:
            raise ArgumentError(f"{name} must be 0-{MAX_DIMENSION}, got {value}")

    bits_per_pixel, alpha_depth = header_fields_for_create(spec.color_depth, spec.has_alpha)

    image_descriptor = alpha_depth
    if Origin.parse(spec.origin) is Origin.UPPER_LEFT:
        image_descriptor |= DESCRIPTOR_UPPER_LEFT

    raw_header = encode_header(spec.width, spec.height, bits_per_pixel, image_descriptor)
    decode_header(raw_header)

    owns_stream = not _is_stream(destination)
    stream = open(destination, "w+b") if owns_stream else destination

    try:
        stream.write(raw_header)
        stream.seek(0)
    except Exception:
        if owns_stream:
            stream.close()
        raise

    logger.debug(f"Created {spec.width}x{spec.height} TGA, {bits_per_pixel} bpp")
    return open_tga(stream)
