"""
Pixel formats for uncompressed TGA images.

A PixelFormat converts between three representations of a pixel:

- channel tuples: (r, g, b) or (r, g, b, a), each 0-255
- packed colors: one integer per pixel, laid out as on disk
- bytes: the little-endian on-disk form of a packed color

Four kinds are supported:

    FORMAT15  5-5-5 color, no alpha              (2 bytes)
    FORMAT16  5-5-5 color, 1-bit alpha in bit 15 (2 bytes)
    FORMAT24  8-8-8 color, no alpha              (3 bytes, or 4 with a padding byte)
    FORMAT32  8-8-8 color, 8-bit alpha           (4 bytes)

Formats without alpha report every pixel as opaque and ignore the alpha
channel on write. Formats with alpha drop it on RGB reads and write
opaque pixels from RGB input.

Scalar conversions handle one pixel; the *_array and *_bytes helpers work
on a whole row at once with NumPy and give identical results.

Example:
    >>> fmt = PixelFormat(PixelFormatKind.FORMAT15)
    >>> fmt.color_from_rgb(255, 255, 255)
    32767
    >>> fmt.rgb_from_color(32767)
    (255, 255, 255)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from PX_Libs.constants import CHANNEL5_MAX, CHANNEL_MAX, OPAQUE_ALPHA, TRANSPARENT_ALPHA

RgbColor = Tuple[int, int, int]
RgbaColor = Tuple[int, int, int, int]


class PixelFormatKind(Enum):
    FORMAT15 = 15
    FORMAT16 = 16
    FORMAT24 = 24
    FORMAT32 = 32


_ALPHA_KINDS = {PixelFormatKind.FORMAT16, PixelFormatKind.FORMAT32}
_FIVE_BIT_KINDS = {PixelFormatKind.FORMAT15, PixelFormatKind.FORMAT16}

_DEFAULT_BYTES_PER_PIXEL = {
    PixelFormatKind.FORMAT15: 2,
    PixelFormatKind.FORMAT16: 2,
    PixelFormatKind.FORMAT24: 3,
    PixelFormatKind.FORMAT32: 4,
}

_ALLOWED_BYTES_PER_PIXEL = {
    PixelFormatKind.FORMAT15: (2,),
    PixelFormatKind.FORMAT16: (2,),
    PixelFormatKind.FORMAT24: (3, 4),
    PixelFormatKind.FORMAT32: (4,),
}


def _expand5(channel5: int) -> int:
    return channel5 * CHANNEL_MAX // CHANNEL5_MAX


def _quantize5(channel8) -> int:
    # Truncates the low 3 bits; 255 maps to 31 and back to 255.
    return (int(channel8) >> 3) & CHANNEL5_MAX


@dataclass(frozen=True)
class PixelFormat:
    """One of the four supported on-disk pixel encodings.

    Attributes:
        kind: Which encoding this is
        bytes_per_pixel: On-disk stride. Defaults to the natural size of
                         the kind; FORMAT24 also accepts 4 (32 bpp files
                         with no alpha, the high byte unused).
    """

    kind: PixelFormatKind
    bytes_per_pixel: Optional[int] = None

    def __post_init__(self):
        if self.bytes_per_pixel is None:
            object.__setattr__(self, "bytes_per_pixel", _DEFAULT_BYTES_PER_PIXEL[self.kind])
        if self.bytes_per_pixel not in _ALLOWED_BYTES_PER_PIXEL[self.kind]:
            raise ValueError(
                f"{self.kind.name} cannot be stored in {self.bytes_per_pixel} bytes per pixel"
            )

    @property
    def has_alpha(self) -> bool:
        """True if the encoding stores an alpha channel."""
        return self.kind in _ALPHA_KINDS

    # ------------------------------------------------------------------
    # Scalar conversions
    # ------------------------------------------------------------------

    def rgb_from_color(self, color: int) -> RgbColor:
        """Return the (r, g, b) channels of a packed color."""
        return self.rgba_from_color(color)[:3]

    def rgba_from_color(self, color: int) -> RgbaColor:
        """Return the (r, g, b, a) channels of a packed color."""
        kind = self.kind
        if kind in _FIVE_BIT_KINDS:
            r = _expand5((color >> 10) & CHANNEL5_MAX)
            g = _expand5((color >> 5) & CHANNEL5_MAX)
            b = _expand5(color & CHANNEL5_MAX)
            if kind is PixelFormatKind.FORMAT16 and not (color >> 15) & 1:
                return (r, g, b, TRANSPARENT_ALPHA)
            return (r, g, b, OPAQUE_ALPHA)

        r = (color >> 16) & 0xFF
        g = (color >> 8) & 0xFF
        b = color & 0xFF
        if kind is PixelFormatKind.FORMAT32:
            return (r, g, b, (color >> 24) & 0xFF)
        return (r, g, b, OPAQUE_ALPHA)

    def color_from_rgb(self, r, g, b) -> int:
        """Pack (r, g, b) into a color; formats with alpha store it opaque."""
        return self.color_from_rgba(r, g, b, OPAQUE_ALPHA)

    def color_from_rgba(self, r, g, b, a) -> int:
        """Pack (r, g, b, a) into a color; formats without alpha ignore a."""
        kind = self.kind
        if kind in _FIVE_BIT_KINDS:
            color = (_quantize5(r) << 10) | (_quantize5(g) << 5) | _quantize5(b)
            if kind is PixelFormatKind.FORMAT16:
                color |= ((int(a) >> 7) & 1) << 15
            return color

        color = ((int(r) & 0xFF) << 16) | ((int(g) & 0xFF) << 8) | (int(b) & 0xFF)
        if kind is PixelFormatKind.FORMAT32:
            color |= (int(a) & 0xFF) << 24
        return color

    # ------------------------------------------------------------------
    # Row conversions (NumPy)
    # ------------------------------------------------------------------

    def colors_from_bytes(self, raw: bytes) -> np.ndarray:
        """
        Decode one row of on-disk bytes into packed colors.

        Args:
            raw: Row bytes; the length must be a multiple of bytes_per_pixel

        Returns:
            1-D uint32 array with one packed color per pixel
        """
        stride = self.bytes_per_pixel
        if len(raw) % stride:
            raise ValueError(f"row of {len(raw)} bytes is not a multiple of {stride}")

        if stride == 2:
            colors = np.frombuffer(raw, dtype="<u2").astype(np.uint32)
            if self.kind is PixelFormatKind.FORMAT15:
                colors &= 0x7FFF
            return colors

        if stride == 3:
            triples = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.uint32)
            return triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)

        colors = np.frombuffer(raw, dtype="<u4").astype(np.uint32)
        if self.kind is PixelFormatKind.FORMAT24:
            colors &= 0x00FFFFFF
        return colors

    def bytes_from_colors(self, colors: Sequence[int]) -> bytes:
        """Encode packed colors into one row of on-disk bytes."""
        values = np.asarray(colors, dtype=np.uint32).reshape(-1)
        stride = self.bytes_per_pixel

        if stride == 2:
            return values.astype("<u2").tobytes()

        if self.kind is PixelFormatKind.FORMAT24:
            values = values & 0x00FFFFFF
        packed = values.astype("<u4")
        if stride == 3:
            return packed.view(np.uint8).reshape(-1, 4)[:, :3].tobytes()
        return packed.tobytes()

    def rgba_array_from_colors(self, colors: np.ndarray) -> np.ndarray:
        """Convert packed colors to a (N, 4) uint8 array of r, g, b, a."""
        c = np.asarray(colors, dtype=np.uint32).reshape(-1)
        out = np.empty((c.shape[0], 4), dtype=np.uint8)

        if self.kind in _FIVE_BIT_KINDS:
            for column, shift in enumerate((10, 5, 0)):
                out[:, column] = ((c >> shift) & CHANNEL5_MAX) * CHANNEL_MAX // CHANNEL5_MAX
            if self.kind is PixelFormatKind.FORMAT16:
                out[:, 3] = np.where((c >> 15) & 1, OPAQUE_ALPHA, TRANSPARENT_ALPHA)
            else:
                out[:, 3] = OPAQUE_ALPHA
            return out

        for column, shift in enumerate((16, 8, 0)):
            out[:, column] = (c >> shift) & 0xFF
        if self.kind is PixelFormatKind.FORMAT32:
            out[:, 3] = (c >> 24) & 0xFF
        else:
            out[:, 3] = OPAQUE_ALPHA
        return out

    def colors_from_rgba_array(self, array: np.ndarray) -> np.ndarray:
        """
        Convert a (N, 3) or (N, 4) channel array to packed colors.

        A (N, 3) array is treated as fully opaque.
        """
        channels = np.asarray(array)
        if channels.ndim != 2 or channels.shape[1] not in (3, 4):
            raise ValueError(f"expected an (N, 3) or (N, 4) array, got shape {channels.shape}")
        channels = channels.astype(np.uint32)

        r, g, b = channels[:, 0], channels[:, 1], channels[:, 2]
        if channels.shape[1] == 4:
            a = channels[:, 3]
        else:
            a = np.full(channels.shape[0], OPAQUE_ALPHA, dtype=np.uint32)

        if self.kind in _FIVE_BIT_KINDS:
            colors = (
                (((r >> 3) & CHANNEL5_MAX) << 10)
                | (((g >> 3) & CHANNEL5_MAX) << 5)
                | ((b >> 3) & CHANNEL5_MAX)
            )
            if self.kind is PixelFormatKind.FORMAT16:
                colors |= ((a >> 7) & 1) << 15
            return colors

        colors = ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)
        if self.kind is PixelFormatKind.FORMAT32:
            colors |= (a & 0xFF) << 24
        return colors
