"""
Pixel format selection.

Functions:
    select_pixel_format: Pick the PixelFormat for a decoded header
    header_fields_for_create: Map a requested color depth/alpha pair to
                              header bits-per-pixel and alpha depth
"""

import logging
from typing import Dict, Tuple

from PX_Libs.TargaLib.errors import ArgumentError, FormatError
from PX_Libs.TargaLib.pixel_formats import PixelFormat, PixelFormatKind

logger = logging.getLogger(__name__)

# (bits per pixel, alpha depth) -> pixel format
_FORMATS_BY_HEADER: Dict[Tuple[int, int], PixelFormat] = {
    (16, 0): PixelFormat(PixelFormatKind.FORMAT15, 2),
    (16, 1): PixelFormat(PixelFormatKind.FORMAT16, 2),
    (24, 0): PixelFormat(PixelFormatKind.FORMAT24, 3),
    (32, 0): PixelFormat(PixelFormatKind.FORMAT24, 4),
    (32, 8): PixelFormat(PixelFormatKind.FORMAT32, 4),
}

# (color depth, has alpha) -> (bits per pixel, alpha depth)
_HEADER_FIELDS_BY_REQUEST: Dict[Tuple[int, bool], Tuple[int, int]] = {
    (15, True): (16, 1),
    (16, False): (16, 0),
    (24, False): (24, 0),
    (24, True): (32, 8),
}


def select_pixel_format(bits_per_pixel: int, alpha_depth: int) -> PixelFormat:
    """
    Select the pixel format for a header's bits-per-pixel and alpha depth.

    Args:
        bits_per_pixel: Bits stored per pixel, alpha included
        alpha_depth: Alpha bits per pixel from the image descriptor

    Returns:
        The matching PixelFormat. 32 bpp without alpha is read as FORMAT24
        with a 4-byte stride.

    Raises:
        FormatError: If the combination is not supported
    """
    pixel_format = _FORMATS_BY_HEADER.get((bits_per_pixel, alpha_depth))
    if pixel_format is None:
        raise FormatError(
            f"{bits_per_pixel} bpp with {alpha_depth}-bit alpha channel not supported"
        )
    logger.debug(
        f"Selected {pixel_format.kind.name} ({pixel_format.bytes_per_pixel} bytes/pixel) "
        f"for {bits_per_pixel} bpp, {alpha_depth}-bit alpha"
    )
    return pixel_format


def header_fields_for_create(color_depth: int, has_alpha) -> Tuple[int, int]:
    """
    Map a requested (color depth, alpha) pair to header fields.

    Args:
        color_depth: Color bits per pixel, not counting alpha
        has_alpha: Whether the new image should carry alpha (truthiness)

    Returns:
        Tuple of (bits_per_pixel, alpha_depth)

    Raises:
        ArgumentError: If the pair cannot be written
    """
    fields = _HEADER_FIELDS_BY_REQUEST.get((color_depth, bool(has_alpha)))
    if fields is None:
        raise ArgumentError(
            f"color_depth={color_depth} with has_alpha={bool(has_alpha)} not supported"
        )
    return fields
