"""
TGA header codec.

Every TGA file starts with a fixed 18-byte header. This module converts
between those bytes and the ImageHeader record, and derives the
ResolvedSpec view (pixel data offset, alpha/color depth, origin) that the
row engine works from.

Classes:
    ImageHeader: The raw header fields, as stored on disk
    ResolvedSpec: Values derived from the header once, at open time

Functions:
    decode_header: Parse and validate 18 header bytes
    encode_header: Build the header bytes for a new image
"""

import struct
from dataclasses import dataclass
from typing import Tuple

from PX_Libs.constants import (
    DATA_TYPE_UNCOMPRESSED_RGB,
    DESCRIPTOR_ALPHA_MASK,
    DESCRIPTOR_INTERLEAVE_MASK,
    DESCRIPTOR_UPPER_LEFT,
    MAX_DIMENSION,
    TGA_HEADER_FORMAT,
    TGA_HEADER_SIZE,
)
from PX_Libs.TargaLib.errors import ArgumentError, FormatError
from PX_Libs.TargaLib.image_spec import Origin


@dataclass(frozen=True)
class ImageHeader:
    """Fields of the 18-byte TGA header."""

    id_length: int
    colormap_type: int
    data_type_code: int
    colormap_origin: int
    colormap_length: int
    colormap_depth: int
    x_origin: int
    y_origin: int
    width: int
    height: int
    bits_per_pixel: int
    image_descriptor: int


@dataclass(frozen=True)
class ResolvedSpec:
    """Layout values computed once from an ImageHeader.

    Attributes:
        width: Width of the image in pixels
        height: Height of the image in pixels
        bits_per_pixel: Bits stored per pixel, alpha included
        bytes_per_pixel: Bytes stored per pixel
        alpha_depth: Bits of alpha per pixel (low nibble of the descriptor)
        color_depth: bits_per_pixel minus alpha_depth
        origin: Which corner is stored first
        pixel_data_offset: File offset of the first stored row
    """

    width: int
    height: int
    bits_per_pixel: int
    bytes_per_pixel: int
    alpha_depth: int
    color_depth: int
    origin: Origin
    pixel_data_offset: int


def decode_header(raw: bytes) -> Tuple[ImageHeader, ResolvedSpec]:
    """
    Parse a TGA header.

    Args:
        raw: At least the first 18 bytes of the file; extra bytes are ignored

    Returns:
        Tuple of (ImageHeader, ResolvedSpec)

    Raises:
        FormatError: If the header is short, the image is not uncompressed
                     true-color, or the pixel data is interleaved
    """
    if len(raw) < TGA_HEADER_SIZE:
        raise FormatError(
            f"TGA header truncated: got {len(raw)} bytes, expected {TGA_HEADER_SIZE}"
        )

    header = ImageHeader(*struct.unpack(TGA_HEADER_FORMAT, raw[:TGA_HEADER_SIZE]))

    if header.data_type_code != DATA_TYPE_UNCOMPRESSED_RGB:
        raise FormatError(
            "Only uncompressed, unmapped RGB or RGBA data is supported "
            f"(data type {header.data_type_code}; is this a TGA file?)"
        )

    if header.image_descriptor & DESCRIPTOR_INTERLEAVE_MASK:
        raise FormatError("Interleaved data not supported")

    alpha_depth = header.image_descriptor & DESCRIPTOR_ALPHA_MASK
    if header.image_descriptor & DESCRIPTOR_UPPER_LEFT:
        origin = Origin.UPPER_LEFT
    else:
        origin = Origin.LOWER_LEFT

    resolved = ResolvedSpec(
        width=header.width,
        height=header.height,
        bits_per_pixel=header.bits_per_pixel,
        bytes_per_pixel=(header.bits_per_pixel + 7) // 8,
        alpha_depth=alpha_depth,
        color_depth=header.bits_per_pixel - alpha_depth,
        origin=origin,
        pixel_data_offset=TGA_HEADER_SIZE + header.id_length + header.colormap_length,
    )
    return header, resolved


def encode_header(
    width: int,
    height: int,
    bits_per_pixel: int,
    image_descriptor: int,
) -> bytes:
    """
    Build the 18 header bytes for a new uncompressed true-color image.

    The ID field, color map and x/y origin are all left empty.

    Raises:
        ArgumentError: If a value does not fit its header field
    """
    for name, value, limit in (
        ("width", width, MAX_DIMENSION),
        ("height", height, MAX_DIMENSION),
        ("bits_per_pixel", bits_per_pixel, 0xFF),
        ("image_descriptor", image_descriptor, 0xFF),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ArgumentError(f"{name} must be an integer, got {value!r}")
        if not 0 <= value <= limit:
            raise ArgumentError(f"{name} must be 0-{limit}, got {value}")

    return struct.pack(
        TGA_HEADER_FORMAT,
        0,  # id length
        0,  # color map type
        DATA_TYPE_UNCOMPRESSED_RGB,
        0,  # color map origin
        0,  # color map length
        0,  # color map depth
        0,  # x origin
        0,  # y origin
        width,
        height,
        bits_per_pixel,
        image_descriptor,
    )
