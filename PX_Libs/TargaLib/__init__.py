"""
TargaLib - Row-at-a-time TGA image I/O

Reads and writes RGB/RGBA pixel data stored in uncompressed,
non-interleaved, true-color TGA (Targa) files, one row at a time.
15-bit, 16-bit (1-bit alpha), 24-bit and 32-bit (8-bit alpha) images
are supported. Compressed, color-mapped and interleaved images are not.
"""

from PX_Libs.TargaLib.errors import (
    TargaError,
    FormatError,
    ArgumentError,
    RangeError,
    UseAfterCloseError,
)
from PX_Libs.TargaLib.image_spec import ImageSpec, Origin
from PX_Libs.TargaLib.tga_header import (
    ImageHeader,
    ResolvedSpec,
    decode_header,
    encode_header,
)
from PX_Libs.TargaLib.pixel_formats import (
    PixelFormat,
    PixelFormatKind,
    RgbColor,
    RgbaColor,
)
from PX_Libs.TargaLib.format_dispatch import (
    select_pixel_format,
    header_fields_for_create,
)
from PX_Libs.TargaLib.targa_image import TargaImage, open_tga, create_tga
from PX_Libs.TargaLib.pillow_bridge import to_pil_image, from_pil_image

__all__ = [
    "TargaError",
    "FormatError",
    "ArgumentError",
    "RangeError",
    "UseAfterCloseError",
    "ImageSpec",
    "Origin",
    "ImageHeader",
    "ResolvedSpec",
    "decode_header",
    "encode_header",
    "PixelFormat",
    "PixelFormatKind",
    "RgbColor",
    "RgbaColor",
    "select_pixel_format",
    "header_fields_for_create",
    "TargaImage",
    "open_tga",
    "create_tga",
    "to_pil_image",
    "from_pil_image",
]
