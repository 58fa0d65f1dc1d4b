"""
Conversion between TargaImage and Pillow images.

These helpers load or write a whole image at once, so they are meant for
handing TGA data to the rest of the Pillow ecosystem (or taking it back),
not for the row-streaming workloads TargaImage is built for.

Functions:
    to_pil_image: Read an open TargaImage into a Pillow image
    from_pil_image: Write a Pillow image to a new TGA file

Example:
    >>> from PIL import Image
    >>> with from_pil_image(Image.open("photo.png"), "photo.tga") as tga:
    ...     print(tga.spec())
"""

import logging
from typing import Any, Optional, Union

import numpy as np
from PIL import Image

from PX_Libs.TargaLib.image_spec import ImageSpec, Origin
from PX_Libs.TargaLib.targa_image import PathOrStream, TargaImage, create_tga

logger = logging.getLogger(__name__)


def to_pil_image(image: TargaImage) -> Any:
    """
    Read every row of an open TGA image into a Pillow image.

    Args:
        image: An open TargaImage

    Returns:
        PIL Image in "RGBA" mode if the TGA has alpha, otherwise "RGB"
    """
    channels = 4 if image.has_alpha else 3
    mode = "RGBA" if image.has_alpha else "RGB"

    if image.width == 0 or image.height == 0:
        return Image.new(mode, (image.width, image.height))

    pixels = np.empty((image.height, image.width, channels), dtype=np.uint8)
    for y in range(image.height):
        pixels[y] = image.get_row_array(y)[:, :channels]

    return Image.fromarray(pixels)


def _has_alpha_band(pil_image: Any) -> bool:
    return "A" in pil_image.getbands() or "transparency" in pil_image.info


def from_pil_image(
    pil_image: Any,
    destination: PathOrStream,
    color_depth: int = 24,
    has_alpha: Optional[bool] = None,
    origin: Union[Origin, str] = Origin.UPPER_LEFT,
) -> TargaImage:
    """
    Write a Pillow image to a new TGA file.

    Args:
        pil_image: Source PIL Image (any mode Pillow can convert to RGBA)
        destination: Path or writable binary file object for the TGA
        color_depth: 24 (default), 15 with alpha, or 16 without alpha
        has_alpha: Store an alpha channel. None means "if the source
                   image has one"
        origin: Which corner to store first (default: UPPER_LEFT)

    Returns:
        The new TargaImage, still open

    Raises:
        ArgumentError: If the depth/alpha combination cannot be written
    """
    if has_alpha is None:
        has_alpha = _has_alpha_band(pil_image)

    width, height = pil_image.size
    spec = ImageSpec(
        width=width,
        height=height,
        color_depth=color_depth,
        has_alpha=has_alpha,
        origin=origin,
    )

    target = create_tga(destination, spec)
    try:
        if width and height:
            pixels = np.asarray(pil_image.convert("RGBA"))
            for y in range(height):
                target.put_row_array(y, pixels[y])
    except Exception:
        target.close()
        raise

    logger.debug(f"Wrote {pil_image.mode} image as {target!r}")
    return target
