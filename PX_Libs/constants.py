"""
Constants and configuration values for Pixels.

This module centralizes the TGA header layout, bit masks, and the
defaults used when creating new images.
"""

# Header layout
TGA_HEADER_SIZE = 18
TGA_HEADER_FORMAT = "<BBBHHBHHHHBB"
MAX_DIMENSION = 0xFFFF

# Data type codes
DATA_TYPE_UNCOMPRESSED_RGB = 2

# Image descriptor bits
DESCRIPTOR_ALPHA_MASK = 0x0F
DESCRIPTOR_UPPER_LEFT = 0x20
DESCRIPTOR_INTERLEAVE_MASK = 0xC0

# Origin names
ORIGIN_UPPER_LEFT = "UPPER_LEFT"
ORIGIN_LOWER_LEFT = "LOWER_LEFT"

# Defaults for new images
DEFAULT_HAS_ALPHA = False
DEFAULT_ORIGIN = ORIGIN_UPPER_LEFT

# Channel values
CHANNEL_MAX = 255
CHANNEL5_MAX = 0x1F
OPAQUE_ALPHA = 255
TRANSPARENT_ALPHA = 0

# ImageSpec field names
FIELD_WIDTH = "width"
FIELD_HEIGHT = "height"
FIELD_COLOR_DEPTH = "color_depth"
FIELD_ORIGIN = "origin"
