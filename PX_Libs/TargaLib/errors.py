"""
Exception types raised by TargaLib.

Classes:
    TargaError: Base class for every error raised by this package
    FormatError: The on-disk structure is malformed or unsupported
    ArgumentError: The caller passed an invalid value
    RangeError: A row index lies outside the image
    UseAfterCloseError: An operation was attempted on a closed image
"""


class TargaError(Exception):
    """Base class for TargaLib errors."""


class FormatError(TargaError):
    """Malformed or unsupported TGA data (compressed, mapped, interleaved, ...)."""


class ArgumentError(TargaError, ValueError):
    """Invalid caller input, such as an unsupported create spec or a wrong-sized row."""


class RangeError(TargaError, IndexError):
    """Row index outside [0, height)."""


class UseAfterCloseError(TargaError, ValueError):
    """Operation on an image that has already been closed."""
