"""
PX_Libs - Pixels Library Modules

This package contains the core functionality of the Pixels project,
organized into specialized sub-packages:

- TargaLib: Row-at-a-time reading and writing of uncompressed TGA images
"""

__version__ = "0.1.0"
