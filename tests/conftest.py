"""
Pytest configuration and shared fixtures for Pixels tests.

This module provides shared test fixtures and helpers used across
multiple test modules.
"""

import struct

import pytest


def build_tga(
    width,
    height,
    bits_per_pixel,
    image_descriptor,
    pixel_data=b"",
    data_type_code=2,
    image_id=b"",
):
    """Assemble TGA file bytes by hand, independently of the header codec."""
    header = struct.pack(
        "<BBBHHBHHHHBB",
        len(image_id),
        0,
        data_type_code,
        0,
        0,
        0,
        0,
        0,
        width,
        height,
        bits_per_pixel,
        image_descriptor,
    )
    return header + image_id + pixel_data


@pytest.fixture
def tga_path(tmp_path):
    """
    Provide a path for a TGA file inside a temporary directory.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object for a file that does not exist yet
    """
    return tmp_path / "image.tga"


@pytest.fixture
def tga_bytes():
    """Provide the build_tga helper to tests."""
    return build_tga


@pytest.fixture
def sample_rgb_colors():
    """
    Provide a list of sample RGB color tuples for testing.

    Returns:
        List of (R, G, B) tuples with common test colors
    """
    return [
        (255, 0, 0),    # Red
        (0, 255, 0),    # Green
        (0, 0, 255),    # Blue
        (255, 255, 255),  # White
        (0, 0, 0),      # Black
        (128, 128, 128),  # Gray
    ]
