"""
Unit tests for the pixel_formats module.

Tests the bit-exact color/channel conversions of each pixel format, the
on-disk byte forms, and agreement between the scalar and NumPy paths.
"""

import numpy as np
import pytest

from PX_Libs.TargaLib.pixel_formats import PixelFormat, PixelFormatKind

FORMAT15 = PixelFormat(PixelFormatKind.FORMAT15)
FORMAT16 = PixelFormat(PixelFormatKind.FORMAT16)
FORMAT24 = PixelFormat(PixelFormatKind.FORMAT24)
FORMAT24_PADDED = PixelFormat(PixelFormatKind.FORMAT24, 4)
FORMAT32 = PixelFormat(PixelFormatKind.FORMAT32)

ALL_FORMATS = [FORMAT15, FORMAT16, FORMAT24, FORMAT24_PADDED, FORMAT32]


class TestPixelFormat:
    """Tests for PixelFormat construction and properties."""

    def test_default_strides(self):
        """Should default to the natural byte size of each kind."""
        assert FORMAT15.bytes_per_pixel == 2
        assert FORMAT16.bytes_per_pixel == 2
        assert FORMAT24.bytes_per_pixel == 3
        assert FORMAT32.bytes_per_pixel == 4

    def test_has_alpha(self):
        """Should report alpha only for FORMAT16 and FORMAT32."""
        assert not FORMAT15.has_alpha
        assert FORMAT16.has_alpha
        assert not FORMAT24.has_alpha
        assert not FORMAT24_PADDED.has_alpha
        assert FORMAT32.has_alpha

    def test_rejects_invalid_stride(self):
        """Should refuse a stride the kind cannot use."""
        with pytest.raises(ValueError):
            PixelFormat(PixelFormatKind.FORMAT15, 3)


class TestFormat15:
    """Tests for the 5-5-5 format."""

    def test_white_quantizes_to_all_ones(self):
        """Should map 255 to 31 in every channel and back to 255."""
        color = FORMAT15.color_from_rgb(255, 255, 255)

        assert color == 0x7FFF
        assert (color >> 10) & 0x1F == 31
        assert (color >> 5) & 0x1F == 31
        assert color & 0x1F == 31
        assert FORMAT15.rgb_from_color(color) == (255, 255, 255)

    def test_red_in_high_bits(self):
        """Should store red in bits 10-14 and blue in bits 0-4."""
        assert FORMAT15.color_from_rgb(255, 0, 0) == 0x7C00
        assert FORMAT15.color_from_rgb(0, 255, 0) == 0x03E0
        assert FORMAT15.color_from_rgb(0, 0, 255) == 0x001F

    def test_quantization_truncates(self):
        """Should drop the low 3 bits rather than rounding."""
        color = FORMAT15.color_from_rgb(7, 15, 254)

        assert color == (0 << 10) | (1 << 5) | 31
        assert FORMAT15.rgb_from_color(color) == (0, 8, 255)

    def test_expansion_uses_integer_scaling(self):
        """Should scale 5-bit channels with c * 255 // 31."""
        for channel5 in range(32):
            r, g, b = FORMAT15.rgb_from_color(channel5 << 10)
            assert r == channel5 * 255 // 31
            assert (g, b) == (0, 0)

    def test_rgba_is_opaque(self):
        """Should report alpha 255 and ignore alpha on write."""
        assert FORMAT15.rgba_from_color(0x7FFF) == (255, 255, 255, 255)
        assert FORMAT15.color_from_rgba(8, 16, 24, 0) == FORMAT15.color_from_rgb(8, 16, 24)

    def test_read_masks_high_bit(self):
        """Should ignore bit 15 of stored values."""
        assert FORMAT15.colors_from_bytes(b"\xff\xff").tolist() == [0x7FFF]


class TestFormat16:
    """Tests for the 5-5-5-1 format."""

    def test_alpha_bit(self):
        """Should map bit 15 to alpha 255 or 0."""
        assert FORMAT16.rgba_from_color(0x8000) == (0, 0, 0, 255)
        assert FORMAT16.rgba_from_color(0x7FFF) == (255, 255, 255, 0)

    def test_alpha_threshold(self):
        """Should set the alpha bit from the top bit of an 8-bit alpha."""
        assert FORMAT16.color_from_rgba(0, 0, 0, 128) == 0x8000
        assert FORMAT16.color_from_rgba(0, 0, 0, 127) == 0x0000

    def test_rgb_write_is_opaque(self):
        """Should store RGB writes with the alpha bit set."""
        assert FORMAT16.color_from_rgb(0, 0, 0) == 0x8000
        assert FORMAT16.color_from_rgb(255, 0, 0) == 0xFC00

    def test_rgb_read_drops_alpha(self):
        """Should return only r, g, b from rgb_from_color."""
        assert FORMAT16.rgb_from_color(0xFFFF) == (255, 255, 255)
        assert FORMAT16.rgb_from_color(0x7FFF) == (255, 255, 255)

    def test_read_keeps_high_bit(self):
        """Should keep bit 15 of stored values."""
        assert FORMAT16.colors_from_bytes(b"\xff\xff").tolist() == [0xFFFF]


class TestFormat24:
    """Tests for the 8-8-8 format."""

    def test_packs_channels(self):
        """Should pack r, g, b into the high, middle and low bytes."""
        assert FORMAT24.color_from_rgb(0x12, 0x34, 0x56) == 0x123456
        assert FORMAT24.rgb_from_color(0x123456) == (0x12, 0x34, 0x56)

    def test_rgba_is_opaque(self):
        """Should append 255 on read and ignore alpha on write."""
        assert FORMAT24.rgba_from_color(0x010203) == (1, 2, 3, 255)
        assert FORMAT24.color_from_rgba(1, 2, 3, 0) == 0x010203

    def test_truncates_float_channels(self):
        """Should truncate non-integer channel values."""
        assert FORMAT24.color_from_rgb(12.7, 0.2, 254.9) == (12 << 16) | 254

    def test_three_byte_form(self):
        """Should store the low 3 bytes of the little-endian pack."""
        assert FORMAT24.bytes_from_colors([0x123456]) == b"\x56\x34\x12"
        assert FORMAT24.colors_from_bytes(b"\x56\x34\x12").tolist() == [0x123456]

    def test_four_byte_form(self):
        """Should write a zero pad byte and ignore it on read."""
        assert FORMAT24_PADDED.bytes_from_colors([0x123456]) == b"\x56\x34\x12\x00"
        assert FORMAT24_PADDED.colors_from_bytes(b"\x56\x34\x12\xff").tolist() == [0x123456]


class TestFormat32:
    """Tests for the 8-8-8-8 format."""

    def test_packs_channels(self):
        """Should pack alpha into the top byte."""
        assert FORMAT32.color_from_rgba(1, 2, 3, 4) == 0x04010203
        assert FORMAT32.rgba_from_color(0x04010203) == (1, 2, 3, 4)

    def test_rgb_access(self):
        """Should drop alpha on RGB reads and write RGB as opaque."""
        assert FORMAT32.rgb_from_color(0x04010203) == (1, 2, 3)
        assert FORMAT32.color_from_rgb(1, 2, 3) == 0xFF010203

    def test_byte_form(self):
        """Should store colors as little-endian u32 (B, G, R, A)."""
        assert FORMAT32.bytes_from_colors([0x04010203]) == b"\x03\x02\x01\x04"


class TestRoundTrip:
    """Tests that encoding is stable after the first quantization."""

    @pytest.mark.parametrize("pixel_format", ALL_FORMATS, ids=lambda f: f"{f.kind.name}x{f.bytes_per_pixel}")
    def test_rgb_encoding_is_idempotent(self, pixel_format):
        """Should reach a fixed point after one rgb -> color -> rgb cycle."""
        for r in range(0, 256, 17):
            for g in range(0, 256, 17):
                for b in range(3, 256, 36):
                    color = pixel_format.color_from_rgb(r, g, b)
                    assert pixel_format.color_from_rgb(*pixel_format.rgb_from_color(color)) == color

    @pytest.mark.parametrize("pixel_format", [FORMAT16, FORMAT32], ids=lambda f: f.kind.name)
    def test_rgba_encoding_is_idempotent(self, pixel_format):
        """Should reach a fixed point for formats with alpha."""
        for value in range(0, 256, 15):
            for alpha in (0, 1, 127, 128, 200, 255):
                color = pixel_format.color_from_rgba(value, 255 - value, value // 2, alpha)
                assert pixel_format.color_from_rgba(*pixel_format.rgba_from_color(color)) == color

    def test_representable_values_are_exact(self):
        """Should reproduce 8-bit values exactly for 8-bit formats."""
        for value in (0, 1, 127, 128, 254, 255):
            assert FORMAT24.rgb_from_color(FORMAT24.color_from_rgb(value, value, value)) == (
                value,
                value,
                value,
            )
            assert FORMAT32.rgba_from_color(FORMAT32.color_from_rgba(value, 0, 255, value)) == (
                value,
                0,
                255,
                value,
            )


class TestVectorizedConversions:
    """Tests that the NumPy row helpers agree with the scalar rules."""

    @pytest.mark.parametrize("pixel_format", [FORMAT15, FORMAT16], ids=lambda f: f.kind.name)
    def test_rgba_array_matches_scalar_for_all_16_bit_values(self, pixel_format):
        """Should match rgba_from_color for every 16-bit color."""
        colors = np.arange(0x10000, dtype=np.uint32)

        array = pixel_format.rgba_array_from_colors(colors)

        expected = [pixel_format.rgba_from_color(c) for c in colors.tolist()]
        assert [tuple(row) for row in array.tolist()] == expected

    @pytest.mark.parametrize("pixel_format", [FORMAT24, FORMAT32], ids=lambda f: f.kind.name)
    def test_rgba_array_matches_scalar_for_random_values(self, pixel_format):
        """Should match rgba_from_color for 8-bit formats."""
        colors = np.random.default_rng(0).integers(0, 2**32, size=1000, dtype=np.uint64)
        colors = colors.astype(np.uint32)

        array = pixel_format.rgba_array_from_colors(colors)

        expected = [pixel_format.rgba_from_color(c) for c in colors.tolist()]
        assert [tuple(row) for row in array.tolist()] == expected

    @pytest.mark.parametrize("pixel_format", ALL_FORMATS, ids=lambda f: f"{f.kind.name}x{f.bytes_per_pixel}")
    def test_colors_from_array_matches_scalar(self, pixel_format):
        """Should match color_from_rgba for random channel values."""
        channels = np.random.default_rng(1).integers(0, 256, size=(500, 4), dtype=np.uint8)

        colors = pixel_format.colors_from_rgba_array(channels)

        expected = [pixel_format.color_from_rgba(*row) for row in channels.tolist()]
        assert colors.tolist() == expected

    def test_three_column_array_is_opaque(self):
        """Should treat an (N, 3) array as fully opaque."""
        channels = np.array([[255, 0, 0], [0, 0, 0]], dtype=np.uint8)

        assert FORMAT16.colors_from_rgba_array(channels).tolist() == [0xFC00, 0x8000]
        assert FORMAT32.colors_from_rgba_array(channels).tolist() == [0xFFFF0000, 0xFF000000]

    def test_rejects_bad_array_shape(self):
        """Should refuse arrays without 3 or 4 channels."""
        with pytest.raises(ValueError):
            FORMAT24.colors_from_rgba_array(np.zeros((2, 2), dtype=np.uint8))

    @pytest.mark.parametrize("pixel_format", ALL_FORMATS, ids=lambda f: f"{f.kind.name}x{f.bytes_per_pixel}")
    def test_bytes_round_trip(self, pixel_format):
        """Should decode what it encodes, one stride per pixel."""
        colors = [pixel_format.color_from_rgba(r, 255 - r, r // 3, r) for r in range(0, 256, 51)]

        raw = pixel_format.bytes_from_colors(colors)

        assert len(raw) == len(colors) * pixel_format.bytes_per_pixel
        assert pixel_format.colors_from_bytes(raw).tolist() == colors

    def test_empty_row(self):
        """Should handle zero-width rows."""
        assert FORMAT24.bytes_from_colors([]) == b""
        assert FORMAT24.colors_from_bytes(b"").tolist() == []

    def test_rejects_partial_pixel(self):
        """Should refuse byte strings that split a pixel."""
        with pytest.raises(ValueError):
            FORMAT32.colors_from_bytes(b"\x00\x01\x02")
