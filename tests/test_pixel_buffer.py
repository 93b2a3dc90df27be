"""
Unit tests for the pixel buffer provider.
"""

import pytest
from PIL import Image

from core.exceptions import PixelBufferUnavailableError
from core.pixel_buffer import PillowPixelBufferProvider, PixelBuffer, bounded_size, to_8bit

from conftest import gray16_png, pillow_png


class TestBoundedSize:

    def test_small_images_are_not_upscaled(self):
        assert bounded_size(100, 50, 1024) == (100, 50)

    def test_longer_edge_is_capped(self):
        assert bounded_size(2048, 1024, 1024) == (1024, 512)
        assert bounded_size(1000, 4000, 1024) == (256, 1024)

    def test_sides_never_collapse_to_zero(self):
        assert bounded_size(10000, 1, 1024) == (1024, 1)


class TestPixelBuffer:

    def test_array_shape(self):
        buffer = PixelBuffer(width=3, height=2, rgba=bytes(3 * 2 * 4))
        assert buffer.as_array().shape == (2, 3, 4)

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            PixelBuffer(width=2, height=2, rgba=b"\x00" * 15)

    def test_empty_size_rejected(self):
        with pytest.raises(ValueError):
            PixelBuffer(width=0, height=2, rgba=b"")


class TestPillowProvider:

    def test_decodes_rgba(self):
        data = pillow_png((4, 3), color=(10, 20, 30, 200))
        buffer = PillowPixelBufferProvider().load(data, max_dimension=1024)

        assert (buffer.width, buffer.height) == (4, 3)
        assert tuple(buffer.as_array()[0, 0]) == (10, 20, 30, 200)

    def test_rgb_gains_opaque_alpha(self):
        data = pillow_png((2, 2), color=(0, 255, 0), mode="RGB")
        pixels = PillowPixelBufferProvider().load(data, max_dimension=1024).as_array()
        assert (pixels[..., 3] == 255).all()

    def test_downscales_to_max_dimension(self):
        data = pillow_png((2048, 1024), color=(0, 0, 255, 255))
        buffer = PillowPixelBufferProvider().load(data, max_dimension=1024)
        assert (buffer.width, buffer.height) == (1024, 512)

    def test_garbage_bytes(self):
        with pytest.raises(PixelBufferUnavailableError):
            PillowPixelBufferProvider().load(b"not an image", max_dimension=1024)


class TestSixteenBitGray:

    def test_keeps_high_byte(self):
        data = gray16_png((20, 20), 30 * 257)
        pixels = PillowPixelBufferProvider().load(data, max_dimension=1024).as_array()

        assert tuple(pixels[0, 0]) == (30, 30, 30, 255)

    def test_full_scale_is_white(self):
        pixels = PillowPixelBufferProvider().load(gray16_png((4, 4), 0xFFFF), 1024).as_array()
        assert tuple(pixels[3, 3]) == (255, 255, 255, 255)

    def test_eight_bit_images_untouched(self):
        image = Image.new("RGB", (2, 2), (1, 2, 3))
        assert to_8bit(image) is image
