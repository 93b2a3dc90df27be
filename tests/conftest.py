"""
Shared fixtures for the ArtworkCheck tests.

Two kinds of PNG are used:
- chunk-level PNGs built with struct/zlib, for exact control over IHDR,
  pHYs, iCCP and tRNS (their pixel data is not meant to be decoded)
- real PNGs written by Pillow, for anything that needs pixels
"""

import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image
from pypdf import PdfWriter

from core.pixel_buffer import PixelBuffer


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PIXELS_PER_METER_300_DPI = 11811


def png_chunk(chunk_type: bytes, payload: bytes = b"") -> bytes:
    """Encode one PNG chunk with a valid CRC."""
    crc = zlib.crc32(chunk_type + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + chunk_type + payload + struct.pack(">I", crc)


def build_png(
    width: int,
    height: int,
    bit_depth: int = 8,
    color_type: int = 2,
    phys=None,
    iccp_name=None,
    trns: bool = False,
    extra_chunks=(),
) -> bytes:
    """
    Build a chunk-level PNG.

    Args:
        phys: Optional (pixels_per_unit_x, unit_specifier)
        iccp_name: Optional ICC profile name (bytes or str)
        trns: Whether to add a tRNS chunk
        extra_chunks: Additional raw chunks inserted before IDAT
    """
    ihdr = struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, 0)
    parts = [PNG_SIGNATURE, png_chunk(b"IHDR", ihdr)]
    if iccp_name is not None:
        name = iccp_name.encode("latin-1") if isinstance(iccp_name, str) else iccp_name
        parts.append(png_chunk(b"iCCP", name + b"\x00\x00" + zlib.compress(b"profile")))
    if phys is not None:
        ppu, unit = phys
        parts.append(png_chunk(b"pHYs", struct.pack(">IIB", ppu, ppu, unit)))
    if trns:
        parts.append(png_chunk(b"tRNS", b"\x00\x00\x00\x00\x00\x00"))
    parts.extend(extra_chunks)
    parts.append(png_chunk(b"IDAT", zlib.compress(b"")))
    parts.append(png_chunk(b"IEND"))
    return b"".join(parts)


def pillow_png(size, color=(255, 0, 0, 255), dpi=None, mode="RGBA") -> bytes:
    """Encode a solid-color image with Pillow."""
    image = Image.new(mode, size, color)
    buffer = io.BytesIO()
    if dpi is not None:
        image.save(buffer, format="PNG", dpi=(dpi, dpi))
    else:
        image.save(buffer, format="PNG")
    return buffer.getvalue()


def array_png(pixels: np.ndarray) -> bytes:
    """Encode an (h, w, 4) uint8 array as an RGBA PNG."""
    buffer = io.BytesIO()
    Image.fromarray(pixels.astype(np.uint8)).save(buffer, format="PNG")
    return buffer.getvalue()


def gray16_png(size, value: int) -> bytes:
    """Solid 16-bit grayscale PNG (IHDR bit depth 16, color type 0)."""
    width, height = size
    samples = np.full((height, width), value, dtype=np.uint16)
    buffer = io.BytesIO()
    Image.fromarray(samples).save(buffer, format="PNG")
    return buffer.getvalue()


def rgba_array(height: int, width: int, color) -> np.ndarray:
    """Solid (h, w, 4) uint8 array."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = color
    return pixels


def build_pdf(pages=((612, 792),), rotate: int = 0) -> bytes:
    """Blank PDF with the given page sizes in points."""
    writer = PdfWriter()
    for width, height in pages:
        page = writer.add_blank_page(width=width, height=height)
        if rotate:
            page.rotate(rotate)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class StaticPixelProvider:
    """Pixel provider returning a fixed array, for extractor tests."""

    def __init__(self, pixels: np.ndarray):
        self.pixels = pixels.astype(np.uint8)
        self.calls = []

    def load(self, data, max_dimension):
        self.calls.append(max_dimension)
        height, width = self.pixels.shape[:2]
        return PixelBuffer(width=width, height=height, rgba=self.pixels.tobytes())


# Fixtures

@pytest.fixture
def png_300dpi():
    """Scenario A: 3000x1500 with pHYs at 300 DPI."""
    return build_png(3000, 1500, phys=(PIXELS_PER_METER_300_DPI, 1))


@pytest.fixture
def png_no_phys():
    """Scenario B: 3000x1500 without pHYs."""
    return build_png(3000, 1500)


@pytest.fixture
def red_png():
    return pillow_png((40, 30), color=(255, 0, 0, 255), dpi=300)


@pytest.fixture
def white_png():
    return pillow_png((64, 64), color=(255, 255, 255, 255))


@pytest.fixture
def letter_pdf():
    return build_pdf(((612, 792),))
