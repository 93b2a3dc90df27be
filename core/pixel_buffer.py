"""
Pixel buffer provider for raster artwork.

The color extractor never decodes images itself. It asks a provider for a
bounded RGBA surface, which keeps the palette algorithm independent of the
image library in use.

Contract:
    - Output is row-major RGBA, 4 bytes per pixel, alpha interleaved
    - The longer edge is at most ``max_dimension`` pixels (aspect preserved)
    - Images are never upscaled
    - If no surface can be produced, PixelBufferUnavailableError is raised

Usage:
    provider = PillowPixelBufferProvider()
    buffer = provider.load(png_bytes, max_dimension=1024)
    pixels = buffer.as_array()   # numpy (height, width, 4) uint8
"""

from __future__ import annotations

import io
import math
from dataclasses import dataclass

import numpy as np
from PIL import Image, UnidentifiedImageError

from .exceptions import PixelBufferUnavailableError


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA pixels for one image."""

    width: int
    height: int
    rgba: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid pixel buffer size {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.rgba) != expected:
            raise ValueError(
                f"RGBA buffer has {len(self.rgba)} bytes, expected {expected}"
            )

    def as_array(self) -> np.ndarray:
        """Read-only numpy view shaped (height, width, 4)."""
        return np.frombuffer(self.rgba, dtype=np.uint8).reshape(
            self.height, self.width, 4
        )


def bounded_size(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    """
    Scale (width, height) so the longer edge fits in max_dimension.

    Never upscales; each side is at least one pixel.
    """
    scale = min(1.0, max_dimension / max(width, height))
    return (
        max(1, math.floor(width * scale + 0.5)),
        max(1, math.floor(height * scale + 0.5)),
    )


def to_8bit(image: Image.Image) -> Image.Image:
    """
    Reduce integer grayscale modes (I, I;16, I;16B) to 8-bit L.

    Pillow's own conversion clamps those samples at 255, so a 16-bit gray
    brighter than 255/65535 would come out white. The high byte is kept
    instead, the same as a browser canvas drawing a 16-bit PNG.
    """
    if not image.mode.startswith("I"):
        return image
    samples = np.clip(np.asarray(image, dtype=np.int64), 0, 0xFFFF)
    return Image.fromarray((samples >> 8).astype(np.uint8))


class PixelBufferProvider:
    """Capability that turns encoded image bytes into a PixelBuffer."""

    def load(self, data: bytes, max_dimension: int) -> PixelBuffer:
        raise NotImplementedError


class PillowPixelBufferProvider(PixelBufferProvider):
    """Decode with Pillow and downscale onto a bounded RGBA canvas."""

    def __init__(self, resample: int = Image.Resampling.BILINEAR):
        self.resample = resample

    def load(self, data: bytes, max_dimension: int) -> PixelBuffer:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                rgba = to_8bit(image).convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise PixelBufferUnavailableError(str(exc)) from exc

        width, height = bounded_size(rgba.width, rgba.height, max_dimension)
        if (width, height) != rgba.size:
            rgba = rgba.resize((width, height), self.resample)

        return PixelBuffer(width=width, height=height, rgba=rgba.tobytes())
