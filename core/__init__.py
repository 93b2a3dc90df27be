"""
Core module for ArtworkCheck.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- pixel_buffer: RGBA surface provider used by the color extractor
"""

from .exceptions import (
    ArtworkCheckError,
    FormatError,
    UnreadableDimensionsError,
    UnsupportedFileTypeError,
    PixelBufferUnavailableError,
)
from .pixel_buffer import PixelBuffer, PixelBufferProvider, PillowPixelBufferProvider

__all__ = [
    "ArtworkCheckError",
    "FormatError",
    "UnreadableDimensionsError",
    "UnsupportedFileTypeError",
    "PixelBufferUnavailableError",
    "PixelBuffer",
    "PixelBufferProvider",
    "PillowPixelBufferProvider",
]
