"""
PNG chunk reader.

Walks the chunk list of a PNG file and pulls out the structural metadata
needed for a print-readiness report, without decompressing image data.

Chunk layout:
    4 bytes   big-endian payload length
    4 bytes   ASCII chunk type
    N bytes   payload
    4 bytes   CRC (not verified here)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional, Tuple

from core.exceptions import FormatError
from logging_config import get_logger


logger = get_logger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# IHDR color types that carry an alpha channel (gray+alpha, RGBA)
COLOR_TYPES_WITH_ALPHA = frozenset({4, 6})

# pHYs unit specifier for "meter"
UNIT_METER = 1
INCHES_PER_METER = 39.37007874

CHUNK_OVERHEAD = 12  # length + type + CRC


@dataclass(frozen=True)
class PngMetadata:
    """Structural facts read from the PNG chunk list."""

    width: int = 0
    height: int = 0
    bit_depth: int = 0
    color_type: int = 0
    has_alpha: bool = False
    """Alpha channel in IHDR or a tRNS chunk."""

    has_transparency_chunk: bool = False
    dpi: Optional[int] = None
    """None unless pHYs declares pixels per meter."""

    icc_profile: Optional[str] = None
    chunk_types: Tuple[str, ...] = ()


def _dpi_from_phys(payload: bytes) -> Optional[int]:
    if len(payload) < 9:
        return None
    pixels_per_unit_x = struct.unpack_from(">I", payload, 0)[0]
    unit = payload[8]
    if unit != UNIT_METER or pixels_per_unit_x <= 0:
        return None
    return int(pixels_per_unit_x / INCHES_PER_METER + 0.5)


def _icc_profile_name(payload: bytes) -> Optional[str]:
    end = payload.find(b"\x00")
    if end <= 0:
        return None
    return payload[:end].decode("latin-1")


def parse_png_metadata(data: bytes) -> PngMetadata:
    """
    Parse PNG bytes into structural metadata.

    Args:
        data: Complete (or truncated) PNG file contents

    Returns:
        PngMetadata; width/height stay 0 when no IHDR chunk was found

    Raises:
        FormatError: If the 8-byte PNG signature is missing
    """
    if len(data) < len(PNG_SIGNATURE) or data[:len(PNG_SIGNATURE)] != PNG_SIGNATURE:
        raise FormatError("Invalid PNG signature", file_type="png")

    width = height = bit_depth = color_type = 0
    color_alpha = False
    has_trns = False
    dpi: Optional[int] = None
    icc_profile: Optional[str] = None
    chunk_types = []

    offset = len(PNG_SIGNATURE)
    total = len(data)

    while offset + 8 <= total:
        length, raw_type = struct.unpack_from(">I4s", data, offset)
        chunk_type = raw_type.decode("latin-1")
        start = offset + 8
        end = start + length
        if end > total:
            logger.debug(f"Chunk {chunk_type!r} at offset {offset} runs past end of file")
            break

        payload = data[start:end]
        chunk_types.append(chunk_type)

        if chunk_type == "IHDR" and length >= 10:
            width, height = struct.unpack_from(">II", payload, 0)
            bit_depth = payload[8]
            color_type = payload[9]
            color_alpha = color_type in COLOR_TYPES_WITH_ALPHA
        elif chunk_type == "pHYs":
            dpi = _dpi_from_phys(payload)
        elif chunk_type == "iCCP":
            icc_profile = _icc_profile_name(payload)
        elif chunk_type == "tRNS":
            has_trns = True

        offset = end + 4
        if chunk_type == "IEND":
            break

    logger.debug(f"PNG chunks: {', '.join(chunk_types)}")

    return PngMetadata(
        width=width,
        height=height,
        bit_depth=bit_depth,
        color_type=color_type,
        has_alpha=color_alpha or has_trns,
        has_transparency_chunk=has_trns,
        dpi=dpi,
        icc_profile=icc_profile,
        chunk_types=tuple(chunk_types),
    )
