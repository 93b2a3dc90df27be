"""Geometry-only PDF analyzer for vector artwork."""

from __future__ import annotations

import io
from typing import Optional, Tuple

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from core.exceptions import FormatError, UnreadableDimensionsError
from logging_config import get_logger
from models.quality_report import FileType, ImageCategory, QualityReport
from modules import print_size


logger = get_logger(__name__)

# Vector pages are rated as if rasterized at this resolution
ASSUMED_RASTER_DPI = 300

VECTOR_NOTE = (
    "Vector PDF detected. DPI and scaling are determined at print time; "
    "verify artwork before rasterization."
)


def first_page_size_points(reader: PdfReader) -> Tuple[float, float]:
    """
    Visible size of the first page in points, as a viewer shows it.

    Uses the crop box (which falls back to the media box) and swaps the
    sides for pages rotated by 90 or 270 degrees.
    """
    page = reader.pages[0]
    box = page.cropbox
    width = abs(float(box.width))
    height = abs(float(box.height))
    rotation = page.rotation % 360
    if rotation in (90, 270):
        width, height = height, width
    return width, height


class PDFAnalyzer:
    """Extract first-page geometry and rate it like a 300 DPI raster."""

    def analyze(self, data: bytes, file_size: Optional[int] = None) -> QualityReport:
        try:
            reader = PdfReader(io.BytesIO(data))
            page_count = len(reader.pages)
        except (PyPdfError, ValueError, OSError) as exc:
            raise FormatError("Unable to read PDF document", file_type="pdf") from exc

        if page_count == 0:
            raise UnreadableDimensionsError("Unable to read PDF page dimensions")

        try:
            width_points, height_points = first_page_size_points(reader)
        except (PyPdfError, KeyError, ValueError, TypeError) as exc:
            raise FormatError("Unable to read PDF document", file_type="pdf") from exc

        if not width_points or not height_points:
            raise UnreadableDimensionsError(
                "Unable to read PDF page dimensions", width_points, height_points
            )

        width_in = width_points / print_size.POINTS_PER_INCH
        height_in = height_points / print_size.POINTS_PER_INCH
        width_px = print_size.round_half_up(width_in * ASSUMED_RASTER_DPI)
        height_px = print_size.round_half_up(height_in * ASSUMED_RASTER_DPI)

        notes = print_size.base_notes()
        notes.append(VECTOR_NOTE)

        size = len(data) if file_size is None else file_size
        logger.debug(
            f"PDF {page_count} page(s), first page {width_points}x{height_points} pt "
            f"({width_in:.2f}x{height_in:.2f} in)"
        )

        return QualityReport(
            file_type=FileType.PDF,
            file_size_mb=print_size.file_size_mb(size),
            pixels=None,
            dpi=None,
            has_icc=False,
            icc_profile=None,
            bit_depth=None,
            has_alpha=False,
            alpha_stats=None,
            image_category=ImageCategory.VECTOR,
            recommended_sizes=print_size.recommended_sizes_from_physical(width_in, height_in),
            aspect_ratio=print_size.aspect_ratio_label(width_points, height_points),
            rating=print_size.quality_rating(None, width_px, height_px),
            notes=tuple(notes),
        )
