"""Quality report builder for PNG artwork."""

from __future__ import annotations

from typing import Optional

from core.exceptions import UnreadableDimensionsError
from logging_config import get_logger
from models.quality_report import (
    FileType,
    ImageCategory,
    PixelDimensions,
    QualityReport,
)
from modules import print_size
from modules.png_chunks import parse_png_metadata


logger = get_logger(__name__)


class PngAnalyzer:
    """Turns PNG chunk metadata into a print-readiness report."""

    def analyze(self, data: bytes, file_size: Optional[int] = None) -> QualityReport:
        """
        Analyze raw PNG bytes.

        Args:
            data: PNG file contents
            file_size: Size in bytes used for fileSizeMB (defaults to len(data))

        Raises:
            FormatError: If the PNG signature is invalid
            UnreadableDimensionsError: If IHDR is missing or declares 0 pixels
        """
        meta = parse_png_metadata(data)
        if not meta.width or not meta.height:
            raise UnreadableDimensionsError(
                "Unable to read PNG dimensions", meta.width, meta.height
            )

        dpi = meta.dpi
        notes = print_size.base_notes()
        if dpi is None:
            notes.append("No embedded DPI value found (pHYs chunk missing).")
        if meta.has_alpha:
            notes.append("Alpha channel detected in artwork.")
        else:
            notes.append("No alpha channel detected.")
        if meta.icc_profile:
            notes.append(f"Embedded ICC profile: {meta.icc_profile}.")
        else:
            notes.append("No embedded ICC profile detected.")

        size = len(data) if file_size is None else file_size
        rating = print_size.quality_rating(dpi, meta.width, meta.height)

        logger.debug(
            f"PNG {meta.width}x{meta.height} dpi={dpi} "
            f"bit_depth={meta.bit_depth} color_type={meta.color_type} rating={rating.value}"
        )

        return QualityReport(
            file_type=FileType.PNG,
            file_size_mb=print_size.file_size_mb(size),
            pixels=PixelDimensions(meta.width, meta.height),
            dpi=dpi,
            has_icc=bool(meta.icc_profile),
            icc_profile=meta.icc_profile,
            bit_depth=meta.bit_depth,
            has_alpha=meta.has_alpha,
            alpha_stats=None,
            image_category=ImageCategory.RASTER,
            recommended_sizes=print_size.recommended_sizes(meta.width, meta.height),
            aspect_ratio=print_size.aspect_ratio_label(meta.width, meta.height),
            rating=rating,
            notes=tuple(notes),
        )
