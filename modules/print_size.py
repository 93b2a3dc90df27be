"""Print size, aspect ratio and quality rating math for artwork reports."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

from models.quality_report import PrintSize, QualityRating, QualityReport


CM_PER_INCH = 2.54
POINTS_PER_INCH = 72

# Tiers the report carries; the others are derived on demand
RECOMMENDED_TIERS = (300, 150)
DPI_TIERS = (300, 250, 200, 150, 100, 72)

# Rating thresholds
OPTIMAL_DPI = 300
GOOD_DPI = 150
# Short-edge pixel proxy when no DPI is known (300 DPI at 15in / 7.5in)
OPTIMAL_SHORT_EDGE_PX = 4500
GOOD_SHORT_EDGE_PX = 2250

ASPECT_RATIO_SCALE = 1000

DTF_GUIDELINES = (
    "Keep text ≥ 2.5 mm x-height and hairlines ≥ 0.5 mm for DTF prints.",
    "Avoid semi-transparent layers; use solid colors for best adhesion.",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def round_to(value: float, decimals: int = 2) -> float:
    """Round half-up to a fixed number of decimals (2.345 -> 2.35)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def tier_key(dpi: int) -> str:
    """Report key for a DPI tier, e.g. 300 -> 'at300dpi'."""
    return f"at{dpi}dpi"


def size_from_inches(width_in: float, height_in: float) -> PrintSize:
    return PrintSize(
        w_in=round_to(width_in),
        h_in=round_to(height_in),
        w_cm=round_to(width_in * CM_PER_INCH),
        h_cm=round_to(height_in * CM_PER_INCH),
    )


def size_from_pixels_at_dpi(width: float, height: float, dpi: float) -> PrintSize:
    """
    Physical print size of a raster at the given DPI.

    Args:
        width: Width in pixels
        height: Height in pixels
        dpi: Target dots per inch (must be positive)

    Returns:
        PrintSize with inches and centimeters rounded to 2 decimals

    Raises:
        ValueError: If dpi is not positive
    """
    if dpi <= 0:
        raise ValueError(f"DPI must be positive, got {dpi}")
    return size_from_inches(width / dpi, height / dpi)


def size_at_dpi(width: float, height: float, dpi: int) -> PrintSize:
    """On-demand size for any positive DPI, usually one of DPI_TIERS."""
    return size_from_pixels_at_dpi(width, height, dpi)


def report_size_at_dpi(report: QualityReport, dpi: int) -> PrintSize:
    """
    Print size of a finished report at any DPI tier.

    Raster reports scale from their pixels; vector reports keep their
    physical page size at every tier.
    """
    if report.pixels is not None:
        return size_from_pixels_at_dpi(report.pixels.w, report.pixels.h, dpi)
    return report.recommended_sizes[tier_key(RECOMMENDED_TIERS[0])]


def tier_sizes(report: QualityReport, tiers: Sequence[int] = DPI_TIERS) -> Dict[str, PrintSize]:
    """Sizes for every DPI tier, keyed like recommended_sizes ("at250dpi", ...)."""
    return {tier_key(dpi): report_size_at_dpi(report, dpi) for dpi in tiers}


def recommended_sizes(width: float, height: float) -> Dict[str, PrintSize]:
    """Sizes at the 300 and 150 DPI tiers for a raster."""
    return {
        tier_key(dpi): size_from_pixels_at_dpi(width, height, dpi)
        for dpi in RECOMMENDED_TIERS
    }


def recommended_sizes_from_physical(width_in: float, height_in: float) -> Dict[str, PrintSize]:
    """
    Sizes for a source with a fixed physical size (vector PDF pages).

    Every tier gets the same dimensions: vector art prints at its page size
    whatever DPI the raster-equivalent label assumes.
    """
    size = size_from_inches(width_in, height_in)
    return {tier_key(dpi): size for dpi in RECOMMENDED_TIERS}


def _format_number(value: float) -> str:
    # Integral values print without a fractional part ("2", not "2.0")
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def aspect_ratio_label(width: float, height: float) -> str:
    """
    Human readable aspect ratio, e.g. 1920x1080 -> '16:9 (1.78:1)'.

    Inputs are scaled by 1000 before the GCD reduction so non-integer
    dimensions (PDF points) still reduce sensibly.
    """
    if not width or not height:
        return "N/A"

    width_scaled = round_half_up(width * ASPECT_RATIO_SCALE)
    height_scaled = round_half_up(height * ASPECT_RATIO_SCALE)
    divisor = math.gcd(width_scaled, height_scaled)
    if divisor == 0:
        return "N/A"

    ratio_width = width_scaled // divisor
    ratio_height = height_scaled // divisor
    decimal = round_to(width / height, 2)
    return f"{ratio_width}:{ratio_height} ({_format_number(decimal)}:1)"


def quality_rating(dpi: Optional[float], width: float, height: float) -> QualityRating:
    """
    Classify print quality.

    With a DPI hint the rating follows the DPI. Without one (vector content
    or a PNG lacking pHYs) the shorter pixel edge stands in for it.
    """
    if dpi is not None:
        if dpi >= OPTIMAL_DPI:
            return QualityRating.OPTIMAL
        if dpi >= GOOD_DPI:
            return QualityRating.GOOD
        return QualityRating.POOR

    short_edge = min(width, height)
    if short_edge >= OPTIMAL_SHORT_EDGE_PX:
        return QualityRating.OPTIMAL
    if short_edge >= GOOD_SHORT_EDGE_PX:
        return QualityRating.GOOD
    return QualityRating.POOR


def base_notes() -> List[str]:
    """Fresh list of the advisory notes every report starts with."""
    return list(DTF_GUIDELINES)


def file_size_mb(size_bytes: int) -> float:
    return round_to(size_bytes / (1024 * 1024), 2)
