"""
Data models for ArtworkCheck.

This module contains immutable dataclasses for:
- QualityReport: Print-readiness report (DPI, sizes, rating, notes)
- AlphaStats: Alpha channel distribution over a pixel sample
- ColorReport / ColorSwatch: Ranked dominant-color palette
- ArtworkAnalysis: Quality report plus optional palette for one upload

All dataclasses are frozen, so a finished analysis can be handed between
threads without copying.
"""

from .quality_report import (
    AlphaStats,
    FileType,
    ImageCategory,
    PixelDimensions,
    PrintSize,
    QualityRating,
    QualityReport,
)
from .color_report import ColorReport, ColorSwatch
from .analysis import ArtworkAnalysis

__all__ = [
    # Quality models
    "AlphaStats",
    "FileType",
    "ImageCategory",
    "PixelDimensions",
    "PrintSize",
    "QualityRating",
    "QualityReport",
    # Color models
    "ColorReport",
    "ColorSwatch",
    # Combined result
    "ArtworkAnalysis",
]
