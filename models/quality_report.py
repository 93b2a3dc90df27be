"""
Quality report data models.

These models describe the print-readiness of one uploaded artwork file:
geometry, DPI, color profile, transparency and a rating.

Thread Safety:
    - All classes are frozen dataclasses
    - Merging alpha statistics returns a new report (with_alpha_stats)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Any, Optional, Tuple


class FileType(Enum):
    """Artwork formats the analyzer accepts."""

    PNG = "png"
    PDF = "pdf"


class ImageCategory(Enum):
    """Raster artwork has pixels; vector artwork only has physical size."""

    RASTER = "Raster"
    VECTOR = "Vector"


class QualityRating(Enum):
    """
    Print quality verdict.

    Ordered from best to worst; see modules.print_size.quality_rating.
    """

    OPTIMAL = "Optimal"
    GOOD = "Good"
    POOR = "Poor"

    @property
    def rank(self) -> int:
        """Higher is better (Poor=0, Good=1, Optimal=2)."""
        return {"Poor": 0, "Good": 1, "Optimal": 2}[self.value]


@dataclass(frozen=True)
class PrintSize:
    """Physical print size in inches and centimeters."""

    w_in: float
    h_in: float
    w_cm: float
    h_cm: float

    def to_dict(self) -> Dict[str, float]:
        return {"w_in": self.w_in, "h_in": self.h_in, "w_cm": self.w_cm, "h_cm": self.h_cm}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrintSize":
        return cls(
            w_in=data.get("w_in", 0.0),
            h_in=data.get("h_in", 0.0),
            w_cm=data.get("w_cm", 0.0),
            h_cm=data.get("h_cm", 0.0),
        )


@dataclass(frozen=True)
class PixelDimensions:
    """Raster width and height in pixels."""

    w: int
    h: int

    def to_dict(self) -> Dict[str, int]:
        return {"w": self.w, "h": self.h}


@dataclass(frozen=True)
class AlphaStats:
    """
    Distribution of alpha values over a pixel sample.

    Invariant:
        transparent_count + semi_transparent_count + opaque_count == sample_size
    """

    present: bool
    """True when any sampled pixel is not fully opaque."""

    min: int
    max: int

    transparent_count: int
    semi_transparent_count: int
    opaque_count: int

    transparent_percent: float
    semi_transparent_percent: float
    opaque_percent: float

    sample_size: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape consumed by the UI and chat layers."""
        return {
            "present": self.present,
            "min": self.min,
            "max": self.max,
            "transparentPercent": self.transparent_percent,
            "semiTransparentPercent": self.semi_transparent_percent,
            "opaquePercent": self.opaque_percent,
            "transparentCount": self.transparent_count,
            "semiTransparentCount": self.semi_transparent_count,
            "opaqueCount": self.opaque_count,
            "sampleSize": self.sample_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlphaStats":
        return cls(
            present=data.get("present", False),
            min=data.get("min", 0),
            max=data.get("max", 0),
            transparent_count=data.get("transparentCount", 0),
            semi_transparent_count=data.get("semiTransparentCount", 0),
            opaque_count=data.get("opaqueCount", 0),
            transparent_percent=data.get("transparentPercent", 0.0),
            semi_transparent_percent=data.get("semiTransparentPercent", 0.0),
            opaque_percent=data.get("opaquePercent", 0.0),
            sample_size=data.get("sampleSize", 0),
        )


@dataclass(frozen=True)
class QualityReport:
    """
    Print-readiness report for one artwork file.

    Produced once by PngAnalyzer or PDFAnalyzer. The only later change is
    the alpha statistics merge performed by the orchestrator, which builds
    a new instance via with_alpha_stats().
    """

    file_type: FileType
    file_size_mb: float
    image_category: ImageCategory
    recommended_sizes: Dict[str, PrintSize]
    """Keyed by tier name, e.g. 'at300dpi' and 'at150dpi'."""

    aspect_ratio: str
    rating: QualityRating
    notes: Tuple[str, ...] = ()

    pixels: Optional[PixelDimensions] = None
    dpi: Optional[int] = None
    has_icc: bool = False
    icc_profile: Optional[str] = None
    bit_depth: Optional[int] = None
    has_alpha: bool = False
    alpha_stats: Optional[AlphaStats] = None

    def with_alpha_stats(self, alpha_stats: Optional[AlphaStats]) -> "QualityReport":
        """Return a copy carrying measured alpha statistics."""
        return replace(self, alpha_stats=alpha_stats)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-ready dictionary (camelCase keys)."""
        return {
            "fileType": self.file_type.value,
            "fileSizeMB": self.file_size_mb,
            "pixels": self.pixels.to_dict() if self.pixels else None,
            "dpi": self.dpi,
            "hasICC": self.has_icc,
            "iccProfile": self.icc_profile,
            "bitDepth": self.bit_depth,
            "hasAlpha": self.has_alpha,
            "alphaStats": self.alpha_stats.to_dict() if self.alpha_stats else None,
            "imageCategory": self.image_category.value,
            "recommendedSizes": {
                tier: size.to_dict() for tier, size in self.recommended_sizes.items()
            },
            "aspectRatio": self.aspect_ratio,
            "rating": self.rating.value,
            "notes": list(self.notes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QualityReport":
        """Create from dictionary (e.g., from session or chat context)."""
        pixels = data.get("pixels")
        alpha = data.get("alphaStats")
        return cls(
            file_type=FileType(data["fileType"]),
            file_size_mb=data.get("fileSizeMB", 0.0),
            image_category=ImageCategory(data.get("imageCategory", "Raster")),
            recommended_sizes={
                tier: PrintSize.from_dict(size)
                for tier, size in data.get("recommendedSizes", {}).items()
            },
            aspect_ratio=data.get("aspectRatio", "N/A"),
            rating=QualityRating(data.get("rating", "Poor")),
            notes=tuple(data.get("notes", ())),
            pixels=PixelDimensions(pixels["w"], pixels["h"]) if pixels else None,
            dpi=data.get("dpi"),
            has_icc=data.get("hasICC", False),
            icc_profile=data.get("iccProfile"),
            bit_depth=data.get("bitDepth"),
            has_alpha=data.get("hasAlpha", False),
            alpha_stats=AlphaStats.from_dict(alpha) if alpha else None,
        )
