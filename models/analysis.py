"""
Combined analysis result for one upload.

This is the object handed to the UI layer and serialized as the opaque
JSON context for the chat assistant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, Optional

from .color_report import ColorReport
from .quality_report import QualityReport


@dataclass(frozen=True)
class ArtworkAnalysis:
    """Quality report plus the optional palette (PNG only)."""

    quality: QualityReport
    colors: Optional[ColorReport] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quality": self.quality.to_dict(),
            "colors": self.colors.to_dict() if self.colors is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArtworkAnalysis":
        colors = data.get("colors")
        return cls(
            quality=QualityReport.from_dict(data["quality"]),
            colors=ColorReport.from_dict(colors) if colors is not None else None,
        )
