"""
Color palette data models.

Produced by the color extractor from a sampled RGBA surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple

from .quality_report import AlphaStats


@dataclass(frozen=True)
class ColorSwatch:
    """One retained color bucket."""

    rgb: Tuple[int, int, int]
    """Mean color of the bucket, each channel 0-255."""

    hex: str
    """Uppercase '#RRGGBB'."""

    percent: float
    """Share of the filtered samples, rounded to 2 decimals."""

    count: int
    """Raw number of sampled pixels in the bucket."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rgb": list(self.rgb),
            "hex": self.hex,
            "percent": self.percent,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorSwatch":
        r, g, b = data.get("rgb", (0, 0, 0))
        return cls(
            rgb=(int(r), int(g), int(b)),
            hex=data.get("hex", "#000000"),
            percent=data.get("percent", 0.0),
            count=data.get("count", 0),
        )


@dataclass(frozen=True)
class ColorReport:
    """
    Ranked palette for an image.

    An empty report (no swatches, no alpha stats) means no pixel surface
    could be obtained.
    """

    top: Tuple[ColorSwatch, ...] = ()
    """Highest-ranked swatches (at most 16, for a 4x4 palette grid)."""

    all_grouped: Tuple[ColorSwatch, ...] = ()
    """Every retained bucket, ranked."""

    alpha_stats: Optional[AlphaStats] = None

    @property
    def is_empty(self) -> bool:
        return not self.all_grouped

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "top": [swatch.to_dict() for swatch in self.top],
            "allGrouped": [swatch.to_dict() for swatch in self.all_grouped],
        }
        if self.alpha_stats is not None:
            data["alphaStats"] = self.alpha_stats.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorReport":
        alpha = data.get("alphaStats")
        return cls(
            top=tuple(ColorSwatch.from_dict(s) for s in data.get("top", [])),
            all_grouped=tuple(ColorSwatch.from_dict(s) for s in data.get("allGrouped", [])),
            alpha_stats=AlphaStats.from_dict(alpha) if alpha else None,
        )
