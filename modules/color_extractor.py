"""
Dominant color extraction for raster artwork.

Pipeline:
    1. Decode onto a bounded RGBA canvas (long edge <= MAX_DIMENSION)
    2. Sample the grid at a stride so at most ~MAX_SAMPLE_PIXELS are visited
    3. Record alpha statistics for every sampled pixel
    4. Drop pixels that are too transparent, near-white or desaturated
       (dark near-gray pixels are kept as intentional grayscale ink)
    5. Quantize the survivors into RGB buckets
    6. Rank buckets by count boosted by their mean HSL saturation

The sampling and bucketing run on numpy arrays; the ordering of buckets
with equal weight follows the order in which they were first seen while
scanning rows top to bottom.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np

from core.exceptions import PixelBufferUnavailableError
from core.pixel_buffer import PixelBufferProvider, PillowPixelBufferProvider
from logging_config import get_logger
from models.color_report import ColorReport, ColorSwatch
from models.quality_report import AlphaStats
from modules.print_size import round_to


logger = get_logger(__name__)


def hsl_saturation(r: int, g: int, b: int) -> float:
    """HSL saturation of an 8-bit RGB color, 0.0 - 1.0."""
    r_norm, g_norm, b_norm = r / 255, g / 255, b / 255
    high = max(r_norm, g_norm, b_norm)
    low = min(r_norm, g_norm, b_norm)
    delta = high - low
    if delta == 0:
        return 0.0
    lightness = (high + low) / 2
    if lightness > 0.5:
        return delta / (2 - high - low)
    return delta / (high + low)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """(255, 128, 0) -> '#FF8000'."""
    return "#" + "".join(f"{int(value):02X}" for value in rgb)


def sample_stride(width: int, height: int, max_samples: int) -> int:
    """Grid step that keeps the visited positions near max_samples."""
    return max(1, math.floor(math.sqrt((width * height) / max_samples)))


def _saturation_array(rgb: np.ndarray) -> np.ndarray:
    norm = rgb.astype(np.float64) / 255.0
    high = norm.max(axis=1)
    low = norm.min(axis=1)
    delta = high - low
    total = high + low
    with np.errstate(divide="ignore", invalid="ignore"):
        saturation = np.where(total > 1.0, delta / (2.0 - total), delta / total)
    return np.where(delta == 0, 0.0, saturation)


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5).astype(np.int64)


class ColorExtractor:
    """Ranked, de-noised palette plus alpha distribution for an image."""

    # Canvas and sampling bounds
    MAX_DIMENSION = 1024
    MAX_SAMPLE_PIXELS = 120_000

    # Quantization step per channel
    BUCKET_SIZE = 12

    # Pixels more transparent than this carry no visible color
    MIN_ALPHA = 32

    # Background filter
    IGNORE_LIGHT_THRESHOLD = 240
    MIN_SATURATION = 0.08
    GRAYSCALE_CHANNEL_SPREAD = 10
    DARK_MAX_CHANNEL = 100

    # Ranking: weight = count * (1 + mean_saturation * SATURATION_WEIGHT)
    SATURATION_WEIGHT = 0.5

    TOP_SWATCH_COUNT = 16  # 4x4 palette grid

    def __init__(
        self,
        provider: Optional[PixelBufferProvider] = None,
        max_dimension: Optional[int] = None,
        max_sample_pixels: Optional[int] = None,
        bucket_size: Optional[int] = None,
        min_alpha: Optional[int] = None,
        ignore_light_threshold: Optional[int] = None,
        min_saturation: Optional[float] = None,
    ) -> None:
        self.provider = provider or PillowPixelBufferProvider()
        self.max_dimension = max_dimension or self.MAX_DIMENSION
        self.max_sample_pixels = max_sample_pixels or self.MAX_SAMPLE_PIXELS
        self.bucket_size = bucket_size or self.BUCKET_SIZE
        self.min_alpha = self.MIN_ALPHA if min_alpha is None else min_alpha
        self.ignore_light_threshold = (
            self.IGNORE_LIGHT_THRESHOLD if ignore_light_threshold is None else ignore_light_threshold
        )
        self.min_saturation = self.MIN_SATURATION if min_saturation is None else min_saturation

    @classmethod
    def from_config(cls, config: Mapping[str, Any],
                    provider: Optional[PixelBufferProvider] = None) -> "ColorExtractor":
        """Build from a Flask config mapping (COLOR_* keys)."""
        return cls(
            provider=provider,
            max_dimension=config.get("COLOR_MAX_DIMENSION"),
            max_sample_pixels=config.get("COLOR_MAX_SAMPLE_PIXELS"),
            bucket_size=config.get("COLOR_BUCKET_SIZE"),
            min_alpha=config.get("COLOR_MIN_ALPHA"),
            ignore_light_threshold=config.get("COLOR_IGNORE_LIGHT_THRESHOLD"),
            min_saturation=config.get("COLOR_MIN_SATURATION"),
        )

    def extract(self, data: bytes) -> ColorReport:
        """
        Build the palette for encoded image bytes.

        Returns an empty ColorReport when no pixel surface can be obtained.
        Other decoding errors propagate to the caller.
        """
        try:
            buffer = self.provider.load(data, self.max_dimension)
        except PixelBufferUnavailableError as exc:
            logger.warning(f"Color extraction skipped: {exc.message}")
            return ColorReport()

        return self.extract_from_pixels(buffer.as_array())

    def extract_from_pixels(self, pixels: np.ndarray) -> ColorReport:
        """
        Build the palette for an RGBA array shaped (height, width, 4).
        """
        height, width = pixels.shape[:2]
        stride = sample_stride(width, height, self.max_sample_pixels)
        sample = pixels[::stride, ::stride].reshape(-1, 4)

        alpha = sample[:, 3]
        alpha_stats = self._alpha_stats(alpha)

        rgb = sample[:, :3].astype(np.int64)
        saturation = _saturation_array(rgb)
        eligible = (alpha >= self.min_alpha) & ~self._background_mask(rgb, saturation)

        logger.debug(
            f"Sampled {len(sample)} of {width}x{height} pixels (stride {stride}), "
            f"{int(eligible.sum())} eligible for palette"
        )

        if not eligible.any():
            return ColorReport(top=(), all_grouped=(), alpha_stats=alpha_stats)

        swatches = self._rank_buckets(rgb[eligible], saturation[eligible])
        return ColorReport(
            top=swatches[:self.TOP_SWATCH_COUNT],
            all_grouped=swatches,
            alpha_stats=alpha_stats,
        )

    def _alpha_stats(self, alpha: np.ndarray) -> Optional[AlphaStats]:
        sample_size = int(alpha.size)
        if sample_size == 0:
            return None

        transparent = int(np.count_nonzero(alpha == 0))
        opaque = int(np.count_nonzero(alpha == 255))
        semi = sample_size - transparent - opaque

        return AlphaStats(
            present=transparent > 0 or semi > 0,
            min=int(alpha.min()),
            max=int(alpha.max()),
            transparent_count=transparent,
            semi_transparent_count=semi,
            opaque_count=opaque,
            transparent_percent=round_to(transparent / sample_size * 100, 2),
            semi_transparent_percent=round_to(semi / sample_size * 100, 2),
            opaque_percent=round_to(opaque / sample_size * 100, 2),
            sample_size=sample_size,
        )

    def _background_mask(self, rgb: np.ndarray, saturation: np.ndarray) -> np.ndarray:
        r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]

        near_white = (rgb >= self.ignore_light_threshold).all(axis=1)

        spread = self.GRAYSCALE_CHANNEL_SPREAD
        grayscale = (
            (np.abs(r - g) < spread)
            & (np.abs(g - b) < spread)
            & (np.abs(r - b) < spread)
        )
        dark = rgb.max(axis=1) < self.DARK_MAX_CHANNEL
        desaturated = (saturation < self.min_saturation) & ~(grayscale & dark)

        return near_white | desaturated

    def _rank_buckets(self, rgb: np.ndarray, saturation: np.ndarray) -> Tuple[ColorSwatch, ...]:
        step = self.bucket_size
        quantized = _round_half_up(rgb / step) * step
        keys = (quantized[:, 0] * 1024 + quantized[:, 1]) * 1024 + quantized[:, 2]

        _, first_seen, inverse, counts = np.unique(
            keys, return_index=True, return_inverse=True, return_counts=True
        )
        inverse = inverse.reshape(-1)
        sums = np.stack(
            [np.bincount(inverse, weights=rgb[:, channel]) for channel in range(3)],
            axis=1,
        )
        saturation_sums = np.bincount(inverse, weights=saturation)

        mean_rgb = _round_half_up(sums / counts[:, None])
        weights = counts * (1 + (saturation_sums / counts) * self.SATURATION_WEIGHT)
        order = np.lexsort((first_seen, -weights))

        total = int(counts.sum())
        logger.debug(f"{len(counts)} color buckets from {total} filtered samples")

        swatches = []
        for index in order:
            color = tuple(int(channel) for channel in mean_rgb[index])
            count = int(counts[index])
            swatches.append(ColorSwatch(
                rgb=color,
                hex=rgb_to_hex(color),
                percent=round_to(count / total * 100, 2),
                count=count,
            ))
        return tuple(swatches)
