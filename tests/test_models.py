"""
Unit tests for the report data models.
"""

from models.analysis import ArtworkAnalysis
from models.color_report import ColorReport, ColorSwatch
from models.quality_report import (
    AlphaStats,
    FileType,
    ImageCategory,
    PixelDimensions,
    PrintSize,
    QualityRating,
    QualityReport,
)


ALPHA = AlphaStats(
    present=True,
    min=0,
    max=255,
    transparent_count=25,
    semi_transparent_count=0,
    opaque_count=75,
    transparent_percent=25.0,
    semi_transparent_percent=0.0,
    opaque_percent=75.0,
    sample_size=100,
)


def make_report(**overrides):
    fields = dict(
        file_type=FileType.PNG,
        file_size_mb=1.25,
        image_category=ImageCategory.RASTER,
        recommended_sizes={
            "at300dpi": PrintSize(10.0, 5.0, 25.4, 12.7),
            "at150dpi": PrintSize(20.0, 10.0, 50.8, 25.4),
        },
        aspect_ratio="2:1 (2:1)",
        rating=QualityRating.OPTIMAL,
        notes=("first", "second"),
        pixels=PixelDimensions(3000, 1500),
        dpi=300,
        has_icc=True,
        icc_profile="sRGB",
        bit_depth=8,
        has_alpha=True,
    )
    fields.update(overrides)
    return QualityReport(**fields)


class TestQualityReport:

    def test_to_dict_keys(self):
        data = make_report().to_dict()

        assert data["fileType"] == "png"
        assert data["fileSizeMB"] == 1.25
        assert data["pixels"] == {"w": 3000, "h": 1500}
        assert data["hasICC"] is True
        assert data["iccProfile"] == "sRGB"
        assert data["bitDepth"] == 8
        assert data["imageCategory"] == "Raster"
        assert data["recommendedSizes"]["at300dpi"] == {
            "w_in": 10.0, "h_in": 5.0, "w_cm": 25.4, "h_cm": 12.7,
        }
        assert data["rating"] == "Optimal"
        assert data["notes"] == ["first", "second"]
        assert data["alphaStats"] is None

    def test_round_trip(self):
        report = make_report(alpha_stats=ALPHA)
        assert QualityReport.from_dict(report.to_dict()) == report

    def test_vector_round_trip(self):
        report = make_report(
            file_type=FileType.PDF,
            image_category=ImageCategory.VECTOR,
            pixels=None,
            dpi=None,
            has_icc=False,
            icc_profile=None,
            bit_depth=None,
            has_alpha=False,
        )
        assert QualityReport.from_dict(report.to_dict()) == report

    def test_with_alpha_stats_returns_new_report(self):
        report = make_report()
        merged = report.with_alpha_stats(ALPHA)

        assert report.alpha_stats is None
        assert merged.alpha_stats is ALPHA
        assert merged.to_dict()["alphaStats"]["transparentPercent"] == 25.0

    def test_rating_rank(self):
        assert QualityRating.POOR.rank < QualityRating.GOOD.rank < QualityRating.OPTIMAL.rank


class TestArtworkAnalysis:

    def test_round_trip_with_colors(self):
        swatch = ColorSwatch(rgb=(1, 2, 3), hex="#010203", percent=100.0, count=9)
        analysis = ArtworkAnalysis(
            quality=make_report(alpha_stats=ALPHA),
            colors=ColorReport(top=(swatch,), all_grouped=(swatch,), alpha_stats=ALPHA),
        )
        assert ArtworkAnalysis.from_dict(analysis.to_dict()) == analysis

    def test_pdf_analysis_has_null_colors(self):
        data = ArtworkAnalysis(quality=make_report()).to_dict()
        assert data["colors"] is None
