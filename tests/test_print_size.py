"""
Unit tests for print size, aspect ratio and quality rating math.
"""

import pytest

from models.quality_report import PrintSize, QualityRating
from modules import print_size
from modules.print_size import (
    aspect_ratio_label,
    quality_rating,
    recommended_sizes,
    recommended_sizes_from_physical,
    report_size_at_dpi,
    round_to,
    size_at_dpi,
    size_from_pixels_at_dpi,
    tier_sizes,
)
from modules.pdf_analyzer import PDFAnalyzer
from modules.png_analyzer import PngAnalyzer

from conftest import build_pdf, build_png


class TestRounding:

    def test_half_rounds_up(self):
        assert round_to(2.5, 0) == 3.0
        assert round_to(0.125, 2) == pytest.approx(0.13)

    def test_whole_numbers(self):
        assert round_to(10.0) == 10.0
        assert round_to(1.2, 0) == 1.0


class TestSizes:

    def test_scenario_a_sizes_at_300(self):
        size = size_from_pixels_at_dpi(3000, 1500, 300)
        assert size == PrintSize(w_in=10.0, h_in=5.0, w_cm=25.4, h_cm=12.7)

    def test_recommended_tiers(self):
        sizes = recommended_sizes(3000, 1500)
        assert set(sizes) == {"at300dpi", "at150dpi"}
        assert sizes["at300dpi"].w_in == 10
        assert sizes["at150dpi"].w_in == 20
        assert sizes["at150dpi"].h_cm == pytest.approx(25.4)

    def test_round_trip_at_300(self):
        for width, height in [(3000, 1500), (1920, 1080), (1234, 987), (1, 1)]:
            size = size_from_pixels_at_dpi(width, height, 300)
            # 2-decimal inches are at most 0.005in away, i.e. 1.5px at 300 DPI
            assert size.w_in * 300 == pytest.approx(width, abs=1.5)
            assert size.h_in * 300 == pytest.approx(height, abs=1.5)

    def test_derived_tiers(self):
        assert size_at_dpi(3000, 1500, 72).w_in == pytest.approx(41.67)
        assert size_at_dpi(3000, 1500, 250).w_in == 12
        assert 72 in print_size.DPI_TIERS and 200 in print_size.DPI_TIERS

    def test_non_positive_dpi_rejected(self):
        with pytest.raises(ValueError):
            size_from_pixels_at_dpi(100, 100, 0)

    def test_physical_sizes_identical_across_tiers(self):
        sizes = recommended_sizes_from_physical(8.5, 11)
        assert sizes["at300dpi"] == sizes["at150dpi"]
        assert sizes["at300dpi"] == PrintSize(w_in=8.5, h_in=11.0, w_cm=21.59, h_cm=27.94)


class TestAspectRatio:

    def test_scenario_c_full_hd(self):
        assert aspect_ratio_label(1920, 1080) == "16:9 (1.78:1)"

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (0, 0)])
    def test_zero_side_is_not_available(self, width, height):
        assert aspect_ratio_label(width, height) == "N/A"

    def test_integral_decimal_prints_without_fraction(self):
        assert aspect_ratio_label(3000, 1500) == "2:1 (2:1)"

    def test_square(self):
        assert aspect_ratio_label(500, 500) == "1:1 (1:1)"

    def test_portrait(self):
        assert aspect_ratio_label(1000, 2000) == "1:2 (0.5:1)"

    def test_fractional_points(self):
        # A4 in points
        assert aspect_ratio_label(595.28, 841.89) == "8504:12027 (0.71:1)"

    def test_letter_points(self):
        assert aspect_ratio_label(612, 792) == "17:22 (0.77:1)"


class TestQualityRating:

    def test_dpi_thresholds(self):
        assert quality_rating(320, 0, 0) is QualityRating.OPTIMAL
        assert quality_rating(300, 0, 0) is QualityRating.OPTIMAL
        assert quality_rating(180, 0, 0) is QualityRating.GOOD
        assert quality_rating(150, 0, 0) is QualityRating.GOOD
        assert quality_rating(149, 0, 0) is QualityRating.POOR

    def test_short_edge_fallback(self):
        assert quality_rating(None, 6200, 4600) is QualityRating.OPTIMAL
        assert quality_rating(None, 4500, 9000) is QualityRating.OPTIMAL
        assert quality_rating(None, 3000, 2250) is QualityRating.GOOD
        assert quality_rating(None, 3000, 1500) is QualityRating.POOR

    def test_dpi_takes_precedence_over_pixels(self):
        assert quality_rating(72, 10000, 10000) is QualityRating.POOR

    def test_monotonic_in_dpi(self):
        for width, height in [(0, 0), (3000, 1500), (6000, 6000)]:
            ranks = [quality_rating(dpi, width, height).rank for dpi in range(1, 700, 7)]
            assert ranks == sorted(ranks)


class TestNotes:

    def test_base_notes_are_fresh_lists(self):
        notes = print_size.base_notes()
        notes.append("extra")
        assert len(print_size.base_notes()) == 2
        assert "DTF" in print_size.base_notes()[0]

    def test_file_size_mb(self):
        assert print_size.file_size_mb(1024 * 1024) == 1.0
        assert print_size.file_size_mb(1536 * 1024) == 1.5
        assert print_size.file_size_mb(5000) == 0.0


class TestReportTiers:

    def test_raster_report_scales_from_pixels(self):
        report = PngAnalyzer().analyze(build_png(3000, 1500))

        assert report_size_at_dpi(report, 100).w_in == 30.0
        assert report_size_at_dpi(report, 300) == report.recommended_sizes["at300dpi"]

    def test_vector_report_keeps_page_size(self):
        report = PDFAnalyzer().analyze(build_pdf(((612, 792),)))

        assert report_size_at_dpi(report, 72) == report.recommended_sizes["at300dpi"]

    def test_tier_sizes_cover_every_tier(self):
        report = PngAnalyzer().analyze(build_png(3000, 1500))
        sizes = tier_sizes(report)

        assert list(sizes) == ["at300dpi", "at250dpi", "at200dpi", "at150dpi", "at100dpi", "at72dpi"]
        assert sizes["at250dpi"].w_in == 12.0
        assert sizes["at150dpi"] == report.recommended_sizes["at150dpi"]

    def test_tier_sizes_custom_tiers(self):
        report = PngAnalyzer().analyze(build_png(600, 600))
        assert tier_sizes(report, (600,)) == {"at600dpi": PrintSize(1.0, 1.0, 2.54, 2.54)}
