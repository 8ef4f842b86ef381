"""
Tests for market report PDF generation.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import AssetType, Coordinate, FilterCriteria, MarketAnalyzer, RawCandidatePoint, RawRouteSegment, Subject
from reporting import MarketReportGenerator, generate_report
from reporting.pdf_generator import MAX_PRINTED_COMPS, report_slug


@pytest.fixture
def subject():
    return Subject(
        coordinate=Coordinate(38.9, -77.1),
        display_name="Crystal City & Pentagon City <Arlington>",
        asset_type=AssetType.INDUSTRIAL,
    )


@pytest.fixture
def raw_points():
    return [
        RawCandidatePoint(38.9 + (i % 15) * 0.001, -77.1 + (i // 15) * 0.001)
        for i in range(150)
    ]


@pytest.fixture
def open_filters():
    return FilterCriteria(min_clear_height=0, year_built_min=1900, year_built_max=2100)


@pytest.fixture
def report(subject, open_filters, raw_points):
    segments = [
        RawRouteSegment(tags={"highway": "motorway", "ref": "I-395"}, center=Coordinate(38.87, -77.06)),
    ]
    return MarketAnalyzer().analyze(subject, 70000, open_filters, raw_points, segments)


class TestMarketReportPdf:
    """Tests for the PDF document."""

    def test_buffer_is_pdf(self, report):
        content = MarketReportGenerator().generate_to_buffer(report)
        assert content.startswith(b"%PDF")
        assert len(content) > 1000

    def test_writes_file(self, report, tmp_path):
        result = generate_report(report, output_dir=tmp_path)

        assert result.path.exists()
        assert result.path.parent == tmp_path
        assert result.path.name == f"AIW-{report_slug(report)}.pdf"
        assert result.path.read_bytes().startswith(b"%PDF")

    def test_printed_comps_capped(self, report, tmp_path):
        assert len(report.comps) > MAX_PRINTED_COMPS
        result = MarketReportGenerator(tmp_path).generate_report(report)
        assert result.comps_included == MAX_PRINTED_COMPS

    def test_summary_markup_is_escaped(self, report):
        report.summary = ["Rents < $20 & rising <fast>"]
        content = MarketReportGenerator().generate_to_buffer(report)
        assert content.startswith(b"%PDF")

    def test_custom_filename(self, report, tmp_path):
        result = MarketReportGenerator(tmp_path).generate_report(report, filename="custom.pdf")
        assert result.path == tmp_path / "custom.pdf"

    def test_no_comps_no_routes(self, subject, tmp_path):
        filters = FilterCriteria(min_clear_height=100, year_built_min=1990, year_built_max=2024)
        report = MarketAnalyzer().analyze(subject, 50000, filters, [], None)
        content = MarketReportGenerator(tmp_path).generate_to_buffer(report)
        assert content.startswith(b"%PDF")

    def test_multifamily(self, open_filters, raw_points):
        subject = Subject(Coordinate(38.9, -77.1), "Arlington", AssetType.MULTIFAMILY)
        report = MarketAnalyzer().analyze(subject, 70000, open_filters, raw_points, [])
        assert MarketReportGenerator().generate_to_buffer(report).startswith(b"%PDF")


class TestReportSlug:
    """Tests for report file names."""

    def test_slug(self, report):
        assert report_slug(report) == "industrial-crystal-city-pentagon-city-arlington"

    def test_slug_length(self, open_filters):
        subject = Subject(Coordinate(38.9, -77.1), "x" * 200, AssetType.OFFICE)
        report = MarketAnalyzer().analyze(subject, 50000, open_filters, [], [])
        assert len(report_slug(report)) <= 60
