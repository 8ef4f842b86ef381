"""
Tests for the reporting CLI.

Only offline paths are exercised: --lat/--lng with --no-routes.
"""

import json
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import Coordinate
from reporting.cli import build_parser, main
from sources import BaseGeocoder, BaseRouteSource, GeocodeResult, GeocodingError
from sources.geocoding import GEOCODE_FAILURE_MESSAGE


@pytest.fixture
def dataset_path(tmp_path):
    path = tmp_path / "heatmap.json"
    path.write_text(json.dumps([{"lat": 38.91, "lng": -77.09}, {"lat": 38.905, "lng": -77.095}]))
    return path


class TestAnalyzeCommand:
    """Tests for `analyze`."""

    def test_prints_report_json(self, dataset_path, capsys):
        exit_code = main([
            "analyze", "--lat", "38.9", "--lng", "-77.1",
            "--asset-type", "office", "--label", "Test Subject",
            "--dataset", str(dataset_path), "--no-routes",
        ])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["subject"]["display_name"] == "Test Subject"
        assert data["subject"]["asset_type"] == "Office"
        assert data["routes_available"] is False
        assert data["comp_selection"]["candidates"] == 2

    def test_default_label(self, dataset_path, capsys):
        main(["analyze", "--lat", "38.9", "--lng", "-77.1", "--dataset", str(dataset_path), "--no-routes"])
        data = json.loads(capsys.readouterr().out)
        assert data["subject"]["display_name"] == "38.9000, -77.1000"

    def test_writes_pdf(self, dataset_path, tmp_path, monkeypatch, capsys):
        reports_dir = tmp_path / "reports"
        monkeypatch.setenv("REPORTS_DIR", str(reports_dir))

        exit_code = main([
            "analyze", "--lat", "38.9", "--lng", "-77.1",
            "--dataset", str(dataset_path), "--no-routes", "--pdf",
        ])

        assert exit_code == 0
        assert len(list(reports_dir.glob("AIW-*.pdf"))) == 1

    def test_unknown_asset_type(self, dataset_path, capsys):
        exit_code = main([
            "analyze", "--lat", "38.9", "--lng", "-77.1", "--asset-type", "Hotel",
            "--dataset", str(dataset_path), "--no-routes",
        ])
        assert exit_code == 1
        assert "Unknown asset type" in capsys.readouterr().err

    def test_inverted_year_range(self, dataset_path, capsys):
        exit_code = main([
            "analyze", "--lat", "38.9", "--lng", "-77.1",
            "--year-built-min", "2020", "--year-built-max", "2000",
            "--dataset", str(dataset_path), "--no-routes",
        ])
        assert exit_code == 1

    def test_missing_dataset(self, tmp_path, capsys):
        exit_code = main([
            "analyze", "--lat", "38.9", "--lng", "-77.1",
            "--dataset", str(tmp_path / "missing.json"), "--no-routes",
        ])
        assert exit_code == 1
        assert "not found" in capsys.readouterr().err


class TestParser:
    """Tests for argument parsing."""

    def test_lat_requires_lng(self):
        with pytest.raises(SystemExit):
            main(["analyze", "--lat", "38.9"])

    def test_address_and_lat_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["analyze", "--address", "x", "--lat", "38.9", "--lng", "-77.1"])

    def test_location_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["analyze"])


class ClosingGeocoder(BaseGeocoder):
    name = "closing"

    def __init__(self, fail=False):
        self.fail = fail
        self.closed = False

    def geocode(self, address):
        if self.fail:
            raise GeocodingError(GEOCODE_FAILURE_MESSAGE)
        return GeocodeResult(Coordinate(38.9, -77.1), "Arlington, Virginia, United States")

    def close(self):
        self.closed = True


class ClosingRouteSource(BaseRouteSource):
    def __init__(self, *args, **kwargs):
        self.closed = False

    def fetch_segments(self, center, radius_miles):
        return []

    def close(self):
        self.closed = True


class TestAddressLookups:
    """Tests for commands that resolve an address."""

    @pytest.fixture
    def geocoder(self, monkeypatch):
        geocoder = ClosingGeocoder()
        monkeypatch.setattr("reporting.cli.create_default_geocoder", lambda *args: geocoder)
        return geocoder

    @pytest.fixture
    def route_sources(self, monkeypatch):
        created = []

        def build(*args, **kwargs):
            source = ClosingRouteSource()
            created.append(source)
            return source

        monkeypatch.setattr("reporting.cli.OverpassRouteSource", build)
        return created

    def test_analyze_address_closes_sources(self, dataset_path, geocoder, route_sources, capsys):
        exit_code = main(["analyze", "--address", "1600 Wilson Blvd", "--dataset", str(dataset_path)])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["subject"]["display_name"] == "Arlington, Virginia, United States"
        assert geocoder.closed
        assert len(route_sources) == 1
        assert route_sources[0].closed

    def test_analyze_address_closes_on_failure(self, dataset_path, geocoder, route_sources, capsys):
        geocoder.fail = True
        exit_code = main(["analyze", "--address", "nowhere", "--dataset", str(dataset_path)])

        assert exit_code == 1
        assert geocoder.closed
        assert route_sources[0].closed

    def test_geocode_closes_geocoder(self, geocoder, capsys):
        exit_code = main(["geocode", "1600 Wilson Blvd"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["lat"] == 38.9
        assert geocoder.closed
