"""
Tests for the web application.

The app is built with an in-memory geocoder and route source and a
temporary candidate dataset, so no request leaves the process.
"""

import json
import re
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

from core import Coordinate, RawRouteSegment
from core.coordinator import AnalysisCoordinator
from sources import BaseGeocoder, BaseRouteSource, GeocodeResult, GeocodingError, HeatmapDataset
from sources.geocoding import GEOCODE_FAILURE_MESSAGE
from utils.config import Config
from web.app import create_app


# =============================================================================
# Test Fixtures
# =============================================================================

class StubGeocoder(BaseGeocoder):
    name = "stub"

    def geocode(self, address):
        if "nowhere" in address:
            raise GeocodingError(GEOCODE_FAILURE_MESSAGE)
        return GeocodeResult(Coordinate(38.9, -77.1), "Arlington, Virginia, United States")


class StubRouteSource(BaseRouteSource):
    def fetch_segments(self, center, radius_miles):
        return [
            RawRouteSegment(tags={"highway": "motorway", "ref": "I-66"}, center=Coordinate(38.89, -77.11)),
        ]


@pytest.fixture
def dataset(tmp_path):
    path = tmp_path / "heatmap.json"
    path.write_text(json.dumps([
        {"lat": 38.9 + i * 0.001, "lng": -77.1 + i * 0.001} for i in range(60)
    ]))
    return HeatmapDataset(path)


@pytest.fixture
def client(tmp_path, dataset):
    config = Config(reports_dir=str(tmp_path / "reports"), heatmap_path=str(dataset.path))
    coordinator = AnalysisCoordinator(StubGeocoder(), dataset, StubRouteSource())
    app = create_app(config=config, dataset=dataset, coordinator=coordinator)
    return TestClient(app)


@pytest.fixture
def form_data():
    return {
        "address": "1600 Wilson Blvd, Arlington, VA",
        "asset_type": "Industrial",
        "square_feet": "50000",
        "min_clear_height": "20",
        "year_built_min": "1990",
        "year_built_max": "2024",
        "session_id": "test-session",
    }


# =============================================================================
# Test: Pages
# =============================================================================

class TestPages:
    """Tests for HTML endpoints."""

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Asset Intelligence Workbench" in response.text
        assert 'id="asset-form"' in response.text
        for asset_type in ("Industrial", "Office", "Retail", "Multifamily"):
            assert asset_type in response.text

    def test_static_stylesheet(self, client):
        response = client.get("/static/style.css")
        assert response.status_code == 200

    def test_analyze_form_renders_report(self, client, form_data):
        response = client.post("/analyze", data=form_data)
        assert response.status_code == 200
        assert "Arlington, Virginia, United States" in response.text
        assert "2-mile radius" in response.text
        assert "20-minute drive-time proxy" in response.text
        assert "I-66" in response.text
        assert "Analyzed location:" in response.text

    def test_analyze_form_geocode_failure(self, client, form_data):
        form_data["address"] = "nowhere at all"
        response = client.post("/analyze", data=form_data)
        assert response.status_code == 404
        assert "Unable to locate that address right now." in response.text
        assert 'id="asset-form"' in response.text

    def test_analyze_form_validation(self, client, form_data):
        form_data["year_built_min"] = "2020"
        form_data["year_built_max"] = "2000"
        response = client.post("/analyze", data=form_data)
        assert response.status_code == 422
        assert "year_built_min" in response.text

    def test_report_form_returns_pdf(self, client, form_data):
        response = client.post("/report", data=form_data)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")


# =============================================================================
# Test: JSON API
# =============================================================================

class TestApi:
    """Tests for JSON endpoints."""

    def test_heatmap(self, client):
        response = client.get("/Heatmap.json")
        assert response.status_code == 200
        data = response.json()
        assert isinstance(data, list)
        assert len(data) == 60
        assert data[0] == {"lat": 38.9, "lng": -77.1}

    def test_heatmap_missing_dataset(self, tmp_path):
        dataset = HeatmapDataset(tmp_path / "missing.json")
        app = create_app(
            config=Config(reports_dir=str(tmp_path)),
            dataset=dataset,
            coordinator=AnalysisCoordinator(StubGeocoder(), dataset),
        )
        response = TestClient(app).get("/Heatmap.json")
        assert response.status_code == 503

    def test_analyze(self, client):
        response = client.post("/api/analyze", json={
            "address": "1600 Wilson Blvd, Arlington, VA",
            "asset_type": "industrial",
            "square_feet": 50000,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["subject"]["asset_type"] == "Industrial"
        assert data["subject"]["lat"] == 38.9
        assert len(data["demographics"]) == 4
        assert data["routes_available"] is True
        assert data["routes"][0]["name"] == "I-66"
        assert len(data["comps"]) <= 40

    def test_analyze_is_deterministic(self, client):
        body = {"address": "1600 Wilson Blvd", "asset_type": "Office", "square_feet": 30000}
        first = client.post("/api/analyze", json=body).json()
        second = client.post("/api/analyze", json=body).json()
        assert first == second

    def test_analyze_geocode_failure(self, client):
        response = client.post("/api/analyze", json={"address": "nowhere"})
        assert response.status_code == 404
        assert response.json()["detail"] == GEOCODE_FAILURE_MESSAGE

    @pytest.mark.parametrize("body", [
        {"address": "x"},
        {"address": "1600 Wilson Blvd", "asset_type": "Hotel"},
        {"address": "1600 Wilson Blvd", "square_feet": 0},
        {"address": "1600 Wilson Blvd", "min_clear_height": -1},
        {"address": "1600 Wilson Blvd", "year_built_min": 2020, "year_built_max": 2000},
    ])
    def test_analyze_validation(self, client, body):
        assert client.post("/api/analyze", json=body).status_code == 422

    def test_report_pdf(self, client):
        response = client.post("/api/report", json={"address": "1600 Wilson Blvd, Arlington, VA"})
        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")
        assert "AIW-industrial-arlington" in response.headers["content-disposition"]

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_api_health_reports_dataset(self, client):
        assert client.get("/api/health").json()["dataset_loaded"] is False
        client.get("/Heatmap.json")
        assert client.get("/api/health").json()["dataset_loaded"] is True


class EmptyRouteSource(BaseRouteSource):
    def fetch_segments(self, center, radius_miles):
        return []


@pytest.fixture
def crowded_dataset(tmp_path):
    """200 candidate points within about a mile of the subject."""
    path = tmp_path / "crowded.json"
    path.write_text(json.dumps([
        {"lat": 38.9 + (i % 20) * 0.0007, "lng": -77.1 + (i // 20) * 0.0009} for i in range(200)
    ]))
    return HeatmapDataset(path)


# =============================================================================
# Test: Report Details
# =============================================================================

class TestReportDetails:
    """Tests for how report details are rendered."""

    def test_route_distances_in_miles(self, client, form_data):
        response = client.post("/analyze", data=form_data)
        assert re.search(r"I-66</strong>: \d+\.\d{2} mi<", response.text)

    def test_no_routes_names_configured_radius(self, tmp_path, dataset, form_data):
        config = Config(
            reports_dir=str(tmp_path / "reports"),
            heatmap_path=str(dataset.path),
            route_radius_miles=10,
        )
        coordinator = AnalysisCoordinator(StubGeocoder(), dataset, EmptyRouteSource())
        app = create_app(config=config, dataset=dataset, coordinator=coordinator)

        response = TestClient(app).post("/analyze", data=form_data)

        assert response.status_code == 200
        assert "No major interstates/routes found within 10 miles." in response.text

    def test_truncated_comps_are_reported(self, tmp_path, crowded_dataset, form_data):
        config = Config(reports_dir=str(tmp_path / "reports"), heatmap_path=str(crowded_dataset.path))
        coordinator = AnalysisCoordinator(StubGeocoder(), crowded_dataset, StubRouteSource())
        client = TestClient(create_app(config=config, dataset=crowded_dataset, coordinator=coordinator))
        form_data.update({
            "square_feet": "70000",
            "min_clear_height": "0",
            "year_built_min": "1900",
            "year_built_max": "2100",
        })

        page = client.post("/analyze", data=form_data)
        assert page.status_code == 200
        assert 'id="comps-truncated"' in page.text
        assert "Showing the nearest 40 of" in page.text

        data = client.post("/api/analyze", json={
            "address": form_data["address"],
            "asset_type": "Industrial",
            "square_feet": 70000,
            "min_clear_height": 0,
            "year_built_min": 1900,
            "year_built_max": 2100,
        }).json()
        assert data["comp_selection"]["truncated"] is True
        assert data["comp_selection"]["after_year_built"] > len(data["comps"]) == 40

    def test_untruncated_comps(self, client):
        data = client.post("/api/analyze", json={"address": "1600 Wilson Blvd"}).json()
        selection = data["comp_selection"]
        assert selection["truncated"] is (selection["after_year_built"] > 40)

    def test_default_dataset_is_shared(self, tmp_path, monkeypatch, dataset):
        monkeypatch.setattr("sources.heatmap._heatmap_dataset", None)
        config = Config(reports_dir=str(tmp_path / "reports"), heatmap_path=str(dataset.path))

        first = TestClient(create_app(config=config, coordinator=AnalysisCoordinator(StubGeocoder(), dataset)))
        second = TestClient(create_app(config=config, coordinator=AnalysisCoordinator(StubGeocoder(), dataset)))

        assert len(first.get("/Heatmap.json").json()) == 60
        assert second.get("/api/health").json()["dataset_loaded"] is True
