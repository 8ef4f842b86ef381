"""
FastAPI application for the workbench web interface.

Serves the analysis form, HTML and JSON analysis endpoints, the report PDF
and the candidate dataset.

Production deployment configuration via environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from core import AssetType, FilterCriteria, MarketReport
from core.coordinator import AnalysisCoordinator, AnalysisRequest, AnalysisSuperseded, DEFAULT_SESSION
from reporting.pdf_generator import MarketReportGenerator, report_slug
from sources import (
    DatasetError,
    GeocodingError,
    HeatmapDataset,
    OverpassRouteSource,
    create_default_geocoder,
    get_heatmap_dataset,
)
from utils.config import Config
from utils.formatting import format_currency, format_miles, format_number, format_percent, format_rent


logger = logging.getLogger(__name__)


# =============================================================================
# Environment Configuration
# =============================================================================

IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:4173", "http://127.0.0.1:4173"]

APP_TITLE = "Asset Intelligence Workbench"
APP_VERSION = "0.1.0"

# Paths
BASE_DIR = Path(__file__).parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"


# =============================================================================
# API Request Models
# =============================================================================

class AnalyzeRequest(BaseModel):
    """Analysis inputs, validated before they reach the engines."""
    address: str = Field(min_length=3)
    asset_type: str = AssetType.INDUSTRIAL.value
    square_feet: float = Field(default=50000, gt=0)
    min_clear_height: float = Field(default=20, ge=0)
    year_built_min: int = Field(default=1990, ge=1800)
    year_built_max: int = Field(default=2024, le=2100)
    session_id: str = DEFAULT_SESSION

    @field_validator("address")
    @classmethod
    def strip_address(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("address is too short")
        return value

    @field_validator("asset_type")
    @classmethod
    def known_asset_type(cls, value: str) -> str:
        asset_type = AssetType.from_string(value)
        if asset_type is None:
            raise ValueError(f"unknown asset type: {value}")
        return asset_type.value

    @model_validator(mode="after")
    def year_range_ordered(self):
        if self.year_built_min > self.year_built_max:
            raise ValueError("year_built_min must not exceed year_built_max")
        return self

    def to_analysis_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            address=self.address,
            asset_type=AssetType(self.asset_type),
            subject_sf=self.square_feet,
            filters=FilterCriteria(
                min_clear_height=self.min_clear_height,
                year_built_min=self.year_built_min,
                year_built_max=self.year_built_max,
            ),
            session_key=self.session_id or DEFAULT_SESSION,
        )


def _form_to_payload(form_dict: dict) -> AnalyzeRequest:
    """Map HTML form field names onto the request model."""
    fields = {
        "address": form_dict.get("address", ""),
        "asset_type": form_dict.get("asset_type", AssetType.INDUSTRIAL.value),
        "square_feet": form_dict.get("square_feet") or 50000,
        "min_clear_height": form_dict.get("min_clear_height") or 20,
        "year_built_min": form_dict.get("year_built_min") or 1990,
        "year_built_max": form_dict.get("year_built_max") or 2024,
        "session_id": form_dict.get("session_id") or DEFAULT_SESSION,
    }
    return AnalyzeRequest(**fields)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{field}: {first['msg']}" if field else first["msg"]


def create_coordinator(config: Config, dataset: HeatmapDataset) -> AnalysisCoordinator:
    """Coordinator wired to the live geocoders and Overpass."""
    return AnalysisCoordinator(
        geocoder=create_default_geocoder(
            config.nominatim_url, config.photon_url, config.request_timeout, config.user_agent
        ),
        dataset=dataset,
        route_source=OverpassRouteSource(
            config.overpass_url, timeout=config.request_timeout, user_agent=config.user_agent
        ),
        route_radius_miles=config.route_radius_miles,
    )


def create_app(
    config: Optional[Config] = None,
    dataset: Optional[HeatmapDataset] = None,
    coordinator: Optional[AnalysisCoordinator] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config.load()
    dataset = dataset or get_heatmap_dataset(config.heatmap_path)
    coordinator = coordinator or create_coordinator(config, dataset)
    report_generator = MarketReportGenerator(output_dir=config.reports_dir)

    app = FastAPI(
        title=APP_TITLE,
        description="Synthetic commercial real estate market reports",
        version=APP_VERSION,
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=config.debug and not IS_PRODUCTION,
    )

    @app.get("/health", include_in_schema=False)
    def health():
        """Health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.filters["currency"] = format_currency
    templates.env.filters["number"] = format_number
    templates.env.filters["percent"] = format_percent
    templates.env.filters["rent"] = format_rent
    templates.env.filters["miles"] = format_miles

    asset_types = [a.value for a in AssetType]

    def render_form(request: Request, error_message: str = "", status_code: int = 200):
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": APP_TITLE,
                "asset_types": asset_types,
                "error_message": error_message,
            },
            status_code=status_code,
        )

    async def run_analysis(payload: AnalyzeRequest) -> MarketReport:
        """Run an analysis, mapping boundary failures to HTTP errors."""
        try:
            return await coordinator.analyze(payload.to_analysis_request())
        except GeocodingError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except AnalysisSuperseded as e:
            raise HTTPException(status_code=409, detail=str(e))
        except DatasetError as e:
            logger.error("Candidate dataset unavailable: %s", e)
            raise HTTPException(status_code=503, detail="Candidate dataset unavailable")

    def pdf_response(report: MarketReport) -> Response:
        content = report_generator.generate_to_buffer(report)
        filename = f"AIW-{report_slug(report)}.pdf"
        return Response(
            content=content,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Render the analysis form."""
        return render_form(request)

    @app.get("/Heatmap.json")
    async def heatmap():
        """Serve the candidate dataset."""
        try:
            return JSONResponse(dataset.records(), headers={"Cache-Control": "no-cache"})
        except DatasetError as e:
            logger.error("Candidate dataset unavailable: %s", e)
            raise HTTPException(status_code=503, detail="Candidate dataset unavailable")

    @app.post("/analyze", response_class=HTMLResponse)
    async def analyze_form(request: Request):
        """Process the form and render the report."""
        form_data = await request.form()
        form_dict = {k: v for k, v in form_data.items()}

        try:
            payload = _form_to_payload(form_dict)
        except ValidationError as e:
            return render_form(request, _validation_message(e), status_code=422)

        try:
            report = await run_analysis(payload)
        except HTTPException as e:
            return render_form(request, e.detail, status_code=e.status_code)

        return templates.TemplateResponse(
            request,
            "results.html",
            {
                "title": f"{APP_TITLE} - {report.subject.display_name}",
                "report": report,
                "asset_types": asset_types,
                "payload": payload,
                "route_radius_miles": config.route_radius_miles,
            },
        )

    @app.post("/report")
    async def report_form(request: Request):
        """Render the report PDF from the form fields."""
        form_data = await request.form()
        try:
            payload = _form_to_payload({k: v for k, v in form_data.items()})
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=_validation_message(e))
        return pdf_response(await run_analysis(payload))

    @app.post("/api/analyze")
    async def analyze_api(payload: AnalyzeRequest):
        """Run an analysis and return the report as JSON."""
        report = await run_analysis(payload)
        return report.to_dict()

    @app.post("/api/report")
    async def report_api(payload: AnalyzeRequest):
        """Run an analysis and return the report PDF."""
        return pdf_response(await run_analysis(payload))

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": APP_VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
            "dataset_loaded": dataset.is_loaded,
        }

    return app


# Create app instance for uvicorn
app = create_app()
