"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_HEATMAP_PATH = Path(__file__).parent.parent / "data" / "heatmap.json"


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "4173")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # External services
    request_timeout: float = field(default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "20")))
    user_agent: str = field(
        default_factory=lambda: os.getenv("USER_AGENT", "AssetIntelligenceWorkbench/1.0")
    )
    nominatim_url: str = field(
        default_factory=lambda: os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
    )
    photon_url: str = field(default_factory=lambda: os.getenv("PHOTON_URL", "https://photon.komoot.io/api/"))
    overpass_url: str = field(
        default_factory=lambda: os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
    )

    # Analysis
    route_radius_miles: float = field(
        default_factory=lambda: float(os.getenv("ROUTE_RADIUS_MILES", "20"))
    )

    # Data
    heatmap_path: str = field(default_factory=lambda: os.getenv("HEATMAP_PATH", str(DEFAULT_HEATMAP_PATH)))
    reports_dir: str = field(default_factory=lambda: os.getenv("REPORTS_DIR", "./reports"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "request_timeout": self.request_timeout,
            "user_agent": self.user_agent,
            "nominatim_url": self.nominatim_url,
            "photon_url": self.photon_url,
            "overpass_url": self.overpass_url,
            "route_radius_miles": self.route_radius_miles,
            "heatmap_path": self.heatmap_path,
            "reports_dir": self.reports_dir,
        }
