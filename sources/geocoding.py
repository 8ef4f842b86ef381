"""
Address resolution via OpenStreetMap services.

Nominatim is tried first; Photon is the fallback. Both are free public
endpoints with usage policies, so every request carries an identifying
User-Agent.
"""

import logging
from typing import Optional, Sequence

import requests

from core.models import Coordinate

from .base import BaseGeocoder, GeocodeResult


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
PHOTON_SEARCH_URL = "https://photon.komoot.io/api/"
USER_AGENT = "AssetIntelligenceWorkbench/1.0"
REQUEST_TIMEOUT_SECONDS = 20

GEOCODE_FAILURE_MESSAGE = (
    "Unable to locate that address right now. "
    "Please try a fuller street/city/state format."
)


class GeocodingError(LookupError):
    """Raised when an address cannot be resolved."""


def _build_session(user_agent: str) -> requests.Session:
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "application/json",
    })
    return session


class _HttpGeocoder(BaseGeocoder):
    """Shared session handling for HTTP geocoders."""

    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        user_agent: str = USER_AGENT,
    ):
        self._url = url
        self._timeout = timeout
        self._session = session or _build_session(user_agent)

    def _get_json(self, params: dict):
        try:
            response = self._session.get(self._url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise GeocodingError(f"{self.name} request failed: {e}") from e

        if not response.ok:
            raise GeocodingError(f"{self.name} failed ({response.status_code})")

        try:
            return response.json()
        except ValueError as e:
            raise GeocodingError(f"{self.name} returned invalid JSON") from e

    def close(self) -> None:
        """Close the session."""
        self._session.close()


class NominatimGeocoder(_HttpGeocoder):
    """Geocoder backed by the Nominatim search API."""

    name = "Nominatim"

    def __init__(self, url: str = NOMINATIM_SEARCH_URL, **kwargs):
        super().__init__(url, **kwargs)

    def geocode(self, address: str) -> GeocodeResult:
        data = self._get_json({
            "q": address,
            "format": "jsonv2",
            "limit": 1,
            "addressdetails": 1,
        })
        if not isinstance(data, list) or not data:
            raise GeocodingError("Nominatim returned no results")

        best = data[0]
        try:
            coordinate = Coordinate(float(best["lat"]), float(best["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError("Nominatim returned an unusable result") from e

        return GeocodeResult(
            coordinate=coordinate,
            display_name=best.get("display_name") or address,
        )


class PhotonGeocoder(_HttpGeocoder):
    """Geocoder backed by the Photon (komoot) API."""

    name = "Photon"

    def __init__(self, url: str = PHOTON_SEARCH_URL, **kwargs):
        super().__init__(url, **kwargs)

    def geocode(self, address: str) -> GeocodeResult:
        data = self._get_json({"q": address, "limit": 1})

        features = data.get("features") if isinstance(data, dict) else None
        if not features:
            raise GeocodingError("Photon returned no results")

        feature = features[0]
        try:
            lng, lat = feature["geometry"]["coordinates"][:2]
            coordinate = Coordinate(float(lat), float(lng))
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError("Photon returned an unusable result") from e

        props = feature.get("properties") or {}
        pieces = [props.get(key) for key in ("name", "city", "state", "country")]
        display_name = ", ".join(p for p in pieces if p) or address

        return GeocodeResult(coordinate=coordinate, display_name=display_name)


class FallbackGeocoder(BaseGeocoder):
    """
    Tries each geocoder in order and returns the first result.

    Raises a single user-facing GeocodingError when all of them fail.
    """

    name = "fallback"

    def __init__(self, geocoders: Sequence[BaseGeocoder]):
        if not geocoders:
            raise ValueError("at least one geocoder is required")
        self._geocoders = list(geocoders)

    def geocode(self, address: str) -> GeocodeResult:
        for geocoder in self._geocoders:
            try:
                return geocoder.geocode(address)
            except GeocodingError as e:
                logger.warning("Geocoder %s failed for %r: %s", geocoder.name, address, e)
        raise GeocodingError(GEOCODE_FAILURE_MESSAGE)

    def close(self) -> None:
        for geocoder in self._geocoders:
            geocoder.close()


def create_default_geocoder(
    nominatim_url: str = NOMINATIM_SEARCH_URL,
    photon_url: str = PHOTON_SEARCH_URL,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    user_agent: str = USER_AGENT,
) -> FallbackGeocoder:
    """Nominatim with Photon fallback, sharing one HTTP session."""
    session = _build_session(user_agent)
    return FallbackGeocoder([
        NominatimGeocoder(nominatim_url, session=session, timeout=timeout),
        PhotonGeocoder(photon_url, session=session, timeout=timeout),
    ])
