"""
Analysis Coordinator - request lifecycle around the market engines.

Handles everything with I/O for one analysis request:
1. Geocode the address and load the candidate dataset, concurrently
2. Look up nearby road segments (failure degrades to "unavailable")
3. Run the pure MarketAnalyzer

A newer request for the same session supersedes any request still in
flight; the older one raises AnalysisSuperseded at its next checkpoint
instead of returning a stale report.
"""

import asyncio
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from sources.base import BaseGeocoder, BaseRouteSource
from sources.heatmap import HeatmapDataset
from sources.overpass import RouteLookupError

from .analyzer import MarketAnalyzer, MarketReport
from .comp_engine import FilterCriteria
from .models import AssetType, Subject
from .routes import DEFAULT_ROUTE_RADIUS_MILES


logger = logging.getLogger(__name__)


DEFAULT_SESSION = "default"


class AnalysisSuperseded(Exception):
    """Raised when a newer request replaced this one before it finished."""

    def __init__(self, request_id: int):
        super().__init__(f"Analysis request {request_id} was superseded")
        self.request_id = request_id


@dataclass(frozen=True)
class AnalysisRequest:
    """User inputs for one analysis, already parsed and range-checked."""
    address: str
    asset_type: AssetType
    subject_sf: float
    filters: FilterCriteria
    session_key: str = DEFAULT_SESSION


class RequestTracker:
    """
    Tracks the active request id per session.

    begin() hands out increasing ids; is_current() is True only for the
    most recent id of a session. finish() drops the session once its
    latest request is done.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._active: Dict[str, int] = {}
        self._lock = threading.Lock()

    def begin(self, session_key: str = DEFAULT_SESSION) -> int:
        with self._lock:
            request_id = next(self._counter)
            self._active[session_key] = request_id
            return request_id

    def is_current(self, request_id: int, session_key: str = DEFAULT_SESSION) -> bool:
        with self._lock:
            return self._active.get(session_key) == request_id

    def check(self, request_id: int, session_key: str = DEFAULT_SESSION) -> None:
        """Raise AnalysisSuperseded unless request_id is still active."""
        if not self.is_current(request_id, session_key):
            raise AnalysisSuperseded(request_id)

    def finish(self, request_id: int, session_key: str = DEFAULT_SESSION) -> None:
        """Forget the session unless a newer request has replaced request_id."""
        with self._lock:
            if self._active.get(session_key) == request_id:
                del self._active[session_key]

    @property
    def active_sessions(self) -> int:
        """Number of sessions with a request in flight."""
        with self._lock:
            return len(self._active)


class AnalysisCoordinator:
    """
    Runs analysis requests against live collaborators.

    Usage:
        coordinator = AnalysisCoordinator(geocoder, dataset, route_source)
        report = await coordinator.analyze(request)
    """

    def __init__(
        self,
        geocoder: BaseGeocoder,
        dataset: HeatmapDataset,
        route_source: Optional[BaseRouteSource] = None,
        analyzer: Optional[MarketAnalyzer] = None,
        route_radius_miles: float = DEFAULT_ROUTE_RADIUS_MILES,
        tracker: Optional[RequestTracker] = None,
    ):
        self._geocoder = geocoder
        self._dataset = dataset
        self._route_source = route_source
        self._route_radius_miles = route_radius_miles
        self._analyzer = analyzer or MarketAnalyzer(route_radius_miles=route_radius_miles)
        self._tracker = tracker or RequestTracker()

    @property
    def tracker(self) -> RequestTracker:
        return self._tracker

    async def analyze(self, request: AnalysisRequest) -> MarketReport:
        """
        Run one analysis request end to end.

        Raises:
            GeocodingError: If the address cannot be resolved.
            DatasetError: If the candidate dataset cannot be loaded.
            AnalysisSuperseded: If a newer request for the session started.
        """
        session_key = request.session_key
        request_id = self._tracker.begin(session_key)
        try:
            return await self._run(request, request_id)
        finally:
            self._tracker.finish(request_id, session_key)

    async def _run(self, request: AnalysisRequest, request_id: int) -> MarketReport:
        session_key = request.session_key

        location, raw_points = await asyncio.gather(
            asyncio.to_thread(self._geocoder.geocode, request.address),
            asyncio.to_thread(self._dataset.load),
        )
        self._tracker.check(request_id, session_key)

        subject = Subject(
            coordinate=location.coordinate,
            display_name=location.display_name,
            asset_type=request.asset_type,
        )

        raw_segments = await self._fetch_segments(subject)
        self._tracker.check(request_id, session_key)

        return self._analyzer.analyze(
            subject=subject,
            subject_sf=request.subject_sf,
            filters=request.filters,
            raw_points=raw_points,
            raw_segments=raw_segments,
        )

    async def _fetch_segments(self, subject: Subject):
        """Road segments for the subject, or None when unavailable."""
        if self._route_source is None:
            return None
        try:
            return await asyncio.to_thread(
                self._route_source.fetch_segments,
                subject.coordinate,
                self._route_radius_miles,
            )
        except RouteLookupError as e:
            logger.warning("Route lookup unavailable for %s: %s", subject.display_name, e)
            return None
