"""
Candidate point dataset.

A static JSON array of {"lat": ..., "lng": ...} records. The file is read
once per process and shared by every request.
"""

import json
import logging
import threading
from pathlib import Path
from typing import List, Optional, Tuple, Union

from core.comp_engine import RawCandidatePoint


logger = logging.getLogger(__name__)


DEFAULT_HEATMAP_PATH = Path(__file__).parent.parent / "data" / "heatmap.json"


class DatasetError(RuntimeError):
    """Raised when the candidate dataset is missing or malformed."""


class HeatmapDataset:
    """
    Lazily loaded, memoized candidate dataset.

    Thread-safe: concurrent first calls to load() read the file once.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_HEATMAP_PATH):
        self._path = Path(path)
        self._points: Optional[Tuple[RawCandidatePoint, ...]] = None
        self._records: Optional[list] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_loaded(self) -> bool:
        return self._points is not None

    def load(self) -> Tuple[RawCandidatePoint, ...]:
        """
        Return the candidate points, reading the file on first use.

        Raises:
            DatasetError: If the file is missing or not a list of points.
        """
        if self._points is None:
            with self._lock:
                if self._points is None:
                    self._records, self._points = self._read()
        return self._points

    def records(self) -> List[dict]:
        """Raw JSON records, as served to the browser."""
        self.load()
        return self._records

    def _read(self):
        try:
            records = json.loads(self._path.read_text())
        except FileNotFoundError as e:
            raise DatasetError(f"Candidate dataset not found: {self._path}") from e
        except json.JSONDecodeError as e:
            raise DatasetError(f"Candidate dataset is not valid JSON: {e}") from e

        if not isinstance(records, list):
            raise DatasetError("Candidate dataset must be a JSON array")

        try:
            points = tuple(RawCandidatePoint.from_mapping(r) for r in records)
        except (KeyError, TypeError, ValueError) as e:
            raise DatasetError(f"Malformed candidate record: {e}") from e

        logger.info("Loaded %d candidate points from %s", len(points), self._path)
        return records, points


# Singleton instance for the application
_heatmap_dataset: Optional[HeatmapDataset] = None


def get_heatmap_dataset(path: Union[str, Path, None] = None) -> HeatmapDataset:
    """Get the candidate dataset singleton."""
    global _heatmap_dataset
    if _heatmap_dataset is None:
        _heatmap_dataset = HeatmapDataset(path or DEFAULT_HEATMAP_PATH)
    return _heatmap_dataset
