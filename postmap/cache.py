"""Read-through cache of coordinates per country code, backed by a postal-code file."""

import logging
import threading
import time
from typing import Dict, FrozenSet, Optional, Tuple

from .extractor import DEFAULT_BATCH_SIZE, DEFAULT_MAX_WORKERS, extract_coordinates
from .models import Coordinate
from .records import read_country_codes, read_records

logger = logging.getLogger(__name__)


class CoordinateCache:
    """Country code -> coordinates, loaded lazily from one record file.

    The set of available country codes is read once, on first use. Each
    country's coordinates are extracted on the first request for that country
    and reused afterwards. Safe to share between threads.
    """

    def __init__(self, csv_path: str, batch_size: int = DEFAULT_BATCH_SIZE,
                 max_workers: int = DEFAULT_MAX_WORKERS, preload: bool = False):
        self.csv_path = csv_path
        self.batch_size = batch_size
        self.max_workers = max_workers
        self._lock = threading.RLock()
        self._codes: Optional[FrozenSet[str]] = None
        self._coordinates: Dict[str, Tuple[Coordinate, ...]] = {}
        if preload:
            self.preload()

    def preload(self) -> None:
        """Load the country list and every country's coordinates up front."""
        start = time.monotonic()
        for code in sorted(self.available_country_codes()):
            self.coordinates_for(code)
        total = sum(len(coords) for coords in self._coordinates.values())
        logger.info("Preloaded %d countries (%d coordinates) in %.0f ms",
                    len(self._coordinates), total, (time.monotonic() - start) * 1000)

    def available_country_codes(self) -> FrozenSet[str]:
        with self._lock:
            if self._codes is None:
                self._codes = read_country_codes(self.csv_path, self.batch_size)
            return self._codes

    def has_country(self, country_code: Optional[str]) -> bool:
        if not country_code:
            return False
        return country_code.strip().upper() in self.available_country_codes()

    def coordinates_for(self, country_code: str) -> Tuple[Coordinate, ...]:
        """Coordinates of ``country_code``; empty when the file has no such country."""
        code = country_code.strip().upper()
        if not self.has_country(code):
            return ()
        with self._lock:
            cached = self._coordinates.get(code)
            if cached is None:
                records = read_records(self.csv_path, self.batch_size)
                cached = tuple(extract_coordinates(records, code, self.batch_size, self.max_workers))
                self._coordinates[code] = cached
            return cached

    def clear(self) -> None:
        with self._lock:
            self._codes = None
            self._coordinates.clear()

    def __len__(self) -> int:
        return len(self._coordinates)
