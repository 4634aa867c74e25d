from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Sequence

from ..core.constants import DEFAULT_LOCATIONS_TTL_SECONDS
from .geofence import resolve_office
from .model import GeoPoint, Location
from .repository import LocationRepository

logger = logging.getLogger(__name__)


class LocationService:
    """Holds the ordered list of approved offices, reloading it once per TTL."""

    def __init__(
        self,
        locations: LocationRepository,
        *,
        ttl_seconds: float = DEFAULT_LOCATIONS_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._locations = locations
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._loaded: Optional[Sequence[Location]] = None
        self._loaded_at = 0.0

    def list_locations(self) -> Sequence[Location]:
        with self._lock:
            if self._loaded is None or self._clock() - self._loaded_at >= self._ttl:
                self._reload()
            return self._loaded

    def refresh(self) -> Sequence[Location]:
        with self._lock:
            self._reload()
            return self._loaded

    def resolve_office(self, point: GeoPoint) -> Optional[str]:
        return resolve_office(point, self.list_locations())

    def _reload(self) -> None:
        locations = tuple(self._locations.list_locations())
        names = [loc.name for loc in locations]
        if len(set(names)) != len(names):
            logger.warning("Duplicate location names in configuration: %s", names)
        self._loaded = locations
        self._loaded_at = self._clock()
        logger.info("Loaded %d approved locations", len(locations))
