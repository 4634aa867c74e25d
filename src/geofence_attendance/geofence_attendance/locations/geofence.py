from __future__ import annotations

import math
from typing import Iterable, Optional

from ..core.constants import EARTH_RADIUS_KM
from .model import GeoPoint, Location


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points using the haversine formula."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(delta_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c * 1000.0


def contains(location: Location, point: GeoPoint) -> bool:
    # Boundary counts as inside.
    return distance_meters(point, location.center) <= location.radius_meters


def resolve_office(point: GeoPoint, locations: Iterable[Location]) -> Optional[str]:
    """Name of the first location whose geofence contains ``point``, else None.

    Locations are tested in the order given; overlapping geofences resolve to
    whichever is listed first.
    """
    for location in locations:
        if contains(location, point):
            return location.name
    return None
