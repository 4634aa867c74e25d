from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_RADIUS_METERS


@dataclass(frozen=True)
class GeoPoint:
    """A GPS fix reported by the kiosk, in degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Location:
    """An approved office: circular geofence around a center point."""

    name: str
    latitude: float
    longitude: float
    radius_meters: float = DEFAULT_RADIUS_METERS

    def __post_init__(self):
        if self.radius_meters <= 0:
            raise ValueError(f"radius_meters must be positive for location {self.name!r}")

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "lat": self.latitude,
            "long": self.longitude,
            "radiusMeters": self.radius_meters,
        }
