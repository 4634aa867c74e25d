from __future__ import annotations

from typing import Protocol, Sequence

from .model import Location


class LocationRepository(Protocol):
    """Source of approved office locations.

    Order matters: it is the geofence tie-break order.
    """

    def list_locations(self) -> Sequence[Location]:
        raise NotImplementedError
