from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.constants import DEFAULT_RADIUS_METERS
from ..core.exceptions import DirectoryUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Location
from .repository import LocationRepository

logger = logging.getLogger(__name__)


def location_from_row(row: Dict[str, Any]) -> Optional[Location]:
    """Typed mapping of a ``locations`` row; malformed rows map to None."""
    try:
        name = str(row["location_name"] or "").strip()
        if not name:
            raise ValueError("empty location_name")
        radius = row.get("radius_meters")
        return Location(
            name=name,
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            radius_meters=float(radius) if radius is not None else DEFAULT_RADIUS_METERS,
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Skipping malformed location row %r: %s", row.get("location_id"), e)
        return None


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_locations(self) -> Sequence[Location]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT location_id, location_name, latitude, longitude, radius_meters
                    FROM locations
                    ORDER BY sort_order, location_id
                    """
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise DirectoryUnavailableError(f"Location source unavailable: {e}") from e
        locations = [location_from_row(r) for r in rows]
        return [loc for loc in locations if loc is not None]
