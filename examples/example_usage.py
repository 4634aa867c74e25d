"""Example: use the service layer directly (without Flask).

Resolves a GPS fix against the configured offices and shows where a staff
member stands in today's ledger.
"""

import importlib
import sys

from config import get_settings_module

from src.geofence_attendance.geofence_attendance.common.datetime_utils import now_local
from src.geofence_attendance.geofence_attendance.container import KioskSettings, build_container
from src.geofence_attendance.geofence_attendance.locations.model import GeoPoint


def main(user_id: str = "001", latitude: float = 9.400, longitude: float = -0.850):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=KioskSettings.from_module(settings))

    office = container.location_service.resolve_office(GeoPoint(latitude, longitude))
    print("office:", office or "outside approved area")

    state = container.ledger.current_state(user_id, now_local(container.settings.tz))
    print(f"user {user_id}: {state.value}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
