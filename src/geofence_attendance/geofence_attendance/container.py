from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Optional

from .attendance.ledger import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceWorkflow
from .common.datetime_utils import load_timezone
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .face.compreface_client import CompreFaceClient
from .face.oracle import FaceOracle
from .face.service import FaceVerifier
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .staff.cache import StaffCache
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import StaffDirectory


@dataclass(frozen=True)
class KioskSettings:
    """Deployment knobs read from the active config module."""

    local_timezone: str = constants.DEFAULT_LOCAL_TIMEZONE
    face_match_threshold: float = constants.FACE_MATCH_THRESHOLD
    compreface_url: str = ""
    compreface_api_key: str = ""
    face_oracle_timeout_seconds: float = constants.DEFAULT_FACE_ORACLE_TIMEOUT_SECONDS
    staff_cache_ttl_seconds: float = constants.DEFAULT_STAFF_CACHE_TTL_SECONDS
    locations_ttl_seconds: float = constants.DEFAULT_LOCATIONS_TTL_SECONDS
    user_id_pattern: str = constants.DEFAULT_USER_ID_PATTERN

    @property
    def tz(self) -> tzinfo:
        return load_timezone(self.local_timezone)

    @classmethod
    def from_module(cls, settings: Any) -> "KioskSettings":
        return cls(
            local_timezone=str(getattr(settings, "LOCAL_TIMEZONE", constants.DEFAULT_LOCAL_TIMEZONE)),
            face_match_threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD", constants.FACE_MATCH_THRESHOLD)),
            compreface_url=str(getattr(settings, "COMPREFACE_URL", "")),
            compreface_api_key=str(getattr(settings, "COMPREFACE_API_KEY", "")),
            face_oracle_timeout_seconds=float(
                getattr(settings, "FACE_ORACLE_TIMEOUT_SECONDS", constants.DEFAULT_FACE_ORACLE_TIMEOUT_SECONDS)
            ),
            staff_cache_ttl_seconds=float(
                getattr(settings, "STAFF_CACHE_TTL_SECONDS", constants.DEFAULT_STAFF_CACHE_TTL_SECONDS)
            ),
            locations_ttl_seconds=float(
                getattr(settings, "LOCATIONS_TTL_SECONDS", constants.DEFAULT_LOCATIONS_TTL_SECONDS)
            ),
            user_id_pattern=str(getattr(settings, "USER_ID_PATTERN", constants.DEFAULT_USER_ID_PATTERN)),
        )


@dataclass(frozen=True)
class Container:
    settings: KioskSettings

    locations_repo: LocationRepository
    staff_repo: StaffRepository
    attendance_repo: AttendanceRepository
    face_oracle: FaceOracle

    location_service: LocationService
    staff_directory: StaffDirectory
    face_verifier: FaceVerifier
    ledger: AttendanceLedger
    workflow: AttendanceWorkflow

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    settings: KioskSettings,
    locations_repo: LocationRepository,
    staff_repo: StaffRepository,
    attendance_repo: AttendanceRepository,
    face_oracle: FaceOracle,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the service graph on top of the given adapters."""
    tz = settings.tz

    location_service = LocationService(locations_repo, ttl_seconds=settings.locations_ttl_seconds)
    staff_directory = StaffDirectory(staff_repo, cache=StaffCache(settings.staff_cache_ttl_seconds))
    face_verifier = FaceVerifier(face_oracle, threshold=settings.face_match_threshold)
    ledger = AttendanceLedger(attendance_repo, tz=tz)
    workflow = AttendanceWorkflow(
        locations=location_service,
        directory=staff_directory,
        faces=face_verifier,
        ledger=ledger,
    )

    return Container(
        settings=settings,
        locations_repo=locations_repo,
        staff_repo=staff_repo,
        attendance_repo=attendance_repo,
        face_oracle=face_oracle,
        location_service=location_service,
        staff_directory=staff_directory,
        face_verifier=face_verifier,
        ledger=ledger,
        workflow=workflow,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: KioskSettings) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connect_timeout=float(db_config.get("connect_timeout", 5.0)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_container(
        settings=settings,
        locations_repo=MySQLLocationRepository(conn),
        staff_repo=MySQLStaffRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn, tz=settings.tz),
        face_oracle=CompreFaceClient(
            settings.compreface_url,
            settings.compreface_api_key,
            timeout=settings.face_oracle_timeout_seconds,
        ),
        conn=conn,
    )
