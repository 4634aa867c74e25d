from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, timezone
from typing import Optional

import pytest

from src.geofence_attendance.geofence_attendance.attendance.model import AttendanceRecord
from src.geofence_attendance.geofence_attendance.container import KioskSettings, wire_container
from src.geofence_attendance.geofence_attendance.core.exceptions import FaceServiceUnavailableError
from src.geofence_attendance.geofence_attendance.face.model import FaceMatch
from src.geofence_attendance.geofence_attendance.locations.model import Location
from src.geofence_attendance.geofence_attendance.staff.model import StaffMember

class InMemoryLocations:
    def __init__(self, locations):
        self.locations = list(locations)
        self.calls = 0

    def list_locations(self):
        self.calls += 1
        return list(self.locations)


class InMemoryStaff:
    def __init__(self, members):
        self.by_id = {m.user_id: m for m in members}
        self.calls = 0

    def find_staff(self, user_id: str) -> Optional[StaffMember]:
        self.calls += 1
        return self.by_id.get(user_id)


class InMemoryAttendance:
    """Ledger store with insert-if-absent semantics under a lock.

    ``read_barrier`` lets a test hold concurrent readers until all of them
    have observed the same state.
    """

    def __init__(self, read_barrier: Optional[threading.Barrier] = None):
        self._lock = threading.Lock()
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._read_barrier = read_barrier
        self.writes = 0

    def get_record(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            record = self._by_key.get((user_id, work_date))
        if self._read_barrier is not None:
            self._read_barrier.wait(timeout=5)
        return record

    def create_record(self, record: AttendanceRecord) -> bool:
        with self._lock:
            key = (record.user_id, record.work_date)
            if key in self._by_key:
                return False
            self._by_key[key] = record
            self.writes += 1
            return True

    def close_record(self, *, user_id, work_date, clock_out_time, clock_out_location) -> bool:
        with self._lock:
            record = self._by_key.get((user_id, work_date))
            if record is None or record.clock_out_time is not None:
                return False
            self._by_key[(user_id, work_date)] = replace(
                record, clock_out_time=clock_out_time, clock_out_location=clock_out_location
            )
            self.writes += 1
            return True

    def records(self):
        with self._lock:
            return list(self._by_key.values())


class FakeFaceOracle:
    def __init__(self, similarity: float = 0.95, *, subject: Optional[str] = None, unavailable: bool = False):
        self.similarity = similarity
        self.subject = subject
        self.unavailable = unavailable
        self.calls = []

    def match_face(self, image: str, subject: Optional[str] = None):
        self.calls.append((image, subject))
        if self.unavailable:
            raise FaceServiceUnavailableError("connection refused")
        name = self.subject or subject
        if name is None:
            return []
        return [FaceMatch(subject=name, similarity=self.similarity)]


@pytest.fixture
def tz():
    return timezone.utc


@pytest.fixture
def hq() -> Location:
    return Location(name="HQ", latitude=9.400, longitude=-0.850, radius_meters=150)


@pytest.fixture
def staff_001() -> StaffMember:
    return StaffMember(
        user_id="001",
        name="Ama Mensah",
        active=True,
        allowed_location_names=frozenset({"HQ"}),
        department="Operations",
    )


@pytest.fixture
def inactive_002() -> StaffMember:
    return StaffMember(
        user_id="002",
        name="Kofi Boateng",
        active=False,
        allowed_location_names=frozenset({"HQ"}),
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def face_oracle() -> FakeFaceOracle:
    return FakeFaceOracle()


@pytest.fixture
def container(hq, staff_001, inactive_002, attendance_repo, face_oracle):
    return wire_container(
        settings=KioskSettings(local_timezone="UTC", face_match_threshold=0.7),
        locations_repo=InMemoryLocations([hq]),
        staff_repo=InMemoryStaff([staff_001, inactive_002]),
        attendance_repo=attendance_repo,
        face_oracle=face_oracle,
    )


@pytest.fixture
def racing_attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance(read_barrier=threading.Barrier(2))
