from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class StaffMember:
    """Directory entry for a staff member.

    The enrolled face identity is the staff member's name, matching how
    subjects are registered in the face-recognition service.
    """

    user_id: str
    name: str
    active: bool
    allowed_location_names: frozenset[str] = field(default_factory=frozenset)
    department: Optional[str] = None

    @property
    def face_subject(self) -> str:
        return self.name

    def is_allowed_at(self, office: str) -> bool:
        wanted = office.strip().lower()
        return any(name.strip().lower() == wanted for name in self.allowed_location_names)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "name": self.name,
            "active": self.active,
            "allowedLocations": sorted(self.allowed_location_names),
            "department": self.department,
            "comprefaceSubject": self.face_subject,
        }
