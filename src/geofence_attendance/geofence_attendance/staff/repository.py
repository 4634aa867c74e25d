from __future__ import annotations

from typing import Optional, Protocol

from .model import StaffMember


class StaffRepository(Protocol):
    """Read-only access to the staff directory.

    Implementations raise ``DirectoryUnavailableError`` when the backing store
    cannot be read, and return None for unknown or malformed entries.
    """

    def find_staff(self, user_id: str) -> Optional[StaffMember]:
        raise NotImplementedError
