from __future__ import annotations

import logging
from typing import Optional

from .cache import StaffCache
from .model import StaffMember
from .repository import StaffRepository

logger = logging.getLogger(__name__)


class StaffDirectory:
    """Staff lookups through the repository, with an optional injected cache.

    Only found, active staff members are cached; unknown ids always go back to the
    repository. ``DirectoryUnavailableError`` from the repository propagates.
    """

    def __init__(self, staff: StaffRepository, *, cache: Optional[StaffCache] = None):
        self._staff = staff
        self._cache = cache

    def find_staff(self, user_id: str) -> Optional[StaffMember]:
        if self._cache is not None:
            cached = self._cache.get(user_id)
            if cached is not None:
                return cached

        member = self._staff.find_staff(user_id)
        if member is None:
            logger.info("Staff %s not found in directory", user_id)
            return None

        if self._cache is not None and member.active:
            self._cache.put(member)
        return member
