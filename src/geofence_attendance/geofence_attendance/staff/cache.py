from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from ..core.constants import DEFAULT_STAFF_CACHE_TTL_SECONDS
from .model import StaffMember


class StaffCache:
    """Time-bounded cache of staff lookups, owned by the calling layer.

    Entries older than ``ttl_seconds`` are never served, so a deactivated
    staff member stops being trusted within one TTL window.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_STAFF_CACHE_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[float, StaffMember]] = {}

    def get(self, user_id: str) -> Optional[StaffMember]:
        with self._lock:
            entry = self._entries.get(user_id)
            if entry is None:
                return None
            stored_at, staff = entry
            if self._clock() - stored_at >= self._ttl:
                del self._entries[user_id]
                return None
            return staff

    def put(self, staff: StaffMember) -> None:
        with self._lock:
            self._entries[staff.user_id] = (self._clock(), staff)

    def invalidate(self, user_id: str) -> None:
        with self._lock:
            self._entries.pop(user_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
