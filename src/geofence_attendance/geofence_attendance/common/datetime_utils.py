from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo


def load_timezone(name: str) -> tzinfo:
    """Resolve an IANA zone name; "UTC" and empty values fall back to UTC."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def now_local(tz: tzinfo) -> datetime:
    """Current time in the deployment zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Express a timestamp in the deployment zone.

    Naive timestamps are taken to be local already.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def work_date_for(value: datetime, tz: tzinfo) -> date:
    """Calendar day a timestamp belongs to in the deployment zone."""
    return to_local(value, tz).date()


def format_clock_time(value: datetime) -> str:
    return value.strftime("%H:%M:%S")
