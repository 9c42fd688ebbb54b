"""Instant helpers. Instants are stored as naive UTC datetimes."""

from datetime import datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(instant: datetime) -> datetime:
    """Normalise an instant to naive UTC. Naive input is taken to be UTC already."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc).replace(tzinfo=None)


def get_zone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def local_day_and_time(instant: datetime, zone: tzinfo) -> tuple[int, time]:
    """Return ``(day_of_week, time_of_day)`` of a UTC instant in ``zone``.

    Days are numbered 0=Sunday .. 6=Saturday.
    """
    local = to_utc_naive(instant).replace(tzinfo=timezone.utc).astimezone(zone)
    return (local.weekday() + 1) % 7, local.time().replace(tzinfo=None)
