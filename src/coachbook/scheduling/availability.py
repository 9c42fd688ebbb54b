"""Availability store: a coach's recurring weekly open hours.

Slots are never edited in place; a coach deletes and re-adds. Overlapping
slots on the same weekday are allowed and their union is the open time.
"""

import logging
from datetime import datetime, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.clock import get_zone, local_day_and_time
from coachbook.config import get_settings
from coachbook.database import commit_or_raise
from coachbook.exceptions import NotFoundError, ValidationError
from coachbook.models.availability import AvailabilitySlot

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)


def _offset(t: time) -> timedelta:
    return timedelta(hours=t.hour, minutes=t.minute, seconds=t.second, microseconds=t.microsecond)


def _slot_end(t: time) -> timedelta:
    """Offset of a slot end; 00:00 closes the slot at midnight."""
    return DAY if t == time(0) else _offset(t)


def covers(windows: list[tuple[timedelta, timedelta]], start: timedelta, end: timedelta) -> bool:
    """True if ``[start, end)`` lies inside the union of the ``[s, e)`` windows."""
    reach = start
    for w_start, w_end in sorted(windows):
        if w_start > reach:
            break
        reach = max(reach, w_end)
        if reach >= end:
            return True
    return False


async def add_slot(
    session: AsyncSession,
    coach_id: int,
    day_of_week: int,
    start: time,
    end: time,
) -> AvailabilitySlot:
    """Add a weekly slot for a coach.

    Raises:
        ValidationError: if ``day_of_week`` is outside 0-6 or the slot is empty.
            An ``end`` of 00:00 means midnight at the end of the day.
    """
    if not 0 <= day_of_week <= 6:
        raise ValidationError(
            "day_of_week must be between 0 (Sunday) and 6 (Saturday)",
            details={"day_of_week": day_of_week},
        )
    if _offset(start) >= _slot_end(end):
        raise ValidationError(
            "Slot start must be before its end",
            details={"start_time": start.isoformat(), "end_time": end.isoformat()},
        )

    slot = AvailabilitySlot(
        coach_id=coach_id,
        day_of_week=day_of_week,
        start_time=start,
        end_time=end,
    )
    session.add(slot)
    await commit_or_raise(session)
    await session.refresh(slot)
    logger.info(
        "Coach %s added slot %s (day %s, %s-%s)", coach_id, slot.id, day_of_week, start, end
    )
    return slot


async def remove_slot(session: AsyncSession, coach_id: int, slot_id: int) -> None:
    """Delete one of the coach's slots. A slot owned by someone else is reported as missing."""
    result = await session.execute(
        select(AvailabilitySlot).where(
            AvailabilitySlot.id == slot_id,
            AvailabilitySlot.coach_id == coach_id,
        )
    )
    slot = result.scalar_one_or_none()
    if slot is None:
        raise NotFoundError("Slot not found")

    await session.delete(slot)
    await commit_or_raise(session)
    logger.info("Coach %s removed slot %s", coach_id, slot_id)


async def list_slots(session: AsyncSession, coach_id: int) -> list[AvailabilitySlot]:
    """Coach's slots ordered by weekday then start time, ties in creation order."""
    stmt = (
        select(AvailabilitySlot)
        .where(AvailabilitySlot.coach_id == coach_id)
        .order_by(
            AvailabilitySlot.day_of_week,
            AvailabilitySlot.start_time,
            AvailabilitySlot.id,
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def is_within_availability(
    session: AsyncSession,
    coach_id: int,
    start_instant: datetime,
    duration_minutes: int,
    timezone_name: str | None = None,
) -> bool:
    """Whether ``[start, start + duration)`` falls inside the coach's open hours.

    The weekday and time-of-day are read in the configured scheduling timezone.

    Raises:
        ValidationError: if the duration is not positive or the session would
            run past midnight.
    """
    if duration_minutes <= 0:
        raise ValidationError("Duration must be positive", details={"duration_minutes": duration_minutes})

    zone = get_zone(timezone_name or get_settings().timezone)
    day, local_start = local_day_and_time(start_instant, zone)
    start = _offset(local_start)
    end = start + timedelta(minutes=duration_minutes)
    if end > DAY:
        raise ValidationError(
            "Sessions may not cross midnight",
            details={"start": local_start.isoformat(), "duration_minutes": duration_minutes},
        )

    result = await session.execute(
        select(AvailabilitySlot.start_time, AvailabilitySlot.end_time).where(
            AvailabilitySlot.coach_id == coach_id,
            AvailabilitySlot.day_of_week == day,
        )
    )
    windows = [(_offset(s), _slot_end(e)) for s, e in result.all()]
    return covers(windows, start, end)
