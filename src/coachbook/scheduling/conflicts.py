"""Booking conflict resolver."""

import logging
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.clock import to_utc_naive
from coachbook.enums import ACTIVE_BOOKING_STATUSES
from coachbook.models.booking import Booking

logger = logging.getLogger(__name__)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open interval intersection."""
    return a_start < b_end and b_start < a_end


async def has_conflict(
    session: AsyncSession,
    coach_id: int,
    candidate_start: datetime,
    candidate_end: datetime,
    excluding_booking_id: int | None = None,
) -> bool:
    """True if any non-cancelled booking of the coach intersects the candidate range.

    Callers admitting a booking must hold the coach's lock (see
    ``coachbook.scheduling.locks``) so the answer is still true at commit.
    """
    start = to_utc_naive(candidate_start)
    end = to_utc_naive(candidate_end)

    stmt = select(Booking).where(
        Booking.coach_id == coach_id,
        Booking.status.in_([s.value for s in ACTIVE_BOOKING_STATUSES]),
        Booking.session_date < end,
    )
    if excluding_booking_id is not None:
        stmt = stmt.where(Booking.id != excluding_booking_id)

    result = await session.execute(stmt)
    for booking in result.scalars():
        booking_end = booking.session_date + timedelta(minutes=booking.duration)
        if overlaps(booking.session_date, booking_end, start, end):
            logger.info(
                "Coach %s: %s-%s overlaps booking %s", coach_id, start, end, booking.id
            )
            return True
    return False
