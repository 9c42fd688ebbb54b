"""Booking lifecycle manager: admits bookings and moves them through their statuses."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.catalog.coaches import get_coach_rate
from coachbook.clock import to_utc_naive, utc_now
from coachbook.config import Settings, get_settings
from coachbook.database import commit_or_raise
from coachbook.enums import BookingStatus, Role
from coachbook.exceptions import (
    AuthzError,
    AvailabilityError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    SchedulingError,
    StorageError,
    ValidationError,
)
from coachbook.models.booking import Booking
from coachbook.models.profile import Profile
from coachbook.scheduling.access import Permit
from coachbook.scheduling.availability import is_within_availability
from coachbook.scheduling.conflicts import has_conflict
from coachbook.scheduling.locks import CoachLockRegistry, coach_locks
from coachbook.scheduling.pricing import price

logger = logging.getLogger(__name__)

# (from, to) -> which party of the booking may make the move
TRANSITIONS: dict[tuple[BookingStatus, BookingStatus], frozenset[Role]] = {
    (BookingStatus.PENDING, BookingStatus.CONFIRMED): frozenset({Role.COACH}),
    (BookingStatus.PENDING, BookingStatus.CANCELLED): frozenset({Role.CLIENT, Role.COACH}),
    (BookingStatus.CONFIRMED, BookingStatus.COMPLETED): frozenset({Role.COACH}),
    (BookingStatus.CONFIRMED, BookingStatus.CANCELLED): frozenset({Role.CLIENT, Role.COACH}),
}


class BookingManager:
    """Owns booking creation and status transitions."""

    def __init__(
        self,
        settings: Settings | None = None,
        locks: CoachLockRegistry | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._locks = locks or coach_locks
        self._now = clock or utc_now

    async def create_booking(
        self,
        session: AsyncSession,
        client_id: int,
        coach_profile_id: int,
        start_instant: datetime,
        duration_minutes: int,
    ) -> Booking:
        """Admit and persist a new pending booking.

        Availability, conflict and price are all evaluated while holding the
        coach's lock, and the insert is committed before it is released.

        Raises:
            ValidationError: unsupported duration, start in the past, or a
                session that would cross midnight.
            NotFoundError: the target profile is not a coach.
            AvailabilityError: the range is outside the coach's open hours.
            ConflictError: the range overlaps a non-cancelled booking.
            StorageError: the database failed; nothing was written.
        """
        if duration_minutes <= 0 or duration_minutes not in self._settings.session_durations:
            raise ValidationError(
                f"Duration must be one of {sorted(self._settings.session_durations)} minutes",
                details={"duration_minutes": duration_minutes},
            )
        start = to_utc_naive(start_instant)
        if start < self._now():
            raise ValidationError(
                "Session start is in the past",
                details={"start_instant": start.isoformat()},
            )

        async with self._locks.hold(session, coach_profile_id):
            try:
                booking = await self._admit(
                    session, client_id, coach_profile_id, start, duration_minutes
                )
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("Booking for coach %s failed in storage: %s", coach_profile_id, exc)
                raise StorageError("Storage is temporarily unavailable, please retry") from exc
            except SchedulingError:
                await session.rollback()
                raise

        logger.info(
            "Booking %s created: client %s, coach %s, %s for %s min, price %s",
            booking.id,
            client_id,
            coach_profile_id,
            start.isoformat(),
            duration_minutes,
            booking.price,
        )
        return booking

    async def _admit(
        self,
        session: AsyncSession,
        client_id: int,
        coach_profile_id: int,
        start: datetime,
        duration_minutes: int,
    ) -> Booking:
        coach = await session.get(Profile, coach_profile_id)
        if coach is None or coach.role != Role.COACH.value:
            raise NotFoundError("Coach not found")

        rate = await get_coach_rate(session, coach_profile_id)

        if not await is_within_availability(
            session,
            coach_profile_id,
            start,
            duration_minutes,
            timezone_name=self._settings.timezone,
        ):
            logger.info("Coach %s not available at %s for %s min", coach_profile_id, start, duration_minutes)
            raise AvailabilityError(
                "The coach is not available at the requested time",
                details={"start_instant": start.isoformat(), "duration_minutes": duration_minutes},
            )

        end = start + timedelta(minutes=duration_minutes)
        if await has_conflict(session, coach_profile_id, start, end):
            raise ConflictError(
                "The requested time overlaps an existing booking",
                details={"start_instant": start.isoformat(), "duration_minutes": duration_minutes},
            )

        booking = Booking(
            client_id=client_id,
            coach_id=coach_profile_id,
            session_date=start,
            duration=duration_minutes,
            status=BookingStatus.PENDING.value,
            price=price(rate, duration_minutes),
            payment_id=None,
        )
        session.add(booking)
        await session.flush()
        return booking

    async def update_status(
        self,
        session: AsyncSession,
        permit: Permit,
        booking_id: int,
        new_status: BookingStatus,
    ) -> Booking:
        """Move a booking to ``new_status`` on behalf of one of its parties.

        Raises:
            NotFoundError: no such booking, or the caller is not a party to it.
            InvalidTransitionError: the move is not in the state machine, or a
                session is marked completed before it has started.
            AuthzError: the caller's side of the booking may not make this move.
        """
        booking = await session.get(Booking, booking_id)
        if booking is None or permit.profile_id not in (booking.client_id, booking.coach_id):
            raise NotFoundError("Booking not found")

        actor = Role.COACH if permit.profile_id == booking.coach_id else Role.CLIENT
        current = BookingStatus(booking.status)

        allowed = TRANSITIONS.get((current, new_status))
        if allowed is None:
            raise InvalidTransitionError(
                f"Cannot change booking from {current.value} to {new_status.value}",
                details={"from": current.value, "to": new_status.value},
            )
        if actor not in allowed:
            raise AuthzError("You are not allowed to perform this action")
        if new_status is BookingStatus.COMPLETED and booking.session_date > self._now():
            raise InvalidTransitionError(
                "A session cannot be completed before it starts",
                details={"session_date": booking.session_date.isoformat()},
            )

        # Compare-and-set so a concurrent transition cannot be overwritten
        try:
            result = await session.execute(
                update(Booking)
                .where(Booking.id == booking_id, Booking.status == current.value)
                .values(status=new_status.value, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.error("Status update of booking %s failed in storage: %s", booking_id, exc)
            raise StorageError("Storage is temporarily unavailable, please retry") from exc
        if result.rowcount == 0:
            await session.rollback()
            raise InvalidTransitionError(
                "Booking status changed concurrently, reload and try again",
                details={"from": current.value, "to": new_status.value},
            )
        await commit_or_raise(session)
        await session.refresh(booking)

        logger.info(
            "Booking %s: %s -> %s by %s %s",
            booking_id,
            current.value,
            new_status.value,
            actor.value,
            permit.profile_id,
        )
        return booking

    async def list_bookings(
        self,
        session: AsyncSession,
        viewer_id: int,
        role: Role,
    ) -> list[Booking]:
        """Bookings the viewer takes part in as ``role``, earliest first."""
        owner_column = Booking.client_id if role is Role.CLIENT else Booking.coach_id
        stmt = (
            select(Booking)
            .where(owner_column == viewer_id)
            .order_by(Booking.session_date, Booking.id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
