"""Booking API routes: create bookings, change their status, list them."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.api.deps import get_booking_manager, get_caller, require_role
from coachbook.api.retry import retry_on_storage_error
from coachbook.database import get_db
from coachbook.enums import BookingStatus, Role
from coachbook.models.booking import Booking
from coachbook.scheduling.access import CallerProfile, Permit, authorize
from coachbook.scheduling.lifecycle import BookingManager
from coachbook.schemas.booking import (
    BookingCreate,
    BookingCreated,
    BookingRead,
    BookingStatusRead,
    BookingStatusUpdate,
)

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=BookingCreated, status_code=201)
@retry_on_storage_error()
async def create_booking(
    body: BookingCreate,
    _: Permit = Depends(require_role(Role.CLIENT)),
    caller: CallerProfile = Depends(get_caller),
    manager: BookingManager = Depends(get_booking_manager),
    session: AsyncSession = Depends(get_db),
) -> BookingCreated:
    """Book a session with a coach.

    Fails with 422 for unsupported durations or past start times, 409 when the
    coach is not open then or the time is already taken.
    """
    authorize(caller, Role.CLIENT, resource_owner_id=body.client_id)
    booking = await manager.create_booking(
        session,
        client_id=body.client_id,
        coach_profile_id=body.coach_profile_id,
        start_instant=body.start_instant,
        duration_minutes=body.duration_minutes,
    )
    return BookingCreated(
        booking_id=booking.id,
        price=booking.price,
        status=BookingStatus(booking.status),
    )


@router.post("/{booking_id}/status", response_model=BookingStatusRead)
@retry_on_storage_error()
async def update_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    caller: CallerProfile = Depends(get_caller),
    manager: BookingManager = Depends(get_booking_manager),
    session: AsyncSession = Depends(get_db),
) -> BookingStatusRead:
    permit = authorize(caller)
    booking = await manager.update_status(session, permit, booking_id, body.new_status)
    return BookingStatusRead(status=BookingStatus(booking.status))


@router.get("", response_model=list[BookingRead])
async def list_bookings(
    viewer_id: int = Query(),
    role: Role = Query(),
    caller: CallerProfile = Depends(get_caller),
    manager: BookingManager = Depends(get_booking_manager),
    session: AsyncSession = Depends(get_db),
) -> list[Booking]:
    """The viewer's bookings as client or coach, earliest first."""
    authorize(caller, role, resource_owner_id=viewer_id)
    return await manager.list_bookings(session, viewer_id, role)
