"""Availability API routes: manage a coach's recurring weekly open hours."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.api.deps import get_caller, require_role
from coachbook.api.retry import retry_on_storage_error
from coachbook.config import get_settings
from coachbook.database import get_db
from coachbook.enums import Role
from coachbook.models.availability import AvailabilitySlot
from coachbook.scheduling import availability
from coachbook.scheduling.access import CallerProfile, Permit, authorize
from coachbook.schemas.availability import (
    AvailabilityCheck,
    AvailabilitySlotCreate,
    AvailabilitySlotRead,
    SlotCreated,
)

router = APIRouter(prefix="/api/availability", tags=["availability"])


@router.post("", response_model=SlotCreated, status_code=201)
@retry_on_storage_error()
async def add_availability_slot(
    body: AvailabilitySlotCreate,
    _: Permit = Depends(require_role(Role.COACH)),
    caller: CallerProfile = Depends(get_caller),
    session: AsyncSession = Depends(get_db),
) -> SlotCreated:
    """Add a weekly slot. Coaches may only add to their own calendar."""
    authorize(caller, Role.COACH, resource_owner_id=body.coach_id)
    slot = await availability.add_slot(
        session, body.coach_id, body.day_of_week, body.start_time, body.end_time
    )
    return SlotCreated(slot_id=slot.id)


@router.get("", response_model=list[AvailabilitySlotRead])
async def list_availability_slots(
    coach_id: int = Query(),
    session: AsyncSession = Depends(get_db),
) -> list[AvailabilitySlot]:
    """A coach's slots ordered by weekday and start time."""
    return await availability.list_slots(session, coach_id)


@router.get("/check", response_model=AvailabilityCheck)
async def check_availability(
    coach_id: int = Query(),
    start_instant: datetime = Query(),
    duration_minutes: int = Query(),
    session: AsyncSession = Depends(get_db),
) -> AvailabilityCheck:
    """Whether a session would fall inside the coach's open hours.

    Existing bookings are not considered here.
    """
    available = await availability.is_within_availability(
        session,
        coach_id,
        start_instant,
        duration_minutes,
        timezone_name=get_settings().timezone,
    )
    return AvailabilityCheck(available=available)


@router.delete("/{slot_id}", status_code=204)
@retry_on_storage_error()
async def remove_availability_slot(
    slot_id: int,
    coach_id: int = Query(),
    _: Permit = Depends(require_role(Role.COACH)),
    caller: CallerProfile = Depends(get_caller),
    session: AsyncSession = Depends(get_db),
) -> None:
    """Delete one of the caller's slots."""
    authorize(caller, Role.COACH, resource_owner_id=coach_id)
    await availability.remove_slot(session, coach_id, slot_id)
