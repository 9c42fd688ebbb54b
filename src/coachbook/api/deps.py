"""Request dependencies resolving the caller and guarding entry points."""

from collections.abc import Awaitable, Callable

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.catalog.profiles import get_caller_profile
from coachbook.database import get_db
from coachbook.enums import Role
from coachbook.scheduling.access import CallerProfile, Permit, authorize
from coachbook.scheduling.lifecycle import BookingManager


async def get_caller(
    x_profile_id: int | None = Header(default=None),
    session: AsyncSession = Depends(get_db),
) -> CallerProfile:
    return await get_caller_profile(session, x_profile_id)


def require_role(role: Role) -> Callable[..., Awaitable[Permit]]:
    """Dependency factory rejecting callers without ``role``.

    Runs before the request body is validated, so a caller in the wrong role
    gets 403 whatever they sent.
    """

    async def _require(caller: CallerProfile = Depends(get_caller)) -> Permit:
        return authorize(caller, required_role=role)

    return _require


def get_booking_manager() -> BookingManager:
    return BookingManager()
