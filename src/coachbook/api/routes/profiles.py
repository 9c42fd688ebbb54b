"""Profile routes: signup and role onboarding."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.api.deps import get_caller
from coachbook.api.retry import retry_on_storage_error
from coachbook.catalog.profiles import create_profile, get_profile, set_role
from coachbook.database import get_db
from coachbook.models.profile import Profile
from coachbook.scheduling.access import CallerProfile
from coachbook.schemas.profile import ProfileCreate, ProfileRead, RoleUpdate

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.post("", response_model=ProfileRead, status_code=201)
@retry_on_storage_error()
async def signup(
    body: ProfileCreate,
    session: AsyncSession = Depends(get_db),
) -> Profile:
    """Create a profile, optionally with its role already chosen."""
    return await create_profile(session, body.role)


@router.get("/me", response_model=ProfileRead)
async def read_me(
    caller: CallerProfile = Depends(get_caller),
    session: AsyncSession = Depends(get_db),
) -> Profile:
    return await get_profile(session, caller.id)


@router.put("/me/role", response_model=ProfileRead)
@retry_on_storage_error()
async def onboard_role(
    body: RoleUpdate,
    caller: CallerProfile = Depends(get_caller),
    session: AsyncSession = Depends(get_db),
) -> Profile:
    """Set the caller's role. Returns 422 if a role was already chosen."""
    profile = await get_profile(session, caller.id)
    return await set_role(session, profile, body.role)
