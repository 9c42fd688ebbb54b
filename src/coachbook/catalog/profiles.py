"""Profiles: the identity collaborator's view of who a caller is."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.database import commit_or_raise
from coachbook.enums import Role
from coachbook.exceptions import NotFoundError, UnauthenticatedError, ValidationError
from coachbook.models.profile import Profile
from coachbook.scheduling.access import CallerProfile

logger = logging.getLogger(__name__)


async def create_profile(session: AsyncSession, role: Role | None = None) -> Profile:
    profile = Profile(role=role.value if role else None)
    session.add(profile)
    await commit_or_raise(session)
    await session.refresh(profile)
    logger.info("Created profile %s (role %s)", profile.id, profile.role)
    return profile


async def get_profile(session: AsyncSession, profile_id: int) -> Profile:
    profile = await session.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


async def set_role(session: AsyncSession, profile: Profile, role: Role) -> Profile:
    """Assign a role during onboarding. A role, once set, cannot change."""
    if profile.role is not None:
        raise ValidationError(
            "Role is already set for this profile",
            details={"role": profile.role},
        )
    profile.role = role.value
    await commit_or_raise(session)
    await session.refresh(profile)
    logger.info("Profile %s onboarded as %s", profile.id, role.value)
    return profile


async def get_caller_profile(session: AsyncSession, profile_id: int | None) -> CallerProfile:
    """Resolve the caller's ``{id, role}``.

    Raises:
        UnauthenticatedError: if no identity was presented or it is unknown.
    """
    if profile_id is None:
        raise UnauthenticatedError("Authentication required")
    profile = await session.get(Profile, profile_id)
    if profile is None:
        raise UnauthenticatedError("Authentication required")
    return CallerProfile(id=profile.id, role=Role(profile.role) if profile.role else None)
