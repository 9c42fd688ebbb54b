"""Coach catalog: bio, tags and hourly rate per coach profile."""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.database import commit_or_raise
from coachbook.enums import Category, Language
from coachbook.exceptions import NotFoundError, ValidationError
from coachbook.models.coach import CoachDetails

logger = logging.getLogger(__name__)


async def upsert_coach_details(
    session: AsyncSession,
    owner_id: int,
    *,
    bio: str = "",
    categories: list[Category] | None = None,
    languages: list[Language] | None = None,
    credentials: str = "",
    hourly_rate: Decimal | None = None,
) -> CoachDetails:
    """Insert or replace the coach record owned by ``owner_id``."""
    if hourly_rate is not None and hourly_rate < 0:
        raise ValidationError("hourly_rate must not be negative", details={"hourly_rate": str(hourly_rate)})

    result = await session.execute(select(CoachDetails).where(CoachDetails.user_id == owner_id))
    row = result.scalar_one_or_none()
    if row is None:
        row = CoachDetails(user_id=owner_id)
        session.add(row)

    row.bio = bio
    # Deduplicate, keep first-seen order
    row.categories = list(dict.fromkeys(c.value for c in categories or []))
    row.languages = list(dict.fromkeys(lang.value for lang in languages or []))
    row.credentials = credentials
    row.hourly_rate = hourly_rate

    await commit_or_raise(session)
    await session.refresh(row)
    logger.info("Saved coach details for profile %s", owner_id)
    return row


async def get_coach(session: AsyncSession, coach_id: int) -> CoachDetails:
    row = await session.get(CoachDetails, coach_id)
    if row is None:
        raise NotFoundError("Coach not found")
    return row


async def get_coach_rate(session: AsyncSession, coach_profile_id: int) -> Decimal | None:
    """Hourly rate for a coach profile, or None if unset or no catalog entry exists."""
    result = await session.execute(
        select(CoachDetails.hourly_rate).where(CoachDetails.user_id == coach_profile_id)
    )
    return result.scalar_one_or_none()


async def list_coaches(
    session: AsyncSession,
    category: Category | None = None,
    language: Language | None = None,
) -> list[CoachDetails]:
    """Directory listing: coaches with a bio, optionally filtered by tag."""
    result = await session.execute(
        select(CoachDetails).where(CoachDetails.bio != "").order_by(CoachDetails.id)
    )
    coaches = list(result.scalars().all())
    if category is not None:
        coaches = [c for c in coaches if category.value in (c.categories or [])]
    if language is not None:
        coaches = [c for c in coaches if language.value in (c.languages or [])]
    return coaches
