"""Coach catalog routes: onboarding details, directory and price quotes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.api.deps import require_role
from coachbook.api.retry import retry_on_storage_error
from coachbook.catalog.coaches import get_coach, list_coaches, upsert_coach_details
from coachbook.database import get_db
from coachbook.enums import Category, Language, Role
from coachbook.models.coach import CoachDetails
from coachbook.scheduling.access import Permit
from coachbook.scheduling.pricing import price
from coachbook.schemas.coach import CoachDetailsRead, CoachDetailsUpsert, PriceQuote

router = APIRouter(prefix="/api/coaches", tags=["coaches"])


@router.put("/me", response_model=CoachDetailsRead)
@retry_on_storage_error()
async def save_my_details(
    body: CoachDetailsUpsert,
    permit: Permit = Depends(require_role(Role.COACH)),
    session: AsyncSession = Depends(get_db),
) -> CoachDetails:
    """Create or replace the calling coach's catalog entry."""
    return await upsert_coach_details(
        session,
        permit.profile_id,
        bio=body.bio,
        categories=body.categories,
        languages=body.languages,
        credentials=body.credentials,
        hourly_rate=body.hourly_rate,
    )


@router.get("", response_model=list[CoachDetailsRead])
async def directory(
    category: Category | None = Query(default=None),
    language: Language | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> list[CoachDetails]:
    """List coaches who have written a bio, optionally filtered by tag."""
    return await list_coaches(session, category=category, language=language)


@router.get("/{coach_id}", response_model=CoachDetailsRead)
async def read_coach(
    coach_id: int,
    session: AsyncSession = Depends(get_db),
) -> CoachDetails:
    return await get_coach(session, coach_id)


@router.get("/{coach_id}/quote", response_model=PriceQuote)
async def quote(
    coach_id: int,
    duration_minutes: int = Query(default=60),
    session: AsyncSession = Depends(get_db),
) -> PriceQuote:
    """Estimated price of a session with this coach."""
    coach = await get_coach(session, coach_id)
    return PriceQuote(
        coach_id=coach.id,
        hourly_rate=coach.hourly_rate,
        duration_minutes=duration_minutes,
        price=price(coach.hourly_rate, duration_minutes),
    )
