from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from coachbook.database import Base, get_db
from coachbook.main import app
from coachbook.models.profile import Profile

test_engine = create_async_engine("sqlite+aiosqlite://", echo=False)
test_session = async_sessionmaker(test_engine, expire_on_commit=False)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
async def setup_db() -> AsyncGenerator[None, None]:
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session(setup_db: None) -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as s:
        yield s


async def _create_profile(role: str | None) -> int:
    async with test_session() as s:
        profile = Profile(role=role)
        s.add(profile)
        await s.commit()
        return profile.id


@pytest.fixture
async def coach_id(setup_db: None) -> int:
    """A profile onboarded as a coach."""
    return await _create_profile("coach")


@pytest.fixture
async def client_id(setup_db: None) -> int:
    """A profile onboarded as a client."""
    return await _create_profile("client")


@pytest.fixture
async def other_coach_id(setup_db: None) -> int:
    return await _create_profile("coach")
