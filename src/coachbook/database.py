import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from coachbook.config import get_settings
from coachbook.exceptions import StorageError

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.db_url,
    echo=settings.debug,
)

async_session = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


async def commit_or_raise(session: AsyncSession) -> None:
    """Commit the session; on a driver failure roll back and raise StorageError."""
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Commit failed: %s", exc)
        raise StorageError("Storage is temporarily unavailable, please retry") from exc
