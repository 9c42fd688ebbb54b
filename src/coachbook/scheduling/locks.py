"""Per-coach mutual exclusion for booking admission.

Within a process, one ``asyncio.Lock`` per coach (kept per event loop) makes
the read-check-write of a booking single-writer. A lock lives only while some
request holds or waits on it. On PostgreSQL the critical section also takes a
transaction-scoped advisory lock on the coach id so separate worker processes
serialize as well.
"""

import asyncio
import logging
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.exceptions import StorageError

logger = logging.getLogger(__name__)


class CoachLockRegistry:
    def __init__(self) -> None:
        self._locks_by_loop: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, weakref.WeakValueDictionary[int, asyncio.Lock]]" = (
            weakref.WeakKeyDictionary()
        )

    def lock_for(self, coach_id: int) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        locks = self._locks_by_loop.get(loop)
        if locks is None:
            locks = weakref.WeakValueDictionary()
            self._locks_by_loop[loop] = locks
        lock = locks.get(coach_id)
        if lock is None:
            lock = asyncio.Lock()
            locks[coach_id] = lock
        return lock

    def tracked(self) -> int:
        """Number of coach locks alive on the running loop."""
        locks = self._locks_by_loop.get(asyncio.get_running_loop())
        return len(locks) if locks is not None else 0

    @asynccontextmanager
    async def hold(self, session: AsyncSession, coach_id: int) -> AsyncIterator[None]:
        """Hold the coach's lock for the duration of the block.

        Raises:
            StorageError: if the database refused the advisory lock.
        """
        async with self.lock_for(coach_id):
            if session.get_bind().dialect.name == "postgresql":
                # Released automatically at commit/rollback
                try:
                    await session.execute(select(func.pg_advisory_xact_lock(coach_id)))
                except SQLAlchemyError as exc:
                    await session.rollback()
                    logger.error("Advisory lock for coach %s failed: %s", coach_id, exc)
                    raise StorageError("Storage is temporarily unavailable, please retry") from exc
            logger.debug("Acquired booking lock for coach %s", coach_id)
            yield


coach_locks = CoachLockRegistry()
