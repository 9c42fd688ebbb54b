"""Tests for the per-coach booking lock registry."""

import asyncio

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.exceptions import StorageError
from coachbook.scheduling.locks import CoachLockRegistry


class _PostgresBind:
    class dialect:
        name = "postgresql"


class _RefusingSession:
    """Stands in for a PostgreSQL session whose advisory lock call fails."""

    def __init__(self) -> None:
        self.rolled_back = False

    def get_bind(self) -> _PostgresBind:
        return _PostgresBind()

    async def execute(self, statement):
        raise OperationalError(str(statement), {}, Exception("server closed the connection"))

    async def rollback(self) -> None:
        self.rolled_back = True


class TestCoachLockRegistry:
    async def test_same_lock_while_held(self, session: AsyncSession) -> None:
        registry = CoachLockRegistry()
        async with registry.hold(session, 7):
            assert registry.lock_for(7).locked()
            assert not registry.lock_for(8).locked()

    async def test_serializes_one_coach(self, session: AsyncSession) -> None:
        registry = CoachLockRegistry()
        order: list[str] = []

        async def critical(name: str) -> None:
            async with registry.hold(session, 7):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(critical("a"), critical("b"))
        assert order == ["a-in", "a-out", "b-in", "b-out"]

    async def test_released_locks_are_dropped(self, session: AsyncSession) -> None:
        registry = CoachLockRegistry()
        for coach_id in range(50):
            async with registry.hold(session, coach_id):
                pass
        assert registry.tracked() == 0

    async def test_advisory_lock_failure(self) -> None:
        registry = CoachLockRegistry()
        refusing = _RefusingSession()
        with pytest.raises(StorageError):
            async with registry.hold(refusing, 7):
                pass
        assert refusing.rolled_back
        assert not registry.lock_for(7).locked()
