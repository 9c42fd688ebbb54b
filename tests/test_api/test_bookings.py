"""Tests for booking API endpoints."""

from datetime import datetime, time, timedelta, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from coachbook.catalog.coaches import upsert_coach_details
from coachbook.models.booking import Booking
from coachbook.scheduling.availability import add_slot

MONDAY = 1


def _headers(profile_id: int) -> dict[str, str]:
    return {"X-Profile-Id": str(profile_id)}


def _next_monday_at(hour: int, minute: int = 0) -> datetime:
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    days_ahead = 7 - today.weekday()
    return (today + timedelta(days=days_ahead)).replace(hour=hour, minute=minute)


def _booking(client_id: int, coach_id: int, start: datetime, duration: int = 60) -> dict:
    return {
        "client_id": client_id,
        "coach_profile_id": coach_id,
        "start_instant": start.isoformat(),
        "duration_minutes": duration,
    }


@pytest.fixture
async def open_coach(session: AsyncSession, coach_id: int) -> int:
    """Coach at $100/hr, open Mondays 09:00-17:00."""
    await upsert_coach_details(session, coach_id, bio="Business coach", hourly_rate=Decimal("100"))
    await add_slot(session, coach_id, MONDAY, time(9), time(17))
    return coach_id


async def _create(client: AsyncClient, client_id: int, coach_id: int, start: datetime, duration: int = 60):
    return await client.post(
        "/api/bookings",
        json=_booking(client_id, coach_id, start, duration),
        headers=_headers(client_id),
    )


async def test_monday_example(client: AsyncClient, open_coach: int, client_id: int) -> None:
    first = await _create(client, client_id, open_coach, _next_monday_at(9))
    assert first.status_code == 201
    data = first.json()
    assert data["price"] == "100.00"
    assert data["status"] == "pending"
    assert isinstance(data["booking_id"], int)

    overlapping = await _create(client, client_id, open_coach, _next_monday_at(9, 30))
    assert overlapping.status_code == 409
    assert overlapping.json()["code"] == "ConflictError"

    after_hours = await _create(client, client_id, open_coach, _next_monday_at(17, 30), 30)
    assert after_hours.status_code == 409
    assert after_hours.json()["code"] == "AvailabilityError"


async def test_price_for_half_hour(client: AsyncClient, open_coach: int, client_id: int) -> None:
    resp = await _create(client, client_id, open_coach, _next_monday_at(10), 30)
    assert resp.status_code == 201
    assert resp.json()["price"] == "50.00"


async def test_price_null_without_rate(client: AsyncClient, coach_id: int, client_id: int, session: AsyncSession) -> None:
    await add_slot(session, coach_id, MONDAY, time(9), time(17))
    resp = await _create(client, client_id, coach_id, _next_monday_at(9))
    assert resp.status_code == 201
    assert resp.json()["price"] is None


async def test_unsupported_duration(client: AsyncClient, open_coach: int, client_id: int) -> None:
    resp = await _create(client, client_id, open_coach, _next_monday_at(9), 45)
    assert resp.status_code == 422
    assert resp.json()["code"] == "ValidationError"


async def test_non_positive_duration(client: AsyncClient, open_coach: int, client_id: int) -> None:
    resp = await _create(client, client_id, open_coach, _next_monday_at(9), 0)
    assert resp.status_code == 422


async def test_past_start(client: AsyncClient, open_coach: int, client_id: int) -> None:
    resp = await _create(client, client_id, open_coach, _next_monday_at(9) - timedelta(days=14))
    assert resp.status_code == 422
    assert "past" in resp.json()["detail"]


async def test_coach_cannot_book(client: AsyncClient, open_coach: int, other_coach_id: int) -> None:
    resp = await client.post(
        "/api/bookings",
        json=_booking(other_coach_id, open_coach, _next_monday_at(9)),
        headers=_headers(other_coach_id),
    )
    assert resp.status_code == 403


async def test_client_cannot_book_for_someone_else(
    client: AsyncClient, open_coach: int, client_id: int
) -> None:
    resp = await client.post(
        "/api/bookings",
        json=_booking(client_id + 100, open_coach, _next_monday_at(9)),
        headers=_headers(client_id),
    )
    assert resp.status_code == 403


async def test_unknown_coach(client: AsyncClient, client_id: int) -> None:
    resp = await _create(client, client_id, 4242, _next_monday_at(9))
    assert resp.status_code == 404


async def test_cancel_then_rebook(client: AsyncClient, open_coach: int, client_id: int) -> None:
    first = await _create(client, client_id, open_coach, _next_monday_at(9))
    booking_id = first.json()["booking_id"]

    cancel = await client.post(
        f"/api/bookings/{booking_id}/status",
        json={"new_status": "cancelled"},
        headers=_headers(client_id),
    )
    assert cancel.status_code == 200
    assert cancel.json() == {"status": "cancelled"}

    again = await _create(client, client_id, open_coach, _next_monday_at(9))
    assert again.status_code == 201


async def test_coach_confirms(client: AsyncClient, open_coach: int, client_id: int) -> None:
    created = await _create(client, client_id, open_coach, _next_monday_at(9))
    booking_id = created.json()["booking_id"]

    resp = await client.post(
        f"/api/bookings/{booking_id}/status",
        json={"new_status": "confirmed"},
        headers=_headers(open_coach),
    )
    assert resp.status_code == 200
    assert resp.json() == {"status": "confirmed"}


async def test_client_cannot_confirm(client: AsyncClient, open_coach: int, client_id: int) -> None:
    created = await _create(client, client_id, open_coach, _next_monday_at(9))
    booking_id = created.json()["booking_id"]

    resp = await client.post(
        f"/api/bookings/{booking_id}/status",
        json={"new_status": "confirmed"},
        headers=_headers(client_id),
    )
    assert resp.status_code == 403


async def test_unknown_status_value(client: AsyncClient, open_coach: int, client_id: int) -> None:
    created = await _create(client, client_id, open_coach, _next_monday_at(9))
    booking_id = created.json()["booking_id"]

    resp = await client.post(
        f"/api/bookings/{booking_id}/status",
        json={"new_status": "rescheduled"},
        headers=_headers(open_coach),
    )
    assert resp.status_code == 422


@pytest.mark.parametrize("target", ["pending", "confirmed", "completed", "cancelled"])
async def test_completed_cannot_change(
    client: AsyncClient,
    session: AsyncSession,
    coach_id: int,
    client_id: int,
    target: str,
) -> None:
    booking = Booking(
        client_id=client_id,
        coach_id=coach_id,
        session_date=datetime(2024, 3, 4, 9, 0),
        duration=60,
        status="completed",
        price=Decimal("100.00"),
    )
    session.add(booking)
    await session.commit()

    resp = await client.post(
        f"/api/bookings/{booking.id}/status",
        json={"new_status": target},
        headers=_headers(coach_id),
    )
    assert resp.status_code == 409
    assert resp.json()["code"] == "InvalidTransitionError"


async def test_outsider_gets_not_found(
    client: AsyncClient, open_coach: int, client_id: int, other_coach_id: int
) -> None:
    created = await _create(client, client_id, open_coach, _next_monday_at(9))
    booking_id = created.json()["booking_id"]

    resp = await client.post(
        f"/api/bookings/{booking_id}/status",
        json={"new_status": "cancelled"},
        headers=_headers(other_coach_id),
    )
    assert resp.status_code == 404
    missing = await client.post(
        "/api/bookings/98765/status",
        json={"new_status": "cancelled"},
        headers=_headers(other_coach_id),
    )
    assert missing.status_code == 404
    assert missing.json()["detail"] == resp.json()["detail"]


async def test_list_bookings(client: AsyncClient, open_coach: int, client_id: int) -> None:
    await _create(client, client_id, open_coach, _next_monday_at(14))
    await _create(client, client_id, open_coach, _next_monday_at(9), 30)

    as_client = await client.get(
        "/api/bookings",
        params={"viewer_id": client_id, "role": "client"},
        headers=_headers(client_id),
    )
    assert as_client.status_code == 200
    data = as_client.json()
    assert [b["duration"] for b in data] == [30, 60]
    assert all(b["client_id"] == client_id for b in data)
    assert data[0]["price"] == "50.00"
    assert data[0]["status"] == "pending"
    assert data[0]["payment_id"] is None

    as_coach = await client.get(
        "/api/bookings",
        params={"viewer_id": open_coach, "role": "coach"},
        headers=_headers(open_coach),
    )
    assert [b["duration"] for b in as_coach.json()] == [30, 60]


async def test_list_bookings_only_own(
    client: AsyncClient, open_coach: int, client_id: int
) -> None:
    resp = await client.get(
        "/api/bookings",
        params={"viewer_id": open_coach, "role": "coach"},
        headers=_headers(client_id),
    )
    assert resp.status_code == 403


async def test_list_bookings_role_must_match(
    client: AsyncClient, open_coach: int, client_id: int
) -> None:
    resp = await client.get(
        "/api/bookings",
        params={"viewer_id": client_id, "role": "coach"},
        headers=_headers(client_id),
    )
    assert resp.status_code == 403
