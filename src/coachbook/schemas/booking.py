from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from coachbook.enums import BookingStatus


class BookingCreate(BaseModel):
    client_id: int
    coach_profile_id: int
    start_instant: datetime
    duration_minutes: int = Field(gt=0)


class BookingCreated(BaseModel):
    booking_id: int
    price: Decimal | None
    status: BookingStatus


class BookingStatusUpdate(BaseModel):
    new_status: BookingStatus


class BookingStatusRead(BaseModel):
    status: BookingStatus


class BookingRead(BaseModel):
    id: int
    client_id: int
    coach_id: int
    session_date: datetime
    duration: int
    status: BookingStatus
    price: Decimal | None
    payment_id: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
