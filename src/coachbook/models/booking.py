from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from coachbook.clock import utc_now
from coachbook.database import Base


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    coach_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id"), index=True
    )  # coach's profile id, not coaches.id
    session_date: Mapped[datetime]  # naive UTC instant
    duration: Mapped[int]  # minutes
    status: Mapped[str] = mapped_column(
        String(20), default="pending"
    )  # pending, confirmed, completed, cancelled
    price: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), default=None
    )  # snapshot at booking time
    payment_id: Mapped[str | None] = mapped_column(String(100), default=None)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
