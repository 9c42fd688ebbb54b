from datetime import datetime, time

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from coachbook.clock import utc_now
from coachbook.database import Base


class AvailabilitySlot(Base):
    __tablename__ = "availability"

    id: Mapped[int] = mapped_column(primary_key=True)
    coach_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), index=True)
    day_of_week: Mapped[int]  # 0=Sunday, 6=Saturday
    start_time: Mapped[time]
    end_time: Mapped[time]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
