from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from coachbook.clock import utc_now
from coachbook.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    role: Mapped[str | None] = mapped_column(String(10), default=None)  # client, coach
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
