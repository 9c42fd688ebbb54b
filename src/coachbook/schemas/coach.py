from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from coachbook.enums import Category, Language


class CoachDetailsBase(BaseModel):
    bio: str = Field(default="", max_length=5000)
    categories: list[Category] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    credentials: str = Field(default="", max_length=2000)
    hourly_rate: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class CoachDetailsUpsert(CoachDetailsBase):
    pass


class CoachDetailsRead(CoachDetailsBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PriceQuote(BaseModel):
    coach_id: int
    hourly_rate: Decimal | None
    duration_minutes: int
    price: Decimal | None
