from datetime import time

from pydantic import BaseModel, Field


class AvailabilitySlotBase(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday
    start_time: time
    end_time: time


class AvailabilitySlotCreate(AvailabilitySlotBase):
    coach_id: int


class AvailabilitySlotRead(AvailabilitySlotBase):
    id: int
    coach_id: int

    model_config = {"from_attributes": True}


class SlotCreated(BaseModel):
    slot_id: int


class AvailabilityCheck(BaseModel):
    available: bool
