from datetime import datetime

from pydantic import BaseModel

from coachbook.enums import Role


class ProfileCreate(BaseModel):
    role: Role | None = None


class RoleUpdate(BaseModel):
    role: Role


class ProfileRead(BaseModel):
    id: int
    role: Role | None
    created_at: datetime

    model_config = {"from_attributes": True}
