from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class BabyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    birth_date: date
    user_id: Optional[int] = None


class BabyCreate(BabyBase):
    """Payload to create a baby profile."""
    pass


class BabyUpdate(BaseModel):
    """Payload to update a baby profile (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    birth_date: Optional[date] = None


class Baby(BabyBase):
    """Full profile returned from the database."""
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}
