"""Pydantic models for feedings (formula / breast milk)."""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

FeedingType = Literal["formula", "breast"]


class FeedingBase(BaseModel):
    type: FeedingType
    volume: int = Field(..., ge=0, description="Quantity in milliliters")
    time: str = Field(..., min_length=1, description="Display time, e.g. '10:15'")
    note: str = Field("", max_length=500)


class FeedingCreate(FeedingBase):
    """Payload to record or replace a feeding; timestamp defaults to now."""
    timestamp: Optional[int] = Field(None, ge=0, description="Epoch milliseconds")


class Feeding(FeedingBase):
    """Full feeding record as held in the store."""
    id: Union[int, str]
    timestamp: int = Field(..., ge=0)
    baby_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}
