"""Pydantic models for sleep sessions."""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator

from babydaily.engine.clock import duration_between, parse_clock


class SleepBase(BaseModel):
    start: str = Field(..., description="HH:MM")
    end: str = Field(..., description="HH:MM")

    @field_validator("start", "end")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        parse_clock(value)
        return value

    @computed_field
    @property
    def duration(self) -> str:
        """Always derived from start/end; any incoming value is ignored."""
        return duration_between(self.start, self.end)


class SleepCreate(SleepBase):
    """Payload to record or replace a sleep session."""
    timestamp: Optional[int] = Field(None, ge=0)


class Sleep(SleepBase):
    """Full sleep record as held in the store."""
    id: Union[int, str]
    timestamp: int = Field(..., ge=0)
    baby_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}
