"""Pydantic models for diaper changes (pee / poo / mixed)."""

from datetime import datetime
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

DiaperType = Literal["pee", "poo", "mixed"]


class DiaperBase(BaseModel):
    type: DiaperType
    sub: str = Field("", max_length=100, description="Consistency / color label")
    time: str = Field(..., min_length=1)
    color: Optional[str] = Field(None, max_length=50)

    @model_validator(mode="before")
    @classmethod
    def _drop_color_for_pee(cls, data: Any) -> Any:
        # A pee-only change has no stool color.
        if isinstance(data, dict) and data.get("type") == "pee" and data.get("color") is not None:
            return {**data, "color": None}
        return data


class DiaperCreate(DiaperBase):
    """Payload to record or replace a diaper change."""
    timestamp: Optional[int] = Field(None, ge=0)


class Diaper(DiaperBase):
    """Full diaper record as held in the store."""
    id: Union[int, str]
    timestamp: int = Field(..., ge=0)
    baby_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}
