"""Pydantic models for growth measurements (weight / height)."""

import math
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator

from babydaily.engine.clock import date_to_epoch


class GrowthBase(BaseModel):
    weight: str = Field(..., description="Kilograms, two decimals")
    height: str = Field(..., description="Centimeters, two decimals")
    date: str = Field(..., description="YYYY-MM-DD")

    @field_validator("weight", "height", mode="before")
    @classmethod
    def _two_decimals(cls, value: Any) -> str:
        if isinstance(value, bool):
            raise ValueError("must be a number")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError("must be a number") from None
        if not math.isfinite(number):
            raise ValueError("must be a finite number")
        if number < 0:
            raise ValueError("must not be negative")
        return f"{number:.2f}"

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        date_to_epoch(value)
        return value

    @computed_field
    @property
    def timestamp(self) -> int:
        """Local midnight of ``date`` in epoch milliseconds."""
        return date_to_epoch(self.date)


class GrowthCreate(GrowthBase):
    """Payload to record or replace a growth measurement."""
    pass


class Growth(GrowthBase):
    """Full growth record as held in the store."""
    id: Union[int, str]
    baby_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}
