from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CycleResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: Literal["hourly", "daily"]
    rounds: list[int] = Field(..., description="Active rounds processed by the cycle")
    dominions: int = Field(..., ge=0)
    started_at: datetime
    duration_seconds: float = Field(..., ge=0.0)


class SchedulerStatus(BaseModel):
    running: bool
    interval_seconds: float
    daily_tick_hours: int
    hours_until_daily: int
    last_result: CycleResultRead | None = None


class SchedulerUpdate(BaseModel):
    enabled: bool
