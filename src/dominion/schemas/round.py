from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RoundRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    number: int
    name: str
    start_date: datetime
    end_date: datetime
    is_active: bool = Field(..., description="Whether the round is currently being ticked")
