from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RankingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    dominion_id: int = Field(..., description="Ranked dominion")
    dominion_name: str
    race_name: str
    realm_number: int
    realm_name: str
    land: int = Field(..., ge=0, description="Total land at the last daily tick")
    land_rank: int | None = Field(None, ge=1)
    land_rank_change: int | None = Field(None, description="Previous rank minus current rank")
    networth: int = Field(..., ge=0)
    networth_rank: int | None = Field(None, ge=1)
    networth_rank_change: int | None = None
    updated_at: datetime
