from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import ValidationError

from dominion.models import DailyRanking
from dominion.schedule import CycleResult
from dominion.schemas import CycleResultRead, RankingRead, SchedulerStatus, SchedulerUpdate

STARTED = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def sample_ranking_data() -> dict[str, Any]:
    return {
        "round_id": 1,
        "dominion_id": 7,
        "dominion_name": "Ardenne",
        "race_name": "Human",
        "realm_number": 2,
        "realm_name": "The Commonwealth",
        "land": 480,
        "land_rank": 3,
        "land_rank_change": 2,
        "networth": 21000,
        "networth_rank": None,
        "networth_rank_change": None,
        "created_at": STARTED,
        "updated_at": STARTED,
    }


def test_ranking_read_from_model(sample_ranking_data):
    ranking = RankingRead.model_validate(DailyRanking(**sample_ranking_data))
    assert ranking.land_rank == 3
    assert ranking.land_rank_change == 2
    assert ranking.networth_rank is None
    json_data = ranking.model_dump()
    assert "round_id" not in json_data
    assert "created_at" not in json_data


def test_ranking_read_rejects_rank_zero(sample_ranking_data):
    sample_ranking_data["land_rank"] = 0
    with pytest.raises(ValidationError):
        RankingRead(**sample_ranking_data)


def test_cycle_result_read():
    result = CycleResult("daily", [1, 2], 40, STARTED, 1.5)
    read = CycleResultRead.model_validate(result)
    assert read.kind == "daily"
    assert read.rounds == [1, 2]
    assert read.dominions == 40


def test_scheduler_status_without_result():
    status = SchedulerStatus(
        running=False, interval_seconds=3600.0, daily_tick_hours=24, hours_until_daily=24
    )
    assert status.last_result is None


def test_scheduler_update_requires_flag():
    assert SchedulerUpdate(enabled=True).enabled is True
    with pytest.raises(ValidationError):
        SchedulerUpdate()
