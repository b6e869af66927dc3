"""HTTP routes for the Dominion API."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from dominion.api.runtime import ApiState
from dominion.database import check_database_health
from dominion.models import DailyRanking, Round, utc_now
from dominion.schedule import CycleResult
from dominion.schemas import (
    CycleResultRead,
    RankingRead,
    RoundRead,
    SchedulerStatus,
    SchedulerUpdate,
)

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


@router.get("/health")
def health(state: ApiStateDep) -> dict[str, str | bool]:
    return {"status": "ok", "database": check_database_health(state.engine)}


@router.get("/rounds", response_model=list[RoundRead])
def list_rounds(state: ApiStateDep) -> list[RoundRead]:
    now = utc_now()
    with state.session_factory() as session:
        rounds = session.execute(select(Round).order_by(Round.number)).scalars().all()
        return [
            RoundRead(
                id=round_.id,
                number=round_.number,
                name=round_.name,
                start_date=round_.start_date,
                end_date=round_.end_date,
                is_active=round_.is_active(now),
            )
            for round_ in rounds
        ]


@router.get("/rounds/{round_id}/rankings", response_model=list[RankingRead])
def get_rankings(
    round_id: int,
    state: ApiStateDep,
    metric: Annotated[Literal["land", "networth"], Query()] = "land",
) -> list[RankingRead]:
    with state.session_factory() as session:
        if session.get(Round, round_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="round not found")

        rank = getattr(DailyRanking, f"{metric}_rank")
        rankings = (
            session.execute(
                select(DailyRanking)
                .where(DailyRanking.round_id == round_id)
                .order_by(rank.is_(None), rank.asc(), DailyRanking.id.asc())
            )
            .scalars()
            .all()
        )
        return [RankingRead.model_validate(ranking) for ranking in rankings]


async def _run(cycle: Callable[[], Awaitable[CycleResult]]) -> CycleResultRead:
    try:
        result = await cycle()
    except (SQLAlchemyError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="tick aborted and rolled back",
        ) from exc
    return CycleResultRead.model_validate(result)


@router.post("/ticks/hourly", response_model=CycleResultRead)
async def tick_hourly(state: ApiStateDep) -> CycleResultRead:
    return await _run(state.scheduler.run_hourly_now)


@router.post("/ticks/daily", response_model=CycleResultRead)
async def tick_daily(state: ApiStateDep) -> CycleResultRead:
    return await _run(state.scheduler.run_daily_now)


def _scheduler_status(state: ApiState) -> SchedulerStatus:
    scheduler = state.scheduler
    last = scheduler.last_result
    return SchedulerStatus(
        running=scheduler.running,
        interval_seconds=scheduler.interval_seconds,
        daily_tick_hours=scheduler.daily_tick_hours,
        hours_until_daily=scheduler.hours_until_daily,
        last_result=CycleResultRead.model_validate(last) if last else None,
    )


@router.get("/scheduler", response_model=SchedulerStatus)
def get_scheduler(state: ApiStateDep) -> SchedulerStatus:
    return _scheduler_status(state)


@router.put("/scheduler", response_model=SchedulerStatus)
async def update_scheduler(payload: SchedulerUpdate, state: ApiStateDep) -> SchedulerStatus:
    if payload.enabled:
        state.scheduler.start()
    else:
        await state.scheduler.stop()
    return _scheduler_status(state)
