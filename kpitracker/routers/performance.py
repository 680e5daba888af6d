import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from kpitracker.database import get_db
from kpitracker.core.exceptions import (
    InvalidPeriodWindowError, MemberNotFoundError, NoPerformanceDataError,
)
from kpitracker.models.member import TeamMember
from kpitracker.models.performance import PerformanceRecord
from kpitracker.schemas.performance import PeriodWindow, PerformanceRecord as PerformanceRecordOut, PerformanceRecordIn
from kpitracker.schemas.report import AchievementSummary, AggregateResponse, MemberReport, TeamSummary
from kpitracker.schemas.target import EffectiveTarget
from kpitracker.services.achievement import compute_achievements
from kpitracker.services.aggregation import aggregate_period
from kpitracker.services.categories import classify
from kpitracker.services.report import build_member_report, build_team_summary
from kpitracker.services.snapshot import load_snapshot
from kpitracker.services.targets import resolve_effective_target, resolve_effective_targets

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/performance", tags=["performance"])


def get_period_window(
    start_month: Optional[int] = Query(None, ge=1, le=12),
    start_year: Optional[int] = Query(None, ge=1900, le=2100),
    end_month: Optional[int] = Query(None, ge=1, le=12),
    end_year: Optional[int] = Query(None, ge=1900, le=2100),
) -> PeriodWindow:
    parts = [start_month, start_year, end_month, end_year]
    if all(p is None for p in parts):
        return PeriodWindow.default_for(date.today())
    if any(p is None for p in parts):
        raise HTTPException(400, "start_month, start_year, end_month and end_year go together")

    try:
        return PeriodWindow(
            start_month=start_month, start_year=start_year,
            end_month=end_month, end_year=end_year,
        ).check()
    except InvalidPeriodWindowError as e:
        raise HTTPException(400, str(e))


@router.get("/team/summary", response_model=TeamSummary)
async def get_team_summary(
    window: PeriodWindow = Depends(get_period_window),
    db: AsyncSession = Depends(get_db),
):
    snapshot = await load_snapshot(db)
    return build_team_summary(snapshot, window)


@router.get("/classify/{percent}")
async def classify_percent(percent: int):
    if percent < 0:
        raise HTTPException(400, "Percentage cannot be negative")
    return {"percent": percent, "category": classify(percent)}


@router.put("/records", response_model=PerformanceRecordOut)
async def upsert_record(
    record_in: PerformanceRecordIn,
    db: AsyncSession = Depends(get_db),
):
    member = await db.execute(select(TeamMember).where(TeamMember.id == record_in.member_id))
    if not member.scalar_one_or_none():
        raise HTTPException(404, "Team member not found")

    # One record per member per calendar month
    result = await db.execute(
        select(PerformanceRecord)
        .where(PerformanceRecord.member_id == record_in.member_id)
        .where(PerformanceRecord.month == record_in.month)
        .where(PerformanceRecord.year == record_in.year)
    )
    record = result.scalar_one_or_none()
    if record:
        record.values = dict(record_in.values)
    else:
        record = PerformanceRecord(
            member_id=record_in.member_id,
            month=record_in.month,
            year=record_in.year,
            values=dict(record_in.values),
        )
        db.add(record)
    await db.commit()
    await db.refresh(record)

    logger.info("Saved record for member %s (%s/%s)", record.member_id, record.month, record.year)
    return record


@router.get("/{member_id}/targets", response_model=List[EffectiveTarget])
async def get_effective_targets(
    member_id: int,
    db: AsyncSession = Depends(get_db),
):
    snapshot = await load_snapshot(db, member_id)
    try:
        return resolve_effective_targets(snapshot, member_id)
    except MemberNotFoundError as e:
        raise HTTPException(404, str(e))


@router.get("/{member_id}/targets/{kpi_key}", response_model=EffectiveTarget)
async def get_effective_target(
    member_id: int,
    kpi_key: str,
    db: AsyncSession = Depends(get_db),
):
    snapshot = await load_snapshot(db, member_id)
    try:
        return resolve_effective_target(snapshot, member_id, kpi_key)
    except MemberNotFoundError as e:
        raise HTTPException(404, str(e))


@router.get("/{member_id}/aggregate", response_model=AggregateResponse)
async def get_period_aggregate(
    member_id: int,
    window: PeriodWindow = Depends(get_period_window),
    db: AsyncSession = Depends(get_db),
):
    snapshot = await load_snapshot(db, member_id)
    try:
        snapshot.member(member_id)
    except MemberNotFoundError as e:
        raise HTTPException(404, str(e))

    aggregate = aggregate_period(snapshot, member_id, window)
    if aggregate.is_empty:
        raise HTTPException(404, f"No performance data for period {window.label}")
    return AggregateResponse(
        member_id=member_id,
        window=window,
        per_kpi_actual=aggregate.per_kpi_actual,
        record_count=aggregate.record_count,
    )


@router.get("/{member_id}/achievements", response_model=AchievementSummary)
async def get_achievements(
    member_id: int,
    window: PeriodWindow = Depends(get_period_window),
    db: AsyncSession = Depends(get_db),
):
    snapshot = await load_snapshot(db, member_id)
    try:
        return compute_achievements(snapshot, member_id, window)
    except MemberNotFoundError as e:
        raise HTTPException(404, str(e))
    except NoPerformanceDataError:
        raise HTTPException(404, f"No performance data for period {window.label}")


@router.get("/{member_id}/report", response_model=MemberReport)
async def get_member_report(
    member_id: int,
    window: PeriodWindow = Depends(get_period_window),
    db: AsyncSession = Depends(get_db),
):
    snapshot = await load_snapshot(db, member_id)
    try:
        return build_member_report(snapshot, member_id, window)
    except MemberNotFoundError as e:
        raise HTTPException(404, str(e))
    except NoPerformanceDataError:
        raise HTTPException(404, f"No performance data for period {window.label}")
