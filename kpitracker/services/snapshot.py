from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from kpitracker.models.member import TeamMember
from kpitracker.models.kpi import KPIDefinition
from kpitracker.models.target import DesignationTarget, UserTarget
from kpitracker.models.performance import PerformanceRecord
from kpitracker.schemas import kpi as kpi_schema
from kpitracker.schemas import member as member_schema
from kpitracker.schemas import performance as performance_schema
from kpitracker.schemas import target as target_schema
from kpitracker.schemas.snapshot import Snapshot


async def load_snapshot(db: AsyncSession, member_id: Optional[int] = None) -> Snapshot:
    """
    Read everything the engine needs in one pass.
    With member_id, user targets and records are limited to that member.
    """
    members = await db.execute(select(TeamMember).order_by(TeamMember.name))
    kpis = await db.execute(select(KPIDefinition).order_by(KPIDefinition.display_label))
    designation_targets = await db.execute(
        select(DesignationTarget).order_by(DesignationTarget.designation, DesignationTarget.kpi_key)
    )

    user_query = select(UserTarget).order_by(UserTarget.kpi_key)
    record_query = select(PerformanceRecord).order_by(PerformanceRecord.year, PerformanceRecord.month)
    if member_id is not None:
        user_query = user_query.where(UserTarget.member_id == member_id)
        record_query = record_query.where(PerformanceRecord.member_id == member_id)
    user_targets = await db.execute(user_query)
    records = await db.execute(record_query)

    return Snapshot(
        members=[member_schema.TeamMember.model_validate(m) for m in members.scalars()],
        kpis=[kpi_schema.KPIDefinition.model_validate(k) for k in kpis.scalars()],
        designation_targets=[
            target_schema.DesignationTarget.model_validate(t) for t in designation_targets.scalars()
        ],
        user_targets=[target_schema.UserTarget.model_validate(t) for t in user_targets.scalars()],
        records=[performance_schema.PerformanceRecord.model_validate(r) for r in records.scalars()],
    )
