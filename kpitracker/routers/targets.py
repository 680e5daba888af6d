import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from kpitracker.database import get_db
from kpitracker.core.exceptions import KPINotFoundError
from kpitracker.models.kpi import KPIDefinition
from kpitracker.models.member import TeamMember
from kpitracker.models.target import DesignationTarget, UserTarget
from kpitracker.schemas.kpi import KPIDefinition as KPIDefinitionSchema
from kpitracker.schemas.target import DesignationTargetIn, TargetResponse, UserTargetIn
from kpitracker.services.targets import normalize_target_values

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/targets", tags=["targets"])


async def _get_kpi(db: AsyncSession, kpi_key: str) -> KPIDefinitionSchema:
    result = await db.execute(select(KPIDefinition).where(KPIDefinition.key == kpi_key))
    kpi = result.scalar_one_or_none()
    if not kpi:
        raise KPINotFoundError(kpi_key)
    return KPIDefinitionSchema.model_validate(kpi)


@router.put("/designation", response_model=TargetResponse)
async def upsert_designation_target(
    target_in: DesignationTargetIn,
    db: AsyncSession = Depends(get_db),
):
    try:
        kpi = await _get_kpi(db, target_in.kpi_key)
    except KPINotFoundError as e:
        raise HTTPException(404, str(e))
    monthly, annual = normalize_target_values(kpi, target_in.monthly_target, target_in.annual_target)

    result = await db.execute(
        select(DesignationTarget)
        .where(DesignationTarget.designation == target_in.designation)
        .where(DesignationTarget.kpi_key == target_in.kpi_key)
    )
    target = result.scalar_one_or_none()
    if target:
        target.monthly_target = monthly
        target.annual_target = annual
    else:
        target = DesignationTarget(
            designation=target_in.designation,
            kpi_key=target_in.kpi_key,
            monthly_target=monthly,
            annual_target=annual,
        )
        db.add(target)
    await db.commit()
    await db.refresh(target)

    logger.info("Designation target %s/%s = %s/%s", target.designation, target.kpi_key, monthly, annual)
    return TargetResponse(
        id=target.id,
        kpi_key=target.kpi_key,
        monthly_target=target.monthly_target,
        annual_target=target.annual_target,
        source="designation",
    )


@router.put("/user", response_model=TargetResponse)
async def upsert_user_target(
    target_in: UserTargetIn,
    db: AsyncSession = Depends(get_db),
):
    member = await db.execute(select(TeamMember).where(TeamMember.id == target_in.member_id))
    if not member.scalar_one_or_none():
        raise HTTPException(404, "Team member not found")

    try:
        kpi = await _get_kpi(db, target_in.kpi_key)
    except KPINotFoundError as e:
        raise HTTPException(404, str(e))
    monthly, annual = normalize_target_values(kpi, target_in.monthly_target, target_in.annual_target)

    result = await db.execute(
        select(UserTarget)
        .where(UserTarget.member_id == target_in.member_id)
        .where(UserTarget.kpi_key == target_in.kpi_key)
    )
    target = result.scalar_one_or_none()
    if target:
        target.monthly_target = monthly
        target.annual_target = annual
        target.is_active = target_in.is_active
    else:
        target = UserTarget(
            member_id=target_in.member_id,
            kpi_key=target_in.kpi_key,
            monthly_target=monthly,
            annual_target=annual,
            is_active=target_in.is_active,
        )
        db.add(target)
    await db.commit()
    await db.refresh(target)

    logger.info("User target %s/%s = %s/%s", target.member_id, target.kpi_key, monthly, annual)
    return TargetResponse(
        id=target.id,
        kpi_key=target.kpi_key,
        monthly_target=target.monthly_target,
        annual_target=target.annual_target,
        source="user",
    )
