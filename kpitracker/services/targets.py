import logging
from typing import List, Optional, Tuple
from kpitracker.config import settings
from kpitracker.schemas.kpi import KPIDefinition
from kpitracker.schemas.snapshot import Snapshot
from kpitracker.schemas.target import DesignationTarget, EffectiveTarget, UserTarget

logger = logging.getLogger(__name__)


def _eligible_user_targets(snapshot: Snapshot, member_id: int) -> List[UserTarget]:
    return [
        t for t in snapshot.user_targets
        if t.is_active and t.member_id == member_id and t.monthly_target > 0
    ]


def _eligible_designation_targets(snapshot: Snapshot, designation: str) -> List[DesignationTarget]:
    return [
        t for t in snapshot.designation_targets
        if t.designation == designation and t.monthly_target > 0
    ]


def resolve_effective_target(snapshot: Snapshot, member_id: int, kpi_key: str) -> EffectiveTarget:
    """
    User override first, then the member's designation default.
    A stored target of 0 counts as missing, never as a real zero target.
    KPIs retired in the registry resolve to "none"; unknown keys resolve normally.
    """
    member = snapshot.member(member_id)

    kpi = snapshot.kpi(kpi_key)
    if kpi is not None and not kpi.is_active:
        logger.debug("KPI %s is retired, not tracked for member %s", kpi_key, member_id)
        return EffectiveTarget(kpi_key=kpi_key)

    for target in _eligible_user_targets(snapshot, member_id):
        if target.kpi_key == kpi_key:
            return EffectiveTarget(
                kpi_key=kpi_key,
                monthly_target=target.monthly_target,
                annual_target=target.annual_target,
                source="user",
            )

    for target in _eligible_designation_targets(snapshot, member.designation):
        if target.kpi_key == kpi_key:
            return EffectiveTarget(
                kpi_key=kpi_key,
                monthly_target=target.monthly_target,
                annual_target=target.annual_target,
                source="designation",
            )

    logger.debug("No target for member %s / %s", member_id, kpi_key)
    return EffectiveTarget(kpi_key=kpi_key)


def candidate_kpi_keys(snapshot: Snapshot, member_id: int) -> List[str]:
    """KPI keys that could be tracked for the member, user overrides first."""
    member = snapshot.member(member_id)
    keys: List[str] = []
    for target in _eligible_user_targets(snapshot, member_id):
        if target.kpi_key not in keys:
            keys.append(target.kpi_key)
    for target in _eligible_designation_targets(snapshot, member.designation):
        if target.kpi_key not in keys:
            keys.append(target.kpi_key)
    return keys


def resolve_effective_targets(snapshot: Snapshot, member_id: int) -> List[EffectiveTarget]:
    targets = [
        resolve_effective_target(snapshot, member_id, key)
        for key in candidate_kpi_keys(snapshot, member_id)
    ]
    return [t for t in targets if t.is_tracked]


def normalize_target_values(
    kpi: Optional[KPIDefinition], monthly_target: int, annual_target: Optional[int]
) -> Tuple[int, int]:
    """
    Values to persist when a target is defined:
      - delivered KPIs are pinned to 1 / 13
      - a missing annual target becomes monthly x ANNUAL_CYCLE_MONTHS
    """
    if kpi is not None and kpi.is_delivered:
        return settings.DELIVERED_MONTHLY_TARGET, settings.DELIVERED_ANNUAL_TARGET
    if annual_target is None:
        annual_target = monthly_target * settings.ANNUAL_CYCLE_MONTHS
    return monthly_target, annual_target
