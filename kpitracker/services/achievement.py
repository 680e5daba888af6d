import math
import logging
from typing import List, Optional
from kpitracker.core.exceptions import NoPerformanceDataError
from kpitracker.schemas.performance import PeriodWindow
from kpitracker.schemas.report import AchievementResult, AchievementSummary
from kpitracker.schemas.snapshot import Snapshot
from kpitracker.schemas.target import EffectiveTarget
from kpitracker.services.aggregation import PeriodAggregate, aggregate_period
from kpitracker.services.categories import classify
from kpitracker.services.targets import resolve_effective_targets

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round half away from zero (2.5 -> 3), unlike Python's banker's round()."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def period_target(target: EffectiveTarget, months_tracked: int) -> float:
    """
    Annual target is used as-is, NOT pro-rated to the window.
    Only the monthly fallback scales with the months tracked.
    Returns 0 when the KPI cannot be scored.
    """
    if target.annual_target > 0:
        return target.annual_target
    if target.monthly_target > 0:
        return target.monthly_target * months_tracked
    return 0


def achievement_percent(actual: float, target: float) -> int:
    return round_half_up(actual / target * 100)


def score_kpis(
    snapshot: Snapshot, targets: List[EffectiveTarget], aggregate: PeriodAggregate
) -> List[AchievementResult]:
    results = []
    for target in targets:
        goal = period_target(target, aggregate.record_count)
        if goal <= 0:
            continue
        actual = aggregate.per_kpi_actual.get(target.kpi_key, 0)
        percent = achievement_percent(actual, goal)
        results.append(AchievementResult(
            kpi_key=target.kpi_key,
            display_label=snapshot.display_label(target.kpi_key),
            actual=actual,
            period_target=goal,
            achievement_percent=percent,
            category=classify(percent),
        ))
    return results


def overall_average(results: List[AchievementResult]) -> Optional[int]:
    if not results:
        return None
    total = sum(r.achievement_percent for r in results)
    return round_half_up(total / len(results))


def compute_achievements(snapshot: Snapshot, member_id: int, window: PeriodWindow) -> AchievementSummary:
    snapshot.member(member_id)
    aggregate = aggregate_period(snapshot, member_id, window)
    if aggregate.is_empty:
        raise NoPerformanceDataError(member_id, window.label)

    targets = resolve_effective_targets(snapshot, member_id)
    results = score_kpis(snapshot, targets, aggregate)
    overall = overall_average(results)
    logger.debug(
        "Member %s %s: %d KPIs scored, overall=%s",
        member_id, window.label, len(results), overall,
    )
    return AchievementSummary(
        member_id=member_id,
        window=window,
        results=results,
        overall_average_percent=overall,
        record_count=aggregate.record_count,
    )
