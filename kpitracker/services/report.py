import logging
from typing import List, Optional
from kpitracker.core.exceptions import NoPerformanceDataError
from kpitracker.schemas.performance import PeriodWindow
from kpitracker.schemas.report import NO_DATA, MemberReport, TeamMemberSummary, TeamSummary
from kpitracker.schemas.snapshot import Snapshot
from kpitracker.services.achievement import overall_average, round_half_up, score_kpis
from kpitracker.services.aggregation import aggregate_period
from kpitracker.services.categories import category_counts, classify
from kpitracker.services.insights import generate_insights
from kpitracker.services.recommendations import (
    RecommendationStrategy, TrendRecommendationStrategy, generate_recommendations,
)
from kpitracker.services.targets import resolve_effective_targets

logger = logging.getLogger(__name__)


def build_member_report(
    snapshot: Snapshot,
    member_id: int,
    window: PeriodWindow,
    strategy: Optional[RecommendationStrategy] = None,
) -> MemberReport:
    member = snapshot.member(member_id)
    aggregate = aggregate_period(snapshot, member_id, window)
    if aggregate.is_empty:
        raise NoPerformanceDataError(member_id, window.label)

    targets = resolve_effective_targets(snapshot, member_id)
    results = score_kpis(snapshot, targets, aggregate)
    overall = overall_average(results)
    insights = generate_insights(results)

    if strategy is None:
        labels = {t.kpi_key: snapshot.display_label(t.kpi_key) for t in targets}
        strategy = TrendRecommendationStrategy(labels)
    latest, prior = aggregate.records[-1], aggregate.records[:-1]
    recommendations = generate_recommendations(latest, prior, targets, strategy=strategy)

    logger.info(
        "Report for %s (%s): %d months, overall=%s",
        member.name, window.label, aggregate.record_count, overall,
    )
    return MemberReport(
        member=member,
        window=window,
        period_label=window.label,
        months_in_window=window.month_count,
        record_count=aggregate.record_count,
        monthly_records=aggregate.records,
        total_performance={t.kpi_key: aggregate.per_kpi_actual.get(t.kpi_key, 0) for t in targets},
        targets=targets,
        results=results,
        overall_average_percent=overall,
        category=classify(overall) if overall is not None else NO_DATA,
        strengths=insights.strengths,
        improvements=insights.improvements,
        recommendations=recommendations,
    )


def build_team_summary(snapshot: Snapshot, window: PeriodWindow) -> TeamSummary:
    window.check()
    active = [m for m in snapshot.members if m.is_active]

    summaries: List[TeamMemberSummary] = []
    for member in active:
        aggregate = aggregate_period(snapshot, member.id, window)
        if aggregate.is_empty:
            continue
        results = score_kpis(snapshot, resolve_effective_targets(snapshot, member.id), aggregate)
        overall = overall_average(results)
        counts = category_counts(results)
        summaries.append(TeamMemberSummary(
            member_id=member.id,
            name=member.name,
            designation=member.designation,
            record_count=aggregate.record_count,
            overall_average_percent=overall,
            category=classify(overall) if overall is not None else NO_DATA,
            critical_kpis=counts["Critical"],
            good_kpis=counts["Good"],
        ))

    summaries.sort(key=lambda s: s.overall_average_percent or 0, reverse=True)
    if not summaries:
        return TeamSummary(
            window=window,
            total_members=len(active),
            members=[],
            top_performers=[],
            total_critical_kpis=0,
            total_good_kpis=0,
            average_team_percent=0,
        )

    scored = [s.overall_average_percent for s in summaries if s.overall_average_percent is not None]
    average = round_half_up(sum(scored) / len(scored)) if scored else 0
    return TeamSummary(
        window=window,
        total_members=len(summaries),
        members=summaries,
        top_performers=summaries[:3],
        total_critical_kpis=sum(s.critical_kpis for s in summaries),
        total_good_kpis=sum(s.good_kpis for s in summaries),
        average_team_percent=average,
    )
