import logging
from typing import Dict, List, Optional, Protocol, Sequence
from kpitracker.config import settings
from kpitracker.schemas.performance import PerformanceRecord
from kpitracker.schemas.report import ActionItem
from kpitracker.schemas.target import EffectiveTarget
from kpitracker.services.achievement import achievement_percent, round_half_up
from kpitracker.services.categories import classify
from kpitracker.services.insights import format_number

logger = logging.getLogger(__name__)

FALLBACK_RECOMMENDATIONS = [
    "Continue current successful strategies",
    "Focus on maintaining consistency",
    "Set stretch goals for next period",
    "Share best practices with team members",
    "Explore opportunities for skill development",
]

# Change (in %) vs the previous month before a KPI counts as moving.
TREND_THRESHOLD = 5

SEVERITY_BY_CATEGORY = {
    "Critical": "critical",
    "Bad": "warning",
    "Target": "info",
    "Good": "success",
}
SEVERITY_ORDER = ["critical", "warning", "info", "success"]
TREND_ORDER = ["declining", "stable", "improving"]

ADVICE = {
    "critical": [
        "Schedule an immediate review of {label} and agree on a recovery plan",
        "Break the {label} target into weekly milestones",
        "Pair up with a senior team member on {label}",
    ],
    "warning": [
        "Adjust weekly priorities to close the gap on {label}",
        "Review which {label} activities convert best and do more of them",
    ],
    "info": [
        "Keep the current approach for {label} and watch for slippage",
        "Look for small process gains on {label}",
    ],
    "success": [
        "Document what works for {label} and share it with the team",
        "Set a stretch goal for {label}",
    ],
}


class RecommendationStrategy(Protocol):
    def __call__(
        self,
        latest_record: PerformanceRecord,
        prior_records: Sequence[PerformanceRecord],
        targets: Sequence[EffectiveTarget],
    ) -> List[ActionItem]:
        ...


def _trend(current: float, previous: float, change: Optional[int]) -> str:
    if change is None:
        if current > previous:
            return "improving"
        return "declining" if current < previous else "stable"
    if change > TREND_THRESHOLD:
        return "improving"
    if change < -TREND_THRESHOLD:
        return "declining"
    return "stable"


class TrendRecommendationStrategy:
    """
    Compares the latest month against the most recent earlier month, per KPI,
    measured against the monthly target. Worst severity comes first; within a
    severity, declining KPIs lead and lower achievement ranks higher.

    No earlier months means nothing to compare, so no items.
    """

    def __init__(self, labels: Optional[Dict[str, str]] = None):
        self.labels = labels or {}

    def __call__(self, latest_record, prior_records, targets):
        if not prior_records:
            return []
        previous_record = max(prior_records, key=lambda r: r.period_index)

        items = []
        for target in targets:
            if target.monthly_target <= 0:
                continue
            label = self.labels.get(target.kpi_key, target.kpi_key)
            current = latest_record.value(target.kpi_key)
            previous = previous_record.value(target.kpi_key)
            percent = achievement_percent(current, target.monthly_target)
            change = round_half_up((current - previous) / previous * 100) if previous > 0 else None
            trend = _trend(current, previous, change)
            severity = SEVERITY_BY_CATEGORY[classify(percent)]

            trend_text = f"Trend: {trend}" if change is None else f"Trend: {trend} ({change:+d}%)"
            description = " | ".join([
                f"Current: {format_number(current)}",
                f"Previous: {format_number(previous)}",
                f"Target: {format_number(target.monthly_target)}",
                trend_text,
            ])

            advice = [a.format(label=label) for a in ADVICE[severity]]
            if trend == "declining" and severity != "critical":
                advice.insert(0, f"Investigate the drop in {label} since last month")

            items.append(ActionItem(
                kpi_key=target.kpi_key,
                display_label=label,
                severity=severity,
                trend=trend,
                achievement_percent=percent,
                change_percent=change,
                description=description,
                recommendations=advice,
            ))

        items.sort(key=lambda i: (
            SEVERITY_ORDER.index(i.severity),
            TREND_ORDER.index(i.trend),
            i.achievement_percent,
        ))
        return items


def generate_recommendations(
    latest_record: Optional[PerformanceRecord],
    prior_records: Sequence[PerformanceRecord],
    targets: Sequence[EffectiveTarget],
    strategy: Optional[RecommendationStrategy] = None,
    limit: Optional[int] = None,
) -> List[str]:
    """Top recommendation of each of the first `limit` action items, or the fallback list."""
    if limit is None:
        limit = settings.RECOMMENDATION_LIMIT
    if strategy is None:
        strategy = TrendRecommendationStrategy()

    recommendations: List[str] = []
    if latest_record is not None:
        items = strategy(latest_record, prior_records, targets)
        recommendations = [i.recommendations[0] for i in items[:limit] if i.recommendations]

    if not recommendations:
        logger.debug("No trend-based recommendations, using fallback list")
        return list(FALLBACK_RECOMMENDATIONS)
    return recommendations
