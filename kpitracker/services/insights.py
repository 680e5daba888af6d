from typing import Iterable
from kpitracker.schemas.report import AchievementResult, Insights

DEFAULT_STRENGTHS = [
    "Consistent performance across all KPIs",
    "Reliable team member with steady contributions",
]

DEFAULT_IMPROVEMENTS = [
    "Continue maintaining current performance levels",
    "Focus on consistency and quality",
]


def format_number(value: float) -> str:
    """Thousands separators, at most 3 decimals: 7845.0 -> '7,845'."""
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def _detail(result: AchievementResult) -> str:
    return (
        f"{result.achievement_percent}% of target "
        f"({format_number(result.actual)}/{format_number(result.period_target)})"
    )


def generate_insights(results: Iterable[AchievementResult]) -> Insights:
    strengths, improvements = [], []

    for result in results:
        percent = result.achievement_percent
        if percent >= 120:
            strengths.append(f"Exceptional {result.display_label}: {_detail(result)}")
        elif percent >= 100:
            strengths.append(f"Strong {result.display_label}: {_detail(result)}")
        elif percent < 84:
            improvements.append(f"{result.display_label} needs improvement: {_detail(result)}")
        # 84-99: on target, nothing to say

    return Insights(
        strengths=strengths or list(DEFAULT_STRENGTHS),
        improvements=improvements or list(DEFAULT_IMPROVEMENTS),
    )
