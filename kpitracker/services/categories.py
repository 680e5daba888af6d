from typing import Dict, Iterable, List, Optional
from kpitracker.schemas.report import AchievementResult, CategoryName, PerformanceCategory

# Ordered low to high; lower bounds are inclusive.
CATEGORIES: List[PerformanceCategory] = [
    PerformanceCategory(name="Critical", min_percent=0, max_percent=66),
    PerformanceCategory(name="Bad", min_percent=67, max_percent=83),
    PerformanceCategory(name="Target", min_percent=84, max_percent=119),
    PerformanceCategory(name="Good", min_percent=120, max_percent=None),
]


def classify(percent: Optional[int]) -> CategoryName:
    if percent is None:
        raise ValueError("classify() needs a percentage; report 'No Data' instead")
    if percent >= 120:
        return "Good"
    if percent >= 84:
        return "Target"
    if percent >= 67:
        return "Bad"
    return "Critical"


def category_counts(results: Iterable[AchievementResult]) -> Dict[str, int]:
    counts = {c.name: 0 for c in CATEGORIES}
    for result in results:
        counts[result.category] += 1
    return counts
