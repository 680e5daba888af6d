import logging
from dataclasses import dataclass, field
from typing import Dict, List
from kpitracker.schemas.performance import PerformanceRecord, PeriodWindow
from kpitracker.schemas.snapshot import Snapshot

logger = logging.getLogger(__name__)


@dataclass
class PeriodAggregate:
    per_kpi_actual: Dict[str, float] = field(default_factory=dict)
    record_count: int = 0
    # chronological, oldest first
    records: List[PerformanceRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.record_count == 0


def records_in_window(records: List[PerformanceRecord], window: PeriodWindow) -> List[PerformanceRecord]:
    selected = [r for r in records if window.contains(r)]
    return sorted(selected, key=lambda r: r.period_index)


def aggregate_period(snapshot: Snapshot, member_id: int, window: PeriodWindow) -> PeriodAggregate:
    """Sum each KPI over the member's records inside the inclusive window."""
    window.check()
    selected = records_in_window(snapshot.records_for(member_id), window)
    if not selected:
        logger.debug("No records for member %s in %s", member_id, window.label)
        return PeriodAggregate()

    totals: Dict[str, float] = {}
    for record in selected:
        for kpi_key in record.values:
            totals[kpi_key] = totals.get(kpi_key, 0) + record.value(kpi_key)

    return PeriodAggregate(per_kpi_actual=totals, record_count=len(selected), records=selected)
