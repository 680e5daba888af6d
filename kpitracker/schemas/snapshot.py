from pydantic import BaseModel, Field
from typing import List, Optional
from kpitracker.core.exceptions import MemberNotFoundError
from kpitracker.schemas.kpi import KPIDefinition
from kpitracker.schemas.member import TeamMember
from kpitracker.schemas.performance import PerformanceRecord
from kpitracker.schemas.target import DesignationTarget, UserTarget


class Snapshot(BaseModel):
    """Everything the engine reads, captured once per request."""

    members: List[TeamMember] = Field(default_factory=list)
    kpis: List[KPIDefinition] = Field(default_factory=list)
    designation_targets: List[DesignationTarget] = Field(default_factory=list)
    user_targets: List[UserTarget] = Field(default_factory=list)
    records: List[PerformanceRecord] = Field(default_factory=list)

    def member(self, member_id: int) -> TeamMember:
        for m in self.members:
            if m.id == member_id:
                return m
        raise MemberNotFoundError(member_id)

    def kpi(self, kpi_key: str) -> Optional[KPIDefinition]:
        for k in self.kpis:
            if k.key == kpi_key:
                return k
        return None

    def display_label(self, kpi_key: str) -> str:
        kpi = self.kpi(kpi_key)
        return kpi.display_label if kpi else kpi_key

    def records_for(self, member_id: int) -> List[PerformanceRecord]:
        return [r for r in self.records if r.member_id == member_id]
