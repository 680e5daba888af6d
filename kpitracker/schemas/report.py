from pydantic import BaseModel
from typing import Dict, List, Literal, Optional
from .member import TeamMember
from .performance import PerformanceRecord, PeriodWindow
from .target import EffectiveTarget

CategoryName = Literal["Critical", "Bad", "Target", "Good"]
NO_DATA = "No Data"

class PerformanceCategory(BaseModel):
    name: CategoryName
    min_percent: int
    max_percent: Optional[int]  # None = open-ended

class AggregateResponse(BaseModel):
    member_id: int
    window: PeriodWindow
    per_kpi_actual: Dict[str, float]
    record_count: int

class AchievementResult(BaseModel):
    kpi_key: str
    display_label: str
    actual: float
    period_target: float
    achievement_percent: int
    category: CategoryName

class AchievementSummary(BaseModel):
    member_id: int
    window: PeriodWindow
    results: List[AchievementResult]
    overall_average_percent: Optional[int]  # None when no KPI could be scored
    record_count: int

class Insights(BaseModel):
    strengths: List[str]
    improvements: List[str]

class ActionItem(BaseModel):
    kpi_key: str
    display_label: str
    severity: Literal["critical", "warning", "info", "success"]
    trend: Literal["improving", "declining", "stable"]
    achievement_percent: int
    change_percent: Optional[int]
    description: str
    recommendations: List[str]

class MemberReport(BaseModel):
    member: TeamMember
    window: PeriodWindow
    period_label: str
    months_in_window: int
    record_count: int
    monthly_records: List[PerformanceRecord]
    total_performance: Dict[str, float]
    targets: List[EffectiveTarget]
    results: List[AchievementResult]
    overall_average_percent: Optional[int]
    category: str  # a CategoryName or "No Data"
    strengths: List[str]
    improvements: List[str]
    recommendations: List[str]

class TeamMemberSummary(BaseModel):
    member_id: int
    name: str
    designation: str
    record_count: int
    overall_average_percent: Optional[int]
    category: str
    critical_kpis: int
    good_kpis: int

class TeamSummary(BaseModel):
    window: PeriodWindow
    total_members: int
    members: List[TeamMemberSummary]
    top_performers: List[TeamMemberSummary]
    total_critical_kpis: int
    total_good_kpis: int
    average_team_percent: int
