# kpitracker/models/performance.py
from sqlalchemy import Column, Integer, JSON, DateTime, ForeignKey, UniqueConstraint, func
from kpitracker.database import Base

class PerformanceRecord(Base):
    __tablename__ = "performance_records"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)

    # kpi key -> actual for the month
    values = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("member_id", "month", "year", name="uq_member_month_year"),
    )
