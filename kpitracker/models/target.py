from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint, func
from kpitracker.database import Base

class DesignationTarget(Base):
    __tablename__ = "designation_targets"

    id = Column(Integer, primary_key=True, index=True)
    designation = Column(String, nullable=False, index=True)
    kpi_key = Column(String, nullable=False)
    monthly_target = Column(Integer, nullable=False, default=0)
    annual_target = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("designation", "kpi_key", name="uq_designation_kpi"),
    )

class UserTarget(Base):
    __tablename__ = "user_targets"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, index=True)
    kpi_key = Column(String, nullable=False)
    monthly_target = Column(Integer, nullable=False, default=0)
    annual_target = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("member_id", "kpi_key", name="uq_member_kpi"),
    )
