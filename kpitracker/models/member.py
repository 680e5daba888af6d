from sqlalchemy import Column, Integer, String, DateTime, func
from kpitracker.database import Base

class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    designation = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, default="active")  # active, inactive
    created_at = Column(DateTime(timezone=True), server_default=func.now())
