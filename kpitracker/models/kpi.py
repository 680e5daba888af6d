from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from kpitracker.database import Base

class KPIDefinition(Base):
    __tablename__ = "kpi_definitions"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, nullable=False, unique=True, index=True)  # e.g. "outreaches"
    display_label = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    value_kind = Column(String, nullable=False, default="count")  # count, delivered
    unit = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
