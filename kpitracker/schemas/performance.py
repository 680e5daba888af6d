from calendar import month_name
from datetime import date
from pydantic import BaseModel, Field, field_validator
from typing import Dict, Optional
from kpitracker.core.exceptions import InvalidPeriodWindowError


def month_index(month: int, year: int) -> int:
    """Months since year 0, so calendar months compare as plain integers."""
    return year * 12 + (month - 1)


class PerformanceRecord(BaseModel):
    id: Optional[int] = None
    member_id: int
    month: int = Field(..., ge=1, le=12)
    year: int
    values: Dict[str, float] = Field(default_factory=dict)

    model_config = {"from_attributes": True}

    @field_validator("month", mode="before")
    @classmethod
    def _coerce_month(cls, v):
        # months were stored as zero-padded text ("08") in older exports
        if isinstance(v, str):
            return int(v.strip())
        return v

    @property
    def period_index(self) -> int:
        return month_index(self.month, self.year)

    def value(self, kpi_key: str) -> float:
        return self.values.get(kpi_key) or 0


class PerformanceRecordIn(BaseModel):
    member_id: int
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1900, le=2100)
    values: Dict[str, float] = Field(default_factory=dict)


class PeriodWindow(BaseModel):
    start_month: int
    start_year: int
    end_month: int
    end_year: int

    model_config = {"frozen": True}

    @field_validator("start_month", "end_month")
    @classmethod
    def _month_in_range(cls, v):
        if not 1 <= v <= 12:
            raise InvalidPeriodWindowError(f"Month must be between 1 and 12, got {v}")
        return v

    @property
    def start_index(self) -> int:
        return month_index(self.start_month, self.start_year)

    @property
    def end_index(self) -> int:
        return month_index(self.end_month, self.end_year)

    @property
    def month_count(self) -> int:
        return self.end_index - self.start_index + 1

    @property
    def label(self) -> str:
        return (
            f"{month_name[self.start_month]} {self.start_year} - "
            f"{month_name[self.end_month]} {self.end_year}"
        )

    def check(self) -> "PeriodWindow":
        if self.start_index > self.end_index:
            raise InvalidPeriodWindowError(
                f"Period ends before it starts: {self.label}"
            )
        return self

    def contains(self, record: PerformanceRecord) -> bool:
        return self.start_index <= record.period_index <= self.end_index

    @classmethod
    def default_for(cls, today: date) -> "PeriodWindow":
        """August of this year through September of next year."""
        return cls(start_month=8, start_year=today.year, end_month=9, end_year=today.year + 1)
