# kpitracker/core/exceptions.py


class KPITrackerError(Exception):
    """Base class for errors raised by the KPI engine."""


class InvalidPeriodWindowError(KPITrackerError):
    """
    Window ends before it starts, or a month is outside 1-12.
    Not a ValueError, so pydantic lets it through unwrapped.
    """


class NoPerformanceDataError(KPITrackerError):
    """No performance records fall inside the requested window."""

    def __init__(self, member_id: int, label: str):
        self.member_id = member_id
        self.label = label
        super().__init__(f"No performance data for member {member_id} in {label}")


class MemberNotFoundError(KPITrackerError):
    def __init__(self, member_id: int):
        self.member_id = member_id
        super().__init__(f"Team member {member_id} not found")


class KPINotFoundError(KPITrackerError):
    def __init__(self, kpi_key: str):
        self.kpi_key = kpi_key
        super().__init__(f"KPI '{kpi_key}' not found")
