"""Period aggregation over inclusive month windows."""

from datetime import date

import pytest

from kpitracker.core.exceptions import InvalidPeriodWindowError
from kpitracker.schemas.performance import PerformanceRecord, PeriodWindow
from kpitracker.services.aggregation import aggregate_period


class TestPeriodWindow:

    def test_month_count_across_years(self):
        window = PeriodWindow(start_month=11, start_year=2024, end_month=2, end_year=2025)
        assert window.month_count == 4

    def test_label(self):
        window = PeriodWindow(start_month=8, start_year=2025, end_month=9, end_year=2026)
        assert window.label == "August 2025 - September 2026"

    def test_default_report_window(self):
        window = PeriodWindow.default_for(date(2026, 10, 19))
        assert (window.start_month, window.start_year) == (8, 2026)
        assert (window.end_month, window.end_year) == (9, 2027)
        assert window.month_count == 14

    def test_end_before_start_is_rejected(self):
        window = PeriodWindow(start_month=5, start_year=2025, end_month=4, end_year=2025)
        with pytest.raises(InvalidPeriodWindowError):
            window.check()

    @pytest.mark.parametrize("bounds", [
        {"start_month": 13, "end_month": 9},
        {"start_month": 0, "end_month": 9},
        {"start_month": 8, "end_month": 13},
    ])
    def test_month_out_of_range_is_a_window_error(self, bounds):
        with pytest.raises(InvalidPeriodWindowError):
            PeriodWindow(start_year=2025, end_year=2026, **bounds)

    def test_single_month_window_is_valid(self):
        window = PeriodWindow(start_month=5, start_year=2025, end_month=5, end_year=2025)
        assert window.check() is window
        assert window.month_count == 1


class TestPerformanceRecord:

    def test_missing_kpi_reads_as_zero(self, make_record):
        record = make_record(1, 7, 2025, outreaches=120)
        assert record.value("outreaches") == 120
        assert record.value("live_links") == 0

    def test_zero_padded_month_text_is_coerced(self):
        record = PerformanceRecord.model_validate({"member_id": 1, "month": "08", "year": 2025})
        assert record.month == 8


class TestAggregatePeriod:

    def test_sums_per_kpi_inside_window(self, make_snapshot, make_record, q3_window):
        records = [
            make_record(1, 6, 2025, outreaches=999),
            make_record(1, 7, 2025, outreaches=100, live_links=5),
            make_record(1, 8, 2025, outreaches=110),
            make_record(1, 9, 2025, outreaches=120, live_links=7),
            make_record(1, 10, 2025, outreaches=999),
            make_record(2, 8, 2025, outreaches=50),
        ]
        aggregate = aggregate_period(make_snapshot(records=records), 1, q3_window)
        assert aggregate.per_kpi_actual == {"outreaches": 330, "live_links": 12}
        assert aggregate.record_count == 3
        assert not aggregate.is_empty

    def test_records_come_back_in_calendar_order(self, make_snapshot, make_record):
        window = PeriodWindow(start_month=11, start_year=2024, end_month=2, end_year=2025)
        records = [
            make_record(1, 2, 2025, outreaches=4),
            make_record(1, 11, 2024, outreaches=1),
            make_record(1, 1, 2025, outreaches=3),
            make_record(1, 12, 2024, outreaches=2),
        ]
        aggregate = aggregate_period(make_snapshot(records=records), 1, window)
        assert [r.value("outreaches") for r in aggregate.records] == [1, 2, 3, 4]

    def test_window_boundaries_are_inclusive(self, make_snapshot, make_record, cycle_window):
        records = [make_record(1, 8, 2025, outreaches=1), make_record(1, 8, 2026, outreaches=1)]
        aggregate = aggregate_period(make_snapshot(records=records), 1, cycle_window)
        assert aggregate.record_count == 2

    def test_no_records_gives_empty_aggregate(self, make_snapshot, make_record, q3_window):
        records = [make_record(1, 1, 2024, outreaches=100)]
        aggregate = aggregate_period(make_snapshot(records=records), 1, q3_window)
        assert aggregate.is_empty
        assert aggregate.per_kpi_actual == {}
        assert aggregate.record_count == 0

    def test_invalid_window_is_rejected_before_aggregating(self, make_snapshot):
        window = PeriodWindow(start_month=1, start_year=2026, end_month=12, end_year=2025)
        with pytest.raises(InvalidPeriodWindowError):
            aggregate_period(make_snapshot(), 1, window)
