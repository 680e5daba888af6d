from kpitracker.schemas.performance import PerformanceRecord
from kpitracker.schemas.report import ActionItem
from kpitracker.schemas.target import EffectiveTarget
from kpitracker.services.recommendations import (
    FALLBACK_RECOMMENDATIONS,
    TrendRecommendationStrategy,
    generate_recommendations,
)

LABELS = {"outreaches": "Monthly Outreaches", "live_links": "Live Links"}


def _record(month, **values):
    return PerformanceRecord(member_id=1, month=month, year=2025, values=values)


def _target(kpi_key, monthly):
    return EffectiveTarget(kpi_key=kpi_key, monthly_target=monthly, annual_target=monthly * 13, source="designation")


TARGETS = [_target("outreaches", 100), _target("live_links", 10)]


class TestTrendStrategy:

    def test_no_history_means_no_items(self):
        strategy = TrendRecommendationStrategy(LABELS)
        assert strategy(_record(8, outreaches=50), [], TARGETS) == []

    def test_items_ranked_by_severity(self):
        strategy = TrendRecommendationStrategy(LABELS)
        items = strategy(
            _record(8, outreaches=50, live_links=15),
            [_record(7, outreaches=100, live_links=10)],
            TARGETS,
        )
        assert [i.kpi_key for i in items] == ["outreaches", "live_links"]

        critical, success = items
        assert critical.severity == "critical"
        assert critical.trend == "declining"
        assert critical.change_percent == -50
        assert critical.description == "Current: 50 | Previous: 100 | Target: 100 | Trend: declining (-50%)"
        assert critical.recommendations[0] == (
            "Schedule an immediate review of Monthly Outreaches and agree on a recovery plan"
        )

        assert success.severity == "success"
        assert success.trend == "improving"
        assert success.achievement_percent == 150

    def test_compares_against_most_recent_prior_month(self):
        strategy = TrendRecommendationStrategy(LABELS)
        [item] = strategy(
            _record(9, outreaches=90),
            [_record(8, outreaches=88), _record(6, outreaches=10)],
            [_target("outreaches", 100)],
        )
        assert item.trend == "stable"
        assert item.change_percent == 2

    def test_declining_but_not_critical_leads_with_investigation(self):
        strategy = TrendRecommendationStrategy(LABELS)
        [item] = strategy(_record(8, outreaches=75), [_record(7, outreaches=95)], [_target("outreaches", 100)])
        assert item.severity == "warning"
        assert item.recommendations[0] == "Investigate the drop in Monthly Outreaches since last month"

    def test_previous_zero_has_no_change_percent(self):
        strategy = TrendRecommendationStrategy()
        [item] = strategy(_record(8, live_links=4), [_record(7)], [_target("live_links", 10)])
        assert item.change_percent is None
        assert item.trend == "improving"
        assert item.description.endswith("Trend: improving")
        assert item.display_label == "live_links"

    def test_untracked_targets_are_skipped(self):
        strategy = TrendRecommendationStrategy()
        items = strategy(_record(8, outreaches=5), [_record(7, outreaches=5)], [EffectiveTarget(kpi_key="outreaches")])
        assert items == []


class TestGenerateRecommendations:

    def test_fallback_without_history(self):
        assert generate_recommendations(_record(8, outreaches=50), [], TARGETS) == FALLBACK_RECOMMENDATIONS

    def test_fallback_without_latest_record(self):
        assert generate_recommendations(None, [], TARGETS) == FALLBACK_RECOMMENDATIONS

    def test_takes_top_recommendation_of_each_item(self):
        recs = generate_recommendations(
            _record(8, outreaches=50, live_links=15),
            [_record(7, outreaches=100, live_links=10)],
            TARGETS,
            strategy=TrendRecommendationStrategy(LABELS),
        )
        assert recs == [
            "Schedule an immediate review of Monthly Outreaches and agree on a recovery plan",
            "Document what works for Live Links and share it with the team",
        ]

    def test_capped_at_five(self):
        targets = [_target(f"kpi_{i}", 10) for i in range(7)]
        latest = _record(8, **{f"kpi_{i}": 5 for i in range(7)})
        prior = [_record(7, **{f"kpi_{i}": 10 for i in range(7)})]
        assert len(generate_recommendations(latest, prior, targets)) == 5

    def test_custom_limit(self):
        targets = [_target(f"kpi_{i}", 10) for i in range(4)]
        latest = _record(8, **{f"kpi_{i}": 5 for i in range(4)})
        prior = [_record(7, **{f"kpi_{i}": 10 for i in range(4)})]
        assert len(generate_recommendations(latest, prior, targets, limit=2)) == 2

    def test_pluggable_strategy(self):
        def always_one(latest_record, prior_records, targets):
            return [ActionItem(
                kpi_key="outreaches", display_label="Monthly Outreaches", severity="info",
                trend="stable", achievement_percent=95, change_percent=0,
                description="", recommendations=["Call three new prospects a day"],
            )]

        recs = generate_recommendations(_record(8), [], TARGETS, strategy=always_one)
        assert recs == ["Call three new prospects a day"]

    def test_strategy_returning_nothing_falls_back(self):
        recs = generate_recommendations(_record(8), [_record(7)], TARGETS, strategy=lambda *args: [])
        assert recs == FALLBACK_RECOMMENDATIONS
