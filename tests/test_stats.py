"""Tests for dashboard counters"""

from dnsboard.client import StatsRaw
from dnsboard.views.stats import STATS_LABELS, Stats, derive_stats


class TestDeriveStats:
    """Tests for derive_stats"""

    def test_pending_snapshot(self):
        assert derive_stats(None) is None

    def test_totals_and_percentages(self, sample_stats):
        """Test the worked example: 10 requests, 3 blocked, 7 cached, 2 failed"""
        stats = derive_stats(sample_stats)

        assert stats == Stats(
            total_requests=10,
            blocked_requests=3,
            cached_queries_percentage="70.00%",
            uptime_percentage="80.00%",
        )

    def test_no_requests(self):
        """Test an idle server shows placeholders instead of dividing by zero"""
        stats = derive_stats(StatsRaw(failed_requests_count=0, per_source_stats={}))

        assert stats.total_requests == 0
        assert stats.blocked_requests == 0
        assert stats.uptime_percentage == "--"
        assert stats.cached_queries_percentage == "0%"

    def test_no_cache_hits(self):
        """Test a missing cache counter shows 0%"""
        stats = derive_stats(StatsRaw(per_source_stats={"4": 5}))

        assert stats.cached_queries_percentage == "0%"
        assert stats.uptime_percentage == "100.00%"

    def test_no_blocked_counter(self):
        stats = derive_stats(StatsRaw(per_source_stats={"2": 1, "4": 2}))

        assert stats.blocked_requests == 0
        assert stats.cached_queries_percentage == "33.33%"

    def test_from_wire(self):
        """Test stats parsed from the API body derive the same counters"""
        raw = StatsRaw.from_dict({"failed_requests_count": 1, "per_source_stats": {"0": 1, "4": 3}})

        stats = derive_stats(raw)

        assert stats.total_requests == 4
        assert stats.uptime_percentage == "75.00%"


class TestStatsLabels:
    """Tests for counter labels"""

    def test_display_order(self):
        assert list(STATS_LABELS.values()) == ["Total Requests", "Blocked", "Cached", "Uptime"]

    def test_labels_match_fields(self):
        assert set(STATS_LABELS) == set(Stats.__dataclass_fields__)
