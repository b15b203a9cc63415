"""Tests for loganalyze/metrics.py"""

import unittest
from datetime import datetime, timezone

from loganalyze.metrics import Metrics, analyze
from loganalyze.models import LogEntry


def _entry(level="", action="", source="", user_id="") -> LogEntry:
    return LogEntry(
        timestamp=datetime(2025, 2, 15, 10, 0, tzinfo=timezone.utc),
        level=level,
        action=action,
        source=source,
        user_id=user_id,
    )


class TestAnalyze(unittest.TestCase):
    def test_empty_stream(self):
        metrics = analyze([])
        self.assertEqual(metrics, Metrics())
        self.assertEqual(metrics.total, 0)
        self.assertEqual(metrics.active_users, 0)
        self.assertIsNone(metrics.error_rate)

    def test_total_matches_length(self):
        entries = [_entry(), _entry(level="info"), _entry(user_id="u1")]
        self.assertEqual(analyze(entries).total, 3)

    def test_accepts_any_iterable(self):
        metrics = analyze(iter([_entry(level="info"), _entry(level="info")]))
        self.assertEqual(metrics.by_level, {"info": 2})

    def test_frequency_tables(self):
        entries = [
            _entry(level="info", action="login", source="web"),
            _entry(level="info", action="chat", source="web"),
            _entry(level="warn", action="chat", source="ai_service"),
        ]
        metrics = analyze(entries)
        self.assertEqual(metrics.by_level, {"info": 2, "warn": 1})
        self.assertEqual(metrics.by_action, {"login": 1, "chat": 2})
        self.assertEqual(metrics.by_source, {"web": 2, "ai_service": 1})

    def test_empty_fields_are_not_counted(self):
        metrics = analyze([_entry(), _entry(level="info")])
        self.assertEqual(metrics.by_level, {"info": 1})
        self.assertEqual(metrics.by_action, {})
        self.assertEqual(metrics.by_source, {})

    def test_distinct_users(self):
        entries = [
            _entry(user_id="u1"),
            _entry(user_id="u2"),
            _entry(user_id="u1"),
            _entry(),
        ]
        metrics = analyze(entries)
        self.assertEqual(metrics.users, {"u1", "u2"})
        self.assertEqual(metrics.active_users, 2)
        self.assertLessEqual(metrics.active_users, metrics.total)

    def test_error_levels(self):
        entries = [_entry(level=lvl) for lvl in ("error", "ERROR", "warn", "info")]
        metrics = analyze(entries)
        self.assertEqual(metrics.errors, 2)
        self.assertEqual(metrics.total, 4)
        self.assertEqual(metrics.error_rate, 50.0)

    def test_error_match_is_case_sensitive(self):
        entries = [_entry(level=lvl) for lvl in ("Error", "eRRor", "err", "fatal")]
        self.assertEqual(analyze(entries).errors, 0)

    def test_idempotent(self):
        entries = [
            _entry(level="error", action="chat", source="ai", user_id="u1"),
            _entry(level="info", action="login", source="web", user_id="u2"),
        ]
        self.assertEqual(analyze(entries), analyze(entries))


class TestMetricsToDict(unittest.TestCase):
    def test_sorted_tables_and_rounded_rate(self):
        metrics = Metrics(
            total=3,
            by_level={"warn": 1, "error": 1, "info": 1},
            users={"u1"},
            errors=1,
        )
        d = metrics.to_dict()
        self.assertEqual(list(d["by_level"]), ["error", "info", "warn"])
        self.assertEqual(d["error_rate"], 33.33)
        self.assertEqual(d["active_users"], 1)
        self.assertEqual(d["by_action"], {})

    def test_no_rate_without_entries(self):
        self.assertIsNone(Metrics().to_dict()["error_rate"])


if __name__ == "__main__":
    unittest.main()
