"""Tests for the calculation history log."""

import pytest

from physcalc.core.history import DEFAULT_HISTORY_LIMIT, HistoryLog


class TestHistoryLog:
    def test_newest_first(self):
        log = HistoryLog()
        log.record("first", "1")
        log.record("second", "2")
        assert [i.expression for i in log.items()] == ["second", "first"]
        assert log.items()[0].result == "2"

    def test_capacity(self):
        log = HistoryLog(limit=3)
        for n in range(5):
            log.record(f"calc {n}", str(n))
        assert len(log) == 3
        assert [i.result for i in log] == ["4", "3", "2"]

    def test_default_limit(self):
        log = HistoryLog()
        for n in range(DEFAULT_HISTORY_LIMIT + 10):
            log.record("x", str(n))
        assert len(log) == 50

    def test_items_are_unique(self):
        log = HistoryLog()
        log.record("a", "1")
        log.record("a", "1")
        first, second = log.items()
        assert first.id != second.id
        assert first.timestamp >= second.timestamp

    def test_items_returns_copy(self):
        log = HistoryLog()
        log.record("a", "1")
        log.items().clear()
        assert len(log) == 1

    def test_clear(self):
        log = HistoryLog()
        log.record("a", "1")
        log.clear()
        assert len(log) == 0

    @pytest.mark.parametrize("limit", [0, -5])
    def test_invalid_limit(self, limit):
        with pytest.raises(ValueError):
            HistoryLog(limit=limit)
