"""Tests for job age formatting and stale highlighting."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pqdiag.core.age import (
    age_minutes,
    age_sort_key,
    annotate,
    format_age,
    is_stale,
    reapply_highlight,
)
from pqdiag.models.job import PrintJob

NOW = datetime(2024, 1, 5, 12, 0, 0, tzinfo=timezone.utc)


def job_aged(minutes: float | None, job_id: str = "J1") -> PrintJob:
    submitted = None if minutes is None else NOW - timedelta(minutes=minutes)
    return PrintJob(job_id=job_id, owner="alice", submitted_at=submitted)


class TestFormatAge:
    """Exact age label formatting."""

    @pytest.mark.parametrize(
        ("minutes", "label"),
        [
            (None, "unknown"),
            (0, "<1m"),
            (1, "1m"),
            (59, "59m"),
            (60, "1h 0m"),
            (61, "1h 1m"),
            (1439, "23h 59m"),
            (1440, "1d 0h"),
            (1500, "1d 1h"),
            (3 * 1440 + 5 * 60 + 59, "3d 5h"),
        ],
    )
    def test_labels(self, minutes: int | None, label: str) -> None:
        """Test each formatting band including its boundaries."""
        assert format_age(minutes) == label


class TestAgeMinutes:
    """Minutes elapsed since submission."""

    def test_unknown_is_none(self) -> None:
        """Test a missing timestamp is reported as None, not 0."""
        assert age_minutes(None, NOW) is None

    def test_whole_minutes_floor(self) -> None:
        """Test partial minutes are truncated."""
        assert age_minutes(NOW - timedelta(minutes=10, seconds=59), NOW) == 10
        assert age_minutes(NOW - timedelta(seconds=30), NOW) == 0

    def test_future_timestamp_clamps_to_zero(self) -> None:
        """Test clock skew never produces negative ages."""
        assert age_minutes(NOW + timedelta(minutes=5), NOW) == 0


class TestHighlight:
    """Stale classification against the threshold."""

    def test_zero_threshold_disables(self) -> None:
        """Test threshold 0 flags nothing, however old."""
        assert not is_stale(0, 0)
        assert not is_stale(100000, 0)

    def test_threshold_is_inclusive(self) -> None:
        """Test 10 minutes is stale at threshold 10 and 9 is not."""
        assert is_stale(10, 10)
        assert not is_stale(9, 10)

    def test_annotate_builds_rows(self) -> None:
        """Test rows carry label, minutes, known flag and stale flag."""
        rows = annotate([job_aged(9, "A"), job_aged(10, "B"), job_aged(None, "C")], NOW, 10)
        assert [(r.job_id, r.age_label, r.age_minutes, r.age_known, r.stale) for r in rows] == [
            ("A", "9m", 9, True, False),
            ("B", "10m", 10, True, True),
            ("C", "unknown", 0, False, False),
        ]

    def test_annotate_keeps_listing_order(self) -> None:
        """Test rows are not re-sorted by age."""
        rows = annotate([job_aged(1, "new"), job_aged(500, "old")], NOW, 0)
        assert [r.job_id for r in rows] == ["new", "old"]

    def test_reapply_uses_stored_minutes(self) -> None:
        """Test changing the threshold reclassifies without recomputing ages."""
        rows = annotate([job_aged(30, "A"), job_aged(5, "B")], NOW, 0)
        assert not any(r.stale for r in rows)
        rows = reapply_highlight(rows, 20)
        assert [r.stale for r in rows] == [True, False]
        assert [r.age_label for r in rows] == ["30m", "5m"]
        rows = reapply_highlight(rows, 0)
        assert not any(r.stale for r in rows)


class TestAgeSortKey:
    """Age column ordering."""

    def test_numeric_not_textual(self) -> None:
        """Test 2m sorts before 10m and 5m before 1d 0h."""
        rows = annotate([job_aged(10, "A"), job_aged(1440, "B"), job_aged(2, "C"), job_aged(5, "D")], NOW, 0)
        ordered = sorted(rows, key=age_sort_key)
        assert [r.age_label for r in ordered] == ["2m", "5m", "10m", "1d 0h"]

    def test_unknown_sorts_last(self) -> None:
        """Test unknown ages follow even a brand new job."""
        rows = annotate([job_aged(None, "U"), job_aged(3000, "old"), job_aged(0, "new")], NOW, 0)
        assert [r.job_id for r in sorted(rows, key=age_sort_key)] == ["new", "old", "U"]
