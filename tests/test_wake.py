"""Tests for continuous wake mode scheduling."""

from __future__ import annotations

from datetime import datetime

from pqdiag.core.wake import WakeScheduler

from .conftest import FakeTimer

WAKE_AT = datetime(2024, 1, 5, 9, 15, 7)


def make(timer: FakeTimer, interval: int = 5, sent: list | None = None) -> WakeScheduler:
    sent = sent if sent is not None else []
    return WakeScheduler(timer, lambda: sent.append(1) or True, interval_minutes=interval,
                         clock=lambda: WAKE_AT)


class TestWakeScheduler:
    """Enable, disable, interval and status text."""

    def test_disabled_by_default(self, fake_timer: FakeTimer) -> None:
        """Test a new scheduler does not run."""
        wake = make(fake_timer)
        assert not fake_timer.active
        assert wake.status_text() == "Status: DISABLED"

    def test_enable_arms_timer_in_seconds(self, fake_timer: FakeTimer) -> None:
        """Test the interval is minutes converted to seconds."""
        wake = make(fake_timer, 7)
        wake.enable()
        assert fake_timer.interval == 420
        assert wake.status_text() == "Status: ACTIVE | Interval: 7 min"

    def test_interval_is_clamped(self, fake_timer: FakeTimer) -> None:
        """Test the 1 to 60 minute range."""
        wake = make(fake_timer, 0)
        assert wake.interval_minutes == 1
        wake.set_interval(500)
        assert wake.interval_minutes == 60

    def test_interval_change_restarts_only_when_enabled(self, fake_timer: FakeTimer) -> None:
        """Test set_interval re-arms a running timer and leaves a stopped one alone."""
        wake = make(fake_timer)
        wake.set_interval(10)
        assert fake_timer.starts == 0
        wake.enable()
        wake.set_interval(2)
        assert fake_timer.interval == 120

    def test_tick_sends_and_records(self, fake_timer: FakeTimer) -> None:
        """Test a timer tick sends one wake and stamps the status."""
        sent: list = []
        woke: list = []
        wake = make(fake_timer, sent=sent)
        wake._on_wake = lambda: woke.append(wake.last_wake)
        wake.enable()
        fake_timer.fire()
        assert sent == [1]
        assert woke == [WAKE_AT]
        assert wake.status_text() == "Status: ACTIVE | Interval: 5 min | Last wake: 09:15:07"

    def test_disable_stops_timer(self, fake_timer: FakeTimer) -> None:
        """Test disabling stops the timer and the status reads DISABLED."""
        wake = make(fake_timer)
        wake.enable()
        wake.disable()
        assert not fake_timer.active
        assert wake.status_text() == "Status: DISABLED"

    def test_manual_wake_recorded(self, fake_timer: FakeTimer) -> None:
        """Test record_wake stamps last_wake without sending."""
        sent: list = []
        wake = make(fake_timer, sent=sent)
        wake.record_wake()
        assert wake.last_wake == WAKE_AT
        assert sent == []
