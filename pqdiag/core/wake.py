# pqdiag/core/wake.py
from collections.abc import Callable
from datetime import datetime

from .timers import RepeatingTask

MIN_INTERVAL, MAX_INTERVAL = 1, 60


class WakeScheduler:
    """Continuous wake mode: poke the printer every N minutes so it stays out of deep sleep."""

    def __init__(self, timer: RepeatingTask, send_wake: Callable[[], bool],
                 interval_minutes: int = 5, clock: Callable[[], datetime] = datetime.now,
                 on_wake: Callable[[], None] | None = None):
        self.timer = timer
        self._send_wake = send_wake
        self._clock = clock
        self._on_wake = on_wake
        self.interval_minutes = self._clamp(interval_minutes)
        self.enabled = False
        self.last_wake: datetime | None = None

    @staticmethod
    def _clamp(minutes: int) -> int:
        return max(MIN_INTERVAL, min(MAX_INTERVAL, int(minutes)))

    def enable(self, interval_minutes: int | None = None) -> None:
        if interval_minutes is not None:
            self.interval_minutes = self._clamp(interval_minutes)
        self.enabled = True
        self.timer.start(self.interval_minutes * 60, self.wake_now)

    def disable(self) -> None:
        self.enabled = False
        self.timer.stop()

    def set_interval(self, minutes: int) -> None:
        self.interval_minutes = self._clamp(minutes)
        if self.enabled:
            self.enable()

    def wake_now(self) -> bool:
        ok = self._send_wake()
        self.record_wake()
        return ok

    def record_wake(self) -> None:
        """Note a wake sent from elsewhere (the manual wake button) as the latest one."""
        self.last_wake = self._clock()
        if self._on_wake: self._on_wake()

    def status_text(self) -> str:
        if not (self.enabled and self.timer.active):
            return "Status: DISABLED"
        text = f"Status: ACTIVE | Interval: {self.interval_minutes} min"
        if self.last_wake:
            text += f" | Last wake: {self.last_wake:%H:%M:%S}"
        return text
