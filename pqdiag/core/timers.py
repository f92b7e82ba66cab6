# pqdiag/core/timers.py
from collections.abc import Callable
from typing import Protocol


class RepeatingTask(Protocol):
    """A cancellable periodic callback, independent of any event loop."""

    @property
    def active(self) -> bool: ...

    def start(self, interval_seconds: int, callback: Callable[[], None]) -> None:
        """(Re)schedule `callback` every `interval_seconds`, replacing any prior schedule."""

    def stop(self) -> None: ...
