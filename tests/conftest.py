"""Shared fakes for the command function, the presenter and the repeating timer."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pqdiag.models.output import Style


class FakeRun:
    """Records command lines and answers them from a substring -> output table."""

    def __init__(self, responses: dict[str, str] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[str] = []
        self.hplip_calls: list[str] = []
        self.fail_on: set[str] = set()

    def __call__(self, cmd: str, hplip: bool = False) -> str:
        from pqdiag.utils.commands import CommandLaunchError

        self.calls.append(cmd)
        if hplip:
            self.hplip_calls.append(cmd)
        for needle in self.fail_on:
            if needle in cmd:
                raise CommandLaunchError(cmd, "command not found")
        # longest key first so "lpstat -o -l" doesn't shadow "lpstat -W not-completed -o -l"
        for key in sorted(self.responses, key=len, reverse=True):
            if key in cmd:
                return self.responses[key]
        return ""

    def issued(self, prefix: str) -> list[str]:
        return [c for c in self.calls if c.startswith(prefix)]


class FakeTimer:
    """In-memory RepeatingTask; `fire()` plays the role of the event loop."""

    def __init__(self) -> None:
        self.interval: int | None = None
        self.callback: Callable[[], None] | None = None
        self.starts = 0
        self.stops = 0

    @property
    def active(self) -> bool:
        return self.interval is not None

    def start(self, interval_seconds: int, callback: Callable[[], None]) -> None:
        self.interval = interval_seconds
        self.callback = callback
        self.starts += 1

    def stop(self) -> None:
        self.interval = None
        self.stops += 1

    def fire(self) -> None:
        assert self.callback is not None and self.active
        self.callback()


class FakePresenter:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.status: list[tuple[str, bool]] = []
        self.renders: list[list] = []
        self.prompts: list[tuple[str, str]] = []
        self.notices: list[tuple[Style, str]] = []

    def show_status(self, text: str, disabled: bool) -> None:
        self.status.append((text, disabled))

    def show_jobs(self, rows: list) -> None:
        self.renders.append(rows)

    def confirm(self, title: str, message: str) -> bool:
        self.prompts.append((title, message))
        return self.answer

    def notify(self, style: Style, message: str) -> None:
        self.notices.append((style, message))


@pytest.fixture
def fake_run() -> FakeRun:
    return FakeRun()


@pytest.fixture
def fake_timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def presenter() -> FakePresenter:
    return FakePresenter()
