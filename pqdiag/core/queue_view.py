# pqdiag/core/queue_view.py
import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Protocol

from ..clients.cups import CupsClient
from ..models.job import JobRow
from ..models.output import Style
from ..parsers.lpstat import is_disabled_text
from ..utils.commands import CommandLaunchError
from .age import annotate, now_local, reapply_highlight
from .timers import RepeatingTask

logger = logging.getLogger(__name__)


class ViewState(Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"
    ACTIVE = "active"  # idle between refreshes, auto-refresh timer running


class QueuePresenter(Protocol):
    def show_status(self, text: str, disabled: bool) -> None: ...
    def show_jobs(self, rows: list[JobRow]) -> None: ...
    def confirm(self, title: str, message: str) -> bool: ...
    def notify(self, style: Style, message: str) -> None: ...


def status_summary(raw: str) -> tuple[str, bool]:
    raw = raw.strip()
    disabled = is_disabled_text(raw)
    summary = "Queue Status: DISABLED / PAUSED" if disabled else "Queue Status: ENABLED"
    if raw:
        summary += f"   ({raw})"
    return summary, disabled


class QueueViewController:
    """Drives the queue manager view: refreshes, highlighting and actions.

    Every mutating action is confirmed through the presenter first and is
    followed by a refresh so the view shows what the spooler did with it.
    """

    def __init__(self, client: CupsClient, presenter: QueuePresenter, timer: RepeatingTask,
                 threshold_minutes: int = 10, refresh_seconds: int = 5,
                 clock: Callable[[], datetime] = now_local):
        self.client = client
        self.presenter = presenter
        self.timer = timer
        self.threshold = max(0, int(threshold_minutes))
        self.refresh_seconds = max(0, int(refresh_seconds))
        self._clock = clock
        self._rows: list[JobRow] = []
        self._generation = 0
        self._refreshing = False

    @property
    def rows(self) -> list[JobRow]:
        return list(self._rows)

    @property
    def state(self) -> ViewState:
        if self._refreshing:
            return ViewState.REFRESHING
        return ViewState.ACTIVE if self.timer.active else ViewState.IDLE

    def start(self) -> None:
        self.refresh()
        self.set_refresh_period(self.refresh_seconds)

    def close(self) -> None:
        self.timer.stop()

    # -- refresh / view settings -------------------------------------------

    def refresh(self) -> None:
        self._generation += 1
        generation = self._generation
        self._refreshing = True
        try:
            try:
                status, disabled = status_summary(self.client.queue_state_text())
            except CommandLaunchError as e:
                status, disabled = "Queue Status: UNKNOWN", False
                self.presenter.notify(Style.ERROR, f"Queue Manager: status query failed: {e}")
            try:
                jobs = self.client.jobs()
            except CommandLaunchError as e:
                jobs = []
                self.presenter.notify(Style.ERROR, f"Queue Manager: job listing failed: {e}")
            if generation != self._generation:
                logger.debug("dropping refresh %d, superseded by %d", generation, self._generation)
                return
            self._rows = annotate(jobs, self._clock(), self.threshold)
        finally:
            self._refreshing = False
        self.presenter.show_status(status, disabled)
        self.presenter.show_jobs(self.rows)

    def set_refresh_period(self, seconds: int) -> None:
        self.refresh_seconds = max(0, int(seconds))
        self.timer.stop()
        if self.refresh_seconds > 0:
            self.timer.start(self.refresh_seconds, self.refresh)

    def set_threshold(self, minutes: int) -> None:
        self.threshold = max(0, int(minutes))
        self._rows = reapply_highlight(self._rows, self.threshold)
        self.presenter.show_jobs(self.rows)

    def find(self, job_id: str) -> JobRow | None:
        return next((r for r in self._rows if r.job_id == job_id), None)

    # -- actions ------------------------------------------------------------

    def _issue(self, title: str, question: str, start_msg: str, done_msg: str, action) -> bool:
        if not self.presenter.confirm(title, question):
            return False
        self.presenter.notify(Style.INFO, f"Queue Manager: {start_msg} ...")
        try:
            action()
        except CommandLaunchError as e:
            self.presenter.notify(Style.ERROR, f"Queue Manager: {start_msg} failed: {e}")
        else:
            self.presenter.notify(Style.SUCCESS, f"Queue Manager: {done_msg}")
        self.refresh()
        return True

    def cancel(self, job_id: str | None) -> bool:
        row = self.find(job_id) if job_id else None
        if row is None:
            self.presenter.notify(Style.WARNING, "Queue Manager: No job selected.")
            return False
        return self._issue(
            "Confirm Cancel", f"Cancel selected job?\n\nJob: {row.job_id}\nUser: {row.owner}",
            f"Cancelling job {row.job_id}", f"Cancel requested for {row.job_id}",
            lambda: self.client.cancel_job(row.job_id),
        )

    def cancel_owner(self, owner: str | None) -> bool:
        if owner is None:
            self.presenter.notify(Style.WARNING, "Queue Manager: Select a job first to choose a user.")
            return False
        if not owner:
            self.presenter.notify(Style.WARNING, "Queue Manager: Selected job has no user.")
            return False
        return self._issue(
            "Confirm Cancel", f"Cancel ALL jobs owned by this user?\n\nUser: {owner}",
            f"Cancelling all jobs for user {owner}", f"Cancel requested for all jobs by {owner}",
            lambda: self.client.cancel_all_by_owner(owner),
        )

    def cancel_all(self) -> bool:
        return self._issue(
            "Confirm Cancel", "Cancel ALL jobs in the queue?\n\nThis will cancel every pending job.",
            "Cancelling ALL jobs in queue", "Cancel requested for ALL jobs.",
            self.client.cancel_all,
        )

    def pause(self) -> bool:
        return self._issue(
            "Confirm Pause", "Pause/disable the printer queue?\n\nThis may require sudo privileges.",
            "Pausing queue (cupsdisable)", "Pause requested.",
            self.client.pause_queue,
        )

    def resume(self) -> bool:
        return self._issue(
            "Confirm Resume", "Resume/enable the printer queue?\n\nThis may require sudo privileges.",
            "Resuming queue (cupsenable)", "Resume requested.",
            self.client.resume_queue,
        )
