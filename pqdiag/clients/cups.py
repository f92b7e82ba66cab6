# pqdiag/clients/cups.py
import logging
import shlex
from collections.abc import Callable

from ..models.job import PrintJob
from ..models.printer import PrinterConfig
from ..parsers.lpstat import is_disabled_text, parse_friendly_name, parse_lpstat_jobs
from ..utils.commands import CommandLaunchError

logger = logging.getLogger(__name__)

# lpstat builds without -W report the flag in their own output.
_REJECTED_OPTION_MARKERS = ("Unknown option", "unknown option", "invalid option")

JOBS_CMD = "lpstat -W not-completed -o -l"
JOBS_FALLBACK_CMD = "lpstat -o -l"


class CupsClient:
    """Queue reads and queue-mutating requests for one CUPS printer.

    Mutating calls only issue the request; whether it took effect shows up
    in the next listing.
    """

    def __init__(self, config: PrinterConfig, run: Callable[[str], str]):
        self.config = config
        self._run = run

    @property
    def _queue(self) -> str:
        return shlex.quote(self.config.queue_name)

    def queue_state_text(self) -> str:
        return self._run(f"lpstat -p {self._queue}")

    def is_disabled(self) -> bool:
        return is_disabled_text(self.queue_state_text())

    def long_listing_text(self) -> str:
        return self._run(f"lpstat -l -p {self._queue}")

    def friendly_name(self) -> str:
        try:
            return parse_friendly_name(self.long_listing_text(), self.config.queue_name)
        except CommandLaunchError as e:
            logger.warning("friendly name lookup failed: %s", e)
            return self.config.queue_name

    def jobs(self) -> list[PrintJob]:
        out = self._run(JOBS_CMD)
        if any(marker in out for marker in _REJECTED_OPTION_MARKERS):
            logger.debug("lpstat rejected -W, falling back to %r", JOBS_FALLBACK_CMD)
            out = self._run(JOBS_FALLBACK_CMD)
        return parse_lpstat_jobs(out)

    def cancel_job(self, job_id: str) -> None:
        logger.info("cancel requested for job %s", job_id)
        self._run(f"cancel {shlex.quote(job_id)}")

    def cancel_all(self) -> None:
        logger.info("cancel requested for all jobs")
        self._run("cancel -a")

    def cancel_all_by_owner(self, owner: str) -> list[str]:
        targeted = [j.job_id for j in self.jobs() if j.owner == owner]
        for job_id in targeted:
            self.cancel_job(job_id)
        return targeted

    def pause_queue(self) -> None:
        logger.info("pause requested for %s", self.config.queue_name)
        self._run(self.config.admin(f"cupsdisable {self._queue}"))

    def resume_queue(self) -> None:
        logger.info("resume requested for %s", self.config.queue_name)
        self._run(self.config.admin(f"cupsenable {self._queue}"))

    def restart_service(self) -> None:
        logger.info("CUPS service restart requested")
        self._run(self.config.admin("systemctl restart cups"))
