# pqdiag/models/job.py
from dataclasses import dataclass, replace
from datetime import datetime

@dataclass(frozen=True)
class PrintJob:
    job_id: str
    owner: str = ""
    status_text: str = ""
    file_label: str = ""  # continuation fragments joined with " | "
    submitted_at: datetime | None = None  # local, tz-aware; None => unknown

@dataclass(frozen=True)
class JobRow:
    """One rendered queue row: a job plus its derived age and highlight."""
    job: PrintJob
    age_label: str
    age_minutes: int  # 0 when the age is unknown
    age_known: bool
    stale: bool = False

    @property
    def job_id(self) -> str:
        return self.job.job_id

    @property
    def owner(self) -> str:
        return self.job.owner

    def with_stale(self, stale: bool) -> "JobRow":
        return self if stale == self.stale else replace(self, stale=stale)
