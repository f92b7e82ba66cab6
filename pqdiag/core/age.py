# pqdiag/core/age.py
from collections.abc import Iterable
from datetime import datetime

from ..models.job import JobRow, PrintJob

UNKNOWN_AGE = "unknown"

def now_local() -> datetime:
    return datetime.now().astimezone()

def age_minutes(submitted_at: datetime | None, now: datetime) -> int | None:
    if submitted_at is None:
        return None
    mins = int((now - submitted_at).total_seconds() // 60)
    return max(0, mins)

def format_age(minutes: int | None) -> str:
    if minutes is None: return UNKNOWN_AGE
    if minutes < 1: return "<1m"
    if minutes < 60: return f"{minutes}m"
    hours, rem = divmod(minutes, 60)
    if hours < 24: return f"{hours}h {rem}m"
    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h"

def is_stale(minutes: int, threshold: int) -> bool:
    # threshold 0 switches highlighting off
    return threshold > 0 and minutes >= threshold

def annotate(jobs: Iterable[PrintJob], now: datetime, threshold: int) -> list[JobRow]:
    rows = []
    for job in jobs:
        mins = age_minutes(job.submitted_at, now)
        shown = mins if mins is not None else 0
        rows.append(JobRow(
            job=job,
            age_label=format_age(mins),
            age_minutes=shown,
            age_known=mins is not None,
            stale=is_stale(shown, threshold),
        ))
    return rows

def reapply_highlight(rows: Iterable[JobRow], threshold: int) -> list[JobRow]:
    return [r.with_stale(is_stale(r.age_minutes, threshold)) for r in rows]

def age_sort_key(row: JobRow) -> tuple[bool, int]:
    """Numeric ordering for the Age column; unknown ages sort after every known one."""
    return (not row.age_known, row.age_minutes)
