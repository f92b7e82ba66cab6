# pqdiag/parsers/lpstat.py
import re
from datetime import datetime

from ..models.job import PrintJob

# English abbreviations only; lpstat output in other locales yields no timestamp.
_MONTHS = {m: i for i, m in enumerate(
    ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"], start=1)}

_ANSI = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|[@-Z\\-_])")

FILE_SEPARATOR = " | "
DESCRIPTION_LABEL = "Description:"

def strip_ansi(text: str) -> str:
    return _ANSI.sub("", text)

def _parse_dmy_time(day: str, month: int, year: str, clock: str) -> datetime | None:
    stamp = f"{day} {month} {year} {clock}"
    for fmt in ("%d %m %Y %H:%M:%S", "%d %m %Y %H:%M"):
        try:
            return datetime.strptime(stamp, fmt)
        except ValueError:
            continue
    return None

def parse_submitted_at(status_text: str) -> datetime | None:
    """Find a `<day> <Mon> <year> <time> [AM|PM]` run in a job's status text.

    The first run that parses wins and is returned as an aware datetime in
    the local time zone. Anything that doesn't parse gives None.
    """
    tokens = status_text.split()
    for i, tok in enumerate(tokens):
        if tok not in _MONTHS or i == 0 or i + 2 >= len(tokens):
            continue
        clock = tokens[i + 2]
        if ":" not in clock:
            continue
        day, year = tokens[i - 1].removesuffix(","), tokens[i + 1].removesuffix(",")
        dt = _parse_dmy_time(day, _MONTHS[tok], year, clock)
        if dt is None:
            continue
        if i + 3 < len(tokens) and tokens[i + 3] in ("AM", "PM"):
            hour = dt.hour
            if tokens[i + 3] == "AM":
                if hour == 12: hour = 0
            elif hour != 12:
                hour += 12
            if hour > 23:
                continue  # "13:00 PM" and friends
            dt = dt.replace(hour=hour)
        try:
            return dt.astimezone()
        except (OverflowError, OSError, ValueError):
            continue
    return None

def _header_fields(line: str) -> tuple[str, str, str]:
    parts = line.split(None, 2)
    job_id = parts[0] if parts else ""
    owner = parts[1] if len(parts) > 1 else ""
    rest = parts[2].strip() if len(parts) > 2 else ""
    return job_id, owner, rest

def parse_lpstat_jobs(text: str) -> list[PrintJob]:
    """Turn `lpstat -o -l` output into job records, in listing order.

    Header lines (no leading whitespace) open a record, indented lines add
    file/description fragments to the open one, blank lines close it.
    Lines that fit neither shape are dropped.
    """
    jobs: list[PrintJob] = []
    current: dict | None = None

    def flush():
        nonlocal current
        if current and current["job_id"]:
            jobs.append(PrintJob(
                job_id=current["job_id"],
                owner=current["owner"],
                status_text=current["status_text"],
                file_label=FILE_SEPARATOR.join(current["files"]),
                submitted_at=current["submitted_at"],
            ))
        current = None

    for line in text.splitlines():
        if not line.strip():
            flush()
            continue
        if not line[0].isspace():
            flush()
            job_id, owner, rest = _header_fields(line)
            current = {
                "job_id": job_id, "owner": owner, "status_text": rest,
                "files": [], "submitted_at": parse_submitted_at(rest),
            }
        elif current is not None:
            current["files"].append(line.strip())

    flush()
    return jobs

def is_disabled_text(state_text: str) -> bool:
    return "disabled" in state_text

def is_idle_text(state_text: str) -> bool:
    return "idle" in state_text

def parse_friendly_name(long_listing: str, default: str) -> str:
    for line in long_listing.splitlines():
        pos = line.find(DESCRIPTION_LABEL)
        if pos < 0:
            continue
        if desc := line[pos + len(DESCRIPTION_LABEL):].strip():
            return desc
    return default
