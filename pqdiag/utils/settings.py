# pqdiag/utils/settings.py
import json
import logging
from pathlib import Path

from ..models.printer import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_QUEUE

logger = logging.getLogger(__name__)

def _config_dir() -> Path:
    return Path.home() / ".config" / "pqdiag"

APP_SETTINGS_FILE = _config_dir() / "settings.json"

DEFAULT_SETTINGS = {
    # Printer
    "printer_host": DEFAULT_HOST,
    "printer_port": DEFAULT_PORT,
    "queue_name": DEFAULT_QUEUE,
    "admin_prefix": "sudo",            # prefix for cupsenable/cupsdisable/systemctl

    # Output cleanup
    "show_raw": False,                 # exact command output, ANSI codes included
    "strip_ansi_global": False,        # strip ANSI from every command
    "strip_ansi_hplip": True,          # strip ANSI from hp-info only

    # Queue manager
    "highlight_minutes": 10,           # 0 => no highlighting
    "refresh_seconds": 5,              # 0 => no auto-refresh

    # Continuous wake
    "wake_enabled": False,
    "wake_interval_minutes": 5,

    "log_level": "WARNING",
    # layout persistence:
    # "window_size": [w, h],
}

def load_settings(path: Path | None = None) -> dict:
    p = path or APP_SETTINGS_FILE
    if p.exists():
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return {**DEFAULT_SETTINGS, **data}
            logger.warning("ignoring %s: not a JSON object", p)
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable settings %s: %s", p, e)
    # First run or broken file → write defaults so the file exists
    save_settings(DEFAULT_SETTINGS, p)
    return DEFAULT_SETTINGS.copy()

def save_settings(data: dict, path: Path | None = None) -> None:
    p = path or APP_SETTINGS_FILE
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        # Non-fatal; preferences just won't survive a restart
        logger.warning("could not save settings to %s: %s", p, e)
