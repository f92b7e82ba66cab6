# pqdiag/models/printer.py
from dataclasses import dataclass

DEFAULT_HOST = "192.168.4.68"
DEFAULT_PORT = 9100
DEFAULT_QUEUE = "HP_LaserJet_Professional_P1102w"

@dataclass(frozen=True)
class PrinterConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    queue_name: str = DEFAULT_QUEUE
    admin_prefix: str = "sudo"  # prepended to privileged commands, "" to run as-is

    @classmethod
    def from_settings(cls, settings: dict) -> "PrinterConfig":
        try:
            port = int(settings.get("printer_port", DEFAULT_PORT))
        except (TypeError, ValueError):
            port = DEFAULT_PORT
        return cls(
            host=str(settings.get("printer_host") or DEFAULT_HOST).strip(),
            port=port,
            queue_name=str(settings.get("queue_name") or DEFAULT_QUEUE).strip(),
            admin_prefix=str(settings.get("admin_prefix", "sudo")).strip(),
        )

    def admin(self, cmd: str) -> str:
        return f"{self.admin_prefix} {cmd}" if self.admin_prefix else cmd
