# pqdiag/workers/diagnostics.py
import functools
import logging
import shlex
from collections.abc import Callable
from datetime import datetime

from ..clients.cups import CupsClient
from ..core.recovery import assess_recovery
from ..models.output import Style
from ..models.printer import PrinterConfig
from ..net.probes import PortStatus, port_probe, reachability_check, send_status_query
from ..parsers.lpstat import is_disabled_text, is_idle_text
from ..utils.commands import CommandLaunchError

logger = logging.getLogger(__name__)

PLUGIN_CHECK_CMD = "journalctl -u cups --since '5 minutes ago' 2>&1 | grep -i 'plugin.*mismatch'"


def _step(name: str):
    """Turn a launch failure inside a check into one error line; the check then counts as failed."""
    def deco(fn):
        @functools.wraps(fn)
        def wrapper(self, *a, **kw):
            try:
                return fn(self, *a, **kw)
            except CommandLaunchError as e:
                logger.warning("%s failed: %s", name, e)
                self.emit(Style.ERROR, f"{name} failed: {e}")
                return False
        return wrapper
    return deco


class Diagnostics:
    """The diagnostic checks and fix actions, reporting through `emit(style, text)`.

    Every step runs synchronously; the GUI calls these straight from its
    button handlers.
    """

    def __init__(self, config: PrinterConfig, client: CupsClient, run: Callable[..., str],
                 emit: Callable[[Style, str], None],
                 ping=reachability_check, probe=port_probe, wake=send_status_query,
                 clock: Callable[[], datetime] = datetime.now):
        self.config = config
        self.client = client
        self.run = run
        self.emit = emit
        self._ping = ping
        self._probe = probe
        self._wake = wake
        self._clock = clock
        self.wake_mode_enabled = False

    def header(self, text: str) -> None:
        rule = "=" * 39
        self.emit(Style.HEADER, f"\n{rule}\n{text}\n{rule}\n")

    # -- checks ---------------------------------------------------------------

    @_step("Ping check")
    def check_ping(self) -> bool:
        self.emit(Style.INFO, "Testing network connectivity (ping)...")
        if self._ping(self.config.host, run=self.run):
            self.emit(Style.SUCCESS, "Printer responds to ping - Network OK")
            return True
        self.emit(Style.ERROR, "Printer does not respond to ping - Network issue")
        self.emit(Style.WARNING, "Check: Printer power, WiFi connection, router/bridge path")
        return False

    def check_port(self) -> bool:
        port = self.config.port
        self.emit(Style.INFO, f"Testing raw print port {port}...")
        res = self._probe(self.config.host, port)
        if res.status is PortStatus.OPEN:
            self.emit(Style.SUCCESS, f"Port {port} is OPEN - Printer ready to receive jobs")
            return True
        if res.status is PortStatus.REFUSED:
            self.emit(Style.ERROR, f"Port {port} REFUSED - Printer is in deep sleep")
            self.emit(Style.WARNING, "Solution: Press printer power button once to wake (or send a wake command)")
        elif res.status is PortStatus.TIMEOUT:
            self.emit(Style.ERROR, f"Port {port} TIMEOUT - Printer not responding")
            self.emit(Style.WARNING, "Solution: Power cycle the printer (deep sleep / network stack)")
        else:
            self.emit(Style.ERROR, f"Port {port} ERROR: {res.detail}")
        return False

    @_step("CUPS status check")
    def check_cups_status(self) -> bool:
        self.emit(Style.INFO, "Checking CUPS printer queue...")
        result = self.client.queue_state_text()
        if is_idle_text(result):
            self.emit(Style.SUCCESS, "CUPS queue is idle and ready")
            return True
        if is_disabled_text(result):
            self.emit(Style.ERROR, "CUPS queue is DISABLED")
            self.emit(Style.WARNING, f"Run: {self.config.admin('cupsenable ' + shlex.quote(self.config.queue_name))}")
            self._report_recovery()
            return False
        self.emit(Style.WARNING, "Unknown CUPS status")
        self.emit(Style.PLAIN, result)
        return False

    def _report_recovery(self) -> None:
        try:
            queue_empty = not self.client.jobs()
            advice = assess_recovery(queue_empty, self.client.long_listing_text())
        except CommandLaunchError as e:
            self.emit(Style.WARNING, f"Auto-Recovery assessment failed: {e}")
            return
        self.emit(Style.SUCCESS if advice.eligible else Style.WARNING, advice.message)
        self.emit(Style.INFO, advice.hint)

    @_step("Stuck jobs check")
    def check_stuck_jobs(self) -> bool:
        self.emit(Style.INFO, "Checking for stuck print jobs...")
        result = self.run("lpstat -o")
        if not result.strip():
            self.emit(Style.SUCCESS, "No stuck jobs in queue")
            return True
        self.emit(Style.WARNING, "Found jobs in queue:")
        self.emit(Style.PLAIN, result)
        return False

    @_step("Plugin version check")
    def check_plugin_version(self) -> bool:
        self.emit(Style.INFO, "Checking HPLIP plugin version...")
        if not self.run(self.config.admin(PLUGIN_CHECK_CMD)).strip():
            self.emit(Style.SUCCESS, "No plugin version errors detected")
            return True
        self.emit(Style.ERROR, "Plugin version mismatch detected!")
        self.emit(Style.WARNING, "Reinstall the HPLIP plugin matching the installed HPLIP version")
        self.emit(Style.WARNING, f"Then: {self.config.admin('systemctl restart cups')}")
        return False

    @_step("Printer info")
    def printer_info(self) -> bool:
        self.emit(Style.INFO, "Getting detailed printer information...")
        uri = f"hp:/net/{self.config.queue_name}?ip={self.config.host}"
        result = self.run(f"hp-info -d {shlex.quote(uri)}", hplip=True)
        ok = "Communication status: Good" in result or "Device" in result
        if ok:
            self.emit(Style.SUCCESS, "HPLIP can communicate with printer")
        else:
            self.emit(Style.WARNING, "HPLIP returned output (see below)")
        self.emit(Style.PLAIN, "\n" + result)
        return ok

    # -- fixes ----------------------------------------------------------------

    @_step("Clear stuck jobs")
    def clear_stuck_jobs(self) -> bool:
        self.emit(Style.INFO, "Clearing all stuck jobs...")
        self.client.cancel_all()
        self.emit(Style.SUCCESS, "All jobs cancelled")
        return True

    def send_wake(self) -> bool:
        self.emit(Style.INFO, "Sending wake command to printer...")
        if self._wake(self.config.host, self.config.port):
            self.emit(Style.SUCCESS, "Wake command sent - wait 5 seconds then test again")
            return True
        self.emit(Style.ERROR, f"Could not deliver wake command to port {self.config.port}")
        return False

    @_step("Restart CUPS")
    def restart_service(self) -> bool:
        self.emit(Style.INFO, "Restarting CUPS service...")
        self.client.restart_service()
        self.emit(Style.SUCCESS, "CUPS restarted")
        return True

    @_step("Print test page")
    def print_test_page(self) -> bool:
        self.emit(Style.INFO, "Sending test page to printer...")
        ts = self._clock().strftime("%Y%m%d_%H%M%S")
        self.run(f'echo "Diagnostic Test Page - {ts}" | lpr -P {shlex.quote(self.config.queue_name)}')
        self.emit(Style.SUCCESS, "Test page sent - check printer")
        return True

    # -- composites -----------------------------------------------------------

    def quick_test(self) -> bool:
        self.header("Quick Diagnostic Test")
        ping_ok = self.check_ping()
        port_ok = self.check_port()
        self.emit(Style.HEADER, "\nSUMMARY:")
        if ping_ok and port_ok:
            self.emit(Style.SUCCESS, "Printer is fully operational!")
            self.emit(Style.INFO, "You can try printing now")
        elif ping_ok:
            self.emit(Style.WARNING, "Printer is online but print service is asleep")
            self.emit(Style.INFO, "Recommended action: Press printer power button or send a wake command")
            self.emit(Style.INFO, "Or enable Continuous Wake Mode to prevent future sleep")
        else:
            self.emit(Style.ERROR, "Printer is not reachable on network")
            self.emit(Style.INFO, "Check: Printer power, WiFi status, router/bridge path")
        return ping_ok and port_ok

    def full_scan(self) -> bool:
        self.header("Full Diagnostic Scan")
        results = []
        for check in (self.check_ping, self.check_port, self.check_cups_status,
                      self.check_stuck_jobs, self.check_plugin_version):
            results.append(check())
            self.emit(Style.PLAIN, "")
        self.header("Diagnostic Summary")
        if all(results):
            self.emit(Style.SUCCESS, "All diagnostics passed! Printer should be working.")
            if not self.wake_mode_enabled:
                self.emit(Style.INFO, "Tip: Enable Continuous Wake Mode to prevent printer from sleeping")
            return True
        self.emit(Style.WARNING, "Some issues detected. Review the results above.")
        self.emit(Style.INFO, "Use the FIXES actions to resolve issues")
        return False
