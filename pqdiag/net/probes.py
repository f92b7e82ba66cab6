# pqdiag/net/probes.py
import errno
import logging
import re
import shlex
import socket
from collections.abc import Callable
from enum import Enum
from typing import NamedTuple

from ..utils.commands import run_command

logger = logging.getLogger(__name__)

PORT_TIMEOUT = 3.0

# PJL status query; harmless on the raw-print port and enough to wake the NIC.
PJL_STATUS_QUERY = b"\x1b%-12345X@PJL\r\n@PJL INFO STATUS\r\n\x1b%-12345X\r\n"

_RECEIVED = re.compile(r"(\d+)\s+(?:packets\s+)?received|Received\s*=\s*(\d+)", re.IGNORECASE)


class PortStatus(Enum):
    OPEN = "open"
    REFUSED = "refused"
    TIMEOUT = "timeout"
    ERROR = "error"


class ProbeResult(NamedTuple):
    status: PortStatus
    detail: str = ""


def replies_received(ping_output: str) -> int:
    m = _RECEIVED.search(ping_output)
    if not m:
        return 0
    return int(m.group(1) or m.group(2))


def reachability_check(host: str, count: int = 3, timeout: int = 2,
                       run: Callable[[str], str] = run_command) -> bool:
    out = run(f"ping -c {int(count)} -W {int(timeout)} {shlex.quote(host)}")
    return replies_received(out) > 0


def port_probe(host: str, port: int, timeout: float = PORT_TIMEOUT) -> ProbeResult:
    """Bounded TCP connect to host:port; never waits longer than `timeout`."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return ProbeResult(PortStatus.OPEN)
    except ConnectionRefusedError as e:
        return ProbeResult(PortStatus.REFUSED, e.strerror or "connection refused")
    except (socket.timeout, TimeoutError):
        return ProbeResult(PortStatus.TIMEOUT, f"no answer within {timeout:g}s")
    except OSError as e:
        if e.errno == errno.ETIMEDOUT:
            return ProbeResult(PortStatus.TIMEOUT, e.strerror or "timed out")
        return ProbeResult(PortStatus.ERROR, e.strerror or str(e))


def send_status_query(host: str, port: int, timeout: float = PORT_TIMEOUT) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            sock.sendall(PJL_STATUS_QUERY)
        return True
    except OSError as e:
        logger.debug("status query to %s:%s failed: %s", host, port, e)
        return False
