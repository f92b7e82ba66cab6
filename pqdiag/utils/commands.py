# pqdiag/utils/commands.py
import logging
import subprocess

from ..parsers.lpstat import strip_ansi

logger = logging.getLogger(__name__)

# POSIX shells exit with 127 when the command itself can't be found.
_SHELL_NOT_FOUND = 127


class CommandLaunchError(Exception):
    """The external command could not be started at all."""

    def __init__(self, cmd: str, reason: str):
        super().__init__(f"could not run `{cmd}`: {reason}")
        self.cmd = cmd
        self.reason = reason


def run_command(cmd: str) -> str:
    """Run a shell command line and return stdout+stderr as text.

    A non-zero exit status is normal for spooler tools and is not an error;
    only a failure to launch raises CommandLaunchError.
    """
    logger.debug("$ %s", cmd)
    try:
        proc = subprocess.run(
            cmd, shell=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
            text=True, errors="replace",
        )
    except OSError as e:
        logger.warning("launch failed: %s (%s)", cmd, e)
        raise CommandLaunchError(cmd, str(e)) from e
    if proc.returncode == _SHELL_NOT_FOUND:
        reason = proc.stdout.strip().splitlines()[-1] if proc.stdout.strip() else "command not found"
        logger.warning("launch failed: %s (%s)", cmd, reason)
        raise CommandLaunchError(cmd, reason)
    if proc.returncode:
        logger.debug("exit status %d: %s", proc.returncode, cmd)
    return proc.stdout


class CommandRunner:
    """run_command plus the user's output cleanup preferences.

    Callable as `runner(cmd)` so it can be handed anywhere a plain
    command function is expected.
    """

    def __init__(self, settings: dict, run=run_command):
        self.settings = settings
        self._run = run

    def __call__(self, cmd: str, hplip: bool = False) -> str:
        out = self._run(cmd)
        if self.settings.get("show_raw", False):
            return out
        if self.settings.get("strip_ansi_global", False):
            return strip_ansi(out)
        if hplip and self.settings.get("strip_ansi_hplip", True):
            return strip_ansi(out)
        return out
