"""Tests for command execution and output cleanup."""

from __future__ import annotations

import pytest

from pqdiag.utils.commands import CommandLaunchError, CommandRunner, run_command

COLORED = "\x1b[32mGood\x1b[0m"


class TestRunCommand:
    """Shell execution."""

    def test_captures_stdout_and_stderr(self) -> None:
        """Test both streams come back merged."""
        out = run_command("echo out; echo err 1>&2")
        assert "out" in out
        assert "err" in out

    def test_nonzero_exit_is_not_an_error(self) -> None:
        """Test a failing tool still returns its output."""
        assert run_command("echo nope; exit 1").strip() == "nope"

    def test_missing_program_raises(self) -> None:
        """Test a command the shell cannot find is a launch failure."""
        with pytest.raises(CommandLaunchError) as exc:
            run_command("pqdiag-no-such-program-xyz")
        assert exc.value.cmd == "pqdiag-no-such-program-xyz"
        assert "could not run" in str(exc.value)


class TestCommandRunner:
    """Output cleanup preferences."""

    @pytest.mark.parametrize(
        ("settings", "hplip", "expected"),
        [
            ({}, False, COLORED),
            ({}, True, "Good"),
            ({"strip_ansi_hplip": False}, True, COLORED),
            ({"strip_ansi_global": True}, False, "Good"),
            ({"show_raw": True, "strip_ansi_global": True}, True, COLORED),
        ],
    )
    def test_cleanup(self, settings: dict, hplip: bool, expected: str) -> None:
        """Test raw mode wins, then global stripping, then the hp-info toggle."""
        runner = CommandRunner(settings, run=lambda cmd: COLORED)
        assert runner("hp-info", hplip=hplip) == expected

    def test_settings_are_read_live(self) -> None:
        """Test toggles changed after construction apply to the next command."""
        settings: dict = {}
        runner = CommandRunner(settings, run=lambda cmd: COLORED)
        settings["strip_ansi_global"] = True
        assert runner("lpstat") == "Good"
