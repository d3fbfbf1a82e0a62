"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from e2e_emulator import __version__
from e2e_emulator.cli import exit_codes
from e2e_emulator.cli.app import main
from e2e_emulator.exceptions import (
    DeviceNotReadyError,
    E2eEmulatorError,
    EmulatorExitedError,
    SdkRootNotFoundError,
    ToolFailedError,
    ToolNotFoundError,
    UsageError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)

    @pytest.mark.parametrize("flag", ["-V", "--version"])
    def test_version_flag(self, flag: str, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([flag])
        assert code == exit_codes.SUCCESS
        assert __version__ in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            UsageError,
            SdkRootNotFoundError,
            ToolNotFoundError,
            ToolFailedError,
            DeviceNotReadyError,
            EmulatorExitedError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[E2eEmulatorError]
    ) -> None:
        assert issubclass(exc_class, E2eEmulatorError)

    def test_emulator_exited_is_a_readiness_failure(self) -> None:
        assert issubclass(EmulatorExitedError, DeviceNotReadyError)

    def test_hint_is_stored(self) -> None:
        err = E2eEmulatorError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = E2eEmulatorError("boom")
        assert err.hint is None

    def test_default_exit_code_is_one(self) -> None:
        assert E2eEmulatorError("boom").exit_code == 1
        assert SdkRootNotFoundError("boom").exit_code == 1

    def test_tool_not_found_exit_code(self) -> None:
        assert ToolNotFoundError("adb was not found").exit_code == 127

    def test_tool_failed_carries_tool_status(self) -> None:
        err = ToolFailedError(["/sdk/platform-tools/adb", "bugreport"], 5)
        assert err.returncode == 5
        assert err.exit_code == 5
        assert err.command == ("/sdk/platform-tools/adb", "bugreport")
        assert "adb" in str(err)
        assert "status 5" in str(err)

    def test_tool_killed_by_signal_exits_one(self) -> None:
        err = ToolFailedError(["emulator"], -9)
        assert err.exit_code == 1


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_usage_error_is_one(self) -> None:
        assert exit_codes.USAGE_ERROR == 1

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    def test_tool_not_found_is_127(self) -> None:
        assert exit_codes.TOOL_NOT_FOUND == 127

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130
