"""Custom exception hierarchy for e2e-emulator.

All exceptions that cross layer boundaries must inherit from
:class:`E2eEmulatorError`.  Raw subprocess and OS errors must NEVER
propagate beyond the infrastructure layer — they must be caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
E2eEmulatorError
├── UsageError
├── SdkRootNotFoundError
├── ToolNotFoundError
├── ToolFailedError
└── DeviceNotReadyError
    └── EmulatorExitedError
"""

from __future__ import annotations

from collections.abc import Sequence


class E2eEmulatorError(Exception):
    """Base exception for all e2e-emulator errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    and pick the process exit code from :attr:`exit_code`.
    """

    exit_code: int = 1
    """Process exit status the CLI error boundary uses for this error."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(E2eEmulatorError):
    """Raised when command-line options cannot be parsed."""


# --- Environment -----------------------------------------------------------

class SdkRootNotFoundError(E2eEmulatorError):
    """Raised when the Android SDK root cannot be determined."""


# --- External tools --------------------------------------------------------

class ToolNotFoundError(E2eEmulatorError):
    """Raised when an SDK or system binary does not exist."""

    exit_code = 127


class ToolFailedError(E2eEmulatorError):
    """Raised when an external tool exits with a non-zero status.

    The CLI exits with the tool's own status so callers (CI scripts)
    observe the same code they would have seen invoking it directly.
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        *,
        hint: str | None = None,
    ) -> None:
        self.command: tuple[str, ...] = tuple(command)
        self.returncode: int = returncode
        super().__init__(
            f"{self.command[0] if self.command else '<empty>'} "
            f"exited with status {returncode}",
            hint=hint,
        )

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        # A signal-terminated child reports a negative code.
        return self.returncode if self.returncode > 0 else 1


# --- Device readiness ------------------------------------------------------

class DeviceNotReadyError(E2eEmulatorError):
    """Raised when the emulator does not come online within the boot timeout."""


class EmulatorExitedError(DeviceNotReadyError):
    """Raised when the emulator process dies before the device is ready."""
