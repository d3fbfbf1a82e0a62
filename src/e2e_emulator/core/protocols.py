"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so handlers can be exercised without an Android SDK.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from e2e_emulator.core.models import ToolResult


class BackgroundProcess(Protocol):
    """The subset of :class:`subprocess.Popen` the core relies on."""

    pid: int

    def poll(self) -> int | None:
        """Return the exit status if the process has finished, else ``None``."""
        ...  # pragma: no cover


class HostSystem(Protocol):
    """Contract for everything that touches the host machine.

    Implementations must map all OS and subprocess exceptions to
    :class:`~e2e_emulator.exceptions.E2eEmulatorError` subclasses.
    """

    def run(
        self,
        argv: Sequence[str | Path],
        *,
        input_text: str | None = None,
        stdout_path: Path | None = None,
        capture: bool = False,
        check: bool = True,
    ) -> ToolResult:
        """Run *argv* to completion.

        Parameters
        ----------
        argv:
            Program and arguments.  No shell is involved.
        input_text:
            Text written to the tool's stdin; stdin is inherited when ``None``.
        stdout_path:
            When given, the tool's stdout is written byte-for-byte to
            this file instead of the terminal.
        capture:
            Capture stdout as text into :attr:`ToolResult.stdout`.
        check:
            Raise on a non-zero exit status.

        Raises
        ------
        ToolNotFoundError
            When the program does not exist.
        ToolFailedError
            When *check* is true and the tool exits non-zero.
        """
        ...  # pragma: no cover

    def spawn(self, argv: Sequence[str | Path], *, log_path: Path) -> BackgroundProcess:
        """Start *argv* in the background with stdout and stderr sent to *log_path*.

        The child is detached into its own session and is not waited for.
        """
        ...  # pragma: no cover

    def make_directory(self, path: Path) -> None:
        """Create *path* and any missing parents; existing directories are fine."""
        ...  # pragma: no cover

    def read_text(self, path: Path) -> str:
        """Return the contents of *path*, or an empty string when absent."""
        ...  # pragma: no cover

    def write_text(self, path: Path, text: str) -> None:
        """Replace the contents of *path* with *text*."""
        ...  # pragma: no cover
