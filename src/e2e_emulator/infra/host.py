"""Subprocess-backed implementation of :class:`~e2e_emulator.core.protocols.HostSystem`.

This module is the **only** place in the codebase that starts processes
or touches the filesystem.  ``OSError`` and non-zero exit statuses are
caught here and re-raised as :class:`~e2e_emulator.exceptions.E2eEmulatorError`
subclasses.
"""

from __future__ import annotations

import contextlib
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import IO

from e2e_emulator.core.models import ToolResult
from e2e_emulator.exceptions import E2eEmulatorError, ToolFailedError, ToolNotFoundError

_MISSING_TOOL_HINT = "Check ANDROID_HOME and that the SDK component is installed."


def _as_argv(argv: Sequence[str | Path]) -> list[str]:
    return [str(arg) for arg in argv]


@contextlib.contextmanager
def _open_output(path: Path) -> Iterator[IO[bytes]]:
    try:
        output = open(path, "wb")
    except OSError as exc:
        raise E2eEmulatorError(f"Cannot write {path}: {exc.strerror}") from exc
    with output:
        yield output


class SubprocessHost:
    """Concrete :class:`HostSystem` running real programs on this machine.

    Tools inherit the CLI's stdin, stdout and stderr unless told
    otherwise, so their own diagnostics reach the user unchanged.
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

        Raises
        ------
        ToolNotFoundError
            When the program does not exist.
        ToolFailedError
            When *check* is true and the tool exits non-zero.
        """
        args = _as_argv(argv)
        stdin_bytes = input_text.encode() if input_text is not None else None

        if stdout_path is not None:
            with _open_output(stdout_path) as stdout_file:
                completed = self._run(args, stdin_bytes, stdout_file)
        else:
            completed = self._run(args, stdin_bytes, subprocess.PIPE if capture else None)

        if check and completed.returncode != 0:
            raise ToolFailedError(args, completed.returncode)

        stdout = None
        if capture and stdout_path is None:
            stdout = completed.stdout.decode(errors="replace")
        return ToolResult(returncode=completed.returncode, stdout=stdout)

    @staticmethod
    def _run(
        args: list[str],
        stdin_bytes: bytes | None,
        stdout: IO[bytes] | int | None,
    ) -> subprocess.CompletedProcess[bytes]:
        try:
            return subprocess.run(args, input=stdin_bytes, stdout=stdout, check=False)
        except FileNotFoundError as exc:
            raise ToolNotFoundError(f"{args[0]} was not found", hint=_MISSING_TOOL_HINT) from exc
        except OSError as exc:
            raise E2eEmulatorError(f"Cannot run {args[0]}: {exc}") from exc

    def spawn(self, argv: Sequence[str | Path], *, log_path: Path) -> subprocess.Popen[bytes]:
        """Start *argv* detached, with stdout and stderr both written to *log_path*.

        The parent's copy of the log handle is closed as soon as the
        child holds its own.
        """
        args = _as_argv(argv)
        with _open_output(log_path) as log_file:
            try:
                return subprocess.Popen(
                    args,
                    stdin=subprocess.DEVNULL,
                    stdout=log_file,
                    stderr=subprocess.STDOUT,
                    start_new_session=True,
                )
            except FileNotFoundError as exc:
                raise ToolNotFoundError(
                    f"{args[0]} was not found", hint=_MISSING_TOOL_HINT
                ) from exc
            except OSError as exc:
                raise E2eEmulatorError(f"Cannot start {args[0]}: {exc}") from exc

    def make_directory(self, path: Path) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise E2eEmulatorError(f"Cannot create directory {path}: {exc}") from exc

    def read_text(self, path: Path) -> str:
        try:
            return Path(path).read_text(errors="replace")
        except FileNotFoundError:
            return ""
        except OSError as exc:
            raise E2eEmulatorError(f"Cannot read {path}: {exc}") from exc

    def write_text(self, path: Path, text: str) -> None:
        try:
            Path(path).write_text(text)
        except OSError as exc:
            raise E2eEmulatorError(f"Cannot write {path}: {exc}") from exc
