"""Shared pytest fixtures and configuration for the e2e-emulator test suite.

Guidelines
----------
* No Android SDK, device or network access in any test.
* Core tests run against :class:`FakeHost` — no subprocesses.
* Infra tests only spawn ``sys.executable``.
* ``ANDROID_HOME`` is pinned per test so results do not depend on OS state.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from e2e_emulator.core.models import EnvironmentContext, ToolResult
from e2e_emulator.exceptions import ToolFailedError


@dataclass
class FakeProcess:
    pid: int = 4242
    exit_status: int | None = None

    def poll(self) -> int | None:
        return self.exit_status


@dataclass
class Call:
    argv: tuple[str, ...]
    input_text: str | None = None
    stdout_path: Path | None = None


@dataclass
class FakeHost:
    """In-memory :class:`~e2e_emulator.core.protocols.HostSystem`.

    ``get_state`` is consumed one entry per ``adb get-state`` probe; the
    last entry repeats.  ``fail_on`` makes the first call whose argv
    contains that token exit with ``fail_status``.
    """

    get_state: list[str] = field(default_factory=lambda: ["device"])
    fail_on: str | None = None
    fail_status: int = 3
    process: FakeProcess = field(default_factory=FakeProcess)
    files: dict[Path, str] = field(default_factory=dict)
    calls: list[Call] = field(default_factory=list)
    spawned: list[tuple[tuple[str, ...], Path]] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)

    def run(
        self,
        argv: Sequence[str | Path],
        *,
        input_text: str | None = None,
        stdout_path: Path | None = None,
        capture: bool = False,
        check: bool = True,
    ) -> ToolResult:
        args = tuple(str(a) for a in argv)
        self.calls.append(Call(args, input_text, stdout_path))
        if args[-1] == "get-state":
            state = self.get_state.pop(0) if len(self.get_state) > 1 else self.get_state[0]
            returncode = 0 if state == "device" else 1
            return ToolResult(returncode=returncode, stdout=state + "\n")
        if self.fail_on is not None and self.fail_on in args:
            if check:
                raise ToolFailedError(args, self.fail_status)
            return ToolResult(returncode=self.fail_status)
        return ToolResult(returncode=0, stdout="" if capture else None)

    def spawn(self, argv: Sequence[str | Path], *, log_path: Path) -> FakeProcess:
        self.spawned.append((tuple(str(a) for a in argv), log_path))
        return self.process

    def make_directory(self, path: Path) -> None:
        self.directories.append(path)

    def read_text(self, path: Path) -> str:
        return self.files.get(path, "")

    def write_text(self, path: Path, text: str) -> None:
        self.files[path] = text

    # -- helpers --------------------------------------------------------

    def argvs(self) -> list[tuple[str, ...]]:
        return [call.argv for call in self.calls]


@pytest.fixture()
def sdk_root(tmp_path: Path) -> Path:
    root = tmp_path / "sdk"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def android_home(monkeypatch: pytest.MonkeyPatch, sdk_root: Path) -> Path:
    monkeypatch.setenv("ANDROID_HOME", str(sdk_root))
    return sdk_root


@pytest.fixture()
def context(sdk_root: Path) -> EnvironmentContext:
    return EnvironmentContext(sdk_root=sdk_root)


@pytest.fixture()
def host() -> FakeHost:
    return FakeHost()
