"""Domain models for e2e-emulator.

All models are **frozen** dataclasses — immutable value objects built
once per invocation and passed explicitly to the layer that needs them.
They carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class Command(str, enum.Enum):
    """The fixed set of sub-commands understood by the dispatcher."""

    CREATE_AND_START = "createAndStart"
    SETUP_REVERSE_PORT = "setupReversePort"
    BUGREPORT = "bugreport"
    COPY_APP_DATA = "copyAppData"

    @classmethod
    def from_name(cls, name: str) -> Command | None:
        """Return the command spelled exactly *name*, or ``None``."""
        for command in cls:
            if command.value == name:
                return command
        return None


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RequiredOption:
    """Declaration of an option that must be present and non-empty."""

    field: str
    """Attribute name on the options struct."""

    flag: str
    """Flag shown to the user (e.g. ``-a``)."""

    label: str
    """Placeholder name shown to the user (e.g. ``API-LEVEL``)."""

    @property
    def message(self) -> str:
        return f"{self.label} ({self.flag}) is required and was not provided"


DEFAULT_BOOT_TIMEOUT: float = 300.0
"""Seconds to wait for a freshly started emulator to come online."""


@dataclass(frozen=True, slots=True)
class CreateAndStartOptions:
    """Options for ``createAndStart -a API-LEVEL -d DEVICE [-t BOOT-TIMEOUT]``."""

    REQUIRED: ClassVar[tuple[RequiredOption, ...]] = (
        RequiredOption("api_level", "-a", "API-LEVEL"),
        RequiredOption("device", "-d", "DEVICE"),
    )

    api_level: str | None = None
    device: str | None = None
    boot_timeout: float = DEFAULT_BOOT_TIMEOUT

    @property
    def system_image(self) -> str:
        """SDK package id of the x86_64 default system image for the API level."""
        return f"system-images;android-{self.api_level};default;x86_64"


@dataclass(frozen=True, slots=True)
class ReversePortOptions:
    """Options for ``setupReversePort PORT``."""

    REQUIRED: ClassVar[tuple[RequiredOption, ...]] = (
        RequiredOption("port", "-p", "PORT"),
    )

    port: str | None = None


@dataclass(frozen=True, slots=True)
class BugreportOptions:
    """Options for ``bugreport -o OUTPUT-DIRECTORY``."""

    REQUIRED: ClassVar[tuple[RequiredOption, ...]] = (
        RequiredOption("output_directory", "-o", "OUTPUT-DIRECTORY"),
    )

    output_directory: str | None = None


@dataclass(frozen=True, slots=True)
class CopyAppDataOptions:
    """``copyAppData`` takes no options."""

    REQUIRED: ClassVar[tuple[RequiredOption, ...]] = ()


CommandOptions = (
    CreateAndStartOptions | ReversePortOptions | BugreportOptions | CopyAppDataOptions
)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of checking an options struct for required values."""

    missing: tuple[RequiredOption, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.missing

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(option.message for option in self.missing)


# ---------------------------------------------------------------------------
# Environment context
# ---------------------------------------------------------------------------

KVM_UDEV_RULE: str = (
    'KERNEL=="kvm", GROUP="kvm", MODE="0666", OPTIONS+="static_node=kvm"'
)


@dataclass(frozen=True, slots=True)
class EnvironmentContext:
    """Process-wide constants describing the SDK and the managed emulator.

    Constructed once at startup by the infrastructure layer and passed
    to every handler.  Paths without a root are relative to the current
    working directory.
    """

    sdk_root: Path
    emulator_name: str = "cbl-dart"
    emulator_port: int = 5554
    app_bundle_id: str = "com.terwesten.gabriel.cbl_e2e_tests_flutter"
    log_path: Path = Path("emulator-logs.txt")
    pid_path: Path = Path("emulator.pid")
    app_data_path: Path = Path("appData")
    udev_rule_path: Path = Path("/etc/udev/rules.d/99-kvm4all.rules")
    partition_size_mb: int = 4096

    @property
    def serial(self) -> str:
        """``adb`` device serial of the emulator listening on :attr:`emulator_port`."""
        return f"emulator-{self.emulator_port}"

    # -- SDK tool locations ---------------------------------------------

    @property
    def sdkmanager(self) -> Path:
        return self.sdk_root / "cmdline-tools" / "latest" / "bin" / "sdkmanager"

    @property
    def avdmanager(self) -> Path:
        return self.sdk_root / "cmdline-tools" / "latest" / "bin" / "avdmanager"

    @property
    def emulator(self) -> Path:
        return self.sdk_root / "emulator" / "emulator"

    @property
    def adb(self) -> Path:
        return self.sdk_root / "platform-tools" / "adb"


# ---------------------------------------------------------------------------
# Boot readiness
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ReadinessPolicy:
    """Exponential backoff schedule for polling device readiness."""

    timeout: float = DEFAULT_BOOT_TIMEOUT
    initial_delay: float = 1.0
    max_delay: float = 10.0
    factor: float = 2.0

    def delays(self) -> Iterator[float]:
        """Yield successive sleep intervals, growing by :attr:`factor` up to the cap."""
        delay = self.initial_delay
        while True:
            yield min(delay, self.max_delay)
            delay *= self.factor


# ---------------------------------------------------------------------------
# Tool results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolResult:
    """Exit status and (optionally) captured stdout of a finished tool."""

    returncode: int
    stdout: str | None = None


@dataclass(frozen=True, slots=True)
class EmulatorLaunch:
    """Handle on the background emulator started by ``createAndStart``."""

    pid: int
    log_path: Path
    pid_path: Path
    process: Any = field(default=None, compare=False, repr=False)
    """The :class:`~e2e_emulator.core.protocols.BackgroundProcess` itself."""
