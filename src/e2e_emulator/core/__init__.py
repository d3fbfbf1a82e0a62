"""Core / service layer — command semantics independent of the host.

Rules
-----
* No ``print()`` calls.
* No filesystem or subprocess I/O; everything goes through
  :class:`~e2e_emulator.core.protocols.HostSystem`.
* No imports from ``cli`` or ``infra``.
"""

from e2e_emulator.core.emulator_service import EmulatorService
from e2e_emulator.core.models import (
    BugreportOptions,
    Command,
    CopyAppDataOptions,
    CreateAndStartOptions,
    EmulatorLaunch,
    EnvironmentContext,
    ReadinessPolicy,
    ReversePortOptions,
    ToolResult,
    ValidationResult,
)
from e2e_emulator.core.options import validate_options
from e2e_emulator.core.protocols import BackgroundProcess, HostSystem

__all__: list[str] = [
    "BackgroundProcess",
    "BugreportOptions",
    "Command",
    "CopyAppDataOptions",
    "CreateAndStartOptions",
    "EmulatorLaunch",
    "EmulatorService",
    "EnvironmentContext",
    "HostSystem",
    "ReadinessPolicy",
    "ReversePortOptions",
    "ToolResult",
    "ValidationResult",
    "validate_options",
]
