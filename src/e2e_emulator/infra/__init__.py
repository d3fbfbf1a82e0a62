"""Infrastructure layer — host system integration.

This layer wraps all interaction with the operating system, the
environment and the Android SDK binaries.  Every raw ``OSError`` must be
caught here and re-raised as an
:class:`~e2e_emulator.exceptions.E2eEmulatorError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from e2e_emulator.infra.host import SubprocessHost
from e2e_emulator.infra.sdk_paths import load_environment_context, resolve_sdk_root

__all__: list[str] = [
    "SubprocessHost",
    "load_environment_context",
    "resolve_sdk_root",
]
