"""Infrastructure: Android SDK root discovery.

The SDK root comes from ``ANDROID_HOME`` when set, otherwise from the
conventional Android Studio install location of the host platform.

Rules
-----
* Only Linux and macOS have a default location.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from pathlib import Path

from e2e_emulator.core.models import EnvironmentContext
from e2e_emulator.exceptions import SdkRootNotFoundError

ANDROID_HOME_VAR: str = "ANDROID_HOME"

_DEFAULT_SDK_ROOTS: dict[str, str] = {
    "darwin": "~/Library/Android/sdk",
    "linux": "~/Android/Sdk",
}


def resolve_sdk_root(environ: Mapping[str, str] | None = None) -> Path:
    """Return the Android SDK root directory.

    Raises
    ------
    SdkRootNotFoundError
        When ``ANDROID_HOME`` is unset and the platform has no default.
    """
    env = os.environ if environ is None else environ
    configured = env.get(ANDROID_HOME_VAR)
    if configured:
        return Path(configured).expanduser()

    system = platform.system().lower()
    default = _DEFAULT_SDK_ROOTS.get(system)
    if default is None:
        raise SdkRootNotFoundError(
            f"The environment variable {ANDROID_HOME_VAR} needs to be set",
            hint=f"Point {ANDROID_HOME_VAR} at your Android SDK installation.",
        )
    return Path(default).expanduser()


def load_environment_context(
    environ: Mapping[str, str] | None = None,
) -> EnvironmentContext:
    """Build the process-wide :class:`EnvironmentContext`."""
    return EnvironmentContext(sdk_root=resolve_sdk_root(environ))
