"""Usage text and usage-failure rendering.

Usage output goes to stdout so CI logs show it next to the tool output
of the failing step.
"""

from __future__ import annotations

from collections.abc import Iterable

from e2e_emulator.cli import exit_codes
from e2e_emulator.cli.console import stdout_console

USAGE: str = """\
COMMANDS
    createAndStart -a API-LEVEL -d DEVICE [-t BOOT-TIMEOUT]
        creates and starts an emulator

    setupReversePort PORT
        proxies a port from the emulator to the host

    bugreport -o OUTPUT-DIRECTORY
        creates a bugreport for the emulator

    copyAppData
        copies the data directory of the test app to ./appData

DESCRIPTION
    -a API-LEVEL
        Android API level of the emulator

    -d DEVICE
        devices definition to the emulator

    -t BOOT-TIMEOUT
        seconds to wait for the emulator to boot (default: 300)

    -o OUTPUT-DIRECTORY
        directory to store outputs in

ENVIRONMENT
    ANDROID_HOME
        Android SDK root (default: ~/Android/Sdk on Linux,
        ~/Library/Android/sdk on macOS)"""


def print_usage() -> None:
    stdout_console.print(USAGE, plain=True)


def usage_failure(lines: Iterable[str] = ()) -> int:
    """Print *lines* (if any) and a blank line, then the usage text.

    Returns
    -------
    int
        :data:`exit_codes.USAGE_ERROR`, for the dispatcher to return.
    """
    lines = tuple(lines)
    for line in lines:
        stdout_console.print(line, plain=True)
    if lines:
        stdout_console.print()
    print_usage()
    return exit_codes.USAGE_ERROR
