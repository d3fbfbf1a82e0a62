"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed without error."""

GENERAL_ERROR: int = 1
"""A known E2eEmulatorError was caught. User-facing message was displayed."""

USAGE_ERROR: int = 1
"""Missing or unknown command, unknown flag, or missing required option."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

TOOL_NOT_FOUND: int = 127
"""An SDK binary could not be executed.  Matches the shell's convention."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
