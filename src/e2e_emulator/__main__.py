"""Allow ``python -m e2e_emulator`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m e2e_emulator`` behaves identically to the
``e2e-emulator`` console script.
"""

from __future__ import annotations

from e2e_emulator.cli.app import cli

if __name__ == "__main__":
    cli()
