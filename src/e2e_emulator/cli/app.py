"""CLI application entry point and command dispatch for e2e-emulator.

This module is the **sole error boundary** for the entire application.
It catches :class:`~e2e_emulator.exceptions.E2eEmulatorError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No tool invocations live here; all work is delegated to
  :class:`~e2e_emulator.core.emulator_service.EmulatorService`.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence

from e2e_emulator.cli import exit_codes
from e2e_emulator.cli.console import console, escape_markup
from e2e_emulator.cli.parsing import parse_options
from e2e_emulator.cli.usage import print_usage, usage_failure
from e2e_emulator.core.emulator_service import EmulatorService
from e2e_emulator.core.models import Command, EnvironmentContext
from e2e_emulator.core.options import validate_options
from e2e_emulator.exceptions import E2eEmulatorError, UsageError
from e2e_emulator.infra.host import SubprocessHost
from e2e_emulator.infra.sdk_paths import load_environment_context
from e2e_emulator.version import __version__

_HELP_FLAGS = ("-h", "--help")
_VERSION_FLAGS = ("-V", "--version")


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _report(message: str) -> None:
    console.print(message, plain=True)


def _build_service(context: EnvironmentContext) -> EmulatorService:
    return EmulatorService(context, SubprocessHost(), reporter=_report)


_HANDLERS: dict[Command, str] = {
    Command.CREATE_AND_START: "create_and_start",
    Command.SETUP_REVERSE_PORT: "setup_reverse_port",
    Command.BUGREPORT: "bugreport",
    Command.COPY_APP_DATA: "copy_app_data",
}
"""Maps each command to the :class:`EmulatorService` method implementing it."""


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the e2e-emulator CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    environ:
        Environment used to locate the Android SDK; ``os.environ`` when
        ``None``.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    SdkRootNotFoundError
        Before any command is matched, when ``ANDROID_HOME`` is unset on a
        platform without a default SDK location.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    if args and args[0] in _HELP_FLAGS:
        print_usage()
        return exit_codes.SUCCESS
    if args and args[0] in _VERSION_FLAGS:
        console.print(f"e2e-emulator {__version__}", plain=True)
        return exit_codes.SUCCESS

    context = load_environment_context(environ)

    if not args:
        return usage_failure()

    name, rest = args[0], args[1:]
    command = Command.from_name(name)
    if command is None:
        return usage_failure([f"Unknown command {name}"])

    try:
        options = parse_options(command, rest)
    except UsageError as exc:
        console.print(f"{command.value}: {exc}", plain=True)
        return usage_failure()

    validation = validate_options(options)
    if not validation.ok:
        return usage_failure(validation.messages)

    service = _build_service(context)
    getattr(service, _HANDLERS[command])(options)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.  A failing SDK tool
    ends the process with that tool's own exit status.
    """
    try:
        code = main()
        sys.exit(code)
    except E2eEmulatorError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
