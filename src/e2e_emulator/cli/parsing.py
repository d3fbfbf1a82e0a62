"""Per-command option parsers.

Each command owns a small :mod:`argparse` parser of single-letter flags.
Parsing never exits the process: failures raise
:class:`~e2e_emulator.exceptions.UsageError` and the dispatcher decides
what to print.  Presence of required options is checked afterwards by
:func:`~e2e_emulator.core.options.validate_options`.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from typing import NoReturn

from e2e_emulator.core.models import (
    DEFAULT_BOOT_TIMEOUT,
    BugreportOptions,
    Command,
    CommandOptions,
    CopyAppDataOptions,
    CreateAndStartOptions,
    ReversePortOptions,
)
from e2e_emulator.exceptions import UsageError


class _OptionParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of printing and exiting."""

    def __init__(self, command: Command) -> None:
        super().__init__(prog=command.value, add_help=False, allow_abbrev=False)

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _positive_seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}") from None
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"BOOT-TIMEOUT must be positive, got {value!r}")
    return seconds


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def _parse_create_and_start(args: Sequence[str]) -> CreateAndStartOptions:
    parser = _OptionParser(Command.CREATE_AND_START)
    parser.add_argument("-a", dest="api_level", metavar="API-LEVEL")
    parser.add_argument("-d", dest="device", metavar="DEVICE")
    parser.add_argument(
        "-t",
        dest="boot_timeout",
        metavar="BOOT-TIMEOUT",
        type=_positive_seconds,
        default=DEFAULT_BOOT_TIMEOUT,
    )
    ns = parser.parse_args(args)
    return CreateAndStartOptions(
        api_level=ns.api_level,
        device=ns.device,
        boot_timeout=ns.boot_timeout,
    )


def _parse_setup_reverse_port(args: Sequence[str]) -> ReversePortOptions:
    parser = _OptionParser(Command.SETUP_REVERSE_PORT)
    parser.add_argument("port", nargs="?", metavar="PORT")
    ns = parser.parse_args(args)
    return ReversePortOptions(port=ns.port)


def _parse_bugreport(args: Sequence[str]) -> BugreportOptions:
    parser = _OptionParser(Command.BUGREPORT)
    parser.add_argument("-o", dest="output_directory", metavar="OUTPUT-DIRECTORY")
    ns = parser.parse_args(args)
    return BugreportOptions(output_directory=ns.output_directory)


def _parse_copy_app_data(args: Sequence[str]) -> CopyAppDataOptions:
    _OptionParser(Command.COPY_APP_DATA).parse_args(args)
    return CopyAppDataOptions()


_PARSERS: dict[Command, Callable[[Sequence[str]], CommandOptions]] = {
    Command.CREATE_AND_START: _parse_create_and_start,
    Command.SETUP_REVERSE_PORT: _parse_setup_reverse_port,
    Command.BUGREPORT: _parse_bugreport,
    Command.COPY_APP_DATA: _parse_copy_app_data,
}


def parse_options(command: Command, args: Sequence[str]) -> CommandOptions:
    """Parse the arguments following the command name.

    Raises
    ------
    UsageError
        On an unknown flag, a flag without its value, or a surplus
        positional argument.
    """
    return _PARSERS[command](list(args))
