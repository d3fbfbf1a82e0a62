"""Required-option validation shared by every command.

Pure functions only: the result is returned to the dispatcher, which
decides how to report it and which exit code to use.
"""

from __future__ import annotations

from e2e_emulator.core.models import CommandOptions, ValidationResult


def validate_options(options: CommandOptions) -> ValidationResult:
    """Check that every option in ``options.REQUIRED`` has a non-empty value.

    Missing options are reported in declaration order.
    """
    missing = tuple(
        required
        for required in options.REQUIRED
        if not getattr(options, required.field)
    )
    return ValidationResult(missing=missing)
