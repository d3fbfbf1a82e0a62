"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) and usage
errors remain functional even when Rich is not installed.

Two proxies are exported: :data:`console` writes to stderr (progress,
errors) and :data:`stdout_console` writes to stdout (usage text).
"""

from __future__ import annotations

import sys
from typing import Any

from e2e_emulator.exceptions import E2eEmulatorError


class RichUnavailableError(E2eEmulatorError):
	"""Raised when Rich is needed but not importable."""


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``RichUnavailableError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise RichUnavailableError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


def escape_markup(text: str) -> str:
	"""Escape Rich markup in *text*; unchanged when Rich is not installed."""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return text
	return escape(text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def print(self, *objects: object, plain: bool = False) -> None:
		"""Render with Rich when available, else plain ``print``.

		*plain* disables markup, highlighting, emoji codes and wrapping,
		for text that did not originate here (tool output, user input).
		"""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except RichUnavailableError:
			print(*objects, file=sys.stderr if self._stderr else sys.stdout)
			return
		if plain:
			rich_console.print(
				*objects,
				markup=False,
				highlight=False,
				emoji=False,
				soft_wrap=True,
			)
		else:
			rich_console.print(*objects)


console = _ConsoleProxy(stderr=True)
stdout_console = _ConsoleProxy(stderr=False)
