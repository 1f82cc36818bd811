"""CLI console helpers with optional Rich support.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``,
``demo``) keep working when it is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from yt_todo.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


def rich_available() -> bool:
	"""Whether Rich can be imported in this environment."""
	try:
		_load_rich_console_class()
	except EnvironmentError:
		return False
	return True


def escape(text: str) -> str:
	"""Escape Rich markup in *text*; identity when Rich is missing."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()
