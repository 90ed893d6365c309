"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so that
bootstrap paths (``--help``, ``--version``) and the dispatch itself
keep working when Rich is not installed.  Everything is written to
stderr; stdout belongs to ruff.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from wsfmt.core.models import OutputMode
from wsfmt.exceptions import EnvironmentError

_LOG_LEVELS: dict[OutputMode, int] = {
	OutputMode.NORMAL: logging.INFO,
	OutputMode.VERBOSE: logging.DEBUG,
	OutputMode.QUIET: logging.ERROR,
}


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


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with plain-stderr fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def escape(text: str) -> str:
	"""Escape Rich markup in *text* (paths and TOML tables contain brackets)."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


def _build_log_handler() -> logging.Handler:
	try:
		from rich.logging import RichHandler

		return RichHandler(
			console=get_rich_console(),
			show_time=False,
			show_path=False,
			markup=False,
		)
	except (ModuleNotFoundError, EnvironmentError):
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
		return handler


def configure_logging(output_mode: OutputMode) -> logging.Logger:
	"""Attach a single stderr handler to the ``wsfmt`` logger.

	VERBOSE shows debug records, NORMAL shows progress (info), QUIET
	shows errors only.  Calling it again replaces the previous handler.
	"""
	logger = logging.getLogger("wsfmt")
	for handler in logger.handlers[:]:
		logger.removeHandler(handler)
	logger.setLevel(_LOG_LEVELS[output_mode])
	logger.addHandler(_build_log_handler())
	return logger
