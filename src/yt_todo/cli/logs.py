"""Logging setup for the CLI.

Library modules only create loggers; handlers are installed here by the
entry point.  Rich's handler is used when available.
"""

from __future__ import annotations

import logging
import sys

from yt_todo.cli.console import get_rich_console
from yt_todo.exceptions import EnvironmentError

# httpx logs full request URLs at INFO, which would include the API key.
_QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")

_installed: logging.Handler | None = None


def configure_logging(verbose: bool = False) -> logging.Handler:
    """Install the root handler; DEBUG when *verbose*, WARNING otherwise.

    Calling it again replaces the handler installed by the previous call.
    """
    global _installed

    level = logging.DEBUG if verbose else logging.WARNING

    try:
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=get_rich_console(),
            show_path=False,
            rich_tracebacks=False,
        )
        fmt = "%(name)s: %(message)s"
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler(sys.stderr)
        fmt = "%(levelname)s %(name)s: %(message)s"

    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    if _installed is not None:
        root.removeHandler(_installed)
    root.setLevel(level)
    root.addHandler(handler)
    _installed = handler

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
