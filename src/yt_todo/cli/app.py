"""CLI application entry point and command routing for yt-todo.

This module is the **sole error boundary** for the entire application.
It catches :class:`~yt_todo.exceptions.YtTodoError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core and
  infrastructure layers.
* Infrastructure (and therefore httpx) is imported inside the handlers,
  so ``--help``, ``--version`` and ``demo`` never touch the network stack.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from yt_todo.cli import exit_codes
from yt_todo.cli.console import console, escape
from yt_todo.cli.logs import configure_logging
from yt_todo.cli.render import (
    emit_json,
    render_attempts,
    render_playlist,
    render_report,
)
from yt_todo.config import load_settings
from yt_todo.exceptions import YtTodoError
from yt_todo.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _positive_seconds(value: str) -> float:
    """argparse type for timeouts: a number of seconds greater than zero."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number of seconds: {value!r}") from None
    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value!r}")
    return seconds


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands:
    * ``yt-todo resolve <url-or-id>``  resolve a playlist
    * ``yt-todo demo``                 print the built-in sample playlist
    * ``yt-todo discover``             probe mirror instances
    """
    parser = argparse.ArgumentParser(
        prog="yt-todo",
        description="Turn a YouTube playlist into a checklist of videos.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every upstream request to stderr.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    resolve = sub.add_parser("resolve", help="Resolve a playlist URL or ID.")
    resolve.add_argument("reference", help="Playlist URL or bare playlist ID.")
    resolve.add_argument(
        "--api-key",
        default=None,
        help="YouTube Data API key (default: $YT_TODO_API_KEY).",
    )
    resolve.add_argument(
        "--mirror",
        default=None,
        help="Mirror base URL used without an API key (default: $YT_TODO_MIRROR_BASE).",
    )
    resolve.add_argument(
        "--timeout",
        type=_positive_seconds,
        default=None,
        help="Per-request timeout in seconds.",
    )
    resolve.add_argument("--json", action="store_true", help="Print JSON to stdout.")
    resolve.add_argument(
        "--trace",
        action="store_true",
        help="Show every upstream request made.",
    )

    demo = sub.add_parser("demo", help="Print the built-in sample playlist.")
    demo.add_argument("--json", action="store_true", help="Print JSON to stdout.")

    discover = sub.add_parser("discover", help="Probe public mirror instances.")
    discover.add_argument(
        "--relay",
        action="store_true",
        help="Probe Invidious hosts through a relay, ranked by user count.",
    )
    discover.add_argument(
        "--relay-url",
        default=None,
        help="Relay base URL (default: $YT_TODO_RELAY_URL).",
    )
    discover.add_argument(
        "--timeout",
        type=_positive_seconds,
        default=None,
        help="Per-candidate timeout in seconds.",
    )
    discover.add_argument(
        "--all",
        action="store_true",
        dest="show_all",
        help="Also list candidates that failed.",
    )
    discover.add_argument("--json", action="store_true", help="Print JSON to stdout.")

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_resolve(args: argparse.Namespace) -> int:
    """Resolve one playlist through the selected backend."""
    from yt_todo.infra.factory import build_resolver
    from yt_todo.infra.http import open_client

    settings = load_settings().with_overrides(
        api_key=args.api_key,
        mirror_base=args.mirror,
        timeout=args.timeout,
    )

    with open_client(settings.timeout) as client:
        resolver = build_resolver(client)
        resolution = resolver.resolve_with_trace(
            args.reference,
            settings.api_key,
            settings.mirror_base,
        )

    if args.trace:
        render_attempts(resolution.attempts)
    if args.json:
        emit_json(resolution.playlist)
    else:
        render_playlist(resolution.playlist)
    return exit_codes.SUCCESS


def _handle_demo(args: argparse.Namespace) -> int:
    """Print the sample playlist without any network access."""
    from yt_todo.core.demo import demo_playlist

    playlist = demo_playlist()
    if args.json:
        emit_json(playlist)
    else:
        render_playlist(playlist)
    return exit_codes.SUCCESS


def _handle_discover(args: argparse.Namespace) -> int:
    """Probe mirror candidates and report which ones work."""
    from yt_todo.infra.prober import discover, discover_via_relay

    settings = load_settings().with_overrides(
        probe_timeout=args.timeout,
        relay_url=args.relay_url,
    )
    timeout_kwargs = (
        {"timeout": settings.probe_timeout} if settings.probe_timeout is not None else {}
    )

    if args.relay:
        console.print(f"Probing Invidious hosts via {escape(settings.relay_url)}…")
        report = discover_via_relay(relay=settings.relay_url, **timeout_kwargs)
    else:
        console.print("Probing mirror instances…")
        report = discover(**timeout_kwargs)

    if args.json:
        emit_json(report.working + report.failed if args.show_all else report.working)
    else:
        render_report(report, show_all=args.show_all)
    return exit_codes.SUCCESS


_HANDLERS = {
    "resolve": _handle_resolve,
    "demo": _handle_demo,
    "discover": _handle_discover,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the yt-todo CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    logger.debug("Running command %s", args.command)
    return _HANDLERS[args.command](args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except YtTodoError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
