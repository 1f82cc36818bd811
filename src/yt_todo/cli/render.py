"""Terminal rendering of playlists, discovery reports and attempt trails.

Rich tables are used when Rich is installed; otherwise a fixed-width
plain-text table is written to stderr.  Machine-readable output
(:func:`emit_json`) always goes to stdout.

Cells are ``(text, style)`` pairs rendered as :class:`rich.text.Text`,
so upstream titles containing ``[brackets]`` are never read as markup.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from dataclasses import asdict
from enum import Enum
from typing import Any

from yt_todo.cli.console import console, get_rich_console, rich_available
from yt_todo.core.models import DiscoveryReport, Instance, Playlist, ResolutionAttempt

Cell = tuple[str, str]
"""``(text, rich style)``; an empty style means unstyled."""


# ---------------------------------------------------------------------------
# Formatting helpers (pure)
# ---------------------------------------------------------------------------

def format_duration(seconds: int) -> str:
    """``330`` → ``"5:30"``; ``3723`` → ``"1:02:03"``."""
    hours, remainder = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def to_jsonable(value: Any) -> Any:
    """Convert model dataclasses (and their enums) into JSON-ready data."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if hasattr(value, "__dataclass_fields__"):
        return to_jsonable(asdict(value))
    return value


def emit_json(value: Any) -> None:
    """Write *value* as indented JSON to stdout."""
    sys.stdout.write(json.dumps(to_jsonable(value), indent=2, ensure_ascii=False))
    sys.stdout.write("\n")


def _cell(text: str, style: str = "") -> Cell:
    return (text, style)


def _instance_status(instance: Instance) -> Cell:
    if instance.healthy:
        return _cell("OK", "green")
    reason = instance.last_error.value if instance.last_error else "failed"
    if instance.stage:
        reason = f"{instance.stage}: {reason}"
    return _cell(reason, "red")


# ---------------------------------------------------------------------------
# Table output
# ---------------------------------------------------------------------------

def _print_plain_table(
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[Cell]],
) -> None:
    """Render a table without Rich."""
    widths = [
        max([len(header)] + [len(row[i][0]) for row in rows])
        for i, header in enumerate(headers)
    ]
    total = sum(widths) + 2 * (len(widths) - 1)
    print(f"\n{title}", file=sys.stderr)
    print("=" * total, file=sys.stderr)
    print("  ".join(h.ljust(w) for h, w in zip(headers, widths)), file=sys.stderr)
    print("-" * total, file=sys.stderr)
    for row in rows:
        print(
            "  ".join(text.ljust(w) for (text, _), w in zip(row, widths)),
            file=sys.stderr,
        )
    print(file=sys.stderr)


def _print_table(
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[Cell]],
    *,
    justify: Sequence[str] = (),
) -> None:
    if not rich_available():
        _print_plain_table(title, headers, rows)
        return

    from rich.table import Table
    from rich.text import Text

    table = Table(
        title=Text(title),
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    for i, header in enumerate(headers):
        table.add_column(header, justify=justify[i] if i < len(justify) else "left")
    for row in rows:
        table.add_row(*(Text(text, style=style) for text, style in row))

    rich_console = get_rich_console()
    rich_console.print()
    rich_console.print(table)
    rich_console.print()


# ---------------------------------------------------------------------------
# Public renderers
# ---------------------------------------------------------------------------

def render_playlist(playlist: Playlist) -> None:
    """Render the playlist as a numbered checklist table."""
    rows = [
        [
            _cell(str(index), "dim"),
            _cell(video.title),
            _cell(format_duration(video.duration_seconds)),
            _cell(video.uploader),
        ]
        for index, video in enumerate(playlist.videos, start=1)
    ]
    total = sum(video.duration_seconds for video in playlist.videos)
    _print_table(
        f"{playlist.title} by {playlist.uploader}",
        ("#", "Title", "Duration", "Uploader"),
        rows,
        justify=("right", "left", "right", "left"),
    )
    console.print(f"{len(playlist)} videos, {format_duration(total)} total")


def render_report(report: DiscoveryReport, *, show_all: bool = False) -> None:
    """Render working instances (and, with *show_all*, the failures too)."""
    shown: tuple[Instance, ...] = report.working + (report.failed if show_all else ())
    rows = [
        [
            _cell(inst.base_url),
            _cell(inst.backend_kind.value if inst.backend_kind else "-"),
            _cell(str(inst.popularity) if inst.popularity is not None else "-"),
            _instance_status(inst),
            _cell(inst.detail, "dim"),
        ]
        for inst in shown
    ]
    if rows:
        _print_table(
            "Mirror instances",
            ("Instance", "Kind", "Users", "Status", "Detail"),
            rows,
            justify=("left", "left", "right", "center", "left"),
        )
    working = len(report.working)
    if working:
        console.print(f"{working} of {len(report)} candidates working.")
    else:
        console.print("No working instances found.")


def render_attempts(attempts: Sequence[ResolutionAttempt]) -> None:
    """Render the request trail of one resolution."""
    rows = [
        [
            _cell(attempt.step),
            _cell(str(attempt.status) if attempt.status is not None else "-"),
            _cell("OK", "green") if attempt.ok else _cell(attempt.error or "failed", "red"),
            _cell(attempt.url, "dim"),
        ]
        for attempt in attempts
    ]
    _print_table("Requests", ("Step", "Status", "Result", "URL"), rows)
