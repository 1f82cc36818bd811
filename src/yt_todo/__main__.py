"""Allow ``python -m yt_todo`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m yt_todo`` behaves identically to the ``yt-todo`` console
script.
"""

from __future__ import annotations

from yt_todo.cli.app import cli

if __name__ == "__main__":
    cli()
