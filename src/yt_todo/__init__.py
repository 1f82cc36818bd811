"""yt-todo — playlist resolution core for the TubeTodo checklist.

Resolves a YouTube playlist reference through the Data API or a
community mirror into one canonical model, and probes mirror
deployments for health.
"""

from yt_todo.version import __version__

__all__: list[str] = ["__version__"]
