"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Data API, community mirrors
and the discovery relay.  Every raw httpx exception must be caught here
and re-raised as a :class:`~yt_todo.exceptions.YtTodoError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* The only layer that imports ``httpx``.
"""

from yt_todo.infra.factory import build_resolver
from yt_todo.infra.first_party import DataApiSource
from yt_todo.infra.http import open_async_client, open_client
from yt_todo.infra.mirror import MirrorSource
from yt_todo.infra.prober import (
    InstanceProber,
    RelayInstanceProber,
    discover,
    discover_via_relay,
)

__all__: list[str] = [
    "DataApiSource",
    "InstanceProber",
    "MirrorSource",
    "RelayInstanceProber",
    "build_resolver",
    "discover",
    "discover_via_relay",
    "open_async_client",
    "open_client",
]
