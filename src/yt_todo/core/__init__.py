"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No network I/O and no ``httpx`` import.
* No imports from ``cli`` or ``infra``.
* Functions are typed and deterministic.

Only the model and protocol modules are re-exported here; services are
imported from their own modules.
"""

from yt_todo.core.models import (
    BackendKind,
    Candidate,
    DiscoveryReport,
    Instance,
    Playlist,
    ProbeFailure,
    Resolution,
    ResolutionAttempt,
    SourceKind,
    Video,
)
from yt_todo.core.protocols import PlaylistSource

__all__: list[str] = [
    "BackendKind",
    "Candidate",
    "DiscoveryReport",
    "Instance",
    "Playlist",
    "PlaylistSource",
    "ProbeFailure",
    "Resolution",
    "ResolutionAttempt",
    "SourceKind",
    "Video",
]
