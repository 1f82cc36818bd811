"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so the resolver stays free of any HTTP import.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from yt_todo.core.models import Resolution


class PlaylistSource(Protocol):
    """Contract for backend adapters.

    Any object that implements :meth:`fetch_playlist` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def fetch_playlist(self, playlist_id: str) -> Resolution:
        """Fetch *playlist_id* and return it in canonical form.

        Implementations must map all transport exceptions to
        :class:`~yt_todo.exceptions.YtTodoError` subclasses and must not
        return partial results.

        Raises
        ------
        BackendError
            When any upstream request fails or returns an unusable body.
        """
        ...  # pragma: no cover


FirstPartyFactory = Callable[[str], PlaylistSource]
"""Builds a first-party source for a credential."""

MirrorFactory = Callable[[str], PlaylistSource]
"""Builds a mirror source for a mirror base URL."""
