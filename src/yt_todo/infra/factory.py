"""Wire the httpx-backed adapters into the core resolver."""

from __future__ import annotations

import httpx

from yt_todo.core.resolver import PlaylistResolver
from yt_todo.infra.first_party import DataApiSource
from yt_todo.infra.mirror import MirrorSource


def build_resolver(client: httpx.Client) -> PlaylistResolver:
    """Return a :class:`PlaylistResolver` whose adapters share *client*."""
    return PlaylistResolver(
        first_party_factory=lambda api_key: DataApiSource(client, api_key),
        mirror_factory=lambda base_url: MirrorSource(client, base_url),
    )
