"""Tests for PlaylistResolver and source selection (core/resolver.py).

Adapters are replaced with in-memory fakes; no HTTP at all.  Coverage:

* Credential-length heuristic picks the backend family
* Invalid references fail before any adapter is built
* Adapter errors propagate unchanged; foreign errors are wrapped
* Repeated resolution of the same input yields equal results
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from yt_todo.core.candidates import DEFAULT_MIRROR_BASE
from yt_todo.core.models import Playlist, Resolution, SourceKind, Video
from yt_todo.core.resolver import MIN_CREDENTIAL_LENGTH, PlaylistResolver, select_source
from yt_todo.exceptions import BackendError, InputError
from yt_todo.infra.factory import build_resolver

PLAYLIST_ID = "PL4cUxeGkcC9l0Jnx0_oMEa_J8v_z_yD5E"
PLAYLIST_URL = f"https://www.youtube.com/playlist?list={PLAYLIST_ID}"
LONG_KEY = "k" * MIN_CREDENTIAL_LENGTH


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _StaticSource:
    """Adapter that returns a fixed playlist and records requested ids."""

    def __init__(self, source: SourceKind) -> None:
        self.source = source
        self.requested: list[str] = []

    def fetch_playlist(self, playlist_id: str) -> Resolution:
        self.requested.append(playlist_id)
        video = Video(
            title="Only",
            url="/watch?v=x",
            duration_seconds=42,
            thumbnail_url="https://i.ytimg.com/vi/x/hqdefault.jpg",
            uploader="U",
        )
        return Resolution(
            playlist=Playlist(id=playlist_id, title="T", uploader="U", videos=(video,)),
            source=self.source,
        )


class _RaisingSource:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def fetch_playlist(self, playlist_id: str) -> Resolution:
        raise self.exc


def _resolver() -> tuple[PlaylistResolver, MagicMock, MagicMock]:
    first_party = MagicMock(side_effect=lambda key: _StaticSource(SourceKind.FIRST_PARTY))
    mirror = MagicMock(side_effect=lambda base: _StaticSource(SourceKind.MIRROR))
    return PlaylistResolver(first_party, mirror), first_party, mirror


# ---------------------------------------------------------------------------
# select_source
# ---------------------------------------------------------------------------

class TestSelectSource:
    @pytest.mark.parametrize("credential", [None, "", "short", "k" * 20, "   " + "k" * 20 + "  "])
    def test_short_or_absent_selects_mirror(self, credential: str | None) -> None:
        assert select_source(credential) is SourceKind.MIRROR

    @pytest.mark.parametrize("credential", ["k" * 21, "AIzaSyA-0123456789abcdefghijklmnop"])
    def test_long_selects_first_party(self, credential: str) -> None:
        assert select_source(credential) is SourceKind.FIRST_PARTY


# ---------------------------------------------------------------------------
# PlaylistResolver
# ---------------------------------------------------------------------------

class TestResolve:
    def test_mirror_without_credential(self) -> None:
        resolver, first_party, mirror = _resolver()
        resolution = resolver.resolve_with_trace(PLAYLIST_URL)
        assert resolution.source is SourceKind.MIRROR
        assert resolution.playlist.id == PLAYLIST_ID
        mirror.assert_called_once_with(DEFAULT_MIRROR_BASE)
        first_party.assert_not_called()

    def test_custom_mirror_base(self) -> None:
        resolver, _, mirror = _resolver()
        resolver.resolve(PLAYLIST_ID, None, "https://mirror.test")
        mirror.assert_called_once_with("https://mirror.test")

    def test_first_party_with_long_credential(self) -> None:
        resolver, first_party, mirror = _resolver()
        resolution = resolver.resolve_with_trace(PLAYLIST_ID, f"  {LONG_KEY}  ")
        assert resolution.source is SourceKind.FIRST_PARTY
        first_party.assert_called_once_with(LONG_KEY)
        mirror.assert_not_called()

    def test_resolve_returns_playlist(self) -> None:
        resolver, _, _ = _resolver()
        playlist = resolver.resolve(PLAYLIST_URL)
        assert isinstance(playlist, Playlist)
        assert len(playlist) == 1

class TestErrors:
    @pytest.mark.parametrize("reference", ["", "nope", "https://www.youtube.com/watch?v=abc"])
    def test_invalid_reference_never_builds_adapter(self, reference: str) -> None:
        resolver, first_party, mirror = _resolver()
        with pytest.raises(InputError):
            resolver.resolve(reference, LONG_KEY)
        first_party.assert_not_called()
        mirror.assert_not_called()

    def test_backend_error_propagates_unchanged(self) -> None:
        original = BackendError("API Error: 500", status=500)
        resolver = PlaylistResolver(
            lambda key: _RaisingSource(original),
            lambda base: _RaisingSource(original),
        )
        with pytest.raises(BackendError) as exc_info:
            resolver.resolve(PLAYLIST_ID)
        assert exc_info.value is original

    def test_foreign_error_is_wrapped(self) -> None:
        resolver = PlaylistResolver(
            lambda key: _RaisingSource(KeyError("snippet")),
            lambda base: _RaisingSource(KeyError("snippet")),
        )
        with pytest.raises(BackendError, match="Unexpected backend error") as exc_info:
            resolver.resolve(PLAYLIST_ID, LONG_KEY)
        assert isinstance(exc_info.value.__cause__, KeyError)


# ---------------------------------------------------------------------------
# Idempotence through the real adapters
# ---------------------------------------------------------------------------

def _data_api(request: httpx.Request) -> httpx.Response:
    """Three-page Data API with per-video durations."""
    endpoint = request.url.path.rsplit("/", 1)[-1]
    if endpoint == "playlists":
        return httpx.Response(
            200, json={"items": [{"snippet": {"title": "Course", "channelTitle": "Chan"}}]}
        )
    if endpoint == "playlistItems":
        pages: dict[str | None, tuple[list[str], str | None]] = {
            None: (["v1", "v2"], "p2"),
            "p2": (["v3"], "p3"),
            "p3": (["v4"], None),
        }
        ids, next_token = pages[request.url.params.get("pageToken")]
        body: dict[str, Any] = {
            "items": [
                {
                    "snippet": {
                        "title": f"Video {vid}",
                        "resourceId": {"kind": "youtube#video", "videoId": vid},
                    }
                }
                for vid in ids
            ]
        }
        if next_token:
            body["nextPageToken"] = next_token
        return httpx.Response(200, json=body)
    if endpoint == "videos":
        ids = request.url.params["id"].split(",")
        return httpx.Response(
            200,
            json={
                "items": [
                    {"id": vid, "contentDetails": {"duration": f"PT{n}M"}}
                    for n, vid in enumerate(ids, start=1)
                ]
            },
        )
    return httpx.Response(404)


def _mirror_b_only(request: httpx.Request) -> httpx.Response:
    """Mirror where shape A is missing and shape B answers."""
    if request.url.path == f"/api/v1/playlists/{PLAYLIST_ID}":
        return httpx.Response(
            200,
            json={
                "title": "Inv",
                "author": "Auth",
                "videos": [
                    {"title": "One", "videoId": "aaaaaaaaaaa", "lengthSeconds": 10},
                    {"title": "Two", "videoId": "bbbbbbbbbbb", "lengthSeconds": 20},
                ],
            },
        )
    return httpx.Response(404)


class TestIdempotence:
    def test_data_api_pages_resolve_equal(self) -> None:
        with httpx.Client(transport=httpx.MockTransport(_data_api)) as client:
            resolver = build_resolver(client)
            first = resolver.resolve(PLAYLIST_URL, LONG_KEY)
            second = resolver.resolve(PLAYLIST_URL, LONG_KEY)

        assert len(first) == 4
        assert [v.duration_seconds for v in first.videos] == [60, 120, 60, 60]
        assert first == second

    def test_mirror_fallback_resolves_equal(self) -> None:
        with httpx.Client(transport=httpx.MockTransport(_mirror_b_only)) as client:
            resolver = build_resolver(client)
            first = resolver.resolve_with_trace(PLAYLIST_URL, None, "https://mirror.test")
            second = resolver.resolve_with_trace(PLAYLIST_URL, None, "https://mirror.test")

        assert [a.status for a in first.attempts] == [404, 200]
        assert [v.title for v in first.playlist.videos] == ["One", "Two"]
        assert first.playlist == second.playlist
        assert first == second
