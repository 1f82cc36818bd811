"""YouTube Data API v3 implementation of :class:`~yt_todo.core.protocols.PlaylistSource`.

Every request goes through :meth:`DataApiSource._get`, which records a
:class:`~yt_todo.core.models.ResolutionAttempt` and converts any
failure into :class:`~yt_todo.exceptions.BackendError`.  Nothing raw
from httpx escapes this module, and the API key never appears in a
logged or recorded URL.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from yt_todo.core.durations import parse_duration
from yt_todo.core.models import Playlist, Resolution, ResolutionAttempt, SourceKind
from yt_todo.core.normalize import (
    dict_items,
    is_video_item,
    item_video_id,
    text_field,
    video_from_playlist_item,
)
from yt_todo.core.pagination import Page, collect_pages
from yt_todo.exceptions import BackendError
from yt_todo.infra.http import redact

logger = logging.getLogger(__name__)

DATA_API_BASE: str = "https://www.googleapis.com/youtube/v3"
PAGE_SIZE: int = 50


class DataApiSource:
    """Concrete :class:`PlaylistSource` backed by the metered Data API.

    Usage::

        with open_client(10.0) as client:
            resolution = DataApiSource(client, api_key).fetch_playlist("PL…")

    The client is owned by the caller.
    """

    def __init__(
        self,
        client: httpx.Client,
        api_key: str,
        *,
        api_base: str = DATA_API_BASE,
    ) -> None:
        self._client: httpx.Client = client
        self._api_key: str = api_key
        self._api_base: str = api_base.rstrip("/")

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch_playlist(self, playlist_id: str) -> Resolution:
        """Fetch metadata and every page of *playlist_id*.

        Raises
        ------
        BackendError
            When the playlist does not exist or any request fails.
        """
        attempts: list[ResolutionAttempt] = []

        info = self._get(
            "playlists",
            {"part": "snippet", "id": playlist_id},
            attempts,
        )
        found = dict_items(info.get("items"))
        if not found:
            raise BackendError(
                "Playlist not found",
                status=404,
                stage="playlists",
                attempts=tuple(attempts),
                hint="The playlist may be private or the ID may be mistyped.",
            )
        snippet: dict[str, Any] = found[0].get("snippet") or {}
        channel_title = text_field(snippet, "channelTitle")

        def fetch_page(token: str | None) -> Page:
            return self._fetch_page(playlist_id, token, channel_title, attempts)

        videos = collect_pages(fetch_page)

        playlist = Playlist(
            id=playlist_id,
            title=text_field(snippet, "title"),
            uploader=channel_title,
            description=text_field(snippet, "description"),
            videos=videos,
        )
        return Resolution(
            playlist=playlist,
            source=SourceKind.FIRST_PARTY,
            attempts=tuple(attempts),
        )

    # ------------------------------------------------------------------
    # Paging and enrichment
    # ------------------------------------------------------------------

    def _fetch_page(
        self,
        playlist_id: str,
        token: str | None,
        default_uploader: str,
        attempts: list[ResolutionAttempt],
    ) -> Page:
        params: dict[str, Any] = {
            "part": "snippet,contentDetails",
            "maxResults": PAGE_SIZE,
            "playlistId": playlist_id,
        }
        if token:
            params["pageToken"] = token
        data = self._get("playlistItems", params, attempts)

        items = [item for item in dict_items(data.get("items")) if is_video_item(item)]
        video_ids = [item_video_id(item) for item in items]
        durations = self._fetch_durations(video_ids, attempts) if video_ids else {}

        return Page(
            videos=tuple(
                video_from_playlist_item(item, durations, default_uploader)
                for item in items
            ),
            next_token=str(data.get("nextPageToken") or ""),
        )

    def _fetch_durations(
        self,
        video_ids: list[str],
        attempts: list[ResolutionAttempt],
    ) -> dict[str, int]:
        """One batched lookup; ids missing from the answer are simply absent."""
        data = self._get(
            "videos",
            {"part": "contentDetails", "id": ",".join(video_ids)},
            attempts,
        )
        durations: dict[str, int] = {}
        for entry in dict_items(data.get("items")):
            video_id = entry.get("id")
            if not video_id:
                continue
            details = entry.get("contentDetails") or {}
            durations[str(video_id)] = parse_duration(details.get("duration"))
        return durations

    # ------------------------------------------------------------------
    # Request boundary
    # ------------------------------------------------------------------

    def _get(
        self,
        endpoint: str,
        params: dict[str, Any],
        attempts: list[ResolutionAttempt],
    ) -> dict[str, Any]:
        """GET ``{api_base}/{endpoint}`` and return the decoded JSON object."""
        url = f"{self._api_base}/{endpoint}"
        safe_url = redact(httpx.URL(url, params=params))
        logger.debug("GET %s", safe_url)

        try:
            response = self._client.get(url, params={**params, "key": self._api_key})
        except httpx.HTTPError as exc:
            attempts.append(ResolutionAttempt(endpoint, safe_url, None, False, str(exc)))
            raise BackendError(
                f"YouTube API request failed: {exc}",
                stage=endpoint,
                attempts=tuple(attempts),
                hint="Check your network connection.",
            ) from exc

        if not response.is_success:
            message = self._error_message(response)
            attempts.append(
                ResolutionAttempt(endpoint, safe_url, response.status_code, False, message)
            )
            logger.info("%s failed with HTTP %d: %s", endpoint, response.status_code, message)
            raise BackendError(
                message,
                status=response.status_code,
                stage=endpoint,
                attempts=tuple(attempts),
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            attempts.append(
                ResolutionAttempt(
                    endpoint, safe_url, response.status_code, False, "Malformed response body"
                )
            )
            raise BackendError(
                f"YouTube API returned a malformed {endpoint} response.",
                status=response.status_code,
                stage=endpoint,
                attempts=tuple(attempts),
            )

        attempts.append(ResolutionAttempt(endpoint, safe_url, response.status_code, True))
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Prefer the API's own ``error.message``; fall back to the status."""
        fallback = f"YouTube API Error: {response.status_code}"
        try:
            payload = response.json()
        except ValueError:
            return fallback
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return fallback
