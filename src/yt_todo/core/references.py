"""Playlist reference normalization.

Accepts either a full URL carrying a ``list`` query parameter or a bare
playlist identifier.  Everything else is rejected with
:class:`~yt_todo.exceptions.InputError` before any network call.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from yt_todo.exceptions import InputError

_BARE_ID_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z0-9_-]{10,}")


def extract_playlist_id(reference: str) -> str:
    """Return the playlist identifier contained in *reference*.

    Raises
    ------
    InputError
        If *reference* is empty, is a URL without a ``list`` parameter,
        or is not a bare identifier of 10+ ``[A-Za-z0-9_-]`` characters.
    """
    stripped = reference.strip()
    if not stripped:
        raise InputError("Playlist reference must not be empty.")

    parsed = urlparse(stripped)
    if parsed.scheme and parsed.netloc:
        values = parse_qs(parsed.query).get("list", [])
        playlist_id = next((value for value in values if value), None)
        if playlist_id is None:
            raise InputError(
                f"Invalid YouTube Playlist URL: {stripped}",
                hint="The URL must contain a 'list' parameter, e.g. ?list=PL…",
            )
        return playlist_id

    if _BARE_ID_PATTERN.fullmatch(stripped):
        return stripped

    raise InputError(
        f"Invalid YouTube Playlist URL: {stripped}",
        hint="Paste a playlist URL or a playlist ID such as PLxxxxxxxxxx.",
    )
