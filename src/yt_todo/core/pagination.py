"""Pagination aggregator for continuation-token APIs.

The loop is strictly sequential: each page needs the continuation token
returned by the previous one.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from yt_todo.core.models import Video
from yt_todo.exceptions import BackendError


@dataclass(frozen=True, slots=True)
class Page:
    """One fetched page: its videos and the token for the next page."""

    videos: tuple[Video, ...]
    next_token: str = ""


def collect_pages(fetch_page: Callable[[str | None], Page]) -> tuple[Video, ...]:
    """Drive *fetch_page* until the continuation token runs out.

    *fetch_page* receives ``None`` for the first page and the previous
    page's token afterwards.  Videos are concatenated in page order.

    Raises
    ------
    BackendError
        If upstream hands back a token that was already followed.
    """
    videos: list[Video] = []
    seen: set[str] = set()
    token: str | None = None
    while True:
        page = fetch_page(token)
        videos.extend(page.videos)
        if not page.next_token:
            return tuple(videos)
        if page.next_token in seen:
            raise BackendError(
                f"Pagination did not advance (token {page.next_token!r} repeated).",
                stage="playlistItems",
            )
        seen.add(page.next_token)
        token = page.next_token
