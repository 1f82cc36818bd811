"""Pure normalization of backend JSON into the canonical model.

Every function in this module is a **pure** transformation: no I/O,
no side effects, fully deterministic.

Shape detection is structural: a body is classified by the marker
fields it actually carries, never by the URL that produced it.

* Shape A (Piped): ``{name, relatedStreams: [...]}``
* Shape B (Invidious): ``{title, videos: [...]}``

A body carrying both sets of markers is classified as shape A.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yt_todo.core.models import BackendKind, Playlist, Video

THUMBNAIL_CDN: str = "https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"


# ---------------------------------------------------------------------------
# Small field helpers
# ---------------------------------------------------------------------------

def watch_path(video_id: str) -> str:
    """Relative watch path for *video_id*."""
    return f"/watch?v={video_id}"


def fallback_thumbnail(video_id: str) -> str:
    """Deterministic CDN thumbnail URL for *video_id*."""
    return THUMBNAIL_CDN.format(video_id=video_id)


def text_field(data: Mapping[str, Any], key: str) -> str:
    """Return ``data[key]`` as text, or ``""`` when missing or null."""
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


def seconds_field(value: object) -> int:
    """Coerce *value* to a non-negative whole number of seconds."""
    if isinstance(value, bool):
        return 0
    try:
        seconds = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0
    return max(seconds, 0)


def dict_items(raw: object) -> list[dict[str, Any]]:
    """Keep only dict entries of a JSON list; anything else yields ``[]``."""
    if not isinstance(raw, list):
        return []
    return [entry for entry in raw if isinstance(entry, dict)]


# ---------------------------------------------------------------------------
# Shape detection
# ---------------------------------------------------------------------------

def detect_shape(body: object) -> BackendKind | None:
    """Classify a mirror playlist body, or return ``None`` if unrecognised."""
    if not isinstance(body, dict):
        return None
    if "name" in body and isinstance(body.get("relatedStreams"), list):
        return BackendKind.MIRROR_SHAPE_A
    if "title" in body and isinstance(body.get("videos"), list):
        return BackendKind.MIRROR_SHAPE_B
    return None


# ---------------------------------------------------------------------------
# Shape A — Piped
# ---------------------------------------------------------------------------

def video_from_shape_a(stream: Mapping[str, Any]) -> Video:
    """Map one ``relatedStreams`` entry to a :class:`Video`."""
    return Video(
        title=text_field(stream, "title"),
        url=text_field(stream, "url"),
        duration_seconds=seconds_field(stream.get("duration")),
        thumbnail_url=text_field(stream, "thumbnail"),
        uploader=text_field(stream, "uploaderName"),
    )


def playlist_from_shape_a(body: Mapping[str, Any], playlist_id: str) -> Playlist:
    """Map a shape-A playlist body to a :class:`Playlist`."""
    return Playlist(
        id=text_field(body, "uuid") or playlist_id,
        title=text_field(body, "name"),
        uploader=text_field(body, "uploader"),
        description=text_field(body, "description"),
        videos=tuple(
            video_from_shape_a(stream)
            for stream in dict_items(body.get("relatedStreams"))
        ),
    )


# ---------------------------------------------------------------------------
# Shape B — Invidious
# ---------------------------------------------------------------------------

def video_from_shape_b(entry: Mapping[str, Any]) -> Video:
    """Map one ``videos`` entry to a :class:`Video`."""
    video_id = text_field(entry, "videoId")
    thumbnails = dict_items(entry.get("videoThumbnails"))
    thumbnail = text_field(thumbnails[0], "url") if thumbnails else ""
    return Video(
        title=text_field(entry, "title"),
        url=watch_path(video_id),
        duration_seconds=seconds_field(entry.get("lengthSeconds")),
        thumbnail_url=thumbnail or fallback_thumbnail(video_id),
        uploader=text_field(entry, "author"),
    )


def playlist_from_shape_b(body: Mapping[str, Any], playlist_id: str) -> Playlist:
    """Map a shape-B playlist body to a :class:`Playlist`."""
    return Playlist(
        id=text_field(body, "plid") or playlist_id,
        title=text_field(body, "title"),
        uploader=text_field(body, "author"),
        description=text_field(body, "description"),
        videos=tuple(
            video_from_shape_b(entry)
            for entry in dict_items(body.get("videos"))
        ),
    )


def playlist_from_mirror(
    kind: BackendKind,
    body: Mapping[str, Any],
    playlist_id: str,
) -> Playlist:
    """Dispatch to the mapper matching the detected *kind*."""
    if kind is BackendKind.MIRROR_SHAPE_A:
        return playlist_from_shape_a(body, playlist_id)
    return playlist_from_shape_b(body, playlist_id)


# ---------------------------------------------------------------------------
# First-party Data API
# ---------------------------------------------------------------------------

def is_video_item(item: Mapping[str, Any]) -> bool:
    """Whether a ``playlistItems`` entry refers to a video."""
    snippet = item.get("snippet") or {}
    resource = snippet.get("resourceId") or {}
    return resource.get("kind") == "youtube#video" and bool(resource.get("videoId"))


def item_video_id(item: Mapping[str, Any]) -> str:
    """Video id of a ``playlistItems`` entry already passing :func:`is_video_item`."""
    return str(item["snippet"]["resourceId"]["videoId"])


def pick_thumbnail(thumbnails: object, video_id: str) -> str:
    """Prefer ``medium``, then ``default``, then the CDN fallback."""
    if isinstance(thumbnails, dict):
        for size in ("medium", "default"):
            entry = thumbnails.get(size)
            if isinstance(entry, dict) and entry.get("url"):
                return str(entry["url"])
    return fallback_thumbnail(video_id)


def video_from_playlist_item(
    item: Mapping[str, Any],
    durations: Mapping[str, int],
    default_uploader: str,
) -> Video:
    """Map a ``playlistItems`` entry, enriched with *durations*."""
    snippet = item.get("snippet") or {}
    video_id = item_video_id(item)
    return Video(
        title=text_field(snippet, "title"),
        url=watch_path(video_id),
        duration_seconds=durations.get(video_id, 0),
        thumbnail_url=pick_thumbnail(snippet.get("thumbnails"), video_id),
        uploader=text_field(snippet, "videoOwnerChannelTitle") or default_uploader,
    )
