"""Built-in sample playlist for trying the checklist without a network."""

from __future__ import annotations

from yt_todo.core.models import Playlist, Video

_UPLOADER = "Net Ninja"

_DEMO_VIDEOS: tuple[tuple[str, str, int, str], ...] = (
    ("React Tutorial #1 - Introduction", "playlist_video_1", 300, "j942wKiXFu8"),
    ("React Tutorial #2 - Creating a React App", "playlist_video_2", 450, "9D7g_L_hbn8"),
    ("React Tutorial #3 - Components & Templates", "playlist_video_3", 520, "1w1q_K5g_5g"),
    ("React Tutorial #4 - Dynamic Values", "playlist_video_4", 380, "pnhO8UaCgxg"),
    ("React Tutorial #5 - Multiple Components", "playlist_video_5", 410, "0sSYCg46AuA"),
)


def demo_playlist() -> Playlist:
    """Return the sample playlist (a fresh, equal value on every call)."""
    return Playlist(
        id="mock-id",
        title="Demo Playlist: React Tutorial",
        uploader=_UPLOADER,
        description="A demo playlist showcasing the app.",
        videos=tuple(
            Video(
                title=title,
                url=f"/watch?v={watch_id}",
                duration_seconds=seconds,
                thumbnail_url=f"https://i.ytimg.com/vi/{thumb_id}/hqdefault.jpg",
                uploader=_UPLOADER,
            )
            for title, watch_id, seconds, thumb_id in _DEMO_VIDEOS
        ),
    )
