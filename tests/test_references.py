"""Tests for playlist reference normalization (core/references.py)."""

from __future__ import annotations

import pytest

from yt_todo.core.references import extract_playlist_id
from yt_todo.exceptions import InputError

CANARY = "PL4cUxeGkcC9l0Jnx0_oMEa_J8v_z_yD5E"


class TestURLs:
    @pytest.mark.parametrize(
        "url",
        [
            f"https://www.youtube.com/playlist?list={CANARY}",
            f"https://youtube.com/watch?v=dQw4w9WgXcQ&list={CANARY}&index=3",
            f"https://m.youtube.com/playlist?list={CANARY}&si=abc",
            f"  https://www.youtube.com/playlist?list={CANARY}  ",
        ],
    )
    def test_list_parameter_is_extracted(self, url: str) -> None:
        assert extract_playlist_id(url) == CANARY

    def test_url_without_list_is_rejected(self) -> None:
        with pytest.raises(InputError, match="Invalid YouTube Playlist URL") as exc_info:
            extract_playlist_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        assert exc_info.value.hint

    def test_empty_list_parameter_is_rejected(self) -> None:
        with pytest.raises(InputError):
            extract_playlist_id("https://www.youtube.com/playlist?list=")


class TestBareIdentifiers:
    def test_bare_id_passes_through(self) -> None:
        assert extract_playlist_id(CANARY) == CANARY

    def test_whitespace_is_stripped(self) -> None:
        assert extract_playlist_id(f"\t{CANARY}\n") == CANARY

    def test_ten_characters_is_enough(self) -> None:
        assert extract_playlist_id("PL_abc-123") == "PL_abc-123"

    @pytest.mark.parametrize(
        "reference",
        ["", "   ", "PLshort", "not a playlist", "PL!@#$%^&*()xyz", "youtube.com/playlist"],
    )
    def test_rejected(self, reference: str) -> None:
        with pytest.raises(InputError):
            extract_playlist_id(reference)
