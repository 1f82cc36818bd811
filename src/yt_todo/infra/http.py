"""Shared httpx plumbing for the adapters and probers.

This module is the single place where HTTP clients are configured.
"""

from __future__ import annotations

from typing import Any

import httpx

from yt_todo.version import __version__

USER_AGENT: str = f"yt-todo/{__version__} httpx"
DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json, */*",
}
CREDENTIAL_PARAM: str = "key"


def open_client(timeout: float, **kwargs: Any) -> httpx.Client:
    """Create a synchronous client for sequential playlist resolution."""
    return httpx.Client(
        timeout=timeout,
        headers=DEFAULT_HEADERS,
        follow_redirects=True,
        **kwargs,
    )


def open_async_client(timeout: float, **kwargs: Any) -> httpx.AsyncClient:
    """Create an asynchronous client for concurrent probing."""
    return httpx.AsyncClient(
        timeout=timeout,
        headers=DEFAULT_HEADERS,
        follow_redirects=True,
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        **kwargs,
    )


def redact(url: httpx.URL | str) -> str:
    """Return *url* as text with the credential query parameter removed."""
    return str(httpx.URL(url).copy_remove_param(CREDENTIAL_PARAM))
