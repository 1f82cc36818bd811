"""Shared pytest fixtures and configuration for the yt-todo test suite.

Guidelines
----------
* No internet access in any test.
* HTTP is served by ``httpx.MockTransport`` at the infra boundary.
* Core tests must be pure; no side effects.
* Tests must not depend on OS state (``YT_TODO_*`` variables are cleared).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest

from yt_todo.config import (
    ENV_API_KEY,
    ENV_MIRROR_BASE,
    ENV_PROBE_TIMEOUT,
    ENV_RELAY_URL,
    ENV_TIMEOUT,
)

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_API_KEY, ENV_MIRROR_BASE, ENV_TIMEOUT, ENV_PROBE_TIMEOUT, ENV_RELAY_URL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_client() -> Iterator[Callable[[Handler], httpx.Client]]:
    """Build synchronous clients served by *handler*; closed after the test."""
    clients: list[httpx.Client] = []

    def _make(handler: Handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
