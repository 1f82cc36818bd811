"""Concurrent health probing of mirror candidates.

Two variants share one request helper:

* :class:`InstanceProber` — one direct probe per candidate against the
  canary playlist on that candidate's declared endpoint family.
* :class:`RelayInstanceProber` — two dependent stages through a public
  relay: a ``/api/v1/stats`` probe that yields the popularity metric,
  then (only if it succeeded) the canary playlist probe.

Concurrency model
-----------------
* One coroutine per candidate, collected with :func:`asyncio.gather`.
* Every request runs under its own :func:`asyncio.wait_for` deadline;
  expiry cancels the in-flight request so its connection is released.
* Probe failures are converted into :class:`Instance` values inside the
  coroutine, so one candidate can never abort its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx

from yt_todo.core.candidates import (
    CANARY_PLAYLIST_ID,
    DEFAULT_RELAY,
    MIRROR_CANDIDATES,
    RELAY_CANDIDATES,
)
from yt_todo.core.models import BackendKind, Candidate, DiscoveryReport, Instance
from yt_todo.core.normalize import detect_shape
from yt_todo.exceptions import (
    MalformedBodyError,
    NonSuccessStatusError,
    ProbeError,
    ProbeTimeoutError,
    SchemaMismatchError,
    TransportError,
)
from yt_todo.infra.http import open_async_client

logger = logging.getLogger(__name__)

DIRECT_TIMEOUT: float = 5.0
RELAY_TIMEOUT: float = 10.0

_PROBE_PATHS: dict[BackendKind, str] = {
    BackendKind.MIRROR_SHAPE_A: "/playlists/{playlist_id}",
    BackendKind.MIRROR_SHAPE_B: "/api/v1/playlists/{playlist_id}",
}

_MARKERS: dict[BackendKind, tuple[str, ...]] = {
    BackendKind.MIRROR_SHAPE_A: ("name", "title"),
    BackendKind.MIRROR_SHAPE_B: ("title",),
}


# ---------------------------------------------------------------------------
# Shared request helper
# ---------------------------------------------------------------------------

async def fetch_json_object(
    client: httpx.AsyncClient,
    url: str,
    timeout: float,
) -> dict[str, Any]:
    """GET *url* under a *timeout* deadline and return its JSON object body.

    Raises
    ------
    ProbeTimeoutError
        The request did not complete in time.
    TransportError
        DNS, TLS or connection failure, or a URL that cannot be requested.
    NonSuccessStatusError
        Any non-2xx status.
    MalformedBodyError
        The body is not a JSON object.
    """
    try:
        response = await asyncio.wait_for(client.get(url, timeout=timeout), timeout)
    except asyncio.TimeoutError as exc:
        raise ProbeTimeoutError(f"No response within {timeout:g}s") from exc
    except httpx.TimeoutException as exc:
        raise ProbeTimeoutError(f"Timed out: {exc}") from exc
    except httpx.HTTPError as exc:
        raise TransportError(str(exc) or type(exc).__name__) from exc
    except (httpx.InvalidURL, UnicodeError) as exc:
        raise TransportError(f"Invalid URL: {exc}") from exc

    if not response.is_success:
        raise NonSuccessStatusError(f"HTTP {response.status_code}")

    try:
        body = response.json()
    except ValueError as exc:
        raise MalformedBodyError("Invalid JSON") from exc
    if not isinstance(body, dict):
        raise MalformedBodyError("Expected a JSON object")
    return body


def require_marker(body: dict[str, Any], markers: Sequence[str]) -> None:
    """Raise :class:`SchemaMismatchError` unless one of *markers* is set."""
    if not any(body.get(marker) for marker in markers):
        raise SchemaMismatchError(f"Missing marker field ({' / '.join(markers)})")


def _failed(
    base_url: str,
    exc: ProbeError,
    *,
    stage: str | None = None,
    popularity: int | None = None,
) -> Instance:
    logger.info("%s not working (%s): %s", base_url, exc.failure.value, exc)
    return Instance(
        base_url=base_url,
        backend_kind=None,
        healthy=False,
        popularity=popularity,
        last_error=exc.failure,
        detail=str(exc),
        stage=stage,
    )


# ---------------------------------------------------------------------------
# Direct prober
# ---------------------------------------------------------------------------

class InstanceProber:
    """Probe candidates directly against the canary playlist.

    Parameters
    ----------
    client:
        Caller-owned async httpx client.
    timeout:
        Per-candidate deadline in seconds.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        timeout: float = DIRECT_TIMEOUT,
        canary: str = CANARY_PLAYLIST_ID,
    ) -> None:
        self._client: httpx.AsyncClient = client
        self._timeout: float = timeout
        self._canary: str = canary

    async def probe_all(self, candidates: Sequence[Candidate]) -> DiscoveryReport:
        """Probe every candidate concurrently; never fails as a whole."""
        instances = await asyncio.gather(*(self.probe(c) for c in candidates))
        return DiscoveryReport(instances=tuple(instances))

    async def probe(self, candidate: Candidate) -> Instance:
        """Classify one candidate as working or not."""
        base_url = candidate.base_url.rstrip("/")
        url = base_url + _PROBE_PATHS[candidate.family].format(playlist_id=self._canary)
        try:
            body = await fetch_json_object(self._client, url, self._timeout)
            require_marker(body, _MARKERS[candidate.family])
        except ProbeError as exc:
            return _failed(base_url, exc)

        kind = detect_shape(body) or candidate.family
        logger.debug("%s working (%s)", base_url, kind.value)
        return Instance(base_url=base_url, backend_kind=kind, healthy=True)


# ---------------------------------------------------------------------------
# Relay prober
# ---------------------------------------------------------------------------

class RelayInstanceProber:
    """Probe shape-B hosts through a passthrough relay in two stages.

    Stage ``stats`` must prove the host runs Invidious and yields the
    registered-user count; stage ``playlist`` is attempted only after
    that and checks the canary playlist.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        relay: str = DEFAULT_RELAY,
        timeout: float = RELAY_TIMEOUT,
        canary: str = CANARY_PLAYLIST_ID,
    ) -> None:
        self._client: httpx.AsyncClient = client
        self._relay: str = relay.rstrip("/")
        self._timeout: float = timeout
        self._canary: str = canary

    def relay_url(self, target: str) -> str:
        """Wrap *target* in the relay's ``/raw`` passthrough endpoint."""
        return f"{self._relay}/raw?url={quote(target, safe='')}"

    async def probe_all(self, hosts: Sequence[str]) -> DiscoveryReport:
        """Probe every host concurrently; never fails as a whole."""
        instances = await asyncio.gather(*(self.probe(host) for host in hosts))
        return DiscoveryReport(instances=tuple(instances))

    async def probe(self, host: str) -> Instance:
        """Run both stages for *host* (a bare hostname)."""
        base_url = f"https://{host}"

        try:
            stats = await fetch_json_object(
                self._client,
                self.relay_url(f"{base_url}/api/v1/stats"),
                self._timeout,
            )
            popularity = self._read_popularity(stats)
        except ProbeError as exc:
            return _failed(base_url, exc, stage="stats")

        try:
            body = await fetch_json_object(
                self._client,
                self.relay_url(f"{base_url}/api/v1/playlists/{self._canary}?fields=title"),
                self._timeout,
            )
            require_marker(body, _MARKERS[BackendKind.MIRROR_SHAPE_B])
        except ProbeError as exc:
            return _failed(base_url, exc, stage="playlist", popularity=popularity)

        logger.debug("%s working via relay (users=%d)", base_url, popularity)
        return Instance(
            base_url=base_url,
            backend_kind=BackendKind.MIRROR_SHAPE_B,
            healthy=True,
            popularity=popularity,
        )

    @staticmethod
    def _read_popularity(stats: dict[str, Any]) -> int:
        software = stats.get("software")
        if not isinstance(software, dict) or software.get("name") != "invidious":
            raise SchemaMismatchError("Not Invidious")
        usage = stats.get("usage") or {}
        users = (usage.get("users") or {}) if isinstance(usage, dict) else {}
        total = users.get("total") if isinstance(users, dict) else None
        return total if isinstance(total, int) and total > 0 else 0


# ---------------------------------------------------------------------------
# Synchronous entry points
# ---------------------------------------------------------------------------

def discover(
    candidates: Sequence[Candidate] = MIRROR_CANDIDATES,
    *,
    timeout: float = DIRECT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DiscoveryReport:
    """Run :class:`InstanceProber` over *candidates* to completion."""

    async def _run() -> DiscoveryReport:
        async with open_async_client(timeout, transport=transport) as client:
            return await InstanceProber(client, timeout=timeout).probe_all(candidates)

    return asyncio.run(_run())


def discover_via_relay(
    hosts: Sequence[str] = RELAY_CANDIDATES,
    *,
    relay: str = DEFAULT_RELAY,
    timeout: float = RELAY_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DiscoveryReport:
    """Run :class:`RelayInstanceProber` over *hosts* to completion."""

    async def _run() -> DiscoveryReport:
        async with open_async_client(timeout, transport=transport) as client:
            prober = RelayInstanceProber(client, relay=relay, timeout=timeout)
            return await prober.probe_all(hosts)

    return asyncio.run(_run())
