"""Community mirror implementation of :class:`~yt_todo.core.protocols.PlaylistSource`.

One base URL may host either mirror shape.  Resolution walks an explicit
ordered list of :class:`MirrorStep` values; every step yields a
:class:`StepResult` instead of raising, so the full trail of attempts
can be logged and handed back to the caller.

A step only counts as matched when its body is recognised
**structurally** by :func:`~yt_todo.core.normalize.detect_shape`; the
detected shape, not the URL that answered, selects the mapper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from yt_todo.core.models import BackendKind, Resolution, ResolutionAttempt, SourceKind
from yt_todo.core.normalize import detect_shape, playlist_from_mirror
from yt_todo.exceptions import BackendError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MirrorStep:
    """One candidate endpoint on the mirror base."""

    name: str
    path: str
    """Path template; ``{playlist_id}`` is substituted."""


@dataclass(frozen=True, slots=True)
class StepResult:
    """What a single :class:`MirrorStep` produced."""

    attempt: ResolutionAttempt
    match: tuple[BackendKind, dict[str, Any]] | None = None
    """Detected shape and body; ``None`` when the step did not match."""


MIRROR_STEPS: tuple[MirrorStep, ...] = (
    MirrorStep("mirror-shape-a", "/playlists/{playlist_id}"),
    MirrorStep("mirror-shape-b", "/api/v1/playlists/{playlist_id}"),
)
"""Shape A is always tried before shape B."""


class MirrorSource:
    """Concrete :class:`PlaylistSource` for Piped / Invidious deployments.

    Parameters
    ----------
    client:
        Caller-owned synchronous httpx client.
    base_url:
        Mirror base such as ``https://pipedapi.kavin.rocks``.  A trailing
        slash is ignored.
    """

    def __init__(
        self,
        client: httpx.Client,
        base_url: str,
        *,
        steps: tuple[MirrorStep, ...] = MIRROR_STEPS,
    ) -> None:
        self._client: httpx.Client = client
        self._base_url: str = base_url.strip().rstrip("/")
        self._steps: tuple[MirrorStep, ...] = steps

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch_playlist(self, playlist_id: str) -> Resolution:
        """Try each step in order and map the first structurally valid body.

        Raises
        ------
        BackendError
            Carrying the last attempt's status when no step succeeds.
        """
        attempts: list[ResolutionAttempt] = []
        for step in self._steps:
            result = self.run_step(step, playlist_id)
            attempts.append(result.attempt)
            if result.match is not None:
                kind, body = result.match
                logger.debug("%s matched %s", result.attempt.url, kind.value)
                return Resolution(
                    playlist=playlist_from_mirror(kind, body, playlist_id),
                    source=SourceKind.MIRROR,
                    attempts=tuple(attempts),
                )
            logger.info("%s failed: %s", result.attempt.url, result.attempt.error)

        last = attempts[-1]
        raise BackendError(
            last.error or "Mirror request failed",
            status=last.status,
            stage=last.step,
            attempts=tuple(attempts),
            hint=(
                "The mirror may be down. Pick another one with "
                "'yt-todo discover', or set a YouTube API key."
            ),
        )

    # ------------------------------------------------------------------
    # Single step
    # ------------------------------------------------------------------

    def run_step(self, step: MirrorStep, playlist_id: str) -> StepResult:
        """Execute *step*; never raises for upstream failures."""
        url = self._base_url + step.path.format(playlist_id=quote(playlist_id, safe=""))
        logger.debug("GET %s", url)

        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            return StepResult(ResolutionAttempt(step.name, url, None, False, str(exc)))
        except (httpx.InvalidURL, UnicodeError) as exc:
            return StepResult(
                ResolutionAttempt(step.name, url, None, False, f"Invalid URL: {exc}")
            )

        status = response.status_code
        if not response.is_success:
            return StepResult(
                ResolutionAttempt(step.name, url, status, False, f"API Error: {status}")
            )

        try:
            body = response.json()
        except ValueError:
            return StepResult(
                ResolutionAttempt(step.name, url, status, False, "Response body is not valid JSON")
            )

        kind = detect_shape(body)
        if kind is None:
            return StepResult(
                ResolutionAttempt(
                    step.name, url, status, False, "Unrecognised playlist response shape"
                )
            )
        return StepResult(ResolutionAttempt(step.name, url, status, True), (kind, body))
