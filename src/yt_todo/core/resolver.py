"""Core playlist resolver — source selection and orchestration.

This is the central service consumed by the CLI layer.  Backend
adapters are supplied through factories injected at construction time
(dependency inversion), keeping the core free of any HTTP import.

Guarantees
----------
* Reference normalization happens before any adapter is built, so an
  unrecognisable reference never causes a network call.
* No retries and no cross-family fallback: whatever the selected
  adapter raises is surfaced to the caller.
* Only :class:`~yt_todo.exceptions.YtTodoError` subclasses escape.
"""

from __future__ import annotations

import logging

from yt_todo.core.candidates import DEFAULT_MIRROR_BASE
from yt_todo.core.models import Playlist, Resolution, SourceKind
from yt_todo.core.protocols import FirstPartyFactory, MirrorFactory, PlaylistSource
from yt_todo.core.references import extract_playlist_id
from yt_todo.exceptions import BackendError, YtTodoError

logger = logging.getLogger(__name__)

MIN_CREDENTIAL_LENGTH: int = 21
"""Credentials shorter than this are treated as absent."""


def select_source(credential: str | None) -> SourceKind:
    """Choose the backend family for *credential*.

    This is a cheap plausibility heuristic, not a validity check: a long
    but wrong key is still routed to the first-party API and fails there
    as an ordinary :class:`BackendError`.
    """
    if credential and len(credential.strip()) >= MIN_CREDENTIAL_LENGTH:
        return SourceKind.FIRST_PARTY
    return SourceKind.MIRROR


class PlaylistResolver:
    """Stateless service that turns a playlist reference into a :class:`Playlist`.

    Parameters
    ----------
    first_party_factory:
        Called with the credential to build the metered-API adapter.
    mirror_factory:
        Called with the mirror base URL to build the mirror adapter.
    """

    def __init__(
        self,
        first_party_factory: FirstPartyFactory,
        mirror_factory: MirrorFactory,
    ) -> None:
        self._first_party_factory: FirstPartyFactory = first_party_factory
        self._mirror_factory: MirrorFactory = mirror_factory

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        reference: str,
        credential: str | None = None,
        mirror_base: str = DEFAULT_MIRROR_BASE,
    ) -> Playlist:
        """Resolve *reference* and return the normalized playlist.

        Raises
        ------
        InputError
            If *reference* is not a playlist URL or identifier.
        BackendError
            If the selected backend fails at any stage.
        """
        return self.resolve_with_trace(reference, credential, mirror_base).playlist

    def resolve_with_trace(
        self,
        reference: str,
        credential: str | None = None,
        mirror_base: str = DEFAULT_MIRROR_BASE,
    ) -> Resolution:
        """Like :meth:`resolve`, but also return every upstream attempt."""
        playlist_id = extract_playlist_id(reference)
        api_key = (credential or "").strip()
        source_kind = select_source(api_key)
        logger.info("Resolving playlist %s via %s", playlist_id, source_kind.value)

        if source_kind is SourceKind.FIRST_PARTY:
            source = self._first_party_factory(api_key)
        else:
            source = self._mirror_factory(mirror_base)

        resolution = self._fetch(source, playlist_id)
        logger.info(
            "Resolved playlist %s: %d videos after %d request(s)",
            playlist_id,
            len(resolution.playlist),
            len(resolution.attempts),
        )
        return resolution

    # ------------------------------------------------------------------
    # Adapter delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _fetch(source: PlaylistSource, playlist_id: str) -> Resolution:
        """Call the adapter and ensure only our exceptions escape."""
        try:
            return source.fetch_playlist(playlist_id)
        except BackendError as exc:
            logger.warning("Resolution of %s failed: %s", playlist_id, exc)
            raise
        except YtTodoError:
            raise
        except Exception as exc:
            raise BackendError(f"Unexpected backend error: {exc}") from exc
