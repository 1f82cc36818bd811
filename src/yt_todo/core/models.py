"""Domain models for yt-todo.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and are created fresh for every resolution call or
discovery run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class BackendKind(Enum):
    """Schema family of a community mirror, as detected from a response body."""

    MIRROR_SHAPE_A = "piped"
    MIRROR_SHAPE_B = "invidious"


class SourceKind(Enum):
    """Backend family chosen by the source selector."""

    FIRST_PARTY = "first-party"
    MIRROR = "mirror"


class ProbeFailure(Enum):
    """Why a candidate instance was classified as not working."""

    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport-error"
    NON_SUCCESS_STATUS = "non-success-status"
    MALFORMED_BODY = "malformed-body"
    SCHEMA_MISMATCH = "schema-mismatch"


# ---------------------------------------------------------------------------
# Playlist model
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Video:
    """A single playlist entry in canonical form."""

    title: str
    """Human-readable video title."""

    url: str
    """Relative watch path (e.g. ``/watch?v=dQw4w9WgXcQ``)."""

    duration_seconds: int
    """Duration in whole seconds; ``0`` when unknown, never negative."""

    thumbnail_url: str
    """Absolute thumbnail URL."""

    uploader: str
    """Channel name of the uploader; empty when the backend omits it."""


@dataclass(frozen=True, slots=True)
class Playlist:
    """A fully aggregated playlist.

    ``videos`` preserves the upstream order exactly: page order first,
    then response order within each page.
    """

    id: str
    title: str
    uploader: str
    description: str = ""
    videos: tuple[Video, ...] = ()
    next_page_token: str | None = None

    def __len__(self) -> int:
        return len(self.videos)


@dataclass(frozen=True, slots=True)
class ResolutionAttempt:
    """Outcome of one upstream request made while resolving a playlist."""

    step: str
    """Logical step name (``"playlists"``, ``"mirror-shape-a"``, …)."""

    url: str
    """Requested URL with any credential removed."""

    status: int | None
    """HTTP status, or ``None`` when no response was received."""

    ok: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class Resolution:
    """A resolved playlist together with the trail of attempts behind it."""

    playlist: Playlist
    source: SourceKind
    attempts: tuple[ResolutionAttempt, ...] = ()


# ---------------------------------------------------------------------------
# Instance discovery
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Candidate:
    """A mirror deployment to probe.

    ``family`` only chooses which endpoint the probe hits; the resulting
    :attr:`Instance.backend_kind` is set from the validated response.
    """

    base_url: str
    family: BackendKind


@dataclass(frozen=True, slots=True)
class Instance:
    """Health verdict for one probed candidate."""

    base_url: str
    backend_kind: BackendKind | None
    healthy: bool
    popularity: int | None = None
    last_error: ProbeFailure | None = None
    detail: str = ""
    stage: str | None = None


@dataclass(frozen=True, slots=True)
class DiscoveryReport:
    """Working / non-working partition of one discovery run.

    ``instances`` keeps candidate order.  :attr:`working` ranks healthy
    instances by popularity (highest first); ties keep candidate order.
    """

    instances: tuple[Instance, ...] = field(default_factory=tuple)

    @property
    def working(self) -> tuple[Instance, ...]:
        healthy = [inst for inst in self.instances if inst.healthy]
        return tuple(sorted(healthy, key=lambda inst: -(inst.popularity or 0)))

    @property
    def failed(self) -> tuple[Instance, ...]:
        return tuple(inst for inst in self.instances if not inst.healthy)

    def __len__(self) -> int:
        return len(self.instances)

    def __bool__(self) -> bool:
        return len(self.instances) > 0
