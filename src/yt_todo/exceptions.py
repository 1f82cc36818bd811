"""Custom exception hierarchy for yt-todo.

All exceptions that cross layer boundaries must inherit from
:class:`YtTodoError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer; they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
YtTodoError
├── InputError
├── BackendError
├── ProbeError
│   ├── ProbeTimeoutError
│   ├── TransportError
│   ├── NonSuccessStatusError
│   ├── MalformedBodyError
│   └── SchemaMismatchError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from yt_todo.core.models import ProbeFailure

if TYPE_CHECKING:
    from yt_todo.core.models import ResolutionAttempt


class YtTodoError(Exception):
    """Base exception for all yt-todo errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class InputError(YtTodoError):
    """Raised when a playlist reference cannot be recognised.

    Always raised before any network call is made.
    """


# --- Backends --------------------------------------------------------------

class BackendError(YtTodoError):
    """Raised when a backend returns a non-success or malformed response.

    Covers the first-party API rejecting the credential as well; there is
    no separate authentication error type.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        stage: str | None = None,
        attempts: tuple[ResolutionAttempt, ...] = (),
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status: int | None = status
        """Upstream HTTP status, or ``None`` when no response was received."""

        self.stage: str | None = stage
        """Name of the request step that failed (e.g. ``"playlistItems"``)."""

        self.attempts: tuple[ResolutionAttempt, ...] = attempts
        """Every upstream attempt made before giving up, in order."""


# --- Instance probing ------------------------------------------------------

class ProbeError(YtTodoError):
    """Base class for per-candidate probe failures.

    Probe errors never leave the prober: they are converted into an
    :class:`~yt_todo.core.models.Instance` with ``last_error`` set.
    """

    failure: ProbeFailure = ProbeFailure.TRANSPORT_ERROR


class ProbeTimeoutError(ProbeError):
    """The probe did not settle before its own deadline."""

    failure = ProbeFailure.TIMEOUT


class TransportError(ProbeError):
    """DNS, TLS or connection-level failure."""

    failure = ProbeFailure.TRANSPORT_ERROR


class NonSuccessStatusError(ProbeError):
    """The candidate answered with a non-2xx status code."""

    failure = ProbeFailure.NON_SUCCESS_STATUS


class MalformedBodyError(ProbeError):
    """The response body is not a JSON object."""

    failure = ProbeFailure.MALFORMED_BODY


class SchemaMismatchError(ProbeError):
    """The JSON body lacks the shape-specific marker field."""

    failure = ProbeFailure.SCHEMA_MISMATCH


# --- Configuration / environment -------------------------------------------

class ConfigurationError(YtTodoError):
    """Raised when a settings value cannot be parsed."""


class EnvironmentError(YtTodoError):
    """Raised when a required runtime dependency is not available."""
