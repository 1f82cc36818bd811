"""Runtime settings for yt-todo.

The credential and mirror base are plain configuration values injected
into the resolver; persisting them is the caller's concern.  Values are
read from the environment and may be overridden by CLI flags.

Environment
-----------
``YT_TODO_API_KEY``        Data API key (optional).
``YT_TODO_MIRROR_BASE``    Mirror base URL used without a key.
``YT_TODO_TIMEOUT``        Resolution request timeout, seconds.
``YT_TODO_PROBE_TIMEOUT``  Per-candidate probe timeout, seconds.
``YT_TODO_RELAY_URL``      Relay used by ``discover --relay``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from yt_todo.core.candidates import DEFAULT_MIRROR_BASE, DEFAULT_RELAY
from yt_todo.exceptions import ConfigurationError

ENV_API_KEY = "YT_TODO_API_KEY"
ENV_MIRROR_BASE = "YT_TODO_MIRROR_BASE"
ENV_TIMEOUT = "YT_TODO_TIMEOUT"
ENV_PROBE_TIMEOUT = "YT_TODO_PROBE_TIMEOUT"
ENV_RELAY_URL = "YT_TODO_RELAY_URL"


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated settings snapshot."""

    api_key: str | None = None
    mirror_base: str = DEFAULT_MIRROR_BASE
    timeout: float = 15.0
    probe_timeout: float | None = None
    """``None`` lets each prober variant use its own default."""
    relay_url: str = DEFAULT_RELAY

    def with_overrides(self, **overrides: object) -> Settings:
        """Return a copy with every non-``None`` override applied."""
        applied = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **applied)  # type: ignore[arg-type]


def _env_str(env: Mapping[str, str], name: str) -> str | None:
    value = env.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_seconds(env: Mapping[str, str], name: str) -> float | None:
    value = _env_str(env, name)
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be a number of seconds, got {value!r}.",
        ) from exc
    if not seconds > 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}.")
    return seconds


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *env* (defaults to ``os.environ``).

    Raises
    ------
    ConfigurationError
        If a timeout variable is not a positive number.
    """
    source = os.environ if env is None else env
    return Settings().with_overrides(
        api_key=_env_str(source, ENV_API_KEY),
        mirror_base=_env_str(source, ENV_MIRROR_BASE),
        timeout=_env_seconds(source, ENV_TIMEOUT),
        probe_timeout=_env_seconds(source, ENV_PROBE_TIMEOUT),
        relay_url=_env_str(source, ENV_RELAY_URL),
    )
