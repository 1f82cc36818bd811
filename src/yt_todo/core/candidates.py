"""Static mirror candidates and probe targets."""

from __future__ import annotations

from yt_todo.core.models import BackendKind, Candidate

DEFAULT_MIRROR_BASE: str = "https://pipedapi.kavin.rocks"

CANARY_PLAYLIST_ID: str = "PL4cUxeGkcC9l0Jnx0_oMEa_J8v_z_yD5E"
"""Public playlist known to exist on reference deployments of both shapes."""

DEFAULT_RELAY: str = "https://api.allorigins.win"

_SHAPE_A_BASES: tuple[str, ...] = (
    "https://pipedapi.kavin.rocks",
    "https://pipedapi.moomoo.me",
    "https://pipedapi.syncpundit.io",
    "https://pipedapi.leptons.xyz",
    "https://pipedapi.lunar.icu",
    "https://pipedapi.rivo.lol",
    "https://pipedapi.drgns.space",
    "https://piapi.ggtyler.dev",
    "https://pipedapi.nosebs.ru",
    "https://pipedapi.adminforge.de",
    "https://api.piped.privacydev.net",
    "https://pipedapi.smnz.de",
    "https://pipedapi.qdi.fi",
    "https://piped-api.hostux.net",
    "https://pipedapi.ducks.party",
)

_SHAPE_B_BASES: tuple[str, ...] = (
    "https://inv.tux.pizza",
    "https://vid.puffyan.us",
    "https://invidious.protokolla.fi",
    "https://invidious.flokinet.to",
    "https://yt.artemislena.eu",
    "https://invidious.projectsegfau.lt",
    "https://invidious.privacydev.net",
)

MIRROR_CANDIDATES: tuple[Candidate, ...] = tuple(
    Candidate(base, BackendKind.MIRROR_SHAPE_A) for base in _SHAPE_A_BASES
) + tuple(
    Candidate(base, BackendKind.MIRROR_SHAPE_B) for base in _SHAPE_B_BASES
)
"""Candidates for direct probing, spanning both mirror families."""

RELAY_CANDIDATES: tuple[str, ...] = (
    "inv.tux.pizza",
    "vid.puffyan.us",
    "invidious.protokolla.fi",
    "invidious.flokinet.to",
    "yt.artemislena.eu",
    "invidious.projectsegfau.lt",
    "invidious.privacydev.net",
    "iv.ggtyler.dev",
    "invidious.lunar.icu",
    "invidious.drgns.space",
    "invidious.nerdvpn.de",
    "inv.bp.projectsegfau.lt",
    "yewtu.be",
    "invidious.io.lol",
    "invidious.tyil.nl",
    "invidious.snopyta.org",
    "invidious.kavin.rocks",
    "inv.nadeko.net",
    "invidious.jing.rocks",
    "invidious.einfachzocken.eu",
    "yt.cdaut.de",
    "invidious.perennialteks.com",
    "invidious.fdn.fr",
)
"""Shape-B hostnames probed through the public relay."""
