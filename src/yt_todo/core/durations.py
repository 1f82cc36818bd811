"""Duration parsing for the ``PT#H#M#S`` grammar used by the Data API."""

from __future__ import annotations

import re

_DURATION_PATTERN: re.Pattern[str] = re.compile(
    r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?"
)


def parse_duration(text: object) -> int:
    """Convert a ``PT`` duration string to whole seconds.

    Any subset of the hour, minute and second components may be absent
    and contributes 0.  Input without the ``PT`` structure (or that is
    not a string at all) yields 0; this function never raises.

    >>> parse_duration("PT5M30S")
    330
    >>> parse_duration("PT")
    0
    """
    if not isinstance(text, str):
        return 0
    match = _DURATION_PATTERN.search(text)
    if match is None:
        return 0
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds
