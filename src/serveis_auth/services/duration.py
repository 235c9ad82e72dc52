"""Duration strings used for token lifetimes.

A duration is written as ``<integer><unit>`` where unit is one of
``s``, ``m``, ``h`` or ``d``. Anything else resolves to 15 minutes.
"""

import re
from datetime import timedelta

DEFAULT_DURATION_MS = 15 * 60 * 1000

_DURATION_PATTERN = re.compile(r"([0-9]+)([smhd])")

_UNIT_MS = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}


def parse_duration(value: str) -> int:
    """Convert a duration string to milliseconds.

    Examples
    --------
    >>> parse_duration("15m")
    900000
    >>> parse_duration("7d")
    604800000
    >>> parse_duration("soon")
    900000
    """
    if not isinstance(value, str):
        return DEFAULT_DURATION_MS

    match = _DURATION_PATTERN.fullmatch(value)
    if match is None:
        return DEFAULT_DURATION_MS

    amount, unit = match.groups()
    return int(amount) * _UNIT_MS[unit]


def duration_to_timedelta(value: str) -> timedelta:
    """Convert a duration string to a timedelta."""
    return timedelta(milliseconds=parse_duration(value))
