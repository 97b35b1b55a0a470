"""Parsing and formatting of track positions and durations."""

from __future__ import annotations

import re

from chubc.errors import FormatError

_COMPONENT = re.compile(r"[0-9]+")


def parse_time(text: str) -> int:
    """
    Parse ``[[HH:]MM:]SS`` into a number of seconds.

    A lone component may be any number of seconds. When minutes or hours are
    given, the components after the first must be below 60.

    Raises:
        FormatError: If text does not match the format.
    """
    parts = text.split(":")
    if len(parts) > 3 or not all(_COMPONENT.fullmatch(part) for part in parts):
        raise FormatError(f"invalid time format: {text}")

    try:
        values = [int(part) for part in parts]
    except ValueError:
        raise FormatError(f"invalid time format: {text}") from None
    if any(value >= 60 for value in values[1:]):
        raise FormatError(f"invalid time format: {text}")

    seconds = 0
    for value in values:
        seconds = seconds * 60 + value
    return seconds


def format_time(seconds: int) -> str:
    """Format seconds as ``M:SS``, or ``H:MM:SS`` from one hour on."""
    hours, rest = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
