"""Interpretation of signed seek and volume arguments.

A leading ``-`` or ``+`` selects a relative adjustment, no sign selects an
absolute target. The sign is stripped before the value itself is parsed.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from chubc.duration import parse_time
from chubc.errors import FormatError
from chubc.models import SeekMode, VolumeMode, check_volume

_VOLUME = re.compile(r"[0-9]+")


class SeekArgument(NamedTuple):
    """A parsed seek argument."""

    mode: SeekMode
    seconds: int


class VolumeArgument(NamedTuple):
    """A parsed volume argument; volume is signed in relative mode."""

    mode: VolumeMode
    volume: int


def split_sign(text: str) -> tuple[str | None, str]:
    """Split a leading ``-`` or ``+`` from text."""
    if text[:1] in ("-", "+"):
        return text[0], text[1:]
    return None, text


def split_seek_argument(text: str) -> tuple[SeekMode, str]:
    """Return the seek mode selected by text and the unsigned time string."""
    sign, value = split_sign(text)
    if sign == "-":
        return SeekMode.REWIND, value
    if sign == "+":
        return SeekMode.FORWARD, value
    return SeekMode.ABSOLUTE, value


def parse_seek_argument(text: str) -> SeekArgument:
    """Parse ``[-|+][[HH:]MM:]SS``."""
    mode, value = split_seek_argument(text)
    return SeekArgument(mode, parse_time(value))


def parse_volume_argument(text: str) -> VolumeArgument:
    """
    Parse ``[-|+]VOLUME``.

    Raises:
        FormatError: If the value is not a whole number.
        RangeError: If an absolute value is outside [0, 100] or a relative
            one outside [-100, 100].
    """
    sign, value = split_sign(text)
    if not _VOLUME.fullmatch(value):
        raise FormatError(f"invalid volume value: {text}")

    try:
        volume = int(value)
    except ValueError:
        # More digits than int() accepts.
        raise FormatError(f"invalid volume value: {text}") from None
    if sign is None:
        mode = VolumeMode.ABSOLUTE
    else:
        mode = VolumeMode.RELATIVE
        if sign == "-":
            volume = -volume
    check_volume(volume, mode)
    return VolumeArgument(mode, volume)
