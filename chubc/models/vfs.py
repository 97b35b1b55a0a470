"""
Library models for the Chub protocol.

Tracks, directories and playlists as the server describes them, plus the
status snapshot returned by the status command. Durations and positions are
whole seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mashumaro.config import BaseConfig
from mashumaro.mixins.orjson import DataClassORJSONMixin
from mashumaro.types import Discriminator

from .types import PlaybackState


@dataclass
class Metadata(DataClassORJSONMixin):
    """Tags read from a track file."""

    artist: str | None = None
    album: str | None = None
    title: str | None = None
    number: int | None = None
    """Track number within the album."""

    class Config(BaseConfig):
        """Config for parsing json messages."""

        omit_none = True


@dataclass
class Track(DataClassORJSONMixin):
    """A playable track."""

    path: str
    """Absolute VFS path of the track."""
    duration: int = 0
    """Track length in seconds."""
    metadata: Metadata | None = None

    class Config(BaseConfig):
        """Config for parsing json messages."""

        omit_none = True


@dataclass
class Playlist(DataClassORJSONMixin):
    """A named playlist."""

    name: str
    length: int = 0
    """Number of tracks."""
    duration: int = 0
    """Total length in seconds."""


# VFS entries returned by the list command
@dataclass
class Entry(DataClassORJSONMixin):
    """Base class for directory listing entries."""

    class Config(BaseConfig):
        """Config for parsing json messages."""

        discriminator = Discriminator(field="type", include_subtypes=True)


@dataclass
class DirEntry(Entry):
    """A directory inside the VFS."""

    path: str
    type: Literal["dir"] = "dir"


@dataclass
class TrackEntry(Entry):
    """A track inside the VFS."""

    track: Track
    type: Literal["track"] = "track"


@dataclass
class Status(DataClassORJSONMixin):
    """Snapshot of the player state."""

    state: PlaybackState
    volume: int
    """Volume range 0-100."""
    playlist: Playlist | None = None
    """Playlist the current track belongs to."""
    track: Track | None = None
    """Track being played or paused, absent when stopped."""
    position: int | None = None
    """Playback position inside the current track in seconds."""

    class Config(BaseConfig):
        """Config for parsing json messages."""

        omit_none = True
