"""
Client messages for the Chub protocol.

Every command the client can issue is a separate message class. Each message
carries an ``id`` chosen by the client; the server echoes it in the response
so that replies can be matched to pending requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mashumaro.mixins.orjson import DataClassORJSONMixin

from chubc.errors import RangeError

from .types import ClientMessage, SeekMode, VolumeMode

VOLUME_MIN = 0
VOLUME_MAX = 100


def check_volume(value: int, mode: VolumeMode) -> None:
    """Raise RangeError if value is not a valid volume for mode."""
    if mode is VolumeMode.ABSOLUTE:
        if not VOLUME_MIN <= value <= VOLUME_MAX:
            raise RangeError(
                f"volume must be in range [{VOLUME_MIN}, {VOLUME_MAX}], got {value}"
            )
    elif not -VOLUME_MAX <= value <= VOLUME_MAX:
        raise RangeError(
            f"relative volume must be in range [{-VOLUME_MAX}, {VOLUME_MAX}], got {value}"
        )


# Payloads
@dataclass
class PathClientPayload(DataClassORJSONMixin):
    """Payload addressing a VFS path."""

    path: str


@dataclass
class PlaylistClientPayload(DataClassORJSONMixin):
    """Payload addressing a playlist by name."""

    name: str


@dataclass
class RenamePlaylistClientPayload(DataClassORJSONMixin):
    """Payload for renaming a playlist."""

    name: str
    """Current playlist name."""
    new_name: str


@dataclass
class SeekClientPayload(DataClassORJSONMixin):
    """Payload for changing the playback position."""

    seconds: int
    mode: SeekMode = SeekMode.ABSOLUTE

    def __post_init__(self) -> None:
        """Validate field values."""
        if self.seconds < 0:
            raise RangeError(f"seek time must not be negative, got {self.seconds}")


@dataclass
class VolumeClientPayload(DataClassORJSONMixin):
    """Payload for changing the volume."""

    volume: int
    mode: VolumeMode = VolumeMode.ABSOLUTE

    def __post_init__(self) -> None:
        """Validate field values."""
        check_volume(self.volume, self.mode)


# Playback control
@dataclass
class PingClientMessage(ClientMessage):
    """Check that the server is alive."""

    id: int
    type: Literal["ping"] = "ping"


@dataclass
class KillClientMessage(ClientMessage):
    """Ask the server process to terminate."""

    id: int
    type: Literal["kill"] = "kill"


@dataclass
class NextClientMessage(ClientMessage):
    """Play the next track of the current playlist."""

    id: int
    type: Literal["next"] = "next"


@dataclass
class PrevClientMessage(ClientMessage):
    """Play the previous track of the current playlist."""

    id: int
    type: Literal["prev"] = "prev"


@dataclass
class PauseClientMessage(ClientMessage):
    """Toggle the pause state."""

    id: int
    type: Literal["pause"] = "pause"


@dataclass
class StopClientMessage(ClientMessage):
    """Stop playback."""

    id: int
    type: Literal["stop"] = "stop"


@dataclass
class PlayClientMessage(ClientMessage):
    """Play a VFS path."""

    id: int
    payload: PathClientPayload
    type: Literal["play"] = "play"


@dataclass
class SeekClientMessage(ClientMessage):
    """Change the playback position."""

    id: int
    payload: SeekClientPayload
    type: Literal["seek"] = "seek"


@dataclass
class VolumeClientMessage(ClientMessage):
    """Change the volume."""

    id: int
    payload: VolumeClientPayload
    type: Literal["volume"] = "volume"


# Library and playlists
@dataclass
class ListClientMessage(ClientMessage):
    """List the contents of a VFS directory."""

    id: int
    payload: PathClientPayload
    type: Literal["list"] = "list"


@dataclass
class PlaylistsClientMessage(ClientMessage):
    """Request all playlists."""

    id: int
    type: Literal["playlists"] = "playlists"


@dataclass
class CreatePlaylistClientMessage(ClientMessage):
    """Create an empty playlist."""

    id: int
    payload: PlaylistClientPayload
    type: Literal["create-playlist"] = "create-playlist"


@dataclass
class DeletePlaylistClientMessage(ClientMessage):
    """Delete a playlist."""

    id: int
    payload: PlaylistClientPayload
    type: Literal["delete-playlist"] = "delete-playlist"


@dataclass
class RenamePlaylistClientMessage(ClientMessage):
    """Rename a playlist."""

    id: int
    payload: RenamePlaylistClientPayload
    type: Literal["rename-playlist"] = "rename-playlist"


# State
@dataclass
class StatusClientMessage(ClientMessage):
    """Request a status snapshot."""

    id: int
    type: Literal["status"] = "status"


@dataclass
class SubscribeClientMessage(ClientMessage):
    """Start receiving event messages on this connection."""

    id: int
    type: Literal["subscribe"] = "subscribe"
