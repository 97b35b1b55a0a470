"""
Server messages for the Chub protocol.

Responses echo the ``id`` of the request they answer. Events are pushed
without an id once the client has subscribed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from mashumaro.mixins.orjson import DataClassORJSONMixin

from .types import ServerMessage
from .vfs import Entry, Playlist, Status


@dataclass
class OkServerMessage(ServerMessage):
    """The request succeeded and carries no result."""

    id: int
    type: Literal["ok"] = "ok"


@dataclass
class ErrorServerPayload(DataClassORJSONMixin):
    """Reason a request failed."""

    message: str


@dataclass
class ErrorServerMessage(ServerMessage):
    """The request failed."""

    id: int
    payload: ErrorServerPayload
    type: Literal["error"] = "error"


@dataclass
class EntriesServerPayload(DataClassORJSONMixin):
    """Contents of a VFS directory in server order."""

    entries: list[Entry]


@dataclass
class EntriesServerMessage(ServerMessage):
    """Response to the list command."""

    id: int
    payload: EntriesServerPayload
    type: Literal["entries"] = "entries"


@dataclass
class PlaylistsServerPayload(DataClassORJSONMixin):
    """All playlists known to the server."""

    playlists: list[Playlist]


@dataclass
class PlaylistsServerMessage(ServerMessage):
    """Response to the playlists command."""

    id: int
    payload: PlaylistsServerPayload
    type: Literal["playlists"] = "playlists"


@dataclass
class StatusServerMessage(ServerMessage):
    """Response to the status command."""

    id: int
    payload: Status
    type: Literal["status"] = "status"


@dataclass
class Event(DataClassORJSONMixin):
    """Asynchronous notification pushed by the server."""

    kind: str
    """What happened, e.g. ``status-changed`` or ``playlists-changed``."""
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class EventServerMessage(ServerMessage):
    """Message pushed by the server to subscribed clients."""

    payload: Event
    type: Literal["event"] = "event"


ResponseServerMessage = (
    OkServerMessage
    | ErrorServerMessage
    | EntriesServerMessage
    | PlaylistsServerMessage
    | StatusServerMessage
)
