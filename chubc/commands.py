"""Command dispatch table for the chubc command line.

Each verb maps to a :class:`Command` describing its arity and how its
arguments turn into a single call on :class:`~chubc.client.ChubClient`.
Arguments are validated by :meth:`Command.prepare` before any connection is
opened.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TextIO

import orjson

from chubc.arguments import parse_seek_argument, parse_volume_argument
from chubc.client import ChubClient, EventQueue
from chubc.duration import format_time
from chubc.errors import ArgumentCountError, UnknownCommandError
from chubc.models import DirEntry, Entry, Event, Playlist, Status, TrackEntry

logger = logging.getLogger(__name__)

Handler = Callable[[ChubClient, TextIO], Awaitable[None]]
Builder = Callable[[Sequence[str]], Handler]


@dataclass(frozen=True, slots=True)
class Command:
    """A command verb of the command line."""

    name: str
    arity: int
    summary: str
    build: Builder | None = None
    """Turn validated arguments into a handler; None for commands run locally."""
    usage: str = ""
    """Argument synopsis shown in the help text."""

    @property
    def local(self) -> bool:
        """Return True if the command does not talk to the server."""
        return self.build is None

    def prepare(self, args: Sequence[str]) -> Handler | None:
        """Validate args and return the handler to run against a connected client."""
        check_args(args, self.arity)
        if self.build is None:
            return None
        return self.build(args)


def check_args(args: Sequence[str], expected: int) -> None:
    """Raise ArgumentCountError unless exactly expected arguments are given."""
    if len(args) < expected:
        raise ArgumentCountError("not enough arguments")
    if len(args) > expected:
        raise ArgumentCountError("too many arguments")


def _print(out: TextIO, line: str) -> None:
    print(line, file=out, flush=True)  # noqa: T201


# ---------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------
def _basename(path: str) -> str:
    return posixpath.basename(path.rstrip("/"))


def format_entry(entry: Entry) -> str:
    """Return the final path segment of entry, directories with a trailing slash."""
    if isinstance(entry, DirEntry):
        return f"{_basename(entry.path)}/"
    if isinstance(entry, TrackEntry):
        return _basename(entry.track.path)
    raise TypeError(f"Unsupported entry type: {type(entry).__name__}")


def sort_playlists(playlists: Sequence[Playlist]) -> list[Playlist]:
    """Return playlists ordered by name."""
    return sorted(playlists, key=lambda playlist: playlist.name)


def format_status(status: Status) -> list[str]:
    """Return human-friendly ``key: value`` lines describing status."""
    lines = [f"state: {status.state.value}", f"volume: {status.volume}"]
    if status.playlist is not None:
        playlist = status.playlist
        lines.append(
            f"playlist: {playlist.name} ({playlist.length} tracks, "
            f"{format_time(playlist.duration)})"
        )
    track = status.track
    if track is not None:
        lines.append(f"track: {track.path}")
        if track.metadata is not None:
            for attr in ("artist", "album", "title"):
                value = getattr(track.metadata, attr)
                if value:
                    lines.append(f"{attr}: {value}")
        if status.position is not None:
            lines.append(f"position: {format_time(status.position)}/{format_time(track.duration)}")
    return lines


def format_event(event: Event) -> str:
    """Return the event kind followed by its data as compact JSON."""
    if not event.data:
        return event.kind
    data = orjson.dumps(event.data, option=orjson.OPT_SORT_KEYS).decode("utf-8")
    return f"{event.kind} {data}"


# ---------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------
def _call(method: Callable[..., Awaitable[None]]) -> Builder:
    """Build handlers passing the arguments unchanged to a client method."""

    def build(args: Sequence[str]) -> Handler:
        async def handler(client: ChubClient, _out: TextIO) -> None:
            await method(client, *args)

        return handler

    return build


def _build_list(args: Sequence[str]) -> Handler:
    path = args[0]

    async def handler(client: ChubClient, out: TextIO) -> None:
        for entry in await client.list_entries(path):
            _print(out, format_entry(entry))

    return handler


def _build_playlists(_args: Sequence[str]) -> Handler:
    async def handler(client: ChubClient, out: TextIO) -> None:
        for playlist in sort_playlists(await client.playlists()):
            _print(out, playlist.name)

    return handler


def _build_status(_args: Sequence[str]) -> Handler:
    async def handler(client: ChubClient, out: TextIO) -> None:
        for line in format_status(await client.status()):
            _print(out, line)

    return handler


def _build_seek(args: Sequence[str]) -> Handler:
    mode, seconds = parse_seek_argument(args[0])

    async def handler(client: ChubClient, _out: TextIO) -> None:
        await client.seek(seconds, mode)

    return handler


def _build_volume(args: Sequence[str]) -> Handler:
    mode, volume = parse_volume_argument(args[0])

    async def handler(client: ChubClient, _out: TextIO) -> None:
        await client.volume(volume, mode)

    return handler


async def relay_events(queue: EventQueue, out: TextIO) -> None:
    """Print events from queue until the closing sentinel arrives."""
    while (event := await queue.get()) is not None:
        _print(out, format_event(event))
    logger.debug("Event stream closed")


def _build_events(_args: Sequence[str]) -> Handler:
    async def handler(client: ChubClient, out: TextIO) -> None:
        await relay_events(await client.subscribe(), out)

    return handler


COMMANDS: dict[str, Command] = {
    command.name: command
    for command in (
        Command(
            "create-playlist", 1, "create playlist", _call(ChubClient.create_playlist), "NAME"
        ),
        Command(
            "delete-playlist", 1, "delete playlist", _call(ChubClient.delete_playlist), "NAME"
        ),
        Command("events", 0, "print server events until the server disconnects", _build_events),
        Command("help", 0, "show this help"),
        Command("kill", 0, "kill server", _call(ChubClient.kill)),
        Command("list", 1, "list directory contents", _build_list, "PATH"),
        Command("next", 0, "play next track", _call(ChubClient.next)),
        Command("pause", 0, "toggle pause state", _call(ChubClient.pause)),
        Command("ping", 0, "ping server", _call(ChubClient.ping)),
        Command("play", 1, "play path", _call(ChubClient.play), "PATH"),
        Command("playlists", 0, "list playlists", _build_playlists),
        Command("prev", 0, "play previous track", _call(ChubClient.prev)),
        Command(
            "rename-playlist", 2, "rename playlist", _call(ChubClient.rename_playlist), "FROM TO"
        ),
        Command("seek", 1, "seek current track", _build_seek, "[-|+]TIME"),
        Command("status", 0, "show player status", _build_status),
        Command("stop", 0, "stop playback", _call(ChubClient.stop)),
        Command("volume", 1, "set or change volume", _build_volume, "[-|+]VOLUME"),
    )
}


def get_command(name: str) -> Command:
    """Return the command for verb name."""
    try:
        return COMMANDS[name]
    except KeyError:
        raise UnknownCommandError(name) from None


def format_commands() -> str:
    """Return the command section of the help text."""
    synopses = {name: f"{name} {command.usage}".rstrip() for name, command in COMMANDS.items()}
    width = max(len(synopsis) for synopsis in synopses.values()) + 2
    return "\n".join(
        f"  {synopses[name]:<{width}}{command.summary}" for name, command in COMMANDS.items()
    )
