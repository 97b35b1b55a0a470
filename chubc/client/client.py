"""Chub client implementation to connect to a Chub server."""

from __future__ import annotations

import asyncio
import itertools
import logging
from contextlib import suppress
from types import TracebackType
from typing import Self, TypeVar

from chubc.errors import ChubConnectionError, ProtocolError, RemoteError
from chubc.models.requests import (
    CreatePlaylistClientMessage,
    DeletePlaylistClientMessage,
    KillClientMessage,
    ListClientMessage,
    NextClientMessage,
    PathClientPayload,
    PauseClientMessage,
    PingClientMessage,
    PlayClientMessage,
    PlaylistClientPayload,
    PlaylistsClientMessage,
    PrevClientMessage,
    RenamePlaylistClientMessage,
    RenamePlaylistClientPayload,
    SeekClientMessage,
    SeekClientPayload,
    StatusClientMessage,
    StopClientMessage,
    SubscribeClientMessage,
    VolumeClientMessage,
    VolumeClientPayload,
)
from chubc.models.responses import (
    EntriesServerMessage,
    ErrorServerMessage,
    Event,
    EventServerMessage,
    OkServerMessage,
    PlaylistsServerMessage,
    ResponseServerMessage,
    StatusServerMessage,
)
from chubc.models.types import ClientMessage, SeekMode, ServerMessage, VolumeMode
from chubc.models.vfs import Entry, Playlist, Status

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
# Directory listings arrive as a single line.
READ_LIMIT = 16 * 1024 * 1024

EventQueue = asyncio.Queue[Event | None]

_ResponseT = TypeVar("_ResponseT", bound=ServerMessage)


class ChubClient:
    """Async Chub client issuing one request at a time over a TCP connection."""

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Create a new Chub client instance."""
        self._timeout = timeout
        self._loop: asyncio.AbstractEventLoop | None = None
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._send_lock = asyncio.Lock()
        self._request_ids = itertools.count(1)
        self._pending: dict[int, asyncio.Future[ResponseServerMessage]] = {}
        self._events: EventQueue | None = None
        self._connected = False

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    @property
    def connected(self) -> bool:
        """Return True if the client currently has an active connection."""
        return self._connected and self._writer is not None and not self._writer.is_closing()

    async def connect(self, host: str, port: int) -> None:
        """Connect to a Chub server."""
        if self.connected:
            logger.debug("Already connected")
            return

        self._loop = asyncio.get_running_loop()
        logger.info("Connecting to Chub server at %s:%d", host, port)
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, limit=READ_LIMIT),
                timeout=self._timeout,
            )
        except TimeoutError as err:
            raise ChubConnectionError(
                f"unable to connect to remote host: timed out connecting to {host}:{port}"
            ) from err
        except OSError as err:
            raise ChubConnectionError(f"unable to connect to remote host: {err}") from err

        self._connected = True
        self._reader_task = self._loop.create_task(self._reader_loop())
        logger.info("Connected to %s:%d", host, port)

    async def close(self) -> None:
        """Close the connection and release resources."""
        self._connected = False
        current_task = asyncio.current_task(loop=self._loop) if self._loop else None

        if self._reader_task is not None:
            if self._reader_task is not current_task:
                self._reader_task.cancel()
                with suppress(asyncio.CancelledError):
                    await self._reader_task
            self._reader_task = None
        if self._writer is not None:
            self._writer.close()
            with suppress(ConnectionError):
                await self._writer.wait_closed()
            self._writer = None
        self._reader = None
        self._connection_lost(ChubConnectionError("connection closed"))

    async def ping(self) -> None:
        """Check that the server responds."""
        await self._request_ok(PingClientMessage(id=self._next_id()))

    async def kill(self) -> None:
        """Terminate the server process."""
        await self._request_ok(KillClientMessage(id=self._next_id()))

    async def next(self) -> None:
        """Play the next track."""
        await self._request_ok(NextClientMessage(id=self._next_id()))

    async def prev(self) -> None:
        """Play the previous track."""
        await self._request_ok(PrevClientMessage(id=self._next_id()))

    async def pause(self) -> None:
        """Toggle the pause state."""
        await self._request_ok(PauseClientMessage(id=self._next_id()))

    async def stop(self) -> None:
        """Stop playback."""
        await self._request_ok(StopClientMessage(id=self._next_id()))

    async def play(self, path: str) -> None:
        """Play the track or directory at path."""
        message = PlayClientMessage(id=self._next_id(), payload=PathClientPayload(path=path))
        await self._request_ok(message)

    async def seek(self, seconds: int, mode: SeekMode = SeekMode.ABSOLUTE) -> None:
        """Move the playback position of the current track."""
        payload = SeekClientPayload(seconds=seconds, mode=mode)
        await self._request_ok(SeekClientMessage(id=self._next_id(), payload=payload))

    async def volume(self, volume: int, mode: VolumeMode = VolumeMode.ABSOLUTE) -> None:
        """Set the volume, or change it by a signed delta in relative mode."""
        payload = VolumeClientPayload(volume=volume, mode=mode)
        await self._request_ok(VolumeClientMessage(id=self._next_id(), payload=payload))

    async def list_entries(self, path: str) -> list[Entry]:
        """Return the contents of a VFS directory in server order."""
        message = ListClientMessage(id=self._next_id(), payload=PathClientPayload(path=path))
        reply = await self._request(message, EntriesServerMessage)
        return reply.payload.entries

    async def playlists(self) -> list[Playlist]:
        """Return all playlists in server order."""
        message = PlaylistsClientMessage(id=self._next_id())
        reply = await self._request(message, PlaylistsServerMessage)
        return reply.payload.playlists

    async def create_playlist(self, name: str) -> None:
        """Create an empty playlist."""
        payload = PlaylistClientPayload(name=name)
        await self._request_ok(CreatePlaylistClientMessage(id=self._next_id(), payload=payload))

    async def delete_playlist(self, name: str) -> None:
        """Delete a playlist."""
        payload = PlaylistClientPayload(name=name)
        await self._request_ok(DeletePlaylistClientMessage(id=self._next_id(), payload=payload))

    async def rename_playlist(self, name: str, new_name: str) -> None:
        """Rename a playlist."""
        payload = RenamePlaylistClientPayload(name=name, new_name=new_name)
        await self._request_ok(RenamePlaylistClientMessage(id=self._next_id(), payload=payload))

    async def status(self) -> Status:
        """Return a snapshot of the player state."""
        reply = await self._request(StatusClientMessage(id=self._next_id()), StatusServerMessage)
        return reply.payload

    async def subscribe(self) -> EventQueue:
        """
        Subscribe to server events.

        Returns a queue receiving every event pushed by the server. ``None`` is
        put on the queue once the connection is closed by either side, after
        which nothing else is delivered.
        """
        if self._events is not None:
            return self._events

        # The server may push events and close before the reply is awaited.
        queue: EventQueue = asyncio.Queue()
        self._events = queue
        try:
            await self._request_ok(SubscribeClientMessage(id=self._next_id()))
        except Exception:
            if self._events is queue:
                self._events = None
            raise
        return queue

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _next_id(self) -> int:
        return next(self._request_ids)

    async def _request_ok(self, message: ClientMessage) -> None:
        await self._request(message, OkServerMessage)

    async def _request(self, message: ClientMessage, expected: type[_ResponseT]) -> _ResponseT:
        if not self.connected or self._loop is None:
            raise ChubConnectionError("client is not connected")

        request_id: int = message.id  # type: ignore[attr-defined]
        future: asyncio.Future[ResponseServerMessage] = self._loop.create_future()
        self._pending[request_id] = future
        try:
            await self._send(message)
            reply = await asyncio.wait_for(future, timeout=self._timeout)
        except TimeoutError as err:
            raise ChubConnectionError(
                f"timed out waiting for response to '{message.type}'"  # type: ignore[attr-defined]
            ) from err
        finally:
            self._pending.pop(request_id, None)

        if isinstance(reply, ErrorServerMessage):
            raise RemoteError(reply.payload.message)
        if not isinstance(reply, expected):
            raise ProtocolError(
                f"unexpected '{reply.type}' response to '{message.type}'"  # type: ignore[attr-defined]
            )
        return reply

    async def _send(self, message: ClientMessage) -> None:
        if self._writer is None:
            raise ChubConnectionError("client is not connected")
        data = message.to_json()
        logger.debug("Sending %s", data)
        async with self._send_lock:
            try:
                self._writer.write(data.encode("utf-8") + b"\n")
                await self._writer.drain()
            except ConnectionError as err:
                raise ChubConnectionError(f"connection lost: {err}") from err

    async def _reader_loop(self) -> None:
        assert self._reader is not None
        try:
            while line := await self._reader.readline():
                self._handle_line(line)
            logger.info("Connection closed by server")
        except asyncio.CancelledError:  # pragma: no cover - cancellation path
            pass
        except Exception:
            logger.exception("Connection reader encountered an error")
        finally:
            self._connected = False
            self._connection_lost(ChubConnectionError("connection closed by server"))

    def _handle_line(self, line: bytes) -> None:
        line = line.strip()
        if not line:
            return
        logger.debug("Received %s", line)
        try:
            message = ServerMessage.from_json(line)
        except Exception:
            logger.exception("Failed to parse server message: %s", line)
            return

        match message:
            case EventServerMessage(payload=event):
                self._handle_event(event)
            case (
                OkServerMessage()
                | ErrorServerMessage()
                | EntriesServerMessage()
                | PlaylistsServerMessage()
                | StatusServerMessage()
            ):
                self._handle_response(message)
            case _:
                logger.debug("Unhandled server message type: %s", type(message).__name__)

    def _handle_response(self, message: ResponseServerMessage) -> None:
        future = self._pending.get(message.id)
        if future is None or future.done():
            logger.debug("Dropping response to unknown request %d", message.id)
            return
        future.set_result(message)

    def _handle_event(self, event: Event) -> None:
        if self._events is None:
            logger.debug("Dropping event %s without subscription", event.kind)
            return
        self._events.put_nowait(event)

    def _connection_lost(self, error: ChubConnectionError) -> None:
        for future in self._pending.values():
            if not future.done():
                future.set_exception(error)
        self._pending.clear()
        if self._events is not None:
            self._events.put_nowait(None)
            self._events = None

    async def __aenter__(self) -> Self:
        """Enter the async context manager returning this instance."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the connection when leaving the async context manager."""
        await self.close()
