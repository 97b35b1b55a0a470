"""Shared fixtures: an in-process fake Chub server."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Any

import orjson
import pytest_asyncio

Message = dict[str, Any]
Reply = Callable[[Message], list[Message]]


def ok(request: Message) -> list[Message]:
    """Reply with a plain ok response."""
    return [{"type": "ok", "id": request["id"]}]


class FakeChubServer:
    """Line based JSON server answering requests from canned replies."""

    def __init__(self) -> None:
        self.replies: dict[str, Reply] = {}
        self.close_after: set[str] = set()
        self.requests: list[Message] = []
        self.connections = 0
        self.disconnected = asyncio.Event()
        self._server: asyncio.Server | None = None
        self._writers: list[asyncio.StreamWriter] = []

    @property
    def port(self) -> int:
        assert self._server is not None
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)

    async def stop(self) -> None:
        for writer in self._writers:
            writer.close()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.connections += 1
        self._writers.append(writer)
        try:
            while line := await reader.readline():
                request = orjson.loads(line)
                self.requests.append(request)
                for message in self.replies.get(request["type"], ok)(request):
                    writer.write(orjson.dumps(message) + b"\n")
                await writer.drain()
                if request["type"] in self.close_after:
                    break
        except ConnectionError:
            pass
        finally:
            writer.close()
            self.disconnected.set()


@pytest_asyncio.fixture
async def server() -> AsyncIterator[FakeChubServer]:
    fake = FakeChubServer()
    await fake.start()
    yield fake
    await fake.stop()


@pytest_asyncio.fixture
async def closed_port() -> int:
    """Return a local port nothing listens on."""
    fake = FakeChubServer()
    await fake.start()
    port = fake.port
    await fake.stop()
    return port
