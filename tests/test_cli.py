import asyncio
import io
import os
import signal

import pytest

from chubc import cli
from chubc.cli import main_async
from chubc.client import ChubClient
from test_commands import EXPECTED_ARITY


async def run(argv: list[str], environ: dict[str, str] | None = None) -> tuple[int, str]:
    out = io.StringIO()
    code = await main_async(argv, environ=environ or {}, out=out, prog="chubc")
    return code, out.getvalue()


@pytest.fixture
def no_network(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, int]]:
    attempts: list[tuple[str, int]] = []

    async def connect(self: ChubClient, host: str, port: int) -> None:
        attempts.append((host, port))
        raise AssertionError("connect must not be called")

    monkeypatch.setattr(ChubClient, "connect", connect)
    return attempts


async def test_help_option(no_network) -> None:
    code, out = await run(["--help"])
    assert code == 0
    assert "usage: chubc [OPTIONS] COMMAND [ARG...]" in out
    assert "--host HOST" in out
    assert "--port PORT" in out
    assert "rename-playlist FROM TO" in out
    assert no_network == []


async def test_help_command(no_network) -> None:
    code, out = await run(["help"])
    assert code == 0
    assert "commands:" in out
    assert no_network == []


async def test_missing_command(capsys: pytest.CaptureFixture[str]) -> None:
    code, _ = await run([])
    assert code == 1
    assert capsys.readouterr().err == "chubc: missing command parameter\n"


async def test_unknown_command(no_network, capsys: pytest.CaptureFixture[str]) -> None:
    code, _ = await run(["frobnicate"])
    assert code == 1
    assert capsys.readouterr().err == "chubc: 'frobnicate' is not a valid command\n"
    assert no_network == []


async def test_invalid_option(capsys: pytest.CaptureFixture[str]) -> None:
    code, _ = await run(["--port", "abc", "ping"])
    assert code == 1
    assert capsys.readouterr().err.startswith("chubc: invalid parameters: ")


@pytest.mark.parametrize("name", sorted(EXPECTED_ARITY))
async def test_wrong_argument_count_fails_before_connecting(
    name: str, no_network, capsys: pytest.CaptureFixture[str]
) -> None:
    code, _ = await run([name, *["x"] * (EXPECTED_ARITY[name] + 1)])
    assert code == 1
    assert capsys.readouterr().err == "chubc: too many arguments\n"
    if EXPECTED_ARITY[name]:
        code, _ = await run([name, *["x"] * (EXPECTED_ARITY[name] - 1)])
        assert code == 1
        assert capsys.readouterr().err == "chubc: not enough arguments\n"
    assert no_network == []


@pytest.mark.parametrize(
    "argv",
    [
        ["volume", "101"],
        ["volume", "-101"],
        ["volume", "9" * 5000],
        ["seek", "1:2:3:4"],
        ["seek", "+" + "9" * 5000],
    ],
)
async def test_invalid_values_fail_before_connecting(
    argv: list[str], no_network, capsys: pytest.CaptureFixture[str]
) -> None:
    code, _ = await run(argv)
    assert code == 1
    assert capsys.readouterr().err.startswith("chubc: ")
    assert no_network == []


async def test_invalid_port_environment(capsys: pytest.CaptureFixture[str]) -> None:
    code, _ = await run(["ping"], {"CHUBC_PORT": "abc"})
    assert code == 1
    assert capsys.readouterr().err == "chubc: invalid port number: abc\n"


async def test_connection_error(closed_port: int, capsys: pytest.CaptureFixture[str]) -> None:
    code, _ = await run(["-h", "127.0.0.1", "-p", str(closed_port), "ping"])
    assert code == 1
    assert capsys.readouterr().err.startswith("chubc: unable to connect to remote host: ")


async def test_environment_selects_server(server) -> None:
    code, out = await run(["ping"], {"CHUBC_HOST": "127.0.0.1", "CHUBC_PORT": str(server.port)})
    assert code == 0
    assert out == ""
    assert server.requests == [{"id": 1, "type": "ping"}]


async def test_remote_error(server, capsys: pytest.CaptureFixture[str]) -> None:
    server.replies["delete-playlist"] = lambda request: [
        {"type": "error", "id": request["id"], "payload": {"message": "playlist not found"}}
    ]
    code, _ = await run(["-h", "127.0.0.1", "-p", str(server.port), "delete-playlist", "x"])
    assert code == 1
    assert capsys.readouterr().err == "chubc: playlist not found\n"


async def test_playlists(server) -> None:
    server.replies["playlists"] = lambda request: [
        {
            "type": "playlists",
            "id": request["id"],
            "payload": {"playlists": [{"name": "zeta"}, {"name": "alpha"}, {"name": "mid"}]},
        }
    ]
    code, out = await run(["-h", "127.0.0.1", "-p", str(server.port), "playlists"])
    assert code == 0
    assert out == "alpha\nmid\nzeta\n"


async def test_signed_seek_argument(server) -> None:
    code, _ = await run(["-h", "127.0.0.1", "-p", str(server.port), "seek", "-1:30"])
    assert code == 0
    assert server.requests == [
        {"id": 1, "payload": {"seconds": 90, "mode": "rewind"}, "type": "seek"}
    ]


async def test_events_end_when_server_closes(server) -> None:
    server.replies["subscribe"] = lambda request: [
        {"type": "ok", "id": request["id"]},
        {"type": "event", "payload": {"kind": "track-changed", "data": {"path": "/a.ogg"}}},
    ]
    server.close_after.add("subscribe")
    code, out = await run(["-h", "127.0.0.1", "-p", str(server.port), "events"])
    assert code == 0
    assert out == 'track-changed {"path":"/a.ogg"}\n'


def test_main_uses_program_name(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(cli.sys, "argv", ["/usr/local/bin/chubc", "frobnicate"])
    assert cli.main() == 1
    assert capsys.readouterr().err == "chubc: 'frobnicate' is not a valid command\n"


async def _start_events(server) -> asyncio.Task[tuple[int, str]]:
    """Run the events command until the server has seen the subscription."""
    task = asyncio.create_task(run(["-h", "127.0.0.1", "-p", str(server.port), "events"]))
    async with asyncio.timeout(1):
        while not server.requests:
            await asyncio.sleep(0.01)
    assert server.requests == [{"id": 1, "type": "subscribe"}]
    return task


async def test_sigint_stops_events(server) -> None:
    task = await _start_events(server)
    os.kill(os.getpid(), signal.SIGINT)
    code, out = await asyncio.wait_for(task, timeout=1)
    assert code == 0
    assert out == ""
    await asyncio.wait_for(server.disconnected.wait(), timeout=1)


async def test_cancelling_the_caller_is_not_swallowed(server) -> None:
    task = await _start_events(server)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    await asyncio.wait_for(server.disconnected.wait(), timeout=1)
