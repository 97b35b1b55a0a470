"""Command-line interface for sending single commands to a Chub server."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import signal
import sys
from collections.abc import Mapping, Sequence
from contextlib import suppress
from typing import NoReturn, TextIO

from chubc.client import ChubClient
from chubc.commands import Handler, format_commands, get_command
from chubc.config import LOG_LEVELS, resolve_config
from chubc.errors import ChubError, UsageError

logger = logging.getLogger(__name__)

PROG = "chubc"


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser reporting errors as UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"invalid parameters: {message}")


def build_parser(prog: str = PROG) -> argparse.ArgumentParser:
    """Build the parser for the global options, the command and its arguments."""
    parser = _ArgumentParser(
        prog=prog,
        usage="%(prog)s [OPTIONS] COMMAND [ARG...]",
        description="Simple Chub noninteractive client.",
        epilog=f"commands:\n{format_commands()}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-h", "--host", metavar="HOST", help="server host name")
    parser.add_argument("--help", action="store_true", help="display this help")
    parser.add_argument("-p", "--port", metavar="PORT", type=int, help="server port")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="logging level to use",
    )
    parser.add_argument("command", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


async def run_handler(handler: Handler, host: str, port: int, out: TextIO) -> None:
    """
    Connect, run handler and close the connection on every exit path.

    SIGINT cancels the running command, which ends long running commands such
    as ``events`` without an error.
    """
    async with ChubClient() as client:
        await client.connect(host, port)
        loop = asyncio.get_running_loop()
        current = asyncio.current_task()
        command = loop.create_task(handler(client, out))

        def signal_handler() -> None:
            logger.debug("Received interrupt signal, shutting down...")
            command.cancel()

        with suppress(NotImplementedError):
            loop.add_signal_handler(signal.SIGINT, signal_handler)
        try:
            await command
        except asyncio.CancelledError:
            if current is not None and current.cancelling():
                raise
            logger.debug("Command interrupted")
        finally:
            with suppress(NotImplementedError):
                loop.remove_signal_handler(signal.SIGINT)


async def main_async(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    out: TextIO | None = None,
    prog: str = PROG,
) -> int:
    """Entry point executing the asynchronous CLI workflow."""
    environ = os.environ if environ is None else environ
    out = sys.stdout if out is None else out
    parser = build_parser(prog)
    try:
        args = parser.parse_args(list(argv) if argv is not None else None)
        if args.help:
            parser.print_help(out)
            return 0
        if args.command is None:
            raise UsageError("missing command parameter")

        # Arguments are fully validated before connecting.
        handler = get_command(args.command).prepare(args.args)
        if handler is None:
            parser.print_help(out)
            return 0

        config = resolve_config(
            environ, host=args.host, port=args.port, log_level=args.log_level
        )
        logging.basicConfig(level=config.logging_level)
        await run_handler(handler, config.host, config.port, out)
    except ChubError as err:
        print(f"{prog}: {err}", file=sys.stderr)  # noqa: T201
        return 1
    return 0


def main() -> int:
    """Run the CLI client."""
    prog = os.path.basename(sys.argv[0]) or PROG
    return asyncio.run(main_async(sys.argv[1:], prog=prog))


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
