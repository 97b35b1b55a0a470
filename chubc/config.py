"""Connection and logging settings.

Every setting is taken from the command line first, then from the
environment, then from the built-in default.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from chubc.errors import ConfigError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5115
DEFAULT_LOG_LEVEL = "WARNING"

HOST_ENV = "CHUBC_HOST"
PORT_ENV = "CHUBC_PORT"
LOG_LEVEL_ENV = "CHUBC_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class Config:
    """Resolved settings for one invocation."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def logging_level(self) -> int:
        """Return the numeric logging level."""
        return getattr(logging, self.log_level)


def parse_port(value: str) -> int:
    """Parse a TCP port number."""
    try:
        port = int(value)
    except ValueError:
        raise ConfigError(f"invalid port number: {value}") from None
    check_port(port)
    return port


def check_port(port: int) -> None:
    """Raise ConfigError if port is not a valid TCP port."""
    if not 0 < port < 65536:
        raise ConfigError(f"invalid port number: {port}")


def resolve_config(
    environ: Mapping[str, str],
    *,
    host: str | None = None,
    port: int | None = None,
    log_level: str | None = None,
) -> Config:
    """Merge command line values with the environment and defaults."""
    if host is None:
        host = environ.get(HOST_ENV, DEFAULT_HOST)

    if port is None:
        port = parse_port(environ.get(PORT_ENV, str(DEFAULT_PORT)))
    else:
        check_port(port)

    if log_level is None:
        log_level = environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    log_level = log_level.upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"invalid log level: {log_level}")

    return Config(host=host, port=port, log_level=log_level)
