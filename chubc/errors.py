"""Exceptions raised by the Chub client and command line."""

from __future__ import annotations


class ChubError(Exception):
    """Base class for all errors reported to the user."""


class UsageError(ChubError):
    """The command line could not be parsed."""


class ArgumentCountError(UsageError):
    """A command was given the wrong number of arguments."""


class UnknownCommandError(UsageError):
    """The command verb is not known."""

    def __init__(self, name: str) -> None:
        """Create the error for the given verb."""
        super().__init__(f"'{name}' is not a valid command")
        self.name = name


class ConfigError(ChubError):
    """A configuration value taken from the environment is invalid."""


class FormatError(ChubError, ValueError):
    """An argument value is malformed."""


class RangeError(ChubError, ValueError):
    """An argument value is out of bounds."""


class ChubConnectionError(ChubError):
    """The connection to the server failed or was lost."""


class RemoteError(ChubError):
    """The server rejected a request."""


class ProtocolError(RemoteError):
    """The server sent a reply the client did not expect."""
