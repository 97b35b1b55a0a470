"""chubc: command-line client for the Chub media player server."""

from __future__ import annotations

# Re-export client library for easy import
from chubc.client import ChubClient, EventQueue
from chubc.errors import ChubConnectionError, ChubError, RemoteError

__all__ = [
    "ChubClient",
    "ChubConnectionError",
    "ChubError",
    "EventQueue",
    "RemoteError",
]
