"""Public interface for the Chub client package."""

from .client import DEFAULT_TIMEOUT, ChubClient, EventQueue

__all__ = [
    "DEFAULT_TIMEOUT",
    "ChubClient",
    "EventQueue",
]
