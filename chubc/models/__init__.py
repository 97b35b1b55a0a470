"""Models for the Chub protocol."""

from __future__ import annotations

from . import requests, responses, types, vfs
from .requests import VOLUME_MAX, VOLUME_MIN, check_volume
from .responses import Event, ResponseServerMessage
from .types import ClientMessage, PlaybackState, SeekMode, ServerMessage, VolumeMode
from .vfs import DirEntry, Entry, Metadata, Playlist, Status, Track, TrackEntry

__all__ = [
    "VOLUME_MAX",
    "VOLUME_MIN",
    "ClientMessage",
    "DirEntry",
    "Entry",
    "Event",
    "Metadata",
    "PlaybackState",
    "Playlist",
    "ResponseServerMessage",
    "SeekMode",
    "ServerMessage",
    "Status",
    "Track",
    "TrackEntry",
    "VolumeMode",
    "check_volume",
    "requests",
    "responses",
    "types",
    "vfs",
]
