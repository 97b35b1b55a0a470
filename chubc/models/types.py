"""Models for enum types used by chubc."""

from dataclasses import dataclass
from enum import Enum

from mashumaro.config import BaseConfig
from mashumaro.mixins.orjson import DataClassORJSONMixin
from mashumaro.types import Discriminator


# Base message classes
@dataclass
class ClientMessage(DataClassORJSONMixin):
    """Base class for client messages."""

    class Config(BaseConfig):
        """Config for parsing json messages."""

        discriminator = Discriminator(field="type", include_subtypes=True)


@dataclass
class ServerMessage(DataClassORJSONMixin):
    """Base class for server messages."""

    class Config(BaseConfig):
        """Config for parsing json messages."""

        discriminator = Discriminator(field="type", include_subtypes=True)


# Enums


class PlaybackState(Enum):
    """Enum for Playback States."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class SeekMode(Enum):
    """How a seek target is applied to the current playback position."""

    ABSOLUTE = "absolute"
    """Jump to the given position."""
    REWIND = "rewind"
    """Move backwards by the given amount."""
    FORWARD = "forward"
    """Move forwards by the given amount."""


class VolumeMode(Enum):
    """How a volume value is applied to the current volume."""

    ABSOLUTE = "absolute"
    """Set the volume to the given value (0-100)."""
    RELATIVE = "relative"
    """Add the given signed delta (-100-100) to the current volume."""
