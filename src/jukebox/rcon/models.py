"""Data models for the RCON session."""

from enum import Enum, auto


class SessionState(Enum):
    """Represents the state of the remote console connection."""

    DISCONNECTED = auto()  # No usable connection, commands fail
    AUTHENTICATING = auto()  # Connect and login in progress
    CONNECTED = auto()  # Logged in, commands can be executed
