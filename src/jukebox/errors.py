"""Exceptions raised by the jukebox."""


class JukeboxError(Exception):
    """Base class for all jukebox errors."""


class RconError(JukeboxError):
    """A remote console operation failed."""


class AuthError(RconError):
    """Authenticating the remote console session failed.

    Attributes:
        code: Short machine-readable reason, e.g. an errno name.
    """

    def __init__(self, code: str, message: str | None = None):
        super().__init__(message or f"RCON authentication failed ({code})")
        self.code = code


class ConnectionRefused(AuthError):
    """Nothing is listening on the RCON port, usually because the game is not running."""

    def __init__(self, message: str | None = None):
        super().__init__("ECONNREFUSED", message or "RCON connection refused")


class CommandExecError(RconError):
    """A console command could not be executed."""

    def __init__(self, command: str, reason: str):
        super().__init__(f"Failed to execute {command!r}: {reason}")
        self.command = command
        self.reason = reason


class MediaLookupError(JukeboxError):
    """No playable track could be found for a search query."""


class AudioRoutingError(JukeboxError):
    """The platform audio-routing tool failed."""
