"""Remote console connection to the game."""

from jukebox.rcon.microphone import fix_microphone
from jukebox.rcon.models import SessionState
from jukebox.rcon.session import RconSession

__all__ = [
    "RconSession",
    "SessionState",
    "fix_microphone",
]
