"""Player package for the song queue and vote skipping."""

from jukebox.player.controller import JukeboxController
from jukebox.player.models import VoteSkipTally

__all__ = [
    "JukeboxController",
    "VoteSkipTally",
]
