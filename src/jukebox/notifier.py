"""Announce jukebox events in the game chat."""

import logging
from typing import TYPE_CHECKING

from jukebox import song_utils
from jukebox.config import constants
from jukebox.errors import CommandExecError

if TYPE_CHECKING:
    from jukebox.rcon.session import RconSession

logger = logging.getLogger(__name__)


class RconNotifier:
    """RCON implementation of the Notifier protocol."""

    def __init__(self, session: "RconSession"):
        self.session = session

    async def announce(self, text: str, team: bool = False) -> None:
        """Say text in the game chat. Failures are logged, never raised."""
        say = constants.SAY_TEAM_COMMAND if team else constants.SAY_COMMAND
        command = f"{say} {song_utils.sanitize_chat_text(text)}"

        try:
            await self.session.execute(command)
        except CommandExecError as e:
            logger.error(f"Failed to announce {text!r}: {e}")
