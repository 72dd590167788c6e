"""Route the jukebox audio into the game's voice chat."""

import asyncio
import logging
from typing import TYPE_CHECKING

from jukebox.config import constants
from jukebox.config.settings import JukeboxSettings
from jukebox.errors import AudioRoutingError, CommandExecError

if TYPE_CHECKING:
    from jukebox.rcon.session import RconSession

logger = logging.getLogger(__name__)


async def set_default_microphone(settings: JukeboxSettings) -> None:
    """Make the virtual audio cable the system's default microphone.

    Raises:
        AudioRoutingError: The routing tool is missing, failed, or complained on stderr.
    """
    command = settings.audio_routing_command

    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise AudioRoutingError(f"Could not run {command[0]}: {e}") from e

    _, stderr = await process.communicate()

    if process.returncode != 0:
        raise AudioRoutingError(
            f"{command[0]} exited with status {process.returncode}"
        )
    if stderr.strip():
        raise AudioRoutingError(
            f"stderr: {stderr.decode(errors='replace').strip()}"
        )


async def fix_microphone(session: "RconSession", settings: JukeboxSettings) -> bool:
    """Reset the default microphone and restart voice recording in game.

    Stopping and restarting +voicerecord makes the game pick up the new
    default input device.

    Args:
        session: Connected RCON session.
        settings: Jukebox settings.

    Returns:
        True if every step succeeded.
    """
    try:
        await set_default_microphone(settings)
    except AudioRoutingError as e:
        logger.error(f"Error setting default microphone: {e}")
        return False

    logger.info("Default microphone set successfully.")

    try:
        for command in constants.VOICE_SETUP_COMMANDS:
            await session.execute(command)

        await session.execute(constants.VOICE_RECORD_STOP)
        await asyncio.sleep(settings.microphone_pulse_delay_secs)
        await session.execute(constants.VOICE_RECORD_START)
    except CommandExecError as e:
        logger.error(f"Failed to configure voice chat: {e}")
        return False

    return True
