import asyncio
import logging
import sys
from functools import partial

import colorlog

from jukebox.chat.ingest import LogTailIngestor
from jukebox.config.settings import JukeboxSettings
from jukebox.config.validation import validate_console_log
from jukebox.console import OperatorConsole
from jukebox.errors import JukeboxError
from jukebox.media import YtDlpMediaLookup
from jukebox.notifier import RconNotifier
from jukebox.playback.mpv import MpvPlaybackHost
from jukebox.player.controller import JukeboxController
from jukebox.rcon.microphone import fix_microphone
from jukebox.rcon.session import RconSession

logger = logging.getLogger(__name__)


def setup_logging(log_level: int) -> None:
    formatter = colorlog.ColoredFormatter(
        "%(cyan)s%(asctime)s%(reset)s %(log_color)s%(levelname)-8s%(reset)s %(light_purple)s%(name)s:%(reset)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "purple",
            "INFO": "blue",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)

    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.addHandler(handler)


async def run(settings: JukeboxSettings) -> None:
    """Wire up every component and run until cancelled."""
    if settings.console_log_file is None:
        raise JukeboxError("No console log configured, set JUKEBOX_CONSOLE_LOG")

    session = RconSession(settings)
    session.on_connected = partial(fix_microphone, session, settings)

    playback = MpvPlaybackHost(settings)
    controller = JukeboxController(
        settings, RconNotifier(session), playback, YtDlpMediaLookup()
    )
    playback.listener = controller

    ingestor = LogTailIngestor(
        settings.console_log_file,
        controller.handle_command,
        force_polling=settings.force_polling,
        poll_delay_ms=settings.poll_delay_ms,
    )
    console = OperatorConsole(
        controller, playback, partial(fix_microphone, session, settings)
    )

    async def ingest_when_authenticated() -> None:
        await session.authenticated.wait()
        await ingestor.run()

    try:
        async with asyncio.TaskGroup() as tasks:
            tasks.create_task(session.maintain_connection())
            tasks.create_task(session.keep_alive())
            tasks.create_task(ingest_when_authenticated())
            tasks.create_task(console.run())
    finally:
        await controller.close()
        await playback.close()
        await session.close()


def run_jukebox() -> None:
    """Entry point for the jukebox script."""
    settings = JukeboxSettings.from_environment()
    setup_logging(settings.log_level)
    settings.validate(logger)

    logger.info("Starting jukebox")

    validation_errors = validate_console_log(settings)
    if validation_errors:
        for error in validation_errors:
            logger.error(error)
        logger.critical("Startup validation failed, exiting")
        sys.exit(1)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    run_jukebox()
