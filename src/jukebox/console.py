"""Operator console: the jukebox's local controls, read from stdin."""

import asyncio
import logging
import sys
import threading
from typing import Awaitable, Callable

from jukebox import song_utils
from jukebox.player.controller import JukeboxController
from jukebox.playback.mpv import MpvPlaybackHost

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  skip    skip the current song
  fixmic  route audio to the virtual cable and restart voice chat
  queue   show the current song and the queue
  help    show this message"""


class StdinReader:
    """Reads stdin on a daemon thread so a blocked read never holds up shutdown."""

    def __init__(self) -> None:
        self._lines: asyncio.Queue[str] = asyncio.Queue()
        self._thread: threading.Thread | None = None

    def _read(self, loop: asyncio.AbstractEventLoop) -> None:
        try:
            for line in sys.stdin:
                loop.call_soon_threadsafe(self._lines.put_nowait, line)
            # Empty string marks end of input
            loop.call_soon_threadsafe(self._lines.put_nowait, "")
        except RuntimeError:
            # Event loop already closed
            return

    async def readline(self) -> str:
        if self._thread is None:
            self._thread = threading.Thread(
                target=self._read,
                args=(asyncio.get_running_loop(),),
                name="stdin-reader",
                daemon=True,
            )
            self._thread.start()
        return await self._lines.get()


class OperatorConsole:
    """Reads operator commands line by line until end of input."""

    def __init__(
        self,
        controller: JukeboxController,
        playback: MpvPlaybackHost,
        fix_microphone: Callable[[], Awaitable[object]],
        readline: Callable[[], Awaitable[str]] | None = None,
        write: Callable[[str], object] = print,
    ):
        self.controller = controller
        self.playback = playback
        self.fix_microphone = fix_microphone
        self._readline = readline or StdinReader().readline
        self._write = write
        self._commands: dict[str, Callable[[], Awaitable[None]]] = {
            "skip": self.skip,
            "fixmic": self.fixmic,
            "queue": self.show_queue,
            "help": self.show_help,
        }

    async def run(self) -> None:
        """Handle commands until stdin is closed."""
        self._write("Type 'help' for a list of commands.")

        while True:
            line = await self._readline()
            if not line:
                logger.info("Operator console closed")
                return
            await self.handle(line)

    async def handle(self, line: str) -> None:
        """Run one console command."""
        name = line.strip().lower()
        if not name:
            return

        command = self._commands.get(name)
        if command is None:
            self._write(f"Unknown command: {name}")
            await self.show_help()
            return

        logger.info(f"Operator issued {name} command")
        await command()

    async def skip(self) -> None:
        if self.controller.current_song is None:
            self._write("Nothing is playing.")
            return
        await self.playback.request_skip()

    async def fixmic(self) -> None:
        await self.fix_microphone()

    async def show_queue(self) -> None:
        songs = self.controller.queue
        if not songs:
            self._write("The queue is empty.")
            return

        lines = []
        for index, song in enumerate(songs):
            prefix = "Now playing:" if index == 0 else f"{index}."
            lines.append(
                f"{prefix} {song.formatted_title} ({song.duration_humanized})"
            )
        lines.append(
            f"Total: {song_utils.humanize_duration(self.controller.total_duration)}"
        )
        self._write("\n".join(lines))

    async def show_help(self) -> None:
        self._write(HELP_TEXT)
