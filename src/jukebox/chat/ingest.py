"""Tail the game's console log for chat commands."""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

from watchfiles import Change, awatch

from jukebox.chat.commands import ChatCommand, parse_line
from jukebox.config import constants

logger = logging.getLogger(__name__)

CommandHandler = Callable[[ChatCommand], Awaitable[None]]


class LogTailIngestor:
    """Turns new command lines in the console log into dispatched commands.

    The log itself is the record of what has been handled: every line that
    yields a command is cut out of the file before the command is dispatched,
    so a later read never sees it again.
    """

    def __init__(
        self,
        log_file: Path,
        handler: CommandHandler,
        force_polling: bool = True,
        poll_delay_ms: int = 500,
    ):
        self.log_file = log_file
        self.handler = handler
        self.force_polling = force_polling
        self.poll_delay_ms = poll_delay_ms
        self._target = log_file.resolve()
        # Held from read to last dispatch so batches never overlap
        self._lock = asyncio.Lock()

    def _read_lines(self) -> list[str]:
        with open(self.log_file, encoding="utf-8", errors="replace", newline="") as f:
            return f.read().split(constants.LOG_LINE_DELIMITER)

    def _write_lines(self, lines: list[str]) -> None:
        """Overwrite the log with the given lines.

        This function should not be made async! Consumed lines have to be
        gone from disk before anything else gets a chance to read the file.
        """
        with open(self.log_file, "w", encoding="utf-8", newline="") as f:
            f.write(constants.LOG_LINE_DELIMITER.join(lines))

    async def process_log(self) -> int:
        """Consume and dispatch every command currently in the log.

        All command lines are cut from the file in one write before the
        first is dispatched, so lines the game appends while a command is
        being handled survive for the next pass. Commands are dispatched in
        file order, each awaited before the next.

        Returns:
            Number of commands dispatched.
        """
        async with self._lock:
            try:
                lines = self._read_lines()
            except FileNotFoundError:
                logger.debug(f"{self.log_file} does not exist yet")
                return 0

            remaining = []
            commands = []
            for line in lines:
                command = parse_line(line)
                if command is None:
                    remaining.append(line)
                else:
                    commands.append(command)

            if not commands:
                return 0

            # No await between read and write
            self._write_lines(remaining)

            for command in commands:
                logger.info(f"Received chat command {command}")
                await self.handler(command)

            return len(commands)

    def _is_log_change(self, change: Change, path: str) -> bool:
        return change != Change.deleted and Path(path).resolve() == self._target

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Process the log every time the game writes to it, until stopped.

        The parent directory is watched so the log may be created or
        replaced while running.
        """
        logger.info(f"Watching {self.log_file} for chat commands")

        async for _ in awatch(
            self.log_file.parent,
            watch_filter=self._is_log_change,
            recursive=False,
            force_polling=self.force_polling,
            poll_delay_ms=self.poll_delay_ms,
            stop_event=stop_event,
        ):
            try:
                await self.process_log()
            except Exception as e:
                logger.exception(f"Failed to process {self.log_file}: {e}")
