"""mpv implementation of the PlaybackHost protocol."""

import asyncio
import logging

from jukebox.background import BackgroundTasks
from jukebox.config.settings import JukeboxSettings
from jukebox.player.protocols import PlaybackListener
from jukebox.song import Song

logger = logging.getLogger(__name__)


class MpvPlaybackHost:
    """Plays songs through an mpv subprocess, one at a time.

    Reports "started" once mpv is running and "finished" when it exits by
    itself. A process stopped or replaced by us reports nothing.
    """

    def __init__(self, settings: JukeboxSettings):
        self.settings = settings
        self.listener: PlaybackListener | None = None
        self._process: asyncio.subprocess.Process | None = None
        self._background = BackgroundTasks()

    @property
    def is_playing(self) -> bool:
        return self._process is not None

    def build_command(self, song: Song) -> list[str]:
        command = [
            self.settings.mpv_path,
            "--no-video",
            "--input-terminal=no",
            "--msg-level=all=error",
            f"--volume={self.settings.volume}",
        ]
        if self.settings.mpv_audio_device:
            command.append(f"--audio-device={self.settings.mpv_audio_device}")
        command.append(song.audio_url)
        return command

    async def change_song(self, song: Song) -> None:
        """Stop whatever is playing and start playing the song."""
        await self.stop()

        logger.info(f"Playing {song.formatted_title}")
        try:
            process = await asyncio.create_subprocess_exec(
                *self.build_command(song),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Could not start {self.settings.mpv_path}: {e}")
            # Treat as finished so the queue does not stall on this song
            if self.listener is not None:
                await self.listener.on_playback_finished()
            return

        self._process = process
        self._background.spawn(self._watch(process), name=f"mpv-{song.id}")

    async def _watch(self, process: asyncio.subprocess.Process) -> None:
        if self.listener is not None:
            await self.listener.on_playback_started()

        _, stderr = await process.communicate()

        if process is not self._process:
            # Stopped or replaced
            return
        self._process = None

        if process.returncode != 0:
            logger.warning(
                f"mpv exited with status {process.returncode}: "
                f"{stderr.decode(errors='replace').strip()}"
            )

        if self.listener is not None:
            await self.listener.on_playback_finished()

    async def stop(self) -> None:
        """Stop playback. Safe to call when nothing is playing."""
        process = self._process
        if process is None:
            return

        self._process = None
        if process.returncode is None:
            try:
                process.terminate()
            except ProcessLookupError:
                pass
            await process.wait()

    async def request_skip(self) -> None:
        """Cut the audio now and let the listener skip the song."""
        await self.stop()
        if self.listener is not None:
            await self.listener.manual_skip()

    async def close(self) -> None:
        await self.stop()
        await self._background.cancel_all()
