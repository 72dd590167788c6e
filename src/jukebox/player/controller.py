"""JukeboxController for managing the song queue and skip votes."""

import asyncio
import logging
from collections import deque

from jukebox.background import BackgroundTasks
from jukebox.chat.commands import ChatCommand, PlaySong, VoteSkip
from jukebox.config.settings import JukeboxSettings
from jukebox.errors import MediaLookupError
from jukebox.player.models import VoteSkipTally
from jukebox.player.protocols import MediaLookup, Notifier, PlaybackHost
from jukebox.song import Song

logger = logging.getLogger(__name__)


class JukeboxController:
    """Owns the song queue, the current song and the skip-vote tally.

    All mutation goes through the methods below. Any of them can be
    interleaved with the others at an await, so every method works from the
    state as it is when it runs, never from what it was when it was scheduled.
    """

    def __init__(
        self,
        settings: JukeboxSettings,
        notifier: Notifier,
        playback: PlaybackHost,
        media: MediaLookup,
    ):
        self.settings = settings
        self.notifier = notifier
        self.playback = playback
        self.media = media
        self.tally = VoteSkipTally()
        self._queue: deque[Song] = deque()
        self._current: Song | None = None
        self._background = BackgroundTasks()

    @property
    def current_song(self) -> Song | None:
        """Get currently playing song, if any."""
        return self._current

    @property
    def queue(self) -> tuple[Song, ...]:
        """Songs in play order, the current song first."""
        return tuple(self._queue)

    @property
    def total_duration(self) -> float:
        """Calculate total duration of all queued songs in seconds."""
        return sum(song.duration_seconds for song in self._queue)

    def _set_current(self, song: Song | None) -> None:
        self._current = song
        self.tally.reset()

    async def handle_command(self, command: ChatCommand) -> None:
        """Apply a command read from chat."""
        if isinstance(command, PlaySong):
            await self.enqueue(command.query)
        elif isinstance(command, VoteSkip):
            await self.register_skip_vote(command.actor)

    async def enqueue(self, query: str) -> Song | None:
        """Look up a song and add it to the end of the queue.

        A song added to an empty queue starts playing straight away. The
        "now playing" announcement waits for the playback host to report
        that audio has started.

        Args:
            query: Free-text search typed after ?play.

        Returns:
            The queued song, or None if the lookup failed.
        """
        logger.info(f'Searching for "{query}"...')
        await self.notifier.announce(f'Searching for "{query}"...', team=True)

        try:
            song = await self.media.search(query)
        except MediaLookupError as e:
            logger.error(f"No song found for {query!r}: {e}")
            return None

        logger.info(
            f"Found video: {song.title} - {song.channel} ({song.duration_humanized})"
        )

        self._queue.append(song)

        if self._queue[0] is song:
            self._set_current(song)
            await self.playback.change_song(song)
        else:
            await self.notifier.announce(f"Added {song.title} to queue", team=True)

        return song

    async def register_skip_vote(self, actor: str) -> None:
        """Count a player's vote to skip the current song.

        Each player counts once per song. Reaching the threshold resets the
        tally and skips the song after the grace period.
        """
        current = self._current
        if current is None:
            logger.debug(f"Ignoring skip vote from {actor}, nothing is playing")
            return

        if not self.tally.add(actor):
            logger.info(f"{actor} already voted to skip {current.title}")

        count = self.tally.count
        threshold = self.settings.skip_vote_threshold

        if count < threshold:
            await self.notifier.announce(
                f"{actor} wants to skip this song ({count}/{threshold})"
            )
            return

        logger.info(f"Skip vote passed for {current.title}")
        self.tally.reset()
        await self.notifier.announce("Skipping song.", team=True)
        self._schedule_advance(current)

    async def manual_skip(self) -> None:
        """Skip the current song on the operator's request, ignoring votes."""
        current = self._current
        if current is None:
            logger.info("Nothing is playing. Ignoring skip.")
            return

        logger.info(f"Operator skipped {current.title}")
        await self.notifier.announce("Skipping song.", team=True)
        self._schedule_advance(current)

    async def on_playback_started(self) -> None:
        """Announce the current song once its audio has started."""
        current = self._current
        if current is None:
            return

        await self.notifier.announce(
            f"Now playing: {current.title} - {current.channel} ({current.duration_humanized})",
            team=True,
        )

    async def on_playback_finished(self) -> None:
        """Announce the end of the current song and move on after the grace period."""
        current = self._current
        if current is None:
            return

        logger.info(f"{current.title} has finished playing")
        await self.notifier.announce(f"{current.title} has finished playing.")
        self._schedule_advance(current)

    async def advance(self, expected: Song | None = None) -> None:
        """Drop the current song and start the next one, if any.

        Args:
            expected: Only advance if this is still the current song. Used by
                delayed advances so firing twice never skips two songs.
        """
        current = self._current
        if current is None:
            return

        if expected is not None and current is not expected:
            logger.debug(f"{expected.title} is no longer playing, not advancing")
            return

        self._queue = deque(song for song in self._queue if song is not current)

        next_song = self._queue[0] if self._queue else None
        self._set_current(next_song)

        if next_song is not None:
            logger.info(f"Up next: {next_song.formatted_title}")
            await self.playback.change_song(next_song)
        else:
            logger.info("Queue is empty")
            await self.playback.stop()

    def _schedule_advance(self, song: Song) -> None:
        self._background.spawn(self._advance_later(song), name="advance")

    async def _advance_later(self, song: Song) -> None:
        # Let the announcement be heard before the audio cuts
        await asyncio.sleep(self.settings.grace_period_secs)
        await self.advance(expected=song)

    async def wait_idle(self) -> None:
        """Wait for scheduled advances to run."""
        await self._background.wait()

    async def close(self) -> None:
        """Cancel scheduled advances."""
        await self._background.cancel_all()
