"""Protocol definitions for dependency injection in JukeboxController."""

from typing import Protocol

from jukebox.song import Song


class MediaLookup(Protocol):
    """Protocol for finding a playable song from free text."""

    async def search(self, query: str) -> Song:
        """Find the best matching song for a query.

        Args:
            query: Free-text search, e.g. "never gonna give you up".

        Returns:
            The song to play.

        Raises:
            MediaLookupError: Nothing playable was found.
        """
        ...


class Notifier(Protocol):
    """Protocol for user-visible announcements in the game chat."""

    async def announce(self, text: str, team: bool = False) -> None:
        """Say something in chat.

        Args:
            text: Message text.
            team: If True only the bot's team sees the message.

        Failures are handled by the implementation and never raised.
        """
        ...


class PlaybackHost(Protocol):
    """Protocol for the surface that actually plays songs.

    The host reports back through a PlaybackListener.
    """

    async def change_song(self, song: Song) -> None:
        """Stop whatever is playing and start playing the song."""
        ...

    async def stop(self) -> None:
        """Stop playback. Safe to call when nothing is playing."""
        ...


class PlaybackListener(Protocol):
    """Protocol for receiving playback lifecycle events from a PlaybackHost."""

    async def on_playback_started(self) -> None:
        """The current song's audio has started."""
        ...

    async def on_playback_finished(self) -> None:
        """The current song played to the end by itself."""
        ...

    async def manual_skip(self) -> None:
        """The operator asked to skip the current song."""
        ...
