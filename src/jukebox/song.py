"""Song data model - pure data representation of a requested track."""

from dataclasses import dataclass

from jukebox import song_utils


@dataclass(frozen=True, eq=False)
class Song:
    """A playable track returned by a media lookup.

    Equality is identity: requesting the same video twice queues two songs.
    """

    id: str
    title: str
    channel: str
    url: str
    audio_url: str
    duration_seconds: float

    @property
    def duration_humanized(self) -> str:
        return song_utils.humanize_duration(self.duration_seconds)

    @property
    def formatted_title(self) -> str:
        return song_utils.song_format(self.title, self.channel)
