"""yt-dlp implementation of the MediaLookup protocol."""

import asyncio
import logging
from typing import Any

import yt_dlp
from yt_dlp.utils import YoutubeDLError

from jukebox.config import constants
from jukebox.errors import MediaLookupError
from jukebox.song import Song

logger = logging.getLogger(__name__)


def song_from_info(info: dict[str, Any]) -> Song:
    """Build a Song from a yt-dlp info dict.

    Search results come back as a playlist; its first entry is used.

    Raises:
        MediaLookupError: The result has no entries or no playable URL.
    """
    if info.get("_type") == "playlist" or "entries" in info:
        entries = [entry for entry in info.get("entries") or [] if entry]
        if not entries:
            raise MediaLookupError("Search returned no results")
        info = entries[0]

    audio_url = info.get("url")
    if not audio_url:
        raise MediaLookupError(f"No playable audio for {info.get('id', 'unknown')}")

    return Song(
        id=str(info.get("id", "")),
        title=info.get("title") or "Unknown Title",
        channel=info.get("channel") or info.get("uploader") or "Unknown Channel",
        url=info.get("webpage_url") or audio_url,
        audio_url=audio_url,
        duration_seconds=float(info.get("duration") or 0),
    )


class YtDlpMediaLookup:
    """Searches YouTube for a song matching a chat query."""

    def __init__(self, options: dict[str, Any] | None = None):
        self.options = dict(constants.YTDLP_OPTIONS)
        if options:
            self.options.update(options)

    def _extract(self, query: str) -> dict[str, Any]:
        with yt_dlp.YoutubeDL(self.options) as ydl:
            info = ydl.extract_info(query, download=False)
        if info is None:
            raise MediaLookupError(f"No result for {query!r}")
        return info

    async def search(self, query: str) -> Song:
        """Find the best matching song for a query.

        Raises:
            MediaLookupError: yt-dlp failed or found nothing playable.
        """
        if not query.strip():
            raise MediaLookupError("Empty search query")

        try:
            info = await asyncio.to_thread(self._extract, query)
        except YoutubeDLError as e:
            raise MediaLookupError(f"yt-dlp failed for {query!r}: {e}") from e

        return song_from_info(info)
