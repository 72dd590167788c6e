"""Chat command ingestion from the game's console log."""

from jukebox.chat.commands import ChatCommand, PlaySong, VoteSkip, parse_line
from jukebox.chat.ingest import LogTailIngestor

__all__ = [
    "ChatCommand",
    "LogTailIngestor",
    "PlaySong",
    "VoteSkip",
    "parse_line",
]
