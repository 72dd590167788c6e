"""Chat command parsing for console log lines."""

from dataclasses import dataclass

from jukebox.config import constants


@dataclass(frozen=True)
class PlaySong:
    """A player asked for a song: everything after ``?play ``."""

    query: str


@dataclass(frozen=True)
class VoteSkip:
    """A player voted to skip the current song."""

    actor: str


ChatCommand = PlaySong | VoteSkip


def sanitize_line(line: str) -> str:
    """Strip every character outside ``[A-Za-z0-9 ?:/&.=]``.

    Removes colour codes and other formatting the game embeds around chat text.
    """
    return constants.DISALLOWED_CHAT_CHARACTERS.sub("", line)


def parse_line(line: str) -> ChatCommand | None:
    """Classify a raw console log line.

    Chat lines look like ``PlayerName :  ?play some song``. The voter's name
    is whatever precedes ``?skip``; it is not verified, the game's own line
    formatting is trusted to attribute chat to the right player.

    Args:
        line: One line of the console log, without its line ending.

    Returns:
        PlaySong or VoteSkip, or None if the line holds no command. ``?play``
        wins if a line contains both markers.
    """
    sanitized = sanitize_line(line)

    if constants.PLAY_COMMAND_MARKER in sanitized:
        query = sanitized.split(constants.PLAY_COMMAND_MARKER)[1]
        return PlaySong(query=query)

    if constants.SKIP_COMMAND_MARKER in sanitized:
        name = sanitized.split(constants.SKIP_COMMAND_MARKER)[0]
        actor = constants.VOTER_NAME_STRIP_CHARACTERS.sub("", name)
        return VoteSkip(actor=actor)

    return None
