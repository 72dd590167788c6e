from jukebox.config import constants

# (unit name, seconds per unit), largest first
_DURATION_UNITS = (
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def humanize_duration(seconds: float) -> str:
    """
    Format a duration in words, e.g. "1 hour, 3 minutes, 25 seconds".

    Units that are zero are left out. Fractions of a second are rounded.

    Args:
        seconds: the duration in seconds

    Returns:
        A human-readable duration, "0 seconds" for an empty duration.
    """
    remaining = max(0, round(seconds))

    parts = []
    for unit, unit_seconds in _DURATION_UNITS:
        amount, remaining = divmod(remaining, unit_seconds)
        if amount:
            parts.append(f"{amount} {unit}{'' if amount == 1 else 's'}")

    if not parts:
        return "0 seconds"
    return ", ".join(parts)


def song_format(title: str, channel: str | None = None) -> str:
    """
    Format a song as text nicely, aiming for "Title - Channel".

    If the channel is not known just "Title" will be used.
    """
    if not channel:
        return title
    return f"{title} - {channel}"


def sanitize_chat_text(text: str) -> str:
    """Sanitizes text before it is said in the game chat.

    Sanitizes by:
        * removing characters that would end the say command or start another.
        * trimming surrounding whitespace.

    Args:
        text: The text to sanitize (i.e. a song title).

    Returns:
        The sanitized string.
    """
    return constants.UNSAFE_SAY_CHARACTERS.sub("", text).strip()
