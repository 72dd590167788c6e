"""Startup validation for the jukebox."""

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jukebox.config.settings import JukeboxSettings

logger = logging.getLogger(__name__)


def validate_console_log(settings: "JukeboxSettings") -> list[str]:
    """Validate the console log can be read and rewritten.

    The file itself may not exist yet: the game creates it once launched
    with -condebug.

    Args:
        settings: JukeboxSettings instance containing the log path.

    Returns:
        List of error messages (empty if all OK).
    """
    errors = []

    log_file = settings.console_log_file
    if log_file is None:
        errors.append(
            "Could not find the game's console.log, set JUKEBOX_CONSOLE_LOG to its path"
        )
        return errors

    log_dir = log_file.parent
    if not log_dir.is_dir():
        errors.append(f"Console log directory does not exist: {log_dir}")
        return errors

    if not os.access(log_dir, os.W_OK):
        errors.append(f"Cannot write to console log directory ({log_dir})")

    if log_file.exists():
        if not os.access(log_file, os.R_OK | os.W_OK):
            errors.append(f"Console log is not readable and writable: {log_file}")
    else:
        logger.warning(
            f"Console log does not exist yet: {log_file}. Launch the game with -condebug"
        )

    return errors
