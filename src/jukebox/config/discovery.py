"""Locate the game's console log inside a Steam installation."""

import logging
import os
import sys
from pathlib import Path

from jukebox.config import constants

logger = logging.getLogger(__name__)


def default_steam_dirs() -> list[Path]:
    """Steam install locations to try, most specific first."""
    dirs = []

    steam_dir = os.environ.get("JUKEBOX_STEAM_DIR")
    if steam_dir:
        dirs.append(Path(steam_dir))

    if sys.platform == "win32":
        for env_var in ("PROGRAMFILES(X86)", "PROGRAMFILES"):
            program_files = os.environ.get(env_var)
            if program_files:
                dirs.append(Path(program_files) / "Steam")
    elif sys.platform == "darwin":
        dirs.append(Path.home() / "Library" / "Application Support" / "Steam")
    else:
        dirs.append(Path.home() / ".steam" / "steam")
        dirs.append(Path.home() / ".local" / "share" / "Steam")

    return dirs


def find_console_log(steam_dirs: list[Path] | None = None) -> Path | None:
    """Find the console log of an installed Team Fortress 2.

    Args:
        steam_dirs: Steam install directories to search. Defaults to
            default_steam_dirs().

    Returns:
        Path to console.log, or None if the game could not be found.
    """
    if steam_dirs is None:
        steam_dirs = default_steam_dirs()

    for steam_dir in steam_dirs:
        game_dir = steam_dir / "steamapps" / "common" / constants.TF2_INSTALL_DIR_NAME
        if game_dir.is_dir():
            log_path = game_dir.joinpath(*constants.CONSOLE_LOG_RELATIVE_PATH)
            logger.debug(f"Found game installation at {game_dir}")
            return log_path

    return None
