"""Play music requested from in-game chat over RCON."""
