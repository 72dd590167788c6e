"""Data models for the song queue."""

from dataclasses import dataclass, field


@dataclass
class VoteSkipTally:
    """Skip votes cast against the current song."""

    voters: set[str] = field(default_factory=set)

    @property
    def count(self) -> int:
        return len(self.voters)

    def add(self, actor: str) -> bool:
        """Record a vote.

        Returns:
            True if this is the actor's first vote on the current song.
        """
        if actor in self.voters:
            return False
        self.voters.add(actor)
        return True

    def reset(self) -> None:
        self.voters.clear()
