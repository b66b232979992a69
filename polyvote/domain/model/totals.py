"""Aggregate vote counters for a votable."""

from typing import Iterable

from pydantic import Field

from polyvote.domain.model.common import DomainModel
from polyvote.domain.model.vote import Vote


class VoteTotals(DomainModel):
    """Derived counters for one votable.

    Never persisted; always recomputable from the ledger. ``total_votes`` is
    the sum of directions, so it equals ``up_votes - down_votes``.
    """

    total_votes: int = 0
    up_votes: int = Field(default=0, ge=0)
    down_votes: int = Field(default=0, ge=0)

    @classmethod
    def zero(cls) -> "VoteTotals":
        return cls()

    @classmethod
    def from_counts(cls, up_votes: int, down_votes: int) -> "VoteTotals":
        return cls(
            total_votes=up_votes - down_votes,
            up_votes=up_votes,
            down_votes=down_votes,
        )

    @classmethod
    def from_votes(cls, votes: Iterable[Vote]) -> "VoteTotals":
        """Count votes already in memory."""
        up = down = 0
        for vote in votes:
            if vote.is_up:
                up += 1
            else:
                down += 1
        return cls.from_counts(up, down)
