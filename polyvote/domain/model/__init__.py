"""Domain model entities for the vote ledger."""

from polyvote.domain.model.event import VoteCancelled, Voted, VoteEvent
from polyvote.domain.model.relation import VoteRelation
from polyvote.domain.model.totals import VoteTotals
from polyvote.domain.model.vote import Vote

__all__ = [
    "Vote",
    "VoteTotals",
    "VoteRelation",
    "Voted",
    "VoteCancelled",
    "VoteEvent",
]
