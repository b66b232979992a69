"""Domain value objects for the vote ledger."""

from polyvote.domain.value.identifiers import VoteId
from polyvote.domain.value.types import Direction, EntityRef, VoteChange

__all__ = [
    # Identifiers
    "VoteId",
    # Types
    "Direction",
    "EntityRef",
    "VoteChange",
]
