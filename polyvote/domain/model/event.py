"""Vote ledger events.

Events are emitted after the corresponding ledger write is committed.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from polyvote.domain.model.common import DomainModel, utcnow
from polyvote.domain.model.vote import Vote
from polyvote.domain.value import EntityRef


class Voted(DomainModel):
    """A vote was created, or flipped to the other direction.

    ``is_update`` is False for a new vote and True for a direction change.
    """

    vote: Vote
    is_update: bool = False
    occurred_at: datetime = Field(default_factory=utcnow)


class VoteCancelled(DomainModel):
    """A vote was removed from the ledger."""

    voter: EntityRef
    votable: EntityRef
    vote: Optional[Vote] = None  # The deleted row, when the store returned it
    occurred_at: datetime = Field(default_factory=utcnow)


VoteEvent = Union[Voted, VoteCancelled]
