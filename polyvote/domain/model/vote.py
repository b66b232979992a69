"""Vote entity.

A vote is one ledger entry: a directional (+1/-1) vote cast by a voter on a
votable. Both sides are polymorphic references, so any entity type can vote
and any entity type can be voted on.
"""

from datetime import datetime

from pydantic import Field

from polyvote.domain.model.common import DomainModel, utcnow
from polyvote.domain.value import Direction, EntityRef, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per voter per votable (enforced by database unique constraint)
    - Re-voting in the opposite direction flips the vote in place
    - Cancelling deletes the vote (no soft delete)
    """

    id: VoteId
    voter: EntityRef
    votable: EntityRef
    direction: Direction
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_up(self) -> bool:
        return self.direction is Direction.UP

    @property
    def is_down(self) -> bool:
        return self.direction is Direction.DOWN

    def flipped(self, direction: Direction, at: datetime) -> "Vote":
        """Return a copy pointing in ``direction``, touched at ``at``."""
        return self.model_copy(update={"direction": direction, "updated_at": at})
