"""Request/response shapes shared by vote use cases."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from polyvote.domain.model import Vote
from polyvote.domain.value import Direction, EntityRef


class EntityPayload(BaseModel):
    """A (type, id) pair as received from the embedding application."""

    type: str
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: object) -> object:
        """Accept numeric ids."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def to_ref(self) -> EntityRef:
        return EntityRef(type=self.type, id=self.id)

    @classmethod
    def from_ref(cls, ref: EntityRef) -> "EntityPayload":
        return cls(type=ref.type, id=ref.id)


class DirectedVoteRequest(BaseModel):
    """A vote request carrying a direction.

    The direction is kept raw (1, -1, "up", "down") and parsed by the
    domain service, which rejects anything else.
    """

    voter: EntityPayload
    votable: EntityPayload
    direction: int | str


class VotePayload(BaseModel):
    """A stored vote as returned to the caller."""

    vote_id: str
    voter: EntityPayload
    votable: EntityPayload
    direction: Direction
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_vote(cls, vote: Vote) -> "VotePayload":
        return cls(
            vote_id=str(vote.id),
            voter=EntityPayload.from_ref(vote.voter),
            votable=EntityPayload.from_ref(vote.votable),
            direction=vote.direction,
            created_at=vote.created_at,
            updated_at=vote.updated_at,
        )
