"""Materialised vote relations.

A VoteRelation is the in-memory result of eager loading: every vote cast by
one voter, or every vote received by one votable. Membership checks against
it never touch the store.
"""

from typing import Any, Iterable, Literal, Optional

from pydantic import PrivateAttr

from polyvote.domain.model.common import DomainModel
from polyvote.domain.model.totals import VoteTotals
from polyvote.domain.model.vote import Vote
from polyvote.domain.value import Direction, EntityRef

RelationSide = Literal["voter", "votable"]


class VoteRelation(DomainModel):
    """All votes owned by one side of the voter/votable relation.

    ``side`` names the owner's role: a "voter" relation holds the votes the
    owner cast, a "votable" relation holds the votes the owner received.
    Votes are kept in creation order. ``votable_type`` records the filter a
    voter relation was loaded with; votables of other types are absent from
    it rather than unvoted.
    """

    owner: EntityRef
    side: RelationSide
    votes: tuple[Vote, ...] = ()
    votable_type: Optional[str] = None

    _index: dict[EntityRef, Vote] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        for vote in self.votes:
            self._index[self._counterpart(vote)] = vote

    @classmethod
    def of_voter(
        cls,
        voter: EntityRef,
        votes: Iterable[Vote],
        votable_type: Optional[str] = None,
    ) -> "VoteRelation":
        return cls(
            owner=voter, side="voter", votes=tuple(votes), votable_type=votable_type
        )

    @classmethod
    def of_votable(cls, votable: EntityRef, votes: Iterable[Vote]) -> "VoteRelation":
        return cls(owner=votable, side="votable", votes=tuple(votes))

    def _counterpart(self, vote: Vote) -> EntityRef:
        return vote.votable if self.side == "voter" else vote.voter

    def __len__(self) -> int:
        return len(self.votes)

    def covers(self, votable: EntityRef) -> bool:
        """Whether a vote on ``votable`` would have been loaded."""
        return self.votable_type is None or votable.type == self.votable_type

    def vote_with(self, other: EntityRef) -> Optional[Vote]:
        """The vote linking the owner to ``other``, if loaded."""
        return self._index.get(other)

    def has_vote_with(self, other: EntityRef) -> bool:
        return other in self._index

    def direction_for(self, other: EntityRef) -> Optional[Direction]:
        vote = self._index.get(other)
        return vote.direction if vote else None

    def counterparts(
        self,
        direction: Optional[Direction] = None,
        type: Optional[str] = None,
    ) -> list[EntityRef]:
        """Entities on the other side, in vote creation order.

        Args:
            direction: Only include votes in this direction
            type: Only include counterparts of this entity type
        """
        return [
            self._counterpart(vote)
            for vote in self.votes
            if (direction is None or vote.direction is direction)
            and (type is None or self._counterpart(vote).type == type)
        ]

    def totals(self) -> VoteTotals:
        return VoteTotals.from_votes(self.votes)

    def voters(self) -> list[EntityRef]:
        """Distinct voters in the relation, in vote creation order."""
        return list(dict.fromkeys(vote.voter for vote in self.votes))

    def votables(self, type: Optional[str] = None) -> list[EntityRef]:
        """Distinct votables in the relation, optionally of one type."""
        return list(
            dict.fromkeys(
                vote.votable
                for vote in self.votes
                if type is None or vote.votable.type == type
            )
        )
