"""In-memory vote repository for testing."""

from typing import Dict, List, Optional, Sequence, Tuple

from polyvote.domain.model import Vote, VoteTotals
from polyvote.domain.repository.vote import VoteRepository
from polyvote.domain.value import Direction, EntityRef, VoteChange

LedgerKey = Tuple[EntityRef, EntityRef]


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Votes are keyed by (voter, votable); dict insertion order doubles as
    creation order. No method awaits while touching the ledger, so each call
    is atomic with respect to other coroutines.

    ``query_count`` counts store round-trips, letting tests assert that batch
    operations do not degrade into one query per entity.
    """

    def __init__(self) -> None:
        self._votes: Dict[LedgerKey, Vote] = {}
        self.query_count = 0
        self.commit_count = 0

    def _hit(self) -> None:
        self.query_count += 1

    def _ordered(self, votes: List[Vote]) -> List[Vote]:
        # Stable sort keeps insertion order for identical timestamps
        return sorted(votes, key=lambda v: v.created_at)

    async def find_by_voter_and_votable(
        self, voter: EntityRef, votable: EntityRef
    ) -> Optional[Vote]:
        """Find a vote by voter and votable."""
        self._hit()
        return self._votes.get((voter, votable))

    async def upsert(self, vote: Vote) -> Tuple[Vote, VoteChange]:
        """Insert or flip a vote."""
        self._hit()
        key = (vote.voter, vote.votable)
        existing = self._votes.get(key)
        if existing is None:
            self._votes[key] = vote
            return vote, VoteChange.CREATED
        if existing.direction is vote.direction:
            return existing, VoteChange.UNCHANGED
        updated = existing.flipped(vote.direction, vote.updated_at)
        self._votes[key] = updated
        return updated, VoteChange.UPDATED

    async def delete_by_voter_and_votable(
        self,
        voter: EntityRef,
        votable: EntityRef,
        direction: Optional[Direction] = None,
    ) -> Optional[Vote]:
        """Delete a vote by voter and votable."""
        self._hit()
        key = (voter, votable)
        existing = self._votes.get(key)
        if existing is None:
            return None
        if direction is not None and existing.direction is not direction:
            return None
        return self._votes.pop(key)

    async def find_by_votable(self, votable: EntityRef) -> List[Vote]:
        """Find all votes on a votable."""
        self._hit()
        return self._ordered([v for v in self._votes.values() if v.votable == votable])

    async def find_by_voter(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find all votes by a voter."""
        self._hit()
        return self._ordered(
            [
                v
                for v in self._votes.values()
                if v.voter == voter
                and (votable_type is None or v.votable.type == votable_type)
            ]
        )

    async def find_by_voters(
        self, voters: Sequence[EntityRef], votable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find votes by several voters (batch query)."""
        if not voters:
            return []

        self._hit()
        wanted = set(voters)
        return self._ordered(
            [
                v
                for v in self._votes.values()
                if v.voter in wanted
                and (votable_type is None or v.votable.type == votable_type)
            ]
        )

    async def find_by_votables(self, votables: Sequence[EntityRef]) -> List[Vote]:
        """Find votes on several votables (batch query)."""
        if not votables:
            return []

        self._hit()
        wanted = set(votables)
        return self._ordered([v for v in self._votes.values() if v.votable in wanted])

    async def totals_for_votables(
        self, votables: Sequence[EntityRef]
    ) -> Dict[EntityRef, VoteTotals]:
        """Aggregate counters for several votables (batch query)."""
        if not votables:
            return {}

        self._hit()
        wanted = set(votables)
        grouped: Dict[EntityRef, List[Vote]] = {}
        for vote in self._votes.values():
            if vote.votable in wanted:
                grouped.setdefault(vote.votable, []).append(vote)
        return {ref: VoteTotals.from_votes(votes) for ref, votes in grouped.items()}

    async def count_by_voter(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> int:
        """Count votes by a voter."""
        self._hit()
        return sum(
            1
            for v in self._votes.values()
            if v.voter == voter
            and (votable_type is None or v.votable.type == votable_type)
        )

    async def commit(self) -> None:
        """Nothing to flush; writes are visible immediately."""
        self.commit_count += 1

    def __len__(self) -> int:
        return len(self._votes)
