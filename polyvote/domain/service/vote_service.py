"""Vote domain service.

Covers the three faces of the ledger:

- writing: cast, flip, cancel and toggle votes for one (voter, votable) pair
- aggregation: total/up/down counters for many votables in one round-trip
- relations: who voted on what, with an in-memory path for eager-loaded data
"""

from typing import Any, Iterable, Optional, Sequence
from uuid import uuid4

import logfire

from polyvote.config import VotingSettings
from polyvote.domain.model import (
    Vote,
    VoteCancelled,
    Voted,
    VoteEvent,
    VoteRelation,
    VoteTotals,
)
from polyvote.domain.model.common import utcnow
from polyvote.domain.repository import VoteRepository
from polyvote.domain.value import Direction, EntityRef, VoteChange, VoteId

from .base import Service
from .notifier import VoteNotifier


def _unique(refs: Iterable[EntityRef]) -> list[EntityRef]:
    return list(dict.fromkeys(refs))


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        notifier: VoteNotifier,
        voting_settings: Optional[VotingSettings] = None,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote ledger store
            notifier: Receives events after each committed change
            voting_settings: Ledger behaviour switches
        """
        self.vote_repository = vote_repository
        self.notifier = notifier
        self.voting_settings = voting_settings or VotingSettings()

    async def _commit_and_notify(self, event: VoteEvent) -> None:
        # Listeners must only ever observe committed state
        await self.vote_repository.commit()
        self.notifier.notify(event)

    # ------------------------------------------------------------------
    # Writer
    # ------------------------------------------------------------------

    async def cast_vote(
        self, voter: EntityRef, votable: EntityRef, direction: Any
    ) -> Vote:
        """Cast a vote, or flip an existing vote to ``direction``.

        Casting the direction the voter already holds leaves the ledger
        untouched.

        Args:
            voter: Voting entity
            votable: Voted-on entity
            direction: Direction, 1/-1 or "up"/"down"

        Returns:
            The vote as stored after the call

        Raises:
            InvalidDirectionError: If direction is not up or down
            StoreUnavailableError: If the store fails
            TransactionConflictError: If the write lost a lock race
        """
        parsed = Direction.parse(direction)

        with logfire.span(
            "cast_vote",
            voter=str(voter),
            votable=str(votable),
            direction=int(parsed),
        ):
            now = utcnow()
            requested = Vote(
                id=VoteId(uuid4()),
                voter=voter,
                votable=votable,
                direction=parsed,
                created_at=now,
                updated_at=now,
            )

            vote, change = await self.vote_repository.upsert(requested)

            if change is VoteChange.UNCHANGED:
                logfire.debug(
                    "Vote unchanged", voter=str(voter), votable=str(votable)
                )
                if self.voting_settings.notify_on_unchanged:
                    self.notifier.notify(Voted(vote=vote, is_update=False))
                return vote

            await self._commit_and_notify(
                Voted(vote=vote, is_update=change is VoteChange.UPDATED)
            )
            logfire.info(
                "Vote recorded",
                voter=str(voter),
                votable=str(votable),
                direction=int(vote.direction),
                change=change.value,
            )
            return vote

    async def up_vote(self, voter: EntityRef, votable: EntityRef) -> Vote:
        """Cast an upvote."""
        return await self.cast_vote(voter, votable, Direction.UP)

    async def down_vote(self, voter: EntityRef, votable: EntityRef) -> Vote:
        """Cast a downvote."""
        return await self.cast_vote(voter, votable, Direction.DOWN)

    async def cancel_vote(self, voter: EntityRef, votable: EntityRef) -> bool:
        """Remove a voter's vote on a votable.

        A missing vote is not an error: the desired state already holds.

        Returns:
            True if a vote was removed, False if no vote existed
        """
        with logfire.span("cancel_vote", voter=str(voter), votable=str(votable)):
            deleted = await self.vote_repository.delete_by_voter_and_votable(
                voter, votable
            )

            if deleted is None:
                logfire.info(
                    "No vote to cancel", voter=str(voter), votable=str(votable)
                )
                return False

            await self._commit_and_notify(
                VoteCancelled(voter=voter, votable=votable, vote=deleted)
            )
            logfire.info("Vote cancelled", voter=str(voter), votable=str(votable))
            return True

    async def toggle_vote(
        self, voter: EntityRef, votable: EntityRef, direction: Any
    ) -> Optional[Vote]:
        """Cancel the vote if it already points in ``direction``, else cast it.

        The identical-direction vote is removed with a conditional delete, so
        two racing toggles behave like two toggles applied one after the other.

        Returns:
            The stored vote, or None if the toggle cancelled it
        """
        parsed = Direction.parse(direction)

        with logfire.span(
            "toggle_vote",
            voter=str(voter),
            votable=str(votable),
            direction=int(parsed),
        ):
            deleted = await self.vote_repository.delete_by_voter_and_votable(
                voter, votable, direction=parsed
            )
            if deleted is not None:
                await self._commit_and_notify(
                    VoteCancelled(voter=voter, votable=votable, vote=deleted)
                )
                return None

            return await self.cast_vote(voter, votable, parsed)

    # ------------------------------------------------------------------
    # Aggregator
    # ------------------------------------------------------------------

    async def with_totals(
        self, votables: Sequence[EntityRef]
    ) -> dict[EntityRef, VoteTotals]:
        """Vote counters for many votables in one store round-trip.

        Votables may be of mixed types. Every requested votable appears in
        the result; those without votes get zero counters.
        """
        unique = _unique(votables)
        if not unique:
            return {}

        # Batch query to fetch all counters at once (avoid N+1)
        found = await self.vote_repository.totals_for_votables(unique)
        return {ref: found.get(ref, VoteTotals.zero()) for ref in unique}

    async def totals_for(self, votable: EntityRef) -> VoteTotals:
        """Vote counters for a single votable."""
        totals = await self.with_totals([votable])
        return totals[votable]

    # ------------------------------------------------------------------
    # Relation index
    # ------------------------------------------------------------------

    async def voters_of(
        self, votable: EntityRef, direction: Optional[Direction] = None
    ) -> list[EntityRef]:
        """Voters of a votable, in order of when they voted."""
        votes = await self.vote_repository.find_by_votable(votable)
        return _unique(
            v.voter for v in votes if direction is None or v.direction is direction
        )

    async def up_voters_of(self, votable: EntityRef) -> list[EntityRef]:
        return await self.voters_of(votable, Direction.UP)

    async def down_voters_of(self, votable: EntityRef) -> list[EntityRef]:
        return await self.voters_of(votable, Direction.DOWN)

    async def votables_of(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> list[EntityRef]:
        """Votables a voter has voted on, optionally of one type."""
        votes = await self.vote_repository.find_by_voter(voter, votable_type)
        return _unique(v.votable for v in votes)

    async def count_votes_by(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> int:
        """Number of votes a voter has cast, optionally on one type."""
        return await self.vote_repository.count_by_voter(voter, votable_type)

    async def load_votes_by(
        self, voters: Sequence[EntityRef], votable_type: Optional[str] = None
    ) -> dict[EntityRef, VoteRelation]:
        """Eager-load the votes cast by several voters in one round-trip.

        Every requested voter gets a relation, empty if it never voted.
        """
        unique = _unique(voters)
        if not unique:
            return {}

        votes = await self.vote_repository.find_by_voters(unique, votable_type)
        grouped: dict[EntityRef, list[Vote]] = {ref: [] for ref in unique}
        for vote in votes:
            grouped[vote.voter].append(vote)
        return {
            ref: VoteRelation.of_voter(ref, ref_votes, votable_type)
            for ref, ref_votes in grouped.items()
        }

    async def load_votes_on(
        self, votables: Sequence[EntityRef]
    ) -> dict[EntityRef, VoteRelation]:
        """Eager-load the votes received by several votables in one round-trip."""
        unique = _unique(votables)
        if not unique:
            return {}

        votes = await self.vote_repository.find_by_votables(unique)
        grouped: dict[EntityRef, list[Vote]] = {ref: [] for ref in unique}
        for vote in votes:
            grouped[vote.votable].append(vote)
        return {
            ref: VoteRelation.of_votable(ref, ref_votes)
            for ref, ref_votes in grouped.items()
        }

    async def _find_vote(
        self,
        voter: EntityRef,
        votable: EntityRef,
        loaded: Optional[VoteRelation],
    ) -> Optional[Vote]:
        """Look the vote up in ``loaded`` if given, else in the store.

        A voter relation loaded for another votable type holds nothing about
        ``votable``, so the store is asked instead.
        """
        if loaded is None or (
            loaded.side == "voter"
            and loaded.owner == voter
            and not loaded.covers(votable)
        ):
            return await self.vote_repository.find_by_voter_and_votable(
                voter, votable
            )
        if loaded.side == "voter" and loaded.owner == voter:
            return loaded.vote_with(votable)
        if loaded.side == "votable" and loaded.owner == votable:
            return loaded.vote_with(voter)
        raise ValueError(
            f"Loaded {loaded.side} relation of {loaded.owner} "
            f"cannot answer for {voter} -> {votable}"
        )

    async def has_voted(
        self,
        voter: EntityRef,
        votable: EntityRef,
        loaded: Optional[VoteRelation] = None,
    ) -> bool:
        """Whether ``voter`` holds a vote on ``votable``.

        Args:
            voter: Voting entity
            votable: Voted-on entity
            loaded: Pre-fetched relation of either entity; when given it is
                used instead of querying the store

        Raises:
            ValueError: If ``loaded`` belongs to neither entity
        """
        return await self._find_vote(voter, votable, loaded) is not None

    async def has_been_voted_by(
        self,
        votable: EntityRef,
        voter: EntityRef,
        loaded: Optional[VoteRelation] = None,
    ) -> bool:
        """Inverse of has_voted."""
        return await self.has_voted(voter, votable, loaded)

    async def has_up_voted(
        self,
        voter: EntityRef,
        votable: EntityRef,
        loaded: Optional[VoteRelation] = None,
    ) -> bool:
        vote = await self._find_vote(voter, votable, loaded)
        return vote is not None and vote.is_up

    async def has_down_voted(
        self,
        voter: EntityRef,
        votable: EntityRef,
        loaded: Optional[VoteRelation] = None,
    ) -> bool:
        vote = await self._find_vote(voter, votable, loaded)
        return vote is not None and vote.is_down
