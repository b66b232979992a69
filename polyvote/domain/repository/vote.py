"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from polyvote.domain.model import Vote, VoteTotals
from polyvote.domain.value import Direction, EntityRef, VoteChange


class VoteRepository(ABC):
    """Repository for Vote entity (the vote ledger store).

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.

    Every mutating method is a single atomic statement keyed on
    (voter, votable), so concurrent callers on the same key serialize on the
    store's unique constraint rather than on a read-then-write in Python.
    """

    @abstractmethod
    async def find_by_voter_and_votable(
        self, voter: EntityRef, votable: EntityRef
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific votable.

        Args:
            voter: The voting entity
            votable: The voted-on entity

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, vote: Vote) -> Tuple[Vote, VoteChange]:
        """Insert a vote, or flip the existing vote for the same key.

        If no vote exists for (vote.voter, vote.votable) it is inserted
        (CREATED). If one exists with the opposite direction its direction
        and updated_at are replaced, keeping its id and created_at (UPDATED).
        If one exists with the same direction nothing is written (UNCHANGED).

        Args:
            vote: The requested vote state

        Returns:
            The stored vote and what happened to it

        Raises:
            StoreUnavailableError: If the store fails
            TransactionConflictError: If the write lost a lock race
        """
        pass

    @abstractmethod
    async def delete_by_voter_and_votable(
        self,
        voter: EntityRef,
        votable: EntityRef,
        direction: Optional[Direction] = None,
    ) -> Optional[Vote]:
        """Delete a vote by voter and votable.

        Args:
            voter: The voting entity
            votable: The voted-on entity
            direction: If given, only delete a vote pointing this way

        Returns:
            The deleted vote, or None if nothing matched
        """
        pass

    @abstractmethod
    async def find_by_votable(self, votable: EntityRef) -> List[Vote]:
        """Find all votes on a votable, oldest first."""
        pass

    @abstractmethod
    async def find_by_voter(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find all votes cast by a voter, oldest first.

        Args:
            voter: The voting entity
            votable_type: Only return votes on this entity type

        Returns:
            List of votes by the voter
        """
        pass

    @abstractmethod
    async def find_by_voters(
        self, voters: Sequence[EntityRef], votable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find votes cast by any of several voters (batch query).

        Must cost a single round-trip regardless of how many voters, or voter
        types, are requested.

        Args:
            voters: Voting entities, possibly of different types
            votable_type: Only return votes on this entity type

        Returns:
            Matching votes, oldest first
        """
        pass

    @abstractmethod
    async def find_by_votables(self, votables: Sequence[EntityRef]) -> List[Vote]:
        """Find votes on any of several votables (batch query), oldest first."""
        pass

    @abstractmethod
    async def totals_for_votables(
        self, votables: Sequence[EntityRef]
    ) -> Dict[EntityRef, VoteTotals]:
        """Aggregate counters for several votables (batch query).

        Args:
            votables: Votable entities, possibly of different types

        Returns:
            Counters keyed by votable; votables without votes are absent
        """
        pass

    @abstractmethod
    async def count_by_voter(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> int:
        """Count votes cast by a voter, optionally on one entity type."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make pending writes durable.

        Called by the domain service before it notifies listeners, so that
        observers never see uncommitted state.
        """
        pass
