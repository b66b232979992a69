"""PostgreSQL implementation of Vote repository."""

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import and_, delete, func, literal_column, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from polyvote.domain.error import TransactionConflictError
from polyvote.domain.model import Vote, VoteTotals
from polyvote.domain.repository import VoteRepository
from polyvote.domain.value import Direction, EntityRef, VoteChange
from polyvote.persistence.error import translate_store_error
from polyvote.persistence.mappers import row_to_vote, vote_to_dict
from polyvote.persistence.tables import VOTE_KEY_CONSTRAINT, votes_table

_ORDER = (votes_table.c.created_at, votes_table.c.id)


def _key_clause(voter: EntityRef, votable: EntityRef) -> ColumnElement[bool]:
    return and_(
        votes_table.c.voter_type == voter.type,
        votes_table.c.voter_id == voter.id,
        votes_table.c.votable_type == votable.type,
        votes_table.c.votable_id == votable.id,
    )


def _refs_clause(
    refs: Sequence[EntityRef], type_column: Any, id_column: Any
) -> ColumnElement[bool]:
    """Match any of ``refs``, with one IN list per entity type."""
    ids_by_type: Dict[str, set[str]] = defaultdict(set)
    for ref in refs:
        ids_by_type[ref.type].add(ref.id)
    return or_(
        *(
            and_(type_column == ref_type, id_column.in_(sorted(ids)))
            for ref_type, ids in ids_by_type.items()
        )
    )


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any) -> Any:
        try:
            return await self.session.execute(stmt)
        except DBAPIError as e:
            raise translate_store_error(e) from e

    async def find_by_voter_and_votable(
        self, voter: EntityRef, votable: EntityRef
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific votable."""
        stmt = select(votes_table).where(_key_clause(voter, votable))
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def upsert(self, vote: Vote) -> Tuple[Vote, VoteChange]:
        """Insert or flip a vote in one statement.

        ON CONFLICT DO UPDATE only rewrites the row when the direction
        differs. ``xmax = 0`` holds for freshly inserted rows, which tells a
        create apart from an update in the RETURNING clause.
        """
        insert_stmt = pg_insert(votes_table).values(**vote_to_dict(vote))
        stmt = insert_stmt.on_conflict_do_update(
            constraint=VOTE_KEY_CONSTRAINT,
            set_={
                "direction": insert_stmt.excluded.direction,
                "updated_at": insert_stmt.excluded.updated_at,
            },
            where=votes_table.c.direction != insert_stmt.excluded.direction,
        ).returning(
            *votes_table.c,
            literal_column("(xmax = 0)").label("inserted"),
        )
        result = await self._execute(stmt)
        row = result.fetchone()
        if row is not None:
            data = row._asdict()
            change = VoteChange.CREATED if data.pop("inserted") else VoteChange.UPDATED
            return row_to_vote(data), change

        # Same direction: nothing was written, but the conflicting row is now
        # locked by this transaction, so it is still there to read back.
        existing = await self.find_by_voter_and_votable(vote.voter, vote.votable)
        if existing is None:
            raise TransactionConflictError(
                f"Vote {vote.voter} -> {vote.votable} vanished during upsert"
            )
        return existing, VoteChange.UNCHANGED

    async def delete_by_voter_and_votable(
        self,
        voter: EntityRef,
        votable: EntityRef,
        direction: Optional[Direction] = None,
    ) -> Optional[Vote]:
        """Delete a vote by voter and votable."""
        condition = _key_clause(voter, votable)
        if direction is not None:
            condition = and_(condition, votes_table.c.direction == int(direction))
        stmt = delete(votes_table).where(condition).returning(*votes_table.c)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_votable(self, votable: EntityRef) -> List[Vote]:
        """Find all votes on a votable."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.votable_type == votable.type,
                    votes_table.c.votable_id == votable.id,
                )
            )
            .order_by(*_ORDER)
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_voter(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find all votes by a voter."""
        return await self.find_by_voters([voter], votable_type=votable_type)

    async def find_by_voters(
        self, voters: Sequence[EntityRef], votable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find votes by several voters (batch query)."""
        if not voters:
            return []

        condition = _refs_clause(
            voters, votes_table.c.voter_type, votes_table.c.voter_id
        )
        if votable_type is not None:
            condition = and_(condition, votes_table.c.votable_type == votable_type)
        stmt = select(votes_table).where(condition).order_by(*_ORDER)
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_votables(self, votables: Sequence[EntityRef]) -> List[Vote]:
        """Find votes on several votables (batch query)."""
        if not votables:
            return []

        stmt = (
            select(votes_table)
            .where(
                _refs_clause(
                    votables, votes_table.c.votable_type, votes_table.c.votable_id
                )
            )
            .order_by(*_ORDER)
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def totals_for_votables(
        self, votables: Sequence[EntityRef]
    ) -> Dict[EntityRef, VoteTotals]:
        """Aggregate counters for several votables (batch query)."""
        if not votables:
            return {}

        direction = votes_table.c.direction
        stmt = (
            select(
                votes_table.c.votable_type,
                votes_table.c.votable_id,
                func.count().filter(direction == int(Direction.UP)).label("up_votes"),
                func.count()
                .filter(direction == int(Direction.DOWN))
                .label("down_votes"),
            )
            .where(
                _refs_clause(
                    votables, votes_table.c.votable_type, votes_table.c.votable_id
                )
            )
            .group_by(votes_table.c.votable_type, votes_table.c.votable_id)
        )
        result = await self._execute(stmt)
        return {
            EntityRef(type=row.votable_type, id=row.votable_id): VoteTotals.from_counts(
                up_votes=row.up_votes, down_votes=row.down_votes
            )
            for row in result.fetchall()
        }

    async def count_by_voter(
        self, voter: EntityRef, votable_type: Optional[str] = None
    ) -> int:
        """Count votes by a voter."""
        condition = and_(
            votes_table.c.voter_type == voter.type,
            votes_table.c.voter_id == voter.id,
        )
        if votable_type is not None:
            condition = and_(condition, votes_table.c.votable_type == votable_type)
        stmt = select(func.count()).select_from(votes_table).where(condition)
        result = await self._execute(stmt)
        return result.scalar_one()

    async def commit(self) -> None:
        """Commit the session's transaction."""
        try:
            await self.session.commit()
        except DBAPIError as e:
            raise translate_store_error(e) from e
