"""Unit tests for PostgresVoteRepository statements and error translation.

The session is mocked; statements are compiled with the PostgreSQL dialect
so their shape can be checked without a database.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DBAPIError, OperationalError

from polyvote.domain.error import StoreUnavailableError, TransactionConflictError
from polyvote.domain.model import Vote
from polyvote.domain.value import Direction, EntityRef, VoteChange, VoteId
from polyvote.persistence.repository.vote import PostgresVoteRepository
from tests.conftest import feature, idea, user


class DriverError(Exception):
    """Stand-in for a driver exception carrying a SQLSTATE."""

    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def make_session(rows=None, row=None, error: Exception | None = None) -> MagicMock:
    session = MagicMock()
    if error is not None:
        session.execute = AsyncMock(side_effect=error)
    else:
        result = MagicMock()
        result.fetchall.return_value = rows or []
        result.fetchone.return_value = row
        result.scalar_one.return_value = len(rows or [])
        session.execute = AsyncMock(return_value=result)
    session.commit = AsyncMock()
    return session


def compiled(session: MagicMock, call: int = 0) -> str:
    stmt = session.execute.await_args_list[call].args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


def make_vote(direction: Direction = Direction.UP) -> Vote:
    return Vote(id=VoteId(uuid4()), voter=user(1), votable=idea(1), direction=direction)


class TestStatements:
    """Shape of the SQL issued for each operation."""

    @pytest.mark.asyncio
    async def test_upsert_is_a_single_guarded_statement(self):
        vote = make_vote()
        row = MagicMock()
        row._asdict.return_value = {
            "id": vote.id,
            "voter_type": "user",
            "voter_id": "1",
            "votable_type": "idea",
            "votable_id": "1",
            "direction": 1,
            "created_at": vote.created_at,
            "updated_at": vote.updated_at,
            "inserted": True,
        }
        session = make_session(row=row)
        repo = PostgresVoteRepository(session)

        stored, change = await repo.upsert(vote)

        assert change is VoteChange.CREATED
        assert stored == vote
        assert session.execute.await_count == 1
        sql = compiled(session)
        assert "ON CONFLICT ON CONSTRAINT uq_votes_voter_votable DO UPDATE" in sql
        assert "RETURNING" in sql
        assert "xmax = 0" in sql

    @pytest.mark.asyncio
    async def test_upsert_reports_update(self):
        vote = make_vote(Direction.DOWN)
        row = MagicMock()
        row._asdict.return_value = {
            "id": vote.id,
            "voter_type": "user",
            "voter_id": "1",
            "votable_type": "idea",
            "votable_id": "1",
            "direction": -1,
            "created_at": vote.created_at,
            "updated_at": vote.updated_at,
            "inserted": False,
        }
        repo = PostgresVoteRepository(make_session(row=row))

        stored, change = await repo.upsert(vote)

        assert change is VoteChange.UPDATED
        assert stored.direction is Direction.DOWN

    @pytest.mark.asyncio
    async def test_totals_for_mixed_types_is_one_query(self):
        session = make_session(rows=[])
        repo = PostgresVoteRepository(session)

        totals = await repo.totals_for_votables(
            [idea(1), idea(2), feature(1), feature(2)]
        )

        assert totals == {}
        assert session.execute.await_count == 1
        sql = compiled(session)
        assert "GROUP BY votes.votable_type, votes.votable_id" in sql
        assert "FILTER (WHERE" in sql

    @pytest.mark.asyncio
    async def test_find_by_voters_is_one_ordered_query(self):
        session = make_session(rows=[])
        repo = PostgresVoteRepository(session)

        await repo.find_by_voters(
            [user(1), user(2), EntityRef.of("admin", 1)], "idea"
        )

        assert session.execute.await_count == 1
        sql = compiled(session)
        assert "ORDER BY votes.created_at, votes.id" in sql

    @pytest.mark.asyncio
    async def test_empty_batches_skip_the_database(self):
        session = make_session()
        repo = PostgresVoteRepository(session)

        assert await repo.find_by_voters([]) == []
        assert await repo.find_by_votables([]) == []
        assert await repo.totals_for_votables([]) == {}
        assert session.execute.await_count == 0

    @pytest.mark.asyncio
    async def test_conditional_delete_filters_direction(self):
        session = make_session(row=None)
        repo = PostgresVoteRepository(session)

        deleted = await repo.delete_by_voter_and_votable(
            user(1), idea(1), direction=Direction.DOWN
        )

        assert deleted is None
        sql = compiled(session)
        assert sql.startswith("DELETE FROM votes")
        assert "votes.direction =" in sql
        assert "RETURNING" in sql


class TestErrorTranslation:
    """Driver failures surface as ledger store errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sqlstate", ["40001", "40P01", "55P03"])
    async def test_conflicts_become_transaction_conflict(self, sqlstate):
        error = DBAPIError("INSERT ...", {}, DriverError("conflict", sqlstate))
        repo = PostgresVoteRepository(make_session(error=error))

        with pytest.raises(TransactionConflictError) as exc_info:
            await repo.upsert(make_vote())

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_connection_failure_becomes_store_unavailable(self):
        error = OperationalError("SELECT ...", {}, DriverError("connection refused"))
        repo = PostgresVoteRepository(make_session(error=error))

        with pytest.raises(StoreUnavailableError):
            await repo.find_by_voter_and_votable(user(1), idea(1))

    @pytest.mark.asyncio
    async def test_commit_failure_is_translated(self):
        session = make_session()
        session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, DriverError("gone"))
        )
        repo = PostgresVoteRepository(session)

        with pytest.raises(StoreUnavailableError):
            await repo.commit()

    @pytest.mark.asyncio
    async def test_non_database_errors_pass_through(self):
        repo = PostgresVoteRepository(make_session(error=RuntimeError("boom")))

        with pytest.raises(RuntimeError, match="boom"):
            await repo.count_by_voter(user(1))

    @pytest.mark.asyncio
    async def test_row_gone_after_unchanged_upsert_is_a_conflict(self):
        """Neither the upsert nor the read-back sees a row: a concurrent delete won."""
        session = make_session(row=None)
        repo = PostgresVoteRepository(session)

        with pytest.raises(TransactionConflictError, match="vanished"):
            await repo.upsert(make_vote())

        assert session.execute.await_count == 2
