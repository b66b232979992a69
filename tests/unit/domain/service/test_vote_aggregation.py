"""Unit tests for VoteService batch aggregation."""

import pytest

from polyvote.domain.model import VoteTotals
from polyvote.domain.repository import VoteRepository
from polyvote.domain.service import VoteService
from tests.conftest import feature, idea, user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestWithTotals:
    """Tests for with_totals / totals_for."""

    @pytest.mark.asyncio
    async def test_totals_for_mixed_votes(self, unit_env):
        """Three up and one down: total 2, up 3, down 1."""
        vote_service = await unit_env.get(VoteService)

        await vote_service.up_vote(user(1), idea(1))
        await vote_service.up_vote(user(2), idea(1))
        await vote_service.up_vote(user(3), idea(1))
        await vote_service.down_vote(user(4), idea(1))

        totals = await vote_service.totals_for(idea(1))

        assert totals.total_votes == 2
        assert totals.up_votes == 3
        assert totals.down_votes == 1

    @pytest.mark.asyncio
    async def test_batch_uses_one_round_trip_across_types(self, unit_env):
        """Aggregating many votables of several types costs a single query."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        for n in range(1, 6):
            await vote_service.up_vote(user(n), idea(n))
            await vote_service.down_vote(user(n), feature(n))

        votables = [idea(n) for n in range(1, 6)] + [feature(n) for n in range(1, 6)]
        before = vote_repo.query_count

        totals = await vote_service.with_totals(votables)

        assert vote_repo.query_count - before == 1
        assert len(totals) == 10
        assert totals[idea(3)] == VoteTotals.from_counts(1, 0)
        assert totals[feature(3)] == VoteTotals.from_counts(0, 1)

    @pytest.mark.asyncio
    async def test_votables_without_votes_get_zero(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        await vote_service.up_vote(user(1), idea(1))

        totals = await vote_service.with_totals([idea(1), idea(2), feature(9)])

        assert totals[idea(1)].total_votes == 1
        assert totals[idea(2)] == VoteTotals.zero()
        assert totals[feature(9)] == VoteTotals.zero()

    @pytest.mark.asyncio
    async def test_batch_matches_one_at_a_time(self, unit_env):
        """Batch counters equal per-votable counters for every member."""
        vote_service = await unit_env.get(VoteService)

        await vote_service.up_vote(user(1), idea(1))
        await vote_service.down_vote(user(2), idea(1))
        await vote_service.down_vote(user(3), idea(1))
        await vote_service.up_vote(user(1), feature(1))
        await vote_service.up_vote(user(1), idea(2))
        await vote_service.down_vote(user(1), idea(2))

        votables = [idea(1), idea(2), feature(1), feature(2)]
        batch = await vote_service.with_totals(votables)

        for votable in votables:
            assert batch[votable] == await vote_service.totals_for(votable)

    @pytest.mark.asyncio
    async def test_same_id_different_type_kept_apart(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        await vote_service.up_vote(user(1), idea(1))
        await vote_service.down_vote(user(1), feature(1))

        totals = await vote_service.with_totals([idea(1), feature(1)])

        assert totals[idea(1)].total_votes == 1
        assert totals[feature(1)].total_votes == -1

    @pytest.mark.asyncio
    async def test_duplicates_collapse_and_order_is_kept(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        totals = await vote_service.with_totals([idea(2), idea(1), idea(2)])

        assert list(totals) == [idea(2), idea(1)]

    @pytest.mark.asyncio
    async def test_empty_batch_skips_the_store(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        assert await vote_service.with_totals([]) == {}
        assert vote_repo.query_count == 0
