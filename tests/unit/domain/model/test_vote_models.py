"""Unit tests for Vote, VoteTotals and VoteRelation."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from polyvote.domain.model import Vote, VoteRelation, VoteTotals
from polyvote.domain.value import Direction, VoteId
from tests.conftest import feature, idea, user


def make_vote(voter, votable, direction=Direction.UP, minutes=0) -> Vote:
    at = datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)
    return Vote(
        id=VoteId(uuid4()),
        voter=voter,
        votable=votable,
        direction=direction,
        created_at=at,
        updated_at=at,
    )


class TestVote:
    """Tests for Vote entity."""

    def test_flipped_keeps_identity_and_creation_time(self):
        vote = make_vote(user(1), idea(1), Direction.UP)
        later = vote.created_at + timedelta(hours=1)

        flipped = vote.flipped(Direction.DOWN, later)

        assert flipped.id == vote.id
        assert flipped.created_at == vote.created_at
        assert flipped.updated_at == later
        assert flipped.is_down
        assert vote.is_up  # original untouched

    def test_direction_accepts_plain_ints(self):
        """Rows read back from the store carry plain integers."""
        vote = Vote(id=VoteId(uuid4()), voter=user(1), votable=idea(1), direction=-1)

        assert vote.direction is Direction.DOWN


class TestVoteTotals:
    """Tests for VoteTotals."""

    def test_zero(self):
        assert VoteTotals.zero() == VoteTotals(total_votes=0, up_votes=0, down_votes=0)

    def test_from_votes(self):
        votes = [
            make_vote(user(1), idea(1), Direction.UP),
            make_vote(user(2), idea(1), Direction.UP),
            make_vote(user(3), idea(1), Direction.UP),
            make_vote(user(4), idea(1), Direction.DOWN),
        ]

        totals = VoteTotals.from_votes(votes)

        assert totals.total_votes == 2
        assert totals.up_votes == 3
        assert totals.down_votes == 1

    def test_total_is_up_minus_down(self):
        totals = VoteTotals.from_counts(up_votes=1, down_votes=5)

        assert totals.total_votes == -4


class TestVoteRelation:
    """Tests for VoteRelation in-memory lookups."""

    def test_voter_relation_indexes_votables(self):
        votes = [
            make_vote(user(1), idea(1), Direction.UP, minutes=0),
            make_vote(user(1), feature(1), Direction.DOWN, minutes=1),
        ]

        relation = VoteRelation.of_voter(user(1), votes)

        assert len(relation) == 2
        assert relation.has_vote_with(idea(1))
        assert relation.has_vote_with(feature(1))
        assert not relation.has_vote_with(idea(2))
        assert relation.direction_for(feature(1)) is Direction.DOWN
        assert relation.direction_for(idea(2)) is None

    def test_counterparts_keep_order_and_filter(self):
        votes = [
            make_vote(user(2), idea(1), Direction.UP, minutes=0),
            make_vote(user(1), idea(1), Direction.DOWN, minutes=1),
            make_vote(user(3), idea(1), Direction.UP, minutes=2),
        ]

        relation = VoteRelation.of_votable(idea(1), votes)

        assert relation.counterparts() == [user(2), user(1), user(3)]
        assert relation.counterparts(direction=Direction.UP) == [user(2), user(3)]
        assert relation.voters() == [user(2), user(1), user(3)]
        assert relation.votables() == [idea(1)]
        assert relation.totals() == VoteTotals.from_counts(2, 1)

    def test_counterparts_by_type(self):
        votes = [
            make_vote(user(1), idea(1), minutes=0),
            make_vote(user(1), feature(1), minutes=1),
            make_vote(user(1), idea(2), minutes=2),
        ]

        relation = VoteRelation.of_voter(user(1), votes)

        assert relation.counterparts(type="idea") == [idea(1), idea(2)]
        assert relation.votables(type="idea") == [idea(1), idea(2)]
        assert relation.voters() == [user(1)]

    def test_type_filtered_relation_covers_only_its_type(self):
        relation = VoteRelation.of_voter(
            user(1), [make_vote(user(1), feature(1))], votable_type="feature"
        )

        assert relation.votable_type == "feature"
        assert relation.covers(feature(2))
        assert not relation.covers(idea(1))
        assert VoteRelation.of_voter(user(1), []).covers(idea(1))

    def test_empty_relation(self):
        relation = VoteRelation.of_voter(user(1), [])

        assert len(relation) == 0
        assert not relation.has_vote_with(idea(1))
        assert relation.totals() == VoteTotals.zero()

    def test_side_is_validated(self):
        with pytest.raises(ValueError):
            VoteRelation(owner=user(1), side="someone", votes=())
