"""Unit tests for vote notifiers."""

from uuid import uuid4

from polyvote.domain.model import Vote, VoteCancelled, Voted
from polyvote.domain.service import (
    CallbackVoteNotifier,
    LogfireVoteNotifier,
    RecordingVoteNotifier,
)
from polyvote.domain.value import Direction, VoteId
from tests.conftest import idea, user


def make_voted() -> Voted:
    vote = Vote(
        id=VoteId(uuid4()), voter=user(1), votable=idea(1), direction=Direction.UP
    )
    return Voted(vote=vote)


class TestCallbackVoteNotifier:
    """Tests for CallbackVoteNotifier."""

    def test_listeners_called_in_order(self):
        calls = []
        notifier = CallbackVoteNotifier(
            [
                lambda e: calls.append(("first", e)),
                lambda e: calls.append(("second", e)),
            ]
        )
        event = make_voted()

        notifier.notify(event)

        assert calls == [("first", event), ("second", event)]

    def test_failing_listener_does_not_stop_others(self):
        """A raising listener is the listener's problem, not the caller's."""
        received = []

        def broken(event):
            raise RuntimeError("listener down")

        notifier = CallbackVoteNotifier([broken, received.append])
        event = VoteCancelled(voter=user(1), votable=idea(1))

        notifier.notify(event)

        assert received == [event]

    def test_subscribe(self):
        received = []
        notifier = CallbackVoteNotifier()
        notifier.subscribe(received.append)

        event = make_voted()
        notifier.notify(event)

        assert received == [event]


class TestRecordingVoteNotifier:
    """Tests for RecordingVoteNotifier."""

    def test_records_and_filters(self):
        notifier = RecordingVoteNotifier()
        voted = make_voted()
        cancelled = VoteCancelled(voter=user(1), votable=idea(1))

        notifier.notify(voted)
        notifier.notify(cancelled)

        assert notifier.events == [voted, cancelled]
        assert notifier.of_type(Voted) == [voted]
        assert notifier.of_type(VoteCancelled) == [cancelled]

        notifier.clear()
        assert notifier.events == []


class TestLogfireVoteNotifier:
    """Tests for LogfireVoteNotifier."""

    def test_notify_accepts_both_event_kinds(self):
        notifier = LogfireVoteNotifier()

        notifier.notify(make_voted())
        notifier.notify(VoteCancelled(voter=user(1), votable=idea(1)))
