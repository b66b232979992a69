"""Vote event notification.

Notifiers are invoked synchronously, after the ledger write has been
committed. Delivery is fire-and-forget: nothing is queued or retried.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable

import logfire

from polyvote.domain.model import VoteCancelled, Voted, VoteEvent

VoteListener = Callable[[VoteEvent], None]


class VoteNotifier(ABC):
    """Sink for vote ledger events."""

    @abstractmethod
    def notify(self, event: VoteEvent) -> None:
        """Deliver one event.

        Args:
            event: Voted or VoteCancelled
        """
        pass


class LogfireVoteNotifier(VoteNotifier):
    """Records every event as a structured Logfire entry."""

    def notify(self, event: VoteEvent) -> None:
        if isinstance(event, Voted):
            logfire.info(
                "Voted",
                vote_id=str(event.vote.id),
                voter=str(event.vote.voter),
                votable=str(event.vote.votable),
                direction=int(event.vote.direction),
                is_update=event.is_update,
            )
        elif isinstance(event, VoteCancelled):
            logfire.info(
                "Vote cancelled",
                voter=str(event.voter),
                votable=str(event.votable),
            )


class CallbackVoteNotifier(VoteNotifier):
    """Calls an explicit list of listeners, in order.

    A listener that raises is logged and skipped; the remaining listeners
    still run and the caller of the ledger operation never sees the error.
    """

    def __init__(self, listeners: Iterable[VoteListener] = ()) -> None:
        self.listeners: list[VoteListener] = list(listeners)

    def subscribe(self, listener: VoteListener) -> None:
        self.listeners.append(listener)

    def notify(self, event: VoteEvent) -> None:
        for listener in self.listeners:
            try:
                listener(event)
            except Exception:
                logfire.exception(
                    "Vote listener failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    event=type(event).__name__,
                )


class RecordingVoteNotifier(VoteNotifier):
    """Keeps every event in memory, for tests."""

    def __init__(self) -> None:
        self.events: list[VoteEvent] = []

    def notify(self, event: VoteEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[VoteEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()
