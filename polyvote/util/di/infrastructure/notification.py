"""Vote event notification providers."""

from dishka import Scope, provide

from polyvote.domain.service import LogfireVoteNotifier, VoteNotifier
from polyvote.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider.

    Events are written to Logfire. Applications that need their own
    listeners override this provider with a CallbackVoteNotifier.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_vote_notifier(self) -> VoteNotifier:
        """Provide vote notifier."""
        return LogfireVoteNotifier()
