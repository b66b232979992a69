"""Domain layer DI providers."""

from dishka import Scope, provide

from polyvote.config import VotingSettings
from polyvote.domain.repository import VoteRepository
from polyvote.domain.service import VoteNotifier, VoteService
from polyvote.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        notifier: VoteNotifier,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            notifier=notifier,
            voting_settings=voting_settings,
        )
