"""Application layer DI providers."""

from dishka import Scope, provide

from polyvote.application.usecase.vote import (
    CancelVoteUseCase,
    CastVoteUseCase,
    GetVoteTotalsUseCase,
    ListVotersUseCase,
    ToggleVoteUseCase,
)
from polyvote.domain.service import VoteService
from polyvote.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_vote_use_case(
        self, vote_service: VoteService
    ) -> CancelVoteUseCase:
        """Provide cancel vote use case."""
        return CancelVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_vote_use_case(
        self, vote_service: VoteService
    ) -> ToggleVoteUseCase:
        """Provide toggle vote use case."""
        return ToggleVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_totals_use_case(
        self, vote_service: VoteService
    ) -> GetVoteTotalsUseCase:
        """Provide get vote totals use case."""
        return GetVoteTotalsUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_list_voters_use_case(
        self, vote_service: VoteService
    ) -> ListVotersUseCase:
        """Provide list voters use case."""
        return ListVotersUseCase(vote_service=vote_service)
