"""Get vote totals use case."""

from pydantic import BaseModel

from polyvote.application.usecase.base import BaseUseCase
from polyvote.domain.service import VoteService

from .common import EntityPayload


class GetVoteTotalsRequest(BaseModel):
    """Get vote totals request."""

    votables: list[EntityPayload]


class VotableTotals(BaseModel):
    """Counters for one votable."""

    votable: EntityPayload
    total_votes: int
    up_votes: int
    down_votes: int


class GetVoteTotalsResponse(BaseModel):
    """Get vote totals response, in request order."""

    items: list[VotableTotals]


class GetVoteTotalsUseCase(BaseUseCase):
    """Use case for fetching counters of a batch of votables."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize get vote totals use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: GetVoteTotalsRequest) -> GetVoteTotalsResponse:
        """Execute get vote totals flow.

        Args:
            request: Get vote totals request

        Returns:
            Counters for each distinct requested votable
        """
        refs = [payload.to_ref() for payload in request.votables]
        totals = await self.vote_service.with_totals(refs)

        return GetVoteTotalsResponse(
            items=[
                VotableTotals(
                    votable=EntityPayload.from_ref(ref),
                    total_votes=counters.total_votes,
                    up_votes=counters.up_votes,
                    down_votes=counters.down_votes,
                )
                for ref, counters in totals.items()
            ]
        )
