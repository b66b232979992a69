"""Cast vote use case."""

from pydantic import BaseModel

from polyvote.application.usecase.base import BaseUseCase
from polyvote.domain.service import VoteService

from .common import DirectedVoteRequest, VotePayload


class CastVoteRequest(DirectedVoteRequest):
    """Cast vote request."""

    pass


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    vote: VotePayload


class CastVoteUseCase(BaseUseCase):
    """Use case for casting (or flipping) a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Cast vote response with the stored vote

        Raises:
            InvalidDirectionError: If the direction is not up or down
        """
        vote = await self.vote_service.cast_vote(
            request.voter.to_ref(), request.votable.to_ref(), request.direction
        )
        return CastVoteResponse(vote=VotePayload.from_vote(vote))
